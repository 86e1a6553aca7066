"""Hit records and primitive kinds shared by all intersection routines.

Every primitive intersection returns a HitInfo. A record with hit == 0 is a
miss and its remaining fields carry no meaning.
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from raycaster.materials.material import SurfaceMaterial

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


class PrimitiveKind(IntEnum):
    """Tag used to dispatch scene primitives to their intersection routine."""

    SPHERE = 0
    PLANE = 1
    BOX = 2
    CYLINDER = 3


@ti.dataclass
class HitInfo:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: 1 if the ray intersected the primitive, 0 on a miss.
        t: Ray parameter of the intersection (always > T_EPSILON on a hit).
        point: World-space intersection point.
        normal: Unit outward surface normal at the intersection point.
        material: Copy of the intersected primitive's material.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material: SurfaceMaterial


@ti.func
def make_miss_record() -> HitInfo:
    """Create a HitInfo indicating no intersection."""
    return HitInfo(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material=SurfaceMaterial(
            albedo=vec3(0.0, 0.0, 0.0), specular=0.0, shininess=1.0, reflectivity=0.0
        ),
    )
