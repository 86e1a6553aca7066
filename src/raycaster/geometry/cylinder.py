"""Finite cylinder primitive aligned with the vertical (y) axis.

The cylinder is the union of a lateral wall and two flat caps:

- Wall: the infinite-cylinder quadratic is solved from the x and z
  components of the ray only. A root is kept when its hit point lies
  between the caps.
- Caps: the planes y = center.y +/- height / 2 are intersected directly and
  a hit is kept when it lies within the radius of the axis.

The nearest accepted candidate wins. A negative wall discriminant means the
ray never comes close enough to the axis, so the caps are not tested either.
"""

from dataclasses import dataclass, field
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import PARALLEL_EPSILON, T_EPSILON, normalize
from raycaster.geometry.hit import HitInfo, PrimitiveKind
from raycaster.geometry.transform import Transform
from raycaster.materials.material import Material, SurfaceMaterial

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@dataclass(frozen=True)
class CylinderShape:
    """Host-side description of a finite vertical cylinder.

    Attributes:
        center: Center of the cylinder (midway between the caps).
        radius: Radius of the wall (positive).
        height: Distance between the caps (positive).
        material: Surface material.
        transform: Carried for completeness; cylinders ignore their placement.

    Raises:
        ValueError: If radius or height is not positive.
    """

    kind: ClassVar[PrimitiveKind] = PrimitiveKind.CYLINDER

    center: tuple[float, float, float]
    radius: float
    height: float
    material: Material
    transform: Transform = field(default_factory=Transform)

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Cylinder radius must be positive, got {self.radius}")
        if self.height <= 0.0:
            raise ValueError(f"Cylinder height must be positive, got {self.height}")


@ti.dataclass
class Cylinder:
    """A finite cylinder whose axis is parallel to y.

    Attributes:
        center: Center point of the cylinder (vec3).
        radius: Wall radius.
        height: Cap-to-cap height.
        material: The cylinder's surface material.
    """

    center: vec3
    radius: ti.f32
    height: ti.f32
    material: SurfaceMaterial


@ti.func
def _wall_candidate(ray_origin: vec3, ray_direction: vec3, cylinder: Cylinder, t: ti.f32):
    """Check a lateral-quadratic root against the cylinder's height.

    Returns:
        A tuple (accepted, normal) where accepted is 1 if the root lies in
        front of the origin and between the caps, and normal is the radial
        direction at that point.
    """
    accepted = 0
    normal = vec3(0.0, 0.0, 0.0)
    if t > T_EPSILON:
        point = ray_origin + t * ray_direction
        half_height = 0.5 * cylinder.height
        if cylinder.center.y - half_height <= point.y <= cylinder.center.y + half_height:
            accepted = 1
            normal = normalize(
                vec3(
                    (point.x - cylinder.center.x) / cylinder.radius,
                    0.0,
                    (point.z - cylinder.center.z) / cylinder.radius,
                )
            )
    return accepted, normal


@ti.func
def hit_cylinder(ray_origin: vec3, ray_direction: vec3, cylinder: Cylinder) -> HitInfo:
    """Test for ray-cylinder intersection (wall and both caps).

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        cylinder: The cylinder to test intersection against.

    Returns:
        A HitInfo for the nearest wall or cap hit with t > T_EPSILON, or a
        miss record.
    """
    oc = ray_origin - cylinder.center

    a = ray_direction.x * ray_direction.x + ray_direction.z * ray_direction.z
    b = 2.0 * (oc.x * ray_direction.x + oc.z * ray_direction.z)
    c = oc.x * oc.x + oc.z * oc.z - cylinder.radius * cylinder.radius
    discriminant = b * b - 4.0 * a * c

    did_hit = 0
    best_t = 0.0
    best_normal = vec3(0.0, 0.0, 0.0)

    if discriminant >= 0.0:
        # Wall (a == 0 means the ray runs parallel to the axis)
        if a > 0.0:
            sqrt_d = ti.sqrt(discriminant)
            t_near = (-b - sqrt_d) / (2.0 * a)
            t_far = (-b + sqrt_d) / (2.0 * a)

            accepted, normal = _wall_candidate(ray_origin, ray_direction, cylinder, t_near)
            if accepted == 1:
                did_hit = 1
                best_t = t_near
                best_normal = normal

            accepted_far, normal_far = _wall_candidate(ray_origin, ray_direction, cylinder, t_far)
            if accepted_far == 1 and (did_hit == 0 or t_far < best_t):
                did_hit = 1
                best_t = t_far
                best_normal = normal_far

        # Caps: top (side = +1) first, then bottom (side = -1)
        if ti.abs(ray_direction.y) > PARALLEL_EPSILON:
            half_height = 0.5 * cylinder.height
            r2 = cylinder.radius * cylinder.radius
            for cap in ti.static(range(2)):
                side = 1.0 - 2.0 * cap
                cap_y = cylinder.center.y + side * half_height
                t = (cap_y - ray_origin.y) / ray_direction.y
                if t > T_EPSILON:
                    point = ray_origin + t * ray_direction
                    dx = point.x - cylinder.center.x
                    dz = point.z - cylinder.center.z
                    if dx * dx + dz * dz <= r2 and (did_hit == 0 or t < best_t):
                        did_hit = 1
                        best_t = t
                        best_normal = vec3(0.0, side, 0.0)

    hit_point = vec3(0.0, 0.0, 0.0)
    if did_hit == 1:
        hit_point = ray_origin + best_t * ray_direction

    return HitInfo(
        hit=did_hit,
        t=best_t,
        point=hit_point,
        normal=best_normal,
        material=cylinder.material,
    )


@ti.func
def make_cylinder(
    center: vec3, radius: ti.f32, height: ti.f32, material: SurfaceMaterial
) -> Cylinder:
    """Create a cylinder within a Taichi kernel."""
    return Cylinder(center=center, radius=radius, height=height, material=material)
