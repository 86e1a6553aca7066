"""Infinite plane primitive with ray-plane intersection.

A plane is stored as a point on the plane and a unit normal, normalized
once when the host-side PlaneShape is built. Intersection solves

    t = (point - origin).normal / (direction.normal)

and rejects rays that are (nearly) parallel to the plane.
"""

import math
from dataclasses import dataclass, field
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import PARALLEL_EPSILON, T_EPSILON
from raycaster.geometry.hit import HitInfo, PrimitiveKind
from raycaster.geometry.transform import Transform
from raycaster.materials.material import Material, SurfaceMaterial

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@dataclass(frozen=True)
class PlaneShape:
    """Host-side description of an infinite plane.

    Attributes:
        point: Any point on the plane.
        normal: Plane normal. Normalized on construction.
        material: Surface material.
        transform: Carried for completeness; planes ignore their placement.

    Raises:
        ValueError: If the normal has zero length.
    """

    kind: ClassVar[PrimitiveKind] = PrimitiveKind.PLANE

    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    material: Material
    transform: Transform = field(default_factory=Transform)

    def __post_init__(self) -> None:
        norm = math.sqrt(sum(c * c for c in self.normal))
        if norm == 0.0:
            raise ValueError("Plane normal must have non-zero length")
        object.__setattr__(self, "normal", tuple(c / norm for c in self.normal))

    @classmethod
    def horizontal(cls, y: float, material: Material) -> "PlaneShape":
        """Create an upward-facing horizontal plane at height y."""
        return cls(point=(0.0, y, 0.0), normal=(0.0, 1.0, 0.0), material=material)


@ti.dataclass
class Plane:
    """An infinite plane.

    Attributes:
        point: A point on the plane (vec3).
        normal: Unit plane normal (vec3).
        material: The plane's surface material.
    """

    point: vec3
    normal: vec3
    material: SurfaceMaterial


@ti.func
def hit_plane(ray_origin: vec3, ray_direction: vec3, plane: Plane) -> HitInfo:
    """Test for ray-plane intersection.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        plane: The plane to test intersection against.

    Returns:
        A HitInfo with the plane's stored normal, or a miss when the ray is
        parallel to the plane or the intersection lies at t <= T_EPSILON.
    """
    denom = tm.dot(ray_direction, plane.normal)

    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)

    if ti.abs(denom) >= PARALLEL_EPSILON:
        t = tm.dot(plane.point - ray_origin, plane.normal) / denom
        if t > T_EPSILON:
            did_hit = 1
            hit_t = t
            hit_point = ray_origin + t * ray_direction

    return HitInfo(
        hit=did_hit,
        t=hit_t,
        point=hit_point,
        normal=plane.normal,
        material=plane.material,
    )


@ti.func
def make_plane(point: vec3, normal: vec3, material: SurfaceMaterial) -> Plane:
    """Create a plane within a Taichi kernel. The normal must already be unit length."""
    return Plane(point=point, normal=normal, material=material)
