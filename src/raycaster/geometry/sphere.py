"""Sphere primitive with ray-sphere intersection.

This module provides the host-side SphereShape description, the device-side
Sphere dataclass and the hit_sphere intersection function.

Substituting the ray into the implicit sphere equation gives the quadratic

    a*t^2 + b*t + c = 0

with a = d.d, b = 2 * (o - center).d and c = |o - center|^2 - radius^2.
The nearer root is used when it lies in front of the origin (t > T_EPSILON),
otherwise the farther one, so rays starting inside the sphere hit the far
wall. Spheres with a non-identity placement are intersected in object space.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.geometry.sphere import hit_sphere, make_sphere
    >>> # Use hit_sphere within a Taichi kernel
"""

from dataclasses import dataclass, field
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import T_EPSILON, normalize
from raycaster.geometry.hit import HitInfo, PrimitiveKind
from raycaster.geometry.transform import (
    Transform,
    is_identity_placement,
    to_object_direction,
    to_object_point,
    to_world_point,
)
from raycaster.materials.material import Material, SurfaceMaterial

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@dataclass(frozen=True)
class SphereShape:
    """Host-side description of a sphere.

    Attributes:
        center: Center of the sphere in object space.
        radius: Radius of the sphere (positive).
        material: Surface material.
        transform: Placement applied before intersection. Identity by default.

    Raises:
        ValueError: If radius is not positive.
    """

    kind: ClassVar[PrimitiveKind] = PrimitiveKind.SPHERE

    center: tuple[float, float, float]
    radius: float
    material: Material
    transform: Transform = field(default_factory=Transform)

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere in object space (vec3).
        radius: The radius of the sphere (positive float).
        translation: World-space offset of the object space (vec3).
        scale: Uniform scale from object to world space.
        material: The sphere's surface material.
    """

    center: vec3
    radius: ti.f32
    translation: vec3
    scale: ti.f32
    material: SurfaceMaterial


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitInfo:
    """Test for ray-sphere intersection.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray (need not be normalized).
        sphere: The sphere to test intersection against.

    Returns:
        A HitInfo for the nearest intersection with t > T_EPSILON. Check the
        hit field to determine if intersection occurred.
    """
    identity = is_identity_placement(sphere.translation, sphere.scale)

    # Move the ray into object space (rotation is not part of the placement)
    local_origin = ray_origin
    local_direction = ray_direction
    if identity == 0:
        local_origin = to_object_point(ray_origin, sphere.translation, sphere.scale)
        local_direction = to_object_direction(ray_direction, sphere.scale)

    oc = local_origin - sphere.center
    a = tm.dot(local_direction, local_direction)
    b = 2.0 * tm.dot(oc, local_direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - 4.0 * a * c

    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t_near = (-b - sqrt_d) / (2.0 * a)
        t_far = (-b + sqrt_d) / (2.0 * a)

        if t_near > T_EPSILON:
            did_hit = 1
            hit_t = t_near
        elif t_far > T_EPSILON:
            did_hit = 1
            hit_t = t_far

        if did_hit == 1:
            local_point = local_origin + hit_t * local_direction
            # Normal stays in object space; uniform scale keeps it unit length
            hit_normal = normalize(local_point - sphere.center)
            hit_point = local_point
            if identity == 0:
                hit_point = to_world_point(local_point, sphere.translation, sphere.scale)

    return HitInfo(
        hit=did_hit,
        t=hit_t,
        point=hit_point,
        normal=hit_normal,
        material=sphere.material,
    )


@ti.func
def make_sphere(center: vec3, radius: ti.f32, material: SurfaceMaterial) -> Sphere:
    """Create an unplaced sphere within a Taichi kernel."""
    return Sphere(
        center=center,
        radius=radius,
        translation=vec3(0.0, 0.0, 0.0),
        scale=1.0,
        material=material,
    )
