"""Axis-aligned box primitive with slab-method intersection.

For each axis the ray's parametric interval is clipped against the pair of
planes bounding the box on that axis. The running entry parameter t_min is
the latest entry across axes and t_max the earliest exit; the box is missed
as soon as t_min > t_max. The axis and face that produced the latest entry
give the surface normal.

When the entry lies behind the origin (ray starting inside the box) the exit
parameter t_max is reported instead, but the normal still belongs to the
entry face rather than the face actually hit.
"""

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
class BoxShape:
    """Host-side description of an axis-aligned box.

    Attributes:
        min_corner: Corner with the smallest coordinate on every axis.
        max_corner: Corner with the largest coordinate on every axis.
        material: Surface material.
        transform: Carried for completeness; boxes ignore their placement.

    Raises:
        ValueError: If min_corner exceeds max_corner on any axis.
    """

    kind: ClassVar[PrimitiveKind] = PrimitiveKind.BOX

    min_corner: tuple[float, float, float]
    max_corner: tuple[float, float, float]
    material: Material
    transform: Transform = field(default_factory=Transform)

    def __post_init__(self) -> None:
        for axis, (lo, hi) in enumerate(zip(self.min_corner, self.max_corner)):
            if lo > hi:
                raise ValueError(
                    f"Box min corner exceeds max corner on axis {axis}: {lo} > {hi}"
                )

    @classmethod
    def unit(cls, material: Material) -> "BoxShape":
        """Create a unit cube centered at the origin."""
        return cls(
            min_corner=(-0.5, -0.5, -0.5),
            max_corner=(0.5, 0.5, 0.5),
            material=material,
        )


@ti.dataclass
class Box:
    """An axis-aligned box.

    Attributes:
        min_corner: Minimum corner (vec3).
        max_corner: Maximum corner (vec3).
        material: The box's surface material.
    """

    min_corner: vec3
    max_corner: vec3
    material: SurfaceMaterial


@ti.func
def hit_box(ray_origin: vec3, ray_direction: vec3, box: Box) -> HitInfo:
    """Test for ray-box intersection using the slab method.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        box: The box to test intersection against.

    Returns:
        A HitInfo at t_min (or t_max when t_min <= T_EPSILON), or a miss.
        The normal is the unit axis of the entry face, signed toward the
        side that was entered.
    """
    t_min = -tm.inf
    t_max = tm.inf
    entry_normal = vec3(0.0, 0.0, 0.0)

    # Taichi functions cannot return early; overlapping tracks slab survival
    overlapping = 1

    for axis in ti.static(range(3)):
        if overlapping == 1:
            o = ray_origin[axis]
            d = ray_direction[axis]
            lo = box.min_corner[axis]
            hi = box.max_corner[axis]

            if ti.abs(d) < PARALLEL_EPSILON:
                # Parallel to this slab: must already be between its planes
                if o < lo or o > hi:
                    overlapping = 0
            else:
                t1 = (lo - o) / d
                t2 = (hi - o) / d
                t_near = ti.min(t1, t2)
                t_far = ti.max(t1, t2)

                if t_near > t_min:
                    t_min = t_near
                    entry_normal = vec3(0.0, 0.0, 0.0)
                    # Entering through the min face when t1 < t2
                    entry_normal[axis] = ti.select(t1 < t2, -1.0, 1.0)

                if t_far < t_max:
                    t_max = t_far

                if t_min > t_max:
                    overlapping = 0

    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)

    if overlapping == 1:
        if t_min > T_EPSILON:
            did_hit = 1
            hit_t = t_min
        elif t_max > T_EPSILON:
            did_hit = 1
            hit_t = t_max

        if did_hit == 1:
            hit_point = ray_origin + hit_t * ray_direction

    return HitInfo(
        hit=did_hit,
        t=hit_t,
        point=hit_point,
        normal=entry_normal,
        material=box.material,
    )


@ti.func
def make_box(min_corner: vec3, max_corner: vec3, material: SurfaceMaterial) -> Box:
    """Create a box within a Taichi kernel."""
    return Box(min_corner=min_corner, max_corner=max_corner, material=material)
