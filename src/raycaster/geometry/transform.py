"""Affine placement of primitives (translation and uniform scale).

A Transform maps object space to world space as p_world = p * scale +
translation. The rotation component is part of the model but is never
applied. Only spheres consult their placement during intersection; other
primitives carry it as inert data.
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True)
class Transform:
    """Placement of a primitive in world space.

    Attributes:
        translation: Offset added after scaling, as (x, y, z).
        rotation: Euler angles in radians. Stored only, never applied.
        scale: Uniform scale factor (must be positive).

    Raises:
        ValueError: If scale is not positive.
    """

    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.scale <= 0.0:
            raise ValueError(f"Transform scale must be positive, got {self.scale}")

    @classmethod
    def with_translation(cls, translation: tuple[float, float, float]) -> "Transform":
        """Create a pure translation."""
        return cls(translation=translation)

    @property
    def is_identity(self) -> bool:
        """Whether translation and scale leave points unchanged."""
        return tuple(self.translation) == (0.0, 0.0, 0.0) and self.scale == 1.0


@ti.func
def is_identity_placement(translation: vec3, scale: ti.f32) -> ti.i32:
    """Check whether a placement leaves points unchanged."""
    return translation.x == 0.0 and translation.y == 0.0 and translation.z == 0.0 and scale == 1.0


@ti.func
def to_object_point(point: vec3, translation: vec3, scale: ti.f32) -> vec3:
    """Apply the inverse placement (inverse translate, then inverse scale) to a point."""
    return (point - translation) / scale


@ti.func
def to_object_direction(direction: vec3, scale: ti.f32) -> vec3:
    """Apply the inverse placement to a direction (translation does not apply)."""
    return direction / scale


@ti.func
def to_world_point(point: vec3, translation: vec3, scale: ti.f32) -> vec3:
    """Apply the forward placement to an object-space point."""
    return point * scale + translation
