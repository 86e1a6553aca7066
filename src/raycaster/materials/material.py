"""Surface material descriptor shared by every primitive.

A material carries a base color (albedo) plus three coefficients for
specular highlights and mirror reflection. Only the albedo is read by the
shading model: it scales the Lambertian term of every light and the
constant ambient term. The specular, shininess and reflectivity fields are
stored and copied into every hit record but are not consumed by the
renderer.

Two representations exist:
    Material: Host-side, immutable, validated on construction.
    SurfaceMaterial: Device-side Taichi struct embedded in primitives and
        hit records.

Example:
    >>> from raycaster.materials.material import Material
    >>> Material.red().albedo
    (0.8, 0.2, 0.2)
    >>> glossy = Material.with_specular((0.9, 0.9, 0.9), specular=0.5, shininess=32.0)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class SurfaceMaterial:
    """Device-side copy of a Material.

    Attributes:
        albedo: Base color (linear RGB).
        specular: Specular reflection coefficient (not used in shading).
        shininess: Phong exponent (not used in shading).
        reflectivity: Mirror reflection coefficient (not used in shading).
    """

    albedo: vec3
    specular: ti.f32
    shininess: ti.f32
    reflectivity: ti.f32


@dataclass(frozen=True)
class Material:
    """Immutable material properties for a primitive.

    Attributes:
        albedo: Base (diffuse) color as (R, G, B). Linear and unclamped.
        specular: Specular reflection coefficient. Default 0.
        shininess: Phong shininess exponent. Default 1.
        reflectivity: Mirror reflection coefficient in [0, 1], where 0 means
            no reflection and 1 a perfect mirror. Default 0.

    Raises:
        ValueError: If albedo does not have 3 components, specular is
            negative, shininess is not positive, or reflectivity is outside
            [0, 1].
    """

    albedo: tuple[float, float, float]
    specular: float = 0.0
    shininess: float = 1.0
    reflectivity: float = 0.0

    def __post_init__(self) -> None:
        if len(self.albedo) != 3:
            raise ValueError(f"Albedo must have 3 components, got {len(self.albedo)}")
        if self.specular < 0.0:
            raise ValueError(f"Specular coefficient must be non-negative, got {self.specular}")
        if self.shininess <= 0.0:
            raise ValueError(f"Shininess must be positive, got {self.shininess}")
        if not 0.0 <= self.reflectivity <= 1.0:
            raise ValueError(f"Reflectivity {self.reflectivity} is outside [0, 1]")
        object.__setattr__(self, "albedo", tuple(float(c) for c in self.albedo))

    @classmethod
    def with_specular(
        cls,
        albedo: tuple[float, float, float],
        specular: float,
        shininess: float,
    ) -> "Material":
        """Create a material with specular highlight coefficients."""
        return cls(albedo=albedo, specular=specular, shininess=shininess)

    @classmethod
    def with_reflection(
        cls,
        albedo: tuple[float, float, float],
        reflectivity: float,
    ) -> "Material":
        """Create a mirror-like material."""
        return cls(albedo=albedo, reflectivity=reflectivity)

    # =========================================================================
    # Presets
    # =========================================================================

    @classmethod
    def red(cls) -> "Material":
        return cls((0.8, 0.2, 0.2))

    @classmethod
    def green(cls) -> "Material":
        return cls((0.2, 0.8, 0.2))

    @classmethod
    def blue(cls) -> "Material":
        return cls((0.2, 0.2, 0.8))

    @classmethod
    def white(cls) -> "Material":
        return cls((0.8, 0.8, 0.8))

    @classmethod
    def gray(cls) -> "Material":
        return cls((0.5, 0.5, 0.5))

    @classmethod
    def mirror(cls) -> "Material":
        return cls.with_reflection((0.9, 0.9, 0.9), 0.9)
