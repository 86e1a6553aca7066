"""Host-side scene builder.

A Scene is an ordered list of primitives, a list of point lights and a
background color. It is assembled with the add_* methods and frozen once it
is uploaded for rendering; after that it is read-only.

Primitive order matters only for exact ties in the nearest-hit query: the
earlier primitive wins.

Example:
    >>> from raycaster.materials import Material
    >>> from raycaster.scene.scene import Light, Scene
    >>> scene = Scene(background_color=(0.5, 0.7, 1.0))
    >>> scene.add_plane((0.0, -1.5, 0.0), (0.0, 1.0, 0.0), Material.gray())
    0
    >>> scene.add_sphere((0.0, 0.0, -3.0), 1.0, Material.red())
    1
    >>> scene.add_light(Light.white((2.0, 2.0, 0.0), 1.0))
    0
"""

from dataclasses import dataclass

from raycaster.geometry import (
    BoxShape,
    CylinderShape,
    PlaneShape,
    Shape,
    SphereShape,
    Transform,
)
from raycaster.materials.material import Material

# Sky blue, used when a scene does not choose its own background
DEFAULT_BACKGROUND_COLOR = (0.2, 0.3, 0.5)


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: World-space position of the light.
        intensity: Scalar multiplier applied to the light color.
        color: Linear RGB color of the light.

    Negative intensities and colors are allowed and subtract light.
    """

    position: tuple[float, float, float]
    intensity: float
    color: tuple[float, float, float] = (1.0, 1.0, 1.0)

    @classmethod
    def white(cls, position: tuple[float, float, float], intensity: float) -> "Light":
        """Create a white point light."""
        return cls(position=position, intensity=intensity, color=(1.0, 1.0, 1.0))


class Scene:
    """Builder for the primitives, lights and background of a render.

    Attributes:
        primitives: Shapes in insertion order.
        lights: Point lights in insertion order.
    """

    def __init__(
        self,
        background_color: tuple[float, float, float] = DEFAULT_BACKGROUND_COLOR,
    ) -> None:
        """Initialize an empty, unfrozen scene."""
        self.primitives: list[Shape] = []
        self.lights: list[Light] = []
        self._background_color = tuple(float(c) for c in background_color)
        self._frozen = False

    @property
    def background_color(self) -> tuple[float, float, float]:
        """Color returned for rays that hit nothing."""
        return self._background_color

    @background_color.setter
    def background_color(self, color: tuple[float, float, float]) -> None:
        self._check_mutable()
        self._background_color = tuple(float(c) for c in color)

    @property
    def is_frozen(self) -> bool:
        """Whether the scene has been frozen for rendering."""
        return self._frozen

    def freeze(self) -> "Scene":
        """Make the scene read-only. Freezing twice is harmless.

        Returns:
            The scene itself, for chaining.
        """
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("Scene is frozen and can no longer be modified")

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_object(self, shape: Shape) -> int:
        """Append a prebuilt shape.

        Args:
            shape: A SphereShape, PlaneShape, BoxShape or CylinderShape.

        Returns:
            The index of the shape in the primitive list.

        Raises:
            RuntimeError: If the scene is frozen.
            TypeError: If shape is not a supported primitive.
        """
        self._check_mutable()
        if not isinstance(shape, (SphereShape, PlaneShape, BoxShape, CylinderShape)):
            raise TypeError(f"Unsupported primitive type: {type(shape).__name__}")
        self.primitives.append(shape)
        return len(self.primitives) - 1

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: Material,
        transform: Transform | None = None,
    ) -> int:
        """Add a sphere, optionally placed by a transform."""
        return self.add_object(
            SphereShape(
                center=center,
                radius=radius,
                material=material,
                transform=transform if transform is not None else Transform(),
            )
        )

    def add_plane(
        self,
        point: tuple[float, float, float],
        normal: tuple[float, float, float],
        material: Material,
    ) -> int:
        """Add an infinite plane through point with the given normal."""
        return self.add_object(PlaneShape(point=point, normal=normal, material=material))

    def add_box(
        self,
        min_corner: tuple[float, float, float],
        max_corner: tuple[float, float, float],
        material: Material,
    ) -> int:
        """Add an axis-aligned box spanning min_corner to max_corner."""
        return self.add_object(
            BoxShape(min_corner=min_corner, max_corner=max_corner, material=material)
        )

    def add_cylinder(
        self,
        center: tuple[float, float, float],
        radius: float,
        height: float,
        material: Material,
    ) -> int:
        """Add a finite cylinder whose axis is parallel to y."""
        return self.add_object(
            CylinderShape(center=center, radius=radius, height=height, material=material)
        )

    # =========================================================================
    # Light Management
    # =========================================================================

    def add_light(self, light: Light) -> int:
        """Append a point light.

        Returns:
            The index of the light.

        Raises:
            RuntimeError: If the scene is frozen.
        """
        self._check_mutable()
        self.lights.append(light)
        return len(self.lights) - 1

    def __repr__(self) -> str:
        return (
            f"Scene(primitives={len(self.primitives)}, lights={len(self.lights)}, "
            f"background_color={self.background_color}, frozen={self._frozen})"
        )
