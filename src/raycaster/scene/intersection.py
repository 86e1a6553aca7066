"""Device-side scene storage and the nearest-hit query.

Primitives of every kind live in one set of Taichi fields (Structure of
Arrays), indexed in the order they were added to the host-side Scene. A
PrimitiveKind tag selects which intersection routine a slot is dispatched to
and which parameter fields it uses:

    kind       anchor        extent        radius  height
    SPHERE     center        -             radius  -
    PLANE      point         normal        -       -
    BOX        min corner    max corner    -       -
    CYLINDER   center        -             radius  height

Only spheres use the placement fields (translation, scale).

The same query serves primary rays and shadow rays.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.intersection import intersect_scene, load_scene
    >>> load_scene(scene)
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from raycaster.geometry import (
    Box,
    BoxShape,
    Cylinder,
    CylinderShape,
    HitInfo,
    Plane,
    PlaneShape,
    PrimitiveKind,
    Shape,
    Sphere,
    SphereShape,
    hit_box,
    hit_cylinder,
    hit_plane,
    hit_sphere,
    make_miss_record,
)
from raycaster.materials.material import SurfaceMaterial
from raycaster.scene.scene import Light, Scene

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class PointLight:
    """Device-side point light.

    Attributes:
        position: World-space position.
        intensity: Scalar multiplier for the color.
        color: Linear RGB color.
    """

    position: vec3
    intensity: ti.f32
    color: vec3


# Maximum number of primitives and lights supported in the scene
MAX_PRIMITIVES = 1024
MAX_LIGHTS = 64

# Primitive storage: Structure of Arrays layout, see module docstring
primitive_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
primitive_anchors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_extents = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_radii = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_heights = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_translations = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_scales = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
num_primitives = ti.field(dtype=ti.i32, shape=())

# Per-primitive material (copied into every hit record)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
material_speculars = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
material_shininess = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
material_reflectivities = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)

# Light storage
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

_background_color = ti.Vector.field(3, dtype=ti.f32, shape=())


def clear_scene() -> None:
    """Remove all primitives and lights and reset the background to black.

    The field data is not cleared but will be overwritten when new
    primitives are added.
    """
    num_primitives[None] = 0
    num_lights[None] = 0
    _background_color[None] = [0.0, 0.0, 0.0]


def add_primitive(shape: Shape) -> int:
    """Upload one primitive into the next free slot.

    Args:
        shape: The host-side shape to upload.

    Returns:
        The slot index of the primitive.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
        TypeError: If shape is not a supported primitive.
    """
    idx = num_primitives[None]
    if idx >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")

    anchor = (0.0, 0.0, 0.0)
    extent = (0.0, 0.0, 0.0)
    radius = 0.0
    height = 0.0

    if isinstance(shape, SphereShape):
        anchor = shape.center
        radius = shape.radius
    elif isinstance(shape, PlaneShape):
        anchor = shape.point
        extent = shape.normal
    elif isinstance(shape, BoxShape):
        anchor = shape.min_corner
        extent = shape.max_corner
    elif isinstance(shape, CylinderShape):
        anchor = shape.center
        radius = shape.radius
        height = shape.height
    else:
        raise TypeError(f"Unsupported primitive type: {type(shape).__name__}")

    primitive_kinds[idx] = int(shape.kind)
    primitive_anchors[idx] = list(anchor)
    primitive_extents[idx] = list(extent)
    primitive_radii[idx] = radius
    primitive_heights[idx] = height
    primitive_translations[idx] = list(shape.transform.translation)
    primitive_scales[idx] = shape.transform.scale

    material = shape.material
    material_albedos[idx] = list(material.albedo)
    material_speculars[idx] = material.specular
    material_shininess[idx] = material.shininess
    material_reflectivities[idx] = material.reflectivity

    num_primitives[None] = idx + 1
    return idx


def add_light(light: Light) -> int:
    """Upload one point light into the next free slot.

    Returns:
        The slot index of the light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = list(light.position)
    light_intensities[idx] = light.intensity
    light_colors[idx] = list(light.color)
    num_lights[None] = idx + 1
    return idx


def set_background_color(color: tuple[float, float, float]) -> None:
    """Set the color returned for rays that hit nothing."""
    _background_color[None] = [color[0], color[1], color[2]]


def load_scene(scene: Scene) -> None:
    """Replace the device-side scene with the contents of a host-side Scene.

    The scene is frozen as part of the upload so it cannot drift from what
    the renderer sees.

    Args:
        scene: The scene to upload.

    Raises:
        RuntimeError: If the scene exceeds MAX_PRIMITIVES or MAX_LIGHTS.
    """
    if len(scene.primitives) > MAX_PRIMITIVES:
        raise RuntimeError(
            f"Scene has {len(scene.primitives)} primitives, "
            f"maximum is {MAX_PRIMITIVES}"
        )
    if len(scene.lights) > MAX_LIGHTS:
        raise RuntimeError(f"Scene has {len(scene.lights)} lights, maximum is {MAX_LIGHTS}")

    scene.freeze()
    clear_scene()
    for shape in scene.primitives:
        add_primitive(shape)
    for light in scene.lights:
        add_light(light)
    set_background_color(scene.background_color)


def get_primitive_count() -> int:
    """Get the number of primitives in the device-side scene."""
    return int(num_primitives[None])


def get_light_count() -> int:
    """Get the number of lights in the device-side scene."""
    return int(num_lights[None])


def get_background_color() -> tuple[float, float, float]:
    """Get the device-side background color."""
    c = _background_color[None]
    return (float(c[0]), float(c[1]), float(c[2]))


# =============================================================================
# Device-side Access
# =============================================================================


@ti.func
def background_color() -> vec3:
    """Get the background color within a Taichi kernel."""
    return _background_color[None]


@ti.func
def get_light(i: ti.i32) -> PointLight:
    """Get light i within a Taichi kernel."""
    return PointLight(
        position=light_positions[i],
        intensity=light_intensities[i],
        color=light_colors[i],
    )


@ti.func
def _load_material(i: ti.i32) -> SurfaceMaterial:
    return SurfaceMaterial(
        albedo=material_albedos[i],
        specular=material_speculars[i],
        shininess=material_shininess[i],
        reflectivity=material_reflectivities[i],
    )


@ti.func
def intersect_primitive(i: ti.i32, ray_origin: vec3, ray_direction: vec3) -> HitInfo:
    """Intersect a ray with primitive slot i, dispatching on its kind.

    Args:
        i: The primitive slot index.
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.

    Returns:
        The HitInfo produced by the primitive's intersection routine.
    """
    kind = primitive_kinds[i]
    material = _load_material(i)
    rec = make_miss_record()

    if kind == int(PrimitiveKind.SPHERE):
        sphere = Sphere(
            center=primitive_anchors[i],
            radius=primitive_radii[i],
            translation=primitive_translations[i],
            scale=primitive_scales[i],
            material=material,
        )
        rec = hit_sphere(ray_origin, ray_direction, sphere)

    elif kind == int(PrimitiveKind.PLANE):
        plane = Plane(point=primitive_anchors[i], normal=primitive_extents[i], material=material)
        rec = hit_plane(ray_origin, ray_direction, plane)

    elif kind == int(PrimitiveKind.BOX):
        box = Box(
            min_corner=primitive_anchors[i],
            max_corner=primitive_extents[i],
            material=material,
        )
        rec = hit_box(ray_origin, ray_direction, box)

    elif kind == int(PrimitiveKind.CYLINDER):
        cylinder = Cylinder(
            center=primitive_anchors[i],
            radius=primitive_radii[i],
            height=primitive_heights[i],
            material=material,
        )
        rec = hit_cylinder(ray_origin, ray_direction, cylinder)

    return rec


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> HitInfo:
    """Find the nearest intersection of a ray with the scene.

    Tests every primitive in insertion order and keeps a hit only when its
    t is strictly smaller than the best so far, so the earlier primitive
    wins an exact tie. There is no acceleration structure; the cost is
    linear in the number of primitives.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.

    Returns:
        The nearest HitInfo, or a miss record if no primitive was hit.
    """
    closest_t = tm.inf
    result = make_miss_record()

    for i in range(num_primitives[None]):
        rec = intersect_primitive(i, ray_origin, ray_direction)
        if rec.hit == 1 and rec.t < closest_t:
            closest_t = rec.t
            result = rec

    return result
