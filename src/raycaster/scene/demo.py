"""Hard-coded demo scenes selectable from the command line.

Scenes:
    1: Green sphere lit from the front against a sky background
    2: Red box resting on a gray floor plane
    3: Sphere, cylinder and box on a floor plane
    4: Scene 3 seen from a lower side camera
    any other number: Red sphere with the default background

Every demo uses a world-up of +y and takes its aspect ratio from the image
size, so a camera built here always matches the render target.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.demo import create_demo_scene
    >>> scene, camera = create_demo_scene(2, aspect_ratio=800 / 600)
    >>> len(scene.primitives), len(scene.lights)
    (2, 1)
"""

from raycaster.camera.pinhole import PinholeCamera
from raycaster.geometry.plane import PlaneShape
from raycaster.materials.material import Material
from raycaster.scene.scene import Light, Scene

# Light sky blue shared by scenes 1-4
SKY_BACKGROUND_COLOR = (0.5, 0.7, 1.0)

# Floor plane height used by scenes 2-4
FLOOR_HEIGHT = -1.5

DEMO_SCENE_NUMBERS = (1, 2, 3, 4)

WORLD_UP = (0.0, 1.0, 0.0)


def _add_mixed_primitives(scene: Scene) -> None:
    """Populate the floor, sphere, cylinder and box shared by scenes 3 and 4."""
    scene.add_object(PlaneShape.horizontal(FLOOR_HEIGHT, Material.gray()))
    scene.add_sphere((-2.5, -0.7, -4.0), 0.8, Material.green())
    scene.add_cylinder((0.0, -1.5, -4.5), 0.6, 1.8, Material.blue())
    scene.add_box((1.8, -1.5, -3.5), (3.2, -0.1, -2.1), Material.red())


def create_demo_scene(
    number: int,
    aspect_ratio: float,
    brightness: float = 1.0,
    fov: float = 45.0,
) -> tuple[Scene, PinholeCamera]:
    """Build one of the demo scenes and a camera framing it.

    Args:
        number: Demo scene number. Unknown numbers give the default scene.
        aspect_ratio: Image width divided by height.
        brightness: Multiplier applied to every light intensity.
        fov: Vertical field of view in degrees.

    Returns:
        Tuple of (scene, camera). The scene is not frozen.

    Raises:
        ValueError: If the camera parameters are invalid.
    """
    scene = Scene()

    if number == 1:
        scene.background_color = SKY_BACKGROUND_COLOR
        scene.add_sphere((0.0, 0.0, -3.0), 1.2, Material.green())
        # Light sits behind the camera so the sphere casts no visible shadow
        scene.add_light(Light.white((0.0, 0.0, 1.0), brightness * 2.0))
        lookfrom, lookat = (0.0, 0.0, 0.0), (0.0, 0.0, -1.0)

    elif number == 2:
        scene.background_color = SKY_BACKGROUND_COLOR
        scene.add_object(PlaneShape.horizontal(FLOOR_HEIGHT, Material.gray()))
        scene.add_box((-0.5, -1.5, -3.7), (0.5, -0.5, -2.7), Material.red())
        scene.add_light(Light.white((2.0, 3.0, -1.0), brightness * 0.6))
        lookfrom, lookat = (0.0, 0.5, 0.0), (0.0, -0.5, -3.0)

    elif number == 3:
        scene.background_color = SKY_BACKGROUND_COLOR
        _add_mixed_primitives(scene)
        scene.add_light(Light.white((2.0, 4.0, -1.0), brightness * 0.8))
        lookfrom, lookat = (0.0, 1.0, 0.0), (0.0, -0.5, -4.0)

    elif number == 4:
        scene.background_color = SKY_BACKGROUND_COLOR
        _add_mixed_primitives(scene)
        scene.add_light(Light.white((2.0, 4.0, -1.0), brightness * 0.8))
        lookfrom, lookat = (-3.0, 0.2, -2.0), (0.0, -0.5, -4.0)

    else:
        scene.add_sphere((0.0, 0.0, -3.0), 1.0, Material.red())
        scene.add_light(Light.white((2.0, 2.0, 0.0), brightness))
        lookfrom, lookat = (0.0, 0.0, 0.0), (0.0, 0.0, -1.0)

    camera = PinholeCamera(
        lookfrom=lookfrom,
        lookat=lookat,
        vup=WORLD_UP,
        vfov=fov,
        aspect_ratio=aspect_ratio,
    )
    return scene, camera
