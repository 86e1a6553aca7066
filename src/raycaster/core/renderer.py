"""Renderer: pixel loop and local shading with hard shadows.

For every pixel one primary ray is cast through the camera. The nearest hit
is shaded as

    color = sum over visible lights of albedo * light_color * intensity * max(0, n.l)
            + AMBIENT_FACTOR * albedo

where a light is visible when a shadow ray from the hit point (pushed off
the surface by epsilon along the normal) reaches it without hitting anything
closer than the light. Rays that miss every primitive take the scene's
background color. Each channel is clamped to [0, 1] and truncated to an
8-bit value.

Pixels are evaluated strictly in scan order (row 0 = top of the image) by a
serialized Taichi loop. The material's reflectivity is carried in every hit
record but no code path traces a reflected ray; the depth guard on shade()
only exists so such a path can be added without changing its signature.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.core.renderer import Renderer
    >>> from raycaster.scene.demo import create_demo_scene
    >>>
    >>> scene, camera = create_demo_scene(3, aspect_ratio=4.0 / 3.0)
    >>> pixels = Renderer().render(scene, camera, 320, 240)
    >>> pixels.shape
    (240, 320, 3)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raycaster.camera.pinhole import PinholeCamera, get_ray, is_camera_ready, setup_camera
from raycaster.core.ray import T_EPSILON, Ray, hadamard, normalize, vec3
from raycaster.scene.intersection import (
    background_color,
    get_light,
    intersect_scene,
    load_scene,
    num_lights,
)
from raycaster.scene.scene import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray traversal depth before shade() returns black
MAX_DEPTH = 10

# Fraction of the albedo added once per hit regardless of lights
AMBIENT_FACTOR = 0.1

# =============================================================================
# Render Target (Pixel Buffer)
# =============================================================================

# 8-bit RGB pixel buffer indexed [row, column, channel], row 0 = top of the
# image. Allocated on the host per render and passed to the kernel as an
# ndarray, so any image size runs without recompiling.
_pixels: npt.NDArray[np.uint8] | None = None


def setup_render_target(width: int, height: int) -> None:
    """Allocate a black pixel buffer of the given size.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        ValueError: If a dimension is not positive.
    """
    global _pixels
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    _pixels = np.zeros((height, width, 3), dtype=np.uint8)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    if _pixels is None:
        return 0, 0
    return int(_pixels.shape[1]), int(_pixels.shape[0])


def _check_render_target_initialized() -> None:
    if _pixels is None:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def _check_camera_ready() -> None:
    if not is_camera_ready():
        raise RuntimeError("Camera not set up. Call setup_camera() first.")


# =============================================================================
# Shading
# =============================================================================


@ti.func
def shade(
    ray_origin: vec3,
    ray_direction: vec3,
    depth: ti.i32,
    max_depth: ti.i32,
    epsilon: ti.f32,
) -> vec3:
    """Compute the unclamped color seen along a ray.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        depth: Current traversal depth (0 for primary rays).
        max_depth: Depth at which shading gives up and returns black.
        epsilon: Shadow-ray offset along the normal, also subtracted from
            the light distance when testing occluders.

    Returns:
        Linear RGB color. Background color on a miss.
    """
    color = vec3(0.0, 0.0, 0.0)

    if depth < max_depth:
        rec = intersect_scene(ray_origin, ray_direction)

        if rec.hit == 0:
            color = background_color()
        else:
            albedo = rec.material.albedo

            for i in range(num_lights[None]):
                light = get_light(i)
                to_light = light.position - rec.point
                light_dir = normalize(to_light)
                light_distance = tm.length(to_light)
                diffuse = ti.max(0.0, tm.dot(rec.normal, light_dir))

                # Surfaces facing away from the light get no shadow ray
                if diffuse > 0.0:
                    shadow_origin = rec.point + rec.normal * epsilon
                    blocker = intersect_scene(shadow_origin, light_dir)
                    occluded = 0
                    if blocker.hit == 1 and blocker.t < light_distance - epsilon:
                        occluded = 1

                    if occluded == 0:
                        color += hadamard(albedo, light.color) * light.intensity * diffuse

            color += albedo * AMBIENT_FACTOR

    return color


@ti.func
def to_byte(channel: ti.f32) -> ti.u8:
    """Clamp a channel to [0, 1] and scale it to 0-255, rounding toward zero."""
    clamped = ti.min(ti.max(channel, 0.0), 1.0)
    return ti.cast(ti.cast(255.0 * clamped, ti.i32), ti.u8)


@ti.func
def pixel_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray for pixel (x, y), where row 0 is the top row."""
    s = ti.cast(x, ti.f32) / ti.cast(width, ti.f32)
    t = ti.cast(height - 1 - y, ti.f32) / ti.cast(height, ti.f32)
    return get_ray(s, t)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(
    pixels: ti.types.ndarray(dtype=ti.u8, ndim=3), max_depth: ti.i32, epsilon: ti.f32
):
    """Shade every pixel in scan order and store it in the pixel buffer."""
    height = pixels.shape[0]
    width = pixels.shape[1]
    ti.loop_config(serialize=True)
    for y, x in ti.ndrange(height, width):
        ray = pixel_ray(x, y, width, height)
        color = shade(ray.origin, ray.direction, 0, max_depth, epsilon)
        for c in ti.static(range(3)):
            pixels[y, x, c] = to_byte(color[c])


@ti.kernel
def _trace_single_ray(
    ox: ti.f32,
    oy: ti.f32,
    oz: ti.f32,
    dx: ti.f32,
    dy: ti.f32,
    dz: ti.f32,
    depth: ti.i32,
    max_depth: ti.i32,
    epsilon: ti.f32,
) -> vec3:
    return shade(vec3(ox, oy, oz), vec3(dx, dy, dz), depth, max_depth, epsilon)


@ti.kernel
def _shade_single_pixel(
    x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32, max_depth: ti.i32, epsilon: ti.f32
) -> vec3:
    ray = pixel_ray(x, y, width, height)
    return shade(ray.origin, ray.direction, 0, max_depth, epsilon)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image(max_depth: int = MAX_DEPTH, epsilon: float = T_EPSILON) -> None:
    """Render the loaded scene through the uploaded camera into the pixel buffer.

    Raises:
        RuntimeError: If the render target or camera has not been set up.
    """
    _check_render_target_initialized()
    _check_camera_ready()

    _render_kernel(_pixels, max_depth, epsilon)


def render_pixel(
    x: int,
    y: int,
    max_depth: int = MAX_DEPTH,
    epsilon: float = T_EPSILON,
) -> tuple[float, float, float]:
    """Shade a single pixel without writing to the pixel buffer.

    Useful for testing and debugging individual pixels.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).

    Returns:
        The unclamped (R, G, B) color of the pixel.

    Raises:
        RuntimeError: If the render target or camera has not been set up.
    """
    _check_render_target_initialized()
    _check_camera_ready()

    width, height = get_image_dimensions()
    color = _shade_single_pixel(x, y, width, height, max_depth, epsilon)
    return (float(color[0]), float(color[1]), float(color[2]))


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int = 0,
    max_depth: int = MAX_DEPTH,
    epsilon: float = T_EPSILON,
) -> tuple[float, float, float]:
    """Shade an arbitrary ray against the loaded scene.

    Returns:
        The unclamped (R, G, B) color seen along the ray.
    """
    color = _trace_single_ray(
        origin[0],
        origin[1],
        origin[2],
        direction[0],
        direction[1],
        direction[2],
        depth,
        max_depth,
        epsilon,
    )
    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.uint8]:
    """Get the active region of the pixel buffer.

    Returns:
        NumPy array of shape (height, width, 3) with dtype uint8, row 0 at
        the top of the image.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    return _pixels.copy()


class Renderer:
    """Binds a scene and camera to the device and renders them.

    Attributes:
        max_depth: Depth guard passed to shade().
        epsilon: Shadow-ray bias.
    """

    def __init__(self, max_depth: int = MAX_DEPTH, epsilon: float = T_EPSILON) -> None:
        """Initialize the renderer.

        Raises:
            ValueError: If max_depth is negative or epsilon is not positive.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        if epsilon <= 0.0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        self.max_depth = max_depth
        self.epsilon = epsilon

    def render(
        self,
        scene: Scene,
        camera: PinholeCamera,
        width: int,
        height: int,
    ) -> npt.NDArray[np.uint8]:
        """Render a scene to an 8-bit pixel buffer.

        The scene is frozen and uploaded, the camera uploaded, and every
        pixel shaded once.

        Args:
            scene: The scene to render.
            camera: The camera to render through.
            width: Image width in pixels.
            height: Image height in pixels.

        Returns:
            NumPy array of shape (height, width, 3) with dtype uint8.

        Raises:
            ValueError: If the image dimensions are invalid.
            RuntimeError: If the scene exceeds the device capacity.
        """
        setup_render_target(width, height)
        load_scene(scene)
        setup_camera(camera)
        render_image(self.max_depth, self.epsilon)
        return get_image_numpy()

    def __repr__(self) -> str:
        return f"Renderer(max_depth={self.max_depth}, epsilon={self.epsilon})"
