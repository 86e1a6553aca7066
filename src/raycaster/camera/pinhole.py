"""Pinhole camera model for perspective projection ray generation.

The camera builds an orthonormal basis (u, v, w) from its placement:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

and a viewport one unit in front of the origin, described by its lower-left
corner and its horizontal and vertical spans. The frame is computed once on
the host (NumPy) when the camera is created and uploaded to Taichi fields by
setup_camera().

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 0.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=45.0,
    ...     aspect_ratio=4.0 / 3.0,
    ... )
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.5, 0.5)  # Ray through image center
"""

import math
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray, make_ray, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class CameraFrame:
    """Derived viewing geometry of a camera (host side, float64).

    Attributes:
        origin: Camera position.
        lower_left_corner: Lower-left corner of the viewport.
        horizontal: Full-width span of the viewport.
        vertical: Full-height span of the viewport.
        u: Right basis vector.
        v: Up basis vector.
        w: Backward basis vector (opposite view direction).
    """

    origin: npt.NDArray[np.float64]
    lower_left_corner: npt.NDArray[np.float64]
    horizontal: npt.NDArray[np.float64]
    vertical: npt.NDArray[np.float64]
    u: npt.NDArray[np.float64]
    v: npt.NDArray[np.float64]
    w: npt.NDArray[np.float64]


def _normalize(vector: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    norm = np.linalg.norm(vector)
    if norm > 0.0:
        return vector / norm
    return vector


def compute_camera_frame(
    lookfrom: tuple[float, float, float],
    lookat: tuple[float, float, float],
    vup: tuple[float, float, float],
    vfov: float,
    aspect_ratio: float,
) -> CameraFrame:
    """Derive the orthonormal basis and viewport from placement parameters.

    Args:
        lookfrom: Camera position.
        lookat: Point the camera looks at.
        vup: Up direction.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height.

    Returns:
        The derived CameraFrame.
    """
    half_height = math.tan(math.radians(vfov) / 2.0)
    half_width = aspect_ratio * half_height

    origin = np.array(lookfrom, dtype=np.float64)
    w = _normalize(origin - np.array(lookat, dtype=np.float64))
    u = _normalize(np.cross(np.array(vup, dtype=np.float64), w))
    v = np.cross(w, u)

    lower_left_corner = origin - half_width * u - half_height * v - w
    horizontal = 2.0 * half_width * u
    vertical = 2.0 * half_height * v

    return CameraFrame(
        origin=origin,
        lower_left_corner=lower_left_corner,
        horizontal=horizontal,
        vertical=vertical,
        u=u,
        v=v,
        w=w,
    )


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    The derived frame is computed once on construction and never changes.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees, in (0, 180).
        aspect_ratio: Width divided by height of the output image.

    Raises:
        ValueError: If lookfrom equals lookat, vfov is outside (0, 180) or
            aspect_ratio is not positive.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    frame: CameraFrame = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if tuple(self.lookfrom) == tuple(self.lookat):
            raise ValueError("Camera lookfrom and lookat must differ")
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Vertical field of view must be in (0, 180), got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
        object.__setattr__(
            self,
            "frame",
            compute_camera_frame(
                self.lookfrom, self.lookat, self.vup, self.vfov, self.aspect_ratio
            ),
        )


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())

# Orthonormal basis vectors
_camera_u = ti.Vector.field(3, dtype=ti.f32, shape=())  # Right
_camera_v = ti.Vector.field(3, dtype=ti.f32, shape=())  # Up
_camera_w = ti.Vector.field(3, dtype=ti.f32, shape=())  # Backward (opposite view)

# Viewport vectors for ray computation
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full width
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full height
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())  # Lower-left of viewport

_camera_initialized = ti.field(dtype=ti.i32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Upload a camera's frame for use by get_ray().

    Must be called from Python (not from within a Taichi kernel) before
    rendering.

    Args:
        camera: Camera configuration with position, orientation, and FOV.
    """
    frame = camera.frame
    _camera_origin[None] = frame.origin.tolist()
    _camera_u[None] = frame.u.tolist()
    _camera_v[None] = frame.v.tolist()
    _camera_w[None] = frame.w.tolist()
    _viewport_horizontal[None] = frame.horizontal.tolist()
    _viewport_vertical[None] = frame.vertical.tolist()
    _lower_left_corner[None] = frame.lower_left_corner.tolist()
    _camera_initialized[None] = 1


def is_camera_ready() -> bool:
    """Check whether setup_camera() has been called."""
    return bool(_camera_initialized[None])


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_ray(s: ti.f32, t: ti.f32) -> Ray:
    """Generate a ray through normalized screen coordinates (s, t).

    - s = 0: left edge, s = 1: right edge
    - t = 0: bottom edge, t = 1: top edge

    The direction runs from the camera origin to the viewport point and is
    not normalized.

    Args:
        s: Horizontal coordinate in [0, 1].
        t: Vertical coordinate in [0, 1].

    Returns:
        A Ray from the camera origin through the viewport point.
    """
    origin = _camera_origin[None]
    point_on_viewport = (
        _lower_left_corner[None] + s * _viewport_horizontal[None] + t * _viewport_vertical[None]
    )
    return make_ray(origin, point_on_viewport - origin)


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera position in world space."""
    return _camera_origin[None]


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the uploaded camera state for debugging.

    Returns:
        Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
    """

    def _as_tuple(f) -> tuple[float, float, float]:
        value = f[None]
        return (float(value[0]), float(value[1]), float(value[2]))

    return {
        "origin": _as_tuple(_camera_origin),
        "u": _as_tuple(_camera_u),
        "v": _as_tuple(_camera_v),
        "w": _as_tuple(_camera_w),
        "horizontal": _as_tuple(_viewport_horizontal),
        "vertical": _as_tuple(_viewport_vertical),
        "lower_left": _as_tuple(_lower_left_corner),
    }
