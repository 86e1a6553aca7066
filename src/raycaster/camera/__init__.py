"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole (perspective) camera model

Camera responsibilities:
    - Derive an orthonormal basis and viewport from look-at placement
    - Map normalized screen coordinates (s, t) to world-space rays

Screen coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image

The pinhole module declares Taichi fields, so this package must be imported
after ti.init().
"""

from .pinhole import (
    CameraFrame,
    PinholeCamera,
    compute_camera_frame,
    get_camera_info,
    get_camera_origin,
    get_ray,
    is_camera_ready,
    setup_camera,
)

__all__ = [
    "CameraFrame",
    "PinholeCamera",
    "compute_camera_frame",
    "setup_camera",
    "is_camera_ready",
    "get_ray",
    "get_camera_origin",
    "get_camera_info",
]
