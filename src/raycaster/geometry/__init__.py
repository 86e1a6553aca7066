"""Geometry module for shape primitives and their intersection routines.

Components:
    hit: HitInfo record and the PrimitiveKind tag
    transform: Translation/uniform-scale placement
    sphere: Sphere with quadratic intersection (honours its placement)
    plane: Infinite plane
    box: Axis-aligned box using the slab method
    cylinder: Finite vertical cylinder (wall quadratic plus two caps)

Each primitive comes as a host-side *Shape dataclass used to build scenes and
a device-side Taichi dataclass consumed by its hit function. All hit
functions share one contract:

    record = hit_<kind>(ray_origin, ray_direction, shape)

returning the nearest intersection with t > T_EPSILON, or a record with
hit == 0.
"""

from .box import Box, BoxShape, hit_box, make_box
from .cylinder import Cylinder, CylinderShape, hit_cylinder, make_cylinder
from .hit import HitInfo, PrimitiveKind, make_miss_record
from .plane import Plane, PlaneShape, hit_plane, make_plane
from .sphere import Sphere, SphereShape, hit_sphere, make_sphere
from .transform import Transform

Shape = SphereShape | PlaneShape | BoxShape | CylinderShape

__all__ = [
    "HitInfo",
    "PrimitiveKind",
    "make_miss_record",
    "Transform",
    "Shape",
    "Sphere",
    "SphereShape",
    "hit_sphere",
    "make_sphere",
    "Plane",
    "PlaneShape",
    "hit_plane",
    "make_plane",
    "Box",
    "BoxShape",
    "hit_box",
    "make_box",
    "Cylinder",
    "CylinderShape",
    "hit_cylinder",
    "make_cylinder",
]
