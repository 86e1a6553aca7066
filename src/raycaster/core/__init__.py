"""Core rendering module.

This module contains the fundamental building blocks for ray casting:

Components:
    ray: Ray data structure, vector utilities and intersection tolerances
    renderer: Pixel loop, Lambertian shading with hard shadows, pixel buffer

The renderer evaluates a purely local shading model: one primary ray per
pixel, one shadow ray per visible light, and a constant ambient term.

All per-ray operations are Taichi functions.
"""

from .ray import (
    PARALLEL_EPSILON,
    T_EPSILON,
    Ray,
    cross,
    dot,
    hadamard,
    length,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    reflect,
    vec3,
)

# Note: renderer is NOT imported here because it declares Taichi fields.
# Import it directly from raycaster.core.renderer after ti.init().

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "hadamard",
    "T_EPSILON",
    "PARALLEL_EPSILON",
]
