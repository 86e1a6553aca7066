"""Taichi-based Whitted-style ray caster with PPM output.

This package renders static scenes of geometric primitives by casting one
ray per pixel from a pinhole camera and shading the nearest hit with
Lambertian lighting, hard shadows and a constant ambient term.

Subpackages:
    core: Vector/ray utilities and the renderer
    geometry: Primitive shapes and their intersection routines
    materials: Surface material descriptors
    scene: Scene builder, device-side storage and demo scenes
    camera: Pinhole camera model
    output: PPM and PNG writers

Modules holding Taichi fields (scene.intersection, camera.pinhole,
core.renderer) must be imported after ti.init().
"""

__version__ = "0.1.0"
