"""Materials module for surface appearance.

Components:
    material: Host-side Material descriptor and its device-side
        SurfaceMaterial counterpart

Every primitive owns exactly one material by value. The renderer reads the
albedo of the material copied into the hit record; the remaining fields
are carried along unchanged.
"""

from .material import Material, SurfaceMaterial

__all__ = [
    "Material",
    "SurfaceMaterial",
]
