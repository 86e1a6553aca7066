"""Scene module for scene building and the nearest-hit query.

Components:
    scene: Host-side Scene builder and point Light
    intersection: Device-side primitive/light storage and intersect_scene()
    demo: Hard-coded demo scenes used by the command line

Scene data is organized for GPU access:
    - Structure-of-Arrays layout for primitive parameters and materials
    - One PrimitiveKind tag per slot, in insertion order
    - Lights stored alongside in fixed-capacity fields

The intersection and demo modules declare (or import) Taichi fields, so this
package must be imported after ti.init().
"""

from .demo import DEMO_SCENE_NUMBERS, create_demo_scene
from .intersection import (
    MAX_LIGHTS,
    MAX_PRIMITIVES,
    PointLight,
    add_light,
    add_primitive,
    clear_scene,
    get_background_color,
    get_light_count,
    get_primitive_count,
    intersect_scene,
    load_scene,
    set_background_color,
)
from .scene import DEFAULT_BACKGROUND_COLOR, Light, Scene

__all__ = [
    # Builder
    "Scene",
    "Light",
    "DEFAULT_BACKGROUND_COLOR",
    # Device storage and query
    "PointLight",
    "add_primitive",
    "add_light",
    "clear_scene",
    "load_scene",
    "set_background_color",
    "get_primitive_count",
    "get_light_count",
    "get_background_color",
    "intersect_scene",
    "MAX_PRIMITIVES",
    "MAX_LIGHTS",
    # Demo scenes
    "create_demo_scene",
    "DEMO_SCENE_NUMBERS",
]
