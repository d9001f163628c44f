"""Scene module: scene container, mesh loading and ready-made scenes.

Components:
    scene: Immutable ordered Scene with dict/JSON serialization
    obj_loader: Wavefront OBJ subset loader for triangle meshes
    presets: The reference scene and random sphere population

Example:
    >>> from aotracer.scene import Scene, create_default_scene
    >>> scene = create_default_scene(random_spheres=10)
    >>> scene.save_json("scene.json")
    >>> same = Scene.from_json("scene.json")
"""

from .obj_loader import ObjParseError, load_obj, parse_obj_lines
from .presets import (
    SCENE_SEED,
    create_default_scene,
    default_primitives,
    populate_random_spheres,
)
from .scene import Scene

__all__ = [
    "Scene",
    "ObjParseError",
    "load_obj",
    "parse_obj_lines",
    "SCENE_SEED",
    "create_default_scene",
    "default_primitives",
    "populate_random_spheres",
]
