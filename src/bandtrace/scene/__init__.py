"""Scene module for scene management and intersection.

This module handles scene representation and ray-scene queries:

Components:
    intersection: HittableList, the ordered nearest-hit scene container
    manager: SceneDescription, scene files and the built-in sample scene

Scenes are built once before rendering and are read-only afterwards, so a
single world instance is shared by every render worker without locking.
"""

from .intersection import HittableList
from .manager import (
    MaterialType,
    SceneDescription,
    SphereInfo,
    load_scene,
    material_from_dict,
    material_to_dict,
    sample_scene,
)

__all__ = [
    # Intersection module
    "HittableList",
    # Manager module
    "SceneDescription",
    "SphereInfo",
    "MaterialType",
    "material_from_dict",
    "material_to_dict",
    "load_scene",
    "sample_scene",
]
