"""Scene module: description, device storage and the reference scene.

Components:
    description: Frozen dataclasses for materials, spheres, lights and scenes,
        with JSON round-tripping
    intersection: SceneData, the Taichi-field copy of a scene, and the
        nearest-hit query over spheres and the checkerboard plane
    reference: The four-sphere, three-light reference scene

Scene data is read-only during a render; SceneData owns its fields so
several scenes can live side by side.
"""

from .description import Light, Material, Scene, Sphere, load_scene, save_scene
from .intersection import (
    MAX_DISTANCE,
    HitInfo,
    MaterialRecord,
    SceneData,
    SceneHitRecord,
    default_material,
    miss_record,
)
from .reference import GLASS, IVORY, MIRROR, RED_RUBBER, create_reference_scene

__all__ = [
    # Description
    "Material",
    "Light",
    "Sphere",
    "Scene",
    "load_scene",
    "save_scene",
    # Intersection
    "SceneData",
    "SceneHitRecord",
    "MaterialRecord",
    "HitInfo",
    "default_material",
    "miss_record",
    "MAX_DISTANCE",
    # Reference scene
    "create_reference_scene",
    "IVORY",
    "GLASS",
    "RED_RUBBER",
    "MIRROR",
]
