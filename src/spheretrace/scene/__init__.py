"""Scene module for scene data, construction and ray queries.

Components:
    manager: Scene objects (spheres, lights), the Scene container and builder
    intersection: Resolve a ray against every object, sorted by distance
    generator: Procedural sphere-field scene for the example renderer

Scenes are built once per render pass and never modified while tracing.
"""

from .generator import SphereFieldParams, create_sphere_field_scene, populate_sphere_field
from .intersection import SceneHit, collide_ray, nearest_hit
from .manager import (
    LightObject,
    Material,
    ObjectKind,
    Scene,
    SceneConfig,
    SceneManager,
    SceneObject,
    SphereObject,
)

__all__ = [
    # Manager module
    "Scene",
    "SceneManager",
    "SceneConfig",
    "SceneObject",
    "SphereObject",
    "LightObject",
    "Material",
    "ObjectKind",
    # Intersection module
    "SceneHit",
    "collide_ray",
    "nearest_hit",
    # Generator module
    "SphereFieldParams",
    "create_sphere_field_scene",
    "populate_sphere_field",
]
