"""Geometry module for shape primitives.

Components:
    sphere: Sphere-ray intersection producing collision points and normals

Scene objects of every kind (diffuse spheres and lights) are spheres
geometrically, so this is the only primitive. Intersection returns a list
of Collision records, empty on a miss:

    collisions = intersect_sphere(ray, center, radius)
"""

from .sphere import EPSILON, Collision, intersect_sphere

__all__ = [
    "Collision",
    "EPSILON",
    "intersect_sphere",
]
