"""Scene-level ray intersection.

Resolves a ray against every object in a scene with a linear scan and
returns all collisions ordered by distance from the ray origin. Each
collision is paired with the object it belongs to so shading can dispatch
on the object variant.

Example:
    >>> from src.spheretrace.core.ray import make_ray
    >>> from src.spheretrace.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> manager.add_light((0, 0, 50), 10)
    0
    >>> hits = collide_ray(manager.build(), make_ray((0, 0, 0), (0, 0, 1)))
    >>> [round(h.distance, 6) for h in hits]
    [40.0, 60.0]
"""

from __future__ import annotations

from dataclasses import dataclass

from src.spheretrace.core.ray import Ray, distance
from src.spheretrace.geometry.sphere import Collision, intersect_sphere
from src.spheretrace.scene.manager import Scene, SceneObject


@dataclass(frozen=True)
class SceneHit:
    """A collision paired with the scene object it belongs to.

    Attributes:
        obj: The scene object that was hit.
        collision: Point and outward normal of the hit.
        distance: Euclidean distance from the ray origin to the hit point.
    """

    obj: SceneObject
    collision: Collision
    distance: float


def collide_ray(scene: Scene, ray: Ray) -> list[SceneHit]:
    """Intersect a ray with every object in the scene.

    Args:
        scene: The scene to test against.
        ray: The ray to resolve.

    Returns:
        All collisions, sorted non-decreasing by Euclidean distance from
        ray.origin to the collision point. Equal distances keep scene order.
        Empty if nothing is hit.
    """
    hits = [
        SceneHit(obj=obj, collision=collision, distance=distance(collision.point, ray.origin))
        for obj in scene.objects
        for collision in intersect_sphere(ray, obj.center, obj.radius)
    ]
    hits.sort(key=lambda hit: hit.distance)
    return hits


def nearest_hit(scene: Scene, ray: Ray) -> SceneHit | None:
    """Get the closest collision along the ray, or None on a miss."""
    hits = collide_ray(scene, ray)
    return hits[0] if hits else None
