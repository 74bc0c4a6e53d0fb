"""Sphere primitive with plane-projection ray intersection.

The intersection is not the usual quadratic solve. The ray is projected
onto the plane through the sphere center that faces back along the ray. The
distance from that plane hit to the center then tells whether, and by how
much, the ray passes through the sphere:

    t         = dot(center - origin, -direction) / dot(direction, -direction)
    plane_hit = origin + direction * t
    dist      = |plane_hit - center|
    offset    = sqrt(radius^2 - dist^2)
    points    = plane_hit -/+ direction * offset

The offset is applied in units of the direction vector, so the points only
land on the surface when the direction is unit length.

Example:
    >>> from src.spheretrace.core.ray import make_ray, vec3
    >>> ray = make_ray((0, 0, 0), (0, 0, 1))
    >>> [c.point.z for c in intersect_sphere(ray, vec3(0, 0, 100), 50.0)]
    [50.0, 150.0]
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.spheretrace.core.ray import Ray, Vector3, ray_at

# Below this gap between radius and plane distance the ray is only grazing
# the sphere.
EPSILON = 0.0008


@dataclass(frozen=True)
class Collision:
    """A point where a ray crosses a sphere surface.

    Attributes:
        point: The 3D intersection point.
        normal: The unit surface normal, pointing outward from the center.
    """

    point: Vector3
    normal: Vector3


def _plane_parameter(ray: Ray, center: Vector3) -> float:
    """Ray parameter of the plane through center facing back along the ray."""
    reverse = ray.direction.inverse()
    denominator = ray.direction.dot(reverse)
    if denominator == 0.0:
        # Zero-length direction: 0/0.
        return math.nan
    return center.minus(ray.origin).dot(reverse) / denominator


def intersect_sphere(ray: Ray, center: Vector3, radius: float) -> list[Collision]:
    """Intersect a ray with a sphere.

    Args:
        ray: The ray to test. Its direction should be unit length and must
            not be zero; a zero direction is not checked and yields NaN
            points.
        center: The center of the sphere.
        radius: The radius of the sphere.

    Returns:
        An empty list on a miss, when the sphere center lies behind the ray
        origin, or on a glancing hit (radius - dist < EPSILON). Otherwise
        the near and far collisions, in that order along the ray.
    """
    t = _plane_parameter(ray, center)
    if t < 0.0:
        return []

    plane_hit = ray_at(ray, t)
    dist = plane_hit.minus(center).magnitude()
    if dist > radius:
        return []

    if radius - dist < EPSILON:
        # TODO: decide whether a glancing hit should report the single
        # tangent point at plane_hit instead of nothing.
        return []

    offset = math.sqrt(radius * radius - dist * dist)
    step = ray.direction.times(offset)
    points = (plane_hit.minus(step), plane_hit.plus(step))
    return [Collision(point=p, normal=p.minus(center).normalized()) for p in points]
