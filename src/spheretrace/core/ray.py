"""Ray data structure and immutable 3D vector algebra.

This module provides the Vector3 value type and the Ray pairing that every
other part of the tracer is built on. Vectors are frozen dataclasses: each
operation returns a new value and nothing is ever mutated in place.

Example:
    >>> origin = Vector3(0.0, 0.0, 0.0)
    >>> direction = Vector3(0.0, 0.0, 1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> ray_at(ray, 5.0)
    Vector3(x=0.0, y=0.0, z=5.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """An immutable (x, y, z) vector.

    Being normalized is a property the caller asserts, not something the
    type enforces.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    @classmethod
    def random_unit(cls, rng: np.random.Generator) -> Vector3:
        """Draw three uniform samples in [0, 1) and normalize them.

        The result is biased toward the all-positive octant; it is not a
        uniform distribution over the sphere.

        Args:
            rng: The random generator to draw from.

        Returns:
            A unit vector with non-negative components.
        """
        x, y, z = rng.random(3)
        return cls(float(x), float(y), float(z)).normalized()

    def magnitude(self) -> float:
        """Compute the Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vector3:
        """Scale the vector to unit length.

        A zero vector has no direction. Its components come back as NaN,
        the IEEE result of 0/0, rather than raising.

        Returns:
            A unit vector in the same direction.
        """
        mag = self.magnitude()
        if mag == 0.0:
            return Vector3(math.nan, math.nan, math.nan)
        return Vector3(self.x / mag, self.y / mag, self.z / mag)

    def inverse(self) -> Vector3:
        """Negate every component."""
        return Vector3(-self.x, -self.y, -self.z)

    def plus(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def minus(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def times(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def reflect(self, normal: Vector3) -> Vector3:
        """Mirror this vector about a surface normal.

        Args:
            normal: The surface normal (should be normalized).

        Returns:
            self - normal * (2 * dot(self, normal)).
        """
        return self.minus(normal.times(2.0 * self.dot(normal)))

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    __add__ = plus
    __sub__ = minus
    __neg__ = inverse

    def __mul__(self, scalar: float) -> Vector3:
        return self.times(scalar)

    __rmul__ = __mul__


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Should be unit length for
            distance comparisons to be meaningful, but this is not enforced.
    """

    origin: Vector3
    direction: Vector3


def vec3(x: float, y: float, z: float) -> Vector3:
    """Shorthand constructor for Vector3."""
    return Vector3(float(x), float(y), float(z))


def ray_at(ray: Ray, t: float) -> Vector3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + ray.direction * t.
    """
    return ray.origin.plus(ray.direction.times(t))


def make_ray(
    origin: tuple[float, float, float] | Vector3,
    direction: tuple[float, float, float] | Vector3,
) -> Ray:
    """Create a ray from vectors or plain (x, y, z) tuples."""
    if not isinstance(origin, Vector3):
        origin = vec3(*origin)
    if not isinstance(direction, Vector3):
        direction = vec3(*direction)
    return Ray(origin=origin, direction=direction)


def distance(a: Vector3, b: Vector3) -> float:
    """Euclidean distance between two points."""
    return a.minus(b).magnitude()
