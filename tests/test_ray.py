"""Unit tests for Vector3, Ray and Color.

Tests cover:
- Vector algebra (magnitude, normalize, inverse, add/sub, dot, scale)
- Mirror reflection
- Biased random unit vectors
- Degenerate zero-vector normalization
- Ray construction and evaluation
- Color arithmetic without clamping
"""

import math

import numpy as np
import pytest


class TestVectorAlgebra:
    """Tests for the Vector3 operations."""

    def test_magnitude(self):
        """Test magnitude of a 3-4-12 vector."""
        from src.spheretrace.core.ray import vec3

        assert vec3(3, 4, 12).magnitude() == pytest.approx(13.0)

    def test_normalized_has_unit_length(self):
        """Test that normalized() returns a unit vector in the same direction."""
        from src.spheretrace.core.ray import vec3

        v = vec3(2, -3, 6).normalized()
        assert v.magnitude() == pytest.approx(1.0)
        assert v.x == pytest.approx(2 / 7)
        assert v.y == pytest.approx(-3 / 7)
        assert v.z == pytest.approx(6 / 7)

    def test_normalized_zero_vector_is_nan(self):
        """Test that a zero vector normalizes to NaN instead of raising."""
        from src.spheretrace.core.ray import vec3

        v = vec3(0, 0, 0).normalized()
        assert math.isnan(v.x) and math.isnan(v.y) and math.isnan(v.z)

    def test_inverse(self):
        """Test component-wise negation."""
        from src.spheretrace.core.ray import vec3

        assert vec3(1, -2, 3).inverse() == vec3(-1, 2, -3)
        assert -vec3(1, -2, 3) == vec3(-1, 2, -3)

    def test_plus_minus(self):
        """Test component-wise addition and subtraction."""
        from src.spheretrace.core.ray import vec3

        a = vec3(1, 2, 3)
        b = vec3(4, 5, 6)
        assert a.plus(b) == vec3(5, 7, 9)
        assert b.minus(a) == vec3(3, 3, 3)
        assert a + b == a.plus(b)
        assert b - a == b.minus(a)

    def test_dot(self):
        """Test dot product."""
        from src.spheretrace.core.ray import vec3

        assert vec3(1, 2, 3).dot(vec3(4, -5, 6)) == pytest.approx(12.0)

    def test_times(self):
        """Test scaling by a scalar from either side."""
        from src.spheretrace.core.ray import vec3

        assert vec3(1, -2, 3).times(2.0) == vec3(2, -4, 6)
        assert vec3(1, -2, 3) * 2.0 == vec3(2, -4, 6)
        assert 2.0 * vec3(1, -2, 3) == vec3(2, -4, 6)

    def test_operations_return_new_values(self):
        """Test that vectors are immutable."""
        from dataclasses import FrozenInstanceError

        from src.spheretrace.core.ray import vec3

        v = vec3(1, 2, 3)
        v.plus(vec3(1, 1, 1))
        assert v == vec3(1, 2, 3)
        with pytest.raises(FrozenInstanceError):
            v.x = 5.0


class TestReflect:
    """Tests for mirror reflection."""

    def test_reflect_head_on(self):
        """Test that a ray hitting a mirror head-on comes straight back."""
        from src.spheretrace.core.ray import vec3

        assert vec3(0, 0, 1).reflect(vec3(0, 0, -1)) == vec3(0, 0, -1)

    def test_reflect_at_45_degrees(self):
        """Test reflection off a floor."""
        from src.spheretrace.core.ray import vec3

        r = vec3(1, -1, 0).reflect(vec3(0, 1, 0))
        assert r == vec3(1, 1, 0)

    @pytest.mark.parametrize(
        "v,n",
        [
            ((1.0, 2.0, 3.0), (0.0, 0.0, 1.0)),
            ((-0.3, 0.7, 0.2), (0.0, 1.0, 0.0)),
            ((5.0, -1.0, 2.5), (1.0, 1.0, 1.0)),
        ],
    )
    def test_reflect_is_involutive(self, v, n):
        """Test that reflecting twice through a unit normal restores the vector."""
        from src.spheretrace.core.ray import vec3

        vector = vec3(*v)
        normal = vec3(*n).normalized()
        twice = vector.reflect(normal).reflect(normal)
        assert twice.x == pytest.approx(vector.x)
        assert twice.y == pytest.approx(vector.y)
        assert twice.z == pytest.approx(vector.z)


class TestRandomUnit:
    """Tests for random unit vectors."""

    def test_random_unit_is_normalized(self):
        """Test that random_unit returns unit vectors."""
        from src.spheretrace.core.ray import Vector3

        rng = np.random.default_rng(0)
        for _ in range(50):
            assert Vector3.random_unit(rng).magnitude() == pytest.approx(1.0)

    def test_random_unit_stays_in_positive_octant(self):
        """Test the preserved bias: every component is non-negative."""
        from src.spheretrace.core.ray import Vector3

        rng = np.random.default_rng(1)
        for _ in range(200):
            v = Vector3.random_unit(rng)
            assert v.x >= 0.0 and v.y >= 0.0 and v.z >= 0.0

    def test_random_unit_is_reproducible(self):
        """Test that equal seeds give equal vectors."""
        from src.spheretrace.core.ray import Vector3

        a = Vector3.random_unit(np.random.default_rng(9))
        b = Vector3.random_unit(np.random.default_rng(9))
        assert a == b


class TestRay:
    """Tests for the Ray value type."""

    def test_make_ray_from_tuples(self):
        """Test that make_ray accepts plain tuples."""
        from src.spheretrace.core.ray import Ray, make_ray, vec3

        ray = make_ray((0, 0, 0), (0, 0, 1))
        assert isinstance(ray, Ray)
        assert ray.origin == vec3(0, 0, 0)
        assert ray.direction == vec3(0, 0, 1)

    def test_ray_at(self):
        """Test evaluating a point along the ray."""
        from src.spheretrace.core.ray import make_ray, ray_at, vec3

        ray = make_ray((1, 2, 3), (0, 1, 0))
        assert ray_at(ray, 4.0) == vec3(1, 6, 3)

    def test_distance(self):
        """Test Euclidean distance between points."""
        from src.spheretrace.core.ray import distance, vec3

        assert distance(vec3(1, 1, 1), vec3(4, 5, 1)) == pytest.approx(5.0)


class TestColor:
    """Tests for Color arithmetic."""

    def test_constants(self):
        """Test the named color constants."""
        from src.spheretrace.core.color import BLACK, GREEN, RED, WHITE, Color

        assert BLACK == Color(0, 0, 0)
        assert WHITE == Color(255, 255, 255)
        assert RED == Color(255, 0, 0)
        assert GREEN == Color(0, 255, 0)

    def test_modulated_scales_by_intrinsic(self):
        """Test tinting by an intrinsic color divides by 255."""
        from src.spheretrace.core.color import WHITE, Color

        tinted = WHITE.modulated(Color(255, 127.5, 0))
        assert tinted.r == pytest.approx(255.0)
        assert tinted.g == pytest.approx(127.5)
        assert tinted.b == pytest.approx(0.0)

    def test_arithmetic_is_not_clamped(self):
        """Test that sums above 255 are kept as is."""
        from src.spheretrace.core.color import WHITE

        total = WHITE + WHITE
        assert total.r == pytest.approx(510.0)
        assert total.divided(2) == WHITE
