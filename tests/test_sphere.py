"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Ray tangent to sphere
- Interval bounds excluding hits
"""

import math

import pytest

from bandtrace.core.ray import Ray
from bandtrace.core.vec3 import Vec3
from bandtrace.geometry.sphere import Sphere


class TestSphereBasics:
    """Tests for Sphere dataclass and basic operations."""

    def test_make_sphere(self, gray):
        """Test that fields are stored as given."""
        sphere = Sphere(Vec3(1.0, 2.0, 3.0), 0.5, gray)
        assert sphere.center == Vec3(1.0, 2.0, 3.0)
        assert sphere.radius == 0.5
        assert sphere.material is gray

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_raises(self, gray, radius):
        """Test that degenerate spheres are rejected at construction."""
        with pytest.raises(ValueError, match="radius"):
            Sphere(Vec3.zero(), radius, gray)


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_direct_hit(self, gray):
        """Test ray hitting sphere head-on from outside."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, 0.001, 1000.0)

        assert rec is not None
        assert math.isclose(rec.t, 4.0)
        assert rec.p == Vec3(0.0, 0.0, 1.0)
        assert rec.normal == Vec3(0.0, 0.0, 1.0)
        assert rec.material is gray

    def test_hit_is_deterministic(self, gray):
        """Test the documented single-sphere example: hit at t = 0.5."""
        sphere = Sphere(Vec3(0.0, 0.0, -1.0), 0.5, gray)
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        first = sphere.hit(ray, 0.001, math.inf)
        second = sphere.hit(ray, 0.001, math.inf)

        assert first == second
        assert math.isclose(first.t, 0.5)
        assert first.normal == Vec3(0.0, 0.0, 1.0)

    def test_unnormalized_direction(self, gray):
        """Test that t scales with the direction length."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -2.0))
        rec = sphere.hit(ray, 0.001, 1000.0)
        assert rec is not None
        assert math.isclose(rec.t, 2.0)

    def test_miss_sphere(self, gray):
        """Test ray that passes beside the sphere."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 2.0, 5.0), Vec3(0.0, 0.0, -1.0))
        assert sphere.hit(ray, 0.001, 1000.0) is None

    def test_ray_pointing_away(self, gray):
        """Test that a sphere behind the ray origin is not hit."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, 1.0))
        assert sphere.hit(ray, 0.001, 1000.0) is None

    def test_ray_from_inside_hits_far_side(self, gray):
        """Test that a ray starting inside uses the larger root."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, 0.001, 1000.0)

        assert rec is not None
        assert math.isclose(rec.t, 1.0)
        # Outward normal, not flipped toward the ray
        assert rec.normal == Vec3(0.0, 0.0, -1.0)
        assert rec.normal.dot(ray.direction) > 0.0

    def test_tangent_ray_is_a_miss(self, gray):
        """Test that a zero discriminant does not count as a hit."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 1.0, 5.0), Vec3(0.0, 0.0, -1.0))
        assert sphere.hit(ray, 0.001, 1000.0) is None

    def test_normal_is_unit_length(self, gray):
        """Test that the normal has length 1 for off-axis hits."""
        sphere = Sphere(Vec3(1.0, -2.0, 0.5), 2.5, gray)
        ray = Ray(Vec3(0.0, 0.0, 10.0), Vec3(0.1, -0.2, -1.0))
        rec = sphere.hit(ray, 0.001, 1000.0)
        assert rec is not None
        assert math.isclose(rec.normal.length(), 1.0)


class TestSphereBounds:
    """Tests for the open (t_min, t_max) interval."""

    def test_hit_beyond_t_max_is_excluded(self, gray):
        """Test that both roots beyond t_max give no hit."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
        assert sphere.hit(ray, 0.001, 3.0) is None

    def test_near_root_before_t_min_falls_back_to_far_root(self, gray):
        """Test that the far root is used when the near root is below t_min."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
        rec = sphere.hit(ray, 4.5, 1000.0)
        assert rec is not None
        assert math.isclose(rec.t, 6.0)

    def test_root_equal_to_bound_is_excluded(self, gray):
        """Test that the interval is open at t_max."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
        assert sphere.hit(ray, 0.001, 4.0) is None
