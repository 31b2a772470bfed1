"""Unit tests for the Lambertian material module.

Tests cover:
- Scattered rays start at the hit point and leave the surface
- Attenuation equals albedo
- Lambertian surfaces never absorb
- Scatter depends only on the generator state
"""

import numpy as np

from bandtrace.core.ray import Ray
from bandtrace.core.vec3 import Vec3
from bandtrace.geometry.hittable import HitRecord
from bandtrace.materials.lambertian import Lambertian


def _floor_hit(material):
    return HitRecord(
        t=1.0,
        p=Vec3(0.0, 0.0, 0.0),
        normal=Vec3(0.0, 1.0, 0.0),
        material=material,
    )


class TestLambertianScatter:
    """Tests for diffuse scattering."""

    def test_scatter_origin_and_attenuation(self, rng):
        """Test that the ray starts at p and is tinted by the albedo."""
        material = Lambertian(Vec3(0.8, 0.3, 0.3))
        rec = _floor_hit(material)
        ray_in = Ray(Vec3(0.0, 1.0, 1.0), Vec3(0.0, -1.0, -1.0))

        result = material.scatter(ray_in, rec, rng)

        assert result is not None
        assert result.scattered.origin == rec.p
        assert result.attenuation == Vec3(0.8, 0.3, 0.3)

    def test_scatter_never_absorbs(self, rng):
        """Test that every scatter event produces a ray."""
        material = Lambertian(Vec3(0.5, 0.5, 0.5))
        rec = _floor_hit(material)
        ray_in = Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0))
        for _ in range(500):
            assert material.scatter(ray_in, rec, rng) is not None

    def test_scattered_directions_leave_the_surface(self, rng):
        """Test that directions stay in the normal's hemisphere.

        The target lies in the unit sphere centered at p + normal, so the
        direction's normal component is 1 + a value in (-1, 1).
        """
        material = Lambertian(Vec3(0.5, 0.5, 0.5))
        rec = _floor_hit(material)
        ray_in = Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0))
        for _ in range(500):
            direction = material.scatter(ray_in, rec, rng).scattered.direction
            assert direction.dot(rec.normal) > 0.0
            assert (direction - rec.normal).squared_length() < 1.0 + 1e-9

    def test_scatter_is_reproducible(self):
        """Test that the same seed gives the same scattered ray."""
        material = Lambertian(Vec3(0.5, 0.5, 0.5))
        rec = _floor_hit(material)
        ray_in = Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0))
        a = material.scatter(ray_in, rec, np.random.default_rng(3))
        b = material.scatter(ray_in, rec, np.random.default_rng(3))
        assert a == b
