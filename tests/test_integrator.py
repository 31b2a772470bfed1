"""Tests for the path tracing integrator.

This module tests the core path tracing functionality including:
- Sky background for escaped rays
- Depth cutoff and absorption
- Attenuation along a path
- Jittered per-pixel sampling
- Gamma correction and 8-bit conversion
"""

import math

import numpy as np
import pytest

from bandtrace.camera.thin_lens import Camera
from bandtrace.core.integrator import (
    SKY_BLUE,
    SKY_WHITE,
    background,
    gamma_correct,
    ray_color,
    sample_pixel,
    to_rgb8,
)
from bandtrace.core.ray import Ray
from bandtrace.core.vec3 import Vec3
from bandtrace.geometry.sphere import Sphere
from bandtrace.materials.dielectric import Dielectric
from bandtrace.materials.lambertian import Lambertian
from bandtrace.materials.material import Material, ScatterRecord
from bandtrace.materials.metal import Metal
from bandtrace.scene.intersection import HittableList


class _Absorber(Material):
    def scatter(self, ray_in, rec, rng):
        return None


class _NormalBouncer(Material):
    """Scatters along the outward normal with a fixed attenuation."""

    def __init__(self, attenuation):
        self.attenuation = attenuation

    def scatter(self, ray_in, rec, rng):
        return ScatterRecord(scattered=Ray(rec.p, rec.normal), attenuation=self.attenuation)


def _world_with(material):
    return HittableList([Sphere(Vec3(0.0, 0.0, -1.0), 0.5, material)])


FORWARD = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))


class TestBackground:
    """Test the sky gradient."""

    def test_straight_up_is_sky_blue(self):
        """Test the top of the gradient."""
        assert background(Ray(Vec3.zero(), Vec3(0.0, 3.0, 0.0))) == SKY_BLUE

    def test_straight_down_is_white(self):
        """Test the bottom of the gradient."""
        assert background(Ray(Vec3.zero(), Vec3(0.0, -1.0, 0.0))) == SKY_WHITE

    def test_horizon_is_midway(self):
        """Test the half-way blend at y = 0."""
        color = background(Ray(Vec3.zero(), Vec3(1.0, 0.0, 0.0)))
        assert math.isclose(color.r, 0.75)
        assert math.isclose(color.g, 0.85)
        assert math.isclose(color.b, 1.0)


class TestRayColor:
    """Test recursive radiance estimation."""

    def test_miss_returns_background(self, empty_world, rng):
        """Test that a ray escaping the scene sees the sky."""
        color = ray_color(FORWARD, empty_world, 0, 50, rng)
        assert color == background(FORWARD)

    def test_absorbed_ray_is_black(self, rng):
        """Test that absorption terminates the path with zero radiance."""
        assert ray_color(FORWARD, _world_with(_Absorber()), 0, 50, rng) == Vec3.zero()

    @pytest.mark.parametrize(
        "material",
        [
            _NormalBouncer(Vec3.one()),
            Lambertian(Vec3(0.5, 0.5, 0.5)),
            Metal(Vec3(0.8, 0.8, 0.8), 0.0),
            Dielectric(1.5),
        ],
        ids=["bouncer", "lambertian", "metal", "dielectric"],
    )
    @pytest.mark.parametrize("depth, max_depth", [(0, 0), (5, 5), (7, 5)])
    def test_depth_cutoff_is_black(self, rng, material, depth, max_depth):
        """Test that a hit at or beyond max_depth contributes nothing, whatever the material."""
        world = _world_with(material)
        assert ray_color(FORWARD, world, depth, max_depth, rng) == Vec3.zero()

    def test_depth_cutoff_does_not_apply_to_misses(self, empty_world, rng):
        """Test that escaping rays see the sky even past the depth limit."""
        assert ray_color(FORWARD, empty_world, 10, 5, rng) == background(FORWARD)

    def test_attenuation_multiplies_bounce(self, rng):
        """Test one bounce: attenuation times the sky seen along the normal."""
        world = _world_with(_NormalBouncer(Vec3(0.5, 0.5, 0.5)))
        color = ray_color(FORWARD, world, 0, 50, rng)
        assert math.isclose(color.r, 0.375)
        assert math.isclose(color.g, 0.425)
        assert math.isclose(color.b, 0.5)

    def test_radiance_is_never_negative(self, mixed_world, rng):
        """Test non-negative energy for random rays through a mixed scene."""
        for _ in range(300):
            direction = Vec3(rng.random() - 0.5, rng.random() - 0.5, -1.0)
            color = ray_color(Ray(Vec3(0.0, 0.0, 0.5), direction), mixed_world, 0, 50, rng)
            assert color.r >= 0.0
            assert color.g >= 0.0
            assert color.b >= 0.0


class TestSamplePixel:
    """Test per-pixel jittered sampling."""

    def _camera(self):
        return Camera(
            look_from=Vec3(0.0, 0.0, 0.0),
            look_at=Vec3(0.0, 0.0, -1.0),
            vup=Vec3(0.0, 1.0, 0.0),
            vfov=90.0,
            aspect=2.0,
        )

    def test_empty_scene_pixel_is_sky(self, empty_world, rng):
        """Test that averaged sky samples stay between white and blue."""
        color = sample_pixel(3, 2, 8, 4, empty_world, self._camera(), 16, 50, rng)
        assert 0.5 <= color.r <= 1.0
        assert 0.7 <= color.g <= 1.0
        assert math.isclose(color.b, 1.0)

    def test_sampling_is_reproducible(self, mixed_world):
        """Test that a fixed seed gives a fixed pixel estimate."""
        camera = self._camera()
        a = sample_pixel(10, 5, 20, 10, mixed_world, camera, 8, 50, np.random.default_rng(11))
        b = sample_pixel(10, 5, 20, 10, mixed_world, camera, 8, 50, np.random.default_rng(11))
        assert a == b


class TestColorConversion:
    """Test gamma correction and byte conversion."""

    def test_gamma_is_square_root(self):
        """Test gamma 2 correction."""
        assert gamma_correct(Vec3(0.25, 1.0, 0.0)) == Vec3(0.5, 1.0, 0.0)

    def test_black_and_white(self):
        """Test the endpoints of the byte range."""
        assert to_rgb8(Vec3.zero()) == (0, 0, 0)
        assert to_rgb8(Vec3.one()) == (255, 255, 255)

    def test_mid_gray(self):
        """Test 0.25 linear maps to int(0.5 * 255.99)."""
        assert to_rgb8(Vec3(0.25, 0.25, 0.25)) == (127, 127, 127)

    def test_overbright_values_saturate(self):
        """Test that radiance above 1 clamps to 255 instead of wrapping."""
        assert to_rgb8(Vec3(4.0, 100.0, 1.5)) == (255, 255, 255)

    def test_invalid_values_become_black(self):
        """Test that negative and NaN components map to 0."""
        assert to_rgb8(Vec3(-1.0, math.nan, -math.inf)) == (0, 0, 0)

    def test_infinite_radiance_saturates(self):
        """Test that +inf is treated as overbright rather than invalid."""
        assert to_rgb8(Vec3(math.inf, 1.0, 1.0)) == (255, 255, 255)
        assert to_rgb8(Vec3(math.inf, math.nan, 0.0)) == (255, 0, 0)
