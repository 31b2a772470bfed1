"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: seeded random
generators and small scenes that render quickly.
"""

import numpy as np
import pytest

from bandtrace.core.vec3 import Vec3
from bandtrace.geometry.sphere import Sphere
from bandtrace.materials.dielectric import Dielectric
from bandtrace.materials.lambertian import Lambertian
from bandtrace.materials.metal import Metal
from bandtrace.scene.intersection import HittableList


@pytest.fixture
def rng():
    """A fixed-seed generator so that sampling tests are deterministic."""
    return np.random.default_rng(42)


@pytest.fixture
def gray():
    """A mid-gray diffuse material."""
    return Lambertian(albedo=Vec3(0.5, 0.5, 0.5))


@pytest.fixture
def empty_world():
    """A scene with no objects; every ray sees the sky."""
    return HittableList()


@pytest.fixture
def two_sphere_world():
    """A diffuse sphere resting on a large diffuse ground sphere."""
    return HittableList(
        [
            Sphere(Vec3(0.0, 0.0, -1.0), 0.5, Lambertian(Vec3(0.8, 0.3, 0.3))),
            Sphere(Vec3(0.0, -100.5, -1.0), 100.0, Lambertian(Vec3(0.8, 0.8, 0.0))),
        ]
    )


@pytest.fixture
def mixed_world():
    """Diffuse, metal and glass spheres on a ground sphere."""
    return HittableList(
        [
            Sphere(Vec3(0.0, 0.0, -1.0), 0.5, Lambertian(Vec3(0.1, 0.2, 0.5))),
            Sphere(Vec3(0.0, -100.5, -1.0), 100.0, Lambertian(Vec3(0.8, 0.8, 0.0))),
            Sphere(Vec3(1.0, 0.0, -1.0), 0.5, Metal(Vec3(0.8, 0.6, 0.2), 0.3)),
            Sphere(Vec3(-1.0, 0.0, -1.0), 0.5, Dielectric(1.5)),
        ]
    )
