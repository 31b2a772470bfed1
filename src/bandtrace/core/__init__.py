"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec3: Immutable 3D vector / RGB color value type
    ray: Ray data structure, reflection/refraction and random sampling
    integrator: Recursive radiance estimator and per-pixel sampling
    renderer: Band-partitioned multi-threaded renderer

The core module handles the rendering equation integration, implementing
depth-limited Monte Carlo path tracing with jittered anti-aliasing and
square-root gamma correction.
"""

from .ray import (
    MAX_REJECTION_ATTEMPTS,
    Ray,
    random_in_unit_disk,
    random_in_unit_sphere,
    reflect,
    refract,
    schlick,
)
from .vec3 import Vec3

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from bandtrace.core.integrator or bandtrace.core.renderer.

__all__ = [
    "Vec3",
    "Ray",
    "reflect",
    "refract",
    "schlick",
    "random_in_unit_sphere",
    "random_in_unit_disk",
    "MAX_REJECTION_ATTEMPTS",
]
