"""Ray data structure and the vector helpers used for scattering.

This module provides the Ray dataclass, the reflection/refraction formulas
used by the materials, and the rejection samplers that drive diffuse, fuzzy
and lens sampling.

All random sampling takes an explicit ``numpy.random.Generator`` so that each
render worker can own an independent stream and tests can fix the seed.

Example:
    >>> import numpy as np
    >>> from bandtrace.core.ray import Ray, random_in_unit_sphere
    >>> from bandtrace.core.vec3 import Vec3
    >>> ray = Ray(origin=Vec3(0.0, 0.0, 0.0), direction=Vec3(0.0, 0.0, -1.0))
    >>> ray.point_at(5.0)
    Vec3(x=0.0, y=0.0, z=-5.0)
    >>> rng = np.random.default_rng(42)
    >>> random_in_unit_sphere(rng).squared_length() < 1.0
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from bandtrace.core.vec3 import Vec3

# Upper bound on rejection sampling iterations. Each draw is accepted with
# probability ~0.52 (sphere) or ~0.79 (disk).
MAX_REJECTION_ATTEMPTS = 1000


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Not required to be unit length,
            but must not be the zero vector.
    """

    origin: Vec3
    direction: Vec3

    def point_at(self, t: float) -> Vec3:
        """Compute the point ``origin + t * direction``.

        Args:
            t: The ray parameter. Positive values are in front of the origin.

        Returns:
            The point along the ray at parameter t.
        """
        return self.origin + t * self.direction


# =============================================================================
# Reflection and Refraction
# =============================================================================


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Computes ``v - 2(v . n)n``. The normal should be unit length.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The mirrored direction.
    """
    return incident - 2.0 * incident.dot(normal) * normal


def refract(incident: Vec3, normal: Vec3, ni_over_nt: float) -> Vec3 | None:
    """Refract an incident vector through a surface using Snell's law.

    The incident direction is normalized first. The normal must face the
    incoming ray (``incident . normal < 0``).

    Args:
        incident: The incoming direction.
        normal: The unit surface normal on the incident side.
        ni_over_nt: Ratio of refractive indices (incident / transmitted).

    Returns:
        The refracted direction, or None on total internal reflection.
    """
    unit = incident.normalized()
    dt = unit.dot(normal)
    discriminant = 1.0 - ni_over_nt * ni_over_nt * (1.0 - dt * dt)
    if discriminant > 0.0:
        return ni_over_nt * (unit - normal * dt) - normal * math.sqrt(discriminant)
    return None


def schlick(cosine: float, refractive_index: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between the incident direction and normal.
        refractive_index: Refractive index of the material.

    Returns:
        The approximate reflectance in [0, 1].
    """
    r0 = ((1.0 - refractive_index) / (1.0 + refractive_index)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling over the cube [-1, 1]^3.

    Args:
        rng: The random generator to draw from.

    Returns:
        A random point with squared length < 1.

    Raises:
        RuntimeError: If no point is accepted within MAX_REJECTION_ATTEMPTS.
    """
    for _ in range(MAX_REJECTION_ATTEMPTS):
        p = Vec3(
            2.0 * rng.random() - 1.0,
            2.0 * rng.random() - 1.0,
            2.0 * rng.random() - 1.0,
        )
        if p.squared_length() < 1.0:
            return p
    raise RuntimeError(
        f"Unit sphere sampling did not converge in {MAX_REJECTION_ATTEMPTS} attempts"
    )


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used for thin-lens depth of field.

    Args:
        rng: The random generator to draw from.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.

    Raises:
        RuntimeError: If no point is accepted within MAX_REJECTION_ATTEMPTS.
    """
    for _ in range(MAX_REJECTION_ATTEMPTS):
        p = Vec3(2.0 * rng.random() - 1.0, 2.0 * rng.random() - 1.0, 0.0)
        if p.squared_length() < 1.0:
            return p
    raise RuntimeError(
        f"Unit disk sampling did not converge in {MAX_REJECTION_ATTEMPTS} attempts"
    )
