"""Metal (specular reflective) material implementation.

This module implements a metal surface, which models specular reflection with
optional fuzziness. Perfect metals (fuzz=0) produce mirror-like reflections,
while fuzzier metals perturb the reflected ray by a random offset inside a
sphere of radius ``fuzz``.

The reflection formula is:
    R = I - 2(I . N)N

where I is the normalized incident direction and N is the surface normal.

Fuzzy reflections that end up pointing into the surface are absorbed.

Example:
    >>> from bandtrace.core.vec3 import Vec3
    >>> from bandtrace.materials.metal import Metal
    >>> Metal(albedo=Vec3(0.8, 0.8, 0.8), fuzz=3.0).fuzz
    1.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from bandtrace.core.ray import Ray, random_in_unit_sphere, reflect
from bandtrace.core.vec3 import Vec3
from bandtrace.materials.material import Material, ScatterRecord

if TYPE_CHECKING:
    from bandtrace.geometry.hittable import HitRecord


@dataclass(frozen=True)
class Metal(Material):
    """Metal (specular reflective) material properties.

    Attributes:
        albedo: The reflective color tinting reflected light.
        fuzz: The reflection roughness, clamped into [0, 1] at construction.
            0 = perfect mirror, 1 = maximum fuzziness.

    Raises:
        ValueError: If fuzz is NaN.
    """

    albedo: Vec3
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        fuzz = float(self.fuzz)
        if math.isnan(fuzz):
            raise ValueError("Metal fuzz must be a number, got NaN")
        object.__setattr__(self, "fuzz", min(max(fuzz, 0.0), 1.0))

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterRecord | None:
        """Reflect the incoming ray, perturbed by the fuzz offset.

        Args:
            ray_in: The incoming ray.
            rec: The hit record.
            rng: The random generator of the calling worker.

        Returns:
            The reflected ray with attenuation equal to the albedo, or None if
            the perturbed direction points into the surface.
        """
        reflected = reflect(ray_in.direction.normalized(), rec.normal)
        scattered = Ray(rec.p, reflected + self.fuzz * random_in_unit_sphere(rng))
        if scattered.direction.dot(rec.normal) > 0.0:
            return ScatterRecord(scattered=scattered, attenuation=self.albedo)
        return None
