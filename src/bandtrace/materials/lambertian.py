"""Lambertian (ideal diffuse) material implementation.

A Lambertian surface scatters light toward a random point inside the unit
sphere tangent to the hit point along the normal. Directions close to the
normal are favoured, which approximates cosine-weighted diffuse reflection
without building a local frame.

The surface never absorbs a ray outright; its albedo tints every bounce.

Example:
    >>> import numpy as np
    >>> from bandtrace.core.vec3 import Vec3
    >>> from bandtrace.materials.lambertian import Lambertian
    >>> red = Lambertian(albedo=Vec3(0.8, 0.3, 0.3))
    >>> # record = red.scatter(ray_in, hit_record, np.random.default_rng())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from bandtrace.core.ray import Ray, random_in_unit_sphere
from bandtrace.core.vec3 import Vec3
from bandtrace.materials.material import Material, ScatterRecord

if TYPE_CHECKING:
    from bandtrace.geometry.hittable import HitRecord


@dataclass(frozen=True)
class Lambertian(Material):
    """Lambertian (diffuse) material properties.

    Attributes:
        albedo: The diffuse reflectance color. Components are expected in
            [0, 1] but this is not enforced.
    """

    albedo: Vec3

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterRecord:
        """Scatter toward ``p + normal + random_in_unit_sphere()``.

        Args:
            ray_in: The incoming ray (unused, diffuse scattering ignores it).
            rec: The hit record.
            rng: The random generator of the calling worker.

        Returns:
            The scattered ray with attenuation equal to the albedo.
        """
        target = rec.p + rec.normal + random_in_unit_sphere(rng)
        return ScatterRecord(
            scattered=Ray(rec.p, target - rec.p),
            attenuation=self.albedo,
        )
