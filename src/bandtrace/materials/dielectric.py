"""Dielectric (glass/water) material implementation.

This module implements transparent materials like glass and water with
refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

Whether a ray enters or leaves the medium is read from the sign of
``direction . normal`` against the outward normal of the hit record. When
refraction is possible the material randomly chooses between reflection and
refraction with the Schlick reflectance as the reflection probability, one
uniform draw per scatter event.

Example:
    >>> from bandtrace.materials.dielectric import Dielectric
    >>> glass = Dielectric(refractive_index=1.5)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from bandtrace.core.ray import Ray, reflect, refract, schlick
from bandtrace.core.vec3 import Vec3
from bandtrace.materials.material import Material, ScatterRecord

if TYPE_CHECKING:
    from bandtrace.geometry.hittable import HitRecord

# Common refractive indices
IOR_AIR = 1.0
IOR_WATER = 1.33
IOR_GLASS = 1.5
IOR_DIAMOND = 2.4


@dataclass(frozen=True)
class Dielectric(Material):
    """Dielectric (glass/water) material properties.

    Attributes:
        refractive_index: Index of refraction relative to the surrounding
            medium. Must be positive, typically greater than 1.

    Raises:
        ValueError: If refractive_index is not positive.
    """

    refractive_index: float = IOR_GLASS

    def __post_init__(self) -> None:
        if not self.refractive_index > 0.0:
            raise ValueError(
                f"Refractive index must be positive, got {self.refractive_index}"
            )

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterRecord:
        """Reflect or refract the incoming ray. Dielectrics never absorb.

        Args:
            ray_in: The incoming ray.
            rec: The hit record (outward normal).
            rng: The random generator of the calling worker.

        Returns:
            The reflected or refracted ray with white attenuation.
        """
        direction = ray_in.direction
        ior = self.refractive_index
        attenuation = Vec3.one()
        reflected = reflect(direction, rec.normal)

        d_dot_n = direction.dot(rec.normal)
        if d_dot_n > 0.0:
            # Leaving the medium
            outward_normal = -rec.normal
            ni_over_nt = ior
            cosine = ior * d_dot_n / direction.length()
        else:
            outward_normal = rec.normal
            ni_over_nt = 1.0 / ior
            cosine = -d_dot_n / direction.length()

        refracted = refract(direction, outward_normal, ni_over_nt)
        if refracted is None:
            # Total internal reflection
            return ScatterRecord(scattered=Ray(rec.p, reflected), attenuation=attenuation)

        if rng.random() < schlick(cosine, ior):
            return ScatterRecord(scattered=Ray(rec.p, reflected), attenuation=attenuation)
        return ScatterRecord(scattered=Ray(rec.p, refracted), attenuation=attenuation)
