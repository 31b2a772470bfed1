"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

which expands to the quadratic a*t^2 + b*t + c = 0 with:
    a = dot(direction, direction)
    b = 2 * dot(oc, direction)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The smaller root is tried first so the nearest intersection along the ray
wins without comparing both roots.

Example:
    >>> from bandtrace.core.ray import Ray
    >>> from bandtrace.core.vec3 import Vec3
    >>> from bandtrace.geometry.sphere import Sphere
    >>> from bandtrace.materials.lambertian import Lambertian
    >>> sphere = Sphere(Vec3(0.0, 0.0, -1.0), 0.5, Lambertian(Vec3(0.8, 0.3, 0.3)))
    >>> rec = sphere.hit(Ray(Vec3.zero(), Vec3(0.0, 0.0, -1.0)), 0.001, 1000.0)
    >>> rec.t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from bandtrace.core.ray import Ray
from bandtrace.core.vec3 import Vec3
from bandtrace.geometry.hittable import Hittable, HitRecord
from bandtrace.materials.material import Material


@dataclass(frozen=True)
class Sphere(Hittable):
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere. Must be positive.
        material: The material shading every point of the sphere.

    Raises:
        ValueError: If radius is not positive.
    """

    center: Vec3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for ray-sphere intersection.

        Args:
            ray: The ray to test. Its direction need not be normalized.
            t_min: Exclusive lower bound (avoids self-intersection).
            t_max: Exclusive upper bound (the closest hit found so far).

        Returns:
            A HitRecord for the nearest root inside (t_min, t_max), or None.
        """
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius

        discriminant = b * b - 4.0 * a * c
        if discriminant <= 0.0:
            # Tangent rays count as misses
            return None

        sqrt_d = math.sqrt(discriminant)
        for t in ((-b - sqrt_d) / (2.0 * a), (-b + sqrt_d) / (2.0 * a)):
            if t_min < t < t_max:
                p = ray.point_at(t)
                return HitRecord(
                    t=t,
                    p=p,
                    normal=(p - self.center) / self.radius,
                    material=self.material,
                )
        return None
