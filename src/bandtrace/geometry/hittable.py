"""Intersection interface shared by primitives and scene collections."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bandtrace.core.ray import Ray
from bandtrace.core.vec3 import Vec3

if TYPE_CHECKING:
    from bandtrace.materials.material import Material


@dataclass(frozen=True, slots=True)
class HitRecord:
    """Record of a successful ray-object intersection.

    A hit record only lives for the duration of one intersection query and
    the scatter call that consumes it.

    Attributes:
        t: The ray parameter of the hit. The only ordering key between hits.
        p: The hit point, ``ray.point_at(t)``.
        normal: The unit outward geometric normal at ``p``. It is not flipped
            toward the ray; materials inspect ``ray.direction . normal`` to
            tell entering from exiting.
        material: The material of the object that was hit.
    """

    t: float
    p: Vec3
    normal: Vec3
    material: Material


class Hittable(ABC):
    """Anything a ray can be intersected with."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Find the nearest intersection with ``t`` strictly inside (t_min, t_max).

        Args:
            ray: The ray to test.
            t_min: Exclusive lower bound on the ray parameter.
            t_max: Exclusive upper bound on the ray parameter.

        Returns:
            The hit record of the nearest valid intersection, or None.
        """
