"""Material interface and the scatter result it produces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from bandtrace.core.ray import Ray
from bandtrace.core.vec3 import Vec3

if TYPE_CHECKING:
    from bandtrace.geometry.hittable import HitRecord


@dataclass(frozen=True, slots=True)
class ScatterRecord:
    """The outcome of a scatter event that was not absorbed.

    Attributes:
        scattered: The outgoing ray, starting at the hit point.
        attenuation: Component-wise color factor applied to the light
            carried back along ``scattered``.
    """

    scattered: Ray
    attenuation: Vec3


class Material(ABC):
    """A surface response model.

    Subclasses decide how an incoming ray leaves a surface: reflected,
    refracted or absorbed.
    """

    @abstractmethod
    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterRecord | None:
        """Scatter an incoming ray at a hit point.

        Args:
            ray_in: The ray that produced the hit.
            rec: The hit record (point, outward normal, material).
            rng: The random generator of the calling worker.

        Returns:
            The scattered ray and its attenuation, or None if the ray is
            absorbed.
        """
