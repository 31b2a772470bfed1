"""Thin-lens camera model for perspective projection with depth of field.

This module implements a camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (look_from, look_at, vup)
- Vertical field of view in degrees
- Arbitrary aspect ratios
- A finite lens aperture focused at a given distance

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from look_at toward look_from (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Ray origins are sampled across a disk of radius ``aperture / 2`` spanned by
u and v. All rays through a given image-plane point converge on the focal
plane at ``focus_dist``, so objects at that distance stay sharp and others
blur in proportion to the aperture. With ``aperture = 0`` the camera is a
pinhole.

Example:
    >>> import numpy as np
    >>> from bandtrace.camera.thin_lens import Camera
    >>> from bandtrace.core.vec3 import Vec3
    >>>
    >>> camera = Camera(
    ...     look_from=Vec3(0.0, 0.0, 0.0),
    ...     look_at=Vec3(0.0, 0.0, -1.0),
    ...     vup=Vec3(0.0, 1.0, 0.0),
    ...     vfov=90.0,
    ...     aspect=2.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5, np.random.default_rng(0))
    >>> ray.direction.z
    -1.0
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from bandtrace.core.ray import Ray, random_in_unit_disk
from bandtrace.core.vec3 import Vec3

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass(frozen=True)
class CameraConfig:
    """Serializable configuration for a thin-lens camera.

    Attributes:
        look_from: Camera position in world space (x, y, z).
        look_at: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aperture: Lens diameter. 0 gives a pinhole camera.
        focus_dist: Distance from look_from to the plane in focus. When None,
            the distance from look_from to look_at is used.
    """

    look_from: tuple[float, float, float] = (3.0, 3.0, 2.0)
    look_at: tuple[float, float, float] = (0.0, 0.0, -1.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 20.0
    aperture: float = 0.2
    focus_dist: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a JSON-compatible dictionary."""
        data = asdict(self)
        for key in ("look_from", "look_at", "vup"):
            data[key] = list(data[key])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CameraConfig:
        """Build a configuration from a dictionary, using defaults for missing keys."""
        defaults = cls()
        return cls(
            look_from=tuple(Vec3.from_iterable(data.get("look_from", defaults.look_from))),
            look_at=tuple(Vec3.from_iterable(data.get("look_at", defaults.look_at))),
            vup=tuple(Vec3.from_iterable(data.get("vup", defaults.vup))),
            vfov=float(data.get("vfov", defaults.vfov)),
            aperture=float(data.get("aperture", defaults.aperture)),
            focus_dist=(
                float(data["focus_dist"]) if data.get("focus_dist") is not None else None
            ),
        )

    def build(self, aspect: float) -> Camera:
        """Create the camera for an image of the given aspect ratio.

        Args:
            aspect: Image width divided by height.

        Returns:
            A fully initialized Camera.
        """
        look_from = Vec3.from_iterable(self.look_from)
        look_at = Vec3.from_iterable(self.look_at)
        focus_dist = self.focus_dist
        if focus_dist is None:
            focus_dist = (look_from - look_at).length()
        return Camera(
            look_from=look_from,
            look_at=look_at,
            vup=Vec3.from_iterable(self.vup),
            vfov=self.vfov,
            aspect=aspect,
            aperture=self.aperture,
            focus_dist=focus_dist,
        )


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """A thin-lens perspective camera.

    All derived vectors are computed once at construction and never change,
    so a single camera can be shared by every render worker.

    Attributes:
        look_from: Camera position (center of the lens).
        u: Right direction in world space.
        v: Up direction in world space.
        w: Backward direction (opposite view direction).
        lower_left_corner: Lower-left corner of the focal-plane viewport.
        horizontal: Full width of the viewport.
        vertical: Full height of the viewport.
        lens_radius: Half the aperture.
    """

    def __init__(
        self,
        look_from: Vec3,
        look_at: Vec3,
        vup: Vec3,
        vfov: float,
        aspect: float,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
    ) -> None:
        """Compute the camera basis and viewport.

        Args:
            look_from: Camera position.
            look_at: Point the camera is aimed at.
            vup: Up direction used to orient the camera.
            vfov: Vertical field of view in degrees, in (0, 180).
            aspect: Image width divided by height.
            aperture: Lens diameter, non-negative.
            focus_dist: Distance to the plane in focus, positive.

        Raises:
            ValueError: If any parameter is out of range, look_from equals
                look_at, or vup is parallel to the view direction.
        """
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"Vertical FOV must be in (0, 180) degrees, got {vfov}")
        if not aspect > 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {aspect}")
        if not aperture >= 0.0:
            raise ValueError(f"Aperture must be non-negative, got {aperture}")
        if not focus_dist > 0.0:
            raise ValueError(f"Focus distance must be positive, got {focus_dist}")

        self.look_from = look_from
        self.look_at = look_at
        self.vup = vup
        self.vfov = vfov
        self.aspect = aspect
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.lens_radius = aperture / 2.0

        theta = math.radians(vfov)
        half_height = math.tan(theta / 2.0)
        half_width = half_height * aspect

        try:
            self.w = (look_from - look_at).normalized()
        except ValueError:
            raise ValueError("look_from and look_at must be distinct points") from None
        try:
            self.u = vup.cross(self.w).normalized()
        except ValueError:
            raise ValueError("vup must not be parallel to the view direction") from None
        self.v = self.w.cross(self.u)

        self.lower_left_corner = look_from - focus_dist * (
            half_width * self.u + half_height * self.v + self.w
        )
        self.horizontal = 2.0 * half_width * focus_dist * self.u
        self.vertical = 2.0 * half_height * focus_dist * self.v

    def get_ray(self, s: float, t: float, rng: np.random.Generator) -> Ray:
        """Generate a primary ray through normalized image coordinates (s, t).

        The coordinates are normalized:
        - s = 0: left edge, s = 1: right edge
        - t = 0: bottom edge, t = 1: top edge

        Values slightly outside [0, 1] are allowed (sub-pixel jitter).

        Args:
            s: Horizontal image-plane coordinate.
            t: Vertical image-plane coordinate.
            rng: The random generator used for the lens sample.

        Returns:
            A ray from a point on the lens toward the focal-plane point.
        """
        rd = self.lens_radius * random_in_unit_disk(rng)
        offset = self.u * rd.x + self.v * rd.y
        origin = self.look_from + offset
        direction = (
            self.lower_left_corner + s * self.horizontal + t * self.vertical - origin
        )
        return Ray(origin, direction)

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get the derived camera vectors for debugging.

        Returns:
            Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
        """
        return {
            "origin": self.look_from.to_tuple(),
            "u": self.u.to_tuple(),
            "v": self.v.to_tuple(),
            "w": self.w.to_tuple(),
            "horizontal": self.horizontal.to_tuple(),
            "vertical": self.vertical.to_tuple(),
            "lower_left": self.lower_left_corner.to_tuple(),
        }

    def __repr__(self) -> str:
        return (
            f"Camera(look_from={self.look_from}, look_at={self.look_at}, "
            f"vfov={self.vfov}, aspect={self.aspect}, aperture={self.aperture}, "
            f"focus_dist={self.focus_dist})"
        )
