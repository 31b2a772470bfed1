"""Recursive path tracing integrator for Monte Carlo light transport.

This module turns rays into radiance estimates. A ray is intersected with
the scene, scattered by the material it hits, and followed recursively until
it escapes to the sky, is absorbed, or reaches the depth limit.

Key features:
    - Material dispatch through Material.scatter()
    - Sky gradient background for escaped rays
    - Hard depth cutoff (paths longer than max_depth contribute black,
      a known source of bias)
    - Jittered per-pixel sampling for anti-aliasing
    - Square-root gamma correction and clamped 8-bit conversion

Example:
    >>> import numpy as np
    >>> from bandtrace.core.integrator import ray_color
    >>> from bandtrace.core.ray import Ray
    >>> from bandtrace.core.vec3 import Vec3
    >>> from bandtrace.scene.intersection import HittableList
    >>> sky = ray_color(
    ...     Ray(Vec3.zero(), Vec3(0.0, 1.0, 0.0)),
    ...     HittableList(),
    ...     depth=0,
    ...     max_depth=50,
    ...     rng=np.random.default_rng(0),
    ... )
    >>> sky
    Vec3(x=0.5, y=0.7, z=1.0)
"""

from __future__ import annotations

import math

import numpy as np

from bandtrace.camera.thin_lens import Camera
from bandtrace.core.ray import Ray
from bandtrace.core.vec3 import Vec3
from bandtrace.geometry.hittable import Hittable

# =============================================================================
# Rendering Constants
# =============================================================================

# Default maximum ray bounces (path length)
MAX_DEPTH = 50

# t_min and t_max for ray intersection; t_min > 0 avoids shadow acne
T_MIN = 0.001
T_MAX = math.inf

# Sky gradient endpoints
SKY_WHITE = Vec3(1.0, 1.0, 1.0)
SKY_BLUE = Vec3(0.5, 0.7, 1.0)

# Scale applied to gamma-corrected [0, 1] values before narrowing to bytes
COLOR_SCALE = 255.99


# =============================================================================
# Radiance Estimation
# =============================================================================


def background(ray: Ray) -> Vec3:
    """Sky color seen by a ray that escapes the scene.

    Linearly blends white (looking down) into sky blue (looking up) based
    on the vertical component of the normalized ray direction.

    Args:
        ray: The escaping ray.

    Returns:
        The background radiance.
    """
    t = 0.5 * (ray.direction.normalized().y + 1.0)
    return (1.0 - t) * SKY_WHITE + t * SKY_BLUE


def ray_color(
    ray: Ray,
    world: Hittable,
    depth: int,
    max_depth: int,
    rng: np.random.Generator,
) -> Vec3:
    """Estimate the radiance carried back along a ray.

    Args:
        ray: The ray to trace.
        world: The scene to intersect.
        depth: The number of bounces already taken by this path.
        max_depth: Hits at this depth or deeper contribute black.
        rng: The random generator of the calling worker.

    Returns:
        The estimated radiance (RGB). Components are never negative for
        well-formed scenes.
    """
    rec = world.hit(ray, T_MIN, T_MAX)
    if rec is None:
        return background(ray)

    if depth >= max_depth:
        return Vec3.zero()

    scatter = rec.material.scatter(ray, rec, rng)
    if scatter is None:
        # Ray was absorbed
        return Vec3.zero()

    return scatter.attenuation * ray_color(
        scatter.scattered, world, depth + 1, max_depth, rng
    )


def sample_pixel(
    i: int,
    j: int,
    width: int,
    height: int,
    world: Hittable,
    camera: Camera,
    samples: int,
    max_depth: int,
    rng: np.random.Generator,
) -> Vec3:
    """Average ``samples`` jittered primary rays through pixel (i, j).

    Each sample draws its own sub-pixel offset and its own lens sample.

    Args:
        i: Pixel column (0 = left).
        j: Pixel row in image space (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        world: The scene to intersect.
        camera: The camera generating primary rays.
        samples: Number of samples per pixel (positive).
        max_depth: Maximum bounce depth.
        rng: The random generator of the calling worker.

    Returns:
        The mean linear radiance of the pixel.
    """
    total = Vec3.zero()
    for _ in range(samples):
        s = (i + rng.random()) / width
        t = (j + rng.random()) / height
        total = total + ray_color(camera.get_ray(s, t, rng), world, 0, max_depth, rng)
    return total / samples


# =============================================================================
# Color Conversion
# =============================================================================


def _sanitize(component: float) -> float:
    # NaN and negative values (numerical errors) become black, +inf saturates
    if math.isnan(component) or component < 0.0:
        return 0.0
    if math.isinf(component):
        return 1.0
    return component


def gamma_correct(color: Vec3) -> Vec3:
    """Apply gamma 2 correction (square root per channel).

    NaN and negative components are treated as zero and +inf as one.
    """
    return Vec3(
        math.sqrt(_sanitize(color.r)),
        math.sqrt(_sanitize(color.g)),
        math.sqrt(_sanitize(color.b)),
    )


def to_rgb8(color: Vec3) -> tuple[int, int, int]:
    """Convert a linear color to gamma-corrected 8-bit channel values.

    Values are clamped to [0, 255] before narrowing so that radiance above 1
    saturates instead of wrapping around.

    Args:
        color: Linear radiance (RGB).

    Returns:
        Tuple of (R, G, B) integers in [0, 255].
    """
    corrected = gamma_correct(color) * COLOR_SCALE
    return (
        min(int(corrected.r), 255),
        min(int(corrected.g), 255),
        min(int(corrected.b), 255),
    )
