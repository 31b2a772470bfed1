"""Materials module for surface scattering models.

This module implements the material models used by the path tracer:

Components:
    material: Base Material interface and the ScatterRecord result
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material provides:
    - scatter(): Produce an outgoing ray and attenuation, or None if the
      incoming ray is absorbed

Every material draws its randomness from the generator passed to scatter(),
so a render worker's output depends only on its own stream.
"""

from .dielectric import IOR_AIR, IOR_DIAMOND, IOR_GLASS, IOR_WATER, Dielectric
from .lambertian import Lambertian
from .material import Material, ScatterRecord
from .metal import Metal

__all__ = [
    "Material",
    "ScatterRecord",
    "Lambertian",
    "Metal",
    "Dielectric",
    "IOR_AIR",
    "IOR_WATER",
    "IOR_GLASS",
    "IOR_DIAMOND",
]
