"""Geometry module for shape primitives.

This module provides the intersection interface and geometric primitives:

Components:
    hittable: The Hittable interface and the HitRecord it produces
    sphere: Sphere primitive with ray-sphere intersection

Ray-object intersection follows the pattern:
    record = shape.hit(ray, t_min, t_max)  # HitRecord or None
"""

from .hittable import Hittable, HitRecord
from .sphere import Sphere

__all__ = [
    "Hittable",
    "HitRecord",
    "Sphere",
]
