"""Scene-level nearest-hit intersection over an ordered list of objects.

The scene is a flat, insertion-ordered list. Every query walks all members,
passing the closest hit found so far as the upper bound so farther hits are
pruned inside each primitive test. Traversal order affects speed only, never
the result.

Example:
    >>> from bandtrace.core.vec3 import Vec3
    >>> from bandtrace.geometry.sphere import Sphere
    >>> from bandtrace.materials.lambertian import Lambertian
    >>> from bandtrace.scene.intersection import HittableList
    >>> world = HittableList()
    >>> world.add(Sphere(Vec3(0.0, 0.0, -1.0), 0.5, Lambertian(Vec3(0.5, 0.5, 0.5))))
    >>> len(world)
    1
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from bandtrace.core.ray import Ray
from bandtrace.geometry.hittable import Hittable, HitRecord


class HittableList(Hittable):
    """An ordered collection of hittables resolving the nearest hit.

    Attributes:
        objects: The members, in insertion order.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> None:
        """Append an object to the scene."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects from the scene."""
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test ray against all members and return the closest hit.

        Args:
            ray: The ray to test.
            t_min: Exclusive lower bound on the ray parameter.
            t_max: Exclusive upper bound on the ray parameter.

        Returns:
            The record with the smallest t in (t_min, t_max), or None if no
            member was hit.
        """
        closest = t_max
        result = None
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest)
            if rec is not None:
                closest = rec.t
                result = rec
        return result

    def __repr__(self) -> str:
        return f"HittableList(objects={len(self.objects)})"
