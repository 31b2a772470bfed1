"""Three-component vector value type used for points, directions and colors.

Vec3 is an immutable value: every operation returns a new instance. The same
type doubles as an RGB color (see the ``r``, ``g``, ``b`` aliases) so that
attenuation products along a path are plain component-wise multiplications.

Example:
    >>> from bandtrace.core.vec3 import Vec3
    >>> a = Vec3(1.0, 2.0, 3.0)
    >>> b = Vec3(0.0, 1.0, 0.0)
    >>> a + 2.0 * b
    Vec3(x=1.0, y=4.0, z=3.0)
    >>> a.cross(b)
    Vec3(x=-3.0, y=0.0, z=1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector.

    Attributes:
        x: First component (red when used as a color).
        y: Second component (green when used as a color).
        z: Third component (blue when used as a color).
    """

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Vec3:
        """Return the zero vector (black)."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def one(cls) -> Vec3:
        """Return the all-ones vector (white)."""
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def from_iterable(cls, values) -> Vec3:
        """Build a vector from any three-element sequence.

        Raises:
            ValueError: If ``values`` does not hold exactly three numbers.
        """
        items = [float(v) for v in values]
        if len(items) != 3:
            raise ValueError(f"Expected 3 components, got {len(items)}")
        return cls(items[0], items[1], items[2])

    # Color aliases

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    # Arithmetic

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Vec3:
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, other: float) -> Vec3:
        if isinstance(other, (int, float)):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    # Products and norms

    def dot(self, other: Vec3) -> float:
        """Dot product ``self . other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared_length(self) -> float:
        """Squared Euclidean length, cheaper than ``length()`` for comparisons."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.squared_length())

    def normalized(self) -> Vec3:
        """Return the unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.length()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vec3(self.x / length, self.y / length, self.z / length)

    def near_zero(self, eps: float = 1e-8) -> bool:
        """Whether every component is within ``eps`` of zero."""
        return abs(self.x) < eps and abs(self.y) < eps and abs(self.z) < eps

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)
