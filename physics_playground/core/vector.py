"""2D vector value type used by every demo.

Vectors are immutable; every operation returns a new instance, so callers
can hold on to positions without worrying about aliasing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """An ``(x, y)`` pair of floats with the usual vector algebra."""

    x: float = 0.0
    y: float = 0.0

    # ── Construction ────────────────────────────────────────────────

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> Vector2:
        """Vector of *length* pointing along *angle* (radians)."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    # ── Arithmetic ──────────────────────────────────────────────────

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vector2:
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> Vector2:
        return Vector2(self.x / k, self.y / k)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def scale(self, k: float) -> Vector2:
        return self * k

    # ── Products & norms ────────────────────────────────────────────

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2) -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector2:
        """Unit vector in the same direction.

        A zero vector is divided by 1 instead of 0 and so stays zero.
        """
        n = self.length() or 1.0
        return Vector2(self.x / n, self.y / n)

    def perpendicular(self) -> Vector2:
        """Vector rotated by +90 degrees."""
        return Vector2(-self.y, self.x)

    def distance_to(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def rotated(self, angle: float) -> Vector2:
        c, s = math.cos(angle), math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def lerp(self, other: Vector2, t: float) -> Vector2:
        return Vector2(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
        )

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ZERO = Vector2(0.0, 0.0)
