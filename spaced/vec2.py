"""Two-dimensional vectors used by the collision code."""

from __future__ import annotations

import math
from dataclasses import dataclass

EPSILON = 1e-7
INFINITY = math.inf
NEGATIVE_INFINITY = -math.inf


@dataclass(frozen=True, slots=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def perpendicular(self) -> Vec2:
        """Return the vector rotated a quarter turn counter-clockwise."""
        return Vec2(-self.y, self.x)

    def normalized(self) -> Vec2:
        """Return the unit vector in this direction, or zero for tiny vectors."""
        length = math.hypot(self.x, self.y)
        if length < EPSILON:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / length, self.y / length)

    def dot(self, other: Vec2) -> float:
        """Return the dot product with another vector."""
        return self.x * other.x + self.y * other.y