"""
2D Vector Primitive
===================
Immutable vector arithmetic used by demonstration content.

Every operation returns a new ``Vector2``; instances are frozen, so callers
that need to "move" a body assign the result back to their own field::

    ball.pos = ball.pos + ball.vel

The class-level calls ``Vector2.add(a, b)``, ``Vector2.sub(a, b)`` and
``Vector2.dist(a, b)`` are the static forms of the same operations.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """A vector in the XY plane."""
    x: float = 0.0
    y: float = 0.0

    # ---- arithmetic ----

    def add(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def mult(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    def div(self, scalar: float) -> Vector2:
        """Divide by a scalar. Division by zero yields the zero vector."""
        if scalar == 0:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / scalar, self.y / scalar)

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    # ---- operators ----

    def __add__(self, other: Vector2) -> Vector2:
        return self.add(other)

    def __sub__(self, other: Vector2) -> Vector2:
        return self.sub(other)

    def __mul__(self, scalar: float) -> Vector2:
        return self.mult(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector2:
        return self.div(scalar)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __abs__(self) -> float:
        return self.mag()

    def __iter__(self):
        yield self.x
        yield self.y

    # ---- metrics ----

    def mag(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def mag_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> Vector2:
        """Unit vector in the same direction; the zero vector stays zero."""
        m = self.mag()
        if m == 0:
            return Vector2(0.0, 0.0)
        return self.div(m)

    def limit(self, max_mag: float) -> Vector2:
        """Clamp the magnitude to ``max_mag``."""
        if self.mag() > max_mag:
            return self.normalize().mult(max_mag)
        return self

    def dist(self, other: Vector2) -> float:
        return other.sub(self).mag()

    def heading(self) -> float:
        """Angle from the +X axis in radians."""
        return math.atan2(self.y, self.x)

    def copy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def to_tuple(self) -> tuple[float, float]:
        return self.x, self.y
