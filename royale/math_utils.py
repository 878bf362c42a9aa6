"""Small geometry helpers shared by the motion, combat and consumption systems."""

from __future__ import annotations

import math
from typing import Tuple

# Component tolerance for vector equality
VECTOR_EPSILON = 1e-9


class Vector2:
    """Mutable 2D point or velocity. Systems update it in place every tick."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> Vector2:
        return cls(length * math.cos(angle), length * math.sin(angle))

    def update(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def copy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def scale_to_inplace(self, length: float) -> Vector2:
        """Give the vector magnitude ``length``; a zero vector is left alone."""
        current = math.hypot(self.x, self.y)
        if current > 0:
            self.x *= length / current
            self.y *= length / current
        return self

    def reflect_inplace(self, nx: float, ny: float) -> bool:
        """Mirror the vector about the surface with outward unit normal (nx, ny).

        Only a vector heading into the surface (negative dot product) is
        changed. Returns True if it was.
        """
        dot = self.x * nx + self.y * ny
        if dot >= 0:
            return False
        self.x -= 2.0 * dot * nx
        self.y -= 2.0 * dot * ny
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return abs(self.x - other.x) < VECTOR_EPSILON and abs(self.y - other.y) < VECTOR_EPSILON

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Vector2({self.x:.3f}, {self.y:.3f})"


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def unit_normal(dx: float, dy: float) -> Tuple[float, float, float]:
    """(nx, ny, length) of the offset (dx, dy); a zero offset points along +x."""
    dist = math.hypot(dx, dy)
    if dist == 0:
        return (1.0, 0.0, 0.0)
    return (dx / dist, dy / dist, dist)


__all__ = ["Vector2", "clamp", "unit_normal"]
