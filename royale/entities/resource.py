"""The shared depletable resource at the arena centre."""

import math

from royale.config.resource import (
    CAPACITY_BAND_SIZE,
    CAPACITY_BASE_MULTIPLIER,
    CAPACITY_PER_BAND,
    DEPLETION_EPSILON,
)
from royale.math_utils import Vector2


def capacity_for(count: int) -> float:
    """Resource capacity for ``count`` simulated actors.

    The per-actor multiplier grows by a small step for every full band of
    50 actors so large matches get proportionally more to eat.
    """
    multiplier = CAPACITY_BASE_MULTIPLIER + CAPACITY_PER_BAND * math.floor(
        count / CAPACITY_BAND_SIZE
    )
    return count * multiplier


class Resource:
    """A disc of food with a fixed capacity and a non-increasing remainder."""

    def __init__(self, center: Vector2, radius: float, capacity: float) -> None:
        self.center = center
        self.radius = float(radius)
        self._capacity = float(capacity)
        self._remaining = float(capacity)

    @property
    def capacity(self) -> float:
        return self._capacity

    @property
    def remaining(self) -> float:
        return self._remaining

    @property
    def fraction_eaten(self) -> float:
        if self._capacity <= 0:
            return 1.0
        return 1.0 - self._remaining / self._capacity

    @property
    def remaining_ratio(self) -> float:
        if self._capacity <= 0:
            return 0.0
        return self._remaining / self._capacity

    def is_depleted(self, epsilon: float = DEPLETION_EPSILON) -> bool:
        return self._remaining <= epsilon

    def consume(self, amount: float) -> float:
        """Take up to ``amount`` from the resource.

        Returns:
            The amount actually taken. A bite larger than what is left takes
            exactly the remainder and zeroes the resource.
        """
        if amount <= 0 or self._remaining <= 0:
            return 0.0
        if amount >= self._remaining:
            taken = self._remaining
            self._remaining = 0.0
            return taken
        self._remaining -= amount
        return amount

    def __repr__(self) -> str:
        return f"Resource(remaining={self._remaining:.2f}/{self._capacity:.2f})"
