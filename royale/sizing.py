"""Base radius schedule.

Actors shrink as the arena fills up and grow as the field thins out. The
diameter is a step function of the number of live participants (simulated
plus supplementary), but it is only re-evaluated when the live count moves
across one of a fixed set of thresholds. Between thresholds the previous
radius is kept, so the schedule has memory.
"""

import logging
from typing import Sequence, Tuple

from royale.config.arena import ANIMATION_CAP
from royale.config.combat import (
    CROWD_DIAMETER,
    DIAMETER_BANDS,
    RADIUS_CAP_OFFSETS,
    RADIUS_THRESHOLDS,
    SOLO_DIAMETER,
)

logger = logging.getLogger(__name__)


def diameter_for(count: int, animation_cap: int = ANIMATION_CAP) -> float:
    """Actor diameter for ``count`` live participants."""
    if count > animation_cap:
        return CROWD_DIAMETER
    for bound, diameter in DIAMETER_BANDS:
        if count > bound:
            return diameter
    return SOLO_DIAMETER


def size_thresholds(animation_cap: int = ANIMATION_CAP) -> Tuple[int, ...]:
    """Descending live-count bounds at which the radius is re-evaluated."""
    return tuple(animation_cap + offset for offset in RADIUS_CAP_OFFSETS) + RADIUS_THRESHOLDS


def _band(count: int, thresholds: Sequence[int]) -> int:
    """First threshold strictly below ``count``, or 0."""
    for threshold in thresholds:
        if count > threshold:
            return threshold
    return 0


class RadiusSchedule:
    """Cached base radius driven by the live participant count.

    Example:
        schedule = RadiusSchedule(initial_count=120, animation_cap=2000)
        schedule.radius          # 27.5
        schedule.update(90)      # True, crossed 100
        schedule.radius          # 37.5
    """

    def __init__(self, initial_count: int, animation_cap: int = ANIMATION_CAP) -> None:
        self._animation_cap = animation_cap
        self._thresholds = size_thresholds(animation_cap)
        self._last_count = initial_count
        self._radius = diameter_for(initial_count, animation_cap) / 2.0

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def diameter(self) -> float:
        return self._radius * 2.0

    def update(self, live_count: int) -> bool:
        """Re-evaluate the radius if ``live_count`` crossed a threshold.

        Returns:
            True if the radius was recomputed
        """
        current = _band(live_count, self._thresholds)
        previous = _band(self._last_count, self._thresholds)
        if current == previous:
            return False

        old_radius = self._radius
        self._radius = diameter_for(live_count, self._animation_cap) / 2.0
        self._last_count = live_count
        logger.debug(
            f"Base radius {old_radius:.1f} -> {self._radius:.1f} for {live_count} live participants"
        )
        return True
