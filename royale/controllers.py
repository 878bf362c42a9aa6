"""Adaptive controllers that keep matches inside the duration window.

Two closed-loop controllers are re-evaluated every tick:

- ``DamageScaleController`` steers the live count along a curve that ends
  near ``TARGET_SURVIVORS`` as the resource runs out. Too many survivors for
  how much has been eaten raises damage; too few lowers it.
- ``ConsumptionRateController`` compares a smoothed estimate of the actual
  eating rate with the rate needed to finish on ``TARGET_DURATION`` and
  blends the ratio into the consumption scale with heavy inertia.

``IntensityTracker`` holds the global eat intensity, which rises with
every death so a thinning field still finishes the resource.

Each controller is a plain dataclass holding only its own state, so it can
be unit tested without running a match.
"""

import logging
from dataclasses import dataclass

from royale.config.controllers import (
    CONSUMPTION_SCALE_INITIAL,
    CONSUMPTION_SCALE_MAX,
    CONSUMPTION_SCALE_MIN,
    DAMAGE_GAIN,
    DAMAGE_MIN_POPULATION,
    DAMAGE_SCALE_INITIAL,
    DAMAGE_SCALE_MAX,
    DAMAGE_SCALE_MIN,
    EMA_RETAIN,
    EMA_SAMPLE,
    HORIZON_FLOOR,
    MAX_DURATION,
    MIN_DURATION,
    RATE_FLOOR,
    SCALE_INERTIA,
    SCALE_RESPONSE,
    TARGET_DURATION,
    TARGET_SURVIVORS,
)
from royale.config.resource import (
    CROWD_LARGE_BASE,
    CROWD_LARGE_FLOOR,
    CROWD_LARGE_LIMIT,
    CROWD_LARGE_SPAN,
    CROWD_SMALL_FLOOR,
    CROWD_SMALL_LIMIT,
    INITIAL_EAT_INTENSITY,
    INTENSITY_PER_DEATH,
    INTENSITY_PER_DEATH_ENDGAME,
)
from royale.math_utils import clamp

logger = logging.getLogger(__name__)


def crowd_modifier(initial_count: int) -> float:
    """Eating modifier derived from the *initial* simulated count.

    Small matches eat faster per actor, large ones slower (with a floor).
    Using the initial count keeps deaths from inflating the rate.
    """
    if initial_count < CROWD_SMALL_LIMIT:
        return max(CROWD_SMALL_FLOOR, initial_count / CROWD_SMALL_LIMIT)
    if initial_count > CROWD_LARGE_LIMIT:
        excess = initial_count - CROWD_LARGE_LIMIT
        return max(CROWD_LARGE_FLOOR, CROWD_LARGE_BASE - excess / CROWD_LARGE_SPAN)
    return 1.0


@dataclass
class DamageScaleController:
    """Multiplicative damage scale steering the live count toward a target curve.

    Attributes:
        initial_count: Simulated actors at the start of the match
        scale: Current damage multiplier
        target_survivors: Live count aimed for when the resource is gone
    """

    initial_count: int
    scale: float = DAMAGE_SCALE_INITIAL
    target_survivors: float = TARGET_SURVIVORS

    def desired_alive(self, fraction_eaten: float) -> float:
        remaining = 1.0 - clamp(fraction_eaten, 0.0, 1.0)
        return self.target_survivors + (self.initial_count - self.target_survivors) * remaining

    def update(self, alive: int, fraction_eaten: float) -> float:
        """Advance one tick and return the new scale."""
        error = alive - self.desired_alive(fraction_eaten)
        self.scale *= 1.0 + DAMAGE_GAIN * error / max(DAMAGE_MIN_POPULATION, self.initial_count)
        self.scale = clamp(self.scale, DAMAGE_SCALE_MIN, DAMAGE_SCALE_MAX)
        return self.scale


@dataclass
class ConsumptionRateController:
    """Consumption scale aiming the match end at the target duration.

    Attributes:
        initial_count: Simulated actors at the start of the match
        last_remaining: Resource remaining at the previous update
        scale: Current consumption multiplier
        ema_rate: Smoothed consumption rate (units per second); zero until
            the first non-zero sample arrives
        min_duration: Earliest acceptable end (seconds)
        target_duration: Desired end (seconds)
        max_duration: Latest acceptable end (seconds)
    """

    initial_count: int
    last_remaining: float
    scale: float = CONSUMPTION_SCALE_INITIAL
    ema_rate: float = 0.0
    min_duration: float = MIN_DURATION
    target_duration: float = TARGET_DURATION
    max_duration: float = MAX_DURATION

    def horizon(self, elapsed: float) -> float:
        """Seconds left to aim for, kept inside the duration window."""
        window = clamp(
            self.target_duration - elapsed,
            self.min_duration - elapsed,
            self.max_duration - elapsed,
        )
        return max(window, HORIZON_FLOOR)

    def observe(self, remaining: float, dt: float) -> float:
        """Fold the consumption since the last update into the rate estimate."""
        consumed = max(0.0, self.last_remaining - remaining)
        self.last_remaining = remaining
        instant = consumed / dt if dt > 0 else 0.0
        if self.ema_rate > 0:
            self.ema_rate = EMA_RETAIN * self.ema_rate + EMA_SAMPLE * instant
        else:
            self.ema_rate = instant
        return self.ema_rate

    def desired_rate(self, remaining: float, elapsed: float) -> float:
        if remaining <= 0:
            return 0.0
        return remaining / self.horizon(elapsed) * crowd_modifier(self.initial_count)

    def update(self, remaining: float, dt: float, elapsed: float) -> float:
        """Advance one tick and return the new scale.

        A zero ``dt`` carries no rate information and leaves the state as is.
        """
        if dt <= 0:
            return self.scale

        actual = max(self.observe(remaining, dt), RATE_FLOOR)
        ratio = self.desired_rate(remaining, elapsed) / actual
        self.scale = clamp(
            SCALE_INERTIA * self.scale + SCALE_RESPONSE * ratio,
            CONSUMPTION_SCALE_MIN,
            CONSUMPTION_SCALE_MAX,
        )
        return self.scale


@dataclass
class IntensityTracker:
    """Global eat intensity that grows with every simulated death.

    Attributes:
        last_alive: Live simulated count seen at the previous update
        intensity: Current multiplier
    """

    last_alive: int
    intensity: float = INITIAL_EAT_INTENSITY

    def update(self, alive: int, endgame: bool) -> float:
        """Account for deaths since the previous update and return the intensity."""
        if alive < self.last_alive:
            deaths = self.last_alive - alive
            step = INTENSITY_PER_DEATH_ENDGAME if endgame else INTENSITY_PER_DEATH
            self.intensity += deaths * step
            logger.debug(
                f"{deaths} actors eliminated; eat intensity now {self.intensity:.3f}"
                f"{' (endgame)' if endgame else ''}"
            )
        self.last_alive = alive
        return self.intensity
