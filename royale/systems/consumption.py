"""Resource consumption system.

Actors touching the resource rim are parked on it, bounced outward and
take a bite. Bite size combines the actor's own rate with the crowd
modifier, the consumption controller's scale, the global eat intensity
and two late-match brakes. During the endgame every bite also makes the
actor stronger and a little faster.

Until the minimum duration has elapsed, part of the resource is held back
as a reserve that shrinks linearly to zero, so the resource cannot run out
early however hot the controllers run.
"""

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from royale.config.combat import (
    ATTACK_BOOST_PER_BITE,
    DEFENSE_BOOST_PER_BITE,
    HEALTH_BOOST_PER_BITE,
    SPEED_BOOST_CAP,
    SPEED_BOOST_PER_BITE,
)
from royale.config.resource import (
    CONSUMPTION_COEFFICIENT,
    FINAL_BRAKE_EATEN_FRACTION,
    FINAL_BRAKE_FLOOR,
    FINAL_BRAKE_REMAINING_FRACTION,
    FINAL_BRAKE_SLOPE,
    LATE_BRAKE_ALIVE_LIMIT,
    LATE_BRAKE_EATEN_FRACTION,
    LATE_BRAKE_STRENGTH,
)
from royale.controllers import crowd_modifier
from royale.entities.actor import Actor
from royale.math_utils import clamp
from royale.systems.base import BaseSystem, SystemResult
from royale.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from royale.match import Match

logger = logging.getLogger(__name__)


def late_brake(fraction_eaten: float, alive: int) -> float:
    """Slow eating once most of the resource is gone and few actors remain."""
    if fraction_eaten < LATE_BRAKE_EATEN_FRACTION or alive >= LATE_BRAKE_ALIVE_LIMIT:
        return 1.0
    scarcity = clamp((LATE_BRAKE_ALIVE_LIMIT - alive) / LATE_BRAKE_ALIVE_LIMIT, 0.0, 1.0)
    return 1.0 - LATE_BRAKE_STRENGTH * scarcity


def final_brake(fraction_eaten: float, remaining_ratio: float, endgame: bool) -> float:
    """Endgame-only slowdown for the last slice of the resource."""
    if not endgame:
        return 1.0
    if fraction_eaten < FINAL_BRAKE_EATEN_FRACTION:
        return 1.0
    if remaining_ratio >= FINAL_BRAKE_REMAINING_FRACTION:
        return 1.0
    excess = fraction_eaten - FINAL_BRAKE_EATEN_FRACTION
    return max(FINAL_BRAKE_FLOOR, 1.0 - excess * FINAL_BRAKE_SLOPE)


def pacing_budget(
    remaining: float, capacity: float, elapsed: float, min_duration: float
) -> Optional[float]:
    """Most that may be eaten this tick, or None once the minimum duration has passed.

    The resource keeps a reserve that shrinks linearly to zero at
    ``min_duration``; only the part above the reserve may be eaten.
    """
    if elapsed >= min_duration:
        return None
    reserve = capacity * (min_duration - elapsed) / min_duration
    return max(0.0, remaining - reserve)


@dataclass
class BiteFactors:
    """Per-tick multipliers shared by every bite in the tick."""

    crowd: float
    scale: float
    intensity: float
    late: float
    final: float

    @property
    def combined(self) -> float:
        return self.crowd * self.scale * self.intensity * self.late * self.final


@runs_in_phase(UpdatePhase.CONSUMPTION)
class ConsumptionSystem(BaseSystem):
    """Lets actors on the resource rim eat and awards score and endgame bonuses."""

    def __init__(self, match: "Match") -> None:
        super().__init__(match, "Consumption")
        self._final_brake_logged = False

    def bite_factors(self) -> BiteFactors:
        match = self._match
        resource = match.resource
        factors = BiteFactors(
            crowd=crowd_modifier(match.initial_count),
            scale=match.consumption.scale,
            intensity=match.intensity.intensity,
            late=late_brake(resource.fraction_eaten, match.live_count),
            final=final_brake(
                resource.fraction_eaten, resource.remaining_ratio, match.endgame_active
            ),
        )
        if factors.final < 1.0 and not self._final_brake_logged:
            self._final_brake_logged = True
            logger.debug(
                f"Final-slice brake engaged at {factors.final:.2f}x, "
                f"{resource.remaining:.1f} of {resource.capacity:.1f} left"
            )
        return factors

    def _do_update(self, dt: float) -> SystemResult:
        match = self._match
        resource = match.resource
        factors = self.bite_factors()
        budget = pacing_budget(
            resource.remaining, resource.capacity, match.elapsed, match.config.min_duration
        )

        eaters = 0
        total_eaten = 0.0
        for actor in match.actors:
            if not actor.alive or not self._touch_rim(actor):
                continue
            if resource.remaining <= 0:
                continue

            bite = actor.consumption_rate * CONSUMPTION_COEFFICIENT * dt * factors.combined
            if budget is not None:
                bite = min(bite, budget - total_eaten)
            taken = resource.consume(bite)
            if taken <= 0:
                continue

            eaters += 1
            total_eaten += taken
            self._award(actor, taken)

        return SystemResult(
            entities_affected=eaters,
            details={"eaten": total_eaten, "eaters": eaters},
        )

    def _touch_rim(self, actor: Actor) -> bool:
        """Park an actor inside the eating ring on the rim. Returns True if it is eating."""
        match = self._match
        resource = match.resource
        r = match.effective_radius(actor)
        dx = actor.pos.x - resource.center.x
        dy = actor.pos.y - resource.center.y
        dist = math.hypot(dx, dy)
        if dist < resource.radius - r or dist > resource.radius + r:
            return False

        if dist == 0:
            nx, ny = 1.0, 0.0
        else:
            nx, ny = dx / dist, dy / dist
        rim = resource.radius + r
        actor.pos.update(resource.center.x + nx * rim, resource.center.y + ny * rim)
        actor.vel.reflect_inplace(nx, ny)
        return True

    def _award(self, actor: Actor, amount: float) -> None:
        actor.score += amount
        if not self._match.endgame_active:
            return

        actor.endgame_score += amount
        actor.attack += ATTACK_BOOST_PER_BITE
        actor.health += HEALTH_BOOST_PER_BITE
        actor.defense += DEFENSE_BOOST_PER_BITE

        speed = actor.vel.length()
        if 0 < speed < self._match.config.max_speed * SPEED_BOOST_CAP:
            actor.vel.x *= SPEED_BOOST_PER_BITE
            actor.vel.y *= SPEED_BOOST_PER_BITE
