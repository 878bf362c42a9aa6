"""Combat resolver.

Walks the candidate pairs produced by the spatial grid and resolves every
overlapping pair: separation, an elastic exchange of the normal velocity
components and simultaneous damage. While three or more actors are alive
a lethal hit simply eliminates; with two left the last-standing rule keeps
exactly one of them in the match.

Architecture Notes:
- Extends BaseSystem for uniform system management
- Runs in UpdatePhase.COMBAT, after the grid rebuild
- Luck rolls come from the match RNG
"""

import logging
import math
from typing import TYPE_CHECKING, List, Tuple

from royale.config.combat import INTENSITY_BASE, LAST_STANDING_THRESHOLD, LUCK_RANGE
from royale.entities.actor import Actor
from royale.systems.base import BaseSystem, SystemResult
from royale.update_phases import UpdatePhase, runs_in_phase
from royale.util.rng import rand_int

if TYPE_CHECKING:
    from royale.match import Match

logger = logging.getLogger(__name__)


def hit_damage(attack: float, luck: int, defense: float, intensity: float, scale: float) -> float:
    """Damage of one hit: (attack + luck - defense), floored at zero, times intensity and scale."""
    return max(0.0, attack + luck - defense) * intensity * scale


def pick_last_standing(a: Actor, hp_a: float, b: Actor, hp_b: float) -> Tuple[Actor, Actor]:
    """Return (survivor, loser) for a lethal exchange between the last two actors.

    Higher resulting health survives; equal health goes to the lower actor_id.
    """
    if hp_a > hp_b or (hp_a == hp_b and a.actor_id < b.actor_id):
        return a, b
    return b, a


@runs_in_phase(UpdatePhase.COMBAT)
class CombatSystem(BaseSystem):
    """Resolves actor collisions and applies damage."""

    def __init__(self, match: "Match") -> None:
        super().__init__(match, "Combat")
        self.total_collisions = 0
        self.total_eliminations = 0

    def _do_update(self, dt: float) -> SystemResult:
        match = self._match
        alive = match.live_count
        collisions = 0
        eliminated: List[Actor] = []

        for a, b in match.grid.candidate_pairs():
            if not a.alive or not b.alive:
                continue
            dx = b.pos.x - a.pos.x
            dy = b.pos.y - a.pos.y
            dist = math.hypot(dx, dy)
            min_dist = match.effective_radius(a) + match.effective_radius(b)
            if not 0 < dist < min_dist:
                continue

            collisions += 1
            deaths = self._resolve_pair(a, b, dx / dist, dy / dist, min_dist - dist, alive)
            alive -= len(deaths)
            eliminated.extend(deaths)

        self.total_collisions += collisions
        self.total_eliminations += len(eliminated)
        if eliminated:
            logger.debug(
                f"t={match.elapsed:.2f}s: eliminated {[a.actor_id for a in eliminated]}, "
                f"{alive} left"
            )

        return SystemResult(
            entities_affected=collisions * 2,
            entities_removed=len(eliminated),
            details={"collisions": collisions, "eliminated": len(eliminated)},
        )

    def _resolve_pair(
        self, a: Actor, b: Actor, nx: float, ny: float, overlap: float, alive: int
    ) -> List[Actor]:
        """Separate, bounce and damage one colliding pair.

        Returns:
            Actors eliminated by this exchange
        """
        match = self._match
        max_speed = match.config.max_speed

        half = overlap / 2
        a.pos.x -= nx * half
        a.pos.y -= ny * half
        b.pos.x += nx * half
        b.pos.y += ny * half

        avn = a.vel.x * nx + a.vel.y * ny
        bvn = b.vel.x * nx + b.vel.y * ny
        a.vel.x += (bvn - avn) * nx
        a.vel.y += (bvn - avn) * ny
        b.vel.x += (avn - bvn) * nx
        b.vel.y += (avn - bvn) * ny
        a.vel.scale_to_inplace(max_speed)
        b.vel.scale_to_inplace(max_speed)

        luck_a = rand_int(match.rng, -LUCK_RANGE, LUCK_RANGE)
        luck_b = rand_int(match.rng, -LUCK_RANGE, LUCK_RANGE)
        rel_normal = abs((b.vel.x - a.vel.x) * nx + (b.vel.y - a.vel.y) * ny)
        intensity = INTENSITY_BASE + rel_normal / max_speed
        scale = match.damage.scale

        # Both hits use pre-damage stats
        hp_a = a.health - hit_damage(b.attack, luck_b, a.defense, intensity, scale)
        hp_b = b.health - hit_damage(a.attack, luck_a, b.defense, intensity, scale)

        if alive < LAST_STANDING_THRESHOLD and (hp_a <= 0 or hp_b <= 0):
            survivor, loser = pick_last_standing(a, hp_a, b, hp_b)
            survivor_hp = hp_a if survivor is a else hp_b
            loser.health = hp_b if survivor is a else hp_a
            survivor.health = survivor_hp if survivor_hp > 0 else 1.0
            match.eliminate(loser)
            return [loser]

        a.health = hp_a
        b.health = hp_b
        deaths = []
        for actor in (a, b):
            if actor.health <= 0:
                match.eliminate(actor)
                deaths.append(actor)
        return deaths
