"""Actor entities: simulated participants and decorative overflow actors."""

import math
from typing import Optional

from royale.config.combat import ENDGAME_SIZE_BONUS_PER_UNIT, HEALTH_BAR_SCALE
from royale.math_utils import Vector2
from royale.roster import RosterEntry


class Actor:
    """A simulated participant: moves, fights and eats.

    Position and velocity are plain ``Vector2`` instances mutated in place by
    the systems. Radius is not stored; it is derived from the match's base
    radius plus the endgame size bonus (see ``effective_radius``).

    Attributes:
        actor_id: Stable id from the roster
        display_name: Roster display name
        portrait_ref: Opaque renderer reference
        spawn_index: Position in the roster (used for cosmetic offsets)
        pos: Centre position in pixels
        vel: Velocity in pixels per second
        health: Current health; the actor dies at <= 0
        defense: Flat reduction applied to incoming hits
        attack: Base outgoing damage
        spawn_health: Health at spawn (for reporting)
        score: Total resource consumed
        endgame_score: Resource consumed since the endgame started
        consumption_rate: Base eating speed
        alive: Whether the actor is still in the match
        rotation: Cosmetic rotation in radians (monotonic)
        eliminated_at: Elapsed time of elimination, None while alive
    """

    def __init__(
        self,
        entry: RosterEntry,
        spawn_index: int,
        pos: Vector2,
        vel: Vector2,
    ) -> None:
        self.actor_id = entry.actor_id
        self.display_name = entry.display_name
        self.portrait_ref = entry.portrait_ref
        self.spawn_index = spawn_index

        self.pos = pos
        self.vel = vel

        self.health: float = float(entry.base_health)
        self.defense: float = float(entry.base_defense)
        self.attack: float = float(entry.base_attack)
        self.spawn_health: float = float(entry.base_health)
        self.consumption_rate: float = float(entry.consumption_rate)

        self.score: float = 0.0
        self.endgame_score: float = 0.0

        self.alive: bool = True
        self.rotation: float = 0.0
        self.eliminated_at: Optional[float] = None

    def effective_radius(self, base_radius: float, endgame: bool) -> float:
        """Base radius plus the endgame size bonus from whole units of endgame score."""
        if not endgame:
            return base_radius
        return base_radius + ENDGAME_SIZE_BONUS_PER_UNIT * math.floor(self.endgame_score)

    @property
    def health_ratio(self) -> float:
        """Health as a fraction of a full health bar (may exceed 1 after endgame bonuses)."""
        return max(0.0, self.health) / HEALTH_BAR_SCALE

    @property
    def speed(self) -> float:
        return self.vel.length()

    def eliminate(self, elapsed: float) -> None:
        """Remove the actor from play, recording when it happened."""
        if not self.alive:
            return
        self.alive = False
        self.eliminated_at = elapsed

    def __repr__(self) -> str:
        state = "alive" if self.alive else f"out@{self.eliminated_at:.2f}"
        return f"Actor({self.actor_id!r}, hp={self.health:.1f}, score={self.score:.2f}, {state})"


class SupplementaryActor:
    """Visual-only overflow participant.

    Never fights or eats; it wiggles around ``origin`` until its scheduled
    ``cull_time`` passes.
    """

    def __init__(
        self,
        entry: RosterEntry,
        origin: Vector2,
        wiggle_offset: float,
        cull_time: float,
    ) -> None:
        self.actor_id = entry.actor_id
        self.display_name = entry.display_name
        self.origin = origin
        self.pos = origin.copy()
        self.wiggle_offset = wiggle_offset
        self.cull_time = cull_time
        self.alive: bool = True
        self.eliminated_at: Optional[float] = None

    def eliminate(self, elapsed: float) -> None:
        if not self.alive:
            return
        self.alive = False
        self.eliminated_at = elapsed

    def __repr__(self) -> str:
        return f"SupplementaryActor({self.actor_id!r}, cull_time={self.cull_time:.2f})"
