"""Roster input for a match.

A roster is an ordered sequence of ``RosterEntry`` records. At most
``animation_cap`` entries, drawn at random from an overflowing roster,
become simulated actors; the rest are admitted as decorative
supplementary actors.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from royale.config.resource import DEFAULT_CONSUMPTION_RATE
from royale.exceptions import RosterError
from royale.util.rng import RandomSource, rand_int, rand_sample_indices, require_rng_param

logger = logging.getLogger(__name__)

# Stat ranges used when generating a demo roster
DEMO_HEALTH_RANGE = (8, 70)
DEMO_DEFENSE_RANGE = (10, 20)
DEMO_ATTACK_RANGE = (10, 20)
DEMO_RATE_BASE = 15.0
DEMO_RATE_SPREAD = 10


@dataclass(frozen=True)
class RosterEntry:
    """One participant as supplied by the caller.

    Attributes:
        actor_id: Stable unique identifier
        display_name: Name shown on the leaderboard and results
        base_health: Starting health (must be positive)
        base_defense: Flat damage reduction per hit
        base_attack: Base outgoing damage per hit
        consumption_rate: Base eating speed
        portrait_ref: Opaque reference for renderers (never read by the core)
    """

    actor_id: str
    display_name: str
    base_health: float
    base_defense: float
    base_attack: float
    consumption_rate: float = DEFAULT_CONSUMPTION_RATE
    portrait_ref: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RosterEntry":
        """Build an entry from a camelCase or snake_case mapping."""

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        actor_id = pick("actor_id", "id")
        if actor_id is None:
            raise RosterError(f"Roster entry is missing an id: {data!r}")
        return cls(
            actor_id=str(actor_id),
            display_name=str(pick("display_name", "displayName", default=actor_id)),
            base_health=float(pick("base_health", "baseHealth", "hp", default=0)),
            base_defense=float(pick("base_defense", "baseDefense", "def", default=0)),
            base_attack=float(pick("base_attack", "baseAttack", "atk", default=0)),
            consumption_rate=float(
                pick(
                    "consumption_rate",
                    "consumptionRate",
                    "eatRate",
                    default=DEFAULT_CONSUMPTION_RATE,
                )
            ),
            portrait_ref=pick("portrait_ref", "portraitRef"),
        )


def validate_roster(roster: Sequence[RosterEntry]) -> None:
    """Validate a roster before any actor is spawned.

    Raises:
        RosterError: If the roster is empty, has duplicate ids, or any
            entry carries non-finite stats, non-positive health or negative
            stats.
    """
    if not roster:
        raise RosterError("Roster must contain at least one entry")

    seen = set()
    for entry in roster:
        if not entry.actor_id:
            raise RosterError("Roster entries need a non-empty actor_id")
        if entry.actor_id in seen:
            raise RosterError(f"Duplicate actor_id in roster: {entry.actor_id!r}")
        seen.add(entry.actor_id)

        stats = {
            "base_health": entry.base_health,
            "base_defense": entry.base_defense,
            "base_attack": entry.base_attack,
            "consumption_rate": entry.consumption_rate,
        }
        for name, value in stats.items():
            if not math.isfinite(value):
                raise RosterError(f"Actor {entry.actor_id!r} has non-finite {name} {value}")

        if entry.base_health <= 0:
            raise RosterError(
                f"Actor {entry.actor_id!r} needs positive base_health, got {entry.base_health}"
            )
        if entry.base_defense < 0 or entry.base_attack < 0:
            raise RosterError(f"Actor {entry.actor_id!r} has negative attack or defense")
        if entry.consumption_rate < 0:
            raise RosterError(
                f"Actor {entry.actor_id!r} has negative consumption_rate {entry.consumption_rate}"
            )


def partition_roster(
    roster: Sequence[RosterEntry],
    animation_cap: int,
    rng: Optional[RandomSource] = None,
) -> Tuple[List[RosterEntry], List[RosterEntry]]:
    """Split a roster into (simulated, supplementary).

    With ``rng`` an overflowing roster has its ``animation_cap`` simulated
    entries drawn at random; without it the roster prefix is simulated.
    Both groups keep roster order.
    """
    if len(roster) <= animation_cap:
        return list(roster), []

    if rng is None:
        chosen = set(range(animation_cap))
    else:
        chosen = set(rand_sample_indices(rng, len(roster), animation_cap))
    simulated = [entry for i, entry in enumerate(roster) if i in chosen]
    supplementary = [entry for i, entry in enumerate(roster) if i not in chosen]
    logger.info(
        f"Roster of {len(roster)} exceeds animation cap {animation_cap}; "
        f"{len(supplementary)} entries become supplementary actors"
    )
    return simulated, supplementary


def demo_roster(count: int, rng: RandomSource) -> List[RosterEntry]:
    """Generate ``count`` players with randomized stats.

    Used by the command line and the HTTP API when no roster is supplied.
    """
    rng = require_rng_param(rng, "demo_roster")
    if count < 1:
        raise RosterError(f"Demo roster needs at least one player, got {count}")

    entries = []
    for i in range(count):
        entries.append(
            RosterEntry(
                actor_id=f"player-{i + 1}",
                display_name=f"Player {i + 1}",
                base_health=float(rand_int(rng, *DEMO_HEALTH_RANGE)),
                base_defense=float(rand_int(rng, *DEMO_DEFENSE_RANGE)),
                base_attack=float(rand_int(rng, *DEMO_ATTACK_RANGE)),
                consumption_rate=DEMO_RATE_BASE + i % DEMO_RATE_SPREAD,
            )
        )
    return entries
