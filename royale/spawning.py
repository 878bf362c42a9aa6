"""Deterministic spawning of actors from the match RNG.

Actors appear at random points outside a safety ring around the resource,
heading in a random direction at full speed. Supplementary actors get a
spawn point, a wiggle phase offset and a scheduled cull time.
"""

import logging
import math
from typing import List, Sequence

from royale.config.arena import WIGGLE_OFFSET_STEP
from royale.config.match_config import MatchConfig
from royale.entities.actor import Actor, SupplementaryActor
from royale.exceptions import SpawnError
from royale.math_utils import Vector2
from royale.roster import RosterEntry
from royale.util.rng import RandomSource, rand_angle

logger = logging.getLogger(__name__)

# Spawn points keep this many radii clear of the arena walls
WALL_CLEARANCE_RADII = 3.0

# Supplementary actors are tiny dots
SUPPLEMENTARY_RADIUS = 1.0


def safe_position(config: MatchConfig, rng: RandomSource, radius: float) -> Vector2:
    """Sample a point outside the resource safety radius.

    Raises:
        SpawnError: If no point qualifies within ``config.max_spawn_attempts``
    """
    cx, cy = config.resource_center
    min_dist = config.resource_radius + radius + config.spawn_margin
    margin = radius * WALL_CLEARANCE_RADII
    span_x = max(0.0, config.arena_width - 2 * margin)
    span_y = max(0.0, config.arena_height - 2 * margin)

    for _ in range(config.max_spawn_attempts):
        x = margin + rng.next() * span_x
        y = margin + rng.next() * span_y
        if math.hypot(x - cx, y - cy) >= min_dist:
            return Vector2(x, y)

    raise SpawnError(
        f"No spawn point at least {min_dist:.1f}px from the resource centre after "
        f"{config.max_spawn_attempts} attempts (arena {config.arena_width}x{config.arena_height})"
    )


def spawn_actors(
    entries: Sequence[RosterEntry],
    config: MatchConfig,
    rng: RandomSource,
    radius: float,
) -> List[Actor]:
    """Create one actor per entry, in roster order."""
    actors = []
    for index, entry in enumerate(entries):
        pos = safe_position(config, rng, radius)
        vel = Vector2.from_angle(rand_angle(rng), config.max_speed)
        actor = Actor(entry, index, pos, vel)
        actor.rotation = rand_angle(rng)
        actors.append(actor)
    return actors


def spawn_supplementary(
    entries: Sequence[RosterEntry],
    config: MatchConfig,
    rng: RandomSource,
) -> List[SupplementaryActor]:
    """Create decorative overflow actors with scheduled cull times."""
    dots = []
    for index, entry in enumerate(entries):
        origin = safe_position(config, rng, SUPPLEMENTARY_RADIUS)
        cull_time = rng.next() * config.cull_duration
        dots.append(SupplementaryActor(entry, origin, index * WIGGLE_OFFSET_STEP, cull_time))
    if dots:
        logger.debug(
            f"Spawned {len(dots)} supplementary actors over a {config.cull_duration}s cull window"
        )
    return dots
