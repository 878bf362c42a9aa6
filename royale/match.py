"""The match aggregate.

``Match`` owns every piece of mutable state for one session: actors, the
resource, the phase machine, the controllers and the clock. Systems mutate
it; nothing in the package keeps state anywhere else.
"""

import logging
import uuid
from typing import List, Optional, Sequence

from royale.config.match_config import MatchConfig
from royale.controllers import ConsumptionRateController, DamageScaleController, IntensityTracker
from royale.entities.actor import Actor, SupplementaryActor
from royale.entities.resource import Resource, capacity_for
from royale.math_utils import Vector2
from royale.roster import RosterEntry, partition_roster, validate_roster
from royale.sizing import RadiusSchedule
from royale.spatial.grid import SpatialGrid
from royale.spawning import spawn_actors, spawn_supplementary
from royale.state_machine import EndReason, MatchPhase, StateMachine, create_match_state_machine
from royale.util.rng import RandomSource, require_rng_param

logger = logging.getLogger(__name__)


class Match:
    """All mutable state of a single match.

    Build one with ``Match.create``; the constructor only wires together
    already-validated parts.

    Attributes:
        config: Validated configuration
        rng: Injected random source
        actors: Simulated actors in roster order
        supplementary: Decorative overflow actors
        resource: The shared resource
        phases: Phase state machine (RUNNING -> ENDGAME -> ENDED)
        end_reason: Why the match ended, None while running
        elapsed: Match clock in seconds
        ended_at: Clock value when the match ended
        endgame_started_at: Clock value when the endgame started
        initial_count: Simulated actors at the start
        total_participants: Simulated plus supplementary actors
        radius_schedule: Base radius schedule
        damage: Damage-scale controller state
        consumption: Consumption-rate controller state
        intensity: Global eat intensity state
        grid: Spatial index, rebuilt every tick
        tick: Number of completed steps
    """

    def __init__(
        self,
        config: MatchConfig,
        rng: RandomSource,
        actors: List[Actor],
        supplementary: List[SupplementaryActor],
        resource: Resource,
        radius_schedule: RadiusSchedule,
    ) -> None:
        self.run_id = str(uuid.uuid4())
        self.config = config
        self.rng = rng
        self.actors = actors
        self.supplementary = supplementary
        self.resource = resource
        self.radius_schedule = radius_schedule

        self.phases: StateMachine[MatchPhase] = create_match_state_machine()
        self.end_reason: Optional[EndReason] = None
        self.elapsed = 0.0
        self.ended_at: Optional[float] = None
        self.endgame_started_at: Optional[float] = None
        self.tick = 0

        self.initial_count = len(actors)
        self.total_participants = len(actors) + len(supplementary)

        self.damage = DamageScaleController(initial_count=self.initial_count)
        self.consumption = ConsumptionRateController(
            initial_count=self.initial_count,
            last_remaining=resource.remaining,
            min_duration=config.min_duration,
            target_duration=config.target_duration,
            max_duration=config.max_duration,
        )
        self.intensity = IntensityTracker(last_alive=self.initial_count)
        self.grid = SpatialGrid(config.arena_width, config.arena_height)

    @classmethod
    def create(
        cls,
        roster: Sequence[RosterEntry],
        config: Optional[MatchConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> "Match":
        """Validate inputs and spawn a new match.

        Raises:
            ConfigurationError: If the configuration is invalid
            RosterError: If the roster is invalid
            SpawnError: If actors cannot be placed outside the resource
            MissingRNGError: If no random source is supplied
        """
        config = config or MatchConfig()
        config.validate()
        validate_roster(roster)
        rng = require_rng_param(rng, "Match.create")

        simulated, overflow = partition_roster(roster, config.animation_cap, rng)
        schedule = RadiusSchedule(len(roster), config.animation_cap)

        actors = spawn_actors(simulated, config, rng, schedule.radius)
        supplementary = spawn_supplementary(overflow, config, rng)

        capacity = (
            config.resource_capacity
            if config.resource_capacity is not None
            else capacity_for(len(actors))
        )
        cx, cy = config.resource_center
        resource = Resource(Vector2(cx, cy), config.resource_radius, capacity)

        match = cls(config, rng, actors, supplementary, resource, schedule)
        logger.info(
            f"Match {match.run_id} created: {len(actors)} simulated, "
            f"{len(supplementary)} supplementary, capacity {capacity:.1f}"
        )
        return match

    # =========================================================================
    # Phase
    # =========================================================================

    @property
    def phase(self) -> MatchPhase:
        return self.phases.state

    @property
    def is_ended(self) -> bool:
        return self.phases.state is MatchPhase.ENDED

    @property
    def endgame_active(self) -> bool:
        """True once the endgame has started (it stays true after the end)."""
        return self.endgame_started_at is not None

    @property
    def results_ready(self) -> bool:
        """True once the post-end display hold has elapsed."""
        if self.ended_at is None:
            return False
        return self.elapsed - self.ended_at >= self.config.winner_display_time

    # =========================================================================
    # Population
    # =========================================================================

    def live_actors(self) -> List[Actor]:
        return [actor for actor in self.actors if actor.alive]

    @property
    def live_count(self) -> int:
        return sum(1 for actor in self.actors if actor.alive)

    @property
    def supplementary_alive(self) -> int:
        return sum(1 for dot in self.supplementary if dot.alive)

    @property
    def total_alive(self) -> int:
        return self.live_count + self.supplementary_alive

    # =========================================================================
    # Geometry
    # =========================================================================

    @property
    def base_radius(self) -> float:
        return self.radius_schedule.radius

    def effective_radius(self, actor: Actor) -> float:
        return actor.effective_radius(self.radius_schedule.radius, self.endgame_active)

    def max_effective_radius(self) -> float:
        base = self.radius_schedule.radius
        if not self.endgame_active:
            return base
        return max((self.effective_radius(a) for a in self.actors if a.alive), default=base)

    def eliminate(self, actor: Actor) -> None:
        actor.eliminate(self.elapsed)

    def __repr__(self) -> str:
        return (
            f"Match(phase={self.phase.name}, t={self.elapsed:.2f}, "
            f"alive={self.live_count}/{self.initial_count}, {self.resource!r})"
        )
