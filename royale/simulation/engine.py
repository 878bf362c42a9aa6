"""Match engine - the slim orchestrator.

The engine owns a ``Match`` and the systems that mutate it, and runs the
tick pipeline once per ``step(dt)``. It contains no game rules itself;
those live in the systems.

Design Decisions:
-----------------
1. The engine is a COORDINATOR, not a DOER. Systems do the work; the
   engine only advances the clock and rebuilds the spatial index.

2. ``step`` is atomic: it clamps ``dt``, runs every pipeline step and
   returns the resulting snapshot. It never raises on valid state.

3. All validation happens in the constructor. A bad roster or config
   fails before any tick runs.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from royale.config.match_config import MatchConfig
from royale.entities.actor import Actor
from royale.exceptions import ConfigurationError, SimulationError
from royale.match import Match
from royale.math_utils import clamp
from royale.roster import RosterEntry
from royale.simulation.frame_context import FrameContext
from royale.simulation.pipeline import EnginePipeline, default_pipeline
from royale.simulation.system_registry import SystemRegistry
from royale.snapshots import MatchOutcome, MatchSnapshot, build_outcome, build_snapshot, leaderboard
from royale.spatial.grid import cell_size_for
from royale.state_machine import MatchPhase
from royale.systems import (
    BaseSystem,
    CombatSystem,
    ConsumptionSystem,
    ControllerSystem,
    CullSystem,
    MatchStateSystem,
    MotionSystem,
)
from royale.util.rng import RandomSource, resolve_rng

logger = logging.getLogger(__name__)

# Default fixed step for headless runs
DEFAULT_HEADLESS_DT = 1.0 / 60.0

# Extra ticks granted to run_to_completion beyond the time limit and hold
TICK_BUDGET_SLACK = 10


class MatchEngine:
    """Headless engine for one match.

    Architecture:
        MatchEngine (coordinator)
        ├── Match (all mutable state)
        ├── EnginePipeline (tick order)
        └── Systems (Motion, Combat, Consumption, Controllers, MatchState, Cull)

    Example:
        engine = MatchEngine(roster, seed=7)
        while not engine.results_ready:
            snapshot = engine.step(1 / 60)
        outcome = engine.get_outcome()
    """

    def __init__(
        self,
        roster: Sequence[RosterEntry],
        config: Optional[MatchConfig] = None,
        *,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        pipeline: Optional[EnginePipeline] = None,
    ) -> None:
        """Build and validate a match.

        Args:
            roster: Participants in roster order
            config: Match configuration (defaults to production settings)
            rng: Random source for deterministic runs
            seed: Seed for a MinStdRandom (used if rng is not provided)
            pipeline: Custom tick pipeline (defaults to the canonical order)

        Raises:
            ConfigurationError: On an invalid config or roster
            SimulationError: If actors cannot be spawned
        """
        self.seed = seed
        self.match = Match.create(roster, config, resolve_rng(rng, seed))
        self.pipeline = pipeline or default_pipeline()
        self.last_context: Optional[FrameContext] = None

        self.motion_system = MotionSystem(self.match)
        self.combat_system = CombatSystem(self.match)
        self.consumption_system = ConsumptionSystem(self.match)
        self.controller_system = ControllerSystem(self.match)
        self.match_state_system = MatchStateSystem(self.match)
        self.cull_system = CullSystem(self.match)

        self._system_registry = SystemRegistry()
        for system in (
            self.motion_system,
            self.combat_system,
            self.consumption_system,
            self.controller_system,
            self.match_state_system,
            self.cull_system,
        ):
            self._system_registry.register(system)

        # A match can be decided before the first tick (single actor, small roster)
        self.match_state_system.evaluate()
        logger.info(
            f"MatchEngine initialized with run_id={self.match.run_id}, "
            f"phase={self.match.phase.value}"
        )

    # =========================================================================
    # State
    # =========================================================================

    @property
    def config(self) -> MatchConfig:
        return self.match.config

    @property
    def elapsed(self) -> float:
        return self.match.elapsed

    @property
    def phase(self) -> MatchPhase:
        return self.match.phase

    @property
    def is_ended(self) -> bool:
        return self.match.is_ended

    @property
    def results_ready(self) -> bool:
        return self.match.results_ready

    # =========================================================================
    # Systems
    # =========================================================================

    def get_systems(self) -> List[BaseSystem]:
        """All systems in tick order."""
        return self._system_registry.get_all()

    def get_system(self, name: str) -> Optional[BaseSystem]:
        return self._system_registry.get(name)

    def set_system_enabled(self, name: str, enabled: bool) -> bool:
        return self._system_registry.set_enabled(name, enabled)

    def get_debug_info(self) -> Dict[str, Any]:
        match = self.match
        return {
            "run_id": match.run_id,
            "tick": match.tick,
            "elapsed": match.elapsed,
            "phase": match.phase.value,
            "live_count": match.live_count,
            "resource_remaining": match.resource.remaining,
            "base_radius": match.base_radius,
            "intensity": match.intensity.intensity,
            "damage_scale": match.damage.scale,
            "consumption_scale": match.consumption.scale,
            "systems": self._system_registry.get_debug_info(),
        }

    # =========================================================================
    # Core Update Loop
    # =========================================================================

    def step(self, dt: float) -> MatchSnapshot:
        """Advance the match by ``dt`` seconds (clamped to [0, max_dt]).

        Returns:
            Snapshot of the state after the step
        """
        dt = clamp(dt, 0.0, self.match.config.max_dt)
        self.last_context = self.pipeline.run(self, dt)
        return self.snapshot()

    def _phase_frame_start(self, dt: float) -> bool:
        """FRAME_START: advance the clock; refresh the radius schedule while live.

        Returns:
            True if the base radius changed
        """
        match = self.match
        match.tick += 1
        match.elapsed += dt
        if match.is_ended:
            return False

        changed = match.radius_schedule.update(match.total_alive)
        self.motion_system.pre_clamp()
        return changed

    def _phase_spatial_index(self) -> None:
        """SPATIAL_INDEX: rebuild the grid from living actors."""
        match = self.match
        if match.is_ended:
            return
        cell_size = cell_size_for(match.base_radius, match.max_effective_radius())
        match.grid.rebuild(match.actors, cell_size)

    # =========================================================================
    # Outputs
    # =========================================================================

    def snapshot(self) -> MatchSnapshot:
        return build_snapshot(self.match)

    def leaderboard(self, limit: int = 10) -> List[Actor]:
        """Living actors by score, highest first."""
        return leaderboard(self.match, limit)

    def get_outcome(self, wait_for_display: bool = True) -> Optional[MatchOutcome]:
        """Terminal result, or None while it is not available yet.

        Args:
            wait_for_display: If True the result is only available once the
                post-end display hold has elapsed; otherwise right at the end
        """
        if not self.match.is_ended:
            return None
        if wait_for_display and not self.match.results_ready:
            return None
        return build_outcome(self.match)

    def run_to_completion(
        self,
        dt: float = DEFAULT_HEADLESS_DT,
        max_ticks: Optional[int] = None,
        wait_for_display: bool = True,
    ) -> MatchOutcome:
        """Step at a fixed ``dt`` until the outcome is available.

        Raises:
            ConfigurationError: If dt is not positive
            SimulationError: If the outcome is not available within the tick budget
        """
        if dt <= 0:
            raise ConfigurationError(f"run_to_completion needs a positive dt, got {dt}")

        step_dt = min(dt, self.match.config.max_dt)
        if max_ticks is None:
            horizon = self.match.config.time_limit + self.match.config.winner_display_time
            max_ticks = math.ceil(horizon / step_dt) + TICK_BUDGET_SLACK

        for _ in range(max_ticks):
            outcome = self.get_outcome(wait_for_display)
            if outcome is not None:
                return outcome
            self.step(step_dt)

        outcome = self.get_outcome(wait_for_display)
        if outcome is None:
            raise SimulationError(
                f"Match {self.match.run_id} produced no outcome within {max_ticks} ticks"
            )
        return outcome
