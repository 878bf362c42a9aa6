"""Match state system: endgame activation and end conditions.

Architecture Notes:
- Runs in UpdatePhase.MATCH_STATE, after the controllers
- Also evaluated once when the engine is built, so a match that is already
  decided (a one-actor roster) ends at t = 0
- End-condition priority: resource depleted, then single survivor, then
  the hard time limit
"""

import logging
from typing import TYPE_CHECKING, Optional

from royale.config.resource import DEPLETION_EPSILON
from royale.state_machine import EndReason, MatchPhase
from royale.systems.base import BaseSystem, SystemResult
from royale.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from royale.match import Match

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.MATCH_STATE)
class MatchStateSystem(BaseSystem):
    """Drives the RUNNING -> ENDGAME -> ENDED phase machine."""

    def __init__(self, match: "Match") -> None:
        super().__init__(match, "MatchState")

    def _do_update(self, dt: float) -> SystemResult:
        return self.evaluate()

    def evaluate(self) -> SystemResult:
        """Apply any due phase transition."""
        match = self._match
        if match.is_ended:
            return SystemResult.skipped_result()

        details = {}
        alive = match.live_count
        if match.phase is MatchPhase.RUNNING and alive <= match.config.endgame_threshold:
            self._start_endgame(alive)
            details["endgame_started"] = True

        reason = self.end_reason()
        if reason is not None:
            self._end(reason, alive)
            details["end_reason"] = reason.value

        return SystemResult(details=details)

    def end_reason(self) -> Optional[EndReason]:
        """The end condition that currently holds, if any (highest priority first)."""
        match = self._match
        if match.resource.is_depleted(DEPLETION_EPSILON):
            return EndReason.RESOURCE_DEPLETED
        if match.live_count <= 1:
            return EndReason.SINGLE_SURVIVOR
        if match.elapsed >= match.config.time_limit:
            return EndReason.TIME_LIMIT
        return None

    def _start_endgame(self, alive: int) -> None:
        match = self._match
        match.phases.transition(
            MatchPhase.ENDGAME,
            tick=match.tick,
            elapsed=match.elapsed,
            reason=f"{alive} actors left",
        )
        match.endgame_started_at = match.elapsed
        for actor in match.actors:
            if actor.alive:
                actor.endgame_score = 0.0
        logger.info(f"Endgame activated at t={match.elapsed:.2f}s with {alive} actors remaining")

    def _end(self, reason: EndReason, alive: int) -> None:
        match = self._match
        match.phases.transition(
            MatchPhase.ENDED, tick=match.tick, elapsed=match.elapsed, reason=reason.value
        )
        match.end_reason = reason
        match.ended_at = match.elapsed
        logger.info(
            f"Match {match.run_id} ended at t={match.elapsed:.2f}s: {reason.value}, "
            f"{alive} survivors, {match.resource.remaining:.2f} resource left"
        )
