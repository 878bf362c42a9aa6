"""Cull scheduler for supplementary actors.

Overflow actors are purely decorative: each one disappears at its own
scheduled time inside the cull window, and whatever is left when the
window closes disappears at once. The scheduler keeps running after the
match has ended and never touches controller inputs.
"""

import logging
import math
from typing import TYPE_CHECKING

from royale.config.arena import WIGGLE_AMPLITUDE, WIGGLE_FREQUENCY
from royale.entities.actor import SupplementaryActor
from royale.systems.base import BaseSystem, SystemResult
from royale.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from royale.match import Match

logger = logging.getLogger(__name__)


def wiggle(dot: SupplementaryActor, elapsed: float) -> None:
    """Move a dot along its oscillation around its origin."""
    phase = elapsed * WIGGLE_FREQUENCY + dot.wiggle_offset
    amp = WIGGLE_AMPLITUDE
    dot.pos.update(
        dot.origin.x + math.sin(phase) * amp + math.sin(phase * 2.3) * amp * 0.3,
        dot.origin.y + math.cos(phase * 1.7) * amp + math.cos(phase * 0.7) * amp * 0.4,
    )


@runs_in_phase(UpdatePhase.CULL)
class CullSystem(BaseSystem):
    """Eliminates supplementary actors on their schedule."""

    runs_after_end = True

    def __init__(self, match: "Match") -> None:
        super().__init__(match, "Cull")

    def _do_update(self, dt: float) -> SystemResult:
        match = self._match
        if not match.supplementary:
            return SystemResult.empty()

        now = match.elapsed
        window_over = now > match.config.cull_duration
        culled = 0
        for dot in match.supplementary:
            if not dot.alive:
                continue
            if window_over or dot.cull_time <= now:
                dot.eliminate(now)
                culled += 1
            else:
                wiggle(dot, now)

        if culled:
            logger.debug(
                f"t={now:.2f}s: culled {culled} supplementary actors, "
                f"{match.supplementary_alive} left"
            )
        return SystemResult(entities_removed=culled, details={"culled": culled})
