"""Controller system: feeds the tick's outcome into the adaptive controllers."""

from typing import TYPE_CHECKING

from royale.systems.base import BaseSystem, SystemResult
from royale.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from royale.match import Match


@runs_in_phase(UpdatePhase.CONTROLLERS)
class ControllerSystem(BaseSystem):
    """Updates eat intensity, damage scale and consumption scale.

    Intensity goes first so deaths from this tick's combat are counted
    against the phase the match was in while they happened.
    """

    def __init__(self, match: "Match") -> None:
        super().__init__(match, "Controllers")

    def _do_update(self, dt: float) -> SystemResult:
        match = self._match
        alive = match.live_count
        resource = match.resource

        intensity = match.intensity.update(alive, match.endgame_active)
        damage_scale = match.damage.update(alive, resource.fraction_eaten)
        consumption_scale = match.consumption.update(resource.remaining, dt, match.elapsed)

        return SystemResult(
            details={
                "intensity": intensity,
                "damage_scale": damage_scale,
                "consumption_scale": consumption_scale,
                "ema_rate": match.consumption.ema_rate,
            }
        )
