"""Engine pipeline abstraction.

The pipeline is the ordered list of steps one ``MatchEngine.step`` runs.
The default pipeline is the canonical tick order; tests and tools can
build custom pipelines to drop or reorder steps without touching the
engine.

Steps receive the engine and a FrameContext; system steps store their
SystemResult on the context under the step name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from collections.abc import Callable

from royale.simulation.frame_context import FrameContext

if TYPE_CHECKING:
    from royale.simulation.engine import MatchEngine


@dataclass
class PipelineStep:
    """One named step of a tick.

    Attributes:
        name: Step key; system steps store their result under it
        fn: Callable taking the engine and the tick's FrameContext
    """

    name: str
    fn: Callable[[MatchEngine, FrameContext], None]


class EnginePipeline:
    """Ordered sequence of steps that define one match tick."""

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    @property
    def steps(self) -> list[PipelineStep]:
        return self._steps

    @property
    def step_names(self) -> list[str]:
        """Step names in run order."""
        return [step.name for step in self._steps]

    def run(self, engine: MatchEngine, dt: float) -> FrameContext:
        """Run one tick: every step once, in order.

        Args:
            engine: The MatchEngine to advance
            dt: Clamped step length in seconds

        Returns:
            The FrameContext that was threaded through the steps
        """
        ctx = FrameContext(dt=dt, frozen=engine.match.is_ended)
        for step in self._steps:
            step.fn(engine, ctx)
        return ctx


# =============================================================================
# Default Pipeline
# =============================================================================


def _step_frame_start(engine: MatchEngine, ctx: FrameContext) -> None:
    """FRAME_START: Advance the clock, refresh the radius, pre-clamp."""
    ctx.radius_changed = engine._phase_frame_start(ctx.dt)


def _step_motion(engine: MatchEngine, ctx: FrameContext) -> None:
    """MOTION: Move actors and bounce them off the resource and walls."""
    ctx.results["motion"] = engine.motion_system.update(ctx.dt)


def _step_spatial_index(engine: MatchEngine, ctx: FrameContext) -> None:
    """SPATIAL_INDEX: Rebuild the collision grid from living actors."""
    engine._phase_spatial_index()


def _step_combat(engine: MatchEngine, ctx: FrameContext) -> None:
    """COMBAT: Resolve collisions and damage."""
    ctx.results["combat"] = engine.combat_system.update(ctx.dt)


def _step_consumption(engine: MatchEngine, ctx: FrameContext) -> None:
    """CONSUMPTION: Eat from the resource."""
    ctx.results["consumption"] = engine.consumption_system.update(ctx.dt)


def _step_controllers(engine: MatchEngine, ctx: FrameContext) -> None:
    """CONTROLLERS: Retune intensity, damage and consumption."""
    ctx.results["controllers"] = engine.controller_system.update(ctx.dt)


def _step_match_state(engine: MatchEngine, ctx: FrameContext) -> None:
    """MATCH_STATE: Endgame activation and end conditions."""
    ctx.results["match_state"] = engine.match_state_system.update(ctx.dt)


def _step_cull(engine: MatchEngine, ctx: FrameContext) -> None:
    """CULL: Eliminate supplementary actors on schedule."""
    ctx.results["cull"] = engine.cull_system.update(ctx.dt)


def default_pipeline() -> EnginePipeline:
    """Build the canonical tick pipeline.

    Phase Order:
        1. frame_start: Advance clock, radius schedule, pre-clamp
        2. motion: Integrate velocity, resource and wall bounces
        3. spatial_index: Rebuild the collision grid
        4. combat: Collisions and damage
        5. consumption: Eating, score and endgame bonuses
        6. controllers: Intensity, damage scale, consumption scale
        7. match_state: Endgame activation, end conditions
        8. cull: Supplementary actor schedule

    Returns:
        EnginePipeline configured with the canonical step order
    """
    return EnginePipeline(
        [
            PipelineStep("frame_start", _step_frame_start),
            PipelineStep("motion", _step_motion),
            PipelineStep("spatial_index", _step_spatial_index),
            PipelineStep("combat", _step_combat),
            PipelineStep("consumption", _step_consumption),
            PipelineStep("controllers", _step_controllers),
            PipelineStep("match_state", _step_match_state),
            PipelineStep("cull", _step_cull),
        ]
    )
