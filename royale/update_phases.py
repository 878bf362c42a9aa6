"""Phases of a match tick.

The enum is declared in execution order. ``EnginePipeline`` decides the
real order; systems tag themselves with ``@runs_in_phase`` so the
pipeline test can check the two agree.
"""

from enum import Enum, auto
from typing import Callable, TypeVar

T = TypeVar("T", bound=type)


class UpdatePhase(Enum):
    """One tick, top to bottom.

    FRAME_START    clock, radius schedule, pre-clamp
    MOTION         integrate, bounce off the resource and the walls
    SPATIAL_INDEX  rebuild the collision grid
    COMBAT         collisions and damage
    CONSUMPTION    eating, score, eat bonuses
    CONTROLLERS    retune damage and consumption scales
    MATCH_STATE    endgame activation and end conditions
    CULL           scheduled removal of supplementary actors
    """

    FRAME_START = auto()
    MOTION = auto()
    SPATIAL_INDEX = auto()
    COMBAT = auto()
    CONSUMPTION = auto()
    CONTROLLERS = auto()
    MATCH_STATE = auto()
    CULL = auto()


def runs_in_phase(phase: UpdatePhase) -> Callable[[T], T]:
    """Class decorator recording the phase a system belongs to."""

    def tag(cls: T) -> T:
        cls._phase = phase
        return cls

    return tag


__all__ = ["UpdatePhase", "runs_in_phase"]
