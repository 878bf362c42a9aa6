"""Match phases and the transition table that guards them.

A match moves RUNNING -> ENDGAME -> ENDED, or straight from RUNNING to
ENDED. Nothing ever moves backwards; an illegal move is a bug in the
caller and raises immediately.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, List, Optional, TypeVar

S = TypeVar("S", bound=Enum)


class MatchPhase(Enum):
    """Phases of a match. Values are the wire names used in snapshots."""

    RUNNING = "running"
    ENDGAME = "endgame"  # slower movement, size and stat bonuses
    ENDED = "ended"  # frozen until the results are shown


class EndReason(Enum):
    """Why a match ended."""

    RESOURCE_DEPLETED = "resource_depleted"
    SINGLE_SURVIVOR = "single_survivor"
    TIME_LIMIT = "time_limit"


@dataclass(frozen=True)
class StateTransition(Generic[S]):
    """One recorded phase change."""

    from_state: S
    to_state: S
    tick: int
    elapsed: float
    reason: str


class StateMachine(Generic[S]):
    """Current state plus an explicit table of legal moves.

    Every accepted move is appended to ``history``; matches only ever make
    one or two, so the log is unbounded.
    """

    def __init__(self, initial: S, table: Dict[S, List[S]]) -> None:
        if initial not in table:
            raise ValueError(f"{initial} has no entry in the transition table")
        self._state = initial
        self._table = table
        self._history: List[StateTransition[S]] = []

    @property
    def state(self) -> S:
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        return list(self._history)

    def get_valid_transitions(self) -> List[S]:
        return list(self._table[self._state])

    def try_transition(
        self, target: S, tick: int = 0, elapsed: float = 0.0, reason: str = ""
    ) -> Optional[str]:
        """Move to ``target`` if allowed.

        Returns:
            None on success, else why the move was refused
        """
        allowed = self._table[self._state]
        if target not in allowed:
            names = ", ".join(state.name for state in allowed) or "nothing"
            return f"{self._state.name} -> {target.name} refused; {self._state.name} allows {names}"

        self._history.append(StateTransition(self._state, target, tick, elapsed, reason))
        self._state = target
        return None

    def transition(self, target: S, tick: int = 0, elapsed: float = 0.0, reason: str = "") -> S:
        """Like ``try_transition`` but raises ValueError on a refused move."""
        error = self.try_transition(target, tick, elapsed, reason)
        if error is not None:
            raise ValueError(error)
        return self._state

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state.name}, moves={len(self._history)})"


MATCH_PHASE_TRANSITIONS: Dict[MatchPhase, List[MatchPhase]] = {
    MatchPhase.RUNNING: [MatchPhase.ENDGAME, MatchPhase.ENDED],
    MatchPhase.ENDGAME: [MatchPhase.ENDED],
    MatchPhase.ENDED: [],
}


def create_match_state_machine() -> StateMachine[MatchPhase]:
    """A phase machine for a fresh match, starting in RUNNING."""
    return StateMachine(MatchPhase.RUNNING, MATCH_PHASE_TRANSITIONS)
