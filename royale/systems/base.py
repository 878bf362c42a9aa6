"""Common shape of every match system.

A system wraps one rule of the game (motion, combat, eating, ...). It is
bound to a ``Match`` at construction and mutates it from ``update(dt)``,
which the engine pipeline calls once per tick. Subclasses only write
``_do_update``; the base class handles toggling, the frozen-match rule and
counting.

Once a match has ended only the clock and the cull schedule advance, so a
system runs after the end only if it sets ``runs_after_end = True``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from royale.match import Match
    from royale.update_phases import UpdatePhase


@dataclass
class SystemResult:
    """What one system did during one tick.

    Attributes:
        entities_affected: Actors the system changed
        entities_removed: Actors the system eliminated
        skipped: True if the system did not run (disabled or match ended)
        details: Per-system counters, e.g. {"collisions": 5}
    """

    entities_affected: int = 0
    entities_removed: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def skipped_result() -> "SystemResult":
        return SystemResult(skipped=True)

    @staticmethod
    def empty() -> "SystemResult":
        return SystemResult()


class BaseSystem(ABC):
    """Base class for match systems.

    Example:
        @runs_in_phase(UpdatePhase.CULL)
        class CullSystem(BaseSystem):
            runs_after_end = True

            def __init__(self, match):
                super().__init__(match, "Cull")

            def _do_update(self, dt):
                ...
    """

    # Set by @runs_in_phase
    _phase: Optional["UpdatePhase"] = None

    runs_after_end: bool = False

    def __init__(self, match: "Match", name: str) -> None:
        self._match = match
        self._name = name
        self.enabled = True
        self._update_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def match(self) -> "Match":
        return self._match

    @property
    def phase(self) -> Optional["UpdatePhase"]:
        return self._phase

    @property
    def update_count(self) -> int:
        """Ticks in which the system actually ran."""
        return self._update_count

    def update(self, dt: float) -> SystemResult:
        if not self.enabled or (self._match.is_ended and not self.runs_after_end):
            return SystemResult.skipped_result()
        result = self._do_update(dt)
        self._update_count += 1
        return result

    @abstractmethod
    def _do_update(self, dt: float) -> SystemResult:
        """Apply this system's rule for a step of ``dt`` seconds."""

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "enabled": self.enabled,
            "update_count": self._update_count,
            "phase": self._phase.name if self._phase else None,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, enabled={self.enabled})"
