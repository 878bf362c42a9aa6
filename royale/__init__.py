"""Pizza Royale simulation core.

Actors bounce around an arena, fight on contact and race to eat a shared
pizza. Adaptive controllers keep every match inside a 20-30 second window
whatever the roster size. The package is pure computation: rosters and
configuration in, snapshots and outcomes out.
"""

from royale.config import MatchConfig
from royale.exceptions import (
    ConfigurationError,
    RosterError,
    RoyaleError,
    SimulationError,
    SpawnError,
)
from royale.roster import RosterEntry, demo_roster
from royale.simulation import MatchEngine
from royale.snapshots import MatchOutcome, MatchSnapshot
from royale.state_machine import EndReason, MatchPhase
from royale.util.rng import MinStdRandom, MissingRNGError, StdlibRandom

__version__ = "1.0.0"

__all__ = [
    "MatchConfig",
    "MatchEngine",
    "MatchOutcome",
    "MatchSnapshot",
    "MatchPhase",
    "EndReason",
    "RosterEntry",
    "demo_roster",
    "MinStdRandom",
    "StdlibRandom",
    "RoyaleError",
    "ConfigurationError",
    "RosterError",
    "SimulationError",
    "SpawnError",
    "MissingRNGError",
]
