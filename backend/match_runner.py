"""Runs headless matches on behalf of the API.

Every call builds its own ``MatchEngine``; no match state is shared
between requests. The runner only keeps counters for the health endpoint.
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional

import orjson

from backend.models import RunMatchRequest
from royale.config.match_config import MatchConfig
from royale.config.server import MAX_DEMO_PLAYERS
from royale.exceptions import ConfigurationError
from royale.roster import RosterEntry, demo_roster
from royale.simulation import MatchEngine
from royale.simulation.engine import DEFAULT_HEADLESS_DT
from royale.snapshots import MatchOutcome
from royale.util.rng import resolve_rng

logger = logging.getLogger(__name__)

# Players generated when a request names neither a roster nor a count
DEFAULT_DEMO_PLAYERS = 100


def serialize_payload(payload: Dict[str, Any]) -> bytes:
    """Serialize an API payload to JSON bytes."""
    return orjson.dumps(payload)


class MatchRunner:
    """Builds and runs matches from API requests."""

    def __init__(
        self,
        base_config: Optional[MatchConfig] = None,
        default_players: int = DEFAULT_DEMO_PLAYERS,
        max_players: int = MAX_DEMO_PLAYERS,
        dt: float = DEFAULT_HEADLESS_DT,
    ) -> None:
        self.base_config = base_config or MatchConfig()
        self.default_players = default_players
        self.max_players = max_players
        self.dt = dt

        self._lock = threading.Lock()
        self.matches_run = 0
        self.last_run_id: Optional[str] = None

    def defaults(self) -> Dict[str, Any]:
        """Default configuration and roster limits."""
        return {
            "config": self.base_config.to_dict(),
            "defaultPlayers": self.default_players,
            "maxPlayers": self.max_players,
            "dt": self.dt,
        }

    def build_config(self, request: RunMatchRequest) -> MatchConfig:
        if request.config is None:
            return self.base_config
        config = self.base_config.with_overrides(**request.config.to_overrides())
        config.validate()
        return config

    def run(self, request: RunMatchRequest) -> MatchOutcome:
        """Run one match to its end and return the outcome.

        Raises:
            ConfigurationError: On an invalid roster, player count or config
            SimulationError: If the match cannot be spawned or does not finish
        """
        config = self.build_config(request)
        rng = resolve_rng(None, request.seed)

        if request.roster:
            roster: List[RosterEntry] = [model.to_entry() for model in request.roster]
        else:
            players = request.players if request.players is not None else self.default_players
            if not 1 <= players <= self.max_players:
                raise ConfigurationError(
                    f"players must be between 1 and {self.max_players}, got {players}"
                )
            roster = demo_roster(players, rng)

        start = time.perf_counter()
        engine = MatchEngine(roster, config, rng=rng, seed=request.seed)
        outcome = engine.run_to_completion(dt=self.dt, wait_for_display=False)
        elapsed_ms = (time.perf_counter() - start) * 1000

        with self._lock:
            self.matches_run += 1
            self.last_run_id = engine.match.run_id

        logger.info(
            f"Match {engine.match.run_id} finished: {outcome.end_reason} after "
            f"{outcome.duration_seconds:.2f}s simulated ({elapsed_ms:.0f} ms wall), "
            f"{outcome.survivor_count}/{outcome.total_participants} survivors"
        )
        return outcome
