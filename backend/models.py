"""Request and response models for the match API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from royale.config.resource import DEFAULT_CONSUMPTION_RATE
from royale.roster import RosterEntry


class RosterEntryModel(BaseModel):
    """A single roster entry as posted by clients (camelCase)."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    displayName: Optional[str] = None
    baseHealth: float
    baseDefense: float = 0.0
    baseAttack: float = 0.0
    consumptionRate: float = DEFAULT_CONSUMPTION_RATE
    portraitRef: Optional[str] = None

    def to_entry(self) -> RosterEntry:
        return RosterEntry.from_dict(self.model_dump())


class ConfigOverrides(BaseModel):
    """Optional overrides for the default MatchConfig.

    Only fields that are explicitly set are applied. Unknown fields are
    rejected so typos do not silently fall back to defaults. NaN and
    infinities are rejected as well.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    arena_width: Optional[float] = None
    arena_height: Optional[float] = None
    resource_center_x: Optional[float] = None
    resource_center_y: Optional[float] = None
    resource_radius: Optional[float] = None
    resource_capacity: Optional[float] = None
    max_speed: Optional[float] = None
    animation_cap: Optional[int] = None
    endgame_threshold: Optional[int] = None
    min_duration: Optional[float] = None
    target_duration: Optional[float] = None
    max_duration: Optional[float] = None
    hard_time_limit: Optional[float] = None
    max_dt: Optional[float] = None
    winner_display_time: Optional[float] = None
    cull_duration: Optional[float] = None
    spawn_margin: Optional[float] = None
    max_spawn_attempts: Optional[int] = None

    def to_overrides(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class RunMatchRequest(BaseModel):
    """Request body for running a headless match.

    Either ``roster`` or ``players`` selects the participants; with neither
    a demo roster of the default size is generated.
    """

    roster: Optional[List[RosterEntryModel]] = None
    players: Optional[int] = None
    seed: Optional[int] = None
    config: Optional[ConfigOverrides] = None


class HealthResponse(BaseModel):
    """Response for the health endpoint."""

    status: str
    version: str
    uptime_seconds: float
    matches_run: int
