"""Match configuration.

``MatchConfig`` collects every tunable the engine reads. All fields default
to the constants in the sibling modules, so ``MatchConfig()`` is the
production setup; tests and the HTTP API override individual fields.
"""

import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional, Tuple

from royale.config.arena import (
    ANIMATION_CAP,
    ARENA_HEIGHT,
    ARENA_WIDTH,
    CULL_DURATION,
    MAX_DT,
    MAX_SPAWN_ATTEMPTS,
    RESOURCE_RADIUS,
    SPAWN_MARGIN,
    WINNER_DISPLAY_TIME,
)
from royale.config.combat import ENDGAME_THRESHOLD, MAX_SPEED
from royale.config.controllers import MAX_DURATION, MIN_DURATION, TARGET_DURATION
from royale.exceptions import ConfigurationError


@dataclass
class MatchConfig:
    """Configuration for a single match.

    Attributes:
        arena_width: Arena width in pixels
        arena_height: Arena height in pixels
        resource_center_x: Resource centre x (None = arena centre)
        resource_center_y: Resource centre y (None = arena centre)
        resource_radius: Radius of the resource disc
        resource_capacity: Explicit capacity; None derives it from the actor count
        max_speed: Fixed actor speed magnitude (pixels per second)
        animation_cap: Roster entries beyond this become supplementary actors
        endgame_threshold: Live count at which the endgame starts
        min_duration: Lower edge of the duration window (seconds)
        target_duration: Duration the consumption controller aims for
        max_duration: Upper edge of the duration window
        hard_time_limit: A still-running match ends here (None = max_duration)
        max_dt: Largest dt a single step accepts
        winner_display_time: Hold time between the end and the results
        cull_duration: Window in which supplementary actors are culled
        spawn_margin: Clearance between spawn points and the resource rim
        max_spawn_attempts: Rejection-sampling budget per spawn
    """

    arena_width: float = ARENA_WIDTH
    arena_height: float = ARENA_HEIGHT
    resource_center_x: Optional[float] = None
    resource_center_y: Optional[float] = None
    resource_radius: float = RESOURCE_RADIUS
    resource_capacity: Optional[float] = None

    max_speed: float = MAX_SPEED
    animation_cap: int = ANIMATION_CAP
    endgame_threshold: int = ENDGAME_THRESHOLD

    min_duration: float = MIN_DURATION
    target_duration: float = TARGET_DURATION
    max_duration: float = MAX_DURATION
    hard_time_limit: Optional[float] = None

    max_dt: float = MAX_DT
    winner_display_time: float = WINNER_DISPLAY_TIME
    cull_duration: float = CULL_DURATION
    spawn_margin: float = SPAWN_MARGIN
    max_spawn_attempts: int = MAX_SPAWN_ATTEMPTS

    @property
    def resource_center(self) -> Tuple[float, float]:
        """Resource centre, defaulting to the middle of the arena."""
        x = self.arena_width / 2 if self.resource_center_x is None else self.resource_center_x
        y = self.arena_height / 2 if self.resource_center_y is None else self.resource_center_y
        return (x, y)

    @property
    def time_limit(self) -> float:
        """Elapsed time at which a running match is force-ended."""
        return self.max_duration if self.hard_time_limit is None else self.hard_time_limit

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ConfigurationError: If any parameter is invalid
        """
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if value is not None and not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")

        if self.arena_width <= 0 or self.arena_height <= 0:
            raise ConfigurationError(
                f"Arena dimensions must be positive, got {self.arena_width}x{self.arena_height}"
            )

        if self.resource_radius <= 0:
            raise ConfigurationError(
                f"resource_radius must be positive, got {self.resource_radius}"
            )

        cx, cy = self.resource_center
        if not (0 <= cx <= self.arena_width and 0 <= cy <= self.arena_height):
            raise ConfigurationError(f"Resource centre ({cx}, {cy}) lies outside the arena")

        if self.resource_capacity is not None and self.resource_capacity <= 0:
            raise ConfigurationError(
                f"resource_capacity must be positive when set, got {self.resource_capacity}"
            )

        if self.max_speed <= 0:
            raise ConfigurationError(f"max_speed must be positive, got {self.max_speed}")

        if self.animation_cap < 1:
            raise ConfigurationError(f"animation_cap must be >= 1, got {self.animation_cap}")

        if self.endgame_threshold < 1:
            raise ConfigurationError(
                f"endgame_threshold must be >= 1, got {self.endgame_threshold}"
            )

        if not 0 < self.min_duration <= self.target_duration <= self.max_duration:
            raise ConfigurationError(
                "Duration window must satisfy 0 < min <= target <= max, got "
                f"{self.min_duration}/{self.target_duration}/{self.max_duration}"
            )

        if self.time_limit < self.min_duration:
            raise ConfigurationError(
                f"hard_time_limit ({self.time_limit}) must not precede min_duration"
            )

        if self.max_dt <= 0:
            raise ConfigurationError(f"max_dt must be positive, got {self.max_dt}")

        if self.winner_display_time < 0 or self.cull_duration < 0 or self.spawn_margin < 0:
            raise ConfigurationError("Display, cull and spawn margins must be non-negative")

        if self.max_spawn_attempts < 1:
            raise ConfigurationError(
                f"max_spawn_attempts must be >= 1, got {self.max_spawn_attempts}"
            )

    def with_overrides(self, **overrides: Any) -> "MatchConfig":
        """Return a copy with the given fields replaced."""
        unknown = set(overrides) - set(self.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown config fields: {sorted(unknown)}")
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchConfig":
        """Create config from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
