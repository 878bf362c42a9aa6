"""Configuration package for the match simulation.

Named constants are grouped by concern (arena, combat, resource,
controllers); ``match_config`` assembles them into the ``MatchConfig``
dataclass handed to the engine.
"""

from royale.config.match_config import MatchConfig

__all__ = ["MatchConfig"]
