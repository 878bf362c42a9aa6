"""Pizza Royale exception hierarchy.

Centralised base classes so callers can catch construction-time failures
narrowly. A running match never raises: every tick is a total transform of
valid state, so these are only raised while building a match.
"""


class RoyaleError(Exception):
    """Root of all Pizza Royale domain exceptions."""


class ConfigurationError(RoyaleError):
    """Invalid or inconsistent match configuration."""


class RosterError(ConfigurationError):
    """The roster cannot be admitted into a match (empty, duplicate ids, bad stats)."""


class SimulationError(RoyaleError):
    """Errors while setting up or driving the simulation (spawning, run budget)."""


class SpawnError(SimulationError):
    """No spawn position could be found outside the resource safety radius."""
