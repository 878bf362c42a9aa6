"""Pytest configuration and fixtures for Pizza Royale tests."""

import pytest


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    from royale.util.rng import MinStdRandom

    return MinStdRandom(42)


@pytest.fixture
def make_roster():
    """Factory for rosters of identical entries with overridable stats."""
    from royale.roster import RosterEntry

    def _make(count, health=50.0, defense=15.0, attack=15.0, rate=20.0, prefix="a"):
        return [
            RosterEntry(
                actor_id=f"{prefix}{i:05d}",
                display_name=f"Actor {i}",
                base_health=health,
                base_defense=defense,
                base_attack=attack,
                consumption_rate=rate,
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def small_engine(make_roster):
    """A ten-actor match with a fixed seed."""
    from royale.simulation import MatchEngine

    return MatchEngine(make_roster(10), seed=7)
