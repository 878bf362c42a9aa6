"""Tests for MatchConfig validation and roster handling."""

import math

import pytest

from royale.config import MatchConfig
from royale.exceptions import ConfigurationError, RosterError
from royale.roster import RosterEntry, demo_roster, partition_roster, validate_roster
from royale.simulation import MatchEngine
from royale.util.rng import MinStdRandom


class TestMatchConfig:
    def test_defaults_are_valid(self):
        config = MatchConfig()
        config.validate()
        assert config.resource_center == (540.0, 960.0)
        assert config.max_speed == 1080.0
        assert config.time_limit == config.max_duration

    def test_hard_time_limit_overrides_max_duration(self):
        assert MatchConfig(hard_time_limit=28.0).time_limit == 28.0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"arena_width": 0},
            {"resource_radius": -1},
            {"resource_center_x": 5000},
            {"resource_capacity": 0},
            {"max_speed": 0},
            {"animation_cap": 0},
            {"min_duration": 26.0},
            {"hard_time_limit": 5.0},
            {"max_dt": 0},
            {"cull_duration": -1},
            {"max_spawn_attempts": 0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ConfigurationError):
            MatchConfig().with_overrides(**overrides).validate()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"arena_width": math.nan},
            {"arena_height": math.inf},
            {"resource_radius": -math.inf},
            {"resource_center_x": math.nan},
            {"resource_capacity": math.inf},
            {"max_speed": math.nan},
            {"min_duration": math.nan},
            {"hard_time_limit": math.inf},
            {"max_dt": math.nan},
            {"winner_display_time": math.inf},
            {"cull_duration": math.nan},
            {"spawn_margin": math.nan},
        ],
    )
    def test_non_finite_values_rejected(self, overrides):
        with pytest.raises(ConfigurationError, match="finite"):
            MatchConfig().with_overrides(**overrides).validate()

    def test_unknown_override_rejected(self):
        with pytest.raises(ConfigurationError, match="arena_depth"):
            MatchConfig().with_overrides(arena_depth=3)

    def test_dict_round_trip_ignores_unknown_keys(self):
        data = MatchConfig(max_speed=900.0).to_dict()
        data["legacy_field"] = True
        assert MatchConfig.from_dict(data) == MatchConfig(max_speed=900.0)


def _entry(actor_id="x", **kwargs):
    fields = dict(display_name="X", base_health=10.0, base_defense=1.0, base_attack=1.0)
    fields.update(kwargs)
    return RosterEntry(actor_id, **fields)


class TestValidateRoster:
    def test_empty_roster(self):
        with pytest.raises(RosterError):
            validate_roster([])

    def test_duplicate_ids(self):
        with pytest.raises(RosterError, match="Duplicate"):
            validate_roster([_entry("a"), _entry("a")])

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"base_health": 0.0},
            {"base_defense": -1.0},
            {"base_attack": -1.0},
            {"consumption_rate": -0.5},
        ],
    )
    def test_bad_stats(self, kwargs):
        with pytest.raises(RosterError):
            validate_roster([_entry(**kwargs)])

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"base_health": math.nan},
            {"base_health": math.inf},
            {"base_defense": math.nan},
            {"base_attack": math.inf},
            {"consumption_rate": math.nan},
            {"consumption_rate": math.inf},
        ],
    )
    def test_non_finite_stats(self, kwargs):
        with pytest.raises(RosterError, match="non-finite"):
            validate_roster([_entry(**kwargs)])

    def test_engine_refuses_non_finite_roster(self, make_roster):
        roster = make_roster(60)
        roster[7] = _entry("bad", consumption_rate=math.nan)
        with pytest.raises(ConfigurationError):
            MatchEngine(roster, seed=3)

    def test_roster_error_is_a_configuration_error(self):
        assert issubclass(RosterError, ConfigurationError)


def test_from_dict_accepts_camel_and_short_keys():
    camel = RosterEntry.from_dict(
        {"id": 7, "displayName": "Seven", "baseHealth": 30, "baseDefense": 12, "baseAttack": 14}
    )
    short = RosterEntry.from_dict({"actor_id": "7", "hp": 30, "def": 12, "atk": 14, "eatRate": 20})
    assert camel.actor_id == short.actor_id == "7"
    assert (camel.base_health, camel.base_defense, camel.base_attack) == (30.0, 12.0, 14.0)
    assert (short.base_health, short.base_defense, short.base_attack) == (30.0, 12.0, 14.0)
    assert camel.display_name == "Seven"
    assert short.display_name == "7"


def test_from_dict_requires_id():
    with pytest.raises(RosterError):
        RosterEntry.from_dict({"hp": 3})


def test_partition_without_rng_takes_the_prefix():
    roster = [_entry(str(i)) for i in range(5)]
    simulated, overflow = partition_roster(roster, 3)
    assert [e.actor_id for e in simulated] == ["0", "1", "2"]
    assert [e.actor_id for e in overflow] == ["3", "4"]


def test_partition_draws_simulated_entries_from_rng():
    roster = [_entry(f"{i:03d}") for i in range(100)]
    simulated, overflow = partition_roster(roster, 10, MinStdRandom(1))
    ids = [e.actor_id for e in simulated]
    assert len(ids) == 10
    assert ids == sorted(ids)
    assert ids != [f"{i:03d}" for i in range(10)]
    assert {e.actor_id for e in overflow}.isdisjoint(ids)
    assert len(overflow) == 90

    again, _ = partition_roster(roster, 10, MinStdRandom(1))
    assert again == simulated


def test_partition_without_overflow_keeps_everyone():
    roster = [_entry(str(i)) for i in range(3)]
    assert partition_roster(roster, 3, MinStdRandom(1)) == (roster, [])


class TestDemoRoster:
    def test_deterministic_for_seed(self):
        assert demo_roster(20, MinStdRandom(3)) == demo_roster(20, MinStdRandom(3))

    def test_stat_ranges(self):
        roster = demo_roster(200, MinStdRandom(4))
        validate_roster(roster)
        for i, entry in enumerate(roster):
            assert entry.actor_id == f"player-{i + 1}"
            assert 8 <= entry.base_health <= 70
            assert 10 <= entry.base_defense <= 20
            assert 10 <= entry.base_attack <= 20
            assert entry.consumption_rate == 15 + i % 10

    def test_needs_a_player(self):
        with pytest.raises(RosterError):
            demo_roster(0, MinStdRandom(1))
