"""Tests for eating, bite brakes and the pacing guard."""

import math

import pytest

from royale.simulation import MatchEngine
from royale.systems.consumption import final_brake, late_brake, pacing_budget


class TestBrakes:
    def test_late_brake_inactive_early_or_crowded(self):
        assert late_brake(0.5, 10) == 1.0
        assert late_brake(0.7, 30) == 1.0

    def test_late_brake_scales_with_scarcity(self):
        assert late_brake(0.7, 5) == pytest.approx(1.0 - 0.45 * 20 / 25)

    def test_final_brake_only_in_endgame(self):
        assert final_brake(0.95, 0.05, endgame=False) == 1.0

    def test_final_brake_values(self):
        assert final_brake(0.95, 0.05, endgame=True) == pytest.approx(0.85)
        assert final_brake(0.9, 0.1, endgame=True) == 1.0
        assert final_brake(1.0, 0.0, endgame=True) == pytest.approx(0.775)


class TestPacingBudget:
    def test_only_the_part_above_the_reserve_is_available(self):
        assert pacing_budget(10.0, 10.0, 5.0, 20.0) == pytest.approx(2.5)

    def test_nothing_available_at_the_start(self):
        assert pacing_budget(10.0, 10.0, 0.0, 20.0) == 0.0

    def test_never_negative(self):
        assert pacing_budget(3.0, 10.0, 10.0, 20.0) == 0.0

    def test_skipped_ticks_are_caught_up(self):
        assert pacing_budget(10.0, 10.0, 19.99, 20.0) == pytest.approx(9.995)

    def test_lifted_after_min_duration(self):
        assert pacing_budget(4.0, 10.0, 20.0, 20.0) is None


def _place_on_rim(engine, actor, inset=5.0):
    match = engine.match
    # Past the start of the match so the pacing reserve leaves something to eat
    match.elapsed = 5.0
    center = match.resource.center
    ring = match.resource.radius + match.effective_radius(actor)
    actor.pos.update(center.x + ring - inset, center.y)
    actor.vel.update(-match.config.max_speed, 0.0)


def test_actor_on_rim_eats_and_is_parked_outside(make_roster):
    engine = MatchEngine(make_roster(10), seed=5)
    match = engine.match
    actor = match.actors[0]
    _place_on_rim(engine, actor)
    before = match.resource.remaining

    engine.consumption_system.update(1 / 60)

    eaten = before - match.resource.remaining
    assert eaten > 0
    assert actor.score == pytest.approx(eaten)
    center = match.resource.center
    dist = math.hypot(actor.pos.x - center.x, actor.pos.y - center.y)
    assert dist == pytest.approx(match.resource.radius + match.base_radius)
    assert actor.vel.x > 0


def test_endgame_bite_grants_bonuses(make_roster):
    engine = MatchEngine(make_roster(10, health=40.0, attack=12.0, defense=11.0), seed=5)
    match = engine.match
    assert match.endgame_active
    actor = match.actors[0]
    _place_on_rim(engine, actor)

    engine.consumption_system.update(1 / 60)

    assert actor.endgame_score == pytest.approx(actor.score)
    assert (actor.health, actor.attack, actor.defense) == (41.0, 14.0, 11.5)
    assert actor.vel.length() == pytest.approx(match.config.max_speed * 1.04)


def test_no_bonuses_before_endgame(make_roster):
    engine = MatchEngine(make_roster(60), seed=5)
    match = engine.match
    assert not match.endgame_active
    actor = match.actors[0]
    _place_on_rim(engine, actor)

    engine.consumption_system.update(1 / 60)

    assert actor.score > 0
    assert actor.endgame_score == 0.0
    assert actor.attack == 15.0


def test_actor_away_from_rim_does_not_eat(make_roster):
    engine = MatchEngine(make_roster(10), seed=5)
    match = engine.match
    for actor in match.actors:
        actor.pos.update(100.0, 100.0)
    before = match.resource.remaining

    engine.consumption_system.update(1 / 60)

    assert match.resource.remaining == before


def test_resource_is_monotone_and_scores_add_up(make_roster):
    engine = MatchEngine(make_roster(80), seed=21)
    match = engine.match
    capacity = match.resource.capacity
    previous = match.resource.remaining
    for _ in range(600):
        engine.step(1 / 60)
        remaining = match.resource.remaining
        assert remaining <= previous
        assert remaining >= 0.0
        previous = remaining

    total_score = sum(actor.score for actor in match.actors)
    assert total_score == pytest.approx(capacity - match.resource.remaining)
    assert total_score <= capacity + 1e-9


def test_pacing_guard_prevents_early_depletion(make_roster):
    # Health high enough that nobody dies, and everyone eats fast
    engine = MatchEngine(
        make_roster(10, health=1_000_000.0, attack=0.0, defense=15.0, rate=1000.0), seed=9
    )
    match = engine.match
    capacity = match.resource.capacity
    min_duration = match.config.min_duration
    dt = 1 / 60

    while match.elapsed < min_duration - 0.5:
        engine.step(dt)
        assert not match.is_ended
        reserve = capacity * (min_duration - match.elapsed) / min_duration
        assert match.resource.remaining >= reserve - 1e-9

    assert match.resource.fraction_eaten > 0.5
