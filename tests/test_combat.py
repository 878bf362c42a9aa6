"""Tests for collision resolution, damage and the last-standing rule."""

import math

import pytest

from royale.entities.actor import Actor
from royale.math_utils import Vector2
from royale.roster import RosterEntry
from royale.simulation import MatchEngine
from royale.systems.combat import hit_damage, pick_last_standing


def _actor(actor_id):
    entry = RosterEntry(actor_id, actor_id, 10.0, 0.0, 0.0)
    return Actor(entry, 0, Vector2(), Vector2())


def _stage_head_on(engine, a, b, gap=50.0):
    """Place a and b overlapping and moving straight at each other."""
    speed = engine.config.max_speed
    a.pos.update(300.0, 400.0)
    a.vel.update(speed, 0.0)
    b.pos.update(300.0 + gap, 400.0)
    b.vel.update(-speed, 0.0)


def _set_stats(actor, health, attack, defense=0.0):
    actor.health = health
    actor.attack = attack
    actor.defense = defense


class TestHitDamage:
    def test_formula(self):
        assert hit_damage(20, 5, 10, 1.5, 2.0) == pytest.approx(45.0)

    def test_floored_at_zero(self):
        assert hit_damage(5, -10, 20, 2.0, 3.0) == 0.0


class TestPickLastStanding:
    def test_higher_health_survives(self):
        a, b = _actor("a"), _actor("b")
        assert pick_last_standing(a, -3.0, b, -1.0) == (b, a)

    def test_tie_goes_to_lower_id(self):
        a, b = _actor("zed"), _actor("amy")
        assert pick_last_standing(a, -2.0, b, -2.0) == (b, a)


def test_colliding_pair_is_separated_and_bounced(make_roster):
    engine = MatchEngine(make_roster(2, health=1000.0, attack=0.0, defense=0.0), seed=1)
    a, b = engine.match.actors
    _stage_head_on(engine, a, b)

    engine.step(0.0)

    dist = math.hypot(b.pos.x - a.pos.x, b.pos.y - a.pos.y)
    assert dist == pytest.approx(2 * engine.match.base_radius)
    speed = engine.config.max_speed
    assert a.vel.x == pytest.approx(-speed)
    assert b.vel.x == pytest.approx(speed)
    assert engine.combat_system.total_collisions == 1


def test_last_two_never_eliminate_each_other(make_roster):
    engine = MatchEngine(make_roster(2), seed=1)
    a, b = engine.match.actors
    _stage_head_on(engine, a, b)
    _set_stats(a, health=1.0, attack=200.0)
    _set_stats(b, health=1.0, attack=200.0)

    engine.step(0.0)

    assert engine.match.live_count == 1
    survivor = a if a.alive else b
    assert survivor.health == 1.0
    assert engine.is_ended
    assert engine.match.end_reason.value == "single_survivor"


def test_last_standing_keeps_healthier_actor(make_roster):
    engine = MatchEngine(make_roster(2), seed=1)
    a, b = engine.match.actors
    _stage_head_on(engine, a, b)
    _set_stats(a, health=1.0, attack=0.0)
    _set_stats(b, health=100.0, attack=200.0)

    engine.step(0.0)

    assert b.alive and not a.alive
    assert 0 < b.health <= 100.0
    assert a.eliminated_at == 0.0


def test_three_alive_allows_double_elimination(make_roster):
    engine = MatchEngine(make_roster(3), seed=1)
    a, b, c = engine.match.actors
    _stage_head_on(engine, a, b)
    c.pos.update(900.0, 1700.0)
    _set_stats(a, health=1.0, attack=200.0)
    _set_stats(b, health=1.0, attack=200.0)

    engine.step(0.0)

    assert not a.alive and not b.alive
    assert c.alive
    assert engine.match.end_reason.value == "single_survivor"


def test_non_overlapping_actors_do_not_fight(make_roster):
    engine = MatchEngine(make_roster(2, attack=100.0), seed=1)
    a, b = engine.match.actors
    _stage_head_on(engine, a, b, gap=3 * engine.match.base_radius)
    health = (a.health, b.health)

    engine.step(0.0)

    assert (a.health, b.health) == health
    assert engine.combat_system.total_collisions == 0
