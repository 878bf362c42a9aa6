"""Tests for motion, resource push-out and wall bounces."""

import math

import pytest

from royale.simulation import MatchEngine


@pytest.fixture
def engine(make_roster):
    return MatchEngine(make_roster(10), seed=3)


def _park_others(engine, keep):
    """Move every actor except ``keep`` to a quiet corner and stop it."""
    for actor in engine.match.actors:
        if actor is not keep:
            actor.eliminate(0.0)


def test_wall_bounce_restores_full_speed(engine):
    match = engine.match
    actor = match.actors[0]
    _park_others(engine, actor)
    r = match.base_radius
    actor.pos.update(r + 1, 500)
    actor.vel.update(-600.0, 300.0)

    engine.motion_system.update(1 / 60)

    assert actor.pos.x == r
    assert actor.vel.x > 0
    assert actor.vel.length() == pytest.approx(match.config.max_speed)


def test_corner_bounce_flips_both_axes(engine):
    match = engine.match
    actor = match.actors[0]
    _park_others(engine, actor)
    w, h = match.config.arena_width, match.config.arena_height
    r = match.base_radius
    actor.pos.update(w - r - 1, h - r - 1)
    speed = match.config.max_speed
    actor.vel.update(speed / math.sqrt(2), speed / math.sqrt(2))

    engine.motion_system.update(1 / 60)

    assert (actor.pos.x, actor.pos.y) == (w - r, h - r)
    assert actor.vel.x < 0 and actor.vel.y < 0
    assert actor.vel.length() == pytest.approx(speed)


def test_actor_inside_resource_is_pushed_to_boundary(engine):
    match = engine.match
    actor = match.actors[0]
    _park_others(engine, actor)
    center = match.resource.center
    boundary = match.resource.radius - match.base_radius
    actor.pos.update(center.x + boundary - 5, center.y)
    actor.vel.update(-match.config.max_speed, 0.0)

    engine.motion_system.update(1 / 60)

    dist = math.hypot(actor.pos.x - center.x, actor.pos.y - center.y)
    assert dist == pytest.approx(boundary)
    assert actor.vel.x == pytest.approx(match.config.max_speed)
    assert actor.vel.length() == pytest.approx(match.config.max_speed)


def test_endgame_slows_movement(engine):
    match = engine.match
    assert match.endgame_active
    actor = match.actors[0]
    _park_others(engine, actor)
    actor.pos.update(200, 300)
    actor.vel.update(600.0, 0.0)

    engine.motion_system.update(0.05)

    assert actor.pos.x == pytest.approx(200 + 600.0 * 0.05 * 0.7)


def test_pre_clamp_pulls_actors_inside_walls(engine):
    match = engine.match
    actor = match.actors[0]
    actor.pos.update(-40, match.config.arena_height + 40)
    velocity = actor.vel.copy()

    moved = engine.motion_system.pre_clamp()

    r = match.base_radius
    assert moved >= 1
    assert (actor.pos.x, actor.pos.y) == (r, match.config.arena_height - r)
    assert actor.vel == velocity


def test_speed_stays_at_max_over_many_ticks(make_roster):
    engine = MatchEngine(make_roster(120, health=1000.0), seed=11)
    max_speed = engine.config.max_speed
    for _ in range(120):
        engine.step(1 / 60)
        for actor in engine.match.live_actors():
            assert actor.vel.length() == pytest.approx(max_speed)
