"""Tests for leaderboards, ranking and the outcome payload."""

from royale.simulation import MatchEngine
from royale.snapshots import build_outcome, leaderboard, pick_winner, rank_actors


def _scored_engine(make_roster):
    engine = MatchEngine(make_roster(5), seed=8)
    a, b, c, d, e = engine.match.actors
    a.score, b.score, c.score, d.score, e.score = 1.0, 4.0, 4.0, 9.0, 2.0
    return engine


def test_leaderboard_orders_living_by_score(make_roster):
    engine = _scored_engine(make_roster)
    engine.match.actors[3].eliminate(1.0)
    ids = [a.actor_id for a in leaderboard(engine.match)]
    # b and c tie on score; the lower id goes first
    assert ids == ["a00001", "a00002", "a00004", "a00000"]
    assert engine.leaderboard(limit=2) == leaderboard(engine.match, 2)


def test_winner_is_top_living_scorer(make_roster):
    engine = _scored_engine(make_roster)
    assert pick_winner(engine.match).actor_id == "a00003"


def test_ranking_survivors_then_fallen(make_roster):
    engine = _scored_engine(make_roster)
    match = engine.match
    a, b, c, d, e = match.actors
    d.eliminate(3.0)
    e.eliminate(7.0)
    a.eliminate(7.0)

    ranked = rank_actors(match)

    assert [r.actor_id for r in ranked] == ["a00001", "a00002", "a00004", "a00000", "a00003"]
    assert [r.rank for r in ranked] == [1, 2, 3, 4, 5]
    assert [r.survived for r in ranked] == [True, True, False, False, False]
    assert ranked[2].eliminated_at == 7.0


def test_outcome_payload_is_camel_case(make_roster):
    engine = _scored_engine(make_roster)
    match = engine.match
    for actor in match.actors[1:]:
        actor.eliminate(2.0)
    match.elapsed = 2.0
    engine.match_state_system.update(0.0)

    payload = build_outcome(match).to_payload()

    assert payload["endReason"] == "single_survivor"
    assert payload["winnerId"] == "a00000"
    assert payload["winnerName"] == "Actor 0"
    assert payload["winnerScore"] == 1.0
    assert payload["durationSeconds"] == 2.0
    assert payload["totalParticipants"] == 5
    assert payload["survivorCount"] == 1
    first = payload["perActor"][0]
    assert set(first) == {"id", "displayName", "score", "survived", "rank", "eliminatedAt"}
    assert first["eliminatedAt"] is None
