"""Plain-data views of a match for renderers and persistence.

``MatchSnapshot`` is produced after every step and carries everything a
renderer needs for one frame. ``MatchOutcome`` is the terminal result;
``to_payload`` gives the camelCase mapping an external persistence layer
submits as-is.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from royale.entities.actor import Actor
    from royale.match import Match

# Number of leader ids carried by every snapshot
SNAPSHOT_LEADERS = 3


@dataclass(frozen=True)
class ActorView:
    actor_id: str
    display_name: str
    x: float
    y: float
    radius: float
    health_ratio: float
    score: float
    rotation: float


@dataclass(frozen=True)
class SupplementaryView:
    actor_id: str
    x: float
    y: float


@dataclass(frozen=True)
class MatchSnapshot:
    """State of a match after one step.

    Attributes:
        elapsed: Match clock in seconds
        phase: Phase wire name ("running", "endgame", "ended")
        live_count: Living simulated actors
        total_alive: Living simulated plus supplementary actors
        resource_ratio: Remaining resource as a fraction of capacity
        damage_scale: Current damage-scale controller output
        consumption_scale: Current consumption-scale controller output
        actors: Living simulated actors
        supplementary: Living supplementary actors
        leaders: Ids of the top living actors by score
        end_reason: Wire name of the end reason once ended
        results_ready: True once the display hold after the end is over
    """

    elapsed: float
    phase: str
    live_count: int
    total_alive: int
    resource_ratio: float
    damage_scale: float
    consumption_scale: float
    actors: List[ActorView] = field(default_factory=list)
    supplementary: List[SupplementaryView] = field(default_factory=list)
    leaders: List[str] = field(default_factory=list)
    end_reason: Optional[str] = None
    results_ready: bool = False


@dataclass(frozen=True)
class ActorResult:
    actor_id: str
    display_name: str
    score: float
    survived: bool
    rank: int
    eliminated_at: Optional[float] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.actor_id,
            "displayName": self.display_name,
            "score": self.score,
            "survived": self.survived,
            "rank": self.rank,
            "eliminatedAt": self.eliminated_at,
        }


@dataclass(frozen=True)
class MatchOutcome:
    """Terminal result of a match."""

    duration_seconds: float
    end_reason: str
    winner_id: Optional[str]
    winner_name: Optional[str]
    winner_score: float
    per_actor: List[ActorResult]
    total_participants: int
    survivor_count: int

    def to_payload(self) -> Dict[str, Any]:
        """CamelCase mapping ready for JSON serialization."""
        return {
            "durationSeconds": self.duration_seconds,
            "endReason": self.end_reason,
            "winnerId": self.winner_id,
            "winnerName": self.winner_name,
            "winnerScore": self.winner_score,
            "perActor": [result.to_payload() for result in self.per_actor],
            "totalParticipants": self.total_participants,
            "survivorCount": self.survivor_count,
        }


# =============================================================================
# Builders
# =============================================================================


def _by_score(actor: "Actor") -> Tuple[float, str]:
    return (-actor.score, actor.actor_id)


def leaderboard(match: "Match", limit: int = 10) -> List["Actor"]:
    """Living actors sorted by score (descending), ties by actor_id."""
    return sorted(match.live_actors(), key=_by_score)[:limit]


def pick_winner(match: "Match") -> Optional["Actor"]:
    """Highest-scoring living actor; ties go to the lowest actor_id."""
    board = leaderboard(match, limit=1)
    return board[0] if board else None


def build_snapshot(match: "Match") -> MatchSnapshot:
    actors = [
        ActorView(
            actor_id=actor.actor_id,
            display_name=actor.display_name,
            x=actor.pos.x,
            y=actor.pos.y,
            radius=match.effective_radius(actor),
            health_ratio=actor.health_ratio,
            score=actor.score,
            rotation=actor.rotation,
        )
        for actor in match.actors
        if actor.alive
    ]
    supplementary = [
        SupplementaryView(actor_id=dot.actor_id, x=dot.pos.x, y=dot.pos.y)
        for dot in match.supplementary
        if dot.alive
    ]
    return MatchSnapshot(
        elapsed=match.elapsed,
        phase=match.phase.value,
        live_count=len(actors),
        total_alive=len(actors) + len(supplementary),
        resource_ratio=match.resource.remaining_ratio,
        damage_scale=match.damage.scale,
        consumption_scale=match.consumption.scale,
        actors=actors,
        supplementary=supplementary,
        leaders=[a.actor_id for a in leaderboard(match, SNAPSHOT_LEADERS)],
        end_reason=match.end_reason.value if match.end_reason else None,
        results_ready=match.results_ready,
    )


def rank_actors(match: "Match") -> List[ActorResult]:
    """Rank every participant.

    Survivors first by score; then eliminated simulated actors, later
    elimination first, then by score; supplementary actors last. Remaining
    ties break on actor_id.
    """
    survivors = sorted((a for a in match.actors if a.alive), key=_by_score)
    fallen = sorted(
        (a for a in match.actors if not a.alive),
        key=lambda a: (-(a.eliminated_at or 0.0), -a.score, a.actor_id),
    )

    results = []
    rank = 1
    for actor in survivors + fallen:
        results.append(
            ActorResult(
                actor_id=actor.actor_id,
                display_name=actor.display_name,
                score=actor.score,
                survived=actor.alive,
                rank=rank,
                eliminated_at=actor.eliminated_at,
            )
        )
        rank += 1

    dots = sorted(
        match.supplementary,
        key=lambda d: (not d.alive, -(d.eliminated_at or 0.0), d.actor_id),
    )
    for dot in dots:
        results.append(
            ActorResult(
                actor_id=dot.actor_id,
                display_name=dot.display_name,
                score=0.0,
                survived=False,
                rank=rank,
                eliminated_at=dot.eliminated_at,
            )
        )
        rank += 1
    return results


def build_outcome(match: "Match") -> MatchOutcome:
    """Terminal result of an ended match."""
    winner = pick_winner(match)
    survivors = match.live_count
    duration = match.ended_at if match.ended_at is not None else match.elapsed
    return MatchOutcome(
        duration_seconds=duration,
        end_reason=match.end_reason.value if match.end_reason else "",
        winner_id=winner.actor_id if winner else None,
        winner_name=winner.display_name if winner else None,
        winner_score=winner.score if winner else 0.0,
        per_actor=rank_actors(match),
        total_participants=match.total_participants,
        survivor_count=survivors,
    )
