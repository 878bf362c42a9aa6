"""Motion and boundary system.

Moves every living actor along its velocity, pushes actors that ended up
inside the resource back onto its rim and bounces actors off the arena
walls. Speed magnitude is preserved by every bounce.

Architecture Notes:
- Extends BaseSystem for uniform system management
- Runs in UpdatePhase.MOTION
- Uses the base radius; the endgame size bonus only matters for combat
  and eating
"""

from typing import TYPE_CHECKING

from royale.config.arena import ROTATION_SPEED
from royale.config.combat import ENDGAME_SPEED_MULTIPLIER
from royale.entities.actor import Actor
from royale.math_utils import unit_normal
from royale.systems.base import BaseSystem, SystemResult
from royale.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from royale.match import Match


@runs_in_phase(UpdatePhase.MOTION)
class MotionSystem(BaseSystem):
    """Integrates actor motion and resolves resource and wall bounces."""

    def __init__(self, match: "Match") -> None:
        super().__init__(match, "Motion")

    def pre_clamp(self) -> int:
        """Pull actors inside the walls after the base radius changed.

        Runs at frame start, before motion. Velocities are left alone.

        Returns:
            Number of actors that were moved
        """
        match = self._match
        r = match.base_radius
        width = match.config.arena_width
        height = match.config.arena_height
        moved = 0
        for actor in match.actors:
            if not actor.alive:
                continue
            x = min(max(actor.pos.x, r), width - r)
            y = min(max(actor.pos.y, r), height - r)
            if x != actor.pos.x or y != actor.pos.y:
                actor.pos.update(x, y)
                moved += 1
        return moved

    def _do_update(self, dt: float) -> SystemResult:
        match = self._match
        multiplier = ENDGAME_SPEED_MULTIPLIER if match.endgame_active else 1.0
        step = dt * multiplier

        moved = 0
        resource_bounces = 0
        wall_bounces = 0
        for actor in match.actors:
            if not actor.alive:
                continue
            actor.pos.x += actor.vel.x * step
            actor.pos.y += actor.vel.y * step
            actor.rotation += ROTATION_SPEED * dt
            moved += 1

            if self._resolve_resource(actor):
                resource_bounces += 1
            if self._resolve_walls(actor):
                wall_bounces += 1

        return SystemResult(
            entities_affected=moved,
            details={"resource_bounces": resource_bounces, "wall_bounces": wall_bounces},
        )

    def _resolve_resource(self, actor: Actor) -> bool:
        """Push an actor that sank into the resource back onto the boundary."""
        resource = self._match.resource
        boundary = resource.radius - self._match.base_radius
        if boundary <= 0:
            return False

        dx = actor.pos.x - resource.center.x
        dy = actor.pos.y - resource.center.y
        dist_sq = dx * dx + dy * dy
        if dist_sq >= boundary * boundary:
            return False

        nx, ny, _ = unit_normal(dx, dy)
        actor.pos.update(resource.center.x + nx * boundary, resource.center.y + ny * boundary)
        actor.vel.reflect_inplace(nx, ny)
        return True

    def _resolve_walls(self, actor: Actor) -> bool:
        """Clamp to the arena, flip the clamped axes and restore full speed."""
        config = self._match.config
        r = self._match.base_radius
        pos = actor.pos
        vel = actor.vel
        bounced = False

        if pos.x <= r:
            pos.x = r
            vel.x = abs(vel.x)
            bounced = True
        elif pos.x >= config.arena_width - r:
            pos.x = config.arena_width - r
            vel.x = -abs(vel.x)
            bounced = True

        if pos.y <= r:
            pos.y = r
            vel.y = abs(vel.y)
            bounced = True
        elif pos.y >= config.arena_height - r:
            pos.y = config.arena_height - r
            vel.y = -abs(vel.y)
            bounced = True

        if bounced:
            vel.scale_to_inplace(config.max_speed)
        return bounced
