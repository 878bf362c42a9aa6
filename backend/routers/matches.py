"""Match API endpoints.

Matches are run synchronously: the endpoint is a plain ``def`` so FastAPI
executes it in its threadpool, and each request owns its engine.
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from backend.match_runner import MatchRunner, serialize_payload
from backend.models import RunMatchRequest
from royale.exceptions import ConfigurationError, SimulationError, SpawnError

logger = logging.getLogger(__name__)


def _json_response(payload: dict) -> Response:
    return Response(content=serialize_payload(payload), media_type="application/json")


def setup_matches_router(match_runner: MatchRunner) -> APIRouter:
    """Create and configure the matches router.

    Args:
        match_runner: The MatchRunner that builds and runs matches

    Returns:
        Configured APIRouter
    """
    router = APIRouter(prefix="/api/matches", tags=["matches"])

    @router.get("/defaults")
    async def get_defaults():
        """Default match configuration and roster limits."""
        return _json_response(match_runner.defaults())

    @router.post("/run")
    def run_match(request: RunMatchRequest):
        """Run a headless match and return its outcome payload.

        The roster may be given explicitly; otherwise ``players`` demo
        players are generated from ``seed``.
        """
        try:
            outcome = match_runner.run(request)
        except (ConfigurationError, SpawnError) as e:
            logger.info(f"Rejected match request: {e}")
            raise HTTPException(status_code=422, detail=str(e))
        except SimulationError as e:
            logger.error(f"Match failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

        return _json_response(outcome.to_payload())

    return router
