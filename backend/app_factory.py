"""Builds the Pizza Royale FastAPI app.

All server state lives on an ``AppContext`` that ``create_app`` attaches
to ``app.state.context``. Tests pass their own context to get an isolated
app:

    runner = MatchRunner(default_players=10)
    client = TestClient(create_app(context=AppContext(match_runner=runner)))
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import __version__
from backend.logging_config import configure_logging
from backend.match_runner import MatchRunner
from backend.models import HealthResponse
from royale.config.server import API_PORT_ENV, DEFAULT_API_PORT


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in ("1", "true", "yes")


def _env_origins() -> List[str]:
    return [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")]


@dataclass
class AppContext:
    """Everything the routes need, in one place."""

    match_runner: MatchRunner = field(default_factory=MatchRunner)
    server_version: str = __version__
    api_port: int = field(default_factory=lambda: int(os.getenv(API_PORT_ENV, DEFAULT_API_PORT)))
    production_mode: bool = field(default_factory=lambda: _env_flag("PRODUCTION"))
    allowed_origins: List[str] = field(default_factory=_env_origins)
    started_at: float = field(default_factory=time.time)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("backend"))

    def get_health(self) -> HealthResponse:
        return HealthResponse(
            status="ok",
            version=self.server_version,
            uptime_seconds=round(time.time() - self.started_at, 3),
            matches_run=self.match_runner.matches_run,
        )


def create_app(
    *,
    production_mode: Optional[bool] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Return a configured app.

    Args:
        production_mode: Forces production mode on or off; by default the
            PRODUCTION env var decides. Production hides the docs pages
            and restricts CORS to ALLOWED_ORIGINS.
        context: Context to serve from; a fresh one is built if omitted
    """
    ctx = context or AppContext()
    if production_mode is not None:
        ctx.production_mode = production_mode
    ctx.logger = configure_logging(extra_loggers=("backend", "royale"))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        mode = "production" if ctx.production_mode else "development"
        ctx.logger.info(f"Pizza Royale API {ctx.server_version} up on :{ctx.api_port} ({mode})")
        yield
        ctx.logger.info(f"Pizza Royale API stopping; {ctx.match_runner.matches_run} matches run")

    docs = not ctx.production_mode
    app = FastAPI(
        title="Pizza Royale API",
        version=ctx.server_version,
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
    )
    app.state.context = ctx

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ctx.allowed_origins if ctx.production_mode else ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return app.state.context.get_health()

    _include_routers(app, ctx)
    return app


def _include_routers(app: FastAPI, ctx: AppContext) -> None:
    from backend.routers.matches import setup_matches_router

    app.include_router(setup_matches_router(ctx.match_runner))
    # Mounted sub-routers carry no path of their own
    paths = [getattr(route, "path", None) for route in app.routes]
    ctx.logger.debug(f"Routes: {sorted(path for path in paths if path)}")
