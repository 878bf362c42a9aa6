"""ASGI entry point: ``uvicorn backend.main:app``."""

import os

import uvicorn

from backend.app_factory import create_app
from royale.config.server import API_PORT_ENV, DEFAULT_API_HOST, DEFAULT_API_PORT

app = create_app()


def main() -> None:
    """Serve the match API, reloading on code changes outside production."""
    production = os.getenv("PRODUCTION", "false").lower() == "true"
    uvicorn.run(
        "backend.main:app",
        host=DEFAULT_API_HOST,
        port=int(os.getenv(API_PORT_ENV, str(DEFAULT_API_PORT))),
        reload=not production,
    )


if __name__ == "__main__":
    main()
