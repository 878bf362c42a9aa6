"""Main entry point for the Pizza Royale simulation.

This module provides command-line options to run the simulation:
- Web mode (default): FastAPI backend serving the match API
- Headless mode: Run a single match faster than realtime and print the result
"""

import argparse
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)

# Players simulated by default in headless mode
DEFAULT_PLAYERS = 100

# Rows of the final ranking printed after a headless run
RESULT_ROWS = 10


def run_web_server(port=None):
    """Run the web server with the match API."""
    from royale.config.arena import SEPARATOR_WIDTH
    from royale.config.server import DEFAULT_API_HOST, DEFAULT_API_PORT

    port = port or DEFAULT_API_PORT
    try:
        import uvicorn

        from backend.main import app

        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("PIZZA ROYALE - MATCH API")
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("")
        logger.info("POST http://localhost:%d/api/matches/run to run a match", port)
        logger.info("API docs available at http://localhost:%d/docs", port)
        logger.info("")
        logger.info("Press Ctrl+C to stop the server")
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("")

        uvicorn.run(app, host=DEFAULT_API_HOST, port=port)
    except ImportError as e:
        logger.error("Error: Required dependencies not installed: %s", e)
        logger.error("Install with: pip install -e .")
        sys.exit(1)


def run_headless(players: int, seed=None, export_outcome=None):
    """Run one match in headless mode and log the outcome.

    Args:
        players: Number of demo players to generate
        seed: Optional random seed for deterministic behavior
        export_outcome: Optional filename to write the outcome payload to as JSON
    """
    import orjson

    from royale import MatchEngine, RoyaleError, demo_roster
    from royale.config.arena import SEPARATOR_WIDTH
    from royale.util.rng import resolve_rng

    rng = resolve_rng(None, seed)
    try:
        roster = demo_roster(players, rng)
        engine = MatchEngine(roster, rng=rng, seed=seed)
        outcome = engine.run_to_completion(wait_for_display=False)
    except RoyaleError as e:
        logger.error("Match could not be run: %s", e)
        sys.exit(2)

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info(
        "Match ended (%s) after %.2fs with %d/%d survivors",
        outcome.end_reason,
        outcome.duration_seconds,
        outcome.survivor_count,
        outcome.total_participants,
    )
    if outcome.winner_id is not None:
        logger.info("Winner: %s (score %.2f)", outcome.winner_name, outcome.winner_score)
    logger.info("=" * SEPARATOR_WIDTH)
    for result in outcome.per_actor[:RESULT_ROWS]:
        if result.survived:
            status = "alive"
        elif result.eliminated_at is None:
            status = "supplementary"
        else:
            status = f"out at {result.eliminated_at:.2f}s"
        logger.info(
            "%4d. %-20s %8.2f  %s", result.rank, result.display_name, result.score, status
        )

    if export_outcome:
        with open(export_outcome, "wb") as f:
            f.write(orjson.dumps(outcome.to_payload(), option=orjson.OPT_INDENT_2))
        logger.info("Outcome exported to: %s", export_outcome)


def main():
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Pizza Royale battle simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the match API (default)
  python main.py

  # Quick headless match with 100 demo players
  python main.py --headless

  # Reproducible large match, exporting the result payload
  python main.py --headless --players 5000 --seed 42 --export-outcome outcome.json
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run a single match without the API server"
    )

    parser.add_argument(
        "--players",
        type=int,
        default=DEFAULT_PLAYERS,
        help=f"Number of demo players in headless mode (default: {DEFAULT_PLAYERS})",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--export-outcome",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Write the outcome payload to a JSON file (e.g., outcome.json)",
    )

    parser.add_argument(
        "--port", type=int, default=None, help="Port for the API server (default: 8000)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()

    if args.log_level:
        logging.getLogger().setLevel(args.log_level)

    if args.headless:
        logger.info("Starting headless match with %d players...", args.players)
        run_headless(args.players, seed=args.seed, export_outcome=args.export_outcome)
    else:
        run_web_server(port=args.port)


if __name__ == "__main__":
    main()
