"""Server and API configuration constants."""

# Default port for the match API
DEFAULT_API_PORT = 8000

# Interface the API binds to
DEFAULT_API_HOST = "0.0.0.0"

# Environment variable overriding the API port
API_PORT_ENV = "ROYALE_API_PORT"

# Upper bound on demo players generated per request
MAX_DEMO_PLAYERS = 5000
