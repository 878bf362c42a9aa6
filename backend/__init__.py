"""Backend package for the Pizza Royale match API.

This package provides the FastAPI web server that validates rosters,
runs headless matches and returns their outcome payloads.
"""

__version__ = "1.0.0"
