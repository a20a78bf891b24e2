"""
HTTP API for the notification pipeline.

This package provides a single FastAPI application that exposes:
- The notification endpoint running the full pipeline
- Channel discovery
- Saved notifications and shared-logger output for inspection
"""

from api.main import app

__all__ = ["app"]
