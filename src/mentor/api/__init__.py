"""HTTP API for Mentor Connect."""

from mentor.api.app import create_app

__all__ = ["create_app"]
