"""Mentor Connect: mentoring threads with a cache-aside read path."""

__version__ = "0.1.0"
