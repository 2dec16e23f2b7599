"""Core domain for Mentor Connect: models, identifiers and errors."""
