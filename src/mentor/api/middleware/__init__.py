"""Middleware for the Mentor Connect API.

Note: For CORS, use FastAPI's built-in CORSMiddleware from starlette.middleware.cors
"""

from mentor.api.middleware.correlation import CorrelationMiddleware

__all__ = [
    "CorrelationMiddleware",
]
