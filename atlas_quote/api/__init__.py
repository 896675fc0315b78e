"""
API layer for the quoting system.
"""

from .routes import router
from .schemas import QuoteRequest, QuoteResponse, HealthResponse

__all__ = [
    "router",
    "QuoteRequest",
    "QuoteResponse",
    "HealthResponse",
]
