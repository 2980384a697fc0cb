"""Rate limiting for the timetable API.

SlowAPI keyed by client IP. Storage comes from RATE_LIMIT_STORAGE_URI
(memory:// for a single instance, a Redis URL when several share limits).

Limits per endpoint type:
- High: endpoints that call the upstream CTAN API (timetables)
- Medium: local lookups (holidays)
- Low: lightweight endpoints (health)
"""

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from core.config import settings

logger = logging.getLogger(__name__)

# Proxy headers carrying the original client address, most specific first
CLIENT_IP_HEADERS = ("X-Forwarded-For", "CF-Connecting-IP", "X-Real-IP")
DEFAULT_RETRY_AFTER_SECONDS = 60


def get_client_identifier(request: Request) -> str:
    """Client IP for rate limiting, looking through reverse-proxy headers first."""
    for header in CLIENT_IP_HEADERS:
        value = request.headers.get(header)
        if value:
            # X-Forwarded-For is "client, proxy1, proxy2"
            return value.split(",")[0].strip()

    return get_remote_address(request)

limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=["200/minute"],  # Default limit for unlabeled endpoints
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
)


class RateLimits:
    """Centralized rate limit definitions."""

    # High - each request hits the upstream timetable API
    TIMETABLES = "60/minute"

    # Medium - served from the in-process holiday calendar
    HOLIDAYS = "200/minute"

    # Low - lightweight
    HEALTH = "1000/minute"
    DEFAULT = "200/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """JSON 429 with the limit that was hit and a Retry-After header."""
    retry_after = getattr(exc, "retry_after", DEFAULT_RETRY_AFTER_SECONDS)
    logger.warning(f"Rate limit hit by {get_client_identifier(request)} on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": f"Demasiadas peticiones ({exc.detail}), inténtalo de nuevo más tarde",
            "path": request.url.path,
            "retry_after": retry_after,
        },
        headers={
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": str(exc.detail) if exc.detail else "unknown",
        }
    )
