"""
Rate limiting for the booking API.

Each endpoint is decorated with one of the category limits below. Limits are
"<count>/<period>" strings and can be overridden per category with
RATE_LIMIT_<CATEGORY>; RATE_LIMIT_ENABLED=false turns limiting off.

- default: form endpoints (quotes, documents, saved bookings)
- ai: greeting generation, one paid model call per request
- export: ZIP and workbook downloads
- health: root and health probes
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from fastapi import Request, FastAPI
from fastapi.responses import JSONResponse
import os
import logging

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMITS = {
    "default": "100/minute",
    "ai": "10/minute",
    "export": "20/minute",
    "health": "300/minute",
}

RATE_LIMITS = {
    category: os.getenv(f"RATE_LIMIT_{category.upper()}", limit)
    for category, limit in DEFAULT_RATE_LIMITS.items()
}

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

RETRY_AFTER_SECONDS = 60


def get_client_identifier(request: Request) -> str:
    """
    Key requests by the originating client address.

    Behind a proxy the address comes from X-Real-IP, then the first hop of
    X-Forwarded-For; otherwise from the socket.
    """
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    forwarded_for = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[RATE_LIMITS["default"]],
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window",
    enabled=RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 response in the same shape as the API's other error bodies."""
    limit = str(getattr(exc, "detail", "")) or "unknown"
    logger.warning(
        f"Rate limit {limit} hit by {get_client_identifier(request)} "
        f"on {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": "RateLimitExceeded",
            "message": f"Too many requests ({limit}). Try again in a minute.",
            "retry_after": RETRY_AFTER_SECONDS,
        },
        headers={
            "Retry-After": str(RETRY_AFTER_SECONDS),
            "X-RateLimit-Limit": limit,
        },
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter, its middleware and the 429 handler to the app."""
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    limits = ", ".join(f"{category}={limit}" for category, limit in RATE_LIMITS.items())
    logger.info(f"Rate limiting {'enabled' if limiter.enabled else 'disabled'}: {limits}")


def rate_limit(category: str):
    """Decorator applying the limit of a category to an endpoint."""
    return limiter.limit(RATE_LIMITS[category])


limit_default = rate_limit("default")
limit_ai = rate_limit("ai")
limit_export = rate_limit("export")
limit_health = rate_limit("health")
