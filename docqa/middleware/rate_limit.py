"""
Rate limiting using slowapi
"""
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
import structlog

from docqa.config import (
    DEFAULT_RATE_LIMITS,
    EVALUATION_RATE_LIMIT,
    GENERATION_RATE_LIMIT,
    RATE_LIMIT_ENABLED,
    UPLOAD_RATE_LIMIT,
)

logger = structlog.get_logger()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=DEFAULT_RATE_LIMITS,
    enabled=RATE_LIMIT_ENABLED,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Reply 429 with the exceeded limit"""
    client = request.client.host if request.client else "unknown"
    logger.warning("rate_limit_exceeded", client_ip=client, limit=str(exc.detail))
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}. Please try again later."},
    )


def upload_limit():
    """Rate limit for document uploads"""
    return limiter.limit(UPLOAD_RATE_LIMIT)


def generation_limit():
    """Rate limit for question generation"""
    return limiter.limit(GENERATION_RATE_LIMIT)


def evaluation_limit():
    """Rate limit for answer evaluation"""
    return limiter.limit(EVALUATION_RATE_LIMIT)
