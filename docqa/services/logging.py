"""
Structured logging for the API and the question pipeline
"""
import functools
import logging
import sys
import time

import structlog

from docqa.config import LOG_LEVEL

QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "pypdf": logging.ERROR,
    "multipart": logging.WARNING,
}


def configure_logging(level: str = LOG_LEVEL):
    """JSON log lines on stdout, one event per line"""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def log_performance(operation: str):
    """Time a pipeline operation and log its outcome"""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = structlog.get_logger("pipeline")
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "operation_failed",
                    operation=operation,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                    error=str(e),
                )
                raise
            logger.info(
                "operation_completed",
                operation=operation,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return result
        return wrapper
    return decorator


def _request_fields(request) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
        "origin": request.headers.get("origin", "unknown"),
    }


def log_api_request(request, response=None, error=None):
    """Log the start, completion or failure of an API request"""
    logger = structlog.get_logger("api")
    fields = _request_fields(request)

    if error is not None:
        logger.error(
            "api_request_failed",
            error=str(error),
            error_type=type(error).__name__,
            status_code=getattr(error, "status_code", 500),
            **fields,
        )
    elif response is not None:
        logger.info(
            "api_request_completed",
            status_code=response.status_code,
            response_time=getattr(response, "response_time", None),
            **fields,
        )
    else:
        logger.info("api_request_started", **fields)
