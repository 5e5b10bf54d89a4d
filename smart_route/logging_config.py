"""Structured logging configuration.

Purpose: JSON-formatted logs with a per-request id for tracing one slot check
across the appointment lookup and the distance lookup.

Pattern: structlog with standard library integration + contextvars.
"""
import logging
import sys
import uuid

import structlog
from fastapi.responses import JSONResponse

REQUEST_ID_HEADER = "X-Request-ID"


def setup_structured_logging(log_level: str = "INFO"):
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO)
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get logger instance with structured logging.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Generate unique request ID."""
    return f"req-{uuid.uuid4().hex[:12]}"


async def request_id_middleware(request, call_next):
    """
    FastAPI HTTP middleware that tags every request with an id.

    The id is bound into structlog contextvars for the duration of the
    request and echoed back in the X-Request-ID response header. Exceptions
    that escape the route (including its dependencies) are answered here
    with a 500 {"error": ...} body so they carry the header too.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    try:
        response = await call_next(request)
    except Exception as exc:
        get_logger(__name__).error(
            "unhandled_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True
        )
        response = JSONResponse(status_code=500, content={"error": str(exc)})
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers[REQUEST_ID_HEADER] = request_id
    return response
