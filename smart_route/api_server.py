"""FastAPI server for travel-aware slot availability checks.

Features:
- Liveness string on GET /
- Health check endpoint
- POST /check-available-slots
- Structured logging with X-Request-ID
- {"error": ...} bodies for every failure
"""
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from smart_route.api.dependencies import get_settings, get_slot_service
from smart_route.api.models import ErrorResponse, SlotCheckRequest, SlotCheckResponse
from smart_route.config import SERVICE_NAME, SERVICE_VERSION
from smart_route.exceptions import SmartRouteError, ValidationError
from smart_route.logging_config import get_logger, request_id_middleware, setup_structured_logging
from smart_route.service import SlotCheckService

logger = get_logger(__name__)

LIVENESS_MESSAGE = "GHL Smart Appointment Route is running successfully!"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and report missing credentials at startup."""
    settings = get_settings()
    setup_structured_logging(settings.log_level)

    missing = [
        name for name, value in (
            ("GOOGLE_API_KEY", settings.google_api_key),
            ("GHL_API_KEY", settings.ghl_api_key),
            ("GHL_CALENDAR_ID", settings.ghl_calendar_id),
        ) if not value
    ]
    if missing:
        logger.warning("missing_configuration", variables=missing)

    logger.info("server_starting", port=settings.port)
    yield
    logger.info("server_shutting_down")


app = FastAPI(
    title="GHL Smart Appointment Route",
    description="Checks whether a requested slot leaves enough travel time after the previous appointment",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

# Also answers unhandled exceptions, so error responses keep their X-Request-ID
app.middleware("http")(request_id_middleware)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump()
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body sent as JSON that does not decode."""
    logger.warning("invalid_request_body", errors=str(exc.errors()))
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


@app.get("/", response_class=PlainTextResponse, tags=["Root"])
def root():
    """Liveness string."""
    return LIVENESS_MESSAGE


@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint for load balancers."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION
    }


@app.post(
    "/check-available-slots",
    tags=["Slots"],
    response_model=SlotCheckResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": SlotCheckRequest.model_json_schema()}}
        }
    }
)
def check_available_slots(
    payload: Any = Body(None),
    service: SlotCheckService = Depends(get_slot_service)
):
    """
    Check a requested slot against the previous booked appointment.

    The body is taken as-is: anything that is not a JSON object, and any
    falsy field value, is reported as missing fields.

    Runs in FastAPI's thread pool; the two outbound calls block only this
    request.

    Returns:
        SlotCheckResponse

    Raises:
        400: Missing required fields
        500: Collaborator failure, no route, or unparseable date/time
    """
    try:
        return service.check(payload)
    except ValidationError as e:
        logger.info("slot_check_rejected", missing=e.missing)
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except SmartRouteError as e:
        logger.warning("slot_check_failed", error=str(e), error_type=type(e).__name__)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    except Exception as e:
        logger.error("slot_check_failed", error=str(e), error_type=type(e).__name__, exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
