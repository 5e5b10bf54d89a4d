"""API package initialization."""
from smart_route.api.models import ErrorResponse, SlotCheckRequest, SlotCheckResponse

__all__ = ["ErrorResponse", "SlotCheckRequest", "SlotCheckResponse"]
