"""Error taxonomy for the slot check pipeline.

Mapping to HTTP status codes lives in ``smart_route.api_server``:
- ValidationError -> 400
- everything else -> 500 with the exception message
"""


class SmartRouteError(Exception):
    """Base class for all application-level errors."""


class ValidationError(SmartRouteError):
    """Raised when a required request field is absent or empty."""

    def __init__(self, message: str = "Missing required fields", missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class UpstreamError(SmartRouteError):
    """Raised when a collaborator call fails (network, auth, bad payload)."""

    def __init__(self, message: str, service: str = "", status_code=None):
        super().__init__(message)
        self.service = service
        self.status_code = status_code


class DistanceUnavailableError(UpstreamError):
    """Raised when the mapping service has no route for the address pair."""

    def __init__(
        self,
        message: str = "Could not calculate distance between the given addresses",
        element_status=None,
    ):
        super().__init__(message, service="distance_matrix")
        self.element_status = element_status


class DateParseError(SmartRouteError):
    """Raised when requestedDate + requestedTime do not form a valid timestamp."""
