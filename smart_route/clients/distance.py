"""Travel estimate from the Google Distance Matrix API."""
from typing import Any, Dict, Optional, Protocol

import requests

from smart_route import config
from smart_route.config import Settings
from smart_route.exceptions import DistanceUnavailableError, UpstreamError
from smart_route.http_client import create_http_session, describe_request_error, response_status_code
from smart_route.logging_config import get_logger
from smart_route.models import TravelEstimate

logger = get_logger(__name__)


class TravelEstimator(Protocol):
    """Source of travel distance/duration between two addresses."""

    def estimate(self, origin: str, destination: str) -> TravelEstimate:
        ...


class DistanceMatrixClient:
    """Single origin/destination lookups against the Distance Matrix API."""

    SERVICE = "distance_matrix"

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        """
        Args:
            settings: Application settings (API key, timeouts)
            session: HTTP session (default: retrying session from create_http_session)
        """
        self.url = config.DISTANCE_MATRIX_URL
        self.api_key = settings.google_api_key
        self.session = session or create_http_session(
            max_retries=settings.http_max_retries,
            timeout=settings.http_timeout
        )

    def estimate(self, origin: str, destination: str) -> TravelEstimate:
        """
        Get distance and duration from origin to destination.

        Args:
            origin: Previous appointment location (or staff address)
            destination: Customer address

        Returns:
            TravelEstimate with duration in minutes (seconds / 60, unrounded)

        Raises:
            DistanceUnavailableError: If the element status is not OK
            UpstreamError: On network/HTTP failure or a rejected request
        """
        params = {
            "origins": origin,
            "destinations": destination,
            "key": self.api_key,
        }
        logger.debug("distance_matrix_request")

        try:
            response = self.session.get(self.url, params=params)
            data = response.json()
        except requests.exceptions.RequestException as e:
            reason = describe_request_error(e)
            logger.warning("distance_matrix_failed", reason=reason)
            raise UpstreamError(
                f"Failed to fetch travel distance: {reason}",
                service=self.SERVICE,
                status_code=response_status_code(e)
            ) from None
        except ValueError as e:
            raise UpstreamError(
                f"Invalid JSON from distance matrix API: {e}",
                service=self.SERVICE
            ) from e

        return self._parse_element(data)

    def _parse_element(self, data: Dict[str, Any]) -> TravelEstimate:
        """
        Parse the first element of the matrix.

        Response format:
        {
            "status": "OK",
            "rows": [
                {"elements": [
                    {"status": "OK",
                     "distance": {"text": "12.3 mi", "value": 19795},
                     "duration": {"text": "20 mins", "value": 1200}}
                ]}
            ]
        }
        """
        if not isinstance(data, dict):
            raise UpstreamError("Invalid distance matrix payload", service=self.SERVICE)

        status = data.get("status", "OK")
        if status != "OK":
            detail = data.get("error_message") or status
            logger.error("distance_matrix_rejected", status=status)
            raise UpstreamError(
                f"Distance matrix request failed: {detail}",
                service=self.SERVICE
            )

        rows = data.get("rows") or [{}]
        elements = rows[0].get("elements") or [None]
        element = elements[0]

        if not element or element.get("status") != "OK":
            element_status = element.get("status") if element else None
            logger.warning("distance_unavailable", element_status=element_status)
            raise DistanceUnavailableError(element_status=element_status)

        try:
            estimate = TravelEstimate(
                distance_text=element["distance"]["text"],
                duration_text=element["duration"]["text"],
                duration_minutes=element["duration"]["value"] / 60,
            )
        except (KeyError, TypeError) as e:
            raise UpstreamError(
                f"Incomplete distance matrix element: {e}",
                service=self.SERVICE
            ) from e

        logger.info(
            "distance_matrix_estimate",
            distance=estimate.distance_text,
            duration_minutes=estimate.duration_minutes
        )
        return estimate
