"""Appointment lookup against the GoHighLevel (LeadConnector) appointments API.

Contract: only the single most recent booked appointment on a calendar is
considered. Implementations that look further ahead can be swapped in
without touching the availability decision.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

import requests

from smart_route import config
from smart_route.config import Settings
from smart_route.exceptions import UpstreamError
from smart_route.http_client import create_http_session, describe_request_error, response_status_code
from smart_route.logging_config import get_logger
from smart_route.models import AppointmentRecord

logger = get_logger(__name__)


class AppointmentLookup(Protocol):
    """Source of the previous booked appointment."""

    def latest_booked(self, calendar_id: str) -> Optional[AppointmentRecord]:
        ...


def parse_end_time(raw: Any) -> datetime:
    """
    Parse an appointment endTime.

    Accepts ISO-8601 strings (trailing 'Z' allowed) and epoch milliseconds.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(raw, bool):
        raise ValueError(f"Unsupported endTime: {raw!r}")
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"Unsupported endTime: {raw!r}")

    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class GHLAppointmentsClient:
    """Reads booked appointments from GoHighLevel."""

    SERVICE = "ghl"

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        """
        Args:
            settings: Application settings (API key, timeouts)
            session: HTTP session (default: retrying session from create_http_session)
        """
        self.base_url = config.GHL_BASE_URL
        self.headers = {
            "Authorization": f"Bearer {settings.ghl_api_key}",
            "Version": config.GHL_API_VERSION,
            "Accept": "application/json",
        }
        self.session = session or create_http_session(
            max_retries=settings.http_max_retries,
            timeout=settings.http_timeout
        )

    def latest_booked(self, calendar_id: str) -> Optional[AppointmentRecord]:
        """
        Fetch the most recent booked appointment.

        Args:
            calendar_id: GoHighLevel calendar id

        Returns:
            AppointmentRecord, or None when the calendar has no booked appointment

        Raises:
            UpstreamError: On network/HTTP failure or an unusable payload
        """
        params = {
            "calendarId": calendar_id,
            "status": "booked",
            "limit": 1,
            "sort": "desc",
        }
        logger.debug("ghl_appointments_request", calendar_id=calendar_id)

        try:
            response = self.session.get(
                f"{self.base_url}/appointments/",
                headers=self.headers,
                params=params
            )
            data = response.json()
        except requests.exceptions.RequestException as e:
            reason = describe_request_error(e)
            logger.warning("ghl_appointments_failed", reason=reason)
            raise UpstreamError(
                f"Failed to fetch appointments: {reason}",
                service=self.SERVICE,
                status_code=response_status_code(e)
            ) from None
        except ValueError as e:
            raise UpstreamError(
                f"Invalid JSON from appointments API: {e}",
                service=self.SERVICE
            ) from e

        return self._parse_latest(data)

    def _parse_latest(self, data: Dict[str, Any]) -> Optional[AppointmentRecord]:
        """Extract the first appointment from the API response."""
        appointments = data.get("appointments") if isinstance(data, dict) else None
        if not appointments:
            logger.info("ghl_no_previous_appointment")
            return None

        latest = appointments[0]
        if not isinstance(latest, dict):
            raise UpstreamError("Invalid appointment payload", service=self.SERVICE)

        try:
            end_time = parse_end_time(latest.get("endTime"))
        except ValueError as e:
            raise UpstreamError(
                f"Invalid appointment endTime: {e}",
                service=self.SERVICE
            ) from e

        record = AppointmentRecord(end_time=end_time, location=latest.get("location") or None)
        logger.info(
            "ghl_previous_appointment",
            end_time=record.end_time.isoformat(),
            has_location=record.location is not None
        )
        return record
