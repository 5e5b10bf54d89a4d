"""Shared test fixtures."""
from datetime import datetime
from typing import List, Optional

import pytest
from unittest.mock import Mock

from smart_route.config import Settings
from smart_route.exceptions import DistanceUnavailableError
from smart_route.models import AppointmentRecord, TravelEstimate


class StubAppointments:
    """Minimal stub matching AppointmentLookup."""

    def __init__(self, record: Optional[AppointmentRecord] = None, error: Exception = None):
        self.record = record
        self.error = error
        self.calls: List[str] = []

    def latest_booked(self, calendar_id):
        self.calls.append(calendar_id)
        if self.error:
            raise self.error
        return self.record


class StubTravel:
    """Minimal stub matching TravelEstimator."""

    def __init__(self, estimate: Optional[TravelEstimate] = None, error: Exception = None):
        self.estimate_value = estimate
        self.error = error
        self.calls: List[tuple] = []

    def estimate(self, origin, destination):
        self.calls.append((origin, destination))
        if self.error:
            raise self.error
        if self.estimate_value is None:
            raise DistanceUnavailableError()
        return self.estimate_value


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials."""
    return Settings(
        google_api_key="google-test-key",
        ghl_api_key="ghl-test-key",
        ghl_calendar_id="cal-123",
        http_max_retries=0,
        http_timeout=5
    )


@pytest.fixture
def slot_payload() -> dict:
    """Valid request body."""
    return {
        "customerAddress": "123 Main St, Buffalo, NY",
        "staffAddress": "9990 Transit Rd, Buffalo, NY",
        "requestedDate": "2025-11-01",
        "requestedTime": "10:30 AM"
    }


@pytest.fixture
def previous_appointment() -> AppointmentRecord:
    """Booked appointment ending 2025-11-01 10:00 (naive local)."""
    return AppointmentRecord(
        end_time=datetime(2025, 11, 1, 10, 0),
        location="55 Elm St, Buffalo, NY"
    )


@pytest.fixture
def twenty_minute_trip() -> TravelEstimate:
    return TravelEstimate(distance_text="12.3 mi", duration_text="20 mins", duration_minutes=20.0)


@pytest.fixture
def mock_response():
    """Create mock requests.Response with a JSON body."""
    def _create(json_data=None, json_error: Exception = None):
        response = Mock()
        response.status_code = 200
        response.raise_for_status = Mock()
        if json_error:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_data
        return response
    return _create


@pytest.fixture
def stub_appointments():
    """Factory for StubAppointments."""
    return StubAppointments


@pytest.fixture
def stub_travel():
    """Factory for StubTravel."""
    return StubTravel
