"""Slot check orchestration.

Pipeline (strictly sequential, the distance lookup needs the previous
appointment's location):

    validate -> latest booked appointment -> travel estimate
             -> availability decision -> response payload
"""
from typing import Any, Dict

from smart_route.availability import decide_availability, format_slot_response
from smart_route.clients.appointments import AppointmentLookup
from smart_route.clients.distance import TravelEstimator
from smart_route.logging_config import get_logger
from smart_route.validation import parse_requested_datetime, validate_slot_request

logger = get_logger(__name__)


class SlotCheckService:
    """Runs one slot availability check per call."""

    def __init__(
        self,
        appointments: AppointmentLookup,
        travel: TravelEstimator,
        calendar_id: str
    ):
        self.appointments = appointments
        self.travel = travel
        self.calendar_id = calendar_id

    def check(self, payload: Any) -> Dict[str, Any]:
        """
        Check whether the requested slot leaves enough travel time.

        Args:
            payload: Decoded JSON request body

        Returns:
            Success payload (see SlotCheckResponse)

        Raises:
            ValidationError: Missing required fields (before any outbound call)
            UpstreamError: Appointment or distance lookup failed
            DistanceUnavailableError: No route between the two addresses
            DateParseError: requestedDate/requestedTime not a valid timestamp
        """
        slot_request = validate_slot_request(payload)

        previous = self.appointments.latest_booked(self.calendar_id)
        previous_location = (previous.location if previous else None) or slot_request.staff_address

        estimate = self.travel.estimate(previous_location, slot_request.customer_address)

        requested = parse_requested_datetime(
            slot_request.requested_date,
            slot_request.requested_time
        )
        verdict = decide_availability(
            previous.end_time if previous else None,
            estimate.duration_minutes,
            requested
        )

        logger.info(
            "slot_checked",
            available=verdict.available,
            has_previous=previous is not None,
            total_travel_minutes=verdict.total_travel_minutes,
            suggested_slot=verdict.suggested_slot
        )

        return format_slot_response(verdict, estimate, previous_location, previous)
