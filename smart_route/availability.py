"""Availability decision and response shaping.

The decision is a pure function over already-fetched values:

    total          = travel minutes + 15 min buffer
    next_possible  = previous appointment end + total
    available      = no previous appointment OR requested >= next_possible

Displayed slot end is always requested + 30 min, even when the displayed
start has been pushed to next_possible. That pairing can be incoherent
(end before start) and is kept as-is.
"""
import math
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from smart_route.config import APPOINTMENT_LENGTH_MINUTES, BUFFER_MINUTES
from smart_route.models import AppointmentRecord, AvailabilityVerdict, TravelEstimate

SLOT_TIME_FORMAT = "%I:%M %p"

AVAILABLE_MESSAGE = "Slot available for booking"
UNAVAILABLE_MESSAGE = "⏱ Not enough time after last appointment. Next available at {start}"


def format_slot_time(value: datetime) -> str:
    """Format as zero-padded 12h local time, e.g. '09:05 AM'."""
    return value.strftime(SLOT_TIME_FORMAT)


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive server-local time; naive passes through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def decide_availability(
    previous_end: Optional[datetime],
    travel_minutes: float,
    requested: datetime,
    buffer_minutes: int = BUFFER_MINUTES,
    appointment_minutes: int = APPOINTMENT_LENGTH_MINUTES
) -> AvailabilityVerdict:
    """
    Decide whether the requested slot leaves enough travel time.

    Args:
        previous_end: End of the previous booked appointment (None if there is none)
        travel_minutes: Travel duration from the previous location, unrounded
        requested: Requested start (naive, server-local)
        buffer_minutes: Padding added after travel
        appointment_minutes: Assumed appointment length for the slot end

    Returns:
        AvailabilityVerdict

    Example:
        previous_end 10:00, travel 20, requested 10:30
        -> unavailable, slot "10:35 AM - 11:00 AM"
    """
    total_travel = travel_minutes + buffer_minutes
    available = True
    next_possible_start = None

    if previous_end is not None:
        next_possible_start = to_local_naive(previous_end) + timedelta(minutes=total_travel)
        if requested < next_possible_start:
            available = False

    if available:
        slot_start = format_slot_time(requested)
        message = AVAILABLE_MESSAGE
    else:
        slot_start = format_slot_time(next_possible_start)
        message = UNAVAILABLE_MESSAGE.format(start=slot_start)

    # Anchored on the requested time regardless of the verdict
    slot_end = format_slot_time(requested + timedelta(minutes=appointment_minutes))

    return AvailabilityVerdict(
        available=available,
        suggested_slot_start=slot_start,
        suggested_slot_end=slot_end,
        message=message,
        total_travel_minutes=total_travel,
        next_possible_start=next_possible_start,
    )


def format_slot_response(
    verdict: AvailabilityVerdict,
    travel: TravelEstimate,
    previous_location: str,
    previous_appointment: Optional[AppointmentRecord]
) -> Dict[str, Any]:
    """
    Shape the verdict and fetched values into the success payload.

    Args:
        verdict: Availability decision
        travel: Distance lookup result
        previous_location: Origin reported to the caller
        previous_appointment: Previous booked appointment, if any

    Returns:
        Dict matching SlotCheckResponse
    """
    return {
        "success": True,
        "available": verdict.available,
        "distance": travel.distance_text,
        "travelDuration": travel.duration_text,
        "totalTravelTime": f"{round_half_up(verdict.total_travel_minutes)} minutes",
        "previousLocation": previous_location,
        "previousAppointmentEnd": previous_appointment.end_time if previous_appointment else None,
        "suggestedSlot": verdict.suggested_slot,
        "message": verdict.message,
    }
