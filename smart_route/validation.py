"""Request validation for POST /check-available-slots.

Only presence is checked here. Malformed-but-present addresses are passed
through to the collaborators; the date/time pair is parsed separately by
parse_requested_datetime once both lookups are done.
"""
from datetime import datetime
from typing import Any, Mapping

from smart_route.exceptions import DateParseError, ValidationError
from smart_route.models import SlotRequest

REQUIRED_FIELDS = ("customerAddress", "staffAddress", "requestedDate", "requestedTime")

DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")
TIME_FORMATS = ("%I:%M %p", "%I:%M%p", "%I:%M:%S %p", "%I:%M:%S%p", "%I %p", "%I%p", "%H:%M", "%H:%M:%S")


def validate_slot_request(payload: Any) -> SlotRequest:
    """
    Check that all required fields are present and non-empty.

    Args:
        payload: Decoded JSON body (anything that is not an object counts as empty)

    Returns:
        SlotRequest built from the payload

    Raises:
        ValidationError: If any required field is missing, None or empty
    """
    if not isinstance(payload, Mapping):
        payload = {}

    missing = [field for field in REQUIRED_FIELDS if not payload.get(field)]
    if missing:
        raise ValidationError(missing=missing)

    # Present non-string values (e.g. 20251101) are passed on as text
    return SlotRequest(
        customer_address=str(payload["customerAddress"]),
        staff_address=str(payload["staffAddress"]),
        requested_date=str(payload["requestedDate"]),
        requested_time=str(payload["requestedTime"]),
    )


def parse_requested_datetime(requested_date: str, requested_time: str) -> datetime:
    """
    Combine requestedDate and requestedTime into a naive local datetime.

    Args:
        requested_date: "2025-11-01" or "11/01/2025"
        requested_time: "10:30 AM", "10:30:00 AM", "10 AM", "10:30" or "10:30:00"

    Returns:
        Naive datetime in server-local wall-clock time

    Raises:
        DateParseError: If the pair does not form a valid timestamp

    Example:
        >>> parse_requested_datetime("2025-11-01", "10:30 AM")
        datetime.datetime(2025, 11, 1, 10, 30)
    """
    date_part = str(requested_date).strip()
    time_part = " ".join(str(requested_time).split()).upper()

    for date_format in DATE_FORMATS:
        for time_format in TIME_FORMATS:
            try:
                return datetime.strptime(
                    f"{date_part} {time_part}", f"{date_format} {time_format}"
                )
            except ValueError:
                continue

    raise DateParseError(
        f"Invalid requested date/time: '{requested_date} {requested_time}'"
    )
