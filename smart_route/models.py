"""Request-scoped domain values for one slot check.

Nothing here outlives a single request/response cycle.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SlotRequest:
    """Caller-supplied slot check input (validated once, immutable)."""
    customer_address: str
    staff_address: str
    requested_date: str
    requested_time: str


@dataclass(frozen=True)
class AppointmentRecord:
    """Most recent booked appointment on the calendar."""
    end_time: datetime
    location: Optional[str] = None


@dataclass(frozen=True)
class TravelEstimate:
    """Distance/duration between two addresses."""
    distance_text: str
    duration_text: str
    duration_minutes: float  # seconds / 60, not rounded


@dataclass(frozen=True)
class AvailabilityVerdict:
    """Outcome of the availability decision."""
    available: bool
    suggested_slot_start: str
    suggested_slot_end: str
    message: str
    total_travel_minutes: float
    next_possible_start: Optional[datetime] = None

    @property
    def suggested_slot(self) -> str:
        return f"{self.suggested_slot_start} - {self.suggested_slot_end}"
