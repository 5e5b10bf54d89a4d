"""Pydantic models for API request/response validation."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SlotCheckRequest(BaseModel):
    """Request schema for POST /check-available-slots.

    Fields are optional at the schema level so that a missing field is
    reported as the fixed 400 "Missing required fields" error rather than a
    schema error.
    """
    customerAddress: Optional[str] = Field(
        None,
        description="Address of the new customer",
        examples=["123 Main St, Buffalo, NY"]
    )
    staffAddress: Optional[str] = Field(
        None,
        description="Staff base address, used when there is no previous location",
        examples=["9990 Transit Rd, Buffalo, NY"]
    )
    requestedDate: Optional[str] = Field(
        None,
        description="Requested date",
        examples=["2025-11-01"]
    )
    requestedTime: Optional[str] = Field(
        None,
        description="Requested start time",
        examples=["10:30 AM"]
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "customerAddress": "123 Main St, Buffalo, NY",
                "staffAddress": "9990 Transit Rd, Buffalo, NY",
                "requestedDate": "2025-11-01",
                "requestedTime": "10:30 AM"
            }
        }
    )


class SlotCheckResponse(BaseModel):
    """Success payload for POST /check-available-slots."""
    success: bool = Field(True)
    available: bool = Field(..., description="Whether the requested slot can be booked")
    distance: str = Field(..., description="Distance from the previous location")
    travelDuration: str = Field(..., description="Travel duration as reported by the mapping service")
    totalTravelTime: str = Field(..., description="Travel + buffer, rounded, e.g. '35 minutes'")
    previousLocation: str = Field(..., description="Origin used for the travel estimate")
    previousAppointmentEnd: Optional[datetime] = Field(
        None,
        description="End of the previous booked appointment (null if none)"
    )
    suggestedSlot: str = Field(..., description="'<start> - <end>'")
    message: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "available": False,
                "distance": "12.3 mi",
                "travelDuration": "20 mins",
                "totalTravelTime": "35 minutes",
                "previousLocation": "55 Elm St, Buffalo, NY",
                "previousAppointmentEnd": "2025-11-01T10:00:00",
                "suggestedSlot": "10:35 AM - 11:00 AM",
                "message": "⏱ Not enough time after last appointment. Next available at 10:35 AM"
            }
        }
    )


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: str = Field(..., description="Error message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"error": "Missing required fields"}
        }
    )
