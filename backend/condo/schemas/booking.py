"""Booking Schemas — facility reservation requests and occupancy responses.

Invariants:
    - BookingCreate carries raw strings; date parsing and emptiness checks happen
      in core.validate_input so library and HTTP callers get the same errors
    - Response models read ORM objects via from_attributes

Design Decisions:
    - max_length bounds mirror the column sizes
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class BookingCreate(BaseModel):
    """Reservation request for one slot."""
    booking_date: str = Field(max_length=10)
    time_slot: str = Field(max_length=40)
    resident_name: str = Field(max_length=100)
    unit_number: str = Field(max_length=20)
    contact_number: str = Field(max_length=40)


class BookingResponse(BaseModel):
    """Committed booking."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    facility_id: int
    booking_date: date
    time_slot: str
    resident_name: str
    unit_number: str
    contact_number: str
    created_at: datetime


class AdminBookingResponse(BookingResponse):
    """Booking row in the admin overview, with the facility's current name."""
    facility_name: str


class SlotOccupancyResponse(BaseModel):
    slot: str
    booked_count: int
    capacity: int
    available: int


class FacilitySlotsResponse(BaseModel):
    facility_id: int
    booking_date: date
    slots: list[SlotOccupancyResponse]
