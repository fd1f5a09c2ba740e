"""Facility Bookings — reservation, occupancy, and admin booking endpoints.

Invariants:
    - Every booking goes through ReservationService.reserve (capacity-guarded)
    - Errors surface as CondoError and are rendered by the global handler
      (404 unknown facility, 400 bad input, 409 slot full)

Design Decisions:
    - Slot labels and admin list size come from Settings, not from the request
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from condo.config import get_settings
from condo.core.domain_types import BookingId, FacilityId, Requester
from condo.core.validate_input import parse_booking_date
from condo.infrastructure.database import get_db
from condo.schemas.booking import (
    AdminBookingResponse, BookingCreate, BookingResponse,
    FacilitySlotsResponse, SlotOccupancyResponse,
)
from condo.services.reservation_service import ReservationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["bookings"])


def _service(db: AsyncSession) -> ReservationService:
    return ReservationService(db, slot_labels=get_settings().facility_slot_labels)


@router.post(
    "/facilities/{facility_id}/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    facility_id: int, body: BookingCreate, db: AsyncSession = Depends(get_db),
):
    """Reserve one unit of a facility slot."""
    booking = await _service(db).reserve(
        FacilityId(facility_id),
        body.booking_date,
        body.time_slot,
        Requester(
            name=body.resident_name,
            unit_number=body.unit_number,
            contact_number=body.contact_number,
        ),
    )
    return BookingResponse.model_validate(booking)


@router.get(
    "/facilities/{facility_id}/slots", response_model=FacilitySlotsResponse,
)
async def list_facility_slots(
    facility_id: int,
    booking_date: str = Query(..., alias="date"),
    db: AsyncSession = Depends(get_db),
):
    """Occupancy of every slot of a facility on one day."""
    day = parse_booking_date(booking_date)
    slots = await _service(db).list_bookings(FacilityId(facility_id), day)
    return FacilitySlotsResponse(
        facility_id=facility_id,
        booking_date=day,
        slots=[
            SlotOccupancyResponse(
                slot=s.slot,
                booked_count=s.booked_count,
                capacity=s.capacity,
                available=s.available,
            )
            for s in slots
        ],
    )


@router.get("/admin/bookings", response_model=list[AdminBookingResponse])
async def list_recent_bookings(db: AsyncSession = Depends(get_db)):
    """Most recent bookings across all facilities."""
    rows = await _service(db).list_recent_bookings(
        get_settings().admin_bookings_limit,
    )
    return [
        AdminBookingResponse(
            **BookingResponse.model_validate(booking).model_dump(),
            facility_name=facility_name,
        )
        for booking, facility_name in rows
    ]


@router.delete("/admin/bookings/{booking_id}", response_model=BookingResponse)
async def cancel_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    """Cancel a booking and free its slot."""
    booking = await _service(db).cancel_booking(BookingId(booking_id))
    return BookingResponse.model_validate(booking)
