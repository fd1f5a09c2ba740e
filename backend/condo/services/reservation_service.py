"""Reservation Service — validates booking requests and commits them against the ledger.

Invariants:
    - Input validated before any database access
    - Facility resolved through the FacilityCatalog collaborator; unknown id -> 404
    - Lookup and guarded commit share one atomic() block: any error path leaves
      no booking and no counter change
    - Requester identity arrives as a parameter; no ambient session state

Design Decisions:
    - Capacity read from the catalog and passed to SlotLedger.commit: facilities
      are immutable for the core, so the guard never races a capacity edit
    - CapacityExceededError logged at INFO: a full slot is an expected outcome
"""

import logging
from datetime import date
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from condo.core.domain_types import (
    BookingId, FacilityId, Requester, SlotOccupancy, TimeSlotKey,
)
from condo.core.errors import CapacityExceededError, ErrorContext, ResourceNotFoundError
from condo.core.repository_protocols import FacilityCatalog, FacilityLike
from condo.core.validate_input import (
    parse_booking_date, require_text, validate_requester,
)
from condo.infrastructure.database import atomic
from condo.models.booking import FacilityBooking
from condo.services.catalog import SqlFacilityCatalog
from condo.services.slot_ledger import SlotLedger

logger = logging.getLogger(__name__)


class ReservationService:
    """Facility booking entry point for the web layer."""

    def __init__(
        self,
        db: AsyncSession,
        catalog: FacilityCatalog | None = None,
        slot_labels: Sequence[str] = (),
    ):
        self.db = db
        self.catalog = catalog or SqlFacilityCatalog(db)
        self.ledger = SlotLedger(db)
        self.slot_labels = tuple(slot_labels)

    async def reserve(
        self,
        facility_id: FacilityId,
        booking_date: date | str,
        time_slot: str,
        requester: Requester,
    ) -> FacilityBooking:
        """Book one unit of (facility, date, slot) for the requester."""
        day = parse_booking_date(booking_date)
        slot = require_text(time_slot, "time_slot")
        requester = validate_requester(requester)

        async with atomic(self.db):
            facility = await self._facility_or_404(facility_id)
            key = TimeSlotKey(FacilityId(facility.facility_id), day, slot)
            try:
                booking = await self.ledger.commit(key, facility.capacity, requester)
            except CapacityExceededError:
                logger.info(
                    f"Slot full: {facility.name} {day.isoformat()} {slot}",
                    extra={"facility_id": facility.facility_id, "time_slot": slot},
                )
                raise

        logger.info(
            f"Booking {booking.id} committed for {facility.name} {day.isoformat()} {slot}",
            extra={
                "facility_id": facility.facility_id,
                "booking_id": booking.id,
                "time_slot": slot,
            },
        )
        return booking

    async def list_bookings(
        self, facility_id: FacilityId, booking_date: date | str,
    ) -> list[SlotOccupancy]:
        """Occupancy of every slot of the day, configured slots included."""
        day = parse_booking_date(booking_date)
        facility = await self._facility_or_404(facility_id)
        rows = await self.ledger.list_slots(
            FacilityId(facility.facility_id), day, self.slot_labels,
        )
        return [
            SlotOccupancy(slot=slot, booked_count=booked, capacity=facility.capacity)
            for slot, booked in rows
        ]

    async def cancel_booking(self, booking_id: BookingId) -> FacilityBooking:
        """Administrative cancellation: frees the slot the booking held."""
        async with atomic(self.db):
            booking = await self.ledger.release(booking_id)
        logger.info(
            f"Booking {booking_id} cancelled",
            extra={"facility_id": booking.facility_id, "booking_id": booking_id},
        )
        return booking

    async def list_recent_bookings(
        self, limit: int = 20,
    ) -> list[tuple[FacilityBooking, str]]:
        return await self.ledger.list_recent(limit)

    async def _facility_or_404(self, facility_id: FacilityId) -> FacilityLike:
        facility = await self.catalog.get(facility_id)
        if facility is None:
            raise ResourceNotFoundError(
                "Facility", str(facility_id),
                ErrorContext(facility_id=facility_id),
            )
        return facility
