"""Slot Ledger — authoritative booking counts per TimeSlotKey.

Invariants:
    - commit() is one guarded write: UPDATE ... SET booked_count = booked_count + 1
      WHERE key AND booked_count < capacity. Zero rows affected means the slot is full.
    - A booking row is inserted only after the guarded UPDATE succeeded, in the
      same transaction, so booked_count always equals the number of bookings
    - Never commits: the caller's atomic() block decides the fate of every write
    - count() is never negative

Design Decisions:
    - Counter row over "SELECT COUNT(*) then INSERT": two readers can both see
      count < capacity; the conditional UPDATE cannot be interleaved that way
    - Counter row created with INSERT ... ON CONFLICT DO NOTHING so the first
      booking of a slot needs no pre-seeding; only PostgreSQL and SQLite are
      supported, any other dialect raises before writing
    - Row lock on one counter row: different keys never block each other
"""

from datetime import date
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from condo.core.domain_types import BookingId, FacilityId, Requester, TimeSlotKey
from condo.core.errors import (
    CapacityExceededError, ErrorContext, ResourceNotFoundError,
)
from condo.models.booking import FacilityBooking
from condo.models.facility import Facility
from condo.models.slot_counter import SlotCounter


_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _key_filter(key: TimeSlotKey) -> tuple:
    return (
        SlotCounter.facility_id == key.facility_id,
        SlotCounter.booking_date == key.booking_date,
        SlotCounter.time_slot == key.time_slot,
    )


class SlotLedger:
    """Capacity-guarded store of facility bookings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self, key: TimeSlotKey) -> int:
        """Committed bookings for the key (0 if never booked)."""
        result = await self.db.execute(
            select(SlotCounter.booked_count).where(*_key_filter(key)),
        )
        return result.scalar_one_or_none() or 0

    async def commit(
        self, key: TimeSlotKey, capacity: int, requester: Requester,
    ) -> FacilityBooking:
        """Reserve one unit of the slot and record the booking.

        Raises CapacityExceededError when the slot already holds `capacity`
        bookings; nothing is written in that case.
        """
        await self._ensure_counter(key)

        result = await self.db.execute(
            update(SlotCounter)
            .where(*_key_filter(key))
            .where(SlotCounter.booked_count < capacity)
            .values(booked_count=SlotCounter.booked_count + 1)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount != 1:
            raise CapacityExceededError(
                key.time_slot, capacity,
                ErrorContext(facility_id=key.facility_id),
            )

        booking = FacilityBooking(
            facility_id=key.facility_id,
            booking_date=key.booking_date,
            time_slot=key.time_slot,
            resident_name=requester.name,
            unit_number=requester.unit_number,
            contact_number=requester.contact_number,
        )
        self.db.add(booking)
        await self.db.flush()
        return booking

    async def list_slots(
        self,
        facility_id: FacilityId,
        booking_date: date,
        slot_labels: Sequence[str] = (),
    ) -> list[tuple[str, int]]:
        """(slot, booked_count) for one facility and day, ordered by slot label."""
        result = await self.db.execute(
            select(SlotCounter.time_slot, SlotCounter.booked_count)
            .where(SlotCounter.facility_id == facility_id)
            .where(SlotCounter.booking_date == booking_date),
        )
        counts = {slot: booked for slot, booked in result.all()}
        for label in slot_labels:
            counts.setdefault(label, 0)
        return sorted(counts.items())

    async def release(self, booking_id: BookingId) -> FacilityBooking:
        """Delete a booking and give its unit of capacity back."""
        booking = await self.db.get(
            FacilityBooking, booking_id,
            with_for_update=True, populate_existing=True,
        )
        if booking is None:
            raise ResourceNotFoundError("Booking", str(booking_id))

        key = TimeSlotKey(
            FacilityId(booking.facility_id), booking.booking_date, booking.time_slot,
        )
        await self.db.execute(
            update(SlotCounter)
            .where(*_key_filter(key))
            .where(SlotCounter.booked_count > 0)
            .values(booked_count=SlotCounter.booked_count - 1)
            .execution_options(synchronize_session=False),
        )
        await self.db.delete(booking)
        await self.db.flush()
        return booking

    async def list_recent(self, limit: int = 20) -> list[tuple[FacilityBooking, str]]:
        """Newest bookings first, each with its facility name."""
        result = await self.db.execute(
            select(FacilityBooking, Facility.name)
            .join(Facility, Facility.facility_id == FacilityBooking.facility_id)
            .order_by(FacilityBooking.created_at.desc(), FacilityBooking.id.desc())
            .limit(limit),
        )
        return [(booking, name) for booking, name in result.all()]

    async def _ensure_counter(self, key: TimeSlotKey) -> None:
        """Create the counter row for `key` if it does not exist yet."""
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(
                f"Unsupported database dialect '{dialect}': "
                f"expected one of {sorted(_UPSERT_INSERTS)}",
            )
        await self.db.execute(
            insert(SlotCounter).values(
                facility_id=key.facility_id,
                booking_date=key.booking_date,
                time_slot=key.time_slot,
                booked_count=0,
            ).on_conflict_do_nothing(
                index_elements=["facility_id", "booking_date", "time_slot"],
            ),
        )
