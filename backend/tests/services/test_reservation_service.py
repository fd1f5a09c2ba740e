"""Reservation Service — validation, capacity enforcement and atomicity.

Invariants:
    - Committed bookings for a slot never exceed facility capacity, even when
      requests race on separate sessions
    - Every rejected call (bad input, unknown facility, full slot, storage
      failure) leaves no booking and no counter change

Design Decisions:
    - Ids captured as ints before a failing call: atomic() rolls back and
      expires every object in the session, including the seeded fixtures
"""

import asyncio
from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from condo.core.domain_types import BookingId, FacilityId, Requester, TimeSlotKey
from condo.core.errors import (
    CapacityExceededError, DatabaseError, InputValidationError,
    ResourceNotFoundError,
)
from condo.models.booking import FacilityBooking
from condo.models.slot_counter import SlotCounter
from condo.services.reservation_service import ReservationService
from condo.services.slot_ledger import SlotLedger

SLOT = "10:00-11:00"
ANA = Requester("Ana", "12-03", "555-0101")
BEN = Requester("Ben", "07-11", "555-0202")
CY = Requester("Cy", "02-01", "555-0303")


async def _table_count(db, model):
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def test_reserve_returns_committed_booking(test_db, gym):
    booking = await ReservationService(test_db).reserve(
        FacilityId(gym.facility_id), "2025-01-10", SLOT, ANA,
    )
    assert booking.id is not None
    assert booking.booking_date == date(2025, 1, 10)
    assert booking.time_slot == SLOT
    assert booking.contact_number == "555-0101"


async def test_reserve_strips_requester_fields(test_db, gym):
    booking = await ReservationService(test_db).reserve(
        FacilityId(gym.facility_id), "2025-01-10", f" {SLOT} ",
        Requester("  Ana ", "12-03", "555-0101"),
    )
    assert booking.resident_name == "Ana"
    assert booking.time_slot == SLOT


async def test_third_booking_of_capacity_two_slot_is_rejected(test_db, gym):
    gym_id = FacilityId(gym.facility_id)
    service = ReservationService(test_db)
    await service.reserve(gym_id, "2025-01-10", SLOT, ANA)
    await service.reserve(gym_id, "2025-01-10", SLOT, BEN)

    with pytest.raises(CapacityExceededError) as exc_info:
        await service.reserve(gym_id, "2025-01-10", SLOT, CY)

    assert exc_info.value.http_status == 409
    key = TimeSlotKey(gym_id, date(2025, 1, 10), SLOT)
    assert await SlotLedger(test_db).count(key) == 2
    assert await _table_count(test_db, FacilityBooking) == 2


async def test_reserve_unknown_facility_is_not_found(test_db):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await ReservationService(test_db).reserve(
            FacilityId(999), "2025-01-10", SLOT, ANA,
        )
    assert exc_info.value.context.facility_id == 999
    assert await _table_count(test_db, SlotCounter) == 0


async def test_reserve_invalid_date_writes_nothing(test_db, gym):
    gym_id = FacilityId(gym.facility_id)
    with pytest.raises(InputValidationError) as exc_info:
        await ReservationService(test_db).reserve(gym_id, "2025-02-30", SLOT, ANA)
    assert exc_info.value.field == "booking_date"
    assert await _table_count(test_db, SlotCounter) == 0
    assert await _table_count(test_db, FacilityBooking) == 0


async def test_reserve_blank_contact_rejected(test_db, gym):
    gym_id = FacilityId(gym.facility_id)
    with pytest.raises(InputValidationError) as exc_info:
        await ReservationService(test_db).reserve(
            gym_id, "2025-01-10", SLOT, Requester("Ana", "12-03", "  "),
        )
    assert exc_info.value.field == "contact_number"
    assert await _table_count(test_db, FacilityBooking) == 0


async def test_reserve_blank_slot_rejected(test_db, gym):
    with pytest.raises(InputValidationError) as exc_info:
        await ReservationService(test_db).reserve(
            FacilityId(gym.facility_id), "2025-01-10", "", ANA,
        )
    assert exc_info.value.field == "time_slot"


async def test_storage_failure_rolls_back_counter_and_booking(
    test_db, test_session_factory, gym, monkeypatch,
):
    gym_id = FacilityId(gym.facility_id)
    original = SlotLedger.commit

    async def failing_commit(self, key, capacity, requester):
        await original(self, key, capacity, requester)
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(SlotLedger, "commit", failing_commit)

    with pytest.raises(DatabaseError):
        await ReservationService(test_db).reserve(gym_id, "2025-01-10", SLOT, ANA)

    async with test_session_factory() as fresh:
        assert await _table_count(fresh, FacilityBooking) == 0
        assert await SlotLedger(fresh).count(
            TimeSlotKey(gym_id, date(2025, 1, 10), SLOT),
        ) == 0


async def test_concurrent_reservations_never_exceed_capacity(
    test_session_factory, gym,
):
    """Three residents race for a capacity-2 slot on separate connections."""
    gym_id = FacilityId(gym.facility_id)

    async def attempt(requester):
        async with test_session_factory() as db:
            return await ReservationService(db).reserve(
                gym_id, "2025-01-10", SLOT, requester,
            )

    results = await asyncio.gather(
        attempt(ANA), attempt(BEN), attempt(CY), return_exceptions=True,
    )

    booked = [r for r in results if isinstance(r, FacilityBooking)]
    rejected = [r for r in results if isinstance(r, CapacityExceededError)]
    assert len(booked) == 2
    assert len(rejected) == 1

    async with test_session_factory() as fresh:
        assert await _table_count(fresh, FacilityBooking) == 2
        assert await SlotLedger(fresh).count(
            TimeSlotKey(gym_id, date(2025, 1, 10), SLOT),
        ) == 2


async def test_list_bookings_reports_occupancy(test_db, gym):
    gym_id = FacilityId(gym.facility_id)
    service = ReservationService(test_db, slot_labels=["08:00-09:00", SLOT])
    await service.reserve(gym_id, "2025-01-10", SLOT, ANA)

    slots = await service.list_bookings(gym_id, "2025-01-10")

    assert [(s.slot, s.booked_count, s.available) for s in slots] == [
        ("08:00-09:00", 0, 2),
        (SLOT, 1, 1),
    ]
    assert all(s.capacity == 2 for s in slots)


async def test_list_bookings_unknown_facility_is_not_found(test_db):
    with pytest.raises(ResourceNotFoundError):
        await ReservationService(test_db).list_bookings(FacilityId(999), "2025-01-10")


async def test_cancel_booking_frees_the_slot(test_db, bbq_pit):
    pit_id = FacilityId(bbq_pit.facility_id)
    service = ReservationService(test_db)
    booking = await service.reserve(pit_id, "2025-01-10", SLOT, ANA)

    cancelled = await service.cancel_booking(BookingId(booking.id))
    assert cancelled.id == booking.id

    again = await service.reserve(pit_id, "2025-01-10", SLOT, BEN)
    assert again.resident_name == "Ben"


async def test_cancel_unknown_booking_is_not_found(test_db):
    with pytest.raises(ResourceNotFoundError):
        await ReservationService(test_db).cancel_booking(BookingId(404))


async def test_list_recent_bookings(test_db, gym):
    service = ReservationService(test_db)
    await service.reserve(FacilityId(gym.facility_id), "2025-01-10", SLOT, ANA)

    rows = await service.list_recent_bookings(limit=5)
    assert len(rows) == 1
    assert rows[0][1] == "Gym"


@pytest.mark.parametrize("booking_date", ["20250110", "2025-W02-5"])
async def test_reserve_rejects_non_calendar_iso_forms(test_db, gym, booking_date):
    gym_id = FacilityId(gym.facility_id)
    with pytest.raises(InputValidationError) as exc_info:
        await ReservationService(test_db).reserve(gym_id, booking_date, SLOT, ANA)
    assert exc_info.value.field == "booking_date"
    assert await _table_count(test_db, SlotCounter) == 0
    assert await _table_count(test_db, FacilityBooking) == 0
