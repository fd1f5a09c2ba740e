"""SlotCounter ORM — guarded booking count per TimeSlotKey.

Invariants:
    - Primary key is the TimeSlotKey (facility_id, booking_date, time_slot)
    - booked_count == number of facility_bookings rows for the key
    - 0 <= booked_count <= facility capacity; the upper bound is enforced by the
      conditional UPDATE in SlotLedger.commit, the lower bound by a check constraint

Design Decisions:
    - Counter row over COUNT(*) + INSERT: one guarded UPDATE is the atomic
      check-and-reserve, and its row lock serializes writers on the same key only
"""

from datetime import date

from sqlalchemy import String, Integer, Date, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from condo.db.base import Base


class SlotCounter(Base):
    __tablename__ = "slot_counters"
    __table_args__ = (
        CheckConstraint(
            "booked_count >= 0", name="ck_slot_counters_non_negative",
        ),
    )

    facility_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("facilities.facility_id"), primary_key=True,
    )
    booking_date: Mapped[date] = mapped_column(Date, primary_key=True)
    time_slot: Mapped[str] = mapped_column(String(40), primary_key=True)
    booked_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
