"""FacilityBooking ORM — one committed reservation of one slot.

Invariants:
    - Created only by SlotLedger.commit, in the same transaction as the counter increment
    - Never updated; deleted only by SlotLedger.release (admin cancellation)
    - resident_name, unit_number, contact_number are non-empty (audit trail)

Design Decisions:
    - Requester stored denormalized: the booking keeps who asked even if the
      resident record later changes
    - (facility_id, booking_date, time_slot) indexed: occupancy projections scan by key
"""

from datetime import date, datetime, timezone

from sqlalchemy import String, Integer, Date, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from condo.db.base import Base


class FacilityBooking(Base):
    """Booking entity — resident reservation of a facility slot."""
    __tablename__ = "facility_bookings"
    __table_args__ = (
        Index(
            "ix_facility_bookings_slot",
            "facility_id", "booking_date", "time_slot",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    facility_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("facilities.facility_id"), nullable=False,
    )
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    time_slot: Mapped[str] = mapped_column(String(40), nullable=False)
    resident_name: Mapped[str] = mapped_column(String(100), nullable=False)
    unit_number: Mapped[str] = mapped_column(String(20), nullable=False)
    contact_number: Mapped[str] = mapped_column(String(40), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
