"""Facility ORM — a bookable shared amenity (gym, pool, BBQ pit).

Invariants:
    - capacity > 0 (DB check constraint): max simultaneous bookings per slot
    - Immutable for the reservation core; maintained by the CRUD layer

Design Decisions:
    - Integer autoincrement id: matches the ids the web layer puts in URLs
"""

from sqlalchemy import String, Text, Integer, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from condo.db.base import Base


class Facility(Base):
    """Facility catalog entry."""
    __tablename__ = "facilities"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_facilities_capacity_positive"),
    )

    facility_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
