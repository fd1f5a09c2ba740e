"""Unit ORM — a residential unit that invoices are billed to."""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from condo.db.base import Base


class Unit(Base):
    __tablename__ = "units"

    unit_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    unit_no: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True,
    )
