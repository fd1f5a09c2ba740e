"""Invoice ORM — one billing period of condo and carpark fees for a unit.

Invariants:
    - Created externally (billing generation) with status Unpaid
    - status ∈ {Unpaid, Pending, Paid}; mutated only through PaymentWorkflow
    - status is derived from payments but stored for read efficiency

Design Decisions:
    - Numeric(10, 2) for money: exact decimal arithmetic
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Integer, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from condo.db.base import Base
from condo.core.domain_types import InvoiceStatus


class Invoice(Base):
    """Invoice entity — billed amount and its reconciliation status."""
    __tablename__ = "invoices"

    invoice_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    unit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("units.unit_id"), nullable=False, index=True,
    )
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=InvoiceStatus.UNPAID.value,
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    condo_fee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0"),
    )
    carpark_fee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0"),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
