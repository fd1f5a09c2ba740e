"""Payment ORM — a resident's submitted payment against an invoice.

Invariants:
    - Always belongs to an Invoice (invoice_id FK)
    - Created Pending by submit_payment; status changed only by decide_payment
    - Never deleted: resubmissions and corrections accumulate
    - paid_at is the submission timestamp used for latest-payment selection

Design Decisions:
    - decided_at records the last administrative decision; re-decisions overwrite it
    - (invoice_id, paid_at) indexed: latest-payment lookups scan by invoice
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Integer, DateTime, Numeric, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from condo.db.base import Base
from condo.core.domain_types import PaymentStatus


class Payment(Base):
    """Payment entity — one submission awaiting or carrying a decision."""
    __tablename__ = "payments"
    __table_args__ = (
        Index("ix_payments_invoice_paid_at", "invoice_id", "paid_at"),
    )

    payment_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    invoice_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("invoices.invoice_id"), nullable=False,
    )
    method: Mapped[str] = mapped_column(String(40), nullable=False)
    reference_no: Mapped[str | None] = mapped_column(String(100), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PaymentStatus.PENDING.value,
    )
    decided_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
