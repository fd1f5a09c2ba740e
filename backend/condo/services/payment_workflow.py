"""Payment Workflow — payment submission and administrative decisions.

Invariants:
    - submit_payment: new Payment(Pending) + invoice -> Pending, one atomic() block
    - decide_payment: payment -> Approved/Rejected + invoice -> Paid/Unpaid, one atomic() block
    - Invoice target status always comes from core.invoice_transitions
    - Duplicate submissions are accepted; re-deciding a decided payment re-applies
    - Row order of locks: payment before invoice (decide), invoice only (submit)

Design Decisions:
    - Invoice row selected FOR UPDATE before the status write: concurrent workflow
      calls on one invoice serialize, calls on different invoices do not
    - paid_at taken from the application clock (UTC) at submission
    - No internal retries: a DatabaseError reaches the caller after rollback
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from condo.core.domain_types import (
    InvoiceEvent, InvoiceId, InvoiceStatus, PaymentDecision, PaymentId,
    PaymentStatus,
)
from condo.core.errors import ErrorContext, ResourceNotFoundError
from condo.core.invoice_transitions import (
    event_for_decision, payment_status_for, transition_invoice,
)
from condo.core.repository_protocols import UnitDirectory
from condo.core.validate_input import (
    normalize_reference, parse_amount, parse_decision, require_text,
)
from condo.infrastructure.database import atomic
from condo.models.invoice import Invoice
from condo.models.payment import Payment
from condo.models.unit import Unit
from condo.services.catalog import SqlUnitDirectory
from condo.services.invoice_store import InvoiceStore

logger = logging.getLogger(__name__)


class PaymentWorkflow:
    """Drives invoice status through payment submissions and decisions."""

    def __init__(
        self,
        db: AsyncSession,
        invoices: InvoiceStore | None = None,
        units: UnitDirectory | None = None,
    ):
        self.db = db
        self.invoices = invoices or InvoiceStore(db)
        self.units = units or SqlUnitDirectory(db)

    async def submit_payment(
        self,
        invoice_id: InvoiceId,
        method: str | None,
        reference_no: str | None,
        amount: Decimal | int | float | str | None,
    ) -> Payment:
        """Record a resident payment and mark its invoice Pending."""
        method = require_text(method, "method")
        amount = parse_amount(amount)
        reference_no = normalize_reference(reference_no)

        async with atomic(self.db):
            invoice = await self.invoices.get(invoice_id, for_update=True)
            payment = Payment(
                invoice_id=invoice.invoice_id,
                method=method,
                reference_no=reference_no,
                amount=amount,
                paid_at=datetime.now(timezone.utc),
                status=PaymentStatus.PENDING.value,
            )
            self.db.add(payment)
            await self.db.flush()
            await self.invoices.set_status(
                invoice.invoice_id,
                transition_invoice(
                    InvoiceStatus(invoice.status), InvoiceEvent.PAYMENT_SUBMITTED,
                ),
            )

        logger.info(
            f"Payment {payment.payment_id} submitted for invoice {invoice_id}",
            extra={"invoice_id": invoice_id, "payment_id": payment.payment_id},
        )
        return payment

    async def decide_payment(
        self, payment_id: PaymentId, decision: PaymentDecision | str,
    ) -> Invoice:
        """Approve or reject a payment and re-derive its invoice status."""
        decision = parse_decision(decision)

        async with atomic(self.db):
            payment = await self.db.get(
                Payment, payment_id,
                with_for_update=True, populate_existing=True,
            )
            if payment is None:
                raise ResourceNotFoundError(
                    "Payment", str(payment_id), ErrorContext(payment_id=payment_id),
                )
            previous = payment.status
            payment.status = payment_status_for(decision).value
            payment.decided_at = datetime.now(timezone.utc)
            await self.db.flush()

            invoice = await self.invoices.get(payment.invoice_id, for_update=True)
            invoice = await self.invoices.set_status(
                invoice.invoice_id,
                transition_invoice(
                    InvoiceStatus(invoice.status), event_for_decision(decision),
                ),
            )

        if previous != PaymentStatus.PENDING.value:
            logger.warning(
                f"Payment {payment_id} re-decided: {previous} -> {decision.value}",
                extra={"invoice_id": invoice.invoice_id, "payment_id": payment_id},
            )
        logger.info(
            f"Payment {payment_id} {decision.value}; invoice {invoice.invoice_id} "
            f"is {invoice.status}",
            extra={"invoice_id": invoice.invoice_id, "payment_id": payment_id},
        )
        return invoice

    async def list_invoices_for_unit(
        self, unit_no: str,
    ) -> list[tuple[Invoice, Payment | None]]:
        """Resolve a unit number and list its invoices with latest payments."""
        unit_no = require_text(unit_no, "unit_no")
        unit_id = await self.units.resolve(unit_no)
        if unit_id is None:
            raise ResourceNotFoundError("Unit", unit_no)
        return await self.invoices.list_for_unit(unit_id)

    async def list_payments_for_admin(self) -> list[dict]:
        """Every payment with its invoice and unit, newest submission first."""
        result = await self.db.execute(
            select(Payment, Invoice, Unit.unit_no)
            .join(Invoice, Invoice.invoice_id == Payment.invoice_id)
            .join(Unit, Unit.unit_id == Invoice.unit_id)
            .order_by(Payment.paid_at.desc(), Payment.payment_id.desc())
            .execution_options(populate_existing=True),
        )
        return [
            {
                "payment_id": p.payment_id,
                "invoice_id": p.invoice_id,
                "method": p.method,
                "reference_no": p.reference_no,
                "amount": p.amount,
                "paid_at": p.paid_at,
                "payment_status": p.status,
                "decided_at": p.decided_at,
                "unit_id": i.unit_id,
                "unit_no": unit_no,
                "period_start": i.period_start,
                "period_end": i.period_end,
                "invoice_status": i.status,
                "total_amount": i.total_amount,
                "condo_fee": i.condo_fee,
                "carpark_fee": i.carpark_fee,
            }
            for p, i, unit_no in result.all()
        ]
