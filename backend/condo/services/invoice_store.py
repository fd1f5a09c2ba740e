"""Invoice Store — invoice persistence, status overwrite, and unit listing.

Invariants:
    - set_status() is an unconditional overwrite; only PaymentWorkflow calls it,
      inside its own atomic() block (this store flushes, never commits)
    - list_for_unit() pairs each invoice with its latest payment: greatest paid_at,
      ties broken by greatest payment_id
    - Invoices ordered by billing period, newest first

Design Decisions:
    - Latest payment chosen by core.latest_payment, not by SQL row order: the
      tie-break is explicit instead of whatever the planner returns
    - populate_existing on listing queries: rows reloaded from the database even
      when the same objects are already in the session
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from condo.core.domain_types import InvoiceId, InvoiceStatus, UnitId
from condo.core.errors import ErrorContext, ResourceNotFoundError
from condo.core.latest_payment import latest_by_invoice
from condo.models.invoice import Invoice
from condo.models.payment import Payment


class InvoiceStore:
    """Invoice records and their derived status."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, invoice_id: InvoiceId, for_update: bool = False) -> Invoice:
        """Invoice by id or ResourceNotFoundError."""
        if for_update:
            invoice = await self.db.get(
                Invoice, invoice_id,
                with_for_update=True, populate_existing=True,
            )
        else:
            invoice = await self.db.get(Invoice, invoice_id)
        if invoice is None:
            raise ResourceNotFoundError(
                "Invoice", str(invoice_id), ErrorContext(invoice_id=invoice_id),
            )
        return invoice

    async def set_status(
        self, invoice_id: InvoiceId, status: InvoiceStatus,
    ) -> Invoice:
        invoice = await self.get(invoice_id)
        invoice.status = InvoiceStatus(status).value
        await self.db.flush()
        return invoice

    async def list_for_unit(
        self, unit_id: UnitId,
    ) -> list[tuple[Invoice, Payment | None]]:
        """Invoices of a unit, newest period first, each with its latest payment."""
        result = await self.db.execute(
            select(Invoice)
            .where(Invoice.unit_id == unit_id)
            .order_by(Invoice.period_start.desc(), Invoice.invoice_id.desc())
            .execution_options(populate_existing=True),
        )
        invoices = result.scalars().all()
        if not invoices:
            return []

        payments = await self.db.execute(
            select(Payment)
            .where(Payment.invoice_id.in_([i.invoice_id for i in invoices]))
            .execution_options(populate_existing=True),
        )
        latest = latest_by_invoice(payments.scalars().all())
        return [(invoice, latest.get(invoice.invoice_id)) for invoice in invoices]
