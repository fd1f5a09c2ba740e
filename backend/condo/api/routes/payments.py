"""Payments — resident submissions, admin decisions, and invoice listings.

Invariants:
    - Invoice status is never written here; PaymentWorkflow owns every transition
    - Unknown invoice/payment/unit -> 404, bad input -> 400 (global handler)
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from condo.core.domain_types import InvoiceId, PaymentId
from condo.infrastructure.database import get_db
from condo.schemas.payment import (
    AdminPaymentRow, InvoiceResponse, InvoiceWithLatestPayment,
    PaymentCreate, PaymentDecisionRequest, PaymentResponse,
)
from condo.services.payment_workflow import PaymentWorkflow

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["payments"])


@router.post(
    "/invoices/{invoice_id}/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_payment(
    invoice_id: int, body: PaymentCreate, db: AsyncSession = Depends(get_db),
):
    """Submit a payment; the invoice becomes Pending."""
    payment = await PaymentWorkflow(db).submit_payment(
        InvoiceId(invoice_id), body.method, body.reference_no, body.amount,
    )
    return PaymentResponse.model_validate(payment)


@router.get(
    "/units/{unit_no}/invoices", response_model=list[InvoiceWithLatestPayment],
)
async def list_unit_invoices(unit_no: str, db: AsyncSession = Depends(get_db)):
    """Invoices of a unit, newest period first, with their latest payment."""
    rows = await PaymentWorkflow(db).list_invoices_for_unit(unit_no)
    return [
        InvoiceWithLatestPayment(
            invoice=InvoiceResponse.model_validate(invoice),
            latest_payment=(
                PaymentResponse.model_validate(payment) if payment else None
            ),
        )
        for invoice, payment in rows
    ]


@router.get("/admin/payments", response_model=list[AdminPaymentRow])
async def list_admin_payments(db: AsyncSession = Depends(get_db)):
    """Every submitted payment with invoice and unit details."""
    rows = await PaymentWorkflow(db).list_payments_for_admin()
    return [AdminPaymentRow(**row) for row in rows]


@router.post(
    "/admin/payments/{payment_id}/decision", response_model=InvoiceResponse,
)
async def decide_payment(
    payment_id: int,
    body: PaymentDecisionRequest,
    db: AsyncSession = Depends(get_db),
):
    """Approve or reject a payment; returns the updated invoice."""
    invoice = await PaymentWorkflow(db).decide_payment(
        PaymentId(payment_id), body.decision,
    )
    return InvoiceResponse.model_validate(invoice)
