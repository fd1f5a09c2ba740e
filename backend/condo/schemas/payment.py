"""Payment Schemas — payment submission, decisions, and invoice listings.

Invariants:
    - PaymentCreate fields are optional at the schema level: missing method or
      amount is reported by core validation with field-level codes
    - Money serialized from Decimal, never float

Design Decisions:
    - decision kept as str: the core rejects anything but Approved/Rejected
      with the same VALIDATION_ERROR envelope as every other input error
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PaymentCreate(BaseModel):
    """Resident payment submission for an invoice."""
    method: str | None = Field(None, max_length=40)
    reference_no: str | None = Field(None, max_length=100)
    amount: Decimal | None = None


class PaymentDecisionRequest(BaseModel):
    decision: str


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payment_id: int
    invoice_id: int
    method: str
    reference_no: str | None
    amount: Decimal
    paid_at: datetime
    status: str
    decided_at: datetime | None = None


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    invoice_id: int
    unit_id: int
    period_start: date
    period_end: date
    status: str
    total_amount: Decimal
    condo_fee: Decimal
    carpark_fee: Decimal


class InvoiceWithLatestPayment(BaseModel):
    """Invoice row of the resident payments page."""
    invoice: InvoiceResponse
    latest_payment: PaymentResponse | None


class AdminPaymentRow(BaseModel):
    """Payment joined with its invoice and unit."""
    payment_id: int
    invoice_id: int
    method: str
    reference_no: str | None
    amount: Decimal
    paid_at: datetime
    payment_status: str
    decided_at: datetime | None
    unit_id: int
    unit_no: str
    period_start: date
    period_end: date
    invoice_status: str
    total_amount: Decimal
    condo_fee: Decimal
    carpark_fee: Decimal
