"""Input Validation — pure checks for reservation and payment arguments.

Invariants:
    - Every function either returns a normalized value or raises InputValidationError
    - No IO: validation runs before any database access, so a rejected call
      never opens a write
    - Strings are stripped before emptiness checks

Design Decisions:
    - Raise instead of returning error dicts: services propagate, the API handler renders
    - Amounts parsed to Decimal: money never goes through float
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from condo.core.domain_types import PaymentDecision, Requester
from condo.core.errors import InputValidationError


_CENTS = Decimal("0.01")
# Numeric(10, 2) columns
MAX_AMOUNT = Decimal("99999999.99")
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_booking_date(value: date | str | None) -> date:
    """Accept a date or an ISO 'YYYY-MM-DD' string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InputValidationError("booking_date is required", "booking_date")
    try:
        # strict: fromisoformat would also take 20250110 and 2025-W02-5
        if not _ISO_DATE.fullmatch(value.strip()):
            raise ValueError(value)
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InputValidationError(
            f"booking_date '{value}' is not a valid calendar date (YYYY-MM-DD)",
            "booking_date",
        )


def require_text(value: str | None, field: str) -> str:
    if value is None or not str(value).strip():
        raise InputValidationError(f"{field} is required", field)
    return str(value).strip()


def validate_requester(requester: Requester) -> Requester:
    """All three audit fields must be present."""
    return Requester(
        name=require_text(requester.name, "resident_name"),
        unit_number=require_text(requester.unit_number, "unit_number"),
        contact_number=require_text(requester.contact_number, "contact_number"),
    )


def parse_amount(value: Decimal | int | float | str | None) -> Decimal:
    """Positive amount rounded to cents, at most MAX_AMOUNT; bools and non-finite values rejected."""
    if value is None or isinstance(value, bool) or (
        isinstance(value, str) and not value.strip()
    ):
        raise InputValidationError("amount is required", "amount")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite():
        raise InputValidationError(f"amount '{value}' is not a number", "amount")
    if amount > MAX_AMOUNT:
        raise InputValidationError(
            f"amount must not exceed {MAX_AMOUNT}", "amount",
        )
    # bounded above, so quantize cannot overflow the context precision
    amount = amount.quantize(_CENTS, rounding=ROUND_HALF_UP) if amount > 0 else amount
    if amount <= 0:
        raise InputValidationError("amount must be greater than zero", "amount")
    return amount


def parse_decision(value: PaymentDecision | str | None) -> PaymentDecision:
    """Only the literals 'Approved' and 'Rejected' are accepted."""
    if isinstance(value, PaymentDecision):
        return value
    try:
        return PaymentDecision(value)
    except ValueError:
        raise InputValidationError(
            f"decision must be one of "
            f"{', '.join(d.value for d in PaymentDecision)}; got '{value}'",
            "decision",
        )


def normalize_reference(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
