"""Domain Types — identity types, value objects and status enums.

Invariants:
    - FacilityId, InvoiceId, PaymentId, UnitId, BookingId wrap ints — never mix them
    - TimeSlotKey is the unit capacity is enforced against
    - All valid states encoded as Enums — no raw string matching in services

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - str Enums with the stored literals as values ("Unpaid", "Approved", ...):
      columns hold the same strings the web layer displays
    - Frozen dataclasses for composite values: hashable, usable as dict keys
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

FacilityId = NewType("FacilityId", int)
BookingId = NewType("BookingId", int)
UnitId = NewType("UnitId", int)
InvoiceId = NewType("InvoiceId", int)
PaymentId = NewType("PaymentId", int)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class TimeSlotKey:
    """(facility, calendar date, slot label) — one bookable unit of capacity."""
    facility_id: FacilityId
    booking_date: date
    time_slot: str


@dataclass(frozen=True)
class Requester:
    """Already-authorized resident identity recorded on a booking for audit."""
    name: str
    unit_number: str
    contact_number: str


@dataclass(frozen=True)
class SlotOccupancy:
    """Display projection of one slot on one day."""
    slot: str
    booked_count: int
    capacity: int

    @property
    def available(self) -> int:
        return max(self.capacity - self.booked_count, 0)


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice lifecycle states — maps to invoices.status."""
    UNPAID = "Unpaid"
    PENDING = "Pending"
    PAID = "Paid"


class PaymentStatus(str, Enum):
    """Payment review states — maps to payments.status."""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PaymentDecision(str, Enum):
    """The two administrative verdicts a pending payment can receive."""
    APPROVED = "Approved"
    REJECTED = "Rejected"


class InvoiceEvent(str, Enum):
    """Workflow events that drive the invoice state machine."""
    PAYMENT_SUBMITTED = "payment_submitted"
    PAYMENT_APPROVED = "payment_approved"
    PAYMENT_REJECTED = "payment_rejected"
