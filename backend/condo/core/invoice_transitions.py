"""Invoice State Machine — pure transition function for the derived invoice status.

Invariants:
    - transition_invoice is PURE: returns the target status, does NOT mutate records
    - Total over (current state, event): every pair has a defined target
    - No terminal state: Paid can return to Unpaid (rejection) or Pending (resubmission)

Design Decisions:
    - Explicit transition table over ad-hoc "UPDATE ... SET status" per call site:
      the shell applies the result inside the same transaction as the payment write
    - Target depends only on the event today; current state is kept in the signature
      so guarded transitions can be added without touching callers
"""

from condo.core.domain_types import (
    InvoiceEvent, InvoiceStatus, PaymentDecision, PaymentStatus,
)


_TARGETS: dict[InvoiceEvent, InvoiceStatus] = {
    InvoiceEvent.PAYMENT_SUBMITTED: InvoiceStatus.PENDING,
    InvoiceEvent.PAYMENT_APPROVED: InvoiceStatus.PAID,
    InvoiceEvent.PAYMENT_REJECTED: InvoiceStatus.UNPAID,
}

_DECISION_EVENTS: dict[PaymentDecision, InvoiceEvent] = {
    PaymentDecision.APPROVED: InvoiceEvent.PAYMENT_APPROVED,
    PaymentDecision.REJECTED: InvoiceEvent.PAYMENT_REJECTED,
}


def transition_invoice(
    current: InvoiceStatus, event: InvoiceEvent,
) -> InvoiceStatus:
    """Return the invoice status that follows `event` from `current`."""
    return _TARGETS[event]


def event_for_decision(decision: PaymentDecision) -> InvoiceEvent:
    return _DECISION_EVENTS[decision]


def payment_status_for(decision: PaymentDecision) -> PaymentStatus:
    """Approved -> Approved, Rejected -> Rejected."""
    return PaymentStatus(decision.value)
