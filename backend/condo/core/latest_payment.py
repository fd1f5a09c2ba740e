"""Latest Payment Selection — deterministic pick of an invoice's current payment.

Invariants:
    - Latest = greatest submission timestamp (paid_at)
    - Equal timestamps resolved by greatest payment_id (never by row order)
    - Pure: works on any objects exposing invoice_id, paid_at, payment_id

Design Decisions:
    - Selection done in Python over an ORDER BY ... LIMIT 1 subquery: the
      tie-break is explicit and testable without a database
"""

from typing import Iterable, Protocol, TypeVar
from datetime import datetime


class PaymentLike(Protocol):
    payment_id: int
    invoice_id: int
    paid_at: datetime


P = TypeVar("P", bound=PaymentLike)


def recency_key(payment: PaymentLike) -> tuple[datetime, int]:
    """Sort key: later submission wins, then the higher id."""
    return (payment.paid_at, payment.payment_id)


def latest_by_invoice(payments: Iterable[P]) -> dict[int, P]:
    """Group by invoice_id and keep the latest payment of each group."""
    latest: dict[int, P] = {}
    for p in payments:
        current = latest.get(p.invoice_id)
        if current is None or recency_key(p) > recency_key(current):
            latest[p.invoice_id] = p
    return latest
