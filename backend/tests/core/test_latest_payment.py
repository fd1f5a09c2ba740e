"""Latest Payment Selection — greatest paid_at, ties broken by greatest payment_id."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from condo.core.latest_payment import latest_by_invoice, recency_key


@dataclass
class _P:
    payment_id: int
    invoice_id: int
    paid_at: datetime


T0 = datetime(2025, 1, 10, 9, 0)


def test_latest_by_invoice_empty():
    assert latest_by_invoice([]) == {}


def test_later_timestamp_wins_over_higher_id():
    older = _P(9, 1, T0)
    newer = _P(2, 1, T0 + timedelta(minutes=5))
    assert latest_by_invoice([newer, older])[1] is newer
    assert recency_key(newer) > recency_key(older)


def test_latest_by_invoice_groups():
    p1 = _P(1, 10, T0)
    p2 = _P(2, 10, T0 + timedelta(seconds=1))
    p3 = _P(3, 20, T0)
    latest = latest_by_invoice([p2, p3, p1])
    assert latest == {10: p2, 20: p3}


def test_equal_timestamps_resolved_by_greatest_id_in_any_order():
    a = _P(10, 9, T0)
    b = _P(11, 9, T0)
    assert latest_by_invoice([b, a])[9] is b
    assert latest_by_invoice([a, b])[9] is b
