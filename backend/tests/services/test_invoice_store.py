"""Invoice Store — lookup, status overwrite and per-unit listing with latest payment."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from condo.core.domain_types import InvoiceId, InvoiceStatus, UnitId
from condo.core.errors import ResourceNotFoundError
from condo.models.invoice import Invoice
from condo.models.payment import Payment
from condo.models.unit import Unit
from condo.services.invoice_store import InvoiceStore

T0 = datetime(2025, 1, 15, 10, 0, 0)


def _payment(invoice, payment_id, paid_at, status="Pending"):
    return Payment(
        payment_id=payment_id,
        invoice_id=invoice.invoice_id,
        method="bank",
        amount=Decimal("150.00"),
        paid_at=paid_at,
        status=status,
    )


async def test_get_unknown_invoice_raises_not_found(test_db):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await InvoiceStore(test_db).get(InvoiceId(77))
    assert exc_info.value.message == "Invoice '77' not found"
    assert exc_info.value.context.invoice_id == 77


async def test_get_for_update_returns_invoice(test_db, invoice):
    found = await InvoiceStore(test_db).get(InvoiceId(invoice.invoice_id), for_update=True)
    assert found.invoice_id == invoice.invoice_id
    assert found.status == "Unpaid"


async def test_set_status_overwrites(test_db, test_session_factory, invoice):
    store = InvoiceStore(test_db)
    await store.set_status(InvoiceId(invoice.invoice_id), InvoiceStatus.PAID)
    await test_db.commit()

    async with test_session_factory() as fresh:
        reloaded = await InvoiceStore(fresh).get(InvoiceId(invoice.invoice_id))
        assert reloaded.status == "Paid"


async def test_list_for_unit_newest_period_first(test_db, unit, invoice):
    february = Invoice(
        unit_id=unit.unit_id,
        period_start=date(2025, 2, 1),
        period_end=date(2025, 2, 28),
        total_amount=Decimal("150.00"),
    )
    test_db.add(february)
    await test_db.commit()

    rows = await InvoiceStore(test_db).list_for_unit(UnitId(unit.unit_id))

    assert [i.invoice_id for i, _ in rows] == [february.invoice_id, invoice.invoice_id]
    assert all(p is None for _, p in rows)


async def test_list_for_unit_reports_latest_payment(test_db, unit, invoice):
    test_db.add_all([
        _payment(invoice, 1, T0, status="Rejected"),
        _payment(invoice, 2, T0.replace(minute=30)),
    ])
    await test_db.commit()

    [(listed, latest)] = await InvoiceStore(test_db).list_for_unit(UnitId(unit.unit_id))
    assert listed.invoice_id == invoice.invoice_id
    assert latest.payment_id == 2
    assert latest.status == "Pending"


async def test_equal_timestamps_latest_is_higher_id(test_db, unit, invoice):
    test_db.add_all([_payment(invoice, 11, T0), _payment(invoice, 10, T0)])
    await test_db.commit()

    [(_, latest)] = await InvoiceStore(test_db).list_for_unit(UnitId(unit.unit_id))
    assert latest.payment_id == 11


async def test_list_for_unit_ignores_other_units(test_db, invoice):
    other = Unit(unit_no="01-01")
    test_db.add(other)
    await test_db.commit()

    assert await InvoiceStore(test_db).list_for_unit(UnitId(other.unit_id)) == []
