"""Initial schema — facilities, units, bookings, slot counters, invoices, payments.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "facilities",
        sa.Column("facility_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("capacity", sa.Integer, nullable=False, server_default="1"),
        sa.CheckConstraint("capacity > 0", name="ck_facilities_capacity_positive"),
    )

    op.create_table(
        "units",
        sa.Column("unit_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("unit_no", sa.String(20), nullable=False),
    )
    op.create_index("ix_units_unit_no", "units", ["unit_no"], unique=True)

    op.create_table(
        "facility_bookings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("facility_id", sa.Integer, sa.ForeignKey("facilities.facility_id"), nullable=False),
        sa.Column("booking_date", sa.Date, nullable=False),
        sa.Column("time_slot", sa.String(40), nullable=False),
        sa.Column("resident_name", sa.String(100), nullable=False),
        sa.Column("unit_number", sa.String(20), nullable=False),
        sa.Column("contact_number", sa.String(40), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_facility_bookings_slot", "facility_bookings",
        ["facility_id", "booking_date", "time_slot"],
    )

    op.create_table(
        "slot_counters",
        sa.Column("facility_id", sa.Integer, sa.ForeignKey("facilities.facility_id"), primary_key=True),
        sa.Column("booking_date", sa.Date, primary_key=True),
        sa.Column("time_slot", sa.String(40), primary_key=True),
        sa.Column("booked_count", sa.Integer, nullable=False, server_default="0"),
        sa.CheckConstraint("booked_count >= 0", name="ck_slot_counters_non_negative"),
    )

    op.create_table(
        "invoices",
        sa.Column("invoice_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("unit_id", sa.Integer, sa.ForeignKey("units.unit_id"), nullable=False),
        sa.Column("period_start", sa.Date, nullable=False),
        sa.Column("period_end", sa.Date, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Unpaid"),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("condo_fee", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("carpark_fee", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_invoices_unit_id", "invoices", ["unit_id"])

    op.create_table(
        "payments",
        sa.Column("payment_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("invoice_id", sa.Integer, sa.ForeignKey("invoices.invoice_id"), nullable=False),
        sa.Column("method", sa.String(40), nullable=False),
        sa.Column("reference_no", sa.String(100), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("status", sa.String(20), nullable=False, server_default="Pending"),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_payments_invoice_paid_at", "payments", ["invoice_id", "paid_at"])


def downgrade() -> None:
    op.drop_table("payments")
    op.drop_table("invoices")
    op.drop_table("slot_counters")
    op.drop_table("facility_bookings")
    op.drop_table("units")
    op.drop_table("facilities")
