"""ORM Models — SQLAlchemy declarative models for facilities, bookings, invoices, payments.

Invariants:
    - All models inherit from Base (db/base.py)
    - Facility and Unit are read-only catalog tables from the core's point of view
    - SlotCounter and FacilityBooking change together, never separately

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all()
      or an alembic autogenerate runs
"""

from condo.models.facility import Facility  # noqa: F401
from condo.models.unit import Unit  # noqa: F401
from condo.models.booking import FacilityBooking  # noqa: F401
from condo.models.slot_counter import SlotCounter  # noqa: F401
from condo.models.invoice import Invoice  # noqa: F401
from condo.models.payment import Payment  # noqa: F401
