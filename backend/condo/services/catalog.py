"""Catalog Adapters — SQL implementations of the read-only collaborator protocols.

Invariants:
    - Read-only: never adds, flushes, or commits
    - Unknown ids/numbers return None; the caller decides whether that is a 404
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from condo.core.domain_types import FacilityId, UnitId
from condo.models.facility import Facility
from condo.models.unit import Unit


class SqlFacilityCatalog:
    """FacilityCatalog backed by the facilities table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, facility_id: FacilityId) -> Facility | None:
        return await self.db.get(Facility, facility_id)


class SqlUnitDirectory:
    """UnitDirectory backed by the units table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, unit_no: str) -> UnitId | None:
        result = await self.db.execute(
            select(Unit.unit_id).where(Unit.unit_no == unit_no.strip()),
        )
        unit_id = result.scalar_one_or_none()
        return UnitId(unit_id) if unit_id is not None else None
