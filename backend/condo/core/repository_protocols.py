"""Boundary Protocols — read-only collaborators the core consumes.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Facility catalog and unit directory are owned by the CRUD layer; the core
      only reads them
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass plain fakes
    - Async in Protocol: implementations do IO; pure functions never await
"""

from typing import Protocol

from condo.core.domain_types import FacilityId, UnitId


class FacilityLike(Protocol):
    """Structural contract for a facility catalog entry."""
    facility_id: int
    name: str
    capacity: int


class FacilityCatalog(Protocol):
    """Facility lookup (id -> name, capacity)."""
    async def get(self, facility_id: FacilityId) -> FacilityLike | None: ...


class UnitDirectory(Protocol):
    """Unit identity resolution (unit number -> unit id)."""
    async def resolve(self, unit_no: str) -> UnitId | None: ...
