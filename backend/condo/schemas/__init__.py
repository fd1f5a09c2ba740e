"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas shape data at the HTTP boundary; business validation stays in core/

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
