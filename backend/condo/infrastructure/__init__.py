"""Infrastructure Layer — database sessions and cross-cutting concerns.

Invariants:
    - Infrastructure never imports domain rules from core/ (errors excepted)
    - All SQLAlchemy failures leave this layer as DatabaseError
"""
