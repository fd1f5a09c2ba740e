"""Database Metadata — SQLAlchemy declarative Base shared by all models.

Invariants:
    - All sessions are async (AsyncSession), created by infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
