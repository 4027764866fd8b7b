"""Database Package — SQLAlchemy declarative Base.

Invariants:
    - Engine and sessions live in infrastructure/database.py, never here

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
