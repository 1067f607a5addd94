"""Relational persistence (SQLAlchemy async + asyncpg)."""
