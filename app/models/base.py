"""
Declarative base.

All ORM models inherit from Base so that Alembic and
scripts/init_database.py share one metadata object.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""

    pass
