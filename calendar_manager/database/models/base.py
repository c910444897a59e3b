"""
Base Classes
------------------------

Declarative base shared by every ORM model of the calendar database.
"""
# --- Annotations ---
from __future__ import annotations

# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    pass
