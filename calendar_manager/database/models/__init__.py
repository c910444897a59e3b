"""
Database Models Package
------------------------

SQLAlchemy ORM models for the calendar database.

- base: Declarative base
- calendar: Event, Location

Usage:
    from calendar_manager.database.models import Event, Location
"""
from .base import Base
from .calendar import Event, Location

__all__ = [
    "Base",
    "Event",
    "Location",
]
