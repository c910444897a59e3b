"""
Calendar Manager
===============================

A console calendar backed by a SQLAlchemy database.

Main Components:
    - core: Configuration, logging, validation, paths, exceptions
    - database: ORM models, entity managers, event copy engine, CalendarDB
    - shell: Interactive menu
    - cli: click entry point (``calendar-manager``)

Example Usage:
    >>> from calendar_manager import CalendarDB, CalendarConfig, CopyMode
    >>> db = CalendarDB(CalendarConfig(database_url="sqlite:///calendar.db"))
    >>> with db.session_scope():
    ...     launch = db.events.create({"date": "01/05/2024", "description": "Launch"})
    ...     db.events.duplicate(launch.id, CopyMode.DEEP)
"""

__version__ = "1.0.0"

from calendar_manager.core.config import CalendarConfig
from calendar_manager.database import CalendarDB, CopyMode

__all__ = [
    "CalendarConfig",
    "CalendarDB",
    "CopyMode",
]
