#!/usr/bin/env python3
"""
Calendar Database Package
---------------------------

SQLAlchemy persistence layer for events and locations.

Components:
    - models: Event and Location ORM models
    - managers: EventManager, LocationManager
    - duplication: Event copy engine (CopyMode, shallow_copy, deep_copy)
    - manager: CalendarDB (engine, sessions, migrations)

Usage:
    from calendar_manager.database import CalendarDB, CopyMode

    with db.session_scope():
        db.events.duplicate(1, CopyMode.DEEP)
"""
from .duplication import CopyMode, deep_copy, duplicate, shallow_copy
from .manager import CalendarDB

__all__ = [
    "CalendarDB",
    "CopyMode",
    "deep_copy",
    "duplicate",
    "shallow_copy",
]
