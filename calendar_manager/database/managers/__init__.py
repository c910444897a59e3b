#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the calendar database.

Each manager handles CRUD operations for a specific entity type
and inherits from BaseManager.

Available Managers:
    BaseManager: Abstract base class with common utilities
    EventManager: Manages Event entities, including duplication
    LocationManager: Manages Location entities

Usage:
    from calendar_manager.database.managers import EventManager

    event_mgr = EventManager(session, logger)
"""
from .base_manager import BaseManager
from .event_manager import EventManager
from .location_manager import LocationManager

__all__ = [
    "BaseManager",
    "EventManager",
    "LocationManager",
]
