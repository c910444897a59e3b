#!/usr/bin/env python3
"""
event_manager.py
--------------------
Manages Event entities and their optional Location.

Key Features:
    - CRUD operations for events
    - Cascading creation of the event's Location
    - In-place updates of the linked Location's name
    - Duplication through the copy engine (shared or cloned Location)
    - Chronological listing with locations eagerly joined

Usage:
    event_mgr = EventManager(session, logger)

    launch = event_mgr.create({
        "date": "01/05/2024",
        "description": "Launch",
        "location": "HQ",
    })
    copy = event_mgr.duplicate(launch.id, CopyMode.DEEP)
    event_mgr.delete(launch.id)
"""
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from calendar_manager.core.exceptions import ValidationError
from calendar_manager.core.validators import DataValidator
from calendar_manager.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from calendar_manager.database.duplication import CopyMode, duplicate
from calendar_manager.database.models import Event, Location
from .base_manager import BaseManager


class EventManager(BaseManager):
    """Manages Event table operations and the Event → Location link."""

    @handle_db_errors
    @log_database_operation("event_exists")
    def exists(self, event_id: int) -> bool:
        """Check whether an event with the given ID exists."""
        return self._get_by_id(Event, event_id) is not None

    @handle_db_errors
    @log_database_operation("get_event")
    def get(self, event_id: int) -> Optional[Event]:
        """
        Retrieve an event by ID with its location loaded.

        Args:
            event_id: The event ID

        Returns:
            Event if found, None otherwise
        """
        return self._get_by_id(Event, event_id, options=[joinedload(Event.location)])

    @handle_db_errors
    @log_database_operation("get_all_events")
    def get_all(self) -> List[Event]:
        """
        Retrieve all events.

        Returns:
            List of Event objects ordered by date ascending
            (ties broken by ID), locations eagerly joined
        """
        query = (
            select(Event)
            .options(joinedload(Event.location))
            .order_by(Event.date, Event.id)
        )
        return list(self.session.scalars(query))

    @handle_db_errors
    @log_database_operation("count_events")
    def count(self) -> int:
        """Number of event rows."""
        return self._count(Event)

    @handle_db_errors
    @log_database_operation("create_event")
    @validate_metadata(["date"])
    def create(self, metadata: Dict[str, Any]) -> Event:
        """
        Create a new event.

        Args:
            metadata: Dictionary with required key:
                - date: date object or 'dd/mm/yyyy' / 'yyyy-mm-dd' string
                Optional keys:
                - description: Free text (default: empty)
                - location: Location name, Location object or Location ID.
                  A name creates a new Location row.

        Returns:
            Created Event object (flushed, ID assigned)

        Raises:
            ValidationError: If the date cannot be parsed or the
                location reference cannot be resolved
        """
        event_date = DataValidator.normalize_date(metadata["date"])
        if event_date is None:
            raise ValidationError(f"Invalid event date: {metadata['date']!r}")

        event = Event(
            date=event_date,
            description=DataValidator.normalize_string(metadata.get("description"))
            or "",
            location=self._resolve_location(metadata.get("location")),
        )
        self.session.add(event)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(
                f"Created event: {event.description}",
                {"event_id": event.id, "location_id": event.location_id},
            )

        return event

    @handle_db_errors
    @log_database_operation("update_event")
    def update(self, event: Event, metadata: Dict[str, Any]) -> Event:
        """
        Update a tracked event in place.

        Args:
            event: Event to update
            metadata: Dictionary with optional keys:
                - date: New date (None keeps the current date)
                - description: New description (blank keeps the current one)
                - location_name: New name for the event's Location. The
                  Location row is renamed in place, so every event sharing
                  it (after a shallow duplicate) sees the new name. An event
                  without a Location gets a new one.

        Returns:
            Updated Event object

        Raises:
            ValidationError: If a date string cannot be parsed
        """
        self._update_scalar_fields(
            event,
            metadata,
            [
                ("date", DataValidator.normalize_date),
                ("description", DataValidator.normalize_string),
            ],
        )

        location_name = DataValidator.normalize_string(metadata.get("location_name"))
        if location_name:
            if event.location is None:
                event.location = Location(name=location_name)
            else:
                event.location.name = location_name

        self.session.flush()
        return event

    @handle_db_errors
    @log_database_operation("delete_event")
    def delete(self, event_id: int) -> bool:
        """
        Delete an event by ID.

        The linked Location row is kept.

        Args:
            event_id: The event ID

        Returns:
            True if the event was deleted, False if it did not exist
        """
        event = self._get_by_id(Event, event_id)
        if event is None:
            return False

        self.session.delete(event)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(f"Deleted event {event_id}")

        return True

    @handle_db_errors
    @log_database_operation("duplicate_event")
    def duplicate(
        self, event_id: int, mode: Union[CopyMode, str]
    ) -> Optional[Event]:
        """
        Persist a duplicate of an event.

        Args:
            event_id: ID of the event to copy
            mode: CopyMode.SHALLOW shares the source's Location row,
                CopyMode.DEEP inserts a new Location row with the same name

        Returns:
            The new Event (flushed, fresh ID), or None if the source
            does not exist

        Raises:
            ValidationError: If the mode is not a valid copy type
        """
        mode = CopyMode.from_choice(mode)
        source = self.get(event_id)
        if source is None:
            return None

        clone = duplicate(source, mode)
        self.session.add(clone)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(
                f"Duplicated event {event_id}",
                {
                    "mode": mode.value,
                    "new_event_id": clone.id,
                    "location_id": clone.location_id,
                },
            )

        return clone

    def _resolve_location(
        self, location: Union[str, int, Location, None]
    ) -> Optional[Location]:
        """Turn a location name, ID or instance into a Location (or None)."""
        if location is None:
            return None
        if isinstance(location, str):
            name = DataValidator.normalize_string(location)
            return Location(name=name) if name else None
        try:
            return self._resolve_object(location, Location)
        except (ValueError, TypeError) as e:
            raise ValidationError(str(e)) from e
