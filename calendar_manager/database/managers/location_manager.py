#!/usr/bin/env python3
"""
location_manager.py
--------------------
Manages Location entities.

Locations are created alongside events (add, deep duplicate, or an edit
that gives a location-less event a venue) and are never deleted with them.

Usage:
    loc_mgr = LocationManager(session, logger)

    hq = loc_mgr.create({"name": "HQ"})
    loc_mgr.update(hq, {"name": "Head Office"})
    every_venue = loc_mgr.get_all()
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from calendar_manager.core.exceptions import ValidationError
from calendar_manager.core.validators import DataValidator
from calendar_manager.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from calendar_manager.database.models import Location
from .base_manager import BaseManager


class LocationManager(BaseManager):
    """Manages Location table operations."""

    @handle_db_errors
    @log_database_operation("location_exists")
    def exists(self, location_id: int) -> bool:
        """Check whether a location with the given ID exists."""
        return self._get_by_id(Location, location_id) is not None

    @handle_db_errors
    @log_database_operation("get_location")
    def get(self, location_id: int) -> Optional[Location]:
        """
        Retrieve a location by ID.

        Returns:
            Location if found, None otherwise
        """
        return self._get_by_id(Location, location_id)

    @handle_db_errors
    @log_database_operation("get_all_locations")
    def get_all(self) -> List[Location]:
        """
        Retrieve all locations.

        Returns:
            List of all Location objects, ordered by name then ID
        """
        return list(
            self.session.scalars(select(Location).order_by(Location.name, Location.id))
        )

    @handle_db_errors
    @log_database_operation("count_locations")
    def count(self) -> int:
        """Number of location rows."""
        return self._count(Location)

    @handle_db_errors
    @log_database_operation("create_location")
    @validate_metadata(["name"])
    def create(self, metadata: Dict[str, Any]) -> Location:
        """
        Create a new location.

        Names are not unique: two events can each own a location
        called "HQ".

        Args:
            metadata: Dictionary with required key:
                - name: Location name

        Returns:
            Created Location object (flushed, ID assigned)

        Raises:
            ValidationError: If the name is blank
        """
        name = DataValidator.normalize_string(metadata.get("name"))
        if not name:
            raise ValidationError(f"Invalid location name: {metadata.get('name')!r}")

        location = Location(name=name)
        self.session.add(location)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(
                f"Created location: {name}", {"location_id": location.id}
            )

        return location

    @handle_db_errors
    @log_database_operation("update_location")
    def update(self, location: Location, metadata: Dict[str, Any]) -> Location:
        """
        Update a tracked location in place.

        Args:
            location: Location to update
            metadata: Dictionary with optional key:
                - name: New location name (blank keeps the current name)

        Returns:
            Updated Location object
        """
        self._update_scalar_fields(
            location, metadata, [("name", DataValidator.normalize_string)]
        )
        self.session.flush()
        return location
