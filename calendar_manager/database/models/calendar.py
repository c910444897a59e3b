"""
Calendar Models
-----------------

Models for calendar events and the places they happen.

Models:
    - Location: A named venue
    - Event: A dated calendar entry, optionally held at a Location

Events point at their Location through a nullable many-to-one link.
A Location is normally owned by a single Event, but a shallow duplicate
makes two Events share the same row, so no cardinality is enforced.
Deleting an Event never deletes its Location.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Location(Base):
    """
    A venue where events take place.

    Attributes:
        id: Primary key (None until the row is flushed)
        name: Display name of the venue

    Examples:
        Location(name="HQ")
    """

    __tablename__ = "locations"
    __table_args__ = (CheckConstraint("name != ''", name="ck_location_non_empty_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, name='{self.name}')>"

    def __str__(self) -> str:
        return self.name


class Event(Base):
    """
    A calendar event.

    Attributes:
        id: Primary key (None until the row is flushed)
        date: Calendar date of the event
        description: Free-text description, may be empty
        location_id: Foreign key to the venue, nullable

    Relationships:
        location: Many-to-one with Location (optional)

    Computed Properties:
        date_formatted: ISO format string (YYYY-MM-DD)
        display_line: One-line rendering used by the calendar view
    """

    __tablename__ = "events"

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("locations.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # ---- Relationships ----
    location: Mapped[Optional[Location]] = relationship("Location")

    # ---- Computed properties ----
    @property
    def date_formatted(self) -> str:
        """Get date as ISO format string."""
        return self.date.isoformat()

    @property
    def display_line(self) -> str:
        """Render as '<id>: <date> - <description>[ at <location>]'."""
        line = f"{self.id}: {self.date_formatted} - {self.description}"
        if self.location is not None:
            line += f" at {self.location.name}"
        return line

    def __repr__(self) -> str:
        return (
            f"<Event(id={self.id}, date={self.date}, "
            f"description='{self.description}', location_id={self.location_id})>"
        )

    def __str__(self) -> str:
        return self.display_line
