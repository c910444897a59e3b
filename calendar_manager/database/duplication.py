#!/usr/bin/env python3
"""
duplication.py
--------------------
Event copy engine.

Builds new, unsaved Event instances from an existing one. The caller picks
how the Location is owned by the duplicate:

    - CopyMode.SHALLOW: the duplicate points at the *same* Location instance
      (and therefore the same row). Renaming the venue later renames it for
      both events.
    - CopyMode.DEEP: the duplicate owns a new Location with the same values
      and its own row once persisted.

Either way the duplicate's primary key is unassigned, so flushing it inserts
a new row instead of updating the source.

Usage:
    clone = duplicate(event, CopyMode.DEEP)
    session.add(clone)
    session.flush()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import Any, Dict, Iterable, List, TypeVar, Union

# --- Third party imports ---
from sqlalchemy import inspect

# --- Local imports ---
from calendar_manager.core.exceptions import ValidationError
from .models import Event, Location

M = TypeVar("M", Event, Location)


class CopyMode(str, Enum):
    """
    Ownership of the Location in a duplicated Event.
    - SHALLOW: Shared reference to the source's Location
    - DEEP: Independent clone of the source's Location
    """

    SHALLOW = "shallow"
    DEEP = "deep"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available copy mode choices."""
        return [mode.value for mode in cls]

    @classmethod
    def from_choice(cls, choice: Union[str, "CopyMode"]) -> "CopyMode":
        """
        Resolve a menu answer ("1"/"2") or a mode name to a CopyMode.

        Raises:
            ValidationError: If the answer matches no mode
        """
        if isinstance(choice, cls):
            return choice

        text = str(choice).strip().lower()
        menu = {"1": cls.SHALLOW, "2": cls.DEEP}
        if text in menu:
            return menu[text]
        try:
            return cls(text)
        except ValueError as e:
            raise ValidationError(f"Invalid copy type: {choice!r}") from e

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.title()


def _column_values(source: Any, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """Collect mapped column attribute values, skipping primary keys and `exclude`."""
    mapper = inspect(type(source))
    skipped = set(exclude) | {col.key for col in mapper.primary_key}
    return {
        attr.key: getattr(source, attr.key)
        for attr in mapper.column_attrs
        if attr.key not in skipped
    }


def _clone(source: M, exclude: Iterable[str] = ()) -> M:
    return type(source)(**_column_values(source, exclude))


def shallow_copy(source: Event) -> Event:
    """
    Field-for-field duplicate sharing the source's Location.

    Args:
        source: Event to duplicate (persisted or not)

    Returns:
        Unsaved Event whose ``location`` is the same object as
        ``source.location``
    """
    clone = _clone(source)
    clone.location = source.location
    return clone


def deep_copy(source: Event) -> Event:
    """
    Fully independent duplicate.

    Scalar fields are copied by value and the Location, when present,
    is cloned into a new unsaved Location.

    Args:
        source: Event to duplicate

    Returns:
        Unsaved Event owning its own Location (or none if the source has none)
    """
    clone = _clone(source, exclude=("location_id",))
    if source.location is not None:
        clone.location = _clone(source.location)
    return clone


def duplicate(source: Event, mode: Union[CopyMode, str]) -> Event:
    """Duplicate `source` using the given copy mode."""
    mode = CopyMode.from_choice(mode)
    if mode is CopyMode.SHALLOW:
        return shallow_copy(source)
    return deep_copy(source)
