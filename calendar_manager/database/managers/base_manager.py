#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common CRUD utilities.
All entity managers inherit from this class.

Key Features:
    - Identifier lookups that report "not found" as None
    - Object resolution helpers (instance or id)
    - Scalar field updates driven by normalizer configs
    - Counting helpers

Usage:
    Subclass BaseManager for each entity type and implement:
    - exists(): Check if entity exists without exceptions
    - get(): Retrieve single entity, None when missing
    - get_all(): Retrieve every entity in display order
    - create(): Create new entity with validation and relationships
    - update(): Update tracked entity in place
    - delete(): Delete entity (where applicable)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Dict, List, Optional, Protocol, Sequence, Type, TypeVar, Union

# --- Third party imports ---
from sqlalchemy import func, select
from sqlalchemy.orm import Mapped, Session
from sqlalchemy.sql.base import ExecutableOption

# --- Local imports ---
from calendar_manager.core.logging_manager import CalendarLogger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager providing common CRUD utilities.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[CalendarLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Lookup Helpers
    # -------------------------------------------------------------------------

    def _get_by_id(
        self,
        model_class: Type[T],
        entity_id: int,
        options: Sequence[ExecutableOption] = (),
    ) -> Optional[T]:
        """
        Get entity by ID.

        Args:
            model_class: ORM model class
            entity_id: The entity ID
            options: Loader options (e.g. joinedload) applied to the lookup

        Returns:
            Entity if found, None otherwise
        """
        return self.session.get(model_class, entity_id, options=list(options))

    def _resolve_object(self, item: Union[T, int], model_class: Type[T]) -> T:
        """
        Resolve an item to an ORM object.

        Handles both ORM instances and integer IDs.

        Args:
            item: Object instance or ID
            model_class: Target model class

        Returns:
            Resolved ORM object

        Raises:
            ValueError: If no object has the given ID
            TypeError: If item type is invalid
        """
        if isinstance(item, model_class):
            return item
        elif isinstance(item, int) and not isinstance(item, bool):
            obj = self.session.get(model_class, item)
            if obj is None:
                raise ValueError(f"No {model_class.__name__} found with id: {item}")
            return obj
        else:
            raise TypeError(
                f"Expected {model_class.__name__} instance or int, got {type(item)}"
            )

    def _count(self, model_class: Type[T]) -> int:
        """Count every row of a model."""
        return self.session.scalar(select(func.count()).select_from(model_class)) or 0

    # -------------------------------------------------------------------------
    # Scalar Field Update Helpers
    # -------------------------------------------------------------------------

    def _update_scalar_fields(
        self,
        entity: Any,
        metadata: Dict[str, Any],
        field_configs: List[tuple],
    ) -> List[str]:
        """
        Update multiple scalar fields from metadata using normalizers.

        Args:
            entity: Entity to update
            metadata: Dictionary containing field values
            field_configs: List of tuples:
                - (field_name, normalizer) for required fields
                - (field_name, normalizer, allow_none) for optional fields

        Returns:
            Names of the fields that were assigned

        Example:
            self._update_scalar_fields(event, metadata, [
                ("date", DataValidator.normalize_date),
                ("description", DataValidator.normalize_string),
            ])
        """
        updated = []
        for config in field_configs:
            field_name = config[0]
            normalizer = config[1]
            allow_none = config[2] if len(config) > 2 else False

            if field_name not in metadata:
                continue

            value = normalizer(metadata[field_name])
            if value is not None or allow_none:
                setattr(entity, field_name, value)
                updated.append(field_name)
        return updated
