#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities.

Provides type-safe conversion of the free-text console input
(dates, identifiers, names) used by the shell and the entity managers.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError

# Day-first is the format advertised by the shell prompts
DATE_FORMATS = ("%d/%m/%Y", "%Y-%m-%d")

# Largest value a SQLite INTEGER column can bind
MAX_ID = 2**63 - 1


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or not data[field]:
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_date(date_value: Any) -> Optional[date]:
        """
        Normalize various date inputs to date object.

        Args:
            date_value: Date string (dd/mm/yyyy or yyyy-mm-dd), date or datetime

        Returns:
            Normalized date object, or None for empty input

        Raises:
            ValidationError: If a string cannot be parsed
        """
        if isinstance(date_value, datetime):
            return date_value.date()
        elif isinstance(date_value, date):
            return date_value
        elif isinstance(date_value, str):
            text = date_value.strip()
            if not text:
                return None
            for fmt in DATE_FORMATS:
                try:
                    return datetime.strptime(text, fmt).date()
                except ValueError:
                    continue
            raise ValidationError(f"Invalid date format: '{text}'")
        elif date_value is None:
            return None
        raise ValidationError(f"Cannot convert {type(date_value).__name__} to date")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Strips surrounding whitespace; empty results become None.
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_id(value: Any) -> int:
        """
        Convert user input to a record identifier.

        Args:
            value: String or integer identifier

        Returns:
            Positive integer identifier

        Raises:
            ValidationError: If the value is not an integer in 1..MAX_ID
        """
        if isinstance(value, bool):
            raise ValidationError(f"Invalid identifier: {value!r}")
        if isinstance(value, int):
            identifier = value
        else:
            try:
                identifier = int(str(value).strip())
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Invalid identifier: {value!r}") from e
        if not 1 <= identifier <= MAX_ID:
            raise ValidationError(f"Identifier out of range: {value!r}")
        return identifier
