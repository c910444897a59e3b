#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the calendar manager.

Exception Hierarchy:
    Exception (built-in)
    └── CalendarError - Base for all project errors
        ├── DatabaseError - Store, session and migration failures
        ├── ValidationError - Bad user input or malformed metadata
        └── ConfigurationError - Unreadable or malformed configuration

Usage:
    from calendar_manager.core.exceptions import DatabaseError, ValidationError

    try:
        db.events.create({"date": "01/05/2024"})
    except ValidationError as e:
        click.echo(f"Invalid data: {e}")
    except DatabaseError as e:
        logger.log_error(e, {"operation": "add_event"})
"""


class CalendarError(Exception):
    """Base exception for every error raised by the calendar manager."""

    pass


class DatabaseError(CalendarError):
    """
    Exception for database-related errors.

    Raised when store operations fail due to connection issues,
    query errors, integrity violations or migration problems.
    SQLAlchemy errors are wrapped into this type by the
    ``handle_db_errors`` decorator.

    Examples:
        >>> raise DatabaseError("Database initialization failed: unable to open file")
        >>> raise DatabaseError("Data integrity violation: NOT NULL constraint failed")
    """

    pass


class ValidationError(CalendarError):
    """
    Exception for data validation failures.

    Raised when input fails validation checks:
    - Unparseable dates
    - Non-numeric identifiers
    - Unknown copy types
    - Missing required fields

    Examples:
        >>> raise ValidationError("Invalid date format: '31/02/2024'")
        >>> raise ValidationError("Required field 'date' missing or empty")
    """

    pass


class ConfigurationError(CalendarError):
    """Exception for configuration files that cannot be loaded."""

    pass
