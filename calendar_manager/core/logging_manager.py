#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for the calendar manager.

Each component (the CLI's 'calendar' logger, the 'database' logger) writes
two rotating files in its log directory:

    <component>.log   every operation, DEBUG and up
    errors.log        errors with context and traceback

Messages are one line per record: ``LABEL - message: {json details}``.

Code that may run without a logger calls ``safe_logger(logger)``, which
substitutes a NullLogger.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
)
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _format_details(details: Dict[str, Any]) -> str:
    return json.dumps(details, default=str, sort_keys=True)


def _format_cli_error(error: Exception) -> str:
    return f"❌ {type(error).__name__}: {error}"


def _traceback_text(error: Exception) -> str:
    """Traceback of `error` itself, empty if it was never raised."""
    if error.__traceback__ is None:
        return ""
    return "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    )


class CalendarLogger:
    """
    File logger for one component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Prefix of the logger names and of the operations file
        main_logger: ``<component>.operations``, DEBUG and up
        error_logger: ``<component>.errors``, ERROR only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "calendar",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        """
        Args:
            log_dir: Directory for log files (created if missing)
            component_name: 'calendar', 'database', ...
            max_bytes: Size at which a file is rotated (default: 10MB)
            backup_count: Rotated files kept per log (default: 5)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.main_logger = self._fresh_logger(
            "operations", logging.DEBUG, f"{component_name}.log"
        )
        self.error_logger = self._fresh_logger("errors", logging.ERROR, "errors.log")

    def _fresh_logger(self, suffix: str, level: int, filename: str) -> logging.Logger:
        """Named logger whose only handler is a rotating file in log_dir."""
        logger = logging.getLogger(f"{self.component_name}.{suffix}")
        logger.setLevel(level)
        # Re-creating a component replaces its handlers
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Close and detach the file handlers."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def _write(
        self, level: int, label: str, message: str, details: Optional[Dict[str, Any]]
    ) -> None:
        text = f"{label} - {message}"
        if details:
            text += f": {_format_details(details)}"
        # stacklevel 3 attributes the record to the caller of log_*
        self.main_logger.log(level, text, stacklevel=3)

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a completed operation (INFO)."""
        self._write(logging.INFO, "OPERATION", operation, details)

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._write(logging.DEBUG, "DEBUG", message, details)

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._write(logging.INFO, "INFO", message, details)

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write one errors.log record: type and message, context, traceback.

        Args:
            error: The exception (its own traceback is used, if any)
            context: Where it happened, e.g. {"operation": "add_event"}
        """
        lines = [f"ERROR - {type(error).__name__}: {error}"]
        if context:
            lines.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
        trace = _traceback_text(error)
        if trace:
            lines.append(f"Traceback:\n{trace}")
        self.error_logger.error("\n".join(lines))

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log `error` and return the one-line message shown to the user.

        Examples:
            >>> logger.log_cli_error(DatabaseError("Connection failed"))
            '❌ DatabaseError: Connection failed'
        """
        self.log_error(error, context or {"source": "cli"})
        message = _format_cli_error(error)
        if show_traceback:
            message += f"\n\n{_traceback_text(error)}"
        return message


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a fatal CLI error and exit.

    The full error goes to the logger in ``ctx.obj["logger"]`` (if any);
    stderr gets the one-line message, plus the traceback with --verbose.
    Never returns.
    """
    context = {"operation": operation, **(additional_context or {})}
    message = safe_logger(ctx.obj.get("logger")).log_cli_error(
        error, context, show_traceback=ctx.obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """CalendarLogger stand-in that records nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        message = _format_cli_error(error)
        if show_traceback:
            message += f"\n\n{_traceback_text(error)}"
        return message


_null_logger = NullLogger()


def safe_logger(logger: Optional[CalendarLogger]) -> CalendarLogger:
    """Return `logger`, or a shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
