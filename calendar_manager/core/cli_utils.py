#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Shared CLI utilities.

Functions:
    setup_logger: Initialize CalendarLogger for CLI operations
"""
from pathlib import Path

from calendar_manager.core.logging_manager import CalendarLogger


def setup_logger(log_dir: Path, component_name: str) -> CalendarLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a CalendarLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'shell')

    Returns:
        Configured CalendarLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return CalendarLogger(operations_log_dir, component_name=component_name)
