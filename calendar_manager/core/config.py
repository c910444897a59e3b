#!/usr/bin/env python3
"""
config.py
--------------------
Runtime configuration for the calendar manager.

The configuration is an explicit object built once at startup and handed
to ``CalendarDB``; nothing in the package reads connection settings from
module state.

YAML format (every key optional):

    database_url: sqlite:////home/me/calendar.db
    log_dir: ~/calendar/logs
    auto_migrate: true

Usage:
    config = CalendarConfig.from_yaml("calendar.yaml").with_overrides(
        database_url=cli_db_url,
    )
    db = CalendarDB(config)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from .exceptions import ConfigurationError
from .paths import ALEMBIC_DIR, DB_URL


@dataclass(frozen=True)
class CalendarConfig:
    """
    Startup configuration.

    Attributes:
        database_url: SQLAlchemy URL of the calendar database
        log_dir: Directory for rotating log files (None disables file logging)
        auto_migrate: Run the schema migration step when the store opens
        alembic_dir: Alembic script location
    """

    database_url: str = DB_URL
    log_dir: Optional[Path] = None
    auto_migrate: bool = True
    alembic_dir: Path = field(default=ALEMBIC_DIR)

    def __post_init__(self) -> None:
        if self.log_dir is not None and not isinstance(self.log_dir, Path):
            object.__setattr__(self, "log_dir", Path(self.log_dir).expanduser())
        if not isinstance(self.alembic_dir, Path):
            object.__setattr__(self, "alembic_dir", Path(self.alembic_dir).expanduser())

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "CalendarConfig":
        """
        Load configuration from a YAML mapping.

        Args:
            path: Path to the YAML file

        Returns:
            CalendarConfig with file values over the defaults

        Raises:
            ConfigurationError: If the file is unreadable, not a mapping,
                or contains unknown keys
        """
        config_path = Path(path).expanduser()
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read configuration {config_path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration {config_path} must be a mapping, "
                f"got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys in {config_path}: {', '.join(unknown)}"
            )

        return cls(**data)

    def with_overrides(self, **overrides: Any) -> "CalendarConfig":
        """Return a copy with every override that is not None applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self
