#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the calendar.

Provides the CalendarDB class for interacting with the calendar database.
Handles:
    - Initialization of the database engine and sessionmaker
    - Schema migration at startup via Alembic
    - Per-operation session scopes with commit/rollback
    - Entity managers bound to the active session

Notes
==============
- The connection string comes from an explicit CalendarConfig
- A fresh database is created from the ORM metadata and stamped at head;
  an existing one is upgraded to head
- Sessions never span more than one user operation
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional

# --- Third party ---
from sqlalchemy import Engine, create_engine, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

# --- Local imports ---
from calendar_manager.core.config import CalendarConfig
from calendar_manager.core.exceptions import DatabaseError
from calendar_manager.core.logging_manager import CalendarLogger, safe_logger
from .decorators import handle_db_errors, log_database_operation
from .managers import EventManager, LocationManager
from .models import Base


# ----- Main Database Manager -----
class CalendarDB:
    """
    Main database manager for the calendar.

    Attributes:
        - config (CalendarConfig): Startup configuration.
        - engine (Engine): SQLAlchemy engine instance.
        - SessionLocal (sessionmaker): SQLAlchemy session factory.
        - alembic_cfg (Config): Alembic configuration for migrations.

    Usage:
        db = CalendarDB(CalendarConfig(database_url="sqlite:///calendar.db"))
        with db.session_scope():
            for event in db.events.get_all():
                print(event.display_line)
    """

    # ---- Initialization ----
    def __init__(
        self,
        config: CalendarConfig,
        logger: Optional[CalendarLogger] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            config: Startup configuration
            logger: Logger to use; when omitted and ``config.log_dir`` is
                set, a 'database' logger is created there
        """
        self.config = config

        # --- Logging ---
        if logger is not None:
            self.logger: Optional[CalendarLogger] = logger
        elif config.log_dir:
            self.logger = CalendarLogger(
                Path(config.log_dir).expanduser().resolve(),
                component_name="database",
            )
        else:
            self.logger = None

        self._event_manager: Optional[EventManager] = None
        self._location_manager: Optional[LocationManager] = None

        self._setup_engine()

        if config.auto_migrate:
            self.initialize_schema()

    def _setup_engine(self) -> None:
        """Initialize database engine, session factory and Alembic config."""
        try:
            safe_logger(self.logger).log_operation(
                "database_init_start",
                {
                    "database_url": self._safe_url(),
                    "alembic_dir": str(self.config.alembic_dir),
                },
            )

            url = make_url(self.config.database_url)
            if url.drivername.startswith("sqlite") and url.database not in (
                None,
                "",
                ":memory:",
            ):
                Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                url,
                echo=False,
                pool_pre_ping=True,
            )

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            self.alembic_cfg: Config = self._setup_alembic()

            safe_logger(self.logger).log_operation(
                "database_init_complete", {"success": True}
            )

        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    def _safe_url(self) -> str:
        """Database URL with any password masked, for logs."""
        try:
            return make_url(self.config.database_url).render_as_string(
                hide_password=True
            )
        except Exception:
            return "<unparseable url>"

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around a single operation.

        Also binds the entity managers (db.events, db.locations) to the
        session for the duration of the scope.

        Usage:
            with db.session_scope():
                db.events.create({"date": "01/05/2024", "description": "Launch"})
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        self._event_manager = EventManager(session, self.logger)
        self._location_manager = LocationManager(session, self.logger)

        safe_logger(self.logger).log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            safe_logger(self.logger).log_debug(
                "session_commit", {"session_id": session_id}
            )

        except Exception as e:
            session.rollback()
            safe_logger(self.logger).log_error(
                e, {"operation": "session_rollback", "session_id": session_id}
            )
            raise
        finally:
            self._event_manager = None
            self._location_manager = None

            session.close()
            safe_logger(self.logger).log_debug(
                "session_close", {"session_id": session_id}
            )

    def dispose(self) -> None:
        """Release every pooled connection."""
        self.engine.dispose()

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @property
    def events(self) -> EventManager:
        """
        Access EventManager for event operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._event_manager is None:
            raise DatabaseError(
                "EventManager requires active session. Use within session_scope."
            )
        return self._event_manager

    @property
    def locations(self) -> LocationManager:
        """
        Access LocationManager for location operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._location_manager is None:
            raise DatabaseError(
                "LocationManager requires active session. Use within session_scope."
            )
        return self._location_manager

    # ---- Alembic setup ----
    def _setup_alembic(self) -> Config:
        """Setup Alembic configuration."""
        try:
            alembic_cfg = Config()
            alembic_cfg.set_main_option(
                "script_location", str(self.config.alembic_dir)
            )
            # ConfigParser interpolation: escape percent signs in URLs
            alembic_cfg.set_main_option(
                "sqlalchemy.url", self.config.database_url.replace("%", "%%")
            )
            alembic_cfg.set_main_option(
                "file_template",
                "%%(year)d%%(month).2d%%(day).2d_%%(hour).2d%%(minute).2d_%%(slug)s",
            )
            return alembic_cfg
        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "setup_alembic"})
            raise DatabaseError(f"Alembic configuration failed: {e}") from e

    def _run_alembic(self, action, *args) -> None:
        """Run an Alembic command on a connection from this engine."""
        with self.engine.begin() as connection:
            self.alembic_cfg.attributes["connection"] = connection
            try:
                action(self.alembic_cfg, *args)
            finally:
                self.alembic_cfg.attributes.pop("connection", None)

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """
        Run the startup migration step.

        Actions:
            If the database has no tables,
                creates all tables from the ORM models
                stamps the Alembic revision to head
            If not,
                runs pending migrations to update schema
        """
        try:
            with self.engine.connect() as conn:
                table_names = inspect(conn).get_table_names()
            is_fresh_db = len(table_names) == 0

            if is_fresh_db:
                Base.metadata.create_all(bind=self.engine)
                self._run_alembic(command.stamp, "head")
                safe_logger(self.logger).log_operation(
                    "fresh_database_created",
                    {"tables_created": len(Base.metadata.tables)},
                )
            else:
                self.upgrade_database()
                safe_logger(self.logger).log_operation(
                    "existing_database_migrated", {"table_count": len(table_names)}
                )
        except DatabaseError:
            raise
        except Exception as e:
            raise DatabaseError(f"Could not initialize database: {e}") from e

    @handle_db_errors
    @log_database_operation("upgrade_database")
    def upgrade_database(self, revision: str = "head") -> None:
        """
        Upgrade the database schema to the specified Alembic revision.

        Args:
            revision: Target revision (default: latest)
        """
        try:
            self._run_alembic(command.upgrade, revision)
        except Exception as e:
            raise DatabaseError(f"Database upgrade failed: {e}") from e

    def get_migration_history(self) -> Dict[str, Optional[str]]:
        """
        Get the current migration status of the database.

        Returns:
            Dictionary with keys:
                - 'current_revision': Current Alembic revision or None
                - 'status': 'up_to_date' or 'needs_migration'
                - 'error': Present if an exception occurred
        """
        try:
            with self.engine.connect() as conn:
                context = MigrationContext.configure(conn)
                current_rev = context.get_current_revision()

            return {
                "current_revision": current_rev,
                "status": "up_to_date" if current_rev else "needs_migration",
            }
        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "get_migration_history"})
            return {"error": str(e)}
