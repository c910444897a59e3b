#!/usr/bin/env python3
"""
Calendar Manager CLI
-----------------------------------

Command-line entry point.

Command Structure:
    - (no command): launch the interactive menu
    - shell: launch the interactive menu
    - init: run the schema migration step and report the revision

Usage:
    calendar-manager
    calendar-manager --db-url sqlite:////tmp/calendar.db shell
    calendar-manager --config calendar.yaml init
"""
import logging
from pathlib import Path

import click

from calendar_manager.core.cli_utils import setup_logger
from calendar_manager.core.config import CalendarConfig
from calendar_manager.core.exceptions import ConfigurationError, DatabaseError
from calendar_manager.core.logging_manager import handle_cli_error
from calendar_manager.core.paths import LOG_DIR
from calendar_manager.database import CalendarDB
from calendar_manager.shell import CalendarShell


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--db-url",
    default=None,
    help="SQLAlchemy database URL (overrides the configuration file)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Path to log directory",
)
@click.option(
    "--no-migrate",
    is_flag=True,
    help="Skip the schema migration step at startup",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, config_path, db_url, log_dir, no_migrate, verbose):
    """Console calendar: view, add, edit, delete and duplicate events."""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        config = (
            CalendarConfig.from_yaml(config_path) if config_path else CalendarConfig()
        )
    except ConfigurationError as e:
        handle_cli_error(ctx, e, "load_config", {"config": config_path})

    config = config.with_overrides(
        database_url=db_url,
        log_dir=Path(log_dir) if log_dir else None,
        auto_migrate=False if no_migrate else None,
    )
    if config.log_dir is None:
        config = config.with_overrides(log_dir=LOG_DIR)

    ctx.obj["config"] = config
    ctx.obj["logger"] = setup_logger(config.log_dir, "calendar")

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


def get_db(ctx) -> CalendarDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = CalendarDB(ctx.obj["config"])
    return ctx.obj["db"]


@cli.command()
@click.pass_context
def shell(ctx):
    """Launch the interactive calendar menu."""
    try:
        db = get_db(ctx)
    except DatabaseError as e:
        handle_cli_error(
            ctx, e, "shell", {"database_url": ctx.obj["config"].database_url}
        )

    CalendarShell(db, ctx.obj["logger"]).run()


@cli.command()
@click.pass_context
def init(ctx):
    """Create or upgrade the database schema."""
    try:
        click.echo("🗄️  Initializing database schema...")
        db = get_db(ctx)
        if not ctx.obj["config"].auto_migrate:
            db.initialize_schema()
        history = db.get_migration_history()
        if "error" in history:
            raise DatabaseError(history["error"])
        click.echo(f"✅ Database ready at revision {history['current_revision']}")
    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")


if __name__ == "__main__":
    cli(obj={})
