#!/usr/bin/env python3
"""
shell.py
--------------------
Interactive menu for the calendar.

A single-threaded request/response loop: render the menu, read one line,
dispatch to an operation, repeat until "Exit". Every operation opens its
own session scope, so nothing is held open while the menu waits for input.

Menu:
    1. View Calendar
    2. Add Event
    3. Edit Event
    4. Delete Event
    5. Duplicate Event
    6. Exit
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from typing import Callable, Dict, Optional, Tuple

# --- Third party imports ---
import click

# --- Local imports ---
from calendar_manager.core.exceptions import DatabaseError, ValidationError
from calendar_manager.core.logging_manager import CalendarLogger, safe_logger
from calendar_manager.core.validators import DataValidator
from calendar_manager.database import CalendarDB, CopyMode

EXIT_OPTION = 6


class CalendarShell:
    """
    Menu-driven console front end for CalendarDB.

    Attributes:
        db: Database manager used for every operation
        logger: Optional logger for operation tracking
    """

    def __init__(self, db: CalendarDB, logger: Optional[CalendarLogger] = None):
        self.db = db
        self.logger = logger
        self.options: Dict[int, Tuple[str, Callable[[], None]]] = {
            1: ("View Calendar", self.view_calendar),
            2: ("Add Event", self.add_event),
            3: ("Edit Event", self.edit_event),
            4: ("Delete Event", self.delete_event),
            5: ("Duplicate Event", self.duplicate_event),
        }

    # -------------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------------

    def run(self) -> None:
        """Show the menu until the user picks Exit."""
        safe_logger(self.logger).log_info("shell_start")
        while True:
            click.clear()
            self.render_menu()
            answer = self._ask("Choose an option")

            try:
                selection = self.parse_selection(answer)
            except ValidationError:
                click.echo("Invalid option, try again.")
                self._pause()
                continue

            if selection == EXIT_OPTION:
                click.echo("Goodbye!")
                break

            self.dispatch(selection)
            self._pause()
        safe_logger(self.logger).log_info("shell_exit")

    def render_menu(self) -> None:
        """Print the title and the numbered options."""
        click.echo("Calendar App")
        for number, (label, _) in self.options.items():
            click.echo(f"{number}. {label}")
        click.echo(f"{EXIT_OPTION}. Exit")

    @staticmethod
    def parse_selection(answer: str) -> int:
        """
        Parse a menu answer.

        Raises:
            ValidationError: If the answer is not an integer in 1..6
        """
        try:
            selection = int(answer.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid menu option: {answer!r}") from e
        if not 1 <= selection <= EXIT_OPTION:
            raise ValidationError(f"Invalid menu option: {answer!r}")
        return selection

    def dispatch(self, selection: int) -> None:
        """Run the operation behind a menu number, reporting store failures."""
        label, operation = self.options[selection]
        safe_logger(self.logger).log_info("menu_selection", {"option": label})
        try:
            operation()
        except DatabaseError as e:
            click.echo(
                safe_logger(self.logger).log_cli_error(e, {"operation": label}),
                err=True,
            )

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def view_calendar(self) -> None:
        """List every event in date order."""
        with self.db.session_scope():
            events = self.db.events.get_all()
            click.echo("\nEvents in Calendar:")
            if not events:
                click.echo("No events scheduled.")
            for event in events:
                click.echo(event.display_line)

    def add_event(self) -> None:
        """Prompt for date, description and location, then store the event."""
        event_date = self._read_date("Enter the date (dd/mm/yyyy)")
        if event_date is None:
            click.echo("Invalid date format.")
            return

        description = self._ask("Enter the event description")
        location_name = self._ask("Enter the location name")

        with self.db.session_scope():
            event = self.db.events.create(
                {
                    "date": event_date,
                    "description": description,
                    "location": location_name,
                }
            )
            event_id = event.id
        click.echo(f"Event added successfully! (ID: {event_id})")

    def edit_event(self) -> None:
        """
        Edit date, description and location name of an event.

        Blank answers keep the current value; an unparseable date keeps the
        current date. The location is renamed in place, so events sharing it
        through a shallow duplicate change too.
        """
        event_id = self._read_event_id("edit")
        if event_id is None:
            return

        with self.db.session_scope():
            event = self.db.events.get(event_id)
            if event is None:
                click.echo("Event not found.")
                return

            new_date = self._read_date("Enter new date (dd/mm/yyyy)")
            if new_date is None:
                click.echo(f"Keeping date {event.date_formatted}.")
            description = self._ask("Enter new description")
            location_name = self._ask("Enter new location name")

            self.db.events.update(
                event,
                {
                    "date": new_date,
                    "description": description,
                    "location_name": location_name,
                },
            )
        click.echo("Event updated successfully!")

    def delete_event(self) -> None:
        """Delete an event; its location row is kept."""
        event_id = self._read_event_id("delete")
        if event_id is None:
            return

        with self.db.session_scope():
            deleted = self.db.events.delete(event_id)

        if deleted:
            click.echo("Event deleted successfully!")
        else:
            click.echo("Event not found.")

    def duplicate_event(self) -> None:
        """Duplicate an event as a shallow (shared location) or deep copy."""
        event_id = self._read_event_id("duplicate")
        if event_id is None:
            return

        with self.db.session_scope():
            if not self.db.events.exists(event_id):
                click.echo("Event not found.")
                return

            answer = self._ask("Choose copy type (1. Shallow, 2. Deep)")
            try:
                mode = CopyMode.from_choice(answer)
            except ValidationError:
                click.echo("Invalid copy type selected.")
                return

            clone = self.db.events.duplicate(event_id, mode)
            new_id = clone.id
        click.echo(f"Event duplicated successfully! New ID: {new_id}")

    # -------------------------------------------------------------------------
    # Input helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _ask(text: str) -> str:
        return click.prompt(text, default="", show_default=False)

    @staticmethod
    def _pause() -> None:
        click.pause("Press any key to continue...")

    def _read_date(self, text: str) -> Optional[date]:
        """Prompt for a date; None when blank or unparseable."""
        answer = self._ask(text)
        try:
            return DataValidator.normalize_date(answer)
        except ValidationError as e:
            safe_logger(self.logger).log_debug("invalid_date_input", {"error": str(e)})
            return None

    def _read_event_id(self, action: str) -> Optional[int]:
        """Prompt for an event ID; reports and returns None on bad input."""
        answer = self._ask(f"Enter Event ID to {action}")
        try:
            return DataValidator.normalize_id(answer)
        except ValidationError:
            click.echo("Invalid Event ID.")
            return None
