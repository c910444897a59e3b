"""
test_event_manager.py
---------------------
Unit tests for EventManager CRUD and duplication operations.
"""
import pytest
from datetime import date

from calendar_manager.core.exceptions import ValidationError
from calendar_manager.database.duplication import CopyMode
from calendar_manager.database.models import Event, Location


class TestCreateEvent:
    """Test EventManager.create() method."""

    def test_create_with_location_name(self, event_manager, db_session):
        """A location name cascades into a new Location row."""
        event = event_manager.create({
            "date": "01/05/2024",
            "description": "Launch",
            "location": "HQ",
        })

        assert event.id is not None
        assert event.date == date(2024, 5, 1)
        assert event.description == "Launch"
        assert event.location.name == "HQ"
        assert event.location_id == event.location.id
        assert db_session.query(Location).count() == 1

    def test_create_accepts_iso_dates(self, event_manager):
        event = event_manager.create({"date": "2024-05-01", "description": "Launch"})
        assert event.date == date(2024, 5, 1)

    def test_create_without_location(self, event_manager, db_session):
        """Blank location names create no Location."""
        event = event_manager.create({
            "date": date(2024, 5, 1),
            "description": "Launch",
            "location": "   ",
        })

        assert event.location is None
        assert db_session.query(Location).count() == 0

    def test_create_with_existing_location(self, event_manager, location_manager):
        hq = location_manager.create({"name": "HQ"})
        event = event_manager.create({"date": date(2024, 5, 1), "location": hq.id})
        assert event.location is hq

    def test_create_with_unknown_location_id_raises(self, event_manager):
        with pytest.raises(ValidationError):
            event_manager.create({"date": date(2024, 5, 1), "location": 999})

    def test_create_defaults_description_to_empty(self, event_manager):
        event = event_manager.create({"date": date(2024, 5, 1)})
        assert event.description == ""

    def test_create_missing_date_raises(self, event_manager):
        """Date is a required field."""
        with pytest.raises(ValidationError):
            event_manager.create({"description": "Launch"})

    def test_create_invalid_date_raises(self, event_manager):
        with pytest.raises(ValidationError):
            event_manager.create({"date": "31/02/2024", "description": "Launch"})


class TestGetEvent:
    """Test EventManager.get() / exists() methods."""

    def test_get_returns_none_when_not_found(self, event_manager):
        """Missing IDs report not found without raising."""
        assert event_manager.get(999) is None

    def test_get_by_id_includes_location(self, event_manager, launch_event, db_session):
        db_session.commit()
        db_session.expunge_all()

        result = event_manager.get(launch_event.id)

        assert result is not None
        assert result.description == "Launch"
        assert "location" in result.__dict__
        assert result.location.name == "HQ"

    def test_exists(self, event_manager, launch_event):
        assert event_manager.exists(launch_event.id) is True
        assert event_manager.exists(999) is False


class TestGetAllEvents:
    """Test EventManager.get_all() method."""

    def test_get_all_empty(self, event_manager):
        assert event_manager.get_all() == []

    def test_get_all_ordered_by_date_ascending(self, event_manager):
        """Listing always returns events in date order, not insertion order."""
        event_manager.create({"date": date(2024, 9, 1), "description": "Autumn"})
        event_manager.create({"date": date(2024, 1, 1), "description": "New Year"})
        event_manager.create({"date": date(2024, 5, 1), "description": "Launch"})

        result = event_manager.get_all()

        assert [e.description for e in result] == ["New Year", "Launch", "Autumn"]

    def test_get_all_same_date_ordered_by_id(self, event_manager):
        first = event_manager.create({"date": date(2024, 5, 1), "description": "A"})
        second = event_manager.create({"date": date(2024, 5, 1), "description": "B"})

        assert [e.id for e in event_manager.get_all()] == [first.id, second.id]

    def test_count(self, event_manager, launch_event):
        assert event_manager.count() == 1


class TestUpdateEvent:
    """Test EventManager.update() method."""

    def test_update_all_fields(self, event_manager, launch_event):
        location_id = launch_event.location_id

        event_manager.update(launch_event, {
            "date": "02/06/2024",
            "description": "Relaunch",
            "location_name": "Annex",
        })

        assert launch_event.date == date(2024, 6, 2)
        assert launch_event.description == "Relaunch"
        assert launch_event.location.name == "Annex"
        # Renamed in place, not replaced
        assert launch_event.location_id == location_id

    def test_update_blank_values_keep_current(self, event_manager, launch_event):
        event_manager.update(launch_event, {
            "date": None,
            "description": "",
            "location_name": "  ",
        })

        assert launch_event.date == date(2024, 5, 1)
        assert launch_event.description == "Launch"
        assert launch_event.location.name == "HQ"

    def test_update_adds_location_when_missing(self, event_manager, db_session):
        event = event_manager.create({"date": date(2024, 5, 1), "description": "Solo"})

        event_manager.update(event, {"location_name": "Garage"})

        assert event.location is not None
        assert event.location.id is not None
        assert event.location.name == "Garage"

    def test_update_invalid_date_raises(self, event_manager, launch_event):
        with pytest.raises(ValidationError):
            event_manager.update(launch_event, {"date": "not a date"})


class TestDeleteEvent:
    """Test EventManager.delete() method."""

    def test_delete_existing(self, event_manager, launch_event, db_session):
        event_id = launch_event.id

        assert event_manager.delete(event_id) is True
        assert event_manager.get(event_id) is None

    def test_delete_keeps_location(self, event_manager, launch_event, db_session):
        """Deleting an event does not cascade to its Location."""
        location_id = launch_event.location_id

        event_manager.delete(launch_event.id)

        assert db_session.get(Location, location_id) is not None

    def test_delete_nonexistent_leaves_store_unchanged(
        self, event_manager, launch_event, db_session
    ):
        assert event_manager.delete(999) is False
        assert db_session.query(Event).count() == 1
        assert db_session.query(Location).count() == 1


class TestDuplicateEvent:
    """Test EventManager.duplicate() method."""

    def test_deep_duplicate_creates_new_location_row(
        self, event_manager, launch_event, db_session
    ):
        clone = event_manager.duplicate(launch_event.id, CopyMode.DEEP)

        assert clone.id is not None
        assert clone.id != launch_event.id
        assert clone.location_id != launch_event.location_id
        assert clone.location.name == "HQ"
        assert db_session.query(Location).count() == 2

    def test_shallow_duplicate_shares_location_row(
        self, event_manager, launch_event, db_session
    ):
        clone = event_manager.duplicate(launch_event.id, CopyMode.SHALLOW)

        assert clone.id != launch_event.id
        assert clone.location is launch_event.location
        assert db_session.query(Location).count() == 1

    def test_duplicate_accepts_menu_answers(self, event_manager, launch_event):
        clone = event_manager.duplicate(launch_event.id, "2")
        assert clone.location_id != launch_event.location_id

    def test_duplicate_not_found_returns_none(self, event_manager):
        assert event_manager.duplicate(999, CopyMode.DEEP) is None

    def test_duplicate_invalid_mode_raises(self, event_manager, launch_event):
        with pytest.raises(ValidationError):
            event_manager.duplicate(launch_event.id, "3")

    def test_edit_after_shallow_duplicate_renames_both(
        self, event_manager, launch_event, db_session
    ):
        """The shared Location is renamed for the source as well."""
        clone = event_manager.duplicate(launch_event.id, CopyMode.SHALLOW)
        db_session.commit()

        event_manager.update(event_manager.get(clone.id), {"location_name": "Annex"})
        db_session.commit()
        db_session.expunge_all()

        assert event_manager.get(launch_event.id).location.name == "Annex"

    def test_edit_after_deep_duplicate_leaves_source(
        self, event_manager, launch_event, db_session
    ):
        clone = event_manager.duplicate(launch_event.id, CopyMode.DEEP)
        db_session.commit()

        event_manager.update(event_manager.get(clone.id), {"location_name": "Annex"})
        db_session.commit()
        db_session.expunge_all()

        assert event_manager.get(launch_event.id).location.name == "HQ"
        assert event_manager.get(clone.id).location.name == "Annex"
