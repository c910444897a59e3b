"""
test_duplication.py
-------------------
Unit tests for the event copy engine.

Covers the ownership difference between shallow copies (shared Location)
and deep copies (cloned Location), and identity reset on both.
"""
from datetime import date

import pytest
from sqlalchemy import inspect

from calendar_manager.core.exceptions import ValidationError
from calendar_manager.database.duplication import (
    CopyMode,
    deep_copy,
    duplicate,
    shallow_copy,
)
from calendar_manager.database.models import Event, Location


@pytest.fixture
def source_event():
    """Transient event that looks persisted (IDs set by hand)."""
    location = Location(id=3, name="HQ")
    return Event(
        id=7,
        date=date(2024, 5, 1),
        description="Launch",
        location_id=3,
        location=location,
    )


class TestCopyMode:
    """Test CopyMode.from_choice() and helpers."""

    @pytest.mark.parametrize(
        "answer, expected",
        [
            ("1", CopyMode.SHALLOW),
            ("2", CopyMode.DEEP),
            (" 2 ", CopyMode.DEEP),
            ("shallow", CopyMode.SHALLOW),
            ("DEEP", CopyMode.DEEP),
            (CopyMode.DEEP, CopyMode.DEEP),
        ],
    )
    def test_from_choice_accepts_menu_numbers_and_names(self, answer, expected):
        """Menu numbers and mode names resolve to the same modes."""
        assert CopyMode.from_choice(answer) is expected

    @pytest.mark.parametrize("answer", ["", "3", "0", "clone"])
    def test_from_choice_rejects_unknown(self, answer):
        """Unknown answers raise ValidationError."""
        with pytest.raises(ValidationError):
            CopyMode.from_choice(answer)

    def test_from_choice_error_keeps_cause(self):
        with pytest.raises(ValidationError) as exc_info:
            CopyMode.from_choice("clone")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_choices(self):
        assert CopyMode.choices() == ["shallow", "deep"]

    def test_display_name(self):
        assert CopyMode.SHALLOW.display_name == "Shallow"


class TestShallowCopy:
    """Test shallow_copy()."""

    def test_location_is_same_instance(self, source_event):
        """Shallow copy shares the Location object."""
        clone = shallow_copy(source_event)
        assert clone.location is source_event.location

    def test_identity_is_unassigned(self, source_event):
        """The clone has no primary key."""
        clone = shallow_copy(source_event)
        assert clone.id is None

    def test_scalar_fields_copied(self, source_event):
        clone = shallow_copy(source_event)
        assert clone.date == date(2024, 5, 1)
        assert clone.description == "Launch"
        assert clone.location_id == 3

    def test_location_rename_propagates_to_source(self, source_event):
        """Renaming through the clone renames the shared Location."""
        clone = shallow_copy(source_event)
        clone.location.name = "Annex"
        assert source_event.location.name == "Annex"

    def test_clone_is_not_attached_to_a_session(self, source_event):
        clone = shallow_copy(source_event)
        assert inspect(clone).transient

    def test_source_without_location(self):
        source = Event(id=1, date=date(2024, 1, 1), description="Solo")
        clone = shallow_copy(source)
        assert clone.location is None


class TestDeepCopy:
    """Test deep_copy()."""

    def test_location_is_different_instance_with_same_name(self, source_event):
        """Deep copy clones the Location by value."""
        clone = deep_copy(source_event)
        assert clone.location is not source_event.location
        assert clone.location.name == source_event.location.name

    def test_identities_are_unassigned(self, source_event):
        """Both the event and its location lose their primary keys."""
        clone = deep_copy(source_event)
        assert clone.id is None
        assert clone.location.id is None
        assert clone.location_id is None

    def test_location_rename_does_not_touch_source(self, source_event):
        clone = deep_copy(source_event)
        clone.location.name = "Annex"
        assert source_event.location.name == "HQ"

    def test_scalar_fields_copied(self, source_event):
        clone = deep_copy(source_event)
        assert clone.date == source_event.date
        assert clone.description == source_event.description

    def test_source_without_location(self):
        """No location on the source means no location on the clone."""
        source = Event(id=1, date=date(2024, 1, 1), description="Solo")
        clone = deep_copy(source)
        assert clone.location is None
        assert clone.id is None


class TestDuplicate:
    """Test duplicate() dispatch and persistence of the clones."""

    def test_dispatches_on_mode(self, source_event):
        assert duplicate(source_event, CopyMode.SHALLOW).location is source_event.location
        assert duplicate(source_event, "2").location is not source_event.location

    def test_invalid_mode_raises(self, source_event):
        with pytest.raises(ValidationError):
            duplicate(source_event, "9")

    def test_persisted_deep_copy_gets_new_rows(self, db_session, launch_event):
        """Flushing a deep copy inserts a new event and a new location."""
        clone = deep_copy(launch_event)
        db_session.add(clone)
        db_session.flush()

        assert clone.id is not None
        assert clone.id != launch_event.id
        assert clone.location_id != launch_event.location_id
        assert db_session.query(Location).count() == 2

    def test_persisted_shallow_copy_shares_location_row(self, db_session, launch_event):
        """Flushing a shallow copy inserts a new event pointing at the same row."""
        clone = shallow_copy(launch_event)
        db_session.add(clone)
        db_session.flush()

        assert clone.id != launch_event.id
        assert clone.location_id == launch_event.location_id
        assert db_session.query(Location).count() == 1
