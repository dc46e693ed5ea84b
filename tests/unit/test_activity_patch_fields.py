"""Unit tests for the activity patch field mapping."""

from backend.app.db.gateway import ACTIVITY_PATCH_FIELDS, activity_patch_fields
from backend.app.models.activity import ActivityPatch
from backend.app.models.common import ActivityStatus


def test_only_set_fields_are_written() -> None:
    """Test omitted fields never appear in the mapping."""
    patch = ActivityPatch(title="Late lunch", duration=45)

    assert activity_patch_fields(patch) == {"title": "Late lunch", "duration": 45}


def test_explicit_null_clears_nullable_field() -> None:
    """Test null is kept for fields an activity may hold as null."""
    patch = ActivityPatch.model_validate({"location": None, "notes": None})

    assert activity_patch_fields(patch) == {"location": None, "notes": None}


def test_explicit_null_dropped_for_required_field() -> None:
    """Test null title/start_time cannot blank out required fields."""
    patch = ActivityPatch.model_validate({"title": None, "start_time": None, "status": "completed"})

    assert activity_patch_fields(patch) == {"status": ActivityStatus.completed}


def test_empty_patch_writes_nothing() -> None:
    """Test an empty patch maps to no fields."""
    assert activity_patch_fields(ActivityPatch()) == {}


def test_mapping_covers_every_patch_field() -> None:
    """Test the explicit field list matches the patch model."""
    assert {name for name, _ in ACTIVITY_PATCH_FIELDS} == set(ActivityPatch.model_fields)
