"""Test model validators and field constraints."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from backend.app.models import (
    Activity,
    ActivityPatch,
    ActivityStatus,
    DayPlan,
    Plan,
    PlanPreferences,
)

NOW = datetime(2024, 5, 1, tzinfo=UTC)


def test_plan_reversed_dates_fails() -> None:
    """Test that a plan ending before it starts fails validation."""
    with pytest.raises(ValidationError, match="is after end_date"):
        Plan(
            id="p1",
            title="Trip",
            start_date=date(2024, 6, 3),
            end_date=date(2024, 6, 1),
            created_at=NOW,
            updated_at=NOW,
        )


def test_plan_same_day_passes() -> None:
    """Test that a single-day plan is valid and gets default preferences."""
    plan = Plan(
        id="p1",
        title="Trip",
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 1),
        created_at=NOW,
        updated_at=NOW,
    )

    assert plan.preferences == PlanPreferences()
    assert plan.get_day("missing") is None


@pytest.mark.parametrize("value", ["24:00", "9:00", "09:60", "0900", ""])
def test_activity_bad_start_time_fails(value: str) -> None:
    """Test that start_time must be zero-padded 24h HH:mm."""
    with pytest.raises(ValidationError):
        Activity(id="a", title="A", start_time=value, duration=30)


def test_activity_zero_duration_fails() -> None:
    """Test that duration must be positive."""
    with pytest.raises(ValidationError):
        Activity(id="a", title="A", start_time="09:00", duration=0)


def test_activity_status_wire_value() -> None:
    """Test in-progress uses its hyphenated wire value."""
    activity = Activity.model_validate(
        {"id": "a", "title": "A", "start_time": "09:00", "duration": 30, "status": "in-progress"}
    )

    assert activity.status == ActivityStatus.in_progress
    assert activity.model_dump(mode="json")["status"] == "in-progress"


def test_any_status_may_follow_any_other() -> None:
    """Test completed activities can be reset to planned."""
    activity = Activity(
        id="a", title="A", start_time="09:00", duration=30, status=ActivityStatus.completed
    )

    reset = activity.model_copy(update={"status": ActivityStatus.planned})

    assert reset.status == ActivityStatus.planned


def test_patch_rejects_bad_time() -> None:
    """Test patches validate the same constraints as activities."""
    with pytest.raises(ValidationError):
        ActivityPatch(start_time="7pm")


def test_day_number_starts_at_one() -> None:
    """Test day_number is 1-based."""
    with pytest.raises(ValidationError):
        DayPlan(id="d", date=date(2024, 6, 1), day_number=0)
