"""Unit tests for date sequences, day regeneration and activity defaults."""

from datetime import UTC, date, datetime

from backend.app.models.activity import Activity, ActivityDraft, ActivitySuggestion
from backend.app.models.common import ActivityStatus, ActivityType, PlanStatus
from backend.app.models.plan import DEFAULT_PREFERENCES, PlanCreate, PlanPreferences
from backend.app.scheduling.lifecycle import (
    apply_date_range,
    build_plan,
    create_plan_days,
    generate_date_sequence,
    materialize_suggestion,
    normalize_new_activity,
    regenerate_days,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def make_activity(activity_id: str, start_time: str = "09:00") -> Activity:
    """Build a minimal activity for tests."""
    return Activity(id=activity_id, title=activity_id, start_time=start_time, duration=60)


class TestDateSequence:
    """Test generate_date_sequence."""

    def test_inclusive_range(self) -> None:
        """Test both endpoints are included."""
        assert generate_date_sequence(date(2024, 6, 1), date(2024, 6, 3)) == [
            date(2024, 6, 1),
            date(2024, 6, 2),
            date(2024, 6, 3),
        ]

    def test_single_day(self) -> None:
        """Test start == end yields one date."""
        assert generate_date_sequence(date(2024, 6, 1), date(2024, 6, 1)) == [date(2024, 6, 1)]

    def test_inverted_range_is_empty(self) -> None:
        """Test start > end yields nothing."""
        assert generate_date_sequence(date(2024, 6, 3), date(2024, 6, 1)) == []

    def test_crosses_month_and_leap_day(self) -> None:
        """Test the sequence steps one calendar day at a time."""
        dates = generate_date_sequence(date(2024, 2, 27), date(2024, 3, 2))

        assert len(dates) == 5
        assert date(2024, 2, 29) in dates


class TestDays:
    """Test create_plan_days and regenerate_days."""

    def test_create_plan_days_numbers_from_one(self) -> None:
        """Test one empty day per date with 1-based day numbers."""
        days = create_plan_days([date(2024, 6, 1), date(2024, 6, 2)])

        assert [d.day_number for d in days] == [1, 2]
        assert all(d.activities == [] for d in days)
        assert len({d.id for d in days}) == 2

    def test_regenerate_days_keeps_overlapping_dates(self) -> None:
        """Test shifting 06-01..06-03 to 06-02..06-04 keeps the 06-02 day."""
        existing = create_plan_days(generate_date_sequence(date(2024, 6, 1), date(2024, 6, 3)))
        existing[1] = existing[1].model_copy(
            update={"activities": [make_activity("a"), make_activity("b"), make_activity("c")]}
        )
        kept_id = existing[1].id
        dropped_id = existing[0].id

        days = regenerate_days(
            existing, generate_date_sequence(date(2024, 6, 2), date(2024, 6, 4))
        )

        assert [d.date for d in days] == [date(2024, 6, 2), date(2024, 6, 3), date(2024, 6, 4)]
        assert [d.day_number for d in days] == [1, 2, 3]
        assert days[0].id == kept_id
        assert len(days[0].activities) == 3
        assert dropped_id not in {d.id for d in days}
        assert days[2].activities == []


class TestBuildPlan:
    """Test build_plan and apply_date_range."""

    def test_build_plan_defaults(self) -> None:
        """Test a new plan is a draft with default preferences and one day per date."""
        plan = build_plan(
            PlanCreate(title="Lisbon", start_date=date(2024, 6, 1), end_date=date(2024, 6, 3)),
            now=NOW,
        )

        assert plan.status == PlanStatus.draft
        assert plan.preferences == DEFAULT_PREFERENCES
        assert plan.preferences is not DEFAULT_PREFERENCES
        assert [d.day_number for d in plan.days] == [1, 2, 3]
        assert plan.created_at == plan.updated_at == NOW
        assert plan.created_by == "anonymous"
        assert plan.sharing.is_public is False

    def test_build_plan_keeps_supplied_preferences(self) -> None:
        """Test caller preferences replace the defaults."""
        preferences = PlanPreferences(wake_up_time="06:30", break_frequency=90)

        plan = build_plan(
            PlanCreate(
                title="Hike",
                start_date=date(2024, 6, 1),
                end_date=date(2024, 6, 1),
                preferences=preferences,
                destination="Alps",
            ),
            now=NOW,
        )

        assert plan.preferences.wake_up_time == "06:30"
        assert plan.preferences.break_frequency == 90
        assert plan.destination == "Alps"

    def test_apply_date_range_unchanged_returns_none(self) -> None:
        """Test the same range needs no regeneration."""
        plan = build_plan(
            PlanCreate(title="Trip", start_date=date(2024, 6, 1), end_date=date(2024, 6, 2)),
            now=NOW,
        )

        assert apply_date_range(plan, date(2024, 6, 1), None) is None

    def test_apply_date_range_extends(self) -> None:
        """Test extending the end date appends fresh days."""
        plan = build_plan(
            PlanCreate(title="Trip", start_date=date(2024, 6, 1), end_date=date(2024, 6, 2)),
            now=NOW,
        )

        days = apply_date_range(plan, None, date(2024, 6, 4))

        assert days is not None
        assert [d.id for d in days[:2]] == [d.id for d in plan.days]
        assert len(days) == 4


class TestActivityDefaults:
    """Test normalize_new_activity and materialize_suggestion."""

    def test_normalize_fills_missing_identity(self) -> None:
        """Test id, status and order are defaulted."""
        activity = normalize_new_activity(
            ActivityDraft(title="Museum", start_time="10:00", duration=90)
        )

        assert activity.id
        assert activity.status == ActivityStatus.planned
        assert activity.order == 0
        assert activity.type == ActivityType.activity

    def test_normalize_keeps_supplied_values(self) -> None:
        """Test caller-supplied id and status survive."""
        activity = normalize_new_activity(
            ActivityDraft(
                id="custom",
                title="Museum",
                start_time="10:00",
                duration=90,
                status=ActivityStatus.completed,
                cost=12.5,
            )
        )

        assert activity.id == "custom"
        assert activity.status == ActivityStatus.completed
        assert activity.cost == 12.5

    def test_materialize_suggestion_defaults(self) -> None:
        """Test an empty suggestion becomes a noon, one-hour AI activity."""
        activity = materialize_suggestion(ActivitySuggestion(), order=3)

        assert activity.title == "New Activity"
        assert activity.type == ActivityType.activity
        assert activity.start_time == "12:00"
        assert activity.duration == 60
        assert activity.order == 3
        assert activity.ai_suggested is True
        assert activity.status == ActivityStatus.planned

    def test_materialize_suggestion_copies_fields(self) -> None:
        """Test supplied suggestion fields are kept."""
        activity = materialize_suggestion(
            ActivitySuggestion(
                title="Dinner", type=ActivityType.meal, start_time="19:00", duration=90
            ),
            order=0,
        )

        assert (activity.title, activity.type, activity.start_time, activity.duration) == (
            "Dinner",
            ActivityType.meal,
            "19:00",
            90,
        )
