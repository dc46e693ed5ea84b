"""Plan/day lifecycle: day generation from date ranges and activity defaults."""

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from backend.app.models.activity import Activity, ActivityDraft, ActivitySuggestion
from backend.app.models.common import ActivityStatus, ActivityType, PlanStatus
from backend.app.models.plan import DEFAULT_PREFERENCES, DayPlan, Plan, PlanCreate, SharingSettings
from backend.app.utils.ids import generate_id

SUGGESTION_DEFAULT_TITLE = "New Activity"
SUGGESTION_DEFAULT_START = "12:00"
SUGGESTION_DEFAULT_DURATION = 60


def generate_date_sequence(start_date: date, end_date: date) -> list[date]:
    """Every calendar date from start_date to end_date inclusive.

    An inverted range yields an empty list; callers validate ordering.
    """
    span = (end_date - start_date).days
    return [start_date + timedelta(days=offset) for offset in range(span + 1)]


def create_plan_days(dates: Sequence[date]) -> list[DayPlan]:
    """One empty day per date, numbered from 1."""
    return [
        DayPlan(id=generate_id(), date=day_date, day_number=index, activities=[])
        for index, day_date in enumerate(dates, start=1)
    ]


def regenerate_days(existing_days: Sequence[DayPlan], dates: Sequence[date]) -> list[DayPlan]:
    """Rebuild the day list for a new date sequence.

    A day whose date still appears is reused with its id and activities;
    new dates get fresh empty days. Days outside the new range are dropped.
    day_number always follows position in dates.
    """
    by_date = {day.date: day for day in reversed(existing_days)}

    days: list[DayPlan] = []
    for index, day_date in enumerate(dates, start=1):
        existing = by_date.get(day_date)
        if existing is not None:
            days.append(existing.model_copy(update={"day_number": index}))
        else:
            days.append(DayPlan(id=generate_id(), date=day_date, day_number=index, activities=[]))
    return days


def build_plan(request: PlanCreate, *, now: datetime) -> Plan:
    """Materialize a new plan with one day per date in its range."""
    preferences = request.preferences or DEFAULT_PREFERENCES.model_copy(deep=True)

    return Plan(
        id=generate_id(),
        title=request.title,
        description=request.description or "",
        destination=request.destination or "",
        cover_image=request.cover_image or "",
        status=PlanStatus.draft,
        start_date=request.start_date,
        end_date=request.end_date,
        days=create_plan_days(generate_date_sequence(request.start_date, request.end_date)),
        preferences=preferences,
        sharing=SharingSettings(),
        created_by="anonymous",
        created_at=now,
        updated_at=now,
        tags=list(request.tags),
        budget=request.budget,
    )


def apply_date_range(
    plan: Plan, new_start: date | None, new_end: date | None
) -> list[DayPlan] | None:
    """Replacement days when the date range changes, else None."""
    start = new_start or plan.start_date
    end = new_end or plan.end_date

    if start == plan.start_date and end == plan.end_date:
        return None

    return regenerate_days(plan.days, generate_date_sequence(start, end))


def normalize_new_activity(draft: ActivityDraft) -> Activity:
    """Fill add-time defaults: generated id, planned status, order 0."""
    data = draft.model_dump(exclude={"id", "status", "order"})
    return Activity(
        **data,
        id=draft.id or generate_id(),
        status=draft.status or ActivityStatus.planned,
        order=draft.order if draft.order is not None else 0,
    )


def materialize_suggestion(suggestion: ActivitySuggestion, order: int) -> Activity:
    """Turn a partial suggestion into a planned, AI-flagged activity."""
    return Activity(
        id=generate_id(),
        title=suggestion.title or SUGGESTION_DEFAULT_TITLE,
        type=suggestion.type or ActivityType.activity,
        start_time=suggestion.start_time or SUGGESTION_DEFAULT_START,
        duration=suggestion.duration or SUGGESTION_DEFAULT_DURATION,
        description=suggestion.description,
        location=suggestion.location,
        status=ActivityStatus.planned,
        order=order,
        ai_suggested=True,
    )
