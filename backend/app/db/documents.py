"""Pure mutations of a plan document, shared by every gateway implementation.

Days and activities are embedded in the plan; each mutation locates its
target by array-element id match (day id, then activity id) and returns a new
Plan with updated_at stamped. Inputs are never mutated.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from backend.app.errors import ActivityNotFoundError, DayNotFoundError
from backend.app.models.activity import Activity
from backend.app.models.plan import DayPlan, Plan


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(UTC)


def find_activity(plan: Plan, day_id: str, activity_id: str) -> Activity:
    """Locate one activity by day id and activity id.

    Raises:
        DayNotFoundError: No day with day_id.
        ActivityNotFoundError: Day has no activity with activity_id.
    """
    day = plan.get_day(day_id)
    if day is None:
        raise DayNotFoundError(plan.id, day_id)
    for activity in day.activities:
        if activity.id == activity_id:
            return activity
    raise ActivityNotFoundError(day_id, activity_id)


def apply_plan_fields(plan: Plan, fields: dict[str, Any], now: datetime) -> Plan:
    """Merge top-level plan fields (validated by the caller)."""
    return plan.model_copy(update={**fields, "updated_at": now})


def _update_day(
    plan: Plan, day_id: str, transform: Callable[[DayPlan], DayPlan], now: datetime
) -> Plan:
    days: list[DayPlan] = []
    found = False
    for day in plan.days:
        if day.id == day_id and not found:
            days.append(transform(day))
            found = True
        else:
            days.append(day)

    if not found:
        raise DayNotFoundError(plan.id, day_id)

    return plan.model_copy(update={"days": days, "updated_at": now})


def append_activity(plan: Plan, day_id: str, activity: Activity, now: datetime) -> Plan:
    """Push one activity onto the end of a day's list."""
    return _update_day(
        plan,
        day_id,
        lambda day: day.model_copy(update={"activities": [*day.activities, activity]}),
        now,
    )


def replace_day_activities(
    plan: Plan, day_id: str, activities: list[Activity], now: datetime
) -> Plan:
    """Replace a day's entire activities array."""
    return _update_day(
        plan,
        day_id,
        lambda day: day.model_copy(update={"activities": list(activities)}),
        now,
    )


def patch_activity(
    plan: Plan, day_id: str, activity_id: str, fields: dict[str, Any], now: datetime
) -> Plan:
    """Merge fields into one activity of one day.

    Raises:
        DayNotFoundError: No day with day_id.
        ActivityNotFoundError: Day has no activity with activity_id.
    """

    def transform(day: DayPlan) -> DayPlan:
        activities: list[Activity] = []
        found = False
        for activity in day.activities:
            if activity.id == activity_id and not found:
                merged = {**activity.model_dump(), **fields}
                activities.append(Activity.model_validate(merged))
                found = True
            else:
                activities.append(activity)
        if not found:
            raise ActivityNotFoundError(day_id, activity_id)
        return day.model_copy(update={"activities": activities})

    return _update_day(plan, day_id, transform, now)


def remove_activity(plan: Plan, day_id: str, activity_id: str, now: datetime) -> Plan:
    """Drop every activity with activity_id from a day (absent id is a no-op)."""
    return _update_day(
        plan,
        day_id,
        lambda day: day.model_copy(
            update={"activities": [a for a in day.activities if a.id != activity_id]}
        ),
        now,
    )
