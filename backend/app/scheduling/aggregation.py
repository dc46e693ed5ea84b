"""Day aggregation: progress counts, free-slot discovery and slot grids."""

from collections.abc import Sequence

from backend.app.models.activity import Activity
from backend.app.models.common import ActivityStatus
from backend.app.models.plan import DayPlan, Plan
from backend.app.models.timeline import DayProgress, TimeSlot
from backend.app.scheduling.engine import sort_by_time
from backend.app.scheduling.timeutils import (
    add_minutes,
    calculate_end_time,
    is_time_in_range,
    minutes_between,
)

# Skipping counts as progress, not failure
RESOLVED_STATUSES = frozenset({ActivityStatus.completed, ActivityStatus.skipped})


def _progress(total: int, completed: int) -> DayProgress:
    percentage = round(completed / total * 100) if total > 0 else 0
    return DayProgress(total=total, completed=completed, percentage=percentage)


def calculate_day_progress(day: DayPlan) -> DayProgress:
    """Count resolved (completed or skipped) activities of a day."""
    total = len(day.activities)
    completed = sum(1 for a in day.activities if a.status in RESOLVED_STATUSES)
    return _progress(total, completed)


def calculate_plan_progress(plan: Plan) -> DayProgress:
    """Same counts as calculate_day_progress, summed over every day."""
    total = 0
    completed = 0
    for day in plan.days:
        progress = calculate_day_progress(day)
        total += progress.total
        completed += progress.completed
    return _progress(total, completed)


def find_free_slots(
    activities: Sequence[Activity],
    day_start: str,
    day_end: str,
    min_duration: int,
) -> list[TimeSlot]:
    """Gaps of at least min_duration minutes between day_start and day_end.

    Activities are sorted ascending by start time first. Overlapping input is
    not defended against; a negative gap simply yields no slot.
    """
    free_slots: list[TimeSlot] = []
    cursor = day_start

    for activity in sort_by_time(activities):
        if minutes_between(cursor, activity.start_time) >= min_duration:
            free_slots.append(TimeSlot(start=cursor, end=activity.start_time, is_free=True))
        cursor = calculate_end_time(activity)

    if minutes_between(cursor, day_end) >= min_duration:
        free_slots.append(TimeSlot(start=cursor, end=day_end, is_free=True))

    return free_slots


def generate_time_slots(
    activities: Sequence[Activity],
    day_start: str,
    day_end: str,
    slot_duration: int,
) -> list[TimeSlot]:
    """Fixed-step grid from day_start to day_end.

    Each slot carries the first activity covering the slot's start, if any.
    """
    slots: list[TimeSlot] = []
    cursor = day_start

    while minutes_between(cursor, day_end) > 0:
        slot_end = add_minutes(cursor, slot_duration)
        covering = next(
            (
                a
                for a in activities
                if is_time_in_range(cursor, a.start_time, calculate_end_time(a))
            ),
            None,
        )
        slots.append(
            TimeSlot(start=cursor, end=slot_end, is_free=covering is None, activity=covering)
        )
        if minutes_between(cursor, slot_end) <= 0:
            # Wrapped past midnight
            break
        cursor = slot_end

    return slots
