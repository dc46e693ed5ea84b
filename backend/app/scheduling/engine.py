"""Activity ordering and conflict engine.

Every function returns new Activity instances and leaves its input untouched.
Conflict detection is advisory: nothing here rejects an overlapping schedule.
"""

from collections.abc import Sequence
from datetime import datetime

from backend.app.models.activity import Activity
from backend.app.models.common import ActivityStatus, ActivityType
from backend.app.scheduling.timeutils import (
    add_minutes,
    calculate_end_time,
    format_time,
    is_time_in_range,
    to_minutes,
)
from backend.app.utils.ids import generate_id


def sort_by_time(activities: Sequence[Activity]) -> list[Activity]:
    """Stable ascending sort by start time (minutes of day).

    Activities sharing a start time keep their relative input order.
    """
    return sorted(activities, key=lambda a: to_minutes(a.start_time))


def renumber(activities: Sequence[Activity]) -> list[Activity]:
    """Rewrite order to 0-based array position."""
    return [activity.model_copy(update={"order": index}) for index, activity in enumerate(activities)]


def reorder_activities(
    activities: Sequence[Activity], from_index: int, to_index: int
) -> list[Activity]:
    """Move one activity from from_index to to_index and renumber all.

    Raises:
        ValueError: If either index is outside [0, len(activities)).
    """
    size = len(activities)
    for name, index in (("from_index", from_index), ("to_index", to_index)):
        if not 0 <= index < size:
            raise ValueError(f"{name} {index} out of range for {size} activities")

    result = list(activities)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return renumber(result)


def find_conflict(
    start_time: str,
    duration: int,
    existing: Sequence[Activity],
    *,
    exclude_id: str | None = None,
) -> Activity | None:
    """Return the first existing activity overlapping [start, start + duration).

    Intervals are half-open, so back-to-back activities do not conflict.
    exclude_id skips an activity (e.g. the one being edited).
    """
    candidate_end = add_minutes(start_time, duration)

    for activity in existing:
        if exclude_id is not None and activity.id == exclude_id:
            continue
        existing_end = calculate_end_time(activity)
        if is_time_in_range(start_time, activity.start_time, existing_end) or is_time_in_range(
            activity.start_time, start_time, candidate_end
        ):
            return activity

    return None


def compact_schedule(activities: Sequence[Activity], day_start: str) -> list[Activity]:
    """Remove gaps: each activity starts when the previous one (by order) ends.

    Durations and order values are unchanged.
    """
    cursor = day_start
    compacted: list[Activity] = []
    for activity in sorted(activities, key=lambda a: a.order):
        compacted.append(activity.model_copy(update={"start_time": cursor}))
        cursor = add_minutes(cursor, activity.duration)
    return compacted


def make_break(start_time: str, duration: int, order: int) -> Activity:
    """Build an auto-inserted rest activity."""
    return Activity(
        id=generate_id("break"),
        title="Break",
        type=ActivityType.rest,
        start_time=start_time,
        duration=duration,
        status=ActivityStatus.planned,
        is_break=True,
        ai_suggested=True,
        order=order,
    )


def insert_breaks(
    activities: Sequence[Activity], break_frequency: int, break_duration: int
) -> list[Activity]:
    """Insert a break before an activity once break_frequency minutes have accumulated.

    Walks activities in their given order. A break takes the start time of the
    activity it precedes; later start times are not shifted, so run
    compact_schedule afterwards for a contiguous day. Every element is
    renumbered by final position.
    """
    result: list[Activity] = []
    minutes_since_break = 0

    for activity in activities:
        if minutes_since_break >= break_frequency and not activity.is_break:
            result.append(make_break(activity.start_time, break_duration, len(result)))
            minutes_since_break = 0

        result.append(activity.model_copy(update={"order": len(result)}))
        minutes_since_break += activity.duration

    return result


def prepare_bulk_replace(activities: Sequence[Activity]) -> list[Activity]:
    """Order := submitted position, then sort by start time for storage."""
    return sort_by_time(renumber(activities))


def total_duration(activities: Sequence[Activity]) -> int:
    """Sum of durations in minutes."""
    return sum(activity.duration for activity in activities)


def group_by_type(activities: Sequence[Activity]) -> dict[ActivityType, list[Activity]]:
    """Group activities by type, preserving input order within each group."""
    groups: dict[ActivityType, list[Activity]] = {}
    for activity in activities:
        groups.setdefault(activity.type, []).append(activity)
    return groups


def current_activity(activities: Sequence[Activity], now: datetime) -> Activity | None:
    """Activity whose [start, end) contains the wall-clock time of now."""
    clock = format_time(now.hour, now.minute)
    for activity in activities:
        if is_time_in_range(clock, activity.start_time, calculate_end_time(activity)):
            return activity
    return None
