"""Wall-clock time arithmetic over "HH:mm" strings.

Pure functions with no validation: callers pass well-formed 24h strings.
Malformed input produces undefined results rather than an error.
"""

from backend.app.models.activity import Activity

MINUTES_PER_DAY = 24 * 60


def parse_time(value: str) -> tuple[int, int]:
    """Split "HH:mm" into (hours, minutes)."""
    hours, minutes = value.split(":")
    return int(hours), int(minutes)


def format_time(hours: int, minutes: int) -> str:
    """Render hours and minutes as zero-padded "HH:mm"."""
    return f"{hours:02d}:{minutes:02d}"


def to_minutes(value: str) -> int:
    """Minutes since midnight for "HH:mm"."""
    hours, minutes = parse_time(value)
    return hours * 60 + minutes


def add_minutes(value: str, delta: int) -> str:
    """Add delta minutes, wrapping around midnight.

    Day overflow is not tracked: add_minutes("23:50", 20) == "00:10".
    """
    total = (to_minutes(value) + delta) % MINUTES_PER_DAY
    return format_time(total // 60, total % 60)


def minutes_between(start: str, end: str) -> int:
    """Signed difference end - start in minutes, same nominal day."""
    return to_minutes(end) - to_minutes(start)


def is_time_in_range(value: str, start: str, end: str) -> bool:
    """Half-open membership: start <= value < end."""
    return to_minutes(start) <= to_minutes(value) < to_minutes(end)


def format_duration(minutes: int) -> str:
    """Human duration: "45min", "1h", "1h 30min"."""
    if minutes < 60:
        return f"{minutes}min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"


def format_time_range(start: str, duration: int) -> str:
    """Render "HH:mm - HH:mm" for a start time and duration."""
    return f"{start} - {add_minutes(start, duration)}"


def calculate_end_time(activity: Activity) -> str:
    """End time of an activity (start + duration, wrapping at midnight)."""
    return add_minutes(activity.start_time, activity.duration)
