"""Common types and enums shared across all models."""

from enum import Enum

# Wall-clock time, 24h, no timezone
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ActivityType(str, Enum):
    """Category of a scheduled activity."""

    activity = "activity"
    meal = "meal"
    travel = "travel"
    rest = "rest"
    entertainment = "entertainment"
    sightseeing = "sightseeing"
    shopping = "shopping"
    sports = "sports"
    wellness = "wellness"
    social = "social"
    work = "work"
    custom = "custom"


class ActivityStatus(str, Enum):
    """Activity status.

    Any value may follow any other; the model imposes no transition guard.
    """

    planned = "planned"
    in_progress = "in-progress"
    completed = "completed"
    skipped = "skipped"
    postponed = "postponed"


class Priority(str, Enum):
    """Activity priority."""

    low = "low"
    medium = "medium"
    high = "high"


class PlanStatus(str, Enum):
    """Plan lifecycle status."""

    draft = "draft"
    active = "active"
    completed = "completed"
    archived = "archived"


class Pace(str, Enum):
    """How densely the user wants days filled."""

    relaxed = "relaxed"
    moderate = "moderate"
    packed = "packed"


class SharePermission(str, Enum):
    """Permission granted to a collaborator."""

    view = "view"
    suggest = "suggest"
    edit = "edit"
