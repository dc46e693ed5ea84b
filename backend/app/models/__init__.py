"""Models package - re-exports for convenience."""

from backend.app.models.activity import (
    Activity,
    ActivityBase,
    ActivityDraft,
    ActivityPatch,
    ActivitySuggestion,
    ActivityWriteResult,
    SuggestionResponse,
)
from backend.app.models.common import (
    TIME_PATTERN,
    ActivityStatus,
    ActivityType,
    Pace,
    PlanStatus,
    Priority,
    SharePermission,
)
from backend.app.models.plan import (
    DEFAULT_PREFERENCES,
    Budget,
    DayPlan,
    MealTimes,
    Plan,
    PlanCreate,
    PlanPreferences,
    PlanUpdate,
    SharedUser,
    SharingSettings,
    Weather,
)
from backend.app.models.timeline import DayProgress, DaySummary, TimeSlot

__all__ = [
    # Common
    "TIME_PATTERN",
    "ActivityType",
    "ActivityStatus",
    "Priority",
    "PlanStatus",
    "Pace",
    "SharePermission",
    # Activity
    "Activity",
    "ActivityBase",
    "ActivityDraft",
    "ActivityPatch",
    "ActivitySuggestion",
    "ActivityWriteResult",
    "SuggestionResponse",
    # Plan
    "Plan",
    "PlanCreate",
    "PlanUpdate",
    "DayPlan",
    "PlanPreferences",
    "MealTimes",
    "DEFAULT_PREFERENCES",
    "SharingSettings",
    "SharedUser",
    "Budget",
    "Weather",
    # Timeline
    "TimeSlot",
    "DayProgress",
    "DaySummary",
]
