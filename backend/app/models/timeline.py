"""Timeline views derived from a day's activities."""

from pydantic import BaseModel, Field

from backend.app.models.activity import Activity
from backend.app.models.common import ActivityType


class TimeSlot(BaseModel):
    """Half-open span [start, end) of a day."""

    start: str
    end: str
    is_free: bool
    activity: Activity | None = None


class DayProgress(BaseModel):
    """Resolved-activity counts for a day or a whole plan."""

    total: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100)


class DaySummary(BaseModel):
    """At-a-glance figures for one day."""

    activity_count: int = Field(..., ge=0)
    total_minutes: int = Field(..., ge=0)
    total_label: str = Field(..., description='Human duration, e.g. "3h 15min"')
    window: str = Field(..., description='Waking window, "HH:mm - HH:mm"')
    minutes_by_type: dict[ActivityType, int] = Field(default_factory=dict)
    progress: DayProgress
    current: Activity | None = None
