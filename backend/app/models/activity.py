"""Activity models - scheduled units of time within a day."""

from pydantic import BaseModel, Field

from backend.app.models.common import TIME_PATTERN, ActivityStatus, ActivityType, Priority


class ActivityBase(BaseModel):
    """Content fields shared by stored activities and add requests."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    type: ActivityType = ActivityType.activity
    start_time: str = Field(..., pattern=TIME_PATTERN, description="HH:mm, 24h")
    duration: int = Field(..., gt=0, description="Minutes")
    location: str | None = None
    address: str | None = None
    priority: Priority | None = None
    notes: str | None = None
    cost: float | None = Field(default=None, ge=0)
    currency: str | None = None
    weather_dependent: bool = False
    is_break: bool = False
    ai_suggested: bool = False
    tags: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
    reminders: list[int] = Field(default_factory=list, description="Minutes before start")


class Activity(ActivityBase):
    """Single activity in a day's timeline."""

    id: str = Field(..., min_length=1)
    status: ActivityStatus = ActivityStatus.planned
    order: int = Field(default=0, ge=0, description="Position among siblings")


class ActivityDraft(ActivityBase):
    """Activity as submitted for adding; id, status and order are defaulted."""

    id: str | None = None
    status: ActivityStatus | None = None
    order: int | None = Field(default=None, ge=0)


class ActivityPatch(BaseModel):
    """Partial update of one activity.

    Only fields explicitly set are written; omitted fields are untouched.
    Identity and order are not patchable.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    type: ActivityType | None = None
    start_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    duration: int | None = Field(default=None, gt=0)
    location: str | None = None
    address: str | None = None
    status: ActivityStatus | None = None
    priority: Priority | None = None
    notes: str | None = None
    cost: float | None = Field(default=None, ge=0)
    currency: str | None = None
    weather_dependent: bool | None = None
    tags: list[str] | None = None
    links: list[str] | None = None
    reminders: list[int] | None = None


class ActivitySuggestion(BaseModel):
    """Candidate partial activity proposed by a suggestion generator."""

    title: str | None = None
    type: ActivityType | None = None
    start_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    duration: int | None = Field(default=None, gt=0)
    description: str | None = None
    location: str | None = None


class ActivityWriteResult(BaseModel):
    """Written activity plus the first overlapping sibling, if any.

    The conflict is advisory; the write has already happened.
    """

    activity: Activity
    conflict: Activity | None = None


class SuggestionResponse(BaseModel):
    """Generator reply: a message plus candidate activities."""

    message: str
    suggestions: list[ActivitySuggestion]
