"""Plan models - trips/events spanning a date range, split into days."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from backend.app.models.activity import Activity
from backend.app.models.common import (
    TIME_PATTERN,
    ActivityType,
    Pace,
    PlanStatus,
    SharePermission,
)


class MealTimes(BaseModel):
    """Preferred meal times (HH:mm)."""

    breakfast: str | None = Field(default="08:30", pattern=TIME_PATTERN)
    lunch: str | None = Field(default="13:00", pattern=TIME_PATTERN)
    dinner: str | None = Field(default="19:30", pattern=TIME_PATTERN)


class PlanPreferences(BaseModel):
    """Scheduling defaults embedded in every plan."""

    wake_up_time: str = Field(default="08:00", pattern=TIME_PATTERN)
    sleep_time: str = Field(default="22:00", pattern=TIME_PATTERN)
    meal_times: MealTimes = Field(default_factory=MealTimes)
    break_frequency: int = Field(default=120, gt=0, description="Minutes between breaks")
    break_duration: int = Field(default=15, gt=0, description="Break length in minutes")
    travel_buffer: int = Field(default=15, ge=0, description="Extra minutes for travel")
    activity_types: list[ActivityType] = Field(
        default_factory=lambda: [
            ActivityType.activity,
            ActivityType.meal,
            ActivityType.sightseeing,
            ActivityType.entertainment,
        ]
    )
    pace: Pace = Pace.moderate
    accessibility: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)


DEFAULT_PREFERENCES = PlanPreferences()


class SharedUser(BaseModel):
    """Collaborator entry. Stored only; permissions are not enforced."""

    id: str
    email: str
    name: str | None = None
    avatar: str | None = None
    permission: SharePermission = SharePermission.view
    added_at: datetime


class SharingSettings(BaseModel):
    """Sharing contract of a plan."""

    is_public: bool = False
    share_link: str | None = None
    shared_with: list[SharedUser] = Field(default_factory=list)


class Budget(BaseModel):
    """Spending envelope for a plan."""

    total: float = Field(default=0, ge=0)
    spent: float = Field(default=0, ge=0)
    currency: str = "USD"


class Weather(BaseModel):
    """Forecast summary attached to a day."""

    condition: str
    temperature: float
    icon: str | None = None


class DayPlan(BaseModel):
    """One calendar date within a plan."""

    id: str = Field(..., min_length=1)
    date: date
    day_number: int = Field(..., ge=1)
    title: str | None = None
    description: str | None = None
    activities: list[Activity] = Field(default_factory=list)
    weather: Weather | None = None
    notes: str | None = None
    start_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)


class Plan(BaseModel):
    """Trip or event spanning an inclusive date range."""

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    destination: str = ""
    cover_image: str = ""
    status: PlanStatus = PlanStatus.draft
    start_date: date
    end_date: date
    days: list[DayPlan] = Field(default_factory=list)
    preferences: PlanPreferences = Field(default_factory=PlanPreferences)
    sharing: SharingSettings = Field(default_factory=SharingSettings)
    created_by: str = "anonymous"
    created_at: datetime
    updated_at: datetime
    tags: list[str] = Field(default_factory=list)
    budget: Budget | None = None

    @model_validator(mode="after")
    def validate_date_range(self) -> "Plan":
        """Ensure start_date <= end_date."""
        if self.start_date > self.end_date:
            raise ValueError(f"start_date {self.start_date} is after end_date {self.end_date}")
        return self

    def get_day(self, day_id: str) -> DayPlan | None:
        """Return the day with the given id, if any."""
        return next((day for day in self.days if day.id == day_id), None)


class PlanCreate(BaseModel):
    """Input for plan creation."""

    title: str = Field(..., min_length=1, max_length=200)
    start_date: date
    end_date: date
    preferences: PlanPreferences | None = None
    destination: str | None = None
    description: str | None = None
    cover_image: str | None = None
    tags: list[str] = Field(default_factory=list)
    budget: Budget | None = None


class PlanUpdate(BaseModel):
    """Partial plan update; only explicitly set fields are merged."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    destination: str | None = None
    cover_image: str | None = None
    status: PlanStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    preferences: PlanPreferences | None = None
    sharing: SharingSettings | None = None
    tags: list[str] | None = None
    budget: Budget | None = None
