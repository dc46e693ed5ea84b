"""Day timeline endpoints - activities, scheduling transforms and suggestions."""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status
from pydantic import BaseModel, Field

from backend.app.api.deps import PlannerDep
from backend.app.api.errors import http_errors
from backend.app.models.activity import (
    Activity,
    ActivityDraft,
    ActivityPatch,
    ActivitySuggestion,
    ActivityWriteResult,
    SuggestionResponse,
)
from backend.app.models.common import TIME_PATTERN
from backend.app.models.plan import DayPlan
from backend.app.models.timeline import DayProgress, DaySummary, TimeSlot

router = APIRouter(prefix="/plans/{plan_id}/days/{day_id}", tags=["activities"])


class ActivityListResponse(BaseModel):
    """List of activities for one day."""

    activities: list[Activity]


class BulkReplaceRequest(BaseModel):
    """Request body for PUT .../activities."""

    activities: list[Activity]


class ReorderRequest(BaseModel):
    """Request body for POST .../reorder."""

    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)
    compact: bool = False


class CompactRequest(BaseModel):
    """Request body for POST .../compact."""

    day_start: str | None = Field(default=None, pattern=TIME_PATTERN)


class BreaksRequest(BaseModel):
    """Request body for POST .../breaks."""

    compact: bool = True


class ConflictCheckRequest(BaseModel):
    """Request body for POST .../conflicts."""

    start_time: str = Field(..., pattern=TIME_PATTERN)
    duration: int = Field(..., gt=0)
    exclude_id: str | None = None


class ConflictCheckResponse(BaseModel):
    """Response for POST .../conflicts."""

    has_conflict: bool
    conflict: Activity | None = None


class TimeSlotListResponse(BaseModel):
    """Response for slot listings."""

    slots: list[TimeSlot]


class SuggestionRequest(BaseModel):
    """Request body for POST .../suggestions."""

    prompt: str = Field(..., min_length=1, max_length=500)


class ApplySuggestionsRequest(BaseModel):
    """Request body for POST .../suggestions/apply."""

    suggestions: list[ActivitySuggestion] = Field(..., min_length=1)
    replace: bool = False


@router.get("", response_model=DayPlan)
async def get_day(plan_id: str, day_id: str, planner: PlannerDep) -> DayPlan:
    """Fetch one day of a plan."""
    with http_errors(f"GET /days {day_id}"):
        return await planner.get_day(plan_id, day_id)


@router.get("/activities", response_model=ActivityListResponse)
async def list_activities(plan_id: str, day_id: str, planner: PlannerDep) -> ActivityListResponse:
    """List a day's activities sorted by start time."""
    with http_errors(f"GET /activities {day_id}"):
        return ActivityListResponse(activities=await planner.list_activities(plan_id, day_id))


@router.post(
    "/activities", response_model=ActivityWriteResult, status_code=status.HTTP_201_CREATED
)
async def add_activity(
    plan_id: str, day_id: str, draft: ActivityDraft, planner: PlannerDep
) -> ActivityWriteResult:
    """Append an activity; an overlapping sibling is reported, not rejected."""
    with http_errors(f"POST /activities {day_id}"):
        return await planner.add_activity(plan_id, day_id, draft)


@router.put("/activities", response_model=ActivityListResponse)
async def replace_activities(
    plan_id: str, day_id: str, request: BulkReplaceRequest, planner: PlannerDep
) -> ActivityListResponse:
    """Replace the day's activities; order follows submitted position."""
    with http_errors(f"PUT /activities {day_id}"):
        return ActivityListResponse(
            activities=await planner.replace_activities(plan_id, day_id, request.activities)
        )


@router.patch("/activities/{activity_id}", response_model=ActivityWriteResult)
async def patch_activity(
    plan_id: str, day_id: str, activity_id: str, patch: ActivityPatch, planner: PlannerDep
) -> ActivityWriteResult:
    """Merge supplied fields into one activity."""
    with http_errors(f"PATCH /activities {day_id}"):
        return await planner.patch_activity(plan_id, day_id, activity_id, patch)


@router.delete("/activities/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    plan_id: str, day_id: str, activity_id: str, planner: PlannerDep
) -> Response:
    """Remove one activity from the day."""
    with http_errors(f"DELETE /activities {day_id}"):
        await planner.delete_activity(plan_id, day_id, activity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/reorder", response_model=ActivityListResponse)
async def reorder_activities(
    plan_id: str, day_id: str, request: ReorderRequest, planner: PlannerDep
) -> ActivityListResponse:
    """Move one activity to a new position, optionally compacting start times."""
    with http_errors(f"POST /reorder {day_id}"):
        activities = await planner.reorder_activities(
            plan_id, day_id, request.from_index, request.to_index, compact=request.compact
        )
        return ActivityListResponse(activities=activities)


@router.post("/compact", response_model=ActivityListResponse)
async def compact_day(
    plan_id: str, day_id: str, request: CompactRequest, planner: PlannerDep
) -> ActivityListResponse:
    """Remove idle gaps between activities."""
    with http_errors(f"POST /compact {day_id}"):
        return ActivityListResponse(
            activities=await planner.compact_day(plan_id, day_id, request.day_start)
        )


@router.post("/breaks", response_model=ActivityListResponse)
async def insert_breaks(
    plan_id: str, day_id: str, request: BreaksRequest, planner: PlannerDep
) -> ActivityListResponse:
    """Insert rest breaks at the plan's preferred cadence."""
    with http_errors(f"POST /breaks {day_id}"):
        return ActivityListResponse(
            activities=await planner.insert_day_breaks(plan_id, day_id, compact=request.compact)
        )


@router.post("/conflicts", response_model=ConflictCheckResponse)
async def check_conflict(
    plan_id: str, day_id: str, request: ConflictCheckRequest, planner: PlannerDep
) -> ConflictCheckResponse:
    """Report the first activity overlapping a proposed interval."""
    with http_errors(f"POST /conflicts {day_id}"):
        conflict = await planner.check_conflict(
            plan_id, day_id, request.start_time, request.duration, exclude_id=request.exclude_id
        )
        return ConflictCheckResponse(has_conflict=conflict is not None, conflict=conflict)


@router.get("/progress", response_model=DayProgress)
async def day_progress(plan_id: str, day_id: str, planner: PlannerDep) -> DayProgress:
    """Completed-or-skipped counts for the day."""
    with http_errors(f"GET /progress {day_id}"):
        return await planner.day_progress(plan_id, day_id)


@router.get("/free-slots", response_model=TimeSlotListResponse)
async def free_slots(
    plan_id: str,
    day_id: str,
    planner: PlannerDep,
    min_duration: Annotated[int | None, Query(gt=0)] = None,
) -> TimeSlotListResponse:
    """Free gaps in the day's waking window."""
    with http_errors(f"GET /free-slots {day_id}"):
        return TimeSlotListResponse(slots=await planner.free_slots(plan_id, day_id, min_duration))


@router.get("/time-slots", response_model=TimeSlotListResponse)
async def time_slots(
    plan_id: str,
    day_id: str,
    planner: PlannerDep,
    slot_duration: Annotated[int | None, Query(gt=0, le=240)] = None,
) -> TimeSlotListResponse:
    """Fixed-step timeline grid of the day."""
    with http_errors(f"GET /time-slots {day_id}"):
        return TimeSlotListResponse(slots=await planner.time_slots(plan_id, day_id, slot_duration))


@router.post("/suggestions", response_model=SuggestionResponse)
async def suggest_activities(
    plan_id: str, day_id: str, request: SuggestionRequest, planner: PlannerDep
) -> SuggestionResponse:
    """Propose candidate activities for a prompt without writing them."""
    with http_errors(f"POST /suggestions {day_id}"):
        return await planner.suggest_activities(plan_id, day_id, request.prompt)


@router.post("/suggestions/apply", response_model=ActivityListResponse)
async def apply_suggestions(
    plan_id: str, day_id: str, request: ApplySuggestionsRequest, planner: PlannerDep
) -> ActivityListResponse:
    """Add suggestions to the day, or replace the day's activities with them."""
    with http_errors(f"POST /suggestions/apply {day_id}"):
        activities = await planner.apply_suggestions(
            plan_id, day_id, request.suggestions, replace=request.replace
        )
        return ActivityListResponse(activities=activities)


@router.get("/summary", response_model=DaySummary)
async def day_summary(plan_id: str, day_id: str, planner: PlannerDep) -> DaySummary:
    """Totals, per-type minutes, progress and the activity running now."""
    with http_errors(f"GET /summary {day_id}"):
        return await planner.day_summary(plan_id, day_id)
