"""Planner service - plan/day/activity operations over a plan gateway.

Validation happens before any store call, so a rejected request never
leaves a partial write behind. Conflict detection is advisory: writes go
through and the overlapping activity is reported back to the caller.
"""

import logging
import time
from collections.abc import Awaitable
from datetime import date, datetime
from pathlib import Path
from typing import Any, TypeVar

from backend.app.config import Settings, get_settings
from backend.app.db.documents import utcnow
from backend.app.db.gateway import PlanGateway
from backend.app.errors import (
    DayNotFoundError,
    NotFoundError,
    PersistenceError,
    PlanNotFoundError,
    PlanValidationError,
)
from backend.app.models.activity import (
    Activity,
    ActivityDraft,
    ActivityPatch,
    ActivitySuggestion,
    ActivityWriteResult,
    SuggestionResponse,
)
from backend.app.models.plan import DayPlan, Plan, PlanCreate, PlanUpdate
from backend.app.models.timeline import DayProgress, DaySummary, TimeSlot
from backend.app.scheduling.aggregation import (
    calculate_day_progress,
    calculate_plan_progress,
    find_free_slots,
    generate_time_slots,
)
from backend.app.scheduling.engine import (
    compact_schedule,
    current_activity,
    find_conflict,
    group_by_type,
    insert_breaks,
    prepare_bulk_replace,
    reorder_activities,
    sort_by_time,
    total_duration,
)
from backend.app.scheduling.lifecycle import (
    apply_date_range,
    build_plan,
    materialize_suggestion,
    normalize_new_activity,
)
from backend.app.scheduling.timeutils import format_duration, format_time_range, minutes_between
from backend.app.suggestions.generator import KeywordSuggestionGenerator, SuggestionGenerator
from backend.app.utils.logging import StructuredStoreLogger
from backend.app.utils.metrics import PrometheusScheduleMetrics

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Plan fields that may be explicitly cleared with null
_NULLABLE_PLAN_FIELDS = frozenset({"budget"})


def _require(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise PlanValidationError(f"{name} is required")
    return value


def _validate_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise PlanValidationError(f"start_date {start_date} is after end_date {end_date}")


class PlannerService:
    """Application operations on plans, days and activities."""

    def __init__(
        self,
        gateway: PlanGateway,
        *,
        generator: SuggestionGenerator | None = None,
        settings: Settings | None = None,
        metrics: PrometheusScheduleMetrics | None = None,
        store_logger: StructuredStoreLogger | None = None,
    ) -> None:
        self._gateway = gateway
        self._generator = generator
        self._settings = settings or get_settings()
        self._metrics = metrics or PrometheusScheduleMetrics()
        self._store_logger = store_logger or StructuredStoreLogger()

    async def _store(
        self,
        operation: str,
        call: Awaitable[T],
        *,
        plan_id: str | None,
        day_id: str | None = None,
    ) -> T:
        """Await a gateway call, recording latency, outcome and errors."""
        started = time.monotonic()
        try:
            result = await call
        except NotFoundError as e:
            self._record(operation, plan_id, day_id, "not_found", started, str(e))
            raise
        except PersistenceError as e:
            reason = type(e.__cause__).__name__ if e.__cause__ else "unknown"
            self._metrics.inc_error(operation, reason)
            self._record(operation, plan_id, day_id, "error", started, reason)
            raise
        self._record(operation, plan_id, day_id, "success", started)
        return result

    def _record(
        self,
        operation: str,
        plan_id: str | None,
        day_id: str | None,
        outcome: str,
        started: float,
        error_reason: str | None = None,
    ) -> None:
        latency_ms = (time.monotonic() - started) * 1000
        self._metrics.record_latency(operation, outcome, latency_ms)
        self._store_logger.log_operation(
            operation, plan_id, outcome, latency_ms, day_id=day_id, error_reason=error_reason
        )

    def _note_conflict(self, activity: Activity, conflict: Activity | None) -> None:
        if conflict is None:
            return
        self._metrics.inc_conflict()
        logger.info(
            f"Activity {activity.id} at {activity.start_time} overlaps {conflict.id} "
            f"at {conflict.start_time}"
        )

    # Plans

    async def create_plan(self, request: PlanCreate) -> Plan:
        """Create a plan with one empty day per date in its range."""
        _require(request.title, "title")
        _validate_range(request.start_date, request.end_date)

        plan = build_plan(request, now=utcnow())
        logger.info(f"Creating plan {plan.id} with {len(plan.days)} days")
        return await self._store("insert_plan", self._gateway.insert_plan(plan), plan_id=plan.id)

    async def get_plan(self, plan_id: str) -> Plan:
        """Get plan by id.

        Raises:
            PlanValidationError: plan_id is blank
            PlanNotFoundError: No such plan
        """
        _require(plan_id, "plan_id")
        plan = await self._store("find_plan", self._gateway.find_plan(plan_id), plan_id=plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        return plan

    async def get_shared_plan(self, share_link: str) -> Plan:
        """Get plan by its share link."""
        _require(share_link, "share_link")
        plan = await self._store(
            "find_plan_by_share_link",
            self._gateway.find_plan_by_share_link(share_link),
            plan_id=None,
        )
        if plan is None:
            raise PlanNotFoundError(share_link)
        return plan

    async def list_plans(self) -> list[Plan]:
        """All plans, most recently updated first."""
        return await self._store("list_plans", self._gateway.list_plans(), plan_id=None)

    async def update_plan(self, plan_id: str, update: PlanUpdate) -> Plan:
        """Merge the explicitly set fields of update into a plan.

        A changed date range regenerates the day list, keeping days whose
        date is still in range and dropping the rest.
        """
        _require(plan_id, "plan_id")

        fields: dict[str, Any] = {}
        for name in update.model_fields_set:
            value = getattr(update, name)
            if value is None and name not in _NULLABLE_PLAN_FIELDS:
                continue
            fields[name] = value

        if "start_date" in fields or "end_date" in fields:
            existing = await self.get_plan(plan_id)
            new_start = fields.get("start_date", existing.start_date)
            new_end = fields.get("end_date", existing.end_date)
            _validate_range(new_start, new_end)

            days = apply_date_range(existing, new_start, new_end)
            if days is not None:
                dropped = len({d.id for d in existing.days} - {d.id for d in days})
                logger.info(
                    f"Plan {plan_id} range now {new_start}..{new_end}: "
                    f"{len(days)} days, {dropped} dropped"
                )
                fields["days"] = days

        return await self._store(
            "update_plan", self._gateway.update_plan(plan_id, fields), plan_id=plan_id
        )

    async def delete_plan(self, plan_id: str) -> None:
        """Delete a plan with all its days and activities."""
        _require(plan_id, "plan_id")
        await self._store("delete_plan", self._gateway.delete_plan(plan_id), plan_id=plan_id)

    async def plan_progress(self, plan_id: str) -> DayProgress:
        """Resolved-activity counts across every day of a plan."""
        return calculate_plan_progress(await self.get_plan(plan_id))

    # Days

    async def _get_plan_and_day(self, plan_id: str, day_id: str) -> tuple[Plan, DayPlan]:
        _require(day_id, "day_id")
        plan = await self.get_plan(plan_id)
        day = plan.get_day(day_id)
        if day is None:
            raise DayNotFoundError(plan_id, day_id)
        return plan, day

    async def get_day(self, plan_id: str, day_id: str) -> DayPlan:
        """Get one day of a plan."""
        _, day = await self._get_plan_and_day(plan_id, day_id)
        return day

    def _day_window(self, plan: Plan, day: DayPlan) -> tuple[str, str]:
        start = day.start_time or plan.preferences.wake_up_time or self._settings.default_day_start
        end = day.end_time or plan.preferences.sleep_time or self._settings.default_day_end
        return start, end

    async def day_progress(self, plan_id: str, day_id: str) -> DayProgress:
        """Resolved-activity counts for one day."""
        return calculate_day_progress(await self.get_day(plan_id, day_id))

    async def free_slots(
        self, plan_id: str, day_id: str, min_duration: int | None = None
    ) -> list[TimeSlot]:
        """Free gaps within the day's waking window."""
        plan, day = await self._get_plan_and_day(plan_id, day_id)
        day_start, day_end = self._day_window(plan, day)
        minimum = min_duration if min_duration is not None else self._settings.min_free_slot_minutes
        return find_free_slots(day.activities, day_start, day_end, minimum)

    async def time_slots(
        self, plan_id: str, day_id: str, slot_duration: int | None = None
    ) -> list[TimeSlot]:
        """Fixed-step timeline grid for the day's waking window."""
        plan, day = await self._get_plan_and_day(plan_id, day_id)
        day_start, day_end = self._day_window(plan, day)
        step = slot_duration or self._settings.default_slot_minutes
        return generate_time_slots(day.activities, day_start, day_end, step)

    async def day_summary(
        self, plan_id: str, day_id: str, *, now: datetime | None = None
    ) -> DaySummary:
        """Totals, per-type minutes, progress and the activity running at now."""
        plan, day = await self._get_plan_and_day(plan_id, day_id)
        day_start, day_end = self._day_window(plan, day)
        activities = sort_by_time(day.activities)
        minutes = total_duration(activities)

        return DaySummary(
            activity_count=len(activities),
            total_minutes=minutes,
            total_label=format_duration(minutes),
            window=format_time_range(day_start, minutes_between(day_start, day_end)),
            minutes_by_type={
                kind: total_duration(group) for kind, group in group_by_type(activities).items()
            },
            progress=calculate_day_progress(day),
            current=current_activity(activities, now or datetime.now()),
        )

    async def check_conflict(
        self,
        plan_id: str,
        day_id: str,
        start_time: str,
        duration: int,
        exclude_id: str | None = None,
    ) -> Activity | None:
        """First activity of the day overlapping the proposed interval."""
        day = await self.get_day(plan_id, day_id)
        conflict = find_conflict(start_time, duration, day.activities, exclude_id=exclude_id)
        if conflict is not None:
            self._metrics.inc_conflict()
        return conflict

    # Activities

    async def list_activities(self, plan_id: str, day_id: str) -> list[Activity]:
        """A day's activities sorted by start time."""
        return sort_by_time((await self.get_day(plan_id, day_id)).activities)

    async def add_activity(
        self, plan_id: str, day_id: str, draft: ActivityDraft
    ) -> ActivityWriteResult:
        """Append an activity to a day.

        Missing id and status are defaulted; order is the appended position.
        """
        day = await self.get_day(plan_id, day_id)

        activity = normalize_new_activity(draft)
        activity = activity.model_copy(update={"order": len(day.activities)})
        conflict = find_conflict(activity.start_time, activity.duration, day.activities)
        self._note_conflict(activity, conflict)

        await self._store(
            "append_activity",
            self._gateway.append_activity(plan_id, day_id, activity),
            plan_id=plan_id,
            day_id=day_id,
        )
        return ActivityWriteResult(activity=activity, conflict=conflict)

    async def replace_activities(
        self, plan_id: str, day_id: str, activities: list[Activity]
    ) -> list[Activity]:
        """Replace a day's activities: order := submitted position, stored by time."""
        _require(plan_id, "plan_id")
        _require(day_id, "day_id")

        prepared = prepare_bulk_replace(activities)
        await self._store(
            "replace_day_activities",
            self._gateway.replace_day_activities(plan_id, day_id, prepared),
            plan_id=plan_id,
            day_id=day_id,
        )
        return prepared

    async def patch_activity(
        self, plan_id: str, day_id: str, activity_id: str, patch: ActivityPatch
    ) -> ActivityWriteResult:
        """Merge only the supplied fields into one activity."""
        _require(activity_id, "activity_id")
        day = await self.get_day(plan_id, day_id)

        conflict = None
        if patch.start_time is not None or patch.duration is not None:
            current = next((a for a in day.activities if a.id == activity_id), None)
            if current is not None:
                conflict = find_conflict(
                    patch.start_time or current.start_time,
                    patch.duration or current.duration,
                    day.activities,
                    exclude_id=activity_id,
                )

        activity = await self._store(
            "patch_activity",
            self._gateway.patch_activity(plan_id, day_id, activity_id, patch),
            plan_id=plan_id,
            day_id=day_id,
        )
        self._note_conflict(activity, conflict)
        return ActivityWriteResult(activity=activity, conflict=conflict)

    async def delete_activity(self, plan_id: str, day_id: str, activity_id: str) -> None:
        """Remove one activity from a day."""
        _require(plan_id, "plan_id")
        _require(day_id, "day_id")
        _require(activity_id, "activity_id")
        await self._store(
            "remove_activity",
            self._gateway.remove_activity(plan_id, day_id, activity_id),
            plan_id=plan_id,
            day_id=day_id,
        )

    async def reorder_activities(
        self,
        plan_id: str,
        day_id: str,
        from_index: int,
        to_index: int,
        *,
        compact: bool = False,
    ) -> list[Activity]:
        """Move an activity within the time-sorted day list.

        Indices refer to the list as returned by list_activities. With
        compact, start times are rewritten to follow the new order.
        """
        plan, day = await self._get_plan_and_day(plan_id, day_id)

        try:
            reordered = reorder_activities(sort_by_time(day.activities), from_index, to_index)
        except ValueError as e:
            raise PlanValidationError(str(e)) from e

        if compact:
            day_start, _ = self._day_window(plan, day)
            reordered = compact_schedule(reordered, day_start)

        self._metrics.inc_operation("reorder")
        return await self.replace_activities(plan_id, day_id, reordered)

    async def compact_day(
        self, plan_id: str, day_id: str, day_start: str | None = None
    ) -> list[Activity]:
        """Shift start times so activities run back to back from day_start."""
        plan, day = await self._get_plan_and_day(plan_id, day_id)
        start = day_start or self._day_window(plan, day)[0]

        self._metrics.inc_operation("compact")
        return await self.replace_activities(
            plan_id, day_id, compact_schedule(day.activities, start)
        )

    async def insert_day_breaks(
        self, plan_id: str, day_id: str, *, compact: bool = True
    ) -> list[Activity]:
        """Insert breaks at the plan's preferred cadence.

        Breaks reuse the start time of the activity they precede; compact
        (default) then shifts the day so nothing overlaps.
        """
        plan, day = await self._get_plan_and_day(plan_id, day_id)
        preferences = plan.preferences

        activities = insert_breaks(
            sorted(day.activities, key=lambda a: a.order),
            preferences.break_frequency,
            preferences.break_duration,
        )
        if compact:
            activities = compact_schedule(activities, self._day_window(plan, day)[0])

        inserted = len(activities) - len(day.activities)
        logger.info(f"Inserted {inserted} breaks into day {day_id} of plan {plan_id}")
        self._metrics.inc_operation("insert_breaks")
        return await self.replace_activities(plan_id, day_id, activities)

    # Suggestions

    def _get_generator(self) -> SuggestionGenerator:
        if self._generator is None:
            path = self._settings.suggestion_fixtures_path
            self._generator = KeywordSuggestionGenerator(Path(path) if path else None)
        return self._generator

    async def suggest_activities(
        self, plan_id: str, day_id: str, prompt: str
    ) -> SuggestionResponse:
        """Candidate activities for a prompt; nothing is written."""
        _require(prompt, "prompt")
        plan, _ = await self._get_plan_and_day(plan_id, day_id)
        return await self._get_generator().suggest(prompt, destination=plan.destination or None)

    async def apply_suggestions(
        self,
        plan_id: str,
        day_id: str,
        suggestions: list[ActivitySuggestion],
        *,
        replace: bool = False,
    ) -> list[Activity]:
        """Write suggestions as AI-flagged activities.

        With replace, the day's activities become exactly the suggestions;
        otherwise they are appended after the existing ones. Either way the
        day is written once.
        """
        if replace:
            activities = [materialize_suggestion(s, index) for index, s in enumerate(suggestions)]
            return await self.replace_activities(plan_id, day_id, activities)

        day = await self.get_day(plan_id, day_id)
        existing = sorted(day.activities, key=lambda a: a.order)
        added = [
            materialize_suggestion(s, len(existing) + index) for index, s in enumerate(suggestions)
        ]
        added_ids = {a.id for a in added}
        stored = await self.replace_activities(plan_id, day_id, existing + added)
        return [a for a in stored if a.id in added_ids]
