"""Persistence gateway protocol for plan documents."""

from typing import Any, Protocol

from backend.app.models.activity import Activity, ActivityPatch
from backend.app.models.plan import Plan

# (field name, nullable on Activity). Explicit so patches never write
# arbitrary keys into the stored document.
ACTIVITY_PATCH_FIELDS: tuple[tuple[str, bool], ...] = (
    ("title", False),
    ("description", True),
    ("type", False),
    ("start_time", False),
    ("duration", False),
    ("location", True),
    ("address", True),
    ("status", False),
    ("priority", True),
    ("notes", True),
    ("cost", True),
    ("currency", True),
    ("weather_dependent", False),
    ("tags", False),
    ("links", False),
    ("reminders", False),
)


def activity_patch_fields(patch: ActivityPatch) -> dict[str, Any]:
    """Map an ActivityPatch to the activity fields it writes.

    Only explicitly set fields are included. An explicit null is dropped for
    fields an Activity cannot hold as null.
    """
    fields: dict[str, Any] = {}
    for name, nullable in ACTIVITY_PATCH_FIELDS:
        if name not in patch.model_fields_set:
            continue
        value = getattr(patch, name)
        if value is None and not nullable:
            continue
        fields[name] = value
    return fields


class PlanGateway(Protocol):
    """Document store for plans with embedded days and activities.

    Every mutation stamps the plan's updated_at. Concurrent writers get
    last-write-wins; no optimistic concurrency is offered.
    """

    async def insert_plan(self, plan: Plan) -> Plan:
        """Store a new plan document.

        Args:
            plan: Fully built plan

        Returns:
            The stored plan
        """
        ...

    async def find_plan(self, plan_id: str) -> Plan | None:
        """Get plan by id, or None."""
        ...

    async def find_plan_by_share_link(self, share_link: str) -> Plan | None:
        """Get plan whose sharing.share_link matches, or None."""
        ...

    async def list_plans(self) -> list[Plan]:
        """List all plans, most recently updated first."""
        ...

    async def update_plan(self, plan_id: str, fields: dict[str, Any]) -> Plan:
        """Merge top-level fields into a plan.

        Raises:
            PlanNotFoundError: If no plan has plan_id
        """
        ...

    async def delete_plan(self, plan_id: str) -> None:
        """Delete a plan with all its days and activities.

        Raises:
            PlanNotFoundError: If no plan has plan_id
        """
        ...

    async def append_activity(self, plan_id: str, day_id: str, activity: Activity) -> None:
        """Append an activity to a day.

        Raises:
            PlanNotFoundError: If no plan has plan_id
            DayNotFoundError: If the plan has no day with day_id
        """
        ...

    async def replace_day_activities(
        self, plan_id: str, day_id: str, activities: list[Activity]
    ) -> None:
        """Replace a day's whole activities array.

        Raises:
            PlanNotFoundError: If no plan has plan_id
            DayNotFoundError: If the plan has no day with day_id
        """
        ...

    async def patch_activity(
        self, plan_id: str, day_id: str, activity_id: str, patch: ActivityPatch
    ) -> Activity:
        """Merge the set fields of patch into one activity.

        Returns:
            The activity after the merge

        Raises:
            PlanNotFoundError: If no plan has plan_id
            DayNotFoundError: If the plan has no day with day_id
            ActivityNotFoundError: If the day has no activity with activity_id
        """
        ...

    async def remove_activity(self, plan_id: str, day_id: str, activity_id: str) -> None:
        """Remove an activity from a day; an absent activity is a no-op.

        Raises:
            PlanNotFoundError: If no plan has plan_id
            DayNotFoundError: If the plan has no day with day_id
        """
        ...
