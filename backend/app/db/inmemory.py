"""In-memory implementation of the plan gateway."""

from typing import Any

from backend.app.db import documents
from backend.app.db.gateway import activity_patch_fields
from backend.app.errors import PlanNotFoundError
from backend.app.models.activity import Activity, ActivityPatch
from backend.app.models.plan import Plan


class InMemoryPlanGateway:
    """In-memory implementation of PlanGateway.

    Plans are deep-copied on the way in and out so callers never share
    state with the store.
    """

    def __init__(self) -> None:
        self._plans: dict[str, Plan] = {}

    def _get(self, plan_id: str) -> Plan:
        plan = self._plans.get(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        return plan

    async def insert_plan(self, plan: Plan) -> Plan:
        """Store a new plan document."""
        self._plans[plan.id] = plan.model_copy(deep=True)
        return plan

    async def find_plan(self, plan_id: str) -> Plan | None:
        """Get plan by id."""
        plan = self._plans.get(plan_id)
        return plan.model_copy(deep=True) if plan is not None else None

    async def find_plan_by_share_link(self, share_link: str) -> Plan | None:
        """Get plan by share link."""
        for plan in self._plans.values():
            if plan.sharing.share_link == share_link:
                return plan.model_copy(deep=True)
        return None

    async def list_plans(self) -> list[Plan]:
        """List plans, newest update first."""
        plans = [plan.model_copy(deep=True) for plan in self._plans.values()]
        plans.sort(key=lambda p: p.updated_at, reverse=True)
        return plans

    async def update_plan(self, plan_id: str, fields: dict[str, Any]) -> Plan:
        """Merge top-level fields into a plan."""
        updated = documents.apply_plan_fields(self._get(plan_id), fields, documents.utcnow())
        self._plans[plan_id] = updated
        return updated.model_copy(deep=True)

    async def delete_plan(self, plan_id: str) -> None:
        """Delete a plan."""
        self._get(plan_id)
        del self._plans[plan_id]

    async def append_activity(self, plan_id: str, day_id: str, activity: Activity) -> None:
        """Append an activity to a day."""
        self._plans[plan_id] = documents.append_activity(
            self._get(plan_id), day_id, activity.model_copy(deep=True), documents.utcnow()
        )

    async def replace_day_activities(
        self, plan_id: str, day_id: str, activities: list[Activity]
    ) -> None:
        """Replace a day's activities array."""
        self._plans[plan_id] = documents.replace_day_activities(
            self._get(plan_id),
            day_id,
            [a.model_copy(deep=True) for a in activities],
            documents.utcnow(),
        )

    async def patch_activity(
        self, plan_id: str, day_id: str, activity_id: str, patch: ActivityPatch
    ) -> Activity:
        """Merge patch fields into one activity."""
        updated = documents.patch_activity(
            self._get(plan_id), day_id, activity_id, activity_patch_fields(patch), documents.utcnow()
        )
        self._plans[plan_id] = updated
        return documents.find_activity(updated, day_id, activity_id).model_copy(deep=True)

    async def remove_activity(self, plan_id: str, day_id: str, activity_id: str) -> None:
        """Remove an activity from a day."""
        self._plans[plan_id] = documents.remove_activity(
            self._get(plan_id), day_id, activity_id, documents.utcnow()
        )
