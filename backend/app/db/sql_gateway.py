"""SQL implementation of the plan gateway.

Each plan is a single JSON document row; every mutation is one
read-modify-write of that document committed in one transaction.
"""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db import documents
from backend.app.db.gateway import activity_patch_fields
from backend.app.db.models import PlanDocument
from backend.app.errors import NotFoundError, PersistenceError, PlanNotFoundError
from backend.app.models.activity import Activity, ActivityPatch
from backend.app.models.plan import Plan

logger = logging.getLogger(__name__)


def _to_row_values(plan: Plan) -> dict[str, Any]:
    return {
        "title": plan.title,
        "status": plan.status.value,
        "share_link": plan.sharing.share_link,
        "document": plan.model_dump(mode="json"),
        "updated_at": plan.updated_at,
    }


class SqlPlanGateway:
    """SQL implementation of PlanGateway."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _load(self, plan_id: str) -> PlanDocument | None:
        result = await self._session.execute(
            select(PlanDocument).where(PlanDocument.plan_id == plan_id)
        )
        return result.scalar_one_or_none()

    async def _mutate(self, plan_id: str, mutate: Callable[[Plan], Plan]) -> Plan:
        """Load, transform and write back one plan document."""
        try:
            row = await self._load(plan_id)
            if row is None:
                raise PlanNotFoundError(plan_id)

            updated = mutate(Plan.model_validate(row.document))
            for key, value in _to_row_values(updated).items():
                setattr(row, key, value)
            await self._session.commit()
        except NotFoundError:
            await self._session.rollback()
            raise
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.warning(f"Plan store write failed for plan {plan_id}: {type(e).__name__}")
            raise PersistenceError(f"Failed to update plan {plan_id}") from e

        return updated

    async def insert_plan(self, plan: Plan) -> Plan:
        """Store a new plan document."""
        try:
            self._session.add(
                PlanDocument(plan_id=plan.id, created_at=plan.created_at, **_to_row_values(plan))
            )
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.warning(f"Plan store insert failed for plan {plan.id}: {type(e).__name__}")
            raise PersistenceError(f"Failed to insert plan {plan.id}") from e
        return plan

    async def find_plan(self, plan_id: str) -> Plan | None:
        """Get plan by id."""
        try:
            row = await self._load(plan_id)
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise PersistenceError(f"Failed to read plan {plan_id}") from e
        return Plan.model_validate(row.document) if row is not None else None

    async def find_plan_by_share_link(self, share_link: str) -> Plan | None:
        """Get plan by share link."""
        try:
            result = await self._session.execute(
                select(PlanDocument).where(PlanDocument.share_link == share_link).limit(1)
            )
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise PersistenceError("Failed to read shared plan") from e
        return Plan.model_validate(row.document) if row is not None else None

    async def list_plans(self) -> list[Plan]:
        """List plans, newest update first."""
        try:
            result = await self._session.execute(
                select(PlanDocument).order_by(PlanDocument.updated_at.desc())
            )
            rows = list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise PersistenceError("Failed to list plans") from e
        return [Plan.model_validate(row.document) for row in rows]

    async def update_plan(self, plan_id: str, fields: dict[str, Any]) -> Plan:
        """Merge top-level fields into a plan."""
        now = documents.utcnow()
        return await self._mutate(
            plan_id, lambda plan: documents.apply_plan_fields(plan, fields, now)
        )

    async def delete_plan(self, plan_id: str) -> None:
        """Delete a plan."""
        try:
            result = await self._session.execute(
                delete(PlanDocument).where(PlanDocument.plan_id == plan_id)
            )
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise PersistenceError(f"Failed to delete plan {plan_id}") from e

        if result.rowcount == 0:
            raise PlanNotFoundError(plan_id)

    async def append_activity(self, plan_id: str, day_id: str, activity: Activity) -> None:
        """Append an activity to a day."""
        now = documents.utcnow()
        await self._mutate(
            plan_id, lambda plan: documents.append_activity(plan, day_id, activity, now)
        )

    async def replace_day_activities(
        self, plan_id: str, day_id: str, activities: list[Activity]
    ) -> None:
        """Replace a day's activities array."""
        now = documents.utcnow()
        await self._mutate(
            plan_id,
            lambda plan: documents.replace_day_activities(plan, day_id, activities, now),
        )

    async def patch_activity(
        self, plan_id: str, day_id: str, activity_id: str, patch: ActivityPatch
    ) -> Activity:
        """Merge patch fields into one activity."""
        fields = activity_patch_fields(patch)
        now = documents.utcnow()
        updated = await self._mutate(
            plan_id,
            lambda plan: documents.patch_activity(plan, day_id, activity_id, fields, now),
        )
        return documents.find_activity(updated, day_id, activity_id)

    async def remove_activity(self, plan_id: str, day_id: str, activity_id: str) -> None:
        """Remove an activity from a day."""
        now = documents.utcnow()
        await self._mutate(
            plan_id, lambda plan: documents.remove_activity(plan, day_id, activity_id, now)
        )
