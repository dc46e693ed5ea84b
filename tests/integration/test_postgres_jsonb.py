"""PostgreSQL-specific integration test for the JSONB plan document column.

This test requires a real PostgreSQL instance (SQLite has no JSONB).

Run with: DATABASE_URL='postgresql://...' pytest -m postgres
"""

from datetime import UTC, date, datetime

import pytest
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import PlanDocument
from backend.app.db.sql_gateway import SqlPlanGateway
from backend.app.models.activity import Activity
from backend.app.models.plan import PlanCreate
from backend.app.scheduling.lifecycle import build_plan


@pytest.mark.postgres
@pytest.mark.asyncio
async def test_plan_document_stored_as_jsonb(postgres_session: AsyncSession) -> None:
    """Test plan documents land in a JSONB column and are queryable by path."""
    gateway = SqlPlanGateway(postgres_session)
    plan = build_plan(
        PlanCreate(title="Oslo", start_date=date(2024, 6, 1), end_date=date(2024, 6, 2)),
        now=datetime.now(UTC),
    )
    await gateway.insert_plan(plan)
    await gateway.append_activity(
        plan.id,
        plan.days[1].id,
        Activity(id="fjord", title="Fjord cruise", start_time="10:00", duration=180),
    )

    column_type = await postgres_session.execute(
        text(
            "SELECT data_type FROM information_schema.columns "
            "WHERE table_name = 'plan_document' AND column_name = 'document'"
        )
    )
    assert column_type.scalar_one() == "jsonb"

    titles = await postgres_session.execute(
        select(PlanDocument.document["days"][1]["activities"][0]["title"].as_string()).where(
            PlanDocument.plan_id == plan.id
        )
    )
    assert titles.scalar_one() == "Fjord cruise"
