"""FastAPI dependencies wiring the planner service to a plan gateway."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import get_settings
from backend.app.db.engine import get_async_engine
from backend.app.db.gateway import PlanGateway
from backend.app.db.inmemory import InMemoryPlanGateway
from backend.app.db.sql_gateway import SqlPlanGateway
from backend.app.services.planner import PlannerService
from backend.app.suggestions.generator import KeywordSuggestionGenerator


@lru_cache
def get_memory_gateway() -> InMemoryPlanGateway:
    """Process-wide in-memory store (plan_store=memory)."""
    return InMemoryPlanGateway()


@lru_cache
def get_suggestion_generator() -> KeywordSuggestionGenerator:
    """Shared canned suggestion generator."""
    path = get_settings().suggestion_fixtures_path
    return KeywordSuggestionGenerator(Path(path) if path else None)


async def get_gateway() -> AsyncGenerator[PlanGateway, None]:
    """Yield the configured plan gateway for one request."""
    if get_settings().plan_store == "memory":
        yield get_memory_gateway()
        return

    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        yield SqlPlanGateway(session)


def get_planner_service(
    gateway: Annotated[PlanGateway, Depends(get_gateway)],
) -> PlannerService:
    """Planner service bound to the request's gateway."""
    return PlannerService(gateway, generator=get_suggestion_generator())


PlannerDep = Annotated[PlannerService, Depends(get_planner_service)]
