"""Plan endpoints - create, list, fetch, partial update and delete."""

import logging

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from backend.app.api.deps import PlannerDep
from backend.app.api.errors import http_errors
from backend.app.models.plan import Plan, PlanCreate, PlanUpdate
from backend.app.models.timeline import DayProgress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plans", tags=["plans"])


class PlanListResponse(BaseModel):
    """Response for GET /plans."""

    plans: list[Plan]


@router.post("", response_model=Plan, status_code=status.HTTP_201_CREATED)
async def create_plan(request: PlanCreate, planner: PlannerDep) -> Plan:
    """Create a plan and one empty day per date in its range.

    Args:
        request: Title, inclusive date range and optional preferences
        planner: Planner service

    Returns:
        The created plan

    Raises:
        HTTPException: 400 if start_date is after end_date
    """
    logger.info(f"[POST /plans] {request.start_date}..{request.end_date}")
    with http_errors("POST /plans"):
        return await planner.create_plan(request)


@router.get("", response_model=PlanListResponse)
async def list_plans(planner: PlannerDep) -> PlanListResponse:
    """List all plans, most recently updated first."""
    with http_errors("GET /plans"):
        return PlanListResponse(plans=await planner.list_plans())


@router.get("/shared/{share_link}", response_model=Plan)
async def get_shared_plan(share_link: str, planner: PlannerDep) -> Plan:
    """Fetch a plan by its share link."""
    with http_errors("GET /plans/shared"):
        return await planner.get_shared_plan(share_link)


@router.get("/{plan_id}", response_model=Plan)
async def get_plan(plan_id: str, planner: PlannerDep) -> Plan:
    """Fetch one plan with all its days and activities."""
    with http_errors(f"GET /plans/{plan_id}"):
        return await planner.get_plan(plan_id)


@router.patch("/{plan_id}", response_model=Plan)
async def update_plan(plan_id: str, update: PlanUpdate, planner: PlannerDep) -> Plan:
    """Merge supplied fields into a plan.

    Changing start_date or end_date regenerates the days: days whose date is
    still in range keep their activities, days outside it are dropped.
    """
    logger.info(f"[PATCH /plans/{plan_id}] fields={sorted(update.model_fields_set)}")
    with http_errors(f"PATCH /plans/{plan_id}"):
        return await planner.update_plan(plan_id, update)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(plan_id: str, planner: PlannerDep) -> Response:
    """Delete a plan and everything embedded in it."""
    with http_errors(f"DELETE /plans/{plan_id}"):
        await planner.delete_plan(plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{plan_id}/progress", response_model=DayProgress)
async def plan_progress(plan_id: str, planner: PlannerDep) -> DayProgress:
    """Completed-or-skipped counts across the whole plan."""
    with http_errors(f"GET /plans/{plan_id}/progress"):
        return await planner.plan_progress(plan_id)
