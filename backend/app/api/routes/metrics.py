"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes the planner's registered metrics:
    - plan_store_latency_ms{operation, outcome}
    - plan_store_errors_total{operation, reason}
    - schedule_operations_total{operation}
    - schedule_conflicts_total
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
