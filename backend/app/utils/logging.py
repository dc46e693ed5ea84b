"""Structured logging for plan store operations."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredStoreLogger:
    """Structured logger for plan store calls."""

    def log_operation(
        self,
        operation: str,
        plan_id: str | None,
        outcome: str,
        latency_ms: float,
        day_id: str | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log one store call with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "plan_id": plan_id,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if day_id:
            log_data["day_id"] = day_id

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Plan store: {operation} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
