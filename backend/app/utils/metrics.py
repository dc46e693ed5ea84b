"""Prometheus metrics for plan store and scheduling operations."""

from prometheus_client import Counter, Histogram

plan_store_latency_ms = Histogram(
    "plan_store_latency_ms",
    "Plan store call latency in milliseconds",
    ["operation", "outcome"],
    buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000, 2500],
)

plan_store_errors_total = Counter(
    "plan_store_errors_total",
    "Total failed plan store calls",
    ["operation", "reason"],
)

schedule_operations_total = Counter(
    "schedule_operations_total",
    "Total schedule transformations applied",
    ["operation"],
)

schedule_conflicts_total = Counter(
    "schedule_conflicts_total",
    "Total advisory conflicts detected",
)


class PrometheusScheduleMetrics:
    """Prometheus-based metrics for the planner service."""

    def record_latency(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record plan store call latency."""
        plan_store_latency_ms.labels(operation=operation, outcome=outcome).observe(latency_ms)

    def inc_error(self, operation: str, reason: str) -> None:
        """Increment store error counter."""
        plan_store_errors_total.labels(operation=operation, reason=reason).inc()

    def inc_operation(self, operation: str) -> None:
        """Increment schedule transformation counter."""
        schedule_operations_total.labels(operation=operation).inc()

    def inc_conflict(self) -> None:
        """Increment conflict counter."""
        schedule_conflicts_total.inc()
