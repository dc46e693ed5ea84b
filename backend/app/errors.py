"""Error taxonomy for plan and schedule operations."""


class PlannerError(Exception):
    """Base class for planner failures surfaced to callers."""

    pass


class PlanValidationError(PlannerError):
    """Required identifying field missing or inconsistent input.

    Raised before any persistence attempt, so no partial mutation occurs.
    """

    pass


class NotFoundError(PlannerError):
    """Referenced entity does not exist in the store at mutation time."""

    pass


class PlanNotFoundError(NotFoundError):
    """Plan id did not match any stored plan."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(f"Plan not found: {plan_id}")
        self.plan_id = plan_id


class DayNotFoundError(NotFoundError):
    """Day id did not match any day of the plan."""

    def __init__(self, plan_id: str, day_id: str) -> None:
        super().__init__(f"Day not found: {day_id} (plan {plan_id})")
        self.plan_id = plan_id
        self.day_id = day_id


class ActivityNotFoundError(NotFoundError):
    """Activity id did not match any activity of the day."""

    def __init__(self, day_id: str, activity_id: str) -> None:
        super().__init__(f"Activity not found: {activity_id} (day {day_id})")
        self.day_id = day_id
        self.activity_id = activity_id


class PersistenceError(PlannerError):
    """Store unavailable or write failed; no retry is attempted here."""

    pass
