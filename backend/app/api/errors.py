"""Translation of planner errors into HTTP errors for route handlers."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, status

from backend.app.errors import NotFoundError, PersistenceError, PlanValidationError

logger = logging.getLogger(__name__)


@contextmanager
def http_errors(route: str) -> Iterator[None]:
    """Raise HTTPException for planner errors escaping the block.

    Args:
        route: Route label for logs, e.g. "POST /plans"
    """
    try:
        yield
    except PlanValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except PersistenceError as e:
        logger.error(f"[{route}] plan store failure: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="internal error",
        ) from e
