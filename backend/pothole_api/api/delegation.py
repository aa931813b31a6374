"""Delegation: maps delegate failures onto the route's generic 500 message.

Invariants:
    - Any exception raised inside the block becomes DelegateFailureError(message)
    - ResourceNotFoundError and DuplicateReportError pass through untouched (the
      recognized domain failures: 404 and 409)
    - The original exception is logged with traceback and chained, never sent to the client

Design Decisions:
    - Async context manager over a decorator: routes keep their try-block shape and
      can run several awaited calls inside one guarded section
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from pothole_api.core.errors import (
    DelegateFailureError,
    DuplicateReportError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def delegate_call(
    route: str, failure_message: str, **log_context: str | None,
) -> AsyncIterator[None]:
    """Guard a delegate call; see module invariants."""
    try:
        yield
    except (ResourceNotFoundError, DuplicateReportError):
        raise
    except Exception as e:
        logger.error(
            f"{failure_message}: {e}",
            exc_info=True,
            extra={"route": route, **log_context},
        )
        raise DelegateFailureError(failure_message, route) from e
