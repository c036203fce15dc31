"""
Use case: Invoke the user handler of a callable function.

Input: a decoded request instance and its CallContext.
Output: the handler's result value.
Side effects: Whatever the handler does.
Failure cases: CallError (typed handler failures pass through unchanged,
anything else is classified).
"""

import asyncio
import inspect
import logging
from typing import Any

from starlette.concurrency import run_in_threadpool

from oncall.domain.entities import CallContext
from oncall.domain.errors import CallError, classify


class InvokeHandlerUseCase:
    """Runs ``request.handle(context)`` and normalizes its failures.

    Coroutine handlers are awaited on the event loop; plain handlers run in
    the threadpool. An optional timeout bounds the call and is reported as
    DEADLINE_EXCEEDED.
    """

    def __init__(
        self, logger: logging.Logger | None = None, timeout: float | None = None
    ) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._timeout = timeout

    async def execute(self, request: Any, context: CallContext) -> Any:
        """Run the handler for one decoded request.

        Args:
            request: A fresh, validated request instance exposing ``handle``.
            context: The call context for this request.

        Returns:
            Whatever the handler returned.

        Raises:
            CallError: The handler's own CallError, or the classification of
                any other failure (logged before raising).
        """
        try:
            if self._timeout is None:
                return await self._call(request, context)
            return await asyncio.wait_for(
                self._call(request, context), timeout=self._timeout
            )
        except CallError:
            raise
        except (Exception, asyncio.CancelledError) as exc:
            call_error = classify(exc)
            self._logger.error(
                "callable returned error: %s",
                call_error.describe(),
                exc_info=exc,
            )
            raise call_error from exc

    async def _call(self, request: Any, context: CallContext) -> Any:
        if inspect.iscoroutinefunction(request.handle):
            return await request.handle(context)
        return await run_in_threadpool(request.handle, context)
