"""
Centralized error handlers for FastAPI apps hosting callables.

Maps CallError raised by regular routes (health checks, webhooks next to
callable endpoints) to the callable error envelope.
"""

import logging

from fastapi import FastAPI, Request
from starlette.responses import Response

from oncall.domain.errors import CallError
from oncall.interfaces.envelope import error_response

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the CallError handler on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(CallError)
    async def handle_call_error(_request: Request, exc: CallError) -> Response:
        """Answer with the mapped status and the JSON error envelope."""
        logger.warning("Call error outside callable endpoint: %s", exc.describe())
        return error_response(exc)
