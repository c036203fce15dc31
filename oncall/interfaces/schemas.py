"""
Pydantic schemas for the callable JSON envelopes.

These schemas define the wire contract:
    request:  {"data": ...}
    success:  {"data": ...}
    failure:  {"error": {"status": "...", "message": "..."}}
No business logic belongs here.
"""

from typing import Any

from pydantic import BaseModel, Field

from oncall.domain.entities import CallContext


class CallRequest(BaseModel):
    """Base class for callable request data.

    Subclasses declare the fields of the ``data`` object and implement
    ``handle``. A fresh instance is validated from every request body, so
    instances are never shared between concurrent calls.

    Example:
        class Greet(CallRequest):
            who: str = ""

            async def handle(self, call: CallContext) -> dict:
                if not self.who:
                    raise CallError(StatusKind.NOT_FOUND, "nobody to greet")
                return {"greeting": f"Hello {self.who}!"}

    ``handle`` may be a coroutine or a plain method; plain methods run in a
    worker thread. Returned values are encoded as the ``data`` field of the
    response. Raise CallError for a specific status; any other exception is
    answered as INTERNAL.
    """

    async def handle(self, call: CallContext) -> Any:
        raise NotImplementedError


class DataResponse(BaseModel):
    """Success envelope."""

    data: Any = None


class ErrorBody(BaseModel):
    """Error details carried by the failure envelope.

    Attributes:
        status: Canonical status string, e.g. NOT_FOUND.
        message: Client-facing error message.
    """

    status: str = Field(..., description="Canonical status string")
    message: str = Field(default="", description="Client-facing error message")


class ErrorResponse(BaseModel):
    """Failure envelope."""

    error: ErrorBody
