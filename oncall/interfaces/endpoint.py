"""
Callable endpoint: one HTTP endpoint bound to one request handler.

A Callable is an ASGI application. Mount it at a single path of any ASGI
server or FastAPI/Starlette app:

    greet = Callable(Greet, CallableOptions(verifier=FirebaseIdTokenVerifier("my-project")))
    app.add_route("/greet", greet)

OPTIONS requests are answered as CORS preflight, POST requests are
dispatched to the handler, every other method gets 405.
"""

import logging

from pydantic import BaseModel
from starlette.datastructures import MutableHeaders
from starlette.requests import ClientDisconnect, Request
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from oncall.application.authenticate_caller import AuthenticateCallerUseCase
from oncall.application.invoke_handler import InvokeHandlerUseCase
from oncall.core.config import CallableOptions
from oncall.domain.entities import CallContext
from oncall.domain.errors import CallError, StatusKind
from oncall.interfaces.content_type import validate_content_type
from oncall.interfaces.cors import add_actual_response_headers, preflight_response
from oncall.interfaces.envelope import (
    JSON_UTF8_MEDIA_TYPE,
    decode_request,
    encode_error,
    encode_success,
)

logger = logging.getLogger(__name__)

INSTANCE_ID_HEADER = "Firebase-Instance-ID-Token"


class Callable:
    """Serves a Firebase 'onCall' style function.

    For every POST the JSON body is validated into a new instance of
    ``request_model``, then its ``handle`` method is called with the call
    context. The returned value is encoded as JSON and sent back to the
    client.

    Instances hold no per-request state and may serve any number of
    concurrent requests.
    """

    def __init__(
        self, request_model: type[BaseModel], options: CallableOptions | None = None
    ) -> None:
        if not (isinstance(request_model, type) and issubclass(request_model, BaseModel)):
            raise TypeError("request_model must be a pydantic model class")
        if not callable(getattr(request_model, "handle", None)):
            raise TypeError("request_model must define a handle method")

        self._request_model = request_model
        self._options = options or CallableOptions()
        self._logger = self._options.logger or logger
        self._authenticate = (
            AuthenticateCallerUseCase(self._options.verifier, self._options.auth_required)
            if self._options.verifier is not None
            else None
        )
        self._invoke = InvokeHandlerUseCase(
            logger=self._logger, timeout=self._options.timeout
        )

    @property
    def request_model(self) -> type[BaseModel]:
        return self._request_model

    @property
    def options(self) -> CallableOptions:
        return self._options

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            raise TypeError(f"Callable only serves HTTP requests, got {scope['type']!r}")
        request = Request(scope, receive)
        response = await self.handle(request)
        await response(scope, receive, send)

    async def handle(self, request: Request) -> Response:
        """Route one request by method and build its response."""
        if request.method == "OPTIONS":
            return preflight_response(request.headers)
        if request.method == "POST":
            return await self._handle_post(request)
        return Response(status_code=405)

    async def _handle_post(self, request: Request) -> Response:
        pending_headers = MutableHeaders()
        try:
            body = await self._dispatch(request, pending_headers)
        except CallError as exc:
            response = Response(
                content=encode_error(exc),
                status_code=exc.http_status,
                media_type=JSON_UTF8_MEDIA_TYPE,
            )
        else:
            response = Response(content=body, media_type=JSON_UTF8_MEDIA_TYPE)

        for name, value in pending_headers.items():
            response.headers.append(name, value)
        return response

    async def _dispatch(self, request: Request, pending_headers: MutableHeaders) -> bytes:
        """Run a POST through authentication, decoding and the handler.

        CORS headers are only added once authentication has passed, so a
        rejected identity token is answered without them.

        Returns:
            The encoded success envelope.

        Raises:
            CallError: For every failure.
        """
        token = None
        if self._authenticate is not None:
            token = await self._authenticate.execute(request.headers.get("authorization"))

        add_actual_response_headers(request.headers, pending_headers)

        validate_content_type(request.headers.get("content-type"))

        try:
            body = await request.body()
        except ClientDisconnect as exc:
            raise CallError(StatusKind.CANCELLED, "client disconnected") from exc
        instance = decode_request(body, self._request_model)

        context = CallContext(
            uid=token.uid if token is not None else None,
            iid=request.headers.get(INSTANCE_ID_HEADER, ""),
        )
        result = await self._invoke.execute(instance, context)

        try:
            return encode_success(result)
        except (TypeError, ValueError, RecursionError) as exc:
            self._logger.error("failed to write response", exc_info=exc)
            raise CallError(StatusKind.INTERNAL, "failed to encode response") from exc
