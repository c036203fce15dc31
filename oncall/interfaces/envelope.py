"""
JSON envelope codec for callable requests and responses.

Decoding validates the ``data`` field into a fresh instance of the
handler's pydantic model. Encoding wraps results and errors into the
standard envelopes.
"""

import json
from typing import Any, TypeVar

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError
from starlette.responses import Response

from oncall.domain.errors import STATUSES, CallError, StatusKind, error
from oncall.interfaces.schemas import DataResponse, ErrorBody, ErrorResponse

JSON_MEDIA_TYPE = "application/json"
JSON_UTF8_MEDIA_TYPE = "application/json; charset=utf-8"

ModelT = TypeVar("ModelT", bound=BaseModel)

_KINDS_BY_STATUS = {status: kind for kind, (status, _) in STATUSES.items()}


def decode_request(body: bytes, model: type[ModelT]) -> ModelT:
    """Decode a ``{"data": ...}`` request body into a new model instance.

    Args:
        body: Raw request body.
        model: Pydantic model class the ``data`` object is validated into.

    Returns:
        A freshly validated instance of ``model``.

    The body must be UTF-8 whatever the declared charset. UTF-16 and
    UTF-32 bodies are rejected, not sniffed.

    Raises:
        CallError: INVALID_ARGUMENT on malformed JSON, a missing ``data``
            field or a validation failure.
    """
    try:
        payload = json.loads(body.decode("utf-8"))
    except ValueError as exc:
        raise _decode_error(str(exc)) from exc
    except RecursionError as exc:
        raise _decode_error("request body is nested too deeply") from exc

    if not isinstance(payload, dict):
        raise _decode_error("request body must be a JSON object")
    if "data" not in payload:
        raise _decode_error('missing "data" field')

    data = payload["data"]
    try:
        return model.model_validate({} if data is None else data)
    except ValidationError as exc:
        raise _decode_error(_describe_validation_error(exc)) from exc


def encode_success(result: Any) -> bytes:
    """Serialize ``{"data": result}``.

    NaN and infinite floats are refused.

    Raises:
        TypeError, ValueError: If ``result`` is not JSON serializable.
        RecursionError: If ``result`` references itself.
    """
    content = jsonable_encoder({"data": result})
    return _dumps(content)


def encode_error(call_error: CallError) -> bytes:
    """Serialize ``{"error": {"status": ..., "message": ...}}``."""
    envelope = ErrorResponse(
        error=ErrorBody(status=call_error.status, message=call_error.message)
    )
    return _dumps(envelope.model_dump())


def decode_response(body: bytes) -> Any:
    """Decode a response envelope produced by a callable endpoint.

    Returns:
        The ``data`` value of a success envelope.

    Raises:
        CallError: Rebuilt from an error envelope, or INTERNAL when the
            body is not a callable envelope at all.
    """
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise error(StatusKind.INTERNAL, "malformed response: %s", exc) from exc

    if isinstance(payload, dict) and "error" in payload:
        try:
            details = ErrorBody.model_validate(payload["error"])
        except ValidationError as exc:
            raise error(StatusKind.INTERNAL, "malformed error response") from exc
        kind = _KINDS_BY_STATUS.get(details.status, StatusKind.INTERNAL)
        raise CallError(kind, details.message)
    if isinstance(payload, dict) and "data" in payload:
        return DataResponse.model_validate(payload).data
    raise error(StatusKind.INTERNAL, "response has neither data nor error")


def error_response(call_error: CallError) -> Response:
    """Write a CallError directly as an HTTP response.

    Sets ``Content-Type: application/json`` (no charset parameter) and the
    mapped status code.
    """
    return Response(
        content=encode_error(call_error),
        status_code=call_error.http_status,
        media_type=JSON_MEDIA_TYPE,
    )


def _dumps(content: Any) -> bytes:
    return json.dumps(
        content, ensure_ascii=False, allow_nan=False, separators=(",", ":")
    ).encode("utf-8")


def _decode_error(detail: str) -> CallError:
    return error(StatusKind.INVALID_ARGUMENT, "failed to decode payload: %s", detail)


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "data"
        problems.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(problems)
