"""
CORS headers for callable endpoints.

Answers preflight requests and adds the actual-response headers to POST
responses. The requesting origin is echoed back, so any origin may call.
No business logic. Pure cross-cutting concern.
"""

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import Response

ALLOWED_METHODS = "POST"


def add_preflight_headers(request_headers: Headers, response_headers: MutableHeaders) -> None:
    """Add the headers answering an ``OPTIONS`` preflight request."""
    response_headers.append("Vary", "Origin")
    response_headers.append("Vary", "Access-Control-Request-Headers")
    response_headers.append("Access-Control-Allow-Methods", ALLOWED_METHODS)
    if request_headers.get("access-control-request-headers"):
        response_headers.append("Access-Control-Allow-Headers", "*")
    origin = request_headers.get("origin")
    if origin:
        response_headers.append("Access-Control-Allow-Origin", origin)


def add_actual_response_headers(
    request_headers: Headers, response_headers: MutableHeaders
) -> None:
    """Add the headers for the response to the actual POST request."""
    response_headers.append("Vary", "Origin")
    origin = request_headers.get("origin")
    if origin:
        response_headers.append("Access-Control-Allow-Origin", origin)


def preflight_response(request_headers: Headers) -> Response:
    """Build the 204 response to a CORS preflight request."""
    response = Response(status_code=204)
    add_preflight_headers(request_headers, response.headers)
    return response
