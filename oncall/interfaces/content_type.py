"""
Content negotiation for callable requests.

Only ``application/json`` bodies are accepted. A ``charset`` parameter, if
present, must name UTF-8. Other media type parameters are ignored.
"""

import re

from oncall.domain.errors import StatusKind, error

JSON_MEDIA_TYPE = "application/json"
UTF8_CHARSETS = frozenset({"utf-8", "utf8"})

_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_MEDIA_TYPE_RE = re.compile(rf"^({_TOKEN})(?:/({_TOKEN}))?$")
_PARAM_RE = re.compile(rf'^\s*({_TOKEN})\s*=\s*({_TOKEN}|"(?:[^"\\]|\\.)*")\s*$')


class MediaTypeError(ValueError):
    """Raised when a Content-Type header cannot be parsed."""


def parse_media_type(header: str) -> tuple[str, dict[str, str]]:
    """Parse a Content-Type value into a lower-cased media type and params.

    Parameter names are lower-cased, quoted values are unquoted. A trailing
    ``;`` is tolerated, duplicate parameters are not.

    Raises:
        MediaTypeError: If the value is not a valid media type.
    """
    media_type, _, rest = header.partition(";")
    media_type = media_type.strip()
    if not _MEDIA_TYPE_RE.match(media_type):
        raise MediaTypeError(f"invalid media type: {media_type!r}")

    params: dict[str, str] = {}
    for chunk in _split_params(rest):
        if not chunk.strip():
            continue
        match = _PARAM_RE.match(chunk)
        if match is None:
            raise MediaTypeError(f"invalid media parameter: {chunk.strip()!r}")
        name, value = match.group(1).lower(), match.group(2)
        if value.startswith('"'):
            value = re.sub(r"\\(.)", r"\1", value[1:-1])
        if name in params:
            raise MediaTypeError(f"duplicate parameter name: {name!r}")
        params[name] = value
    return media_type.lower(), params


def validate_content_type(header: str | None) -> None:
    """Check that a request declares a UTF-8 JSON body.

    Raises:
        CallError: INVALID_ARGUMENT with one of "missing content type",
            "invalid content type", "unsupported content type" or
            "unsupported encoding".
    """
    if not header:
        raise error(StatusKind.INVALID_ARGUMENT, "missing content type")
    try:
        media_type, params = parse_media_type(header)
    except MediaTypeError as exc:
        raise error(StatusKind.INVALID_ARGUMENT, "invalid content type") from exc
    if media_type != JSON_MEDIA_TYPE:
        raise error(StatusKind.INVALID_ARGUMENT, "unsupported content type")
    charset = params.get("charset", "").lower()
    if charset and charset not in UTF8_CHARSETS:
        raise error(StatusKind.INVALID_ARGUMENT, "unsupported encoding")


def _split_params(rest: str) -> list[str]:
    """Split the parameter section on ``;`` outside of quoted strings."""
    chunks, current, quoted, escaped = [], [], False, False
    for char in rest:
        if escaped:
            escaped = False
        elif char == "\\" and quoted:
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif char == ";" and not quoted:
            chunks.append("".join(current))
            current = []
            continue
        current.append(char)
    chunks.append("".join(current))
    return chunks
