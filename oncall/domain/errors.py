"""
Status taxonomy for callable functions.

Every failure that leaves a callable endpoint is one StatusKind plus a
message. Each kind maps to a canonical status string and an HTTP status
code, following https://cloud.google.com/apis/design/errors#http_mapping.
No framework imports allowed.
"""

import asyncio
from enum import IntEnum


class StatusKind(IntEnum):
    """Distinguishes between different error causes."""

    INVALID_ARGUMENT = 0
    FAILED_PRECONDITION = 1
    OUT_OF_RANGE = 2
    UNAUTHENTICATED = 3
    PERMISSION_DENIED = 4
    NOT_FOUND = 5
    ABORTED = 6
    ALREADY_EXISTS = 7
    RESOURCE_EXHAUSTED = 8
    CANCELLED = 9
    DATA_LOSS = 10
    UNKNOWN = 11
    INTERNAL = 12
    NOT_IMPLEMENTED = 13
    UNAVAILABLE = 14
    DEADLINE_EXCEEDED = 15


STATUSES: dict[StatusKind, tuple[str, int]] = {
    StatusKind.INVALID_ARGUMENT: ("INVALID_ARGUMENT", 400),
    StatusKind.FAILED_PRECONDITION: ("FAILED_PRECONDITION", 400),
    StatusKind.OUT_OF_RANGE: ("OUT_OF_RANGE", 400),
    StatusKind.UNAUTHENTICATED: ("UNAUTHENTICATED", 401),
    StatusKind.PERMISSION_DENIED: ("PERMISSION_DENIED", 403),
    StatusKind.NOT_FOUND: ("NOT_FOUND", 404),
    StatusKind.ABORTED: ("ABORTED", 409),
    StatusKind.ALREADY_EXISTS: ("ALREADY_EXISTS", 409),
    StatusKind.RESOURCE_EXHAUSTED: ("RESOURCE_EXHAUSTED", 429),
    StatusKind.CANCELLED: ("CANCELLED", 499),
    StatusKind.DATA_LOSS: ("DATA_LOSS", 500),
    StatusKind.UNKNOWN: ("UNKNOWN", 500),
    StatusKind.INTERNAL: ("INTERNAL", 500),
    StatusKind.NOT_IMPLEMENTED: ("NOT_IMPLEMENTED", 501),
    StatusKind.UNAVAILABLE: ("UNAVAILABLE", 503),
    StatusKind.DEADLINE_EXCEEDED: ("DEADLINE_EXCEEDED", 504),
}


def _normalize_kind(kind: object) -> StatusKind:
    """Return kind as a StatusKind, falling back to INTERNAL."""
    try:
        return StatusKind(kind)
    except (ValueError, TypeError):
        return StatusKind.INTERNAL


def status_of(kind: object) -> tuple[str, int]:
    """Return the (status string, HTTP code) pair for a kind.

    Unknown kinds resolve to the INTERNAL pair.
    """
    return STATUSES[_normalize_kind(kind)]


class CallError(Exception):
    """A failure carrying a status kind and a client-facing message.

    Raise it from a handler to answer with a specific status, e.g.
    ``raise CallError(StatusKind.NOT_FOUND, "nobody to greet")``.
    Instances are immutable.
    """

    def __init__(self, kind: StatusKind, message: str = "") -> None:
        self._kind = _normalize_kind(kind)
        self._status, self._http_status = STATUSES[self._kind]
        self._message = message
        super().__init__(self.describe())

    @property
    def kind(self) -> StatusKind:
        return self._kind

    @property
    def status(self) -> str:
        return self._status

    @property
    def http_status(self) -> int:
        return self._http_status

    @property
    def message(self) -> str:
        return self._message

    def describe(self) -> str:
        """Render "<STATUS>" or "<STATUS> <message>" for diagnostics."""
        if self._message:
            return f"{self._status} {self._message}"
        return self._status

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"CallError({self._kind.name}, {self._message!r})"


def error(kind: StatusKind, fmt: str = "", *args: object) -> CallError:
    """Build a CallError from a kind and a printf-style message.

    Never fails on a bad kind: anything outside StatusKind becomes INTERNAL.
    """
    message = fmt % args if args else fmt
    return CallError(kind, message)


def classify(exc: BaseException) -> CallError:
    """Convert any exception into a CallError.

    CallError passes through unchanged. Cancellation maps to CANCELLED,
    timeouts to DEADLINE_EXCEEDED, everything else to INTERNAL with the
    exception text forwarded verbatim.
    """
    if isinstance(exc, CallError):
        return exc
    if isinstance(exc, asyncio.CancelledError):
        return CallError(StatusKind.CANCELLED, str(exc) or "request cancelled")
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return CallError(StatusKind.DEADLINE_EXCEEDED, str(exc) or "deadline exceeded")
    return CallError(StatusKind.INTERNAL, str(exc))
