"""
Domain entities for callable functions.

Plain frozen dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CallContext:
    """Contextual information on the current function call.

    Attributes:
        uid: The caller's user ID from a verified identity token. None when
            identity verification is not configured or the caller is
            anonymous.
        iid: The Firebase Instance ID token (the FCM registration token).
            Can be used to target push notifications. Empty when absent.
    """

    uid: str | None = None
    iid: str = ""


@dataclass(frozen=True)
class VerifiedToken:
    """Result of a successful identity token verification.

    Attributes:
        uid: Subject identifier of the token owner.
        claims: Decoded token claims.
    """

    uid: str
    claims: dict[str, Any] = field(default_factory=dict)
