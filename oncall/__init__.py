"""
oncall: Firebase callable functions for ASGI apps.

Serves the callable JSON-over-HTTP convention from a single endpoint:
``{"data": ...}`` in, ``{"data": ...}`` or
``{"error": {"status": ..., "message": ...}}`` out, with CORS support and
optional Firebase Auth ID token verification.

Layers:
    - domain: Status taxonomy, call context, verifier port.
    - application: Caller authentication and handler invocation.
    - infrastructure: Firebase ID token verifier.
    - interfaces: Envelope codec, content negotiation, CORS, the endpoint.
    - shared: Cross-cutting concerns (errors, logging).
"""

import logging

from oncall.core.config import CallableOptions, Settings
from oncall.domain.entities import CallContext, VerifiedToken
from oncall.domain.errors import CallError, StatusKind, classify, error, status_of
from oncall.domain.ports import IdTokenVerifier, InvalidIdTokenError
from oncall.infrastructure.firebase_token_verifier import FirebaseIdTokenVerifier
from oncall.interfaces.endpoint import Callable
from oncall.interfaces.schemas import CallRequest

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CallContext",
    "CallError",
    "CallRequest",
    "Callable",
    "CallableOptions",
    "FirebaseIdTokenVerifier",
    "IdTokenVerifier",
    "InvalidIdTokenError",
    "Settings",
    "StatusKind",
    "VerifiedToken",
    "classify",
    "error",
    "status_of",
]
