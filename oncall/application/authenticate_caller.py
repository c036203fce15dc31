"""
Use case: Authenticate the caller of a callable function.

Input: the raw ``Authorization`` header value (may be missing).
Output: VerifiedToken, or None for an anonymous caller.
Side effects: Delegates to the IdTokenVerifier port (may perform network IO).
Failure cases: CallError(UNAUTHENTICATED), CallError(CANCELLED).
"""

import asyncio
import inspect
import logging

from starlette.concurrency import run_in_threadpool

from oncall.domain.entities import VerifiedToken
from oncall.domain.errors import CallError, StatusKind, classify, error
from oncall.domain.ports import IdTokenVerifier

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


class AuthenticateCallerUseCase:
    """Validates ``Authorization: Bearer <token>`` through a verifier port.

    Every failure is reported as UNAUTHENTICATED with an
    ``invalid ID token: ...`` message. Cancellation while the verifier runs
    is not a failure of the token and is reported as CANCELLED.
    """

    def __init__(self, verifier: IdTokenVerifier, required: bool = False) -> None:
        self._verifier = verifier
        self._required = required

    async def execute(self, authorization: str | None) -> VerifiedToken | None:
        """Run the authentication use case.

        Args:
            authorization: The ``Authorization`` header value, if any.

        Returns:
            The verified token, or None when no header was sent and
            authentication is optional.

        Raises:
            CallError: UNAUTHENTICATED if the header is missing while
                required, malformed, or the verifier rejects the token.
                CANCELLED if the request is cancelled during verification.
        """
        parts = (authorization or "").split()
        if not parts:
            if self._required:
                raise _unauthenticated("missing Authorization header")
            return None
        if len(parts) != 2 or parts[0] != BEARER_SCHEME:
            raise _unauthenticated("unsupported Authorization header")

        try:
            token = await self._verify(parts[1])
        except CallError:
            raise
        except asyncio.CancelledError as exc:
            raise classify(exc) from exc
        except Exception as exc:
            logger.info("ID token rejected: %s", type(exc).__name__)
            raise _unauthenticated(str(exc)) from exc
        return token

    async def _verify(self, token: str) -> VerifiedToken:
        if inspect.iscoroutinefunction(self._verifier.verify):
            return await self._verifier.verify(token)
        return await run_in_threadpool(self._verifier.verify, token)


def _unauthenticated(reason: str) -> CallError:
    return error(StatusKind.UNAUTHENTICATED, "invalid ID token: %s", reason)
