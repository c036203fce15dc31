"""
Port interfaces for callable functions.

Ports define the contracts the dispatcher requires from the outside world.
Infrastructure adapters implement these interfaces.
"""

from abc import ABC, abstractmethod

from oncall.domain.entities import VerifiedToken


class InvalidIdTokenError(Exception):
    """Raised by a verifier when an identity token is not acceptable."""


class IdTokenVerifier(ABC):
    """Port for verifying bearer identity tokens.

    Implementations may be plain or coroutine methods; the dispatcher awaits
    coroutines and runs plain methods in a worker thread.
    """

    @abstractmethod
    def verify(self, token: str) -> VerifiedToken:
        """Verify the token and return its owner.

        Args:
            token: Raw token text taken from ``Authorization: Bearer <token>``.

        Returns:
            The verified token with its subject identifier.

        Raises:
            Exception: Any failure (expired, malformed, revoked, network).
                The message is surfaced to the client.
        """
        raise NotImplementedError
