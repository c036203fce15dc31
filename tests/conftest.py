"""
Shared fixtures for callable tests.

Provides a greeting handler mirroring a typical callable function and a
stub identity verifier. No network access required.
"""

import asyncio

import pytest
from pydantic import BaseModel

from oncall.domain.entities import CallContext, VerifiedToken
from oncall.domain.errors import CallError, StatusKind
from oncall.domain.ports import IdTokenVerifier, InvalidIdTokenError
from oncall.interfaces.schemas import CallRequest


class Greeting(BaseModel):
    greeting: str


class Greet(CallRequest):
    """Greets ``who``; a few magic names trigger failure paths."""

    who: str = ""

    async def handle(self, call: CallContext) -> Greeting:
        if not self.who:
            raise CallError(StatusKind.NOT_FOUND, "nobody to greet")
        if self.who == "error":
            raise RuntimeError("some error")
        if self.who == "cancel":
            raise asyncio.CancelledError()
        if self.who == "slow":
            await asyncio.sleep(1)
        if self.who == "me":
            return Greeting(greeting=f"UID: {call.uid}")
        if call.iid:
            return Greeting(greeting=f"IID: {call.iid}")
        return Greeting(greeting=f"Hello {self.who}!")


class SyncGreet(CallRequest):
    """Plain (non-coroutine) handler."""

    who: str

    def handle(self, call: CallContext) -> dict:
        return {"greeting": f"Hi {self.who}", "anonymous": call.uid is None}


class Unencodable(CallRequest):
    async def handle(self, call: CallContext) -> object:
        return object()


class StubVerifier(IdTokenVerifier):
    """Accepts the token "good" for user-1, rejects anything else."""

    def verify(self, token: str) -> VerifiedToken:
        if token == "good":
            return VerifiedToken(uid="user-1", claims={"sub": "user-1"})
        raise InvalidIdTokenError("token has expired")


class AsyncStubVerifier(IdTokenVerifier):
    async def verify(self, token: str) -> VerifiedToken:
        if token == "good":
            return VerifiedToken(uid="user-2")
        raise InvalidIdTokenError("token signature mismatch")


@pytest.fixture
def greet_model() -> type[Greet]:
    return Greet


@pytest.fixture
def sync_greet_model() -> type[SyncGreet]:
    return SyncGreet


@pytest.fixture
def unencodable_model() -> type[Unencodable]:
    return Unencodable


@pytest.fixture
def stub_verifier() -> StubVerifier:
    return StubVerifier()


@pytest.fixture
def async_stub_verifier() -> AsyncStubVerifier:
    return AsyncStubVerifier()
