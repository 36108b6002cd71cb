"""Shared fixtures: a virtual clock, a scripted gateway and a ready session."""

import pytest

from mother.clock import VirtualClock
from mother.models import ModelInfo, ProviderReply, Settings
from mother.reference import ReferenceStore
from mother.router import CommandRouter
from mother.session import ChatSession, MemorySettings


class StubGateway:
    """Gateway with canned answers. Records every call it receives."""

    def __init__(self, models=None, reply=None, exc=None):
        self.models = list(models or [])
        self.reply = reply or ProviderReply(content="AFFIRMATIVE.")
        self.exc = exc
        self.sent: list[str] = []
        self.model_requests = 0

    async def send_message(self, text: str, settings: Settings) -> ProviderReply:
        self.sent.append(text)
        if self.exc:
            raise self.exc
        return self.reply

    async def fetch_models(self, settings: Settings) -> list[ModelInfo]:
        self.model_requests += 1
        return list(self.models)


@pytest.fixture
def three_models() -> list[ModelInfo]:
    return [
        ModelInfo(name="llama3.1:8b", size=4_920_000_000),
        ModelInfo(name="mistral:7b", size=4_110_000_000),
        ModelInfo(name="phi3:mini", size=2_200_000_000),
    ]


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def store() -> ReferenceStore:
    return ReferenceStore()


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def settings() -> MemorySettings:
    return MemorySettings()


@pytest.fixture
def router(store, gateway) -> CommandRouter:
    return CommandRouter(store, gateway)


@pytest.fixture
def session(router, settings, clock) -> ChatSession:
    """A session that has already finished booting."""
    return ChatSession(router=router, settings=settings, clock=clock)
