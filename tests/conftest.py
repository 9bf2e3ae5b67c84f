from types import SimpleNamespace

import pytest

from platforms import PLATFORM_REGISTRY, PlatformRegistry
from services import groq_service

ALLOWED_URL = "https://res.cloudinary.com/demo/image/upload/style-references/1.png"

FULL_RESPONSE = (
    "GPT_IMAGE: Soft diffused window light, medium format feel, Portra palette.\n"
    "FLUX: Film photograph, warm pastel tones, shallow depth of field.\n"
    "NANO_BANANA: Close medium shot, 85mm feel, creamy bokeh, golden light.\n"
    "SEEDREAM: Kodak Portra warmth, lifted shadows, fine grain."
)


class StatusErrorStub(Exception):
    """SDK-style error carrying an HTTP status code."""

    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


class FakeCompletions:
    """Stands in for AsyncGroq().chat.completions; replies are consumed in order."""

    def __init__(self):
        self.replies = []
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


@pytest.fixture
def fake_groq(monkeypatch):
    completions = FakeCompletions()

    class FakeAsyncGroq:
        def __init__(self, api_key=None, **kwargs):
            self.api_key = api_key
            self.chat = SimpleNamespace(completions=completions)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            return False

    monkeypatch.setattr(groq_service, "AsyncGroq", FakeAsyncGroq)
    return completions


@pytest.fixture
def two_platform_registry():
    return PlatformRegistry(
        version="test",
        platforms=[PLATFORM_REGISTRY.get("flux"), PLATFORM_REGISTRY.get("seedream")],
    )
