import asyncio
from types import SimpleNamespace

from models import ImageMediumType
from services import groq_service
from services.groq_service import analyze_style, build_conversation, classify_image_medium

IMAGE_URL = "https://res.cloudinary.com/demo/image/upload/style-references/1.png"


def test_build_conversation_puts_text_before_images():
    messages = build_conversation("describe the style", [IMAGE_URL, IMAGE_URL])

    assert len(messages) == 1
    content = messages[0]["content"]
    assert messages[0]["role"] == "user"
    assert content[0] == {"type": "text", "text": "describe the style"}
    assert content[1:] == [{"type": "image_url", "image_url": {"url": IMAGE_URL}}] * 2


def test_classify_image_medium_normalizes_reply(fake_groq):
    fake_groq.replies = ["  Painting.  "]

    assert asyncio.run(classify_image_medium("gsk_test_key", IMAGE_URL)) == ImageMediumType.PAINTING
    assert fake_groq.calls[0]["max_tokens"] == groq_service.CLASSIFICATION_SAMPLING.max_tokens


def test_concurrent_calls_share_the_module_semaphore(monkeypatch):
    state = {"active": 0, "peak": 0}

    class SlowCompletions:
        async def create(self, **kwargs):
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
            await asyncio.sleep(0.01)
            state["active"] -= 1
            return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="FLUX: a"))])

    class SlowAsyncGroq:
        def __init__(self, api_key=None, **kwargs):
            self.chat = SimpleNamespace(completions=SlowCompletions())

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            return False

    monkeypatch.setattr(groq_service, "AsyncGroq", SlowAsyncGroq)
    call_count = groq_service.MAX_CONCURRENT_REQUESTS + 5

    async def run():
        return await asyncio.gather(*[
            analyze_style("gsk_test_key", "describe", [IMAGE_URL]) for _ in range(call_count)
        ])

    results = asyncio.run(run())

    assert results == ["FLUX: a"] * call_count
    assert state["peak"] <= groq_service.MAX_CONCURRENT_REQUESTS
