import asyncio

import pytest

from conftest import ALLOWED_URL, FULL_RESPONSE, StatusErrorStub
from models import ImageMediumType
from platforms import PLATFORM_REGISTRY
from prompts import CLASSIFICATION_PROMPT
from services.extraction_service import extract_style
from utils.errors import ErrorKind, ModelInvocationError, UnparseableResponseError

SECOND_URL = ALLOWED_URL.replace("1.png", "2.png")


def test_two_pass_extraction(fake_groq):
    fake_groq.replies = ["PAINTING", FULL_RESPONSE]

    result = asyncio.run(extract_style([ALLOWED_URL, SECOND_URL], "gsk_test_key", user_guidance="grain"))

    assert result.medium == ImageMediumType.PAINTING
    assert list(result.prompts) == PLATFORM_REGISTRY.keys
    assert result.prompts["flux"] == "Film photograph, warm pastel tones, shallow depth of field."

    classify_call, analysis_call = fake_groq.calls
    classify_content = classify_call["messages"][0]["content"]
    assert classify_content[0]["text"] == CLASSIFICATION_PROMPT
    assert [part["image_url"]["url"] for part in classify_content[1:]] == [ALLOWED_URL]
    assert classify_call["temperature"] == 0.1

    analysis_content = analysis_call["messages"][0]["content"]
    assert "Detected medium: PAINTING" in analysis_content[0]["text"]
    assert 'User notes: "grain"' in analysis_content[0]["text"]
    assert [part["image_url"]["url"] for part in analysis_content[1:]] == [ALLOWED_URL, SECOND_URL]


def test_unrecognized_medium_degrades_to_digital_art(fake_groq):
    fake_groq.replies = ["no idea", FULL_RESPONSE]

    result = asyncio.run(extract_style([ALLOWED_URL], "gsk_test_key"))

    assert result.medium == ImageMediumType.DIGITAL_ART
    assert "Detected medium: DIGITAL_ART" in fake_groq.calls[1]["messages"][0]["content"][0]["text"]


def test_one_pass_extraction(fake_groq):
    fake_groq.replies = [FULL_RESPONSE]

    result = asyncio.run(extract_style([ALLOWED_URL], "gsk_test_key", classify_medium=False))

    assert result.medium is None
    assert len(fake_groq.calls) == 1
    assert "Detected medium" not in fake_groq.calls[0]["messages"][0]["content"][0]["text"]


def test_partial_response_is_backfilled(fake_groq):
    fake_groq.replies = ["PHOTOGRAPHY", "FLUX: warm film tones"]

    result = asyncio.run(extract_style([ALLOWED_URL], "gsk_test_key"))

    assert set(result.prompts.values()) == {"warm film tones"}


def test_unparseable_response(fake_groq):
    fake_groq.replies = ["PHOTOGRAPHY", "Sorry, I can't help with that."]

    with pytest.raises(UnparseableResponseError):
        asyncio.run(extract_style([ALLOWED_URL], "gsk_test_key"))


def test_empty_response_is_unparseable(fake_groq):
    fake_groq.replies = ["PHOTOGRAPHY", None]

    with pytest.raises(UnparseableResponseError):
        asyncio.run(extract_style([ALLOWED_URL], "gsk_test_key"))


def test_invocation_error_is_classified(fake_groq):
    fake_groq.replies = [StatusErrorStub("Invalid API Key", 401)]

    with pytest.raises(ModelInvocationError) as excinfo:
        asyncio.run(extract_style([ALLOWED_URL], "gsk_bad_key"))

    assert excinfo.value.kind == ErrorKind.AUTHENTICATION
    assert len(fake_groq.calls) == 1
