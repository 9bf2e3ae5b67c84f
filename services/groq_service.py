import asyncio
import logging
from typing import List

from groq import AsyncGroq

from config import (
    ANALYSIS_MAX_TOKENS, ANALYSIS_TEMPERATURE, CLASSIFICATION_MAX_TOKENS,
    CLASSIFICATION_TEMPERATURE, GROQ_MODEL, MAX_CONCURRENT_REQUESTS
)
from models import ImageMediumType, SamplingParams
from prompts import CLASSIFICATION_PROMPT
from utils.errors import ModelInvocationError, classify_invocation_error
from utils.parsers import normalize_medium

logger = logging.getLogger(__name__)

# Bounds outbound model calls and binds to the serving loop on first use (3.10+).
# Clients are created per request from the caller's key.
semaphore = asyncio.Semaphore(MAX_CONCURRENT_REQUESTS)

CLASSIFICATION_SAMPLING = SamplingParams(max_tokens=CLASSIFICATION_MAX_TOKENS, temperature=CLASSIFICATION_TEMPERATURE)
ANALYSIS_SAMPLING = SamplingParams(max_tokens=ANALYSIS_MAX_TOKENS, temperature=ANALYSIS_TEMPERATURE)


def build_conversation(instruction: str, image_urls: List[str]) -> list:
    """Build a single user turn with the instruction text followed by the images."""
    content = [{"type": "text", "text": instruction}]
    for url in image_urls:
        content.append({
            "type": "image_url",
            "image_url": {"url": url}
        })
    return [
        {
            "role": "user",
            "content": content
        }
    ]


async def invoke_vision_model(api_key: str, instruction: str, image_urls: List[str], sampling: SamplingParams) -> str:
    """
    Send an instruction plus image URLs to the Groq vision model.

    Args:
        api_key: Caller-supplied Groq API key
        instruction: Full instruction text
        image_urls: Public image URLs to attach
        sampling: Token budget and temperature

    Returns:
        Raw response text (may be empty)

    Raises:
        ModelInvocationError: With the classified error kind
    """
    async with semaphore:
        try:
            async with AsyncGroq(api_key=api_key) as client:
                response = await client.chat.completions.create(
                    model=GROQ_MODEL,
                    messages=build_conversation(instruction, image_urls),
                    max_tokens=sampling.max_tokens,
                    temperature=sampling.temperature
                )

            content = response.choices[0].message.content or ""
            logger.info(f"Received {len(content)} characters from Groq for {len(image_urls)} image(s)")
            return content.strip()

        except Exception as e:
            kind = classify_invocation_error(e)
            logger.error(f"Error calling Groq API ({kind.value}): {str(e)}")
            raise ModelInvocationError(kind=kind) from e


async def classify_image_medium(api_key: str, image_url: str) -> ImageMediumType:
    """Pass 1: classify how the (first) reference image was made."""
    logger.info("Pass 1: classifying image medium")
    raw_output = await invoke_vision_model(api_key, CLASSIFICATION_PROMPT, [image_url], CLASSIFICATION_SAMPLING)
    return normalize_medium(raw_output)


async def analyze_style(api_key: str, instruction: str, image_urls: List[str]) -> str:
    """Pass 2: run the style analysis instruction over all reference images."""
    return await invoke_vision_model(api_key, instruction, image_urls, ANALYSIS_SAMPLING)
