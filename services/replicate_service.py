import asyncio
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import httpx

from config import (
    GENERATION_BACKOFF_SECONDS, GENERATION_MAX_ATTEMPTS, GENERATION_TIMEOUT_SECONDS,
    REPLICATE_API_BASE, REPLICATE_POLL_INTERVAL_SECONDS, REPLICATE_WAIT_SECONDS
)
from models import PlatformGenerationResult
from platforms import PlatformSpec
from utils.errors import (
    NON_RETRYABLE_KINDS, ModelInvocationError, classify_invocation_error, error_payload
)

logger = logging.getLogger(__name__)

PENDING_STATUSES = ("starting", "processing")
GENERATION_FAILED_MESSAGE = "Failed to generate image. Please try again."


def extract_image_url(output: Any) -> Optional[str]:
    """Pull the first image URL out of a prediction output (string, list or object)."""
    if isinstance(output, str):
        return output or None
    if isinstance(output, list) and output:
        return extract_image_url(output[0])
    if isinstance(output, dict):
        return output.get("url")
    return None


async def run_prediction(client: httpx.AsyncClient, platform: PlatformSpec, prompt: str, api_key: str) -> Dict[str, Any]:
    """Create a prediction for the platform's model and wait until it settles."""
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    preset = platform.generation

    response = await client.post(
        f"{REPLICATE_API_BASE}/models/{preset.model}/predictions",
        json={"input": preset.build_input(prompt)},
        headers={**headers, "Prefer": f"wait={REPLICATE_WAIT_SECONDS}"},
    )
    response.raise_for_status()
    prediction = response.json()

    deadline = time.monotonic() + GENERATION_TIMEOUT_SECONDS
    while prediction.get("status") in PENDING_STATUSES:
        if time.monotonic() > deadline:
            raise ModelInvocationError("Image generation timed out")
        await asyncio.sleep(REPLICATE_POLL_INTERVAL_SECONDS)
        response = await client.get(prediction["urls"]["get"], headers=headers)
        response.raise_for_status()
        prediction = response.json()

    if prediction.get("status") != "succeeded":
        failure = Exception(prediction.get("error") or f"Prediction {prediction.get('status')}")
        raise ModelInvocationError(str(failure), kind=classify_invocation_error(failure))

    return prediction


async def generate_image(prompt: str, platform: PlatformSpec, api_key: str,
                         client: Optional[httpx.AsyncClient] = None) -> str:
    """
    Generate one image for a platform with its fixed parameter preset.

    Args:
        prompt: Platform prompt text
        platform: Platform entry with a generation preset
        api_key: Caller-supplied Replicate API token
        client: Optional shared httpx client

    Returns:
        URL of the generated image

    Raises:
        ModelInvocationError: With the classified error kind
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=GENERATION_TIMEOUT_SECONDS) as owned_client:
                prediction = await run_prediction(owned_client, platform, prompt, api_key)
        else:
            prediction = await run_prediction(client, platform, prompt, api_key)
    except ModelInvocationError:
        raise
    except Exception as e:
        kind = classify_invocation_error(e)
        logger.error(f"Error calling image generation API for {platform.key} ({kind.value}): {str(e)}")
        raise ModelInvocationError(kind=kind) from e

    image_url = extract_image_url(prediction.get("output"))
    if not image_url:
        raise ModelInvocationError("Failed to generate image - no URL returned")

    logger.info(f"Generated image for {platform.key} with {platform.generation.model}")
    return image_url


async def generate_image_with_retry(
    prompt: str,
    platform: PlatformSpec,
    api_key: str,
    max_attempts: int = GENERATION_MAX_ATTEMPTS,
    backoff_seconds: float = GENERATION_BACKOFF_SECONDS,
    client: Optional[httpx.AsyncClient] = None
) -> str:
    """Generate an image, retrying transient failures with exponential backoff."""
    for attempt in range(max_attempts):
        try:
            return await generate_image(prompt, platform, api_key, client=client)
        except ModelInvocationError as e:
            if e.kind in NON_RETRYABLE_KINDS or attempt == max_attempts - 1:
                raise
            wait_time = backoff_seconds * (2 ** attempt)
            logger.warning(
                f"Image generation for {platform.key} failed ({e.kind.value}), "
                f"retrying in {wait_time}s (attempt {attempt + 1}/{max_attempts})"
            )
            await asyncio.sleep(wait_time)

    raise ModelInvocationError("Max retries exceeded for image generation")


async def generate_images_for_platforms(
    requests: List[Tuple[PlatformSpec, str]],
    api_key: str
) -> Dict[str, PlatformGenerationResult]:
    """
    Generate images for several platforms concurrently.

    Each platform retries on its own schedule; one failure never cancels the
    others.
    """
    tasks = [generate_image_with_retry(prompt, platform, api_key) for platform, prompt in requests]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    outcomes: Dict[str, PlatformGenerationResult] = {}
    for (platform, _), result in zip(requests, results):
        if isinstance(result, Exception):
            _, message = error_payload(result, GENERATION_FAILED_MESSAGE)
            outcomes[platform.key] = PlatformGenerationResult(success=False, error=message)
        else:
            outcomes[platform.key] = PlatformGenerationResult(success=True, imageUrl=result)

    succeeded = sum(1 for outcome in outcomes.values() if outcome.success)
    logger.info(f"Generated {succeeded}/{len(requests)} platform images")
    return outcomes
