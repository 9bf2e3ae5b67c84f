import logging
from typing import List, Optional

from config import ENABLE_MEDIUM_CLASSIFICATION
from models import StyleExtractionResult
from platforms import PLATFORM_REGISTRY, PlatformRegistry
from prompts import compose_analysis_prompt
from utils.parsers import segment_platform_prompts
from .groq_service import analyze_style, classify_image_medium

logger = logging.getLogger(__name__)


async def extract_style(
    image_urls: List[str],
    api_key: str,
    user_guidance: Optional[str] = None,
    classify_medium: bool = ENABLE_MEDIUM_CLASSIFICATION,
    registry: PlatformRegistry = PLATFORM_REGISTRY
) -> StyleExtractionResult:
    """
    Extract platform-specific style prompts from reference images.

    The first image alone decides the medium; the analysis pass sees every
    image. Steps run strictly in sequence.

    Args:
        image_urls: Validated public image URLs (1..MAX_IMAGES)
        api_key: Caller-supplied Groq API key
        user_guidance: Sanitized user notes
        classify_medium: Run the medium classification pass first
        registry: Platform registry to request and parse

    Returns:
        StyleExtractionResult with one prompt per platform key

    Raises:
        ModelInvocationError: If a model call fails
        UnparseableResponseError: If no platform section is recognized
    """
    medium = None
    if classify_medium:
        medium = await classify_image_medium(api_key, image_urls[0])

    logger.info(f"Pass 2: extracting style from {len(image_urls)} image(s) (medium={medium.value if medium else 'generic'})")
    instruction = compose_analysis_prompt(len(image_urls), user_guidance, medium, registry)
    raw_output = await analyze_style(api_key, instruction, image_urls)

    prompts = segment_platform_prompts(raw_output, registry)
    logger.info(f"Successfully extracted {len(prompts)} platform prompts")
    return StyleExtractionResult(prompts=prompts, medium=medium)
