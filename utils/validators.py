import re
from typing import Any, List, Optional, Sequence, Tuple
from urllib.parse import urlparse

from config import (
    ALLOWED_IMAGE_TYPES, ALLOWED_IMAGE_URL_PATTERNS, API_KEY_MIN_LENGTH,
    MAX_FILE_SIZE_MB, MAX_GUIDANCE_LENGTH, MAX_IMAGES
)
from platforms import PLATFORM_REGISTRY, PlatformRegistry, PlatformSpec
from utils.errors import InputValidationError

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")


def validate_api_key(api_key: Any, prefix: str, provider: str) -> str:
    """Check presence and key format (provider prefix + minimum length)."""
    if not api_key or not isinstance(api_key, str):
        raise InputValidationError(f"{provider} API key is required")
    if not api_key.startswith(prefix) or len(api_key) < API_KEY_MIN_LENGTH:
        raise InputValidationError("Invalid API key format")
    return api_key


def sanitize_user_guidance(value: Any, max_length: int = MAX_GUIDANCE_LENGTH) -> Optional[str]:
    """Trim, truncate and strip HTML from free-text guidance. Empty input becomes None."""
    if not value or not isinstance(value, str):
        return None
    sanitized = value.strip()[:max_length]
    sanitized = HTML_TAG_PATTERN.sub("", sanitized)
    sanitized = sanitized.replace("<", "").replace(">", "").strip()
    return sanitized or None


def is_allowed_image_url(url: str, patterns: Optional[Sequence[str]] = None) -> bool:
    if patterns is None:
        patterns = ALLOWED_IMAGE_URL_PATTERNS
    return any(re.match(pattern, url) for pattern in patterns)


def validate_image_urls(image_urls: Any, patterns: Optional[Sequence[str]] = None) -> List[str]:
    if not image_urls or not isinstance(image_urls, list):
        raise InputValidationError("At least one image URL is required")
    if len(image_urls) > MAX_IMAGES:
        raise InputValidationError(f"Maximum {MAX_IMAGES} images allowed")

    for url in image_urls:
        if not isinstance(url, str):
            raise InputValidationError("All image URLs must be strings")
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InputValidationError("Invalid URL format")
        if not is_allowed_image_url(url, patterns):
            raise InputValidationError("Images must be uploaded through this application")
    return image_urls


def validate_prompt(prompt: Any) -> str:
    if not prompt or not isinstance(prompt, str) or not prompt.strip():
        raise InputValidationError("Prompt is required")
    return prompt.strip()


def validate_generation_platform(platform: Any, registry: PlatformRegistry = PLATFORM_REGISTRY) -> PlatformSpec:
    supported = registry.generation_platforms()
    for spec in supported:
        if platform == spec.key:
            return spec
    raise InputValidationError(
        f"Invalid platform. Supported: {', '.join(spec.key for spec in supported)}"
    )


def validate_platform_prompts(prompts: Any, registry: PlatformRegistry = PLATFORM_REGISTRY) -> List[Tuple[PlatformSpec, str]]:
    """Validate a {platform: prompt} mapping for multi-platform generation."""
    if not prompts or not isinstance(prompts, dict):
        raise InputValidationError("At least one platform prompt is required")
    return [
        (validate_generation_platform(platform, registry), validate_prompt(prompt))
        for platform, prompt in prompts.items()
    ]


def validate_upload(content_type: Optional[str], size: int) -> None:
    if not content_type or content_type not in ALLOWED_IMAGE_TYPES:
        raise InputValidationError("File must be JPG, PNG, or WebP")
    if size > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise InputValidationError(f"File must be smaller than {MAX_FILE_SIZE_MB}MB")
