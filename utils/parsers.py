import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from models import ImageMediumType
from platforms import PLATFORM_REGISTRY, PlatformRegistry
from utils.errors import UnparseableResponseError

logger = logging.getLogger(__name__)

INCOMPLETE_EXTRACTION_FALLBACK = "Style extraction incomplete. Please try again."
RAW_LOG_PREFIX_CHARS = 500

# Secondary keyword heuristics, checked in order when no canonical token matches.
# Keywords match anywhere in the response, except the short ones in
# WORD_START_KEYWORDS, which must start a word ("THINK" is not "INK").
MEDIUM_KEYWORDS = [
    (ImageMediumType.PHOTOGRAPHY, ["PHOTO"]),
    (ImageMediumType.TRADITIONAL_ILLUSTRATION, ["ILLUSTRAT", "DRAWING", "DRAWN", "INK", "SKETCH", "PENCIL", "CHARCOAL"]),
    (ImageMediumType.PAINTING, ["PAINT", "WATERCOLOR", "WATERCOLOUR", "OIL", "ACRYLIC", "GOUACHE", "PASTEL"]),
    (ImageMediumType.DIGITAL_ART, ["DIGITAL", "VECTOR"]),
    (ImageMediumType.THREE_D_RENDER, ["3D", "RENDER", "CGI"]),
    (ImageMediumType.MIXED_MEDIA, ["MIXED", "COLLAGE"]),
]
WORD_START_KEYWORDS = {"INK", "OIL", "3D", "CGI"}
DEFAULT_MEDIUM = ImageMediumType.DIGITAL_ART


@dataclass
class LabelPosition:
    platform_key: str
    offset: int
    label: str

    @property
    def end(self) -> int:
        return self.offset + len(self.label)


def _find_all(text: str, needle: str) -> List[int]:
    positions = []
    start = text.find(needle)
    while start != -1:
        positions.append(start)
        start = text.find(needle, start + 1)
    return positions


def locate_labels(raw_text: str, registry: PlatformRegistry = PLATFORM_REGISTRY) -> List[LabelPosition]:
    """
    Find the first label occurrence for every platform, sorted by offset.

    Every accepted variant of every platform is searched literally. An
    occurrence that sits inside a longer label occurrence belonging to a
    different platform is ignored, so a short variant of one platform never
    matches a fragment of another platform's label. Per platform the earliest
    remaining occurrence wins (the longer variant on ties); later duplicates
    are not labels.
    """
    candidates = [
        LabelPosition(platform.key, offset, label)
        for platform in registry.platforms
        for label in platform.labels
        for offset in _find_all(raw_text, label)
    ]

    def is_fragment(candidate: LabelPosition) -> bool:
        return any(
            other.platform_key != candidate.platform_key
            and len(other.label) > len(candidate.label)
            and other.offset <= candidate.offset
            and candidate.end <= other.end
            for other in candidates
        )

    first_by_key: Dict[str, LabelPosition] = {}
    for candidate in sorted(candidates, key=lambda c: (c.offset, -len(c.label))):
        if candidate.platform_key in first_by_key or is_fragment(candidate):
            continue
        first_by_key[candidate.platform_key] = candidate

    return sorted(first_by_key.values(), key=lambda position: position.offset)


def segment_platform_prompts(raw_text: str, registry: PlatformRegistry = PLATFORM_REGISTRY) -> Dict[str, str]:
    """
    Split a raw model response into one prompt per platform.

    Sections are delimited only by the literal label tokens listed in the
    registry, in the order they appear in the response. When some platforms
    are missing, they are backfilled with the first extracted prompt so that
    every platform key is always populated.

    Args:
        raw_text: Unstructured text returned by the vision model (may be empty)
        registry: Platform registry providing keys and accepted label variants

    Returns:
        Dict mapping every platform key (in registry order) to a non-empty prompt

    Raises:
        UnparseableResponseError: If no platform section could be extracted
    """
    raw_text = raw_text or ""
    positions = locate_labels(raw_text, registry)

    extracted: Dict[str, str] = {}
    for index, position in enumerate(positions):
        next_offset = positions[index + 1].offset if index + 1 < len(positions) else len(raw_text)
        content = raw_text[position.end:next_offset].strip()
        if content:
            extracted[position.platform_key] = content

    if len(extracted) == len(registry.platforms):
        return {key: extracted[key] for key in registry.keys}

    logger.warning(
        f"Parsed {len(extracted)}/{len(registry.platforms)} platform prompts. "
        f"Found: {list(extracted.keys())}. Raw output: {raw_text[:RAW_LOG_PREFIX_CHARS]!r}"
    )

    if not extracted:
        raise UnparseableResponseError()

    first_prompt = next(iter(extracted.values()), None) or INCOMPLETE_EXTRACTION_FALLBACK
    return {key: extracted.get(key, first_prompt) for key in registry.keys}


def _keyword_matches(keyword: str, upper: str, words: List[str]) -> bool:
    if keyword in WORD_START_KEYWORDS:
        return any(word.startswith(keyword) for word in words)
    return keyword in upper


def _canonical_token(medium: ImageMediumType) -> str:
    return medium.value.replace("_", "")


def normalize_medium(raw_response: Optional[str]) -> ImageMediumType:
    """
    Reduce a free-text classification answer to one ImageMediumType.

    Exact canonical tokens are tried first, then keyword heuristics, then the
    DIGITAL_ART default. Never raises.
    """
    upper = (raw_response or "").upper()
    cleaned = re.sub(r"[^A-Z0-9_]", "", upper).replace("_", "")

    for medium in ImageMediumType:
        if _canonical_token(medium) in cleaned:
            logger.info(f"Detected medium: {medium.value}")
            return medium

    words = re.findall(r"[A-Z0-9]+", upper)
    for medium, keywords in MEDIUM_KEYWORDS:
        if any(_keyword_matches(keyword, upper, words) for keyword in keywords):
            logger.info(f"Detected medium (heuristic): {medium.value}")
            return medium

    logger.warning(f"Could not classify medium, defaulting to {DEFAULT_MEDIUM.value}. Raw: {raw_response!r}")
    return DEFAULT_MEDIUM
