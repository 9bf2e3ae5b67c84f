from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ImageMediumType(str, Enum):
    """Production technique of a reference image."""
    PHOTOGRAPHY = "PHOTOGRAPHY"
    TRADITIONAL_ILLUSTRATION = "TRADITIONAL_ILLUSTRATION"
    PAINTING = "PAINTING"
    DIGITAL_ART = "DIGITAL_ART"
    THREE_D_RENDER = "3D_RENDER"
    MIXED_MEDIA = "MIXED_MEDIA"


class SamplingParams(BaseModel):
    max_tokens: int
    temperature: float


# Request bodies are loosely typed; utils.validators produces the user-facing
# message for every malformed field.
class StyleExtractionRequest(BaseModel):
    imageUrls: Any = None
    userGuidance: Any = None
    apiKey: Any = None


class GenerateImageRequest(BaseModel):
    prompt: Any = None
    platform: Any = None
    apiKey: Any = None


class GenerateImagesRequest(BaseModel):
    prompts: Any = None
    apiKey: Any = None


class StyleExtractionResult(BaseModel):
    prompts: Dict[str, str]
    medium: Optional[ImageMediumType] = None


class StyleExtractionResponse(BaseModel):
    success: bool
    prompts: Optional[Dict[str, str]] = None
    error: Optional[str] = None
    imageCount: Optional[int] = None
    medium: Optional[ImageMediumType] = None


class GenerateImageResponse(BaseModel):
    success: bool
    imageUrl: Optional[str] = None
    error: Optional[str] = None
    platform: Optional[str] = None


class PlatformGenerationResult(BaseModel):
    success: bool
    imageUrl: Optional[str] = None
    error: Optional[str] = None


class GenerateImagesResponse(BaseModel):
    success: bool
    results: Dict[str, PlatformGenerationResult] = Field(default_factory=dict)
    error: Optional[str] = None


class UploadImageResponse(BaseModel):
    success: bool
    url: Optional[str] = None
    error: Optional[str] = None
