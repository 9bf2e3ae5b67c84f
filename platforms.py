"""
Target platform registry.

One versioned object describes every platform the service writes prompts for:
the label token the model is asked to emit, the label variants accepted back
from the model, the length/ordering guidance given to the model, and the
image-generation preset (if the platform can be generated directly).
"""
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from models import ImageMediumType


class GenerationPreset(BaseModel):
    model: str
    model_name: str
    input: Dict[str, Any] = Field(default_factory=dict)

    def build_input(self, prompt: str) -> Dict[str, Any]:
        return {"prompt": prompt, **self.input}


class PlatformSpec(BaseModel):
    key: str
    display_name: str
    label: str
    label_variants: List[str] = Field(default_factory=list)
    word_range: Tuple[int, int]
    ordering_hint: str
    medium_hints: Dict[ImageMediumType, str] = Field(default_factory=dict)
    generation: Optional[GenerationPreset] = None

    @property
    def labels(self) -> List[str]:
        """Canonical label followed by its accepted variants, without duplicates."""
        seen = []
        for label in [self.label, *self.label_variants]:
            if label not in seen:
                seen.append(label)
        return seen

    def hint_for(self, medium: Optional[ImageMediumType] = None) -> str:
        """Ordering hint for a detected medium, falling back to the generic hint."""
        if medium is None:
            return self.ordering_hint
        return self.medium_hints.get(medium, self.ordering_hint)


class PlatformRegistry(BaseModel):
    version: str
    platforms: List[PlatformSpec]

    @property
    def keys(self) -> List[str]:
        return [platform.key for platform in self.platforms]

    def get(self, key: str) -> Optional[PlatformSpec]:
        for platform in self.platforms:
            if platform.key == key:
                return platform
        return None

    def generation_platforms(self) -> List[PlatformSpec]:
        return [platform for platform in self.platforms if platform.generation]


PLATFORM_REGISTRY = PlatformRegistry(
    version="2025.12",
    platforms=[
        PlatformSpec(
            key="gpt_image",
            display_name="GPT Image",
            label="GPT_IMAGE:",
            label_variants=[
                "**GPT_IMAGE:**", "**GPT_IMAGE**:", "**GPT Image:**", "**GPT Image**:", "**GPT IMAGE:**",
                "GPT Image:", "GPT_IMAGE :", "GPT IMAGE:",
            ],
            word_range=(60, 80),
            ordering_hint="structured paragraph: lighting/atmosphere, then medium and technique, then color and finish",
            medium_hints={
                ImageMediumType.PHOTOGRAPHY: "structured paragraph: lighting/atmosphere, then camera/lens feel, then film/processing style",
                ImageMediumType.TRADITIONAL_ILLUSTRATION: "structured paragraph: line quality description, then tool/medium feel, then hatching/shading technique",
                ImageMediumType.PAINTING: "structured paragraph: medium/technique, then brush work, then color approach",
                ImageMediumType.DIGITAL_ART: "structured paragraph: digital style category, then rendering technique, then effects/color",
                ImageMediumType.THREE_D_RENDER: "structured paragraph: render style, then materials/lighting, then camera/post effects",
                ImageMediumType.MIXED_MEDIA: "structured paragraph: primary medium, then secondary elements, then combination style",
            },
        ),
        PlatformSpec(
            key="flux",
            display_name="Flux",
            label="FLUX:",
            label_variants=["**FLUX:**", "**FLUX**:", "**Flux:**", "**Flux**:", "Flux:", "FLUX :"],
            word_range=(30, 80),
            ordering_hint="subject-first format: overall style, then technical feel",
            medium_hints={
                ImageMediumType.PHOTOGRAPHY: "subject-first format: photographic style + technical feel",
                ImageMediumType.TRADITIONAL_ILLUSTRATION: "illustration style + technique descriptors",
                ImageMediumType.PAINTING: "painting style + medium + technique descriptors",
                ImageMediumType.DIGITAL_ART: "digital art style + rendering approach",
                ImageMediumType.THREE_D_RENDER: "3D style + rendering approach + lighting",
                ImageMediumType.MIXED_MEDIA: "mixed media style description + component techniques",
            },
            generation=GenerationPreset(
                model="black-forest-labs/flux-2-pro",
                model_name="Black Forest Labs Flux 2 Pro",
                input={
                    "resolution": "1 MP",
                    "aspect_ratio": "1:1",
                    "output_format": "webp",
                    "output_quality": 80,
                    "safety_tolerance": 2,
                },
            ),
        ),
        PlatformSpec(
            key="nano_banana",
            display_name="Nano Banana",
            label="NANO_BANANA:",
            label_variants=[
                "**NANO_BANANA:**", "**NANO_BANANA**:", "**Nano Banana:**", "**Nano Banana**:", "**NANO BANANA:**",
                "Nano Banana:", "NANO BANANA:", "NANO_BANANA :",
            ],
            word_range=(80, 100),
            ordering_hint="camera-first: shot type and framing, then composition, then lighting and color palette",
            medium_hints={
                ImageMediumType.PHOTOGRAPHY: "camera-first: shot type + focal length feel + DOF, then composition, then lighting + color palette from film/processing",
                ImageMediumType.TRADITIONAL_ILLUSTRATION: "composition framing, then line work style, then shading technique, then medium feel",
                ImageMediumType.PAINTING: "composition, then painting medium feel, then brush technique, then color palette",
                ImageMediumType.DIGITAL_ART: "composition, then digital rendering style, then color/lighting approach",
                ImageMediumType.THREE_D_RENDER: "camera/composition, then render style, then lighting setup, then material feel",
                ImageMediumType.MIXED_MEDIA: "composition, then dominant technique, then secondary elements, then integration style",
            },
            generation=GenerationPreset(
                model="google/nano-banana-pro",
                model_name="Google Nano Banana Pro",
                input={
                    "aspect_ratio": "4:3",
                    "output_format": "png",
                },
            ),
        ),
        PlatformSpec(
            key="seedream",
            display_name="Seedream",
            label="SEEDREAM:",
            label_variants=["**SEEDREAM:**", "**SEEDREAM**:", "**Seedream:**", "**Seedream**:", "Seedream:", "SEEDREAM :"],
            word_range=(30, 100),
            ordering_hint="priority-ordered: most distinctive style elements first",
            medium_hints={
                ImageMediumType.PHOTOGRAPHY: "priority-ordered: most distinctive photographic elements first",
                ImageMediumType.TRADITIONAL_ILLUSTRATION: "priority-ordered: most distinctive illustration elements first - line quality, hatching style, tool feel",
                ImageMediumType.PAINTING: "priority-ordered: medium, technique, color approach",
                ImageMediumType.DIGITAL_ART: "priority-ordered: style category, rendering technique, distinctive digital elements",
                ImageMediumType.THREE_D_RENDER: "priority-ordered: render style, lighting, materials, post-processing",
                ImageMediumType.MIXED_MEDIA: "priority-ordered: dominant medium, combination approach, distinctive mixed elements",
            },
            generation=GenerationPreset(
                model="bytedance/seedream-4.5",
                model_name="ByteDance Seedream 4.5",
                input={
                    "size": "2K",
                    "aspect_ratio": "1:1",
                    "max_images": 1,
                    "sequential_image_generation": "disabled",
                },
            ),
        ),
    ],
)
