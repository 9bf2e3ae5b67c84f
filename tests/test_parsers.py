from itertools import permutations

import pytest

from models import ImageMediumType
from platforms import PLATFORM_REGISTRY, PlatformRegistry, PlatformSpec
from utils.errors import UnparseableResponseError
from utils.parsers import (
    locate_labels, normalize_medium, segment_platform_prompts
)

SECTIONS = {
    "gpt_image": ("GPT_IMAGE:", "Soft window light, then medium format feel, then Portra palette."),
    "flux": ("FLUX:", "Film photograph, warm pastel tones."),
    "nano_banana": ("NANO_BANANA:", "Medium shot, 85mm feel, creamy bokeh."),
    "seedream": ("SEEDREAM:", "Portra warmth, lifted shadows, fine grain."),
}


def test_two_labels_in_requested_order(two_platform_registry):
    raw = "FLUX: warm tones, soft light\nSEEDREAM: warm tones, soft light, painterly"

    prompts = segment_platform_prompts(raw, two_platform_registry)

    assert prompts == {"flux": "warm tones, soft light", "seedream": "warm tones, soft light, painterly"}


def test_labels_in_reverse_order(two_platform_registry):
    prompts = segment_platform_prompts("SEEDREAM: X\nFLUX: Y", two_platform_registry)

    assert prompts == {"flux": "Y", "seedream": "X"}


def test_every_permutation_yields_same_prompts():
    expected = {key: content for key, (_, content) in SECTIONS.items()}

    for order in permutations(SECTIONS):
        raw = "\n".join(f"{SECTIONS[key][0]} {SECTIONS[key][1]}" for key in order)
        assert segment_platform_prompts(raw) == expected


def test_result_follows_registry_key_order():
    raw = "SEEDREAM: a\nFLUX: b\nNANO_BANANA: c\nGPT_IMAGE: d"

    assert list(segment_platform_prompts(raw)) == PLATFORM_REGISTRY.keys


def test_single_label_backfills_missing_platforms():
    prompts = segment_platform_prompts("FLUX: Z")

    assert set(prompts) == set(PLATFORM_REGISTRY.keys)
    assert all(value == "Z" for value in prompts.values())


def test_backfill_uses_first_extracted_by_position():
    prompts = segment_platform_prompts("Here you go.\nSEEDREAM: first\nFLUX: second")

    assert prompts["seedream"] == "first"
    assert prompts["flux"] == "second"
    assert prompts["gpt_image"] == "first"
    assert prompts["nano_banana"] == "first"


def test_partial_result_is_logged(caplog):
    with caplog.at_level("WARNING"):
        segment_platform_prompts("FLUX: Z")

    assert "Parsed 1/4 platform prompts" in caplog.text
    assert "FLUX: Z" in caplog.text


@pytest.mark.parametrize("raw", ["", "I could not analyze this image.", "flux - warm tones"])
def test_no_labels_raises_unparseable(raw):
    with pytest.raises(UnparseableResponseError):
        segment_platform_prompts(raw)


def test_none_input_raises_unparseable():
    with pytest.raises(UnparseableResponseError):
        segment_platform_prompts(None)


def test_only_empty_sections_raises_unparseable(two_platform_registry):
    with pytest.raises(UnparseableResponseError):
        segment_platform_prompts("FLUX:\n   \nSEEDREAM:   ", two_platform_registry)


def test_empty_section_is_treated_as_missing(two_platform_registry):
    prompts = segment_platform_prompts("FLUX:\nSEEDREAM: cool tones", two_platform_registry)

    assert prompts == {"flux": "cool tones", "seedream": "cool tones"}


@pytest.mark.parametrize("label", PLATFORM_REGISTRY.get("flux").labels)
def test_flux_label_variants_parse_like_canonical(label, two_platform_registry):
    prompts = segment_platform_prompts(f"{label} warm tones\nSEEDREAM: cool tones", two_platform_registry)

    assert prompts == {"flux": "warm tones", "seedream": "cool tones"}


def test_markdown_wrapped_labels():
    raw = "\n\n".join(f"**{label}** {content}" for label, content in SECTIONS.values())

    prompts = segment_platform_prompts(raw)

    assert prompts == {key: content for key, (_, content) in SECTIONS.items()}


def test_spaced_variants():
    raw = "GPT IMAGE: a\nFlux: b\nNano Banana: c\nSEEDREAM : d"

    assert segment_platform_prompts(raw) == {"gpt_image": "a", "flux": "b", "nano_banana": "c", "seedream": "d"}


def test_adjacent_label_does_not_bleed(two_platform_registry):
    prompts = segment_platform_prompts("FLUX: warm tonesSEEDREAM: cool tones", two_platform_registry)

    assert prompts == {"flux": "warm tones", "seedream": "cool tones"}
    assert "SEEDREAM" not in prompts["flux"]


def test_variant_inside_another_platforms_label_does_not_match():
    registry = PlatformRegistry(
        version="test",
        platforms=[
            PlatformSpec(key="nano_banana", display_name="Nano Banana", label="NANO BANANA:",
                         word_range=(80, 100), ordering_hint="camera-first"),
            PlatformSpec(key="banana", display_name="Banana", label="BANANA:",
                         word_range=(30, 80), ordering_hint="style-first"),
        ],
    )

    prompts = segment_platform_prompts("NANO BANANA: soft light\nBANANA: hard light", registry)

    assert prompts == {"nano_banana": "soft light", "banana": "hard light"}


def test_duplicate_label_only_first_counts(two_platform_registry):
    prompts = segment_platform_prompts("FLUX: a\nSEEDREAM: b\nFLUX: c", two_platform_registry)

    assert prompts["flux"] == "a"
    assert prompts["seedream"].startswith("b")


def test_colons_inside_content_are_not_boundaries(two_platform_registry):
    raw = "FLUX: platform name: warm, light: soft, ratio 16:9\nSEEDREAM: palette: muted"

    prompts = segment_platform_prompts(raw, two_platform_registry)

    assert prompts["flux"] == "platform name: warm, light: soft, ratio 16:9"
    assert prompts["seedream"] == "palette: muted"


def test_preamble_before_first_label_is_ignored(two_platform_registry):
    prompts = segment_platform_prompts("Sure! Here are the prompts:\n\nFLUX: a\nSEEDREAM: b", two_platform_registry)

    assert prompts == {"flux": "a", "seedream": "b"}


def test_locate_labels_records_matched_variant():
    positions = locate_labels("intro **FLUX:** a\nSeedream: b")

    assert [(p.platform_key, p.offset, p.label) for p in positions] == [
        ("flux", 6, "**FLUX:**"),
        ("seedream", 18, "Seedream:"),
    ]


def test_bold_mixed_case_labels(two_platform_registry):
    prompts = segment_platform_prompts("**Flux:** warm\n**SEEDREAM:** cool", two_platform_registry)

    assert prompts == {"flux": "warm", "seedream": "cool"}


def test_bold_spaced_labels():
    raw = "**GPT Image:** a\n**Flux**: b\n**Nano Banana:** c\n**Seedream:** d"

    assert segment_platform_prompts(raw) == {"gpt_image": "a", "flux": "b", "nano_banana": "c", "seedream": "d"}


@pytest.mark.parametrize("raw, expected", [
    ("PHOTOGRAPHY", ImageMediumType.PHOTOGRAPHY),
    ("I think this is a PHOTOGRAPH.", ImageMediumType.PHOTOGRAPHY),
    ("uncertain", ImageMediumType.DIGITAL_ART),
    ("\"PAINTING\"", ImageMediumType.PAINTING),
    ("traditional illustration", ImageMediumType.TRADITIONAL_ILLUSTRATION),
    ("Digital Art", ImageMediumType.DIGITAL_ART),
    ("3D_RENDER", ImageMediumType.THREE_D_RENDER),
    ("mixed media", ImageMediumType.MIXED_MEDIA),
    ("watercolor on paper", ImageMediumType.PAINTING),
    ("Looks like CGI", ImageMediumType.THREE_D_RENDER),
    ("a 3d scene", ImageMediumType.THREE_D_RENDER),
    ("pencil sketch", ImageMediumType.TRADITIONAL_ILLUSTRATION),
    ("I think it is ink", ImageMediumType.TRADITIONAL_ILLUSTRATION),
    ("collage", ImageMediumType.MIXED_MEDIA),
    ("vector", ImageMediumType.DIGITAL_ART),
    ("hand illustrated with pen", ImageMediumType.TRADITIONAL_ILLUSTRATION),
    ("an illustrative piece", ImageMediumType.TRADITIONAL_ILLUSTRATION),
    ("telephoto shot", ImageMediumType.PHOTOGRAPHY),
    ("prerendered scene", ImageMediumType.THREE_D_RENDER),
    ("pink and spoiled tones", ImageMediumType.DIGITAL_ART),
    ("I think so", ImageMediumType.DIGITAL_ART),
    ("", ImageMediumType.DIGITAL_ART),
    (None, ImageMediumType.DIGITAL_ART),
])
def test_normalize_medium(raw, expected):
    assert normalize_medium(raw) == expected
