# System prompts for style analysis and medium classification

from typing import Dict, Optional

from models import ImageMediumType
from platforms import PLATFORM_REGISTRY, PlatformRegistry

# Pass 1: medium classification
CLASSIFICATION_PROMPT = """Classify this image into ONE of these categories based on how it was created:

1. PHOTOGRAPHY - Real camera capture (film or digital photograph)
2. TRADITIONAL_ILLUSTRATION - Hand-drawn with pen, ink, pencil, charcoal, markers
3. PAINTING - Traditional paint media (oil, watercolor, acrylic, gouache, pastel)
4. DIGITAL_ART - Created digitally (digital painting, vector art, concept art)
5. 3D_RENDER - Computer-generated 3D imagery (CGI, 3D modeling)
6. MIXED_MEDIA - Combination of techniques, collage, photo manipulation

Respond with ONLY the category name in caps (e.g., "PHOTOGRAPHY"). Nothing else."""

# Pass 2 (one-pass mode or unknown medium): generic style analysis
STYLE_ANALYSIS_PROMPT = """You are an expert at analyzing images and extracting their visual style so it can be reproduced on entirely different subjects.

ANALYZE THESE SPECIFIC ELEMENTS:

MEDIUM & TECHNIQUE:
- How the image was made: photograph, hand-drawn illustration, painting, digital art, 3D render, mixed media
- Visible technique: brushwork, line quality, rendering approach, film or sensor character

COLOR:
- Palette: dominant hues, saturation level, limited vs full spectrum
- Temperature and contrast: warm/cool balance, high key vs low key, value range
- Grading or treatment: faded blacks, film emulation, vibrant digital color

LIGHT & ATMOSPHERE:
- Light quality: hard/soft, natural/artificial, direction
- Mood: calm, dramatic, nostalgic, clinical, dreamy

COMPOSITION & FRAMING:
- Framing habits: tight/wide, symmetry, negative space, perspective
- Depth: shallow vs deep focus, layering, atmospheric perspective

TEXTURE & FINISH:
- Surface: grain, noise, paper or canvas texture, smooth gradients
- Edges: crisp, soft, broken, outlined

Describe ONLY transferable style characteristics. Do NOT describe the subject matter, people, objects, or scene content of the image."""

# Pass 2: medium-specialized style analysis
SPECIALIZED_PROMPTS: Dict[ImageMediumType, str] = {
    ImageMediumType.PHOTOGRAPHY: """You are an expert at analyzing photographs and extracting their technical and aesthetic characteristics.

ANALYZE THESE SPECIFIC ELEMENTS:

CAMERA & FORMAT:
- Camera type feel: DSLR, mirrorless, medium format (shallow DOF, smooth tonal transitions, creamy bokeh), large format, film camera (35mm/120), phone camera, instant/Polaroid
- Sensor/film size characteristics visible in the image

FILM VS DIGITAL:
- If film, identify stock characteristics:
  * Color negative: Kodak Portra (warm skin tones, pastel shadows), Fuji Pro 400H (cooler greens, lifted shadows), Kodak Gold (saturated, contrasty), Ektar (vivid, fine grain)
  * B&W: Ilford HP5 (punchy contrast, visible grain), Tri-X (classic grain structure), T-Max (fine grain, smooth tones), Delta (modern, sharp)
  * Slide: Kodachrome (saturated reds/yellows, archival feel), Velvia (hypersaturated landscapes), Ektachrome (neutral, clean)
- If digital: clean sensor look, highlight recovery style, digital noise pattern

LENS CHARACTER:
- Focal length feel: wide angle (environmental, distortion), normal 35-50mm (natural perspective), portrait 85mm (flattering compression), telephoto (background compression, shallow DOF)
- Bokeh quality: smooth/creamy, busy/nervous, swirly vintage (Helios), cat-eye at edges
- Vintage vs modern: soft glow and flare vs clinical sharpness, coating characteristics
- Aperture feel: wide open softness vs stopped-down sharpness

ERA/AESTHETIC:
- Decade feel: 60s (high contrast B&W), 70s (warm grain, soft focus, earth tones), 80s (flash, saturated), 90s (point-and-shoot, casual), 2000s (early digital), modern (clean, edited)
- Color grading style: film emulation, LOG flat, high contrast, faded/lifted blacks

LIGHTING:
- Quality: hard/soft, natural/artificial, golden hour, overcast, studio
- Direction and mood""",

    ImageMediumType.TRADITIONAL_ILLUSTRATION: """You are an expert at analyzing hand-drawn illustrations and extracting their technique and material characteristics.

ANALYZE THESE SPECIFIC ELEMENTS:

LINE CHARACTER:
- Weight variation: uniform thickness throughout, tapered strokes (thick-to-thin), naturally varied pressure, consistent technical pen width
- Line confidence: bold/decisive single strokes, sketchy/searching multiple passes, hesitant broken lines, loose gestural marks
- Organic quality: visible hand wobble (natural imperfection), human touch irregularities vs mechanical precision
- Edge treatment: clean/crisp defined edges, feathered soft edges, broken/interrupted lines, varied edge quality

TOOL IDENTIFICATION:
- Pen type: fine liner (Micron 0.1-0.8mm, Staedtler Pigment), dip pen with flexible nib (varied line weight), brush pen (expressive thick-thin), felt tip marker, ballpoint (scratchy consistent), technical pen (Rotring, uniform), crow quill (fine detail), fountain pen
- Ink characteristics: India ink (dense opaque black), fountain pen ink (varied saturation), marker (translucent layerable), sepia/brown ink
- If pencil: graphite grade feel (H hard/light vs B soft/dark), colored pencil texture, charcoal (soft, smudgeable), conte crayon

HATCHING/SHADING TECHNIQUE:
- Type: crosshatching (layered angles), parallel hatching (single direction), stippling/pointillism (dots), scribble shading (loose circular), contour hatching (following form)
- Density: tight/close spacing (dark values), loose/open spacing (light values), graduated density for smooth tonal transition
- Regularity: precise/mechanical even spacing vs organic/irregular hand-drawn spacing
- Direction: consistent angle (45 degrees, horizontal, vertical), form-following curved, random expressive
- Layering: single pass hatching vs built-up multiple layers for depth

SURFACE/PAPER INFLUENCE:
- Paper texture: smooth bristol (crisp clean lines), cold press texture (broken stroke edges), hot press (smooth), toned/colored paper (mid-tone base)
- White space usage: how untouched paper creates highlights and breathing room
- Paper color showing through: cream, white, gray, tan""",

    ImageMediumType.PAINTING: """You are an expert at analyzing paintings and extracting their medium and technique characteristics.

ANALYZE THESE SPECIFIC ELEMENTS:

MEDIUM IDENTIFICATION:
- Paint type: oil (slow-drying, rich blendable, lustrous), watercolor (transparent washes, wet edges, paper texture), acrylic (fast-drying, versatile opacity), gouache (opaque matte watercolor), pastel (chalky, soft edges), encaustic (waxy), tempera
- Medium behavior: how the paint sits on surface, transparency/opacity, texture buildup

BRUSH/APPLICATION TECHNIQUE:
- Stroke visibility: visible impasto (thick textured strokes), smooth blended invisible strokes, dry brush scratchy texture, wet flowing strokes
- Brush type feel: flat brush angular strokes, round brush organic marks, filbert soft edges, palette knife sharp ridges, sponge dabbed texture, finger blended
- Technique: wet-on-wet (soft blending), wet-on-dry (crisp edges), glazing (transparent layers), alla prima (single session), scumbling (broken color), impasto (thick buildup)
- Edge quality: soft lost edges, hard found edges, lost-and-found variety

SURFACE TEXTURE:
- Canvas weave visibility: fine, medium, coarse texture showing through
- Paper texture for watercolor: cold press rough, hot press smooth
- Paint thickness: thin transparent washes, medium body, heavy impasto peaks
- Surface sheen: matte, satin, glossy varnished

COLOR & MIXING:
- Palette approach: limited harmonious palette, full spectrum, complementary contrast, analogous subtle
- Mixing style: optical mixing (separate strokes blend visually), physical blending on surface, layered glazes for depth
- Color temperature: warm dominant, cool dominant, balanced
- Value structure: high key (light), low key (dark), full range contrast

ARTISTIC MOVEMENT/INFLUENCE (if apparent):
- Style echoes: impressionist (visible strokes, light), expressionist (emotional, bold), realist (detailed), abstract, etc.""",

    ImageMediumType.DIGITAL_ART: """You are an expert at analyzing digital artwork and extracting its style and technique characteristics.

ANALYZE THESE SPECIFIC ELEMENTS:

DIGITAL APPROACH:
- Style category: digital painting (painterly), vector illustration (clean shapes), concept art (atmospheric), anime/manga style, pixel art, photo-bashing, matte painting
- Software feel: painterly Photoshop/Procreate (textured brushes), clean vector Illustrator (sharp edges), Clip Studio (manga tools), 3D-assisted 2D (perfect perspective)

TRADITIONAL MIMICRY (if present):
- Which traditional medium it emulates: oil painting texture, watercolor washes, ink illustration, pencil sketch, charcoal
- Convincingness level: highly realistic traditional feel vs obviously digital
- What reveals digital origin: too-perfect gradients, impossibly smooth blending, layer effects, undo-perfect lines

RENDERING TECHNIQUE:
- Shading style: cel-shaded (flat color blocks with hard shadow edges), soft gradient (smooth airbrushed), painterly (visible brush texture), realistic (detailed lighting)
- Line work: clean vector lines (uniform, perfect curves), sketchy digital lines (textured, varied), lineless (shapes only), thick outlines (cartoon)
- Edge treatment: anti-aliased smooth, crisp pixel-perfect, soft feathered, textured brush edges
- Form rendering: flat 2D shapes, soft 3D form, highly rendered volumetric

DIGITAL-SPECIFIC ELEMENTS:
- Effects: glow/bloom, lens flares, particle effects, chromatic aberration
- Texture overlays: noise/grain additions, paper texture, canvas overlay
- Blend modes visible: multiply shadows, screen/add highlights, overlay color
- Layer composition: visible layer stacking, adjustment layer color grading

COLOR & LIGHTING:
- Digital color: saturated/vibrant, muted/desaturated, neon/glowing
- Lighting approach: dramatic rim lights, soft ambient, multiple colored light sources""",

    ImageMediumType.THREE_D_RENDER: """You are an expert at analyzing 3D rendered images and extracting their style and technical characteristics.

ANALYZE THESE SPECIFIC ELEMENTS:

RENDERING STYLE:
- Realism level: photorealistic (indistinguishable from photo), semi-realistic, stylized/cartoon, low-poly aesthetic, NPR non-photorealistic (toon shading)
- Engine/software feel: Unreal Engine (cinematic, film grain), Blender Cycles (clean, artistic), Octane (vibrant, artistic), V-Ray (architectural, accurate), Arnold (film quality), real-time game engine look

MATERIALS & SURFACES:
- Shader types: PBR physically-based realistic, subsurface scattering (skin, wax, leaves), metallic (reflective, brushed), glass/transparent, cloth/fabric simulation
- Texture quality: high-resolution detailed maps, hand-painted stylized textures, procedural generated, clean untextured
- Surface detail: normal maps for fine detail, displacement for geometry, wear/weathering, pristine clean

LIGHTING SETUP:
- Type: studio three-point (key/fill/rim), HDRI environment (natural wrap), dramatic single source, multiple colored lights
- Quality: ray-traced accurate (soft shadows, GI), stylized (hard shadows), volumetric fog/atmosphere/god rays
- Mood: bright and clean, moody and dramatic, warm golden, cool blue

CAMERA/RENDER SETTINGS:
- Depth of field: shallow cinematic DOF, deep everything-sharp, tilt-shift miniature effect
- Motion blur: present/absent
- Post-processing: color grading, bloom, lens effects, film grain overlay, chromatic aberration

STYLE CATEGORY:
- Application feel: product visualization (clean, floating), architectural (realistic, contextual), character render (posed, lit), game asset, VFX/film, abstract artistic""",

    ImageMediumType.MIXED_MEDIA: """You are an expert at analyzing mixed media artwork and extracting its component techniques and combination style.

ANALYZE THESE SPECIFIC ELEMENTS:

IDENTIFIED COMPONENTS:
- List each distinct medium/technique present in the work
- Examples: photography + illustration overlay, painting + collage, digital + traditional elements, multiple traditional media combined

COMBINATION METHOD:
- How elements are integrated: layered/overlapping, side-by-side, seamlessly blended, intentionally contrasting
- Digital compositing: photo manipulation, digital collage, mixed traditional scanned and combined
- Physical combination: actual collage, mixed media on single surface

DOMINANT TECHNIQUE:
- Which medium leads/dominates the visual style
- Supporting/accent elements and their role
- Balance between components

INTEGRATION QUALITY:
- Seamless blend: elements feel unified
- Intentional contrast: deliberate visual tension between media
- Textural variety: how different surfaces/techniques interact

UNIQUE CHARACTERISTICS:
- What makes this combination distinctive
- Unexpected juxtapositions
- Technical innovation in combination""",
}

STYLE_ONLY_REMINDER = "Focus ONLY on transferable style characteristics, not subject matter."


def build_output_contract(registry: PlatformRegistry = PLATFORM_REGISTRY, medium: Optional[ImageMediumType] = None) -> str:
    """Describe the exact labeled response format the response segmenter expects."""
    count = len(registry.platforms)

    lines = [
        "OUTPUT FORMAT:",
        f"Output exactly {count} platform-optimized prompts, one per label below, in this order.",
        "Each section must start on its own line with the label written EXACTLY as shown (uppercase, underscore, colon), followed by the prompt text.",
        "",
    ]
    for number, platform in enumerate(registry.platforms, start=1):
        low, high = platform.word_range
        lines.append(f"{number}. {platform.label} [{platform.hint_for(medium)}, {low}-{high} words]")

    lines += ["", "Use EXACTLY this format:", ""]
    for platform in registry.platforms:
        lines.append(f"{platform.label} <{platform.display_name} prompt>")

    lines += [
        "",
        "Do not add headings, markdown, numbering, or commentary before, between, or after the sections.",
        "Do not use these labels anywhere inside the prompt text.",
    ]
    return "\n".join(lines)


def build_user_prompt(image_count: int, user_guidance: Optional[str] = None, medium: Optional[ImageMediumType] = None,
                      platform_count: int = len(PLATFORM_REGISTRY.platforms)) -> str:
    medium_context = f"\nDetected medium: {medium.value}\n" if medium else ""

    if image_count == 1:
        prompt = f"Analyze this image and extract its visual style characteristics.{medium_context}"
    else:
        prompt = f"Analyze these {image_count} images and extract their COMMON style characteristics.{medium_context}"

    if user_guidance:
        prompt += (
            f'\nUser notes: "{user_guidance}"\n'
            "Pay special attention to the aspects the user mentioned while maintaining focus on style over content.\n"
        )

    if image_count > 1:
        prompt += "\nFocus on style patterns that appear across multiple images, not on what is unique to any single image."

    prompt += f"\nOutput {platform_count} platform-optimized prompts as specified in the format above."
    return prompt


def compose_analysis_prompt(
    image_count: int,
    user_guidance: Optional[str] = None,
    medium: Optional[ImageMediumType] = None,
    registry: PlatformRegistry = PLATFORM_REGISTRY,
) -> str:
    """
    Build the full instruction text for the style analysis pass.

    Args:
        image_count: Number of reference images sent with the request (>= 1)
        user_guidance: Sanitized user notes, if any
        medium: Medium detected by the classification pass, if any
        registry: Platform registry defining the labels to request

    Returns:
        Instruction string: analysis directive, output contract, user prompt
    """
    if image_count < 1:
        raise ValueError("image_count must be at least 1")

    directive = SPECIALIZED_PROMPTS[medium] if medium else STYLE_ANALYSIS_PROMPT
    return "\n\n".join([
        directive,
        build_output_contract(registry, medium),
        STYLE_ONLY_REMINDER,
        build_user_prompt(image_count, user_guidance, medium, len(registry.platforms)),
    ])
