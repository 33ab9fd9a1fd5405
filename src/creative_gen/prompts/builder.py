"""
Prompt assembly for image and video generation.

Pure functions only: a (content type, style, variables) triple always yields the
same prompt, negative prompt and reference-image set. No network, no files.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Iterable, Mapping

from creative_gen.entities import Brand, Product, Talent
from creative_gen.errors import ValidationError
from creative_gen.models import ReferenceImage
from creative_gen.prompts.templates import (
    IMAGE_TEMPLATES,
    QUALITY_MODIFIERS,
    UNIVERSAL_NEGATIVE_PROMPTS,
    VIDEO_TEMPLATES,
    PromptTemplate,
)

# Reference-image caps of the image model.
MAX_REFERENCE_IMAGES = 14
MAX_OBJECT_IMAGES = 6
MAX_HUMAN_IMAGES = 5

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


@dataclass(frozen=True)
class PromptVariables:
    product_name: str | None = None
    product_description: str | None = None
    talent_description: str | None = None
    brand_style: str | None = None
    brand_color: str | None = None
    scene_description: str | None = None
    custom_modifiers: str | None = None
    # video only
    action_description: str | None = None
    duration_hint: str | None = None

    def as_mapping(self) -> dict[str, str]:
        return {k: v for k, v in asdict(self).items() if v}


@dataclass(frozen=True)
class PromptResult:
    prompt: str
    negative_prompt: str
    reference_images: list[ReferenceImage] = field(default_factory=list)


class TemplateVariant(str, Enum):
    BASE = "base"
    WITH_TALENT = "with_talent"
    WITH_PRODUCT = "with_product"


def select_template_variant(template: PromptTemplate, variables: PromptVariables) -> TemplateVariant:
    # Talent description wins over product name when both are present.
    if variables.talent_description and template.with_talent:
        return TemplateVariant.WITH_TALENT
    if variables.product_name and template.with_product:
        return TemplateVariant.WITH_PRODUCT
    return TemplateVariant.BASE


def _variant_body(template: PromptTemplate, variant: TemplateVariant) -> str:
    if variant is TemplateVariant.WITH_TALENT:
        return template.with_talent or template.base
    if variant is TemplateVariant.WITH_PRODUCT:
        return template.with_product or template.base
    return template.base


def substitute_variables(template: str, variables: Mapping[str, str | None]) -> str:
    """
    Fill `{name}` placeholders. Placeholders without a value are deleted rather
    than rendered, then lines are trimmed and blank lines dropped.
    """
    result = _PLACEHOLDER.sub(lambda m: variables.get(m.group(1)) or "", template)
    lines = [ln.strip() for ln in result.split("\n")]
    return "\n".join(ln for ln in lines if ln)


def organize_reference_images(
    images: Iterable[ReferenceImage] | None,
    max_objects: int = MAX_OBJECT_IMAGES,
    max_humans: int = MAX_HUMAN_IMAGES,
    max_total: int = MAX_REFERENCE_IMAGES,
) -> list[ReferenceImage]:
    """
    Split into object (product, brand_logo, style_reference) and human (talent)
    buckets, cap each, then cap the combined objects-first list.
    Input order is kept within a bucket; extras are dropped silently.
    """
    images = list(images or [])
    objects = [img for img in images if not img.is_human][:max_objects]
    humans = [img for img in images if img.is_human][:max_humans]
    return (objects + humans)[:max_total]


def _negative_prompt(template: PromptTemplate, style: str) -> str:
    return f"{template.negative_prompts[style]}, {UNIVERSAL_NEGATIVE_PROMPTS}"


def _lookup(templates: dict[str, PromptTemplate], kind: str, field_name: str) -> PromptTemplate:
    template = templates.get(kind)
    if template is None:
        raise ValidationError(
            f"Unknown {field_name.replace('_', ' ')}: {kind}",
            field=field_name,
            details={"allowed": sorted(templates)},
        )
    return template


def _check_style(template: PromptTemplate, style: str) -> None:
    if style not in template.modifiers:
        raise ValidationError(
            f"style_preset must be one of: {', '.join(template.modifiers)}",
            field="style_preset",
            details={"provided": style},
        )


def build_image_prompt(
    image_type: str,
    variables: PromptVariables,
    style: str,
    include_quality_modifiers: bool = True,
    custom_additions: str | None = None,
) -> PromptResult:
    template = _lookup(IMAGE_TEMPLATES, image_type, "image_type")
    _check_style(template, style)
    values = variables.as_mapping()

    body = substitute_variables(_variant_body(template, select_template_variant(template, variables)), values)
    style_modifier = substitute_variables(template.modifiers[style], values)

    parts = [body, f"\n[STYLE MODIFIERS] {style_modifier}"]
    if include_quality_modifiers:
        parts.append(
            f"\n[QUALITY] {QUALITY_MODIFIERS['high_quality']}, "
            f"{QUALITY_MODIFIERS['photorealistic']}, {QUALITY_MODIFIERS['commercial']}"
        )
    if custom_additions:
        parts.append(f"\n[ADDITIONAL INSTRUCTIONS] {custom_additions}")
    if variables.custom_modifiers:
        parts.append(f"\n[CUSTOM] {variables.custom_modifiers}")

    return PromptResult(prompt="".join(parts), negative_prompt=_negative_prompt(template, style))


def build_video_prompt(
    video_type: str,
    variables: PromptVariables,
    style: str,
    include_quality_modifiers: bool = True,
    custom_additions: str | None = None,
) -> PromptResult:
    template = _lookup(VIDEO_TEMPLATES, video_type, "video_type")
    _check_style(template, style)
    values = variables.as_mapping()

    body = substitute_variables(_variant_body(template, select_template_variant(template, variables)), values)
    style_modifier = substitute_variables(template.modifiers[style], values)

    parts = [body, f"\n[STYLE] {style_modifier}"]
    if include_quality_modifiers:
        parts.append(f"\n[QUALITY] {QUALITY_MODIFIERS['cinematic']}, {QUALITY_MODIFIERS['high_quality']}")
    if variables.action_description:
        parts.append(f"\n[SPECIFIC ACTION] {variables.action_description}")
    if variables.duration_hint:
        parts.append(f"\n[DURATION] {variables.duration_hint}")
    if custom_additions:
        parts.append(f"\n[ADDITIONAL] {custom_additions}")
    if variables.custom_modifiers:
        parts.append(f"\n[CUSTOM] {variables.custom_modifiers}")

    return PromptResult(prompt="".join(parts), negative_prompt=_negative_prompt(template, style))


# ---------------------------------------------------------------------------
# Entity-derived variables
# ---------------------------------------------------------------------------


def extract_brand_style(brand: Brand) -> str:
    profile = brand.voice_profile or {}
    traits = [str(profile[k]) for k in ("tone", "style", "personality") if profile.get(k)]
    return ", ".join(traits) if traits else "modern professional"


def extract_brand_color(brand: Brand) -> str:
    colors = brand.colors or {}
    return colors.get("primary") or colors.get("main") or "brand colors"


def describe_talent(talent: Talent) -> str:
    usage = talent.usage_rights or {}
    parts = [p for p in (talent.name, usage.get("description"), usage.get("appearance"), talent.notes) if p]
    return ", ".join(str(p) for p in parts) if parts else "professional model"


def describe_product(product: Product) -> str:
    parts = [product.name]
    if product.description:
        parts.append(product.description)
    if product.price:
        if product.price > 500:
            band = "premium luxury"
        elif product.price > 100:
            band = "mid-range quality"
        else:
            band = "accessible"
        parts.append(f"{band} product")
    return ", ".join(parts)


def duration_hint(duration_seconds: float) -> str:
    if duration_seconds <= 6:
        return "quick short format, 3-6 seconds, punchy impactful"
    if duration_seconds <= 15:
        return "medium duration, 10-15 seconds, social media optimal"
    return "longer format, 20-30 seconds, detailed storytelling"


def build_reference_images(
    brand: Brand | None = None,
    product: Product | None = None,
    talent: Talent | None = None,
) -> list[ReferenceImage]:
    refs: list[ReferenceImage] = []

    if brand is not None and brand.logo_url:
        refs.append(
            ReferenceImage(
                url=brand.logo_url,
                type="brand_logo",
                description=f"{brand.name} brand logo for style reference",
            )
        )

    if product is not None:
        for idx, url in enumerate(product.images[:2]):
            refs.append(
                ReferenceImage(
                    url=url,
                    type="product",
                    description=f"{product.name} - product reference image {idx + 1}",
                )
            )
        isolated = (product.processed_images or {}).get("background_removed")
        if isolated:
            refs.append(
                ReferenceImage(
                    url=isolated,
                    type="product",
                    description=f"{product.name} - isolated product (background removed)",
                )
            )

    if talent is not None:
        label = talent.name or "talent"
        for idx, url in enumerate(talent.reference_images[:2]):
            refs.append(
                ReferenceImage(
                    url=url,
                    type="talent",
                    description=f"{label} - talent/model reference image {idx + 1}",
                )
            )

    return refs


def _context_variables(
    brand: Brand,
    product: Product | None,
    talent: Talent | None,
    **extra: str | None,
) -> PromptVariables:
    return PromptVariables(
        brand_style=extract_brand_style(brand),
        brand_color=extract_brand_color(brand),
        product_name=product.name if product else None,
        product_description=describe_product(product) if product else None,
        talent_description=describe_talent(talent) if talent else None,
        **extra,
    )


def build_image_prompt_from_context(
    image_type: str,
    style: str,
    brand: Brand,
    product: Product | None = None,
    talent: Talent | None = None,
    scene_description: str | None = None,
    custom_additions: str | None = None,
) -> PromptResult:
    variables = _context_variables(brand, product, talent, scene_description=scene_description)
    result = build_image_prompt(image_type, variables, style, custom_additions=custom_additions)
    return PromptResult(
        prompt=result.prompt,
        negative_prompt=result.negative_prompt,
        reference_images=organize_reference_images(build_reference_images(brand, product, talent)),
    )


def build_video_prompt_from_context(
    video_type: str,
    style: str,
    brand: Brand,
    product: Product | None = None,
    talent: Talent | None = None,
    action_description: str | None = None,
    duration_seconds: float | None = None,
    custom_additions: str | None = None,
) -> PromptResult:
    variables = _context_variables(
        brand,
        product,
        talent,
        action_description=action_description,
        duration_hint=duration_hint(duration_seconds) if duration_seconds else None,
    )
    result = build_video_prompt(video_type, variables, style, custom_additions=custom_additions)
    return PromptResult(
        prompt=result.prompt,
        negative_prompt=result.negative_prompt,
        reference_images=organize_reference_images(build_reference_images(brand, product, talent)),
    )


def build_ad_prompt(
    brand: Brand,
    image_type: str,
    style: str,
    product: Product | None = None,
    talent: Talent | None = None,
    target_audience: str | None = None,
    key_benefits: str | None = None,
    custom_instructions: str | None = None,
    aspect_ratio: str | None = None,
) -> PromptResult:
    """
    Image prompt prefixed with a business-context block (brand, industry,
    audience, voice, benefits) so the model composes with the campaign in mind.
    """
    context = ["# BUSINESS CONTEXT", f"**Brand:** {brand.name}"]
    if brand.industry:
        context.append(f"**Industry:** {brand.industry}")
    if target_audience:
        context.append(f"**Target Audience:** {target_audience}")
    elif brand.target_audience:
        context.append(f"**Target Audience:** {brand.target_audience.get('description') or 'General audience'}")
    context.append(f"**Brand Voice:** {extract_brand_style(brand)}")
    if key_benefits:
        context.append(f"**Key Benefits:** {key_benefits}")

    base = build_image_prompt_from_context(
        image_type, style, brand, product, talent, custom_additions=custom_instructions
    )
    prompt = "\n\n".join(["\n".join(context), "\n# VISUAL GENERATION INSTRUCTIONS", base.prompt])
    if aspect_ratio:
        prompt = f"{prompt}\n\n[ASPECT RATIO] {aspect_ratio} composition required"

    return PromptResult(prompt=prompt, negative_prompt=base.negative_prompt, reference_images=base.reference_images)


def build_product_hero_prompt(
    brand: Brand, product: Product, style: str = "minimal", custom_additions: str | None = None
) -> PromptResult:
    return build_image_prompt_from_context("hero_shot", style, brand, product, custom_additions=custom_additions)


def build_lifestyle_prompt(
    brand: Brand,
    product: Product,
    talent: Talent,
    style: str = "lifestyle",
    scene_description: str | None = None,
    custom_additions: str | None = None,
) -> PromptResult:
    return build_image_prompt_from_context(
        "lifestyle", style, brand, product, talent, scene_description, custom_additions
    )


def build_ugc_video_prompt(
    brand: Brand,
    product: Product,
    talent: Talent,
    style: str = "lifestyle",
    action_description: str | None = None,
    custom_additions: str | None = None,
) -> PromptResult:
    return build_video_prompt_from_context(
        "ugc", style, brand, product, talent, action_description, custom_additions=custom_additions
    )


def build_product_demo_prompt(
    brand: Brand,
    product: Product,
    style: str = "promotional",
    duration_seconds: float | None = None,
    custom_additions: str | None = None,
) -> PromptResult:
    return build_video_prompt_from_context(
        "product_demo", style, brand, product, duration_seconds=duration_seconds, custom_additions=custom_additions
    )
