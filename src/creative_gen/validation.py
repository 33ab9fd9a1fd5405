"""
Pre-flight checks for generation requests.

Every check runs before any network access and raises `ValidationError`
naming the first violated field. Nothing here is retried.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from creative_gen.errors import ValidationError
from creative_gen.models import STYLE_PRESET_NAMES, ImageGenerationRequest, VideoGenerationRequest


@dataclass(frozen=True)
class ProviderLimits:
    max_variations: int
    aspect_ratios: tuple[str, ...]
    max_duration_seconds: float | None = None
    # None means oversized reference lists are truncated downstream, not rejected.
    max_reference_images: int | None = None


IMAGE_LIMITS = ProviderLimits(
    max_variations=4,
    aspect_ratios=("1:1", "2:3", "3:2", "3:4", "4:3", "4:5", "5:4", "9:16", "16:9", "21:9"),
)

VIDEO_LIMITS = ProviderLimits(
    max_variations=1,
    aspect_ratios=("16:9", "9:16", "1:1", "4:5"),
    max_duration_seconds=300,
    max_reference_images=5,
)


def require_job_id(job_id: str | None) -> str:
    if not job_id or not job_id.strip():
        raise ValidationError("jobId is required", field="job_id")
    return job_id.strip()


def _require_brand_and_prompt(brand_id: str | None, prompt: str | None) -> None:
    if not brand_id or not brand_id.strip():
        raise ValidationError("brand_id is required", field="brand_id")
    if not prompt or not prompt.strip():
        raise ValidationError("prompt is required and cannot be empty", field="prompt")


def _check_style(style_preset: str | None) -> None:
    if style_preset is not None and style_preset not in STYLE_PRESET_NAMES:
        raise ValidationError(
            f"style_preset must be one of: {', '.join(STYLE_PRESET_NAMES)}",
            field="style_preset",
            details={"provided": style_preset},
        )


def _check_aspect_ratio(aspect_ratio: str, limits: ProviderLimits) -> None:
    if aspect_ratio not in limits.aspect_ratios:
        raise ValidationError(
            f"aspect_ratio must be one of: {', '.join(limits.aspect_ratios)}",
            field="aspect_ratio",
            details={"provided": aspect_ratio, "allowed": list(limits.aspect_ratios)},
        )


def validate_image_request(request: ImageGenerationRequest, limits: ProviderLimits = IMAGE_LIMITS) -> None:
    _require_brand_and_prompt(request.brand_id, request.prompt)

    if not request.output_formats:
        raise ValidationError("At least one output format is required", field="output_formats")
    for idx, fmt in enumerate(request.output_formats):
        if not fmt.name or not fmt.name.strip():
            raise ValidationError(f"output_formats[{idx}].name is required", field=f"output_formats[{idx}].name")
        if fmt.width < 1:
            raise ValidationError(
                f"output_formats[{idx}].width must be a positive number", field=f"output_formats[{idx}].width"
            )
        if fmt.height < 1:
            raise ValidationError(
                f"output_formats[{idx}].height must be a positive number", field=f"output_formats[{idx}].height"
            )

    if request.variations is not None and not (1 <= request.variations <= limits.max_variations):
        raise ValidationError(
            f"variations must be between 1 and {limits.max_variations}",
            field="variations",
            details={"provided": request.variations},
        )

    _check_style(request.style_preset)
    if request.aspect_ratio is not None:
        _check_aspect_ratio(request.aspect_ratio, limits)

    if request.seed is not None and request.seed < 0:
        raise ValidationError("seed must be a non-negative integer", field="seed")

    if limits.max_reference_images is not None and len(request.reference_images or []) > limits.max_reference_images:
        raise ValidationError(
            f"Cannot provide more than {limits.max_reference_images} reference images",
            field="reference_images",
        )


def validate_video_request(request: VideoGenerationRequest, limits: ProviderLimits = VIDEO_LIMITS) -> None:
    _require_brand_and_prompt(request.brand_id, request.prompt)

    if not request.duration or not math.isfinite(request.duration) or request.duration <= 0:
        raise ValidationError("duration must be a positive number", field="duration")
    if limits.max_duration_seconds is not None and request.duration > limits.max_duration_seconds:
        max_s = limits.max_duration_seconds
        raise ValidationError(
            f"duration cannot exceed {max_s:g} seconds ({max_s / 60:g} minutes)",
            field="duration",
            details={"provided": request.duration, "max": max_s},
        )

    if not request.aspect_ratio:
        raise ValidationError("aspect_ratio is required", field="aspect_ratio")
    _check_aspect_ratio(request.aspect_ratio, limits)

    _check_style(request.style_preset)

    if limits.max_reference_images is not None and len(request.reference_images or []) > limits.max_reference_images:
        raise ValidationError(
            f"Cannot provide more than {limits.max_reference_images} reference images",
            field="reference_images",
            details={"provided": len(request.reference_images or [])},
        )


def validate(request: ImageGenerationRequest | VideoGenerationRequest) -> None:
    if isinstance(request, VideoGenerationRequest):
        validate_video_request(request)
    else:
        validate_image_request(request)
