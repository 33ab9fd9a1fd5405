"""Request, job and asset models shared by the generation backends."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

StylePreset = Literal["minimal", "bold", "lifestyle", "promotional"]
ReferenceImageType = Literal["product", "talent", "brand_logo", "style_reference"]

STYLE_PRESET_NAMES: tuple[str, ...] = ("minimal", "bold", "lifestyle", "promotional")


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED})


def can_transition(current: JobStatus, new: JobStatus) -> bool:
    # Terminal states are final; a job may only be re-reported with the same status.
    if current.is_terminal:
        return new == current
    return True


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReferenceImage(BaseModel):
    url: str
    type: ReferenceImageType
    description: str | None = None

    @property
    def is_human(self) -> bool:
        return self.type == "talent"


class OutputFormat(BaseModel):
    name: str
    width: int
    height: int


# Validation lives in creative_gen.validation so that failures name the field;
# the models only describe shape.
class ImageGenerationRequest(BaseModel):
    brand_id: str
    product_id: str | None = None
    talent_id: str | None = None
    prompt: str
    negative_prompt: str | None = None
    style_preset: str | None = None
    output_formats: list[OutputFormat] = Field(default_factory=list)
    variations: int | None = None
    seed: int | None = None
    reference_images: list[ReferenceImage] | None = None
    aspect_ratio: str | None = None


class VideoGenerationRequest(BaseModel):
    brand_id: str
    product_id: str | None = None
    talent_id: str | None = None
    prompt: str
    negative_prompt: str | None = None
    duration: float
    aspect_ratio: str
    style_preset: str | None = None
    reference_images: list[ReferenceImage] | None = None
    seed: int | None = None


class GeneratedImage(BaseModel):
    url: str
    format: OutputFormat
    seed: int
    variation_index: int
    mime_type: str = "image/png"


class GeneratedVideo(BaseModel):
    url: str
    thumbnail_url: str | None = None
    duration: float
    aspect_ratio: str
    seed: int | None = None


class JobMetadata(BaseModel):
    prompt: str
    style_preset: str | None = None
    model_version: str


class Job(BaseModel):
    job_id: str
    status: JobStatus
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    images: list[GeneratedImage] | None = None
    video: GeneratedVideo | None = None
    error: str | None = None
    metadata: JobMetadata

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class CancelResult(BaseModel):
    success: bool
    message: str
