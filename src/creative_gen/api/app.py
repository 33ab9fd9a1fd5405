from __future__ import annotations

import logging
from dataclasses import asdict
from functools import lru_cache
from typing import Any, Literal

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from creative_gen.config import configure_logging
from creative_gen.entities import Brand, Product, Talent
from creative_gen.errors import GenerationError, JobNotFoundError, ValidationError
from creative_gen.models import ImageGenerationRequest, JobStatus, OutputFormat, VideoGenerationRequest, utc_now
from creative_gen.prompts import presets
from creative_gen.prompts.builder import build_image_prompt_from_context, build_video_prompt_from_context
from creative_gen.providers.factory import GenerationClients, get_clients
from creative_gen.providers.gemini_provider import GeminiProvider
from creative_gen.providers.veo_provider import VeoProvider
from creative_gen.storage import JobStore

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="creative_gen generation API")


@lru_cache(maxsize=1)
def get_store() -> JobStore:
    return JobStore()


def _image_client(clients: GenerationClients) -> GeminiProvider:
    if clients.image is None:
        raise HTTPException(status_code=400, detail="GEMINI_API_KEY is not set")
    return clients.image


def _video_client(clients: GenerationClients) -> VeoProvider:
    if clients.video is None:
        raise HTTPException(status_code=400, detail="VEO_API_KEY / VEO_API_URL are not set")
    return clients.video


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError) -> JSONResponse:
    # Provider-side failures without an HTTP status surface as a bad gateway.
    return JSONResponse(status_code=exc.status_code or 502, content={"error": exc.to_dict()})


class GenerateImageBody(BaseModel):
    brand: Brand
    product: Product | None = None
    talent: Talent | None = None
    image_type: str = "hero_shot"
    style_preset: str = "minimal"
    custom_prompt: str | None = None
    scene_description: str | None = None
    output_formats: list[OutputFormat] = Field(default_factory=list)
    # Slugs from presets.OUTPUT_FORMAT_PRESETS, appended to output_formats.
    format_presets: list[str] = Field(default_factory=list)
    variations: int | None = None
    seed: int | None = None
    aspect_ratio: str | None = None


class GenerateVideoBody(BaseModel):
    brand: Brand
    product: Product | None = None
    talent: Talent | None = None
    video_type: str = "product_demo"
    style_preset: str = "promotional"
    duration: float
    aspect_ratio: str
    action_description: str | None = None
    custom_prompt: str | None = None
    music_mood: Literal["upbeat", "calm", "energetic", "professional"] | None = None
    include_captions: bool = False
    seed: int | None = None


def _check_required_entities(kind: str, product: Product | None, talent: Talent | None) -> None:
    if presets.requires_talent(kind) and talent is None:
        raise ValidationError(f"{kind} requires talent", field="talent")
    if presets.requires_product(kind) and product is None:
        raise ValidationError(f"{kind} requires a product", field="product")


def _video_additions(body: GenerateVideoBody) -> str | None:
    parts = [body.custom_prompt] if body.custom_prompt else []
    if body.music_mood:
        parts.append(f"{body.music_mood} background music")
    if body.include_captions:
        parts.append("with on-screen captions")
    return ", ".join(parts) or None


def _resolve_formats(body: GenerateImageBody) -> list[OutputFormat]:
    formats = list(body.output_formats)
    for slug in body.format_presets:
        preset = presets.get_output_format_preset(slug)
        if preset is None:
            raise ValidationError(f"Unknown output format preset: {slug}", field="format_presets")
        formats.append(OutputFormat(name=slug, width=preset.width, height=preset.height))
    return formats


@app.post("/generate/image")
async def generate_image(
    body: GenerateImageBody,
    clients: GenerationClients = Depends(get_clients),
    store: JobStore = Depends(get_store),
) -> dict[str, Any]:
    _check_required_entities(body.image_type, body.product, body.talent)
    built = build_image_prompt_from_context(
        body.image_type,
        body.style_preset,
        body.brand,
        body.product,
        body.talent,
        scene_description=body.scene_description,
        custom_additions=body.custom_prompt,
    )
    request = ImageGenerationRequest(
        brand_id=body.brand.id,
        product_id=body.product.id if body.product else None,
        talent_id=body.talent.id if body.talent else None,
        prompt=built.prompt,
        negative_prompt=built.negative_prompt,
        style_preset=body.style_preset,
        output_formats=_resolve_formats(body),
        variations=body.variations,
        seed=body.seed,
        reference_images=built.reference_images,
        aspect_ratio=body.aspect_ratio,
    )

    gemini = _image_client(clients)
    job = await gemini.submit(request)
    store.save_job(job, "image", gemini.name, request=request.model_dump(mode="json", exclude_none=True))
    return {"job": job.model_dump(mode="json")}


@app.post("/generate/video")
async def generate_video(
    body: GenerateVideoBody,
    clients: GenerationClients = Depends(get_clients),
    store: JobStore = Depends(get_store),
) -> dict[str, Any]:
    _check_required_entities(body.video_type, body.product, body.talent)
    built = build_video_prompt_from_context(
        body.video_type,
        body.style_preset,
        body.brand,
        body.product,
        body.talent,
        action_description=body.action_description,
        duration_seconds=body.duration,
        custom_additions=_video_additions(body),
    )
    # The video service is driven by the prompt alone.
    request = VideoGenerationRequest(
        brand_id=body.brand.id,
        product_id=body.product.id if body.product else None,
        talent_id=body.talent.id if body.talent else None,
        prompt=built.prompt,
        negative_prompt=built.negative_prompt,
        duration=body.duration,
        aspect_ratio=body.aspect_ratio,
        style_preset=body.style_preset,
        seed=body.seed,
    )

    veo = _video_client(clients)
    job = await veo.submit(request)
    store.save_job(job, "video", veo.name, request=request.model_dump(mode="json", exclude_none=True))
    return {"job": job.model_dump(mode="json")}


@app.get("/jobs")
async def list_jobs(kind: str | None = None, store: JobStore = Depends(get_store)) -> dict[str, Any]:
    return {"jobs": [s.to_dict() for s in store.list_jobs(kind)]}


@app.get("/jobs/{job_id}")
async def get_job(
    job_id: str,
    clients: GenerationClients = Depends(get_clients),
    store: JobStore = Depends(get_store),
) -> dict[str, Any]:
    if not store.has_job(job_id):
        raise JobNotFoundError(job_id)
    stored = store.read_job(job_id)

    # Image jobs are terminal when stored; only video jobs move on the provider side.
    if stored.kind == "video" and not stored.job.is_terminal:
        veo = _video_client(clients)
        job = await veo.get_job_status(job_id)
        stored = store.save_job(job, "video", veo.name)
    return stored.to_dict()


@app.post("/jobs/{job_id}/cancel")
async def cancel_job(
    job_id: str,
    clients: GenerationClients = Depends(get_clients),
    store: JobStore = Depends(get_store),
) -> dict[str, Any]:
    if not store.has_job(job_id):
        raise JobNotFoundError(job_id)
    stored = store.read_job(job_id)

    if stored.kind == "image":
        result = await _image_client(clients).cancel_job(job_id)
        return result.model_dump()

    veo = _video_client(clients)
    result = await veo.cancel_job(job_id)
    if result.success and not stored.job.is_terminal:
        cancelled = stored.job.model_copy(update={"status": JobStatus.CANCELLED, "updated_at": utc_now()})
        store.save_job(cancelled, "video", veo.name)
        logger.info("Job %s cancelled", job_id)
    return result.model_dump()


@app.get("/presets")
async def list_presets() -> dict[str, Any]:
    return {
        "output_formats": {k: asdict(v) for k, v in presets.OUTPUT_FORMAT_PRESETS.items()},
        "video_aspect_ratios": {k: asdict(v) for k, v in presets.VIDEO_ASPECT_RATIOS.items()},
        "styles": {k: asdict(v) for k, v in presets.STYLE_PRESETS.items()},
        "image_types": {k: asdict(v) for k, v in presets.IMAGE_TYPES.items()},
        "video_types": {k: asdict(v) for k, v in presets.VIDEO_TYPES.items()},
        "platforms": [asdict(p) for p in presets.PLATFORM_RECOMMENDATIONS],
    }
