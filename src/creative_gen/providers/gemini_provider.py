from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import random
import re
import time
import uuid
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Awaitable, Callable

import httpx
from PIL import Image, UnidentifiedImageError

from creative_gen.errors import (
    AuthenticationError,
    GenerationError,
    LookupNotSupportedError,
    RateLimitError,
    ServiceError,
    TransportTimeout,
    ValidationError,
)
from creative_gen.models import (
    CancelResult,
    GeneratedImage,
    ImageGenerationRequest,
    Job,
    JobMetadata,
    JobStatus,
    OutputFormat,
    ReferenceImage,
    VideoGenerationRequest,
    utc_now,
)
from creative_gen.polling import IMAGE_POLLING, PollingBudget
from creative_gen.prompts.builder import organize_reference_images
from creative_gen.transport import backoff_delay
from creative_gen.validation import require_job_id, validate_image_request

logger = logging.getLogger(__name__)

_DATA_URL = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)

# Ratios the image model understands natively, tried in this order.
_KNOWN_RATIOS: list[tuple[str, float]] = [
    ("1:1", 1.0),
    ("16:9", 16 / 9),
    ("9:16", 9 / 16),
    ("4:3", 4 / 3),
    ("3:4", 3 / 4),
    ("3:2", 3 / 2),
    ("2:3", 2 / 3),
]

_ASPECT_DESCRIPTIONS = {
    "1:1": "Square format for Instagram feed and Facebook",
    "16:9": "Horizontal/landscape for feed posts and desktop",
    "9:16": "Vertical/portrait for Instagram Stories, Reels, TikTok",
    "4:3": "Standard horizontal format",
    "3:4": "Vertical format for Pinterest",
    "4:5": "Vertical format for Instagram portrait",
    "5:4": "Slightly horizontal format",
    "3:2": "Classic photo ratio horizontal",
    "2:3": "Classic photo ratio vertical",
}


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    model: str = "gemini-3-pro-image-preview"
    max_retries: int = 3
    retry_delay: float = 1.0
    reference_fetch_timeout: float = 30.0
    # Only used for the interface; the backend never has anything to poll.
    polling: PollingBudget = IMAGE_POLLING

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("Gemini API key is required")


@dataclass(frozen=True)
class _LoadedReference:
    ref: ReferenceImage
    data: bytes
    mime_type: str


class GeminiProvider:
    """
    Image backend on a synchronous model.

    `submit` runs every generation call before returning, so the Job it returns
    is already terminal. There is no remote job to look up or cancel afterwards.
    """

    name = "gemini"

    def __init__(
        self,
        config: GeminiConfig,
        client: Any | None = None,
        fetcher_transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.config = config
        if client is None:
            # Imported lazily so the app can start without the dependency installed.
            from google import genai  # type: ignore

            client = genai.Client(api_key=config.api_key)
        self.client = client
        self._fetcher_transport = fetcher_transport
        self._sleep = sleep

    async def generate_image(self, request: ImageGenerationRequest) -> Job:
        validate_image_request(request)

        job_id = _new_job_id()
        started = utc_now()
        variations = request.variations or 1
        metadata = JobMetadata(
            prompt=request.prompt,
            style_preset=request.style_preset or "minimal",
            model_version=self.config.model,
        )
        logger.info(
            "Image job %s: %d variation(s) x %d format(s), %d reference image(s)",
            job_id,
            variations,
            len(request.output_formats),
            len(request.reference_images or []),
        )

        try:
            references = await self._load_references(organize_reference_images(request.reference_images))
            seed = request.seed if request.seed is not None else random.randint(0, 999_999)

            images: list[GeneratedImage] = []
            for var_index in range(variations):
                for fmt in request.output_formats:
                    aspect_ratio = request.aspect_ratio or _aspect_ratio_for(fmt.width, fmt.height)
                    prompt = _compose_prompt(request.prompt, aspect_ratio, var_index, variations)
                    data, mime_type = await self._generate_single(
                        prompt, aspect_ratio, _image_resolution(fmt.width, fmt.height), references
                    )
                    images.append(
                        GeneratedImage(
                            url=_to_data_url(data, mime_type),
                            format=OutputFormat(name=fmt.name, width=fmt.width, height=fmt.height),
                            seed=seed + var_index,
                            variation_index=var_index,
                            mime_type=mime_type,
                        )
                    )
        except GenerationError as exc:
            logger.warning("Image job %s failed: %s (%s)", job_id, exc.message, exc.code)
            return Job(
                job_id=job_id,
                status=JobStatus.FAILED,
                created_at=started,
                updated_at=utc_now(),
                error=exc.message,
                metadata=metadata,
            )

        logger.info("Image job %s completed with %d image(s)", job_id, len(images))
        return Job(
            job_id=job_id,
            status=JobStatus.COMPLETED,
            created_at=started,
            updated_at=utc_now(),
            images=images,
            metadata=metadata,
        )

    async def submit(self, request: ImageGenerationRequest | VideoGenerationRequest) -> Job:
        if not isinstance(request, ImageGenerationRequest):
            raise ValidationError("The image backend only accepts image requests", field="request")
        return await self.generate_image(request)

    async def get_job_status(self, job_id: str) -> Job:
        job_id = require_job_id(job_id)
        raise LookupNotSupportedError(job_id)

    async def cancel_job(self, job_id: str) -> CancelResult:
        require_job_id(job_id)
        return CancelResult(success=False, message="Cancellation not supported - Gemini generates synchronously")

    async def poll_job_completion(
        self,
        job_id: str,
        interval: float | None = None,
        max_attempts: int | None = None,
    ) -> Job:
        # Jobs are terminal on return from submit; use the stored snapshot.
        return await self.get_job_status(job_id)

    async def _generate_single(
        self,
        prompt: str,
        aspect_ratio: str,
        image_size: str,
        references: list[_LoadedReference],
    ) -> tuple[bytes, str]:
        from google.genai import types  # type: ignore

        parts: list[Any] = []
        for loaded in references:
            label = loaded.ref.type.upper()
            if loaded.ref.description:
                parts.append(types.Part.from_text(text=f"[{label} IMAGE: {loaded.ref.description}]"))
            else:
                parts.append(types.Part.from_text(text=f"[{label} REFERENCE IMAGE]"))
            parts.append(types.Part.from_bytes(data=loaded.data, mime_type=loaded.mime_type))
        parts.append(types.Part.from_text(text=prompt))

        config = types.GenerateContentConfig(
            response_modalities=["TEXT", "IMAGE"],
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio, image_size=image_size),
        )

        attempt = 0
        while True:
            logger.debug(
                "generate_content model=%s ratio=%s size=%s refs=%d (attempt %d)",
                self.config.model,
                aspect_ratio,
                image_size,
                len(references),
                attempt + 1,
            )
            try:
                resp = await self.client.aio.models.generate_content(
                    model=self.config.model,
                    contents=parts,
                    config=config,
                )
            except Exception as exc:
                error = _classify_sdk_error(exc)
                if not error.retryable or attempt >= self.config.max_retries:
                    raise error from exc
                delay = backoff_delay(self.config.retry_delay, attempt)
                logger.info("Image model %s, retrying in %.1fs (%d/%d)", error.code, delay, attempt + 1, self.config.max_retries)
                await self._sleep(delay)
                attempt += 1
                continue

            extracted = _extract_images_from_generate_content(resp)
            if not extracted:
                raise ServiceError("No image in response", "NO_IMAGE_GENERATED", retryable=False)
            return extracted[0]

    async def _load_references(self, refs: list[ReferenceImage]) -> list[_LoadedReference]:
        """Resolve reference URLs to bytes. Unreadable images are skipped."""
        if not refs:
            return []
        loaded: list[_LoadedReference] = []
        async with httpx.AsyncClient(
            timeout=self.config.reference_fetch_timeout,
            transport=self._fetcher_transport,
            follow_redirects=True,
        ) as client:
            for ref in refs:
                item = await _load_reference(client, ref)
                if item is not None:
                    loaded.append(item)
        return loaded


async def _load_reference(client: httpx.AsyncClient, ref: ReferenceImage) -> _LoadedReference | None:
    if ref.url.startswith("data:"):
        match = _DATA_URL.match(ref.url)
        if not match:
            logger.warning("Skipping malformed data URL reference (%s)", ref.type)
            return None
        try:
            data = base64.b64decode(match.group(2), validate=True)
        except binascii.Error:
            logger.warning("Skipping reference with invalid base64 payload (%s)", ref.type)
            return None
        return _LoadedReference(ref, data, match.group(1))

    try:
        resp = await client.get(ref.url)
    except httpx.HTTPError as exc:
        logger.warning("Skipping reference %s: %s", ref.url, exc)
        return None
    if not resp.is_success:
        logger.warning("Skipping reference %s: HTTP %d", ref.url, resp.status_code)
        return None
    mime_type = resp.headers.get("content-type", "image/jpeg").split(";")[0].strip()
    return _LoadedReference(ref, resp.content, mime_type)


def _new_job_id() -> str:
    return f"gemini_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _aspect_ratio_for(width: int, height: int) -> str:
    ratio = width / height
    for name, value in _KNOWN_RATIOS:
        if abs(ratio - value) < 0.1:
            return name
    if ratio > 1:
        return "16:9"
    if ratio < 1:
        return "9:16"
    return "1:1"


def _aspect_description(aspect_ratio: str) -> str:
    return _ASPECT_DESCRIPTIONS.get(aspect_ratio, "Custom aspect ratio")


def _image_resolution(width: int, height: int) -> str:
    longest = max(width, height)
    if longest >= 3840:
        return "4K"
    if longest >= 1920:
        return "2K"
    return "1K"


def _compose_prompt(prompt: str, aspect_ratio: str, var_index: int, variations: int) -> str:
    out = f"{prompt}\n\n[COMPOSITION: {aspect_ratio} {_aspect_description(aspect_ratio)} composition]"
    if variations > 1:
        out = f"{out}\n\n[VARIATION {var_index + 1} of {variations}]"
    return out


def _to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def _classify_sdk_error(exc: Exception) -> GenerationError:
    if isinstance(exc, GenerationError):
        return exc
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return TransportTimeout("generate_content", message="Image generation timed out")
    if isinstance(exc, httpx.TransportError):
        return ServiceError(f"Network error: {exc}", "NETWORK_ERROR", None, {"original_error": str(exc)})

    from google.genai import errors as genai_errors  # type: ignore

    if isinstance(exc, genai_errors.APIError):
        message = exc.message or str(exc)
        if exc.code == 429:
            return RateLimitError(message)
        if exc.code in (401, 403):
            return AuthenticationError(message)
        if exc.code == 400:
            return ValidationError(message, details={"status": exc.status})
        return ServiceError(
            message,
            exc.status or f"HTTP_{exc.code}",
            exc.code,
            retryable=500 <= exc.code < 600,
        )

    return ServiceError(str(exc) or "Image generation failed", "GENERATION_FAILED", retryable=False)


def _extract_images_from_generate_content(resp: Any) -> list[tuple[bytes, str]]:
    # The model may emit thinking text before the image; only inline image parts count.
    out: list[tuple[bytes, str]] = []
    for cand in getattr(resp, "candidates", []) or []:
        content = getattr(cand, "content", None)
        parts = getattr(content, "parts", None) or []
        for part in parts:
            inline = getattr(part, "inline_data", None)
            if not inline:
                continue
            mime = getattr(inline, "mime_type", None) or ""
            data = getattr(inline, "data", None)
            if not data:
                continue
            if mime and not mime.startswith("image/"):
                continue
            try:
                img = Image.open(BytesIO(data))
            except UnidentifiedImageError:
                logger.warning("Discarding undecodable image part (%s)", mime or "no mime type")
                continue
            if not mime:
                mime = Image.MIME.get(img.format or "", "image/png")
            out.append((data, mime))
    return out
