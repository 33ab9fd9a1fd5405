from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from creative_gen.errors import ServiceError, ValidationError
from creative_gen.models import CancelResult, ImageGenerationRequest, Job, VideoGenerationRequest
from creative_gen.polling import VIDEO_POLLING, JobPoller, PollingBudget
from creative_gen.transport import TransportClient, TransportConfig
from creative_gen.validation import require_job_id, validate_video_request

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


@dataclass(frozen=True)
class VeoConfig:
    api_key: str
    api_url: str
    model_version: str = "veo-3.1"
    max_retries: int = 3
    retry_delay: float = 1.0
    # Video jobs are slow to accept; this is per HTTP attempt.
    timeout: float = 120.0
    polling: PollingBudget = VIDEO_POLLING

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("VEO API key is required")
        if not self.api_url:
            raise ValueError("VEO API URL is required")

    def transport_config(self) -> TransportConfig:
        return TransportConfig(
            api_url=self.api_url,
            api_key=self.api_key,
            timeout=self.timeout,
            max_retries=self.max_retries,
            base_delay=self.retry_delay,
        )


class VeoProvider:
    """Asynchronous video backend: submit returns a pending job that is polled."""

    name = "veo"

    def __init__(
        self,
        config: VeoConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self._client = TransportClient(config.transport_config(), transport=transport, sleep=sleep)
        self._poller = JobPoller(self.get_job_status, sleep=sleep)

    async def generate_video(self, request: VideoGenerationRequest) -> Job:
        validate_video_request(request)
        data = await self._client.request(
            "/generate/video",
            method="POST",
            body=request.model_dump(mode="json", exclude_none=True),
        )
        job = _parse(Job, data, "/generate/video")
        logger.info(
            "Submitted video job %s to %s (%s, %gs)",
            job.job_id,
            self.config.model_version,
            request.aspect_ratio,
            request.duration,
        )
        return job

    async def submit(self, request: ImageGenerationRequest | VideoGenerationRequest) -> Job:
        if not isinstance(request, VideoGenerationRequest):
            raise ValidationError("The video backend only accepts video requests", field="request")
        return await self.generate_video(request)

    async def get_job_status(self, job_id: str) -> Job:
        job_id = require_job_id(job_id)
        endpoint = f"/jobs/{job_id}"
        return _parse(Job, await self._client.request(endpoint), endpoint)

    async def cancel_job(self, job_id: str) -> CancelResult:
        job_id = require_job_id(job_id)
        endpoint = f"/jobs/{job_id}/cancel"
        result = _parse(CancelResult, await self._client.request(endpoint, method="POST"), endpoint)
        logger.info("Cancel requested for job %s: %s", job_id, result.message)
        return result

    async def poll_job_completion(
        self,
        job_id: str,
        interval: float | None = None,
        max_attempts: int | None = None,
    ) -> Job:
        budget = self.config.polling
        return await self._poller.poll_to_completion(
            job_id,
            interval=budget.interval if interval is None else interval,
            max_attempts=budget.max_attempts if max_attempts is None else max_attempts,
        )


def _parse(model: type[_M], data: dict[str, Any], endpoint: str) -> _M:
    try:
        return model.model_validate(data)
    except ModelValidationError as exc:
        raise ServiceError(
            "Provider response did not match the expected shape",
            "INVALID_RESPONSE",
            None,
            {"endpoint": endpoint, "fields": [".".join(map(str, e["loc"])) for e in exc.errors()]},
            retryable=False,
        ) from exc
