from __future__ import annotations

from typing import Protocol, runtime_checkable

from creative_gen.models import CancelResult, ImageGenerationRequest, Job, VideoGenerationRequest


@runtime_checkable
class GenerationJobClient(Protocol):
    """
    Uniform job contract over backends with different execution models.

    A synchronous backend finishes inside `submit` and returns a terminal Job;
    an asynchronous one returns a pending Job to be polled.
    """

    name: str

    async def submit(self, request: ImageGenerationRequest | VideoGenerationRequest) -> Job: ...

    async def get_job_status(self, job_id: str) -> Job: ...

    async def cancel_job(self, job_id: str) -> CancelResult: ...

    async def poll_job_completion(
        self,
        job_id: str,
        interval: float | None = None,
        max_attempts: int | None = None,
    ) -> Job: ...
