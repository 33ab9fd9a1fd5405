from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from creative_gen.errors import JobCancelledError, JobFailedError, PollingTimeout, ValidationError
from creative_gen.models import Job, JobStatus
from creative_gen.validation import require_job_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollingBudget:
    interval: float
    max_attempts: int


IMAGE_POLLING = PollingBudget(interval=2.0, max_attempts=30)
# 10 minutes at 5s
VIDEO_POLLING = PollingBudget(interval=5.0, max_attempts=120)


class JobPoller:
    """
    Repeatedly query a job until it reaches a terminal status.

    `fetch_status` is the backend's status lookup. Cancelling the awaiting task
    stops polling; a `PollingTimeout` leaves the remote job running.
    """

    def __init__(
        self,
        fetch_status: Callable[[str], Awaitable[Job]],
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._fetch_status = fetch_status
        self._sleep = sleep

    async def poll_to_completion(self, job_id: str, interval: float, max_attempts: int) -> Job:
        job_id = require_job_id(job_id)
        if max_attempts < 1:
            raise ValidationError("max_attempts must be at least 1", field="max_attempts")
        if interval < 0:
            raise ValidationError("interval cannot be negative", field="interval")

        for attempt in range(1, max_attempts + 1):
            job = await self._fetch_status(job_id)
            logger.debug("Job %s poll %d/%d: %s", job_id, attempt, max_attempts, job.status.value)

            if job.status == JobStatus.COMPLETED:
                logger.info("Job %s completed after %d poll(s)", job_id, attempt)
                return job
            if job.status == JobStatus.FAILED:
                raise JobFailedError(job_id, job.error)
            if job.status == JobStatus.CANCELLED:
                raise JobCancelledError(job_id)

            if attempt < max_attempts:
                await self._sleep(interval)

        logger.warning("Job %s still running after %d polls", job_id, max_attempts)
        raise PollingTimeout(job_id, max_attempts)
