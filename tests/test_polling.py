import asyncio

import pytest

from creative_gen.errors import JobCancelledError, JobFailedError, PollingTimeout, ValidationError
from creative_gen.models import Job, JobMetadata, JobStatus
from creative_gen.polling import IMAGE_POLLING, VIDEO_POLLING, JobPoller


def _job(status, error=None):
    return Job(
        job_id="job_1",
        status=status,
        error=error,
        metadata=JobMetadata(prompt="p", model_version="veo-3.1"),
    )


class ScriptedStatus:
    """Returns `processing` for the first `k` queries, then `final`."""

    def __init__(self, k, final=JobStatus.COMPLETED, error=None):
        self.k = k
        self.final = final
        self.error = error
        self.calls = 0

    async def __call__(self, job_id):
        self.calls += 1
        if self.calls <= self.k:
            return _job(JobStatus.PROCESSING)
        return _job(self.final, self.error)


class TestJobPoller:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("k", [0, 1, 4])
    async def test_returns_on_attempt_k_plus_one(self, sleep, k):
        fetch = ScriptedStatus(k)
        job = await JobPoller(fetch, sleep=sleep).poll_to_completion("job_1", interval=2, max_attempts=10)

        assert job.status == JobStatus.COMPLETED
        assert fetch.calls == k + 1
        assert sleep.delays == [2] * k

    @pytest.mark.asyncio
    async def test_timeout_after_exactly_max_attempts(self, sleep):
        fetch = ScriptedStatus(k=1000)
        with pytest.raises(PollingTimeout) as exc_info:
            await JobPoller(fetch, sleep=sleep).poll_to_completion("job_1", interval=5, max_attempts=4)

        assert fetch.calls == 4
        assert exc_info.value.attempts == 4
        # no sleep after the final query
        assert len(sleep.delays) == 3

    @pytest.mark.asyncio
    async def test_failed_job(self, sleep):
        fetch = ScriptedStatus(1, final=JobStatus.FAILED, error="content policy")
        with pytest.raises(JobFailedError, match="content policy"):
            await JobPoller(fetch, sleep=sleep).poll_to_completion("job_1", interval=1, max_attempts=5)

    @pytest.mark.asyncio
    async def test_cancelled_job(self, sleep):
        fetch = ScriptedStatus(0, final=JobStatus.CANCELLED)
        with pytest.raises(JobCancelledError):
            await JobPoller(fetch, sleep=sleep).poll_to_completion("job_1", interval=1, max_attempts=5)

    @pytest.mark.asyncio
    async def test_rejects_empty_job_id_without_querying(self, sleep):
        fetch = ScriptedStatus(0)
        with pytest.raises(ValidationError):
            await JobPoller(fetch, sleep=sleep).poll_to_completion("", interval=1, max_attempts=5)
        assert fetch.calls == 0

    @pytest.mark.asyncio
    async def test_rejects_zero_attempts(self, sleep):
        with pytest.raises(ValidationError) as exc_info:
            await JobPoller(ScriptedStatus(0), sleep=sleep).poll_to_completion("job_1", interval=1, max_attempts=0)
        assert exc_info.value.field == "max_attempts"

    @pytest.mark.asyncio
    async def test_caller_cancellation_stops_polling(self):
        fetch = ScriptedStatus(k=1000)
        sleeping = asyncio.Event()

        async def wait_forever(seconds):
            sleeping.set()
            await asyncio.Future()

        poller = JobPoller(fetch, sleep=wait_forever)
        task = asyncio.create_task(poller.poll_to_completion("job_1", interval=5, max_attempts=10))
        await sleeping.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        await asyncio.sleep(0)
        assert fetch.calls == 1


def test_default_budgets():
    assert (IMAGE_POLLING.interval, IMAGE_POLLING.max_attempts) == (2.0, 30)
    assert (VIDEO_POLLING.interval, VIDEO_POLLING.max_attempts) == (5.0, 120)
