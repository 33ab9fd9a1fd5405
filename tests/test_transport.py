import json

import httpx
import pytest

from creative_gen.errors import (
    AuthenticationError,
    JobNotFoundError,
    RateLimitError,
    ServiceError,
    TransportTimeout,
    ValidationError,
)
from creative_gen.transport import TransportClient, TransportConfig, classify


def make_client(handler, sleep, max_retries=3):
    config = TransportConfig(
        api_url="https://veo.example.com/v1",
        api_key="test_key",
        timeout=5,
        max_retries=max_retries,
        base_delay=1.0,
    )
    return TransportClient(config, transport=httpx.MockTransport(handler), sleep=sleep)


class CountingHandler:
    def __init__(self, responder):
        self.calls = []
        self._responder = responder

    def __call__(self, request):
        self.calls.append(request)
        return self._responder(request, len(self.calls))


class TestRetries:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_retries", [0, 1, 3])
    async def test_permanent_503_makes_n_plus_one_attempts(self, sleep, max_retries):
        handler = CountingHandler(lambda req, n: httpx.Response(503, json={"error": {"message": "down"}}))
        client = make_client(handler, sleep, max_retries=max_retries)

        with pytest.raises(ServiceError) as exc_info:
            await client.request("/jobs/job_1")

        assert len(handler.calls) == max_retries + 1
        assert exc_info.value.status_code == 503
        assert exc_info.value.code == "HTTP_503"
        # linear backoff: 1s, 2s, 3s ...
        assert sleep.delays == [float(i + 1) for i in range(max_retries)]

    @pytest.mark.asyncio
    async def test_recovers_after_server_errors(self, sleep):
        def respond(req, n):
            if n < 3:
                return httpx.Response(502)
            return httpx.Response(200, json={"job_id": "job_1", "status": "processing"})

        handler = CountingHandler(respond)
        data = await make_client(handler, sleep).request("/jobs/job_1")

        assert data["status"] == "processing"
        assert len(handler.calls) == 3

    @pytest.mark.asyncio
    async def test_rate_limit_honours_retry_after(self, sleep):
        def respond(req, n):
            if n == 1:
                return httpx.Response(429, headers={"Retry-After": "7"})
            return httpx.Response(200, json={"ok": True})

        await make_client(CountingHandler(respond), sleep).request("/generate/video", method="POST", body={})
        assert sleep.delays == [7.0]

    @pytest.mark.asyncio
    async def test_rate_limit_exhausted(self, sleep):
        handler = CountingHandler(lambda req, n: httpx.Response(429, headers={"Retry-After": "2"}))
        with pytest.raises(RateLimitError) as exc_info:
            await make_client(handler, sleep, max_retries=1).request("/jobs/job_1")
        assert exc_info.value.retry_after == 2.0
        assert len(handler.calls) == 2

    @pytest.mark.asyncio
    async def test_timeouts_are_retried_then_raised(self, sleep):
        def respond(req, n):
            raise httpx.ReadTimeout("slow", request=req)

        handler = CountingHandler(respond)
        with pytest.raises(TransportTimeout) as exc_info:
            await make_client(handler, sleep, max_retries=2).request("/jobs/job_1")
        assert exc_info.value.details == {"endpoint": "/jobs/job_1"}
        assert len(handler.calls) == 3

    @pytest.mark.asyncio
    async def test_network_error(self, sleep):
        def respond(req, n):
            raise httpx.ConnectError("refused", request=req)

        with pytest.raises(ServiceError) as exc_info:
            await make_client(CountingHandler(respond), sleep, max_retries=0).request("/jobs/job_1")
        assert exc_info.value.code == "NETWORK_ERROR"


class TestNonRetryable:
    @pytest.mark.asyncio
    async def test_unauthorized(self, sleep):
        handler = CountingHandler(lambda req, n: httpx.Response(401, json={"error": {"message": "bad key"}}))
        with pytest.raises(AuthenticationError, match="bad key"):
            await make_client(handler, sleep).request("/jobs/job_1")
        assert len(handler.calls) == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_bad_request_keeps_provider_details(self, sleep):
        body = {"error": {"code": "INVALID", "message": "prompt too long", "details": {"limit": 2000}}}
        handler = CountingHandler(lambda req, n: httpx.Response(400, json=body))
        with pytest.raises(ValidationError) as exc_info:
            await make_client(handler, sleep).request("/generate/video", method="POST", body={})
        assert exc_info.value.message == "prompt too long"
        assert exc_info.value.details == {"limit": 2000}

    @pytest.mark.asyncio
    async def test_404_on_job_endpoint(self, sleep):
        handler = CountingHandler(lambda req, n: httpx.Response(404))
        with pytest.raises(JobNotFoundError) as exc_info:
            await make_client(handler, sleep).request("/jobs/job_42/cancel", method="POST")
        assert exc_info.value.job_id == "job_42"

    @pytest.mark.asyncio
    async def test_404_elsewhere(self, sleep):
        handler = CountingHandler(lambda req, n: httpx.Response(404))
        with pytest.raises(ServiceError) as exc_info:
            await make_client(handler, sleep).request("/generate/video", method="POST", body={})
        assert exc_info.value.code == "HTTP_404"
        assert len(handler.calls) == 1

    @pytest.mark.asyncio
    async def test_non_json_success(self, sleep):
        handler = CountingHandler(lambda req, n: httpx.Response(200, text="<html>ok</html>"))
        with pytest.raises(ServiceError) as exc_info:
            await make_client(handler, sleep).request("/jobs/job_1")
        assert exc_info.value.code == "INVALID_RESPONSE"


@pytest.mark.asyncio
async def test_request_shape(sleep):
    handler = CountingHandler(lambda req, n: httpx.Response(200, json={"ok": True}))
    await make_client(handler, sleep).request("/generate/video", method="POST", body={"prompt": "x"})

    sent = handler.calls[0]
    assert str(sent.url) == "https://veo.example.com/v1/generate/video"
    assert sent.headers["Authorization"] == "Bearer test_key"
    assert sent.headers["Content-Type"] == "application/json"
    assert json.loads(sent.content) == {"prompt": "x"}


def test_classify_success_needs_no_retry():
    decision = classify(httpx.Response(200, json={}), "/jobs/a", 0, 3, 1.0)
    assert decision.retry is False
    assert decision.error is None


def test_classify_stops_at_budget():
    response = httpx.Response(500)
    assert classify(response, "/jobs/a", 2, 3, 0.5).retry is True
    assert classify(response, "/jobs/a", 2, 3, 0.5).delay == 1.5
    assert classify(response, "/jobs/a", 3, 3, 0.5).retry is False


@pytest.mark.parametrize("attempt", [0, 3])
def test_classify_transport_failure_always_carries_an_error(attempt):
    exc = httpx.ConnectError("refused", request=httpx.Request("GET", "https://veo.example.com/jobs/a"))
    decision = classify(exc, "/jobs/a", attempt, 3, 1.0)
    assert decision.error is not None
    assert decision.error.code == "NETWORK_ERROR"
    assert decision.retry is (attempt < 3)


@pytest.mark.asyncio
async def test_empty_success_body_is_rejected(sleep):
    client = make_client(lambda req: httpx.Response(204), sleep)
    with pytest.raises(ServiceError) as exc_info:
        await client.request("/jobs/a")
    assert exc_info.value.code == "INVALID_RESPONSE"
