"""
JSON-over-HTTPS client with retry and backoff.

The retry policy is a plain function, `classify`, that looks at one attempt's
outcome (a response or a transport exception) and returns a `RetryDecision`.
`TransportClient.request` is a flat loop around it.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx

from creative_gen.errors import (
    AuthenticationError,
    GenerationError,
    JobNotFoundError,
    RateLimitError,
    ServiceError,
    TransportTimeout,
    ValidationError,
)

logger = logging.getLogger(__name__)

_JOB_ENDPOINT = re.compile(r"/jobs/([^/]+)")


@dataclass(frozen=True)
class TransportConfig:
    api_url: str
    api_key: str
    timeout: float = 120.0
    max_retries: int = 3
    # seconds; attempt n waits base_delay * (n + 1)
    base_delay: float = 1.0


@dataclass(frozen=True)
class RetryDecision:
    retry: bool
    delay: float = 0.0
    error: GenerationError | None = None


def backoff_delay(base_delay: float, attempt: int) -> float:
    return base_delay * (attempt + 1)


def _retry_after_seconds(response: httpx.Response) -> float | None:
    raw = response.headers.get("Retry-After")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _error_payload(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"]
    return {}


def error_for_response(response: httpx.Response, endpoint: str) -> GenerationError:
    """Map a non-2xx response to the matching typed error."""
    payload = _error_payload(response)
    status = response.status_code
    message = payload.get("message") or response.reason_phrase or f"HTTP {status}"
    code = payload.get("code") or f"HTTP_{status}"
    details = payload.get("details") if isinstance(payload.get("details"), dict) else None

    if status == 401:
        return AuthenticationError(message)
    if status == 400:
        return ValidationError(message, details=details)
    if status == 404:
        match = _JOB_ENDPOINT.search(endpoint)
        if match:
            return JobNotFoundError(match.group(1))
        return ServiceError(message, code, 404, details, retryable=False)
    if status == 429:
        return RateLimitError(message, retry_after=_retry_after_seconds(response))
    if 500 <= status < 600:
        return ServiceError(message, code, status, details, retryable=True)
    return ServiceError(message, code, status, details, retryable=False)


def error_for_exception(exc: httpx.TransportError, endpoint: str) -> GenerationError:
    if isinstance(exc, httpx.TimeoutException):
        return TransportTimeout(endpoint)
    return ServiceError(
        f"Network error: {exc}",
        "NETWORK_ERROR",
        None,
        {"endpoint": endpoint, "original_error": str(exc)},
        retryable=True,
    )


def classify(
    outcome: httpx.Response | httpx.TransportError,
    endpoint: str,
    attempt: int,
    max_retries: int,
    base_delay: float,
) -> RetryDecision:
    """
    Decide what to do after attempt number `attempt` (0-based).

    A successful response yields `RetryDecision(retry=False, error=None)`.
    Otherwise `error` is the typed error to raise if no retry follows.
    """
    if isinstance(outcome, httpx.Response):
        if outcome.is_success:
            return RetryDecision(retry=False)
        error = error_for_response(outcome, endpoint)
    else:
        error = error_for_exception(outcome, endpoint)

    if not error.retryable or attempt >= max_retries:
        return RetryDecision(retry=False, error=error)

    delay = backoff_delay(base_delay, attempt)
    if isinstance(error, RateLimitError) and error.retry_after is not None:
        delay = error.retry_after
    return RetryDecision(retry=True, delay=delay, error=error)


class TransportClient:
    def __init__(
        self,
        config: TransportConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self._transport = transport
        self._sleep = sleep

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    async def _send(self, method: str, url: str, body: dict[str, Any] | None) -> httpx.Response:
        # One client per call keeps the instance free of connection state.
        async with httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport) as client:
            return await client.request(method, url, json=body, headers=self._headers())

    async def request(self, endpoint: str, method: str = "GET", body: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.config.api_url.rstrip('/')}{endpoint}"
        attempt = 0
        while True:
            logger.debug("%s %s (attempt %d)", method, endpoint, attempt + 1)
            try:
                response = await self._send(method, url, body)
            except httpx.TransportError as exc:
                decision = classify(exc, endpoint, attempt, self.config.max_retries, self.config.base_delay)
            else:
                decision = classify(response, endpoint, attempt, self.config.max_retries, self.config.base_delay)
                if decision.error is None:
                    return _json_body(response, endpoint)

            if not decision.retry:
                logger.warning("%s %s failed: %s (%s)", method, endpoint, decision.error.message, decision.error.code)
                raise decision.error

            logger.info(
                "%s %s: %s, retrying in %.1fs (%d/%d)",
                method,
                endpoint,
                decision.error.code,
                decision.delay,
                attempt + 1,
                self.config.max_retries,
            )
            await self._sleep(decision.delay)
            attempt += 1


def _json_body(response: httpx.Response, endpoint: str) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise ServiceError(
            "Provider returned a non-JSON response",
            "INVALID_RESPONSE",
            response.status_code,
            {"endpoint": endpoint},
            retryable=False,
        ) from exc
    if not isinstance(data, dict):
        raise ServiceError(
            "Provider returned an unexpected response shape",
            "INVALID_RESPONSE",
            response.status_code,
            {"endpoint": endpoint},
            retryable=False,
        )
    return data
