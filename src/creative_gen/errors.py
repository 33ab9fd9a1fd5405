"""
Typed errors shared by both generation backends.

Callers discriminate by class to decide user-facing behaviour. `retryable`
tells the transport loop whether another attempt is worth making.
"""

from __future__ import annotations

from typing import Any


class GenerationError(Exception):
    retryable = False

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(GenerationError):
    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        if field is not None:
            details.setdefault("field", field)
        super().__init__(message, "VALIDATION_ERROR", 400, details)
        self.field = field

    @property
    def reason(self) -> str:
        return self.message


class AuthenticationError(GenerationError):
    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_FAILED", 401)


class RateLimitError(GenerationError):
    retryable = True

    def __init__(self, message: str = "Rate limit exceeded", retry_after: float | None = None) -> None:
        details = {"retry_after": retry_after} if retry_after is not None else None
        super().__init__(message, "RATE_LIMIT_EXCEEDED", 429, details)
        self.retry_after = retry_after


class JobNotFoundError(GenerationError):
    def __init__(self, job_id: str) -> None:
        super().__init__(f"Job {job_id} not found", "JOB_NOT_FOUND", 404, {"job_id": job_id})
        self.job_id = job_id


class ServiceError(GenerationError):
    """5xx or otherwise unclassified provider failure."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message, code, status_code, details)
        self.retryable = retryable


class TransportTimeout(GenerationError):
    retryable = True

    def __init__(self, endpoint: str, message: str = "Request timeout") -> None:
        super().__init__(message, "TIMEOUT", None, {"endpoint": endpoint})
        self.endpoint = endpoint


class PollingTimeout(GenerationError):
    # Terminal for the caller's wait only; the remote job keeps running.
    def __init__(self, job_id: str, attempts: int) -> None:
        super().__init__(
            f"Job {job_id} did not finish after {attempts} polling attempts",
            "POLLING_TIMEOUT",
            None,
            {"job_id": job_id, "attempts": attempts},
        )
        self.job_id = job_id
        self.attempts = attempts


class JobFailedError(GenerationError):
    def __init__(self, job_id: str, message: str | None = None) -> None:
        super().__init__(message or "Job failed", "JOB_FAILED", None, {"job_id": job_id})
        self.job_id = job_id


class JobCancelledError(GenerationError):
    def __init__(self, job_id: str) -> None:
        super().__init__("Job was cancelled", "JOB_CANCELLED", None, {"job_id": job_id})
        self.job_id = job_id


class LookupNotSupportedError(GenerationError):
    """The backend cannot replay jobs; read the persisted snapshot instead."""

    def __init__(self, job_id: str, message: str = "Job lookup not supported - use persisted job state") -> None:
        super().__init__(message, "NOT_SUPPORTED", None, {"job_id": job_id})
        self.job_id = job_id
