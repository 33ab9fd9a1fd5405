from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from creative_gen.config import settings
from creative_gen.models import Job, can_transition

logger = logging.getLogger(__name__)

JOB_KINDS = ("image", "video")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _safe_filename(name: str) -> str:
    # Job ids come from providers; each id maps to its own file inside jobs_dir.
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise ValueError(f"Invalid job id for storage: {name!r}")
    return name


@dataclass
class StoredJob:
    kind: str  # image|video
    provider: str
    saved_at: str
    job: Job
    request: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "provider": self.provider,
            "saved_at": self.saved_at,
            "request": self.request,
            "job": self.job.model_dump(mode="json"),
        }


class JobStore:
    """
    JSON snapshots of generation jobs, one file per job.

    Stands in for the system of record: the image backend cannot look jobs up,
    so this is where their results are read back from.
    """

    def __init__(self, root_dir: Path | None = None) -> None:
        self.root_dir = Path(root_dir or settings.data_dir).resolve()
        self.jobs_dir = self.root_dir / "jobs"
        self.jobs_dir.mkdir(parents=True, exist_ok=True)

    def save_job(
        self,
        job: Job,
        kind: str,
        provider: str,
        request: dict[str, Any] | None = None,
    ) -> StoredJob:
        if kind not in JOB_KINDS:
            raise ValueError(f"Unknown job kind: {kind}")

        path = self._path(job.job_id)
        if path.exists():
            previous = self.read_job(job.job_id)
            if not can_transition(previous.job.status, job.status):
                raise ValueError(
                    f"Job {job.job_id} is already {previous.job.status.value}; refusing {job.status.value}"
                )
            request = request if request is not None else previous.request

        stored = StoredJob(kind=kind, provider=provider, saved_at=_now_iso(), job=job, request=request)
        path.write_text(json.dumps(stored.to_dict(), indent=2), encoding="utf-8")
        logger.debug("Saved %s job %s (%s)", kind, job.job_id, job.status.value)
        return stored

    def read_job(self, job_id: str) -> StoredJob:
        data = json.loads(self._path(job_id).read_text("utf-8"))
        return StoredJob(
            kind=data["kind"],
            provider=data["provider"],
            saved_at=data["saved_at"],
            request=data.get("request"),
            job=Job.model_validate(data["job"]),
        )

    def has_job(self, job_id: str) -> bool:
        return self._path(job_id).exists()

    def list_jobs(self, kind: str | None = None) -> list[StoredJob]:
        out: list[StoredJob] = []
        for path in self.jobs_dir.glob("*.json"):
            try:
                stored = self.read_job(path.stem)
            except (OSError, ValueError, KeyError) as exc:
                logger.warning("Skipping unreadable job snapshot %s: %s", path.name, exc)
                continue
            if kind is None or stored.kind == kind:
                out.append(stored)
        # Newest first.
        out.sort(key=lambda s: s.job.created_at, reverse=True)
        return out

    def delete_job(self, job_id: str) -> None:
        self._path(job_id).unlink(missing_ok=True)

    def _path(self, job_id: str) -> Path:
        return self.jobs_dir / f"{_safe_filename(job_id)}.json"
