from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class JobStatus(str, Enum):
    PENDING = "PENDING"
    PROVISIONING = "PROVISIONING"
    RUNNING = "RUNNING"
    FAILED = "FAILED"
    SUCCEED = "SUCCEED"
    CANCELLING = "CANCELLING"
    CANCELLED = "CANCELLED"


# Statuses the poller keeps waiting on; anything else ends observation.
IN_PROGRESS_STATUSES = (JobStatus.PENDING.value, JobStatus.RUNNING.value)


class JobSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_id: str
    # Kept as the raw string so values newer than JobStatus still round-trip.
    status: str
    job_type: Optional[str] = None
    commit_id: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @classmethod
    def from_api(cls, summary: dict):
        """Build from the `jobSummary` / `job.summary` shape returned by boto3."""
        return cls(
            job_id=summary["jobId"],
            status=summary["status"],
            job_type=summary.get("jobType"),
            commit_id=summary.get("commitId"),
            start_time=summary.get("startTime"),
            end_time=summary.get("endTime"),
        )

    def is_in_progress(self) -> bool:
        return self.status in IN_PROGRESS_STATUSES
