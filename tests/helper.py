import copy
import threading
import time
from datetime import datetime, timezone

from amplify_deploy.models.job_summary import JobSummary
from tests.constants import *


def job_summary(status, job_id=JOB_ID):
    return JobSummary(job_id=job_id, status=status, job_type="RELEASE")


def get_job_response(status, job_id=JOB_ID):
    summary = copy.deepcopy(START_JOB_RESPONSE["jobSummary"])
    summary["jobId"] = job_id
    summary["status"] = status
    summary["startTime"] = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return {"job": {"summary": summary, "steps": []}}


def start_job_response(status=PENDING):
    response = copy.deepcopy(START_JOB_RESPONSE)
    response["jobSummary"]["status"] = status
    response["jobSummary"]["startTime"] = datetime(2024, 1, 1, tzinfo=timezone.utc)
    response["jobSummary"]["commitTime"] = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return response


class FakeAmplifyService:
    """Scripted stand-in for AmplifyService.

    `polls` is consumed one entry per get_job call; an Exception entry is raised,
    anything else is returned as the job status. Once exhausted the last status repeats.
    """

    def __init__(self, start_status=PENDING, polls=None, start_error=None):
        self.start_status = start_status
        self.polls = list(polls or [])
        self.start_error = start_error
        self.start_calls = []
        self.get_calls = []
        self.lock = threading.Lock()
        self.last = start_status

    def start_job(self, app_id, branch_name):
        self.start_calls.append((app_id, branch_name, time.monotonic()))
        if self.start_error:
            raise self.start_error
        return job_summary(self.start_status)

    def get_job(self, app_id, branch_name, job_id):
        with self.lock:
            self.get_calls.append((app_id, branch_name, job_id, time.monotonic()))
            entry = self.polls.pop(0) if self.polls else self.last
        if isinstance(entry, Exception):
            raise entry
        self.last = entry
        return job_summary(entry, job_id)

    @property
    def get_count(self):
        with self.lock:
            return len(self.get_calls)
