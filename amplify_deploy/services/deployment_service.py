import logging
import threading
import time
from concurrent.futures import Future, TimeoutError as FutureTimeoutError

from amplify_deploy.exceptions import (
    DeadlineExceededError,
    JobFailedError,
    JobQueryError,
    JobStartError,
    UnexpectedJobStatusError,
)
from amplify_deploy.models.deploy_request import DeployRequest
from amplify_deploy.models.job_summary import JobStatus, JobSummary
from amplify_deploy.util.common_util import format_duration

logger = logging.getLogger(__name__)


class JobObserver:
    """Polls one job from a daemon thread until it leaves PENDING/RUNNING.

    The thread is the only writer of ``job`` and ``last_status``; it resolves
    ``outcome`` once with the terminal status or a ``JobQueryError``.
    """

    def __init__(self, amplify_service, request: DeployRequest, job: JobSummary):
        self.amplify_service = amplify_service
        self.request = request
        self.job = job
        self.last_status = job.status
        self.outcome = Future()
        self.stop_event = threading.Event()
        self.thread = threading.Thread(target=self.run, name=f"job-observer-{job.job_id}", daemon=True)

    def start(self):
        self.thread.start()

    def stop(self):
        self.stop_event.set()

    def run(self):
        try:
            self._poll()
        except Exception as e:
            if not self.outcome.done():
                self.outcome.set_exception(e)

    def _poll(self):
        interval = self.request.observation_interval.total_seconds()
        while self.job.is_in_progress():
            if self.stop_event.wait(interval):
                logger.debug(f"Observation of job {self.job.job_id} cancelled")
                return
            try:
                job = self.amplify_service.get_job(self.request.app_id, self.request.branch_name, self.job.job_id)
            except Exception as e:
                error = JobQueryError(f"failed to get job: {e}")
                error.__cause__ = e
                self.outcome.set_exception(error)
                return
            if self.stop_event.is_set():
                return
            self.job = job
            self.last_status = job.status
            logger.info(f"Job {job.job_id} status: {job.status}")
        self.outcome.set_result(self.job.status)


class DeploymentService:
    """Starts an Amplify release job and blocks until it reaches a terminal status.

    The job is observed by a ``JobObserver`` that waits ``observation_interval``
    between ``get_job`` calls while the status is PENDING or RUNNING. The foreground
    waits on the observer's single-resolution future until the observation deadline
    and stops the observer on every exit path, so no query is issued after ``deploy``
    returns.
    """

    def __init__(self, amplify_service):
        self.amplify_service = amplify_service

    def deploy(self, request: DeployRequest):
        logger.info(f"Starting release job: app_id={request.app_id}, branch={request.branch_name}")
        try:
            job = self.amplify_service.start_job(request.app_id, request.branch_name)
        except Exception as e:
            raise JobStartError(f"failed to start job: {e}") from e
        logger.info(f"Release job {job.job_id} started with status {job.status}")

        deadline = time.monotonic() + request.observation_timeout.total_seconds()
        observer = JobObserver(self.amplify_service, request, job)
        observer.start()

        try:
            status = observer.outcome.result(timeout=max(deadline - time.monotonic(), 0))
        except FutureTimeoutError:
            timeout = format_duration(request.observation_timeout)
            logger.error(f"Job {job.job_id} still {observer.last_status} after {timeout}")
            raise DeadlineExceededError(timeout, observer.last_status) from None
        finally:
            observer.stop()

        self._resolve_status(job.job_id, status)

    @staticmethod
    def _resolve_status(job_id, status):
        if status == JobStatus.SUCCEED.value:
            logger.info(f"Job {job_id} succeeded")
            return
        if status == JobStatus.FAILED.value:
            raise JobFailedError(job_id)
        raise UnexpectedJobStatusError(status, job_id)
