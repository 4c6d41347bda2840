import time
import unittest
from unittest.mock import MagicMock

from amplify_deploy.exceptions import (
    AmplifyServiceError,
    DeadlineExceededError,
    JobFailedError,
    JobQueryError,
    JobStartError,
    UnexpectedJobStatusError,
)
from amplify_deploy.models.deploy_request import DeployRequest
from amplify_deploy.services.deployment_service import DeploymentService
from tests.constants import *
from tests.helper import FakeAmplifyService


def make_request(timeout=TIMEOUT, interval=INTERVAL):
    return DeployRequest(
        app_id=APP_ID,
        branch_name=BRANCH_NAME,
        observation_timeout=timeout,
        observation_interval=interval,
    )


class TestDeploymentService(unittest.TestCase):

    def run_deploy(self, fake, request=None):
        started = time.monotonic()
        try:
            DeploymentService(fake).deploy(request or make_request())
        finally:
            self.elapsed = time.monotonic() - started

    def test_deploy_success_after_two_intervals(self):
        print("Running test_deploy_success_after_two_intervals...")
        fake = FakeAmplifyService(start_status=PENDING, polls=[RUNNING, SUCCEED])

        self.run_deploy(fake)

        self.assertEqual(fake.start_calls[0][:2], (APP_ID, BRANCH_NAME))
        self.assertEqual(fake.get_count, 2)
        self.assertEqual([c[:3] for c in fake.get_calls], [(APP_ID, BRANCH_NAME, JOB_ID)] * 2)
        self.assertGreaterEqual(self.elapsed, 2 * INTERVAL * 0.9)
        self.assertLess(self.elapsed, 3 * INTERVAL + TOLERANCE)
        print("Test test_deploy_success_after_two_intervals is passed successfully")

    def test_deploy_success_after_long_running_sequence(self):
        fake = FakeAmplifyService(start_status=PENDING, polls=[PENDING, RUNNING, RUNNING, SUCCEED])
        self.run_deploy(fake)
        self.assertEqual(fake.get_count, 4)

    def test_deploy_job_failed(self):
        print("Running test_deploy_job_failed...")
        fake = FakeAmplifyService(start_status=PENDING, polls=[RUNNING, FAILED])

        with self.assertRaises(JobFailedError) as cm:
            self.run_deploy(fake)

        self.assertEqual(str(cm.exception), "job failed")
        self.assertEqual(cm.exception.job_id, JOB_ID)
        print("Test test_deploy_job_failed is passed successfully")

    def test_deploy_unexpected_status(self):
        for status in [CANCELLED, "PROVISIONING", "SOME_FUTURE_STATE"]:
            with self.subTest(status=status):
                fake = FakeAmplifyService(start_status=PENDING, polls=[RUNNING, status])

                with self.assertRaises(UnexpectedJobStatusError) as cm:
                    self.run_deploy(fake)

                self.assertEqual(str(cm.exception), f"unexpected job status: {status}")
                self.assertEqual(cm.exception.status, status)

    def test_deploy_deadline_exceeded_stops_polling(self):
        print("Running test_deploy_deadline_exceeded_stops_polling...")
        fake = FakeAmplifyService(start_status=PENDING, polls=[RUNNING])
        timeout = 3 * INTERVAL + INTERVAL / 2

        with self.assertRaises(DeadlineExceededError) as cm:
            self.run_deploy(fake, make_request(timeout=timeout))

        self.assertGreaterEqual(self.elapsed, timeout * 0.9)
        self.assertLess(self.elapsed, timeout + TOLERANCE)
        self.assertEqual(cm.exception.last_status, RUNNING)
        self.assertIn("deadline exceeded", str(cm.exception))

        calls_at_deadline = fake.get_count
        time.sleep(3 * INTERVAL)
        self.assertEqual(fake.get_count, calls_at_deadline, "Poller kept querying after the deadline")
        print("Test test_deploy_deadline_exceeded_stops_polling is passed successfully")

    def test_deploy_deadline_before_first_poll(self):
        # timeout shorter than the interval: give up at the timeout, never query
        fake = FakeAmplifyService(start_status=PENDING)

        with self.assertRaises(DeadlineExceededError):
            self.run_deploy(fake, make_request(timeout=1, interval=5))

        self.assertGreaterEqual(self.elapsed, 0.9)
        self.assertLess(self.elapsed, 2)
        self.assertEqual(fake.get_count, 0)

    def test_deploy_get_job_error_is_returned_promptly(self):
        print("Running test_deploy_get_job_error_is_returned_promptly...")
        cause = AmplifyServiceError("get_job", "Rate exceeded", "TooManyRequestsException")
        fake = FakeAmplifyService(start_status=PENDING, polls=[RUNNING, cause, SUCCEED])

        with self.assertRaises(JobQueryError) as cm:
            self.run_deploy(fake, make_request(timeout=60))

        self.assertIn("failed to get job", str(cm.exception))
        self.assertIn("Rate exceeded", str(cm.exception))
        self.assertIs(cm.exception.__cause__, cause)
        self.assertEqual(fake.get_count, 2)
        self.assertLess(self.elapsed, 3 * INTERVAL + TOLERANCE)
        print("Test test_deploy_get_job_error_is_returned_promptly is passed successfully")

    def test_deploy_already_succeeded_skips_polling(self):
        fake = FakeAmplifyService(start_status=SUCCEED)

        self.run_deploy(fake, make_request(interval=5))

        self.assertEqual(fake.get_count, 0)
        self.assertLess(self.elapsed, 1)

    def test_deploy_already_failed_skips_polling(self):
        fake = FakeAmplifyService(start_status=FAILED)

        with self.assertRaises(JobFailedError):
            self.run_deploy(fake, make_request(interval=5))

        self.assertEqual(fake.get_count, 0)
        self.assertLess(self.elapsed, 1)

    def test_deploy_start_job_error(self):
        cause = AmplifyServiceError("start_job", "User is not authorized", ACCESS_DENIED)
        fake = FakeAmplifyService(start_error=cause)

        with self.assertRaises(JobStartError) as cm:
            self.run_deploy(fake)

        self.assertTrue(str(cm.exception).startswith("failed to start job"))
        self.assertIn(ACCESS_DENIED, str(cm.exception))
        self.assertIs(cm.exception.__cause__, cause)
        self.assertEqual(fake.get_count, 0)

    def test_deploy_poller_bug_does_not_wait_for_deadline(self):
        amplify_service = MagicMock()
        amplify_service.start_job.return_value = MagicMock(job_id=JOB_ID, status=PENDING)
        amplify_service.start_job.return_value.is_in_progress.side_effect = RuntimeError("boom")

        started = time.monotonic()
        with self.assertRaises(RuntimeError):
            DeploymentService(amplify_service).deploy(make_request(timeout=60))
        self.assertLess(time.monotonic() - started, 1)


if __name__ == "__main__":
    unittest.main()
