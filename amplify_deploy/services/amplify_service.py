import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from amplify_deploy import constants
from amplify_deploy.exceptions import AmplifyServiceError, ClientInitError
from amplify_deploy.models.job_summary import JobSummary

logger = logging.getLogger(__name__)


class AmplifyService:
    """Thin wrapper over the boto3 Amplify client exposing the two job calls a deploy needs."""

    def __init__(self, client=None, region=None, profile=None, connect_timeout=10, read_timeout=30, max_attempts=1):
        self.region = region
        self.profile = profile
        self.client = client or self.__create_client(connect_timeout, read_timeout, max_attempts)

    def __create_client(self, connect_timeout, read_timeout, max_attempts):
        logger.debug(f"Creating Amplify client, region={self.region}, profile={self.profile}")
        try:
            session = boto3.session.Session(profile_name=self.profile, region_name=self.region)
            boto_config = Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={"total_max_attempts": max_attempts, "mode": "standard"},
            )
            return session.client(constants.AMPLIFY_SERVICE_NAME, config=boto_config)
        except BotoCoreError as e:
            logger.debug(f"Amplify client creation failed: {e}")
            raise ClientInitError(f"failed to initialize client: {e}") from e

    def __call(self, operation, **kwargs):
        logger.debug(f"Executing Amplify {operation}: {kwargs}")
        try:
            return getattr(self.client, operation)(**kwargs)
        except ClientError as e:
            error = e.response.get("Error", {})
            logger.error(f"ClientError during {operation}: {error.get('Code')} {error.get('Message')}")
            raise AmplifyServiceError(operation, error.get("Message", str(e)), error.get("Code")) from e
        except BotoCoreError as e:
            logger.error(f"BotoCoreError during {operation}: {e}")
            raise AmplifyServiceError(operation, str(e)) from e

    def start_job(self, app_id, branch_name) -> JobSummary:
        out = self.__call(
            "start_job",
            appId=app_id,
            branchName=branch_name,
            jobType=constants.JOB_TYPE_RELEASE,
        )
        summary = JobSummary.from_api(out["jobSummary"])
        logger.debug(f"start_job returned job {summary.job_id} with status {summary.status}")
        return summary

    def get_job(self, app_id, branch_name, job_id) -> JobSummary:
        out = self.__call(
            "get_job",
            appId=app_id,
            branchName=branch_name,
            jobId=job_id,
        )
        return JobSummary.from_api(out["job"]["summary"])
