import logging
import threading
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from amplify_deploy import constants
from amplify_deploy.util.common_util import parse_duration, format_duration

logger = logging.getLogger(__name__)


class DeployRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    app_id: str
    branch_name: str = constants.FALLBACK_BRANCH_NAME
    observation_timeout: timedelta = parse_duration(constants.FALLBACK_OBSERVATION_TIMEOUT)
    observation_interval: timedelta = parse_duration(constants.FALLBACK_OBSERVATION_INTERVAL)

    @field_validator("app_id", "branch_name")
    @classmethod
    def _not_blank(cls, value: str, info):
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} must not be empty")
        return value

    @field_validator("observation_timeout", "observation_interval", mode="before")
    @classmethod
    def _parse_duration(cls, value):
        return parse_duration(value)

    @field_validator("observation_timeout", "observation_interval")
    @classmethod
    def _positive(cls, value: timedelta, info):
        if value <= timedelta(0):
            raise ValueError(f"{info.field_name} must be positive, got {format_duration(value)}")
        if value.total_seconds() > threading.TIMEOUT_MAX:
            raise ValueError(
                f"{info.field_name} must not exceed {format_duration(timedelta(seconds=threading.TIMEOUT_MAX))}, "
                f"got {format_duration(value)}"
            )
        return value

    @model_validator(mode="after")
    def _warn_interval_exceeds_timeout(self):
        if self.observation_interval > self.observation_timeout:
            logger.warning(
                f"observation_interval ({format_duration(self.observation_interval)}) is longer than "
                f"observation_timeout ({format_duration(self.observation_timeout)}); "
                f"the job will not be polled before the deadline"
            )
        return self
