import logging
import os

import yaml

from amplify_deploy import constants
from amplify_deploy.util.common_util import get_package_path

logger = logging.getLogger(__name__)


class AppConfig:
    def __init__(self, config_path=None):
        self.config_path = config_path or os.path.join(get_package_path(), constants.CONFIG_FILENAME)
        self._load_config(self.config_path)

    def _load_config(self, config_path):
        logger.debug(f"Loading configuration from {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as file:
            self.config = yaml.safe_load(file) or {}

    def get(self, key_path, default=None):
        """Fetch nested keys using dot notation, e.g. get('aws.region')"""
        keys = key_path.split(".")
        value = self.config
        for key in keys:
            if not isinstance(value, dict):
                return default
            value = value.get(key, None)
            if value is None:
                return default
        return value
