# amplify_deploy/logger.py
import logging
import logging.config
import os
from datetime import datetime

import yaml

from amplify_deploy import constants
from amplify_deploy.util.common_util import get_root_path, get_package_path


def setup_logging(config_path=None, verbose=False):
    config_path = config_path or os.path.join(get_package_path(), constants.LOGGING_CONFIG_FILENAME)
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f.read())

    # Always use absolute paths
    base_dir = get_root_path()
    logs_dir = base_dir / constants.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Generate timestamped filename
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = logs_dir / f"app_{timestamp}.log"

    config["handlers"]["file"]["filename"] = str(log_filename)
    config["handlers"]["file"]["mode"] = "w"
    if verbose:
        config["handlers"]["console"]["level"] = "DEBUG"

    logging.config.dictConfig(config)

    for name in constants.NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_filename
