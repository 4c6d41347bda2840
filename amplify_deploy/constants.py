DISTRIBUTION_NAME = "amplify-deploy"
UNKNOWN_VERSION = "unknown"

CONFIG_FILENAME = "config.yaml"
LOGGING_CONFIG_FILENAME = "logging.yaml"
LOGS_DIR = "logs"

# Config keys (dot notation)
DEFAULT_BRANCH_NAME = "deploy.branch_name"
DEFAULT_OBSERVATION_TIMEOUT = "deploy.observation_timeout"
DEFAULT_OBSERVATION_INTERVAL = "deploy.observation_interval"
AWS_REGION = "aws.region"
AWS_PROFILE = "aws.profile"
AWS_CONNECT_TIMEOUT = "aws.connect_timeout"
AWS_READ_TIMEOUT = "aws.read_timeout"
AWS_MAX_ATTEMPTS = "aws.max_attempts"

# Fallbacks when the config file omits a key
FALLBACK_BRANCH_NAME = "main"
FALLBACK_OBSERVATION_TIMEOUT = "5m"
FALLBACK_OBSERVATION_INTERVAL = "5s"

# Environment variables
ENV_APP_ID = "AMPLIFY_APP_ID"
ENV_BRANCH_NAME = "AMPLIFY_BRANCH_NAME"
ENV_AWS_REGION = "AWS_REGION"
ENV_AWS_PROFILE = "AWS_PROFILE"

AMPLIFY_SERVICE_NAME = "amplify"
JOB_TYPE_RELEASE = "RELEASE"

DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

NOISY_LOGGERS = ["botocore", "boto3", "urllib3"]
