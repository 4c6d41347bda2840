# Main Entry Point
import argparse
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version as distribution_version

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from amplify_deploy import constants
from amplify_deploy.config_loader import AppConfig
from amplify_deploy.exceptions import ClientInitError, ConfigurationError, DeployError
from amplify_deploy.logger import setup_logging
from amplify_deploy.models.deploy_request import DeployRequest
from amplify_deploy.services.amplify_service import AmplifyService
from amplify_deploy.services.deployment_service import DeploymentService
from amplify_deploy.util.common_util import format_duration

logger = logging.getLogger(__name__)


def get_version():
    try:
        return distribution_version(constants.DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return constants.UNKNOWN_VERSION


def input_parser():
    parser = argparse.ArgumentParser(
        prog="amplify-deploy",
        description="Start an AWS Amplify release job and wait for it to finish"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    deploy_parser = subparsers.add_parser("deploy", help="Start a release job and wait for it to complete.")
    deploy_parser.add_argument(
        "--app-id", default=os.getenv(constants.ENV_APP_ID),
        help=f"Amplify app ID (defaults to ${constants.ENV_APP_ID})."
    )
    deploy_parser.add_argument(
        "--branch-name", default=None,
        help="Branch to release (default: main)."
    )
    deploy_parser.add_argument(
        "--observation-timeout", default=None,
        help="How long to wait for the job to finish, e.g. 5m, 90s (default: 5m)."
    )
    deploy_parser.add_argument(
        "--observation-interval", default=None,
        help="How often to query job status, e.g. 5s (default: 5s)."
    )
    deploy_parser.add_argument("--region", default=None, help="AWS region override.")
    deploy_parser.add_argument("--profile", default=None, help="AWS named profile override.")
    deploy_parser.add_argument("--config", default=None, help="Path to an alternate config.yaml.")
    deploy_parser.add_argument("--verbose", action="store_true", help="Log debug output to the console.")

    subparsers.add_parser("version", help="Print the build version.")
    return parser


def first_set(*values):
    return next((v for v in values if v not in (None, "")), None)


def build_deploy_request(args, config: AppConfig) -> DeployRequest:
    if not args.app_id:
        raise ConfigurationError(f"--app-id is required (or set {constants.ENV_APP_ID})")
    try:
        return DeployRequest(
            app_id=args.app_id,
            branch_name=first_set(
                args.branch_name,
                os.getenv(constants.ENV_BRANCH_NAME),
                config.get(constants.DEFAULT_BRANCH_NAME),
                constants.FALLBACK_BRANCH_NAME,
            ),
            observation_timeout=first_set(
                args.observation_timeout,
                config.get(constants.DEFAULT_OBSERVATION_TIMEOUT),
                constants.FALLBACK_OBSERVATION_TIMEOUT,
            ),
            observation_interval=first_set(
                args.observation_interval,
                config.get(constants.DEFAULT_OBSERVATION_INTERVAL),
                constants.FALLBACK_OBSERVATION_INTERVAL,
            ),
        )
    except ValidationError as e:
        messages = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        raise ConfigurationError(f"invalid deploy arguments: {messages}") from e


def build_amplify_service(args, config: AppConfig) -> AmplifyService:
    return AmplifyService(
        region=first_set(args.region, os.getenv(constants.ENV_AWS_REGION), config.get(constants.AWS_REGION)),
        profile=first_set(args.profile, os.getenv(constants.ENV_AWS_PROFILE), config.get(constants.AWS_PROFILE)),
        connect_timeout=config.get(constants.AWS_CONNECT_TIMEOUT, 10),
        read_timeout=config.get(constants.AWS_READ_TIMEOUT, 30),
        max_attempts=config.get(constants.AWS_MAX_ATTEMPTS, 1),
    )


def run_deploy(args):
    try:
        config = AppConfig(args.config)
    except OSError as e:
        raise ConfigurationError(f"failed to load config: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"failed to parse config: {e}") from e

    request = build_deploy_request(args, config)
    logger.info("======================= Amplify deployment started ========================== ")
    logger.info(
        f"app_id={request.app_id}, branch={request.branch_name}, "
        f"observation_timeout={format_duration(request.observation_timeout)}, "
        f"observation_interval={format_duration(request.observation_interval)}"
    )

    try:
        amplify_service = build_amplify_service(args, config)
    except DeployError:
        raise
    except Exception as e:
        raise ClientInitError(f"failed to initialize client: {e}") from e

    DeploymentService(amplify_service).deploy(request)
    logger.info("======================= Deployment completed successfully ========================== ")


def fatal(err):
    sys.stderr.write(f"{err}\n")
    sys.exit(1)


def main(argv=None):
    load_dotenv()
    args = input_parser().parse_args(argv)

    if args.command == "version":
        print(get_version())
        return 0

    try:
        setup_logging(verbose=args.verbose)
    except Exception as ex:
        fatal(f"failed to configure logging: {ex}")

    try:
        run_deploy(args)
    except DeployError as ex:
        logger.debug(f"Deployment failed with {type(ex).__name__}", exc_info=True)
        logger.info("======================= Deployment completed with errors ========================== ")
        fatal(ex)
    except Exception as ex:
        logger.exception("Unexpected failure during deployment")
        fatal(f"unexpected error: {ex}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
