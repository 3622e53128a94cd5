# cli.py
"""
sspa: provision and deploy a static single page app on AWS.

Usage:
    sspa server [--port 9292] [--directory public]
    sspa create_bucket <bucket-name>
    sspa deploy_bucket <bucket-name> [--source public]
    sspa create_pool <pool-config-dir>
"""

import argparse
import logging
import sys

from sspa import provision, server
from sspa.config import ProvisionConfig, check_environment
from sspa.errors import SspaError
from sspa.runner import CloudRunner

logger = logging.getLogger(__name__)

HELP = """\
Usage: sspa <action> [argument]

Actions:
  server                   Serve the app directory locally (default: public/ on port 9292)
  create_bucket <name>     Create an S3 bucket and configure it as a public website
  deploy_bucket <name>     Sync the app directory to the bucket, publicly readable
  create_pool <dir>        Create a Cognito identity pool and its authenticated role
                           from <dir>/config.json

Options:
  --region REGION          AWS region (defaults to the configured one)
  --profile PROFILE        AWS credentials profile
  --endpoint-url URL       Alternative AWS endpoint, e.g. a local emulator
  --port PORT              Port for `server`
  --directory DIR          Directory served by `server`
  --source DIR             Directory synced by `deploy_bucket`
  -v, --verbose            Debug logging
"""


class UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    # Report bad options through main so they get the help text and exit 1.
    def error(self, message):
        raise UsageError(message)


def parse_args(argv=None):
    parser = _Parser(prog="sspa", add_help=False)
    parser.add_argument("action", nargs="?")
    parser.add_argument("argument", nargs="?")
    parser.add_argument("--region")
    parser.add_argument("--profile")
    parser.add_argument("--endpoint-url")
    parser.add_argument("--port", type=int, default=server.DEFAULT_PORT)
    parser.add_argument("--directory", default=server.DEFAULT_DIRECTORY)
    parser.add_argument("--source", default=server.DEFAULT_DIRECTORY)
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    return parser.parse_args(argv)


def do_server(args, config):
    server.serve(args.directory, args.port)


def do_create_bucket(args, config):
    endpoint = provision.create_bucket(CloudRunner(config), args.argument)
    print(f"Website endpoint is: {endpoint}")


def do_deploy_bucket(args, config):
    result = provision.deploy_bucket(CloudRunner(config), args.argument, args.source)
    print(f"Uploaded {len(result.uploaded)} files to s3://{args.argument}")


def do_create_pool(args, config):
    result = provision.create_pool(CloudRunner(config), args.argument)
    print(f"Identity pool: {result.pool_id} ({result.pool_name})")
    print(f"Authenticated role: {result.role_arn}")


# action -> (handler, name of the required argument, needs AWS)
ACTIONS = {
    "server": (do_server, None, False),
    "create_bucket": (do_create_bucket, "bucket name", True),
    "deploy_bucket": (do_deploy_bucket, "bucket name", True),
    "create_pool": (do_create_pool, "pool config directory", True),
}


def main(argv=None):
    try:
        args = parse_args(argv)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        print(HELP)
        return 1
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.help or args.action not in ACTIONS:
        print(HELP)
        return 0

    handler, required, needs_aws = ACTIONS[args.action]
    if required and not args.argument:
        print(f"error: {args.action} requires a {required}", file=sys.stderr)
        print(f"usage: sspa {args.action} <{required.replace(' ', '-')}>", file=sys.stderr)
        return 1

    config = ProvisionConfig.from_env().override(
        region=args.region, profile=args.profile, endpoint_url=args.endpoint_url
    )
    try:
        if needs_aws:
            check_environment(config)
        handler(args, config)
    except SspaError as e:
        logger.error(str(e))
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
