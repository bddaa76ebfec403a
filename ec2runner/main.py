#!/usr/bin/python3
# This file is part of ec2runner. See LICENSE file for license information.
"""Command line entry point to start and stop a runner from a workflow."""

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path

from botocore.exceptions import ClientError

from ec2runner.config import RunnerConfig, parse_config
from ec2runner.ec2.cloud import EC2
from ec2runner.errors import Ec2RunnerException
from ec2runner.util import generate_unique_label, write_github_outputs

log = logging.getLogger("ec2runner")


def start(ec2: EC2, args):
    """Launch a runner and wait until its instance is running."""
    token = args.token or os.environ.get("EC2RUNNER_REGISTRATION_TOKEN")
    if not token:
        raise SystemExit(
            "A registration token is required: pass --token or set "
            "EC2RUNNER_REGISTRATION_TOKEN"
        )
    label = args.label or generate_unique_label()
    instance_id = ec2.launch(token, label)
    ec2.wait_for_running(instance_id)

    outputs = {"label": label, "ec2-instance-id": instance_id}
    for name, value in outputs.items():
        print("{}={}".format(name, value))
    if os.environ.get("GITHUB_OUTPUT"):
        write_github_outputs(os.environ["GITHUB_OUTPUT"], outputs)


def wait(ec2: EC2, args):
    """Wait for an already launched runner instance."""
    ec2.wait_for_running(args.instance_id)


def stop(ec2: EC2, args):
    """Terminate the runner instance."""
    ec2.terminate()


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="ec2runner",
        description="Start or stop an ephemeral GitHub runner on EC2",
    )
    parser.add_argument(
        "--config", type=str, help="Path to ec2runner.toml", required=False
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    start_parser = subparsers.add_parser("start", help="Launch a runner")
    start_parser.add_argument("--token", type=str, help="Registration token")
    start_parser.add_argument(
        "--label", type=str, help="Runner label, random if omitted"
    )
    start_parser.set_defaults(func=start)

    wait_parser = subparsers.add_parser(
        "wait", help="Wait for an instance to be running"
    )
    wait_parser.add_argument("instance_id", type=str, help="EC2 instance id")
    wait_parser.set_defaults(func=wait)

    stop_parser = subparsers.add_parser("stop", help="Terminate the runner")
    stop_parser.add_argument(
        "--instance-id",
        type=str,
        help="Instance to terminate, overrides the configured one",
    )
    stop_parser.set_defaults(func=stop)
    return parser


def main(argv=None):
    """Parse arguments, load configuration once and run a sub-command."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO
    )

    try:
        config_file = parse_config(Path(args.config) if args.config else None)
        config = RunnerConfig.from_config(config_file)
        if args.command == "stop" and args.instance_id:
            config = dataclasses.replace(config, instance_id=args.instance_id)
        ec2 = EC2(config, session_config=config_file.get("ec2"))
        args.func(ec2, args)
    except (Ec2RunnerException, ClientError, ValueError) as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
