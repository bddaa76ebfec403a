# This file is part of ec2runner. See LICENSE file for license information.
"""Main ec2runner module __init__."""

import logging

from ec2runner.config import RunnerConfig, parse_config
from ec2runner.ec2.cloud import EC2
from ec2runner.ec2.placement import Placement
from ec2runner.user_data import build_startup_script

__all__ = [
    "EC2",
    "Placement",
    "RunnerConfig",
    "build_startup_script",
    "parse_config",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
