# This file is part of ec2runner. See LICENSE file for license information.
"""First boot script that installs and registers the GitHub runner.

The lines produced here are the contract with the runner images: they are
interpolated verbatim, without any shell quoting.
"""

import base64
import logging
from typing import List
from urllib.parse import urlsplit

from ec2runner.config import RunnerConfig

RUNNER_VERSION = "2.299.1"
RUNNER_LABEL = "ditto-system-tests"
RUNNER_NAME_PREFIX = "ditto-system-tests-runner"
PRE_RUNNER_SCRIPT = "pre-runner-script.sh"

_DEFAULT_PORTS = {"http": 80, "https": 443}

log = logging.getLogger(__name__)


def repository_url(config: RunnerConfig) -> str:
    """Return the repository URL the runner registers against.

    Only the scheme and host of ``config.github_url`` are kept.
    """
    url = urlsplit(config.github_url)
    host = url.hostname or ""
    if ":" in host:
        host = "[{}]".format(host)
    if url.port and url.port != _DEFAULT_PORTS.get(url.scheme):
        host = "{}:{}".format(host, url.port)
    return "{}://{}/{}/{}".format(url.scheme, host, config.owner, config.repo)


def _preinstalled_script(config: RunnerConfig) -> List[str]:
    log.info("Preinstalled runner from HomeDir %s", config.runner_home_dir)
    return [
        "#!/bin/bash",
        'cd "{}"'.format(config.runner_home_dir),
        'echo "{}" > {}'.format(config.pre_runner_script, PRE_RUNNER_SCRIPT),
        "source {}".format(PRE_RUNNER_SCRIPT),
    ]


def _download_script(config: RunnerConfig) -> List[str]:
    log.info("The runner will be downloaded.")
    archive = "actions-runner-linux-${{RUNNER_ARCH}}-{}.tar.gz".format(
        RUNNER_VERSION
    )
    return [
        "#!/bin/bash",
        "mkdir actions-runner && cd actions-runner",
        'echo "{}" > {}'.format(config.pre_runner_script, PRE_RUNNER_SCRIPT),
        "source {}".format(PRE_RUNNER_SCRIPT),
        'case $(uname -m) in aarch64) ARCH="arm64" ;; '
        'amd64|x86_64) ARCH="x64" ;; esac && export RUNNER_ARCH=${ARCH}',
        "curl -O -L https://github.com/actions/runner/releases/download/"
        "v{}/{}".format(RUNNER_VERSION, archive),
        "tar xzf ./{}".format(archive),
    ]


def build_startup_script(
    registration_token: str, label: str, config: RunnerConfig
) -> List[str]:
    """Build the user data script run as root on the first boot.

    If ``config.runner_home_dir`` is set the runner software is expected
    to be pre-installed in the image, otherwise it is downloaded.

    Args:
        registration_token: GitHub runner registration token
        label: label identifying the runner for the workflow jobs
        config: runner configuration

    Returns:
        list of shell lines

    """
    if config.runner_home_dir:
        script = _preinstalled_script(config)
    else:
        script = _download_script(config)

    script.extend(
        [
            "export RUNNER_ALLOW_RUNASROOT=1",
            "./config.sh --unattended \\",
            "  --url {} \\".format(repository_url(config)),
            "  --token {} \\".format(registration_token),
            "  --name {}-{} \\".format(RUNNER_NAME_PREFIX, label),
            "  --labels {},{}".format(label, RUNNER_LABEL),
            "./run.sh",
        ]
    )
    return script


def encode_user_data(script: List[str]) -> str:
    """Join script lines and return them base64 encoded for UserData."""
    return base64.b64encode("\n".join(script).encode()).decode()
