import logging

import pytest

from ec2runner.config import RunnerConfig

logging.basicConfig(level=logging.NOTSET)


@pytest.fixture(name="runner_config")
def runner_config_fixture():
    """Runner configuration that downloads the runner software."""
    return RunnerConfig(
        owner="org",
        repo="repo",
        image_id="ami-123",
        instance_type="t3.medium",
        iam_role_name="ci-runner",
        github_url="https://github.example/org/repo",
        pre_runner_script="apt-get update",
        instance_id="i-abc",
    )
