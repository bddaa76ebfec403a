# This file is part of ec2runner. See LICENSE file for license information.
"""AWS EC2 runner lifecycle."""

import logging
from typing import Any, Mapping, Optional

import botocore

from ec2runner.config import RunnerConfig
from ec2runner.ec2.placement import Placement
from ec2runner.ec2.util import _get_session
from ec2runner.errors import InstanceNotRunningError, RunnerSetupError
from ec2runner.user_data import build_startup_script, encode_user_data


class EC2:
    """Launch, wait for and terminate a single GitHub runner instance.

    Every call is issued synchronously and nothing is retried: a failed
    step leaves whatever the last successful call created, and cleanup is
    up to the caller.
    """

    def __init__(
        self,
        config: RunnerConfig,
        session_config: Optional[Mapping[str, Any]] = None,
        *,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        region: Optional[str] = None,
        profile: Optional[str] = None,
    ):
        """Initialize the connection to EC2.

        boto3 will read a users /home/$USER/.aws/* files if no
        arguments are provided here to find values.

        Args:
            config: runner configuration used by every operation
            session_config: the [ec2] table of the configuration file,
                holding credentials, region or profile
            access_key_id: user's access key ID
            secret_access_key: user's secret access key
            region: region to login to
            profile: AWS shared config profile to use
        """
        self.config = config
        self._log = logging.getLogger(
            "{}.{}".format(__name__, self.__class__.__name__)
        )
        if session_config is None:
            session_config = {}
        self._log.debug("logging into EC2")

        try:
            session = _get_session(
                access_key_id or session_config.get("access_key_id") or None,
                secret_access_key
                or session_config.get("secret_access_key")
                or None,
                region or session_config.get("region") or None,
                profile or session_config.get("profile") or None,
            )
            self.client = session.client("ec2")
            self.region = session.region_name
        except botocore.exceptions.NoRegionError as e:
            raise RunnerSetupError(
                "Please configure default region in $HOME/.aws/config"
            ) from e
        except botocore.exceptions.ProfileNotFound as e:
            raise RunnerSetupError(str(e)) from e

    def resolve_placement(self) -> Placement:
        """Find the subnet and security group for a new runner.

        Returns:
            Placement of the default-for-az subnet and the VPC's
            ``ssh_http`` security group

        """
        return Placement.resolve(self.client)

    def launch(self, registration_token: str, label: str) -> str:
        """Launch exactly one runner instance.

        Args:
            registration_token: GitHub runner registration token
            label: runner label, used in the runner name and labels

        Returns:
            id of the launched instance

        Raises:
            RunnerSetupError: image id, instance type or repository is
                not configured
            ResourceNotFoundError: no placement could be resolved
            botocore.exceptions.ClientError: AWS rejected a request

        """
        if not self.config.image_id or not self.config.instance_type:
            raise RunnerSetupError(
                "image_id and instance_type are required to launch a runner"
            )
        if not self.config.owner or not self.config.repo:
            raise RunnerSetupError(
                "repository is required to launch a runner"
            )
        script = build_startup_script(registration_token, label, self.config)
        args = {
            "ImageId": self.config.image_id,
            "InstanceType": self.config.instance_type,
            "MinCount": 1,
            "MaxCount": 1,
            "UserData": encode_user_data(script),
        }
        if self.config.iam_role_name:
            args["IamInstanceProfile"] = {"Name": self.config.iam_role_name}
        if self.config.tags:
            args["TagSpecifications"] = self.config.tag_specifications

        try:
            placement = self.resolve_placement()
            args["SubnetId"] = placement.subnet_id
            args["SecurityGroupIds"] = [placement.security_group_id]
            self._log.debug("launching instance for label %s", label)
            result = self.client.run_instances(**args)
        except Exception:
            self._log.error("AWS EC2 instance starting error")
            raise

        instance_id = result["Instances"][0]["InstanceId"]
        self._log.info(
            "AWS EC2 instance %s is started in %s", instance_id, self.region
        )
        return instance_id

    def wait_for_running(self, instance_id: str):
        """Block until the instance is running.

        Polling delay and attempts are the ones of boto3's
        ``instance_running`` waiter.

        Args:
            instance_id: id of the instance to wait for

        Raises:
            InstanceNotRunningError: the waiter gave up or failed

        """
        self._log.debug("wait for instance running %s", instance_id)
        waiter = self.client.get_waiter("instance_running")
        try:
            waiter.wait(InstanceIds=[instance_id])
        except botocore.exceptions.WaiterError as e:
            self._log.error(
                "AWS EC2 instance %s initialization error", instance_id
            )
            raise InstanceNotRunningError(instance_id) from e
        self._log.info("AWS EC2 instance %s is up and running", instance_id)

    def terminate(self):
        """Terminate the instance named by ``config.instance_id``.

        Raises:
            RunnerSetupError: no instance id is configured
            botocore.exceptions.ClientError: AWS rejected the request

        """
        instance_id = self.config.instance_id
        if not instance_id:
            raise RunnerSetupError(
                "instance_id is required to terminate a runner"
            )
        try:
            self.client.terminate_instances(InstanceIds=[instance_id])
        except botocore.exceptions.ClientError:
            self._log.error(
                "AWS EC2 instance %s termination error", instance_id
            )
            raise
        self._log.info("AWS EC2 instance %s is terminated", instance_id)
