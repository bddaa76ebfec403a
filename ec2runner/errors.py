"""Module containing ec2runner errors.

Errors returned by AWS itself (``botocore.exceptions.ClientError``) are not
wrapped: they reach the caller unchanged.
"""

import enum
from typing import Optional


class Ec2RunnerException(Exception):
    """Root ec2runner exception.

    This exception is not meant to be raised by ec2runner. The intention
    is that every custom ec2runner exception will inherit from this one,
    allowing client code to catch any exception by catching this one.
    """


class ResourceType(enum.Enum):
    """Represent types of resources."""

    SUBNET = enum.auto()
    SECURITY_GROUP = enum.auto()

    def __str__(self) -> str:  # noqa: D105
        if self == self.SUBNET:
            return "subnet"
        if self == self.SECURITY_GROUP:
            return "security group"
        raise NotImplementedError


class ResourceNotFoundError(Ec2RunnerException):
    """Raised when a resource is not found.

    Examples:
    ---------
    >>> e = ResourceNotFoundError(ResourceType.SUBNET, state="available")
    >>> raise e  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    ec2runner.errors.ResourceNotFoundError: \
Could not locate the resource type `subnet`: state=available
    """

    def __init__(
        self,
        resource_type: ResourceType,
        resource_id: Optional[str] = None,
        resource_name: Optional[str] = None,
        **kwargs,
    ):
        """Init method.

        :param resource_type: Instance of `ResourceType`
        :param resource_id: Resource's id
        :param resource_name: Resource's name
        """
        super().__init__()
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.resource_name = resource_name
        self._extra_info = kwargs

    def __str__(self) -> str:  # noqa: D105
        resource_info = self.__render_resource()
        msg = f"Could not locate the resource type `{self.resource_type}`"
        if resource_info:
            msg += f": {resource_info}"
        return msg

    def __render_resource(self) -> str:
        parts = []
        if self.resource_id:
            parts.append(f"id={self.resource_id}")
        if self.resource_name:
            parts.append(f"name={self.resource_name}")
        parts.extend(f"{key}={value}" for key, value in self._extra_info.items())
        return ", ".join(parts)


class SubnetNotFoundError(ResourceNotFoundError):
    """No default, available subnet exists in the region."""

    def __init__(self, *args, **kwargs):  # noqa: D107
        super().__init__(ResourceType.SUBNET, *args, **kwargs)


class SecurityGroupNotFoundError(ResourceNotFoundError):
    """No security group with the expected Name tag exists in the VPC."""

    def __init__(self, *args, **kwargs):  # noqa: D107
        super().__init__(ResourceType.SECURITY_GROUP, *args, **kwargs)


class RunnerSetupError(Ec2RunnerException):
    """Raised if the runner configuration or AWS session is unusable."""


class Ec2RunnerTimeoutError(Ec2RunnerException):
    """Timeout error."""


class InstanceNotRunningError(Ec2RunnerTimeoutError):
    """Raised when an instance did not reach the running state."""

    def __init__(self, instance_id: str):
        """Init method.

        :param instance_id: The instance that was waited on
        """
        super().__init__()
        self.instance_id = instance_id

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"EC2 instance {self.instance_id} did not reach running state"
