"""Test the errors.py module."""
import pytest

from ec2runner.errors import (
    Ec2RunnerException,
    Ec2RunnerTimeoutError,
    InstanceNotRunningError,
    ResourceNotFoundError,
    ResourceType,
    SecurityGroupNotFoundError,
    SubnetNotFoundError,
)


class TestResourceType:
    """Tests related to `ResourceType`."""

    @pytest.mark.parametrize(
        "item",
        list(map(lambda item: pytest.param(item, id=item.name), ResourceType)),
    )
    def test_str_representable(self, item):
        """Test that all instances of `ResourceType` are convertible to str."""
        assert str(item)


class TestResourceNotFoundError:
    """Tests related to `ResourceNotFoundError`."""

    @pytest.mark.parametrize(
        ["exception", "expected_msg"],
        [
            (
                ResourceNotFoundError(
                    resource_type=ResourceType.SUBNET,
                    resource_id="id",
                    resource_name="name",
                    custom_key="custom_key",
                ),
                (
                    "Could not locate the resource type `subnet`: "
                    "id=id, name=name, custom_key=custom_key"
                ),
            ),
            (
                SubnetNotFoundError(default_for_az="true", state="available"),
                (
                    "Could not locate the resource type `subnet`: "
                    "default_for_az=true, state=available"
                ),
            ),
            (
                SecurityGroupNotFoundError(
                    resource_name="ssh_http", vpc_id="vpc-1"
                ),
                (
                    "Could not locate the resource type `security group`: "
                    "name=ssh_http, vpc_id=vpc-1"
                ),
            ),
            (
                ResourceNotFoundError(resource_type=ResourceType.SUBNET),
                "Could not locate the resource type `subnet`",
            ),
        ],
    )
    def test_message(self, exception, expected_msg):
        """Test exception message rendering."""
        assert expected_msg == str(exception)


def test_instance_not_running_error():
    """Wait exhaustion is a timeout carrying the instance id."""
    error = InstanceNotRunningError("i-abc")
    assert isinstance(error, Ec2RunnerTimeoutError)
    assert isinstance(error, Ec2RunnerException)
    assert error.instance_id == "i-abc"
    assert str(error) == "EC2 instance i-abc did not reach running state"
