"""Tests related to ec2runner.ec2.placement module."""

import mock
import pytest
from botocore.exceptions import ClientError

from ec2runner.ec2.placement import Placement
from ec2runner.errors import SecurityGroupNotFoundError, SubnetNotFoundError

SUBNET_FILTERS = [
    {"Name": "default-for-az", "Values": ["true"]},
    {"Name": "state", "Values": ["available"]},
]
GROUP_FILTERS = [
    {"Name": "vpc-id", "Values": ["vpc-1"]},
    {"Name": "tag:Name", "Values": ["ssh_http"]},
]


def _client(subnets, groups):
    client = mock.MagicMock()
    client.describe_subnets.return_value = {"Subnets": subnets}
    client.describe_security_groups.return_value = {"SecurityGroups": groups}
    return client


# pylint: disable=missing-function-docstring
class TestPlacement:
    """Tests for Placement.resolve."""

    def test_first_subnet_and_group(self):
        client = _client(
            subnets=[
                {"SubnetId": "subnet-1", "VpcId": "vpc-1"},
                {"SubnetId": "subnet-2", "VpcId": "vpc-2"},
            ],
            groups=[{"GroupId": "sg-1"}, {"GroupId": "sg-2"}],
        )
        placement = Placement.resolve(client)

        assert placement == Placement(
            subnet_id="subnet-1", security_group_id="sg-1", vpc_id="vpc-1"
        )
        client.describe_subnets.assert_called_once_with(
            Filters=SUBNET_FILTERS
        )
        client.describe_security_groups.assert_called_once_with(
            Filters=GROUP_FILTERS
        )

    def test_no_subnet(self):
        client = _client(subnets=[], groups=[{"GroupId": "sg-1"}])
        with pytest.raises(SubnetNotFoundError):
            Placement.resolve(client)
        assert not client.describe_security_groups.called

    def test_no_security_group(self):
        client = _client(
            subnets=[{"SubnetId": "subnet-1", "VpcId": "vpc-1"}], groups=[]
        )
        with pytest.raises(SecurityGroupNotFoundError) as exc_info:
            Placement.resolve(client)
        assert "vpc_id=vpc-1" in str(exc_info.value)

    def test_provider_error_propagates(self):
        client = mock.MagicMock()
        error = ClientError(
            {"Error": {"Code": "UnauthorizedOperation", "Message": "no"}},
            "DescribeSubnets",
        )
        client.describe_subnets.side_effect = error
        with pytest.raises(ClientError) as exc_info:
            Placement.resolve(client)
        assert exc_info.value is error
