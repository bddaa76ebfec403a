# This file is part of ec2runner. See LICENSE file for license information.
"""Network placement of runner instances in the default VPC."""

import logging
from typing import NamedTuple

from ec2runner.ec2.util import _filters
from ec2runner.errors import SecurityGroupNotFoundError, SubnetNotFoundError

logger = logging.getLogger(__name__)

SECURITY_GROUP_NAME = "ssh_http"


class Placement(NamedTuple):
    """Subnet and security group a runner instance is launched into."""

    subnet_id: str
    security_group_id: str
    vpc_id: str

    @classmethod
    def resolve(cls, client):
        """Look up the default subnet and its runner security group.

        Only the first page of each describe call is inspected.

        Args:
            client: boto3 EC2 client

        Returns:
            Placement instance

        Raises:
            SubnetNotFoundError: no default, available subnet exists
            SecurityGroupNotFoundError: the subnet's VPC has no security
                group tagged Name=ssh_http

        """
        subnet = cls._find_default_subnet(client)
        logger.info("Subnet %s", subnet["SubnetId"])
        group_id = cls._find_security_group(client, subnet["VpcId"])
        logger.info("Security Group %s", group_id)
        return cls(
            subnet_id=subnet["SubnetId"],
            security_group_id=group_id,
            vpc_id=subnet["VpcId"],
        )

    @classmethod
    def _find_default_subnet(cls, client):
        filters = _filters(default_for_az="true", state="available")
        subnets = client.describe_subnets(Filters=filters)["Subnets"]
        if not subnets:
            logger.info("Default subnet not found or not available")
            raise SubnetNotFoundError(default_for_az="true", state="available")
        return subnets[0]

    @classmethod
    def _find_security_group(cls, client, vpc_id):
        filters = _filters(vpc_id=vpc_id, tag_Name=SECURITY_GROUP_NAME)
        groups = client.describe_security_groups(Filters=filters)[
            "SecurityGroups"
        ]
        if not groups:
            logger.info(
                "Security group with Name=%s not found in default VPC %s",
                SECURITY_GROUP_NAME,
                vpc_id,
            )
            raise SecurityGroupNotFoundError(
                resource_name=SECURITY_GROUP_NAME, vpc_id=vpc_id
            )
        return groups[0]["GroupId"]
