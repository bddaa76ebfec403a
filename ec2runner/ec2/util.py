# This file is part of ec2runner. See LICENSE file for license information.
"""EC2 Util Functions."""

import boto3
import botocore


def _get_session(access_key_id, secret_access_key, region, profile=None):
    """Get EC2 session.

    Any value left as None is resolved by boto3's own credential and
    region lookup (environment, ~/.aws/*, instance metadata).

    Args:
        access_key_id: user's access key ID
        secret_access_key: user's secret access key
        region: region to login to
        profile: named profile from the AWS shared config files

    Returns:
        boto3 session object

    """
    mysess = botocore.session.get_session()
    return boto3.Session(
        botocore_session=mysess,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        region_name=region,
        profile_name=profile,
    )


def _filters(**values):
    """Turn keyword arguments into an EC2 ``Filters`` list.

    Underscores in keys are written as dashes, and a ``tag_`` prefix
    becomes ``tag:`` so ``tag_Name="x"`` filters on the Name tag.
    """
    filters = []
    for key, value in values.items():
        if key.startswith("tag_"):
            name = "tag:" + key[len("tag_"):]
        else:
            name = key.replace("_", "-")
        filters.append({"Name": name, "Values": [value]})
    return filters
