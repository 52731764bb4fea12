# This file is part of pyec2lib. See LICENSE file for license information.
"""EC2 Util Functions."""

import boto3
import botocore


def _get_session(access_key_id, secret_access_key, region):
    """Get EC2 session.

    Any value left as None is resolved by boto3 from the environment
    or the $HOME/.aws/* files.

    Args:
        access_key_id: user's access key ID
        secret_access_key: user's secret access key
        region: region to login to

    Returns:
        boto3 session object

    """
    mysess = botocore.session.get_session()
    return boto3.Session(
        botocore_session=mysess,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        region_name=region,
    )


def _error_code(error: botocore.exceptions.ClientError) -> str:
    """Return the EC2 error code of a ClientError."""
    return error.response.get("Error", {}).get("Code", "")


def _instance_ids(instances) -> list:
    """Accept Instance objects or plain ids and return the ids."""
    return [getattr(i, "id", i) for i in instances]
