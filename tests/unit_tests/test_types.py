"""Test types module."""

import re

import pytest

from pyec2lib.types import InstanceState, LaunchRequest


def test_launch_request_post_init_raises_exceptions():
    """Test LaunchRequest post init checks."""
    with pytest.raises(ValueError, match="Launch requires image_id"):
        LaunchRequest("", "key")
    with pytest.raises(ValueError, match="min_count must be at least 1"):
        LaunchRequest("ami-1", "key", min_count=0)
    with pytest.raises(
        ValueError,
        match=re.escape("max_count (1) cannot be lower than min_count (2)"),
    ):
        LaunchRequest("ami-1", "key", min_count=2, max_count=1)


def test_launch_request_to_run_instances_kwargs():
    """Test LaunchRequest rendering to boto3 arguments."""
    request = LaunchRequest(
        "ami-1",
        "key",
        instance_type="t3.micro",
        min_count=1,
        max_count=3,
        extra={"SubnetId": "subnet-1"},
    )
    assert request.to_run_instances_kwargs() == {
        "ImageId": "ami-1",
        "InstanceType": "t3.micro",
        "MinCount": 1,
        "MaxCount": 3,
        "KeyName": "key",
        "SubnetId": "subnet-1",
    }


def test_launch_request_is_immutable():
    request = LaunchRequest("ami-1", "key")
    with pytest.raises(AttributeError):
        request.image_id = "ami-2"


def test_instance_state_str():
    assert str(InstanceState.SHUTTING_DOWN) == "shutting-down"
