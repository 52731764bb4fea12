import logging

import mock
import pytest

from pyec2lib.ec2.cloud import EC2

logging.basicConfig(level=logging.NOTSET)


@pytest.fixture(name="ec2_client")
def ec2_client_fixture():
    """Fixture providing a fake boto3 EC2 client."""
    client = mock.MagicMock()
    client.meta.region_name = "us-east-1"
    return client


@pytest.fixture(name="ec2")
def ec2_fixture(ec2_client):
    """Fixture providing an EC2 object talking to the fake client."""
    return EC2(client=ec2_client, poll_interval_ms=10)


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    """Keep a developer's PYEC2LIB_CONFIG out of the tests."""
    monkeypatch.delenv("PYEC2LIB_CONFIG", raising=False)
