"""Tests related to pyec2lib.ec2 instance, key pair and security group."""

import datetime
import os
import stat

import pytest

from pyec2lib.ec2.instance import Instance
from pyec2lib.ec2.key_pair import KeyPair
from pyec2lib.ec2.security_group import SecurityGroup
from pyec2lib.errors import PyEC2Error
from pyec2lib.types import InstanceState

INSTANCE = {
    "InstanceId": "i-0abc",
    "State": {"Code": 16, "Name": "running"},
    "ImageId": "ami-123",
    "InstanceType": "t3.micro",
    "KeyName": "my-key",
    "PublicIpAddress": "203.0.113.10",
    "PrivateIpAddress": "10.0.0.5",
    "LaunchTime": datetime.datetime(2024, 1, 1),
    "Tags": [{"Key": "Name", "Value": "web"}],
}


class TestInstance:
    """Tests related to `Instance`."""

    def test_properties(self):
        instance = Instance(INSTANCE)
        assert instance.id == "i-0abc"
        assert instance.state == InstanceState.RUNNING
        assert not instance.is_pending
        assert instance.image_id == "ami-123"
        assert instance.instance_type == "t3.micro"
        assert instance.key_name == "my-key"
        assert instance.public_ip == "203.0.113.10"
        assert instance.private_ip == "10.0.0.5"
        assert instance.launch_time == datetime.datetime(2024, 1, 1)
        assert instance.tags == {"Name": "web"}
        assert instance.raw is INSTANCE

    def test_missing_optional_fields(self):
        instance = Instance(
            {"InstanceId": "i-1", "State": {"Name": "pending"}}
        )
        assert instance.is_pending
        assert instance.public_ip is None
        assert instance.tags == {}

    @pytest.mark.parametrize("state", list(InstanceState))
    def test_every_state_is_understood(self, state):
        instance = Instance({"InstanceId": "i-1", "State": {"Name": state.value}})
        assert instance.state is state
        assert instance.is_pending == (state is InstanceState.PENDING)

    def test_from_reservations(self):
        reservations = [
            {"Instances": [{"InstanceId": "i-1"}, {"InstanceId": "i-2"}]},
            {"Instances": []},
            {"Instances": [{"InstanceId": "i-3"}]},
        ]
        instances = Instance.from_reservations(reservations)
        assert [i.id for i in instances] == ["i-1", "i-2", "i-3"]

    def test_repr(self):
        assert repr(Instance(INSTANCE)) == "Instance(id=i-0abc, state=running)"

    def test_usable_in_sets_and_dicts(self):
        same = Instance(dict(INSTANCE))
        other_state = Instance(dict(INSTANCE, State={"Name": "stopped"}))
        assert hash(Instance(INSTANCE)) == hash(same)
        assert {Instance(INSTANCE), same} == {same}
        assert len({Instance(INSTANCE), other_state}) == 2
        assert {Instance(INSTANCE): "web"}[same] == "web"


class TestKeyPair:
    """Tests related to `KeyPair`."""

    def test_from_response(self):
        key_pair = KeyPair.from_response(
            {"KeyName": "k", "KeyFingerprint": "ab:cd", "KeyPairId": "key-1"}
        )
        assert key_pair.name == "k"
        assert key_pair.fingerprint == "ab:cd"
        assert key_pair.key_pair_id == "key-1"
        assert key_pair.material is None
        assert str(key_pair) == "KeyPair(k, fingerprint=ab:cd)"

    def test_save_private_key(self, tmp_path):
        key_pair = KeyPair("k", material="PRIVATE")
        path = tmp_path / "k.pem"
        key_pair.save_private_key(str(path))
        assert path.read_text() == "PRIVATE"
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_save_without_material(self, tmp_path):
        with pytest.raises(PyEC2Error, match="no private key material"):
            KeyPair("k").save_private_key(str(tmp_path / "k.pem"))


class TestSecurityGroup:
    """Tests related to `SecurityGroup`."""

    def test_properties(self):
        group = SecurityGroup(
            {
                "GroupId": "sg-1",
                "GroupName": "web",
                "Description": "web servers",
                "VpcId": "vpc-1",
                "IpPermissions": [{"IpProtocol": "tcp", "FromPort": 22}],
            }
        )
        assert group.id == "sg-1"
        assert group.name == "web"
        assert group.description == "web servers"
        assert group.vpc_id == "vpc-1"
        assert group.ip_permissions[0]["FromPort"] == 22
        assert repr(group) == "SecurityGroup(id=sg-1, name=web)"
