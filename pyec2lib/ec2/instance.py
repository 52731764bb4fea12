# This file is part of pyec2lib. See LICENSE file for license information.
"""EC2 instance."""

from typing import Any, Dict, Optional

from pyec2lib.types import TRANSIENT_STATE, InstanceState


class Instance:
    """Snapshot of an EC2 instance as returned by describe_instances.

    The snapshot never changes: fetch a new one to see the current state.
    """

    def __init__(self, data: Dict[str, Any]):
        """Set up instance.

        Args:
            data: instance dictionary from run_instances or
                describe_instances
        """
        self._data = data

    @classmethod
    def from_reservations(cls, reservations):
        """Flatten describe_instances reservations into instances."""
        return [
            cls(instance)
            for reservation in reservations
            for instance in reservation.get("Instances", [])
        ]

    def __repr__(self):
        """Create string representation for class."""
        return "{}(id={}, state={})".format(
            self.__class__.__name__, self.id, self.state
        )

    def __eq__(self, other):
        """Compare snapshots by their content."""
        if not isinstance(other, Instance):
            return NotImplemented
        return self._data == other._data

    def __hash__(self):
        """Hash snapshots by instance id, consistent with __eq__."""
        return hash(self.id)

    @property
    def raw(self) -> Dict[str, Any]:
        """Return the boto3 dictionary backing this snapshot."""
        return self._data

    @property
    def id(self) -> str:
        """Return id of instance."""
        return self._data["InstanceId"]

    @property
    def state(self) -> InstanceState:
        """Return state of instance."""
        return InstanceState(self._data["State"]["Name"])

    @property
    def is_pending(self) -> bool:
        """Return True while the instance is still being created."""
        return self.state == TRANSIENT_STATE

    @property
    def image_id(self) -> Optional[str]:
        """Return id of the image the instance booted from."""
        return self._data.get("ImageId")

    @property
    def instance_type(self) -> Optional[str]:
        return self._data.get("InstanceType")

    @property
    def key_name(self) -> Optional[str]:
        return self._data.get("KeyName")

    @property
    def public_ip(self) -> Optional[str]:
        """Return public IP address of instance, if any."""
        return self._data.get("PublicIpAddress")

    @property
    def private_ip(self) -> Optional[str]:
        """Return private IP address of instance, if any."""
        return self._data.get("PrivateIpAddress")

    @property
    def launch_time(self):
        return self._data.get("LaunchTime")

    @property
    def tags(self) -> Dict[str, str]:
        """Return instance tags as a dictionary."""
        return {t["Key"]: t["Value"] for t in self._data.get("Tags", [])}
