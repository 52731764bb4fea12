# This file is part of pyec2lib. See LICENSE file for license information.
"""EC2 security group."""

from typing import Any, Dict, List, Optional


class SecurityGroup:
    """Security group proxy for a describe_security_groups entry."""

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def __repr__(self):
        return "{}(id={}, name={})".format(
            self.__class__.__name__, self.id, self.name
        )

    @property
    def id(self) -> str:
        return self._data["GroupId"]

    @property
    def name(self) -> str:
        return self._data["GroupName"]

    @property
    def description(self) -> Optional[str]:
        return self._data.get("Description")

    @property
    def vpc_id(self) -> Optional[str]:
        return self._data.get("VpcId")

    @property
    def ip_permissions(self) -> List[Dict[str, Any]]:
        """Return inbound rules as boto3 IpPermissions dictionaries."""
        return self._data.get("IpPermissions", [])
