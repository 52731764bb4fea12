# This file is part of pyec2lib. See LICENSE file for license information.
"""EC2 key pair."""

import os
from typing import Optional

from pyec2lib.errors import PyEC2Error


class KeyPair:
    """Key pair registered in an EC2 region."""

    def __init__(
        self,
        name: str,
        fingerprint: Optional[str] = None,
        key_pair_id: Optional[str] = None,
        material: Optional[str] = None,
    ):
        """Initialize key pair.

        The private key material is only known right after the key pair
        gets created; key pairs found by describe_key_pairs don't have it.

        Args:
            name: Name EC2 references the key by
            fingerprint: Fingerprint of the key
            key_pair_id: EC2 id of the key pair
            material: Unencrypted PEM encoded private key
        """
        self.name = name
        self.fingerprint = fingerprint
        self.key_pair_id = key_pair_id
        self.material = material

    @classmethod
    def from_response(cls, data):
        """Build a KeyPair from a describe/create_key_pair dictionary."""
        return cls(
            name=data["KeyName"],
            fingerprint=data.get("KeyFingerprint"),
            key_pair_id=data.get("KeyPairId"),
            material=data.get("KeyMaterial"),
        )

    def __str__(self):
        """Create string representation of class."""
        return "KeyPair({}, fingerprint={})".format(
            self.name, self.fingerprint
        )

    def save_private_key(self, path):
        """Write the private key material to path, readable by owner only.

        Args:
            path: file to write the key to
        """
        if self.material is None:
            raise PyEC2Error(
                f"Key pair {self.name} has no private key material to save"
            )
        path = os.path.expanduser(path)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as stream:
            stream.write(self.material)
        os.chmod(path, 0o600)
