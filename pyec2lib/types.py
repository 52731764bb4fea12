# This file is part of pyec2lib. See LICENSE file for license information.
"""This module contains types and enums used by pyec2lib."""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@enum.unique
class InstanceState(enum.Enum):
    """Lifecycle states an EC2 instance reports."""

    PENDING = "pending"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting-down"
    TERMINATED = "terminated"
    STOPPING = "stopping"
    STOPPED = "stopped"

    def __str__(self):
        """Return the string representation of InstanceState enum."""
        return self.value


# State every instance holds right after run_instances returns
TRANSIENT_STATE = InstanceState.PENDING


@dataclass(frozen=True)
class LaunchRequest:
    """
    Dataclass describing the instances to launch.

    min_count and max_count follow run_instances semantics: EC2 launches
    as many instances as it can up to max_count, and fails the request if
    it cannot launch at least min_count. Anything else run_instances
    accepts goes in `extra` and is passed through untouched.
    """

    image_id: str
    key_name: Optional[str]
    instance_type: str = "t1.micro"
    min_count: int = 1
    max_count: int = 1
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Post initialization checks for LaunchRequest."""
        if not self.image_id:
            raise ValueError(
                f"Launch requires image_id. Found: {self.image_id}"
            )
        if self.min_count < 1:
            raise ValueError("min_count must be at least 1")
        if self.max_count < self.min_count:
            raise ValueError(
                f"max_count ({self.max_count}) cannot be lower than "
                f"min_count ({self.min_count})"
            )

    def to_run_instances_kwargs(self) -> Dict[str, Any]:
        """Convert the LaunchRequest to run_instances keyword arguments."""
        args = {
            "ImageId": self.image_id,
            "InstanceType": self.instance_type,
            "MinCount": self.min_count,
            "MaxCount": self.max_count,
        }
        if self.key_name:
            args["KeyName"] = self.key_name
        for key, value in self.extra.items():
            args[key] = value
        return args
