# This file is part of pyec2lib. See LICENSE file for license information.
"""Main pyec2lib module __init__."""

import logging

from pyec2lib.ec2.cloud import EC2
from pyec2lib.ec2.instance import Instance
from pyec2lib.ec2.key_pair import KeyPair
from pyec2lib.ec2.security_group import SecurityGroup
from pyec2lib.pagination import Page, PaginatedLister
from pyec2lib.types import InstanceState, LaunchRequest
from pyec2lib.waiter import LaunchAwaiter

__all__ = [
    "EC2",
    "Instance",
    "InstanceState",
    "KeyPair",
    "LaunchAwaiter",
    "LaunchRequest",
    "Page",
    "PaginatedLister",
    "SecurityGroup",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
