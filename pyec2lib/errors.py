"""Module containing pyec2lib errors.

Errors raised by boto3/botocore while talking to EC2 are not wrapped: they
reach the caller as they were raised.
"""

from typing import List


class PyEC2Exception(Exception):
    """Root pyec2lib exception.

    This exception is not meant to be raised by pyec2lib. The intention
    is that every custom pyec2lib exception will inherit from this one,
    allowing client code to catch any exception by catching this one.
    """


class PyEC2Error(PyEC2Exception):
    """Error that doesn’t fall in any of the other categories."""


class CloudSetupError(PyEC2Exception):
    """Raised if there is some problem setting up the EC2 connection."""


class PyEC2TimeoutError(PyEC2Exception):
    """Timeout error."""


class LaunchTimeoutError(PyEC2TimeoutError):
    """Raised when launched instances are still pending at the deadline.

    `instances` holds the latest snapshots seen before giving up, so the
    caller can still find out (and clean up) what was launched.
    """

    def __init__(self, instances: List, timeout: float):
        """Init method.

        :param instances: Latest snapshots of the launched instances
        :param timeout: Seconds waited before giving up
        """
        super().__init__()
        self.instances = instances
        self.timeout = timeout

    def __str__(self) -> str:  # noqa: D105
        pending = [i.id for i in self.instances if i.is_pending]
        return (
            f"Instances still pending after {self.timeout} seconds: "
            f"{', '.join(pending)}"
        )


class LaunchCancelledError(PyEC2Exception):
    """Raised when waiting for launched instances is cancelled."""

    def __init__(self, instances: List):
        """Init method.

        :param instances: Latest snapshots of the launched instances
        """
        super().__init__()
        self.instances = instances

    def __str__(self) -> str:  # noqa: D105
        ids = ", ".join(i.id for i in self.instances)
        return f"Cancelled while waiting for instances: {ids}"
