# This file is part of pyec2lib. See LICENSE file for license information.
"""AWS EC2 client wrapper."""

import logging
import threading
from typing import Any, Dict, List, Optional, Union

import botocore

from pyec2lib.config import DEFAULT_POLL_INTERVAL_MS, ConfigFile, ec2_section
from pyec2lib.ec2.instance import Instance
from pyec2lib.ec2.key_pair import KeyPair
from pyec2lib.ec2.security_group import SecurityGroup
from pyec2lib.ec2.util import _error_code, _get_session, _instance_ids
from pyec2lib.errors import CloudSetupError
from pyec2lib.pagination import PaginatedLister, boto3_page_fetcher
from pyec2lib.types import LaunchRequest
from pyec2lib.waiter import LaunchAwaiter

_NOT_FOUND_KEY_PAIR = "InvalidKeyPair.NotFound"
_NOT_FOUND_GROUP = "InvalidGroup.NotFound"


class EC2:
    """EC2 Client Class."""

    def __init__(
        self,
        config_file: Optional[ConfigFile] = None,
        *,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        region: Optional[str] = None,
        poll_interval_ms: Optional[int] = None,
        client=None,
    ):
        """Initialize the connection to EC2.

        boto3 will read a users /home/$USER/.aws/* files if no
        arguments are provided here to find values.

        Args:
            config_file: path to pyec2lib configuration file
            access_key_id: user's access key ID
            secret_access_key: user's secret access key
            region: region to login to
            poll_interval_ms: milliseconds between two polls while waiting
                for launched instances
            client: already built boto3 EC2 client to use instead of
                creating one
        """
        self._log = logging.getLogger(
            "{}.{}".format(__name__, self.__class__.__name__)
        )
        self._check_and_set_config(
            config_file,
            client is not None,
            [access_key_id, secret_access_key, region],
        )
        self._access_key_id = access_key_id or self.config.get(
            "access_key_id"
        )
        self._secret_access_key = secret_access_key or self.config.get(
            "secret_access_key"
        )
        if poll_interval_ms is None:
            poll_interval_ms = self.config.get(
                "poll_interval_ms", DEFAULT_POLL_INTERVAL_MS
            )
        self.poll_interval_ms = int(poll_interval_ms)
        self.launch_timeout = self.config.get("launch_timeout")

        if client is not None:
            self.client = client
            self.region = client.meta.region_name
            return

        self._log.debug("logging into EC2")
        try:
            session = _get_session(
                self._access_key_id,
                self._secret_access_key,
                region or self.config.get("region"),
            )
            self.client = session.client("ec2")
            self.region = session.region_name
        except botocore.exceptions.NoRegionError as e:
            raise CloudSetupError(
                "Please configure default region in $HOME/.aws/config"
            ) from e
        except botocore.exceptions.NoCredentialsError as e:
            raise CloudSetupError(
                "Please configure ec2 credentials in $HOME/.aws/credentials"
            ) from e

    def __repr__(self):
        """Create string representation for class."""
        return "{}(region={})".format(self.__class__.__name__, self.region)

    def _check_and_set_config(self, config_file, has_client, required_values):
        """Load the [ec2] configuration table when it is needed.

        If every credential value was passed to the constructor, or a
        client was injected, the config file is not read. Otherwise a
        missing file only matters when one was explicitly given.
        """
        if has_client or all(v is not None for v in required_values):
            self.config: Dict[str, Any] = {}
        else:
            self.config = ec2_section(
                config_file, missing_ok=config_file is None
            )

    def at(self, region: str) -> "EC2":
        """Return a new EC2 connection bound to another region.

        Args:
            region: region to login to

        Returns:
            EC2 object sharing the credentials and settings of this one
        """
        self._log.debug("switching from region %s to %s", self.region, region)
        other = self.__class__(
            access_key_id=self._access_key_id,
            secret_access_key=self._secret_access_key,
            region=region,
            poll_interval_ms=self.poll_interval_ms,
        )
        other.launch_timeout = self.launch_timeout
        return other

    # ------------------------------------------
    # Instances
    # ------------------------------------------

    def instances(self, *instance_ids: str) -> List[Instance]:
        """List instances.

        Args:
            instance_ids: ids of the instances to describe, all instances
                of the region when empty

        Returns:
            list of Instance snapshots
        """
        params = {}
        if instance_ids:
            params["InstanceIds"] = list(instance_ids)
        reservations = PaginatedLister(
            boto3_page_fetcher(
                self.client.describe_instances, "Reservations", **params
            )
        )
        return Instance.from_reservations(reservations)

    def run_and_await(
        self,
        image_id: str,
        key_pair: Union[KeyPair, str, None],
        instance_type: str = "t1.micro",
        min_count: int = 1,
        max_count: int = 1,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
        **kwargs,
    ) -> List[Instance]:
        """Launch instances and wait until none of them is pending.

        Args:
            image_id: string, AMI ID to use
            key_pair: KeyPair object or key pair name to login with
            instance_type: string, instance type to launch
            min_count: minimum number of instances to launch
            max_count: maximum number of instances to launch
            timeout: seconds to wait for the instances, see
                run_request_and_await
            cancel_event: threading.Event that aborts the wait once set
            kwargs: other named arguments to pass to run_instances

        Returns:
            list of Instance snapshots, none of them pending
        Raises: ValueError on invalid launch parameters
        """
        request = LaunchRequest(
            image_id=image_id,
            key_name=getattr(key_pair, "name", key_pair),
            instance_type=instance_type,
            min_count=min_count,
            max_count=max_count,
            extra=kwargs,
        )
        return self.run_request_and_await(
            request, timeout=timeout, cancel_event=cancel_event
        )

    def run_request_and_await(
        self,
        request: Union[LaunchRequest, Dict[str, Any]],
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Instance]:
        """Submit a launch request and wait until no instance is pending.

        Args:
            request: LaunchRequest or raw run_instances keyword arguments
            timeout: seconds to wait for the instances, None falls back to
                the configured launch_timeout (and waits forever if unset)
            cancel_event: threading.Event that aborts the wait once set

        Returns:
            list of Instance snapshots, none of them pending

        Raises:
            LaunchTimeoutError: if instances are still pending at timeout
            LaunchCancelledError: if cancel_event gets set while waiting
        """
        if isinstance(request, LaunchRequest):
            args = request.to_run_instances_kwargs()
        else:
            args = dict(request)

        awaiter = LaunchAwaiter(
            self.poll_interval_ms,
            timeout=timeout if timeout is not None else self.launch_timeout,
            cancel_event=cancel_event,
        )

        def launch():
            self._log.debug("launching instance(s) of %s", args.get("ImageId"))
            response = self.client.run_instances(**args)
            return [Instance(i) for i in response["Instances"]]

        return awaiter.run_and_await(
            launch,
            lambda ids: self.instances(*ids),
            lambda instance: instance.is_pending,
        )

    def start(self, *instances):
        """Start instances.

        Args:
            instances: Instance objects or instance ids
        """
        ids = _instance_ids(instances)
        if not ids:
            return None
        self._log.debug("starting instance(s) %s", ids)
        return self.client.start_instances(InstanceIds=ids)

    def stop(self, *instances):
        """Stop instances.

        Args:
            instances: Instance objects or instance ids
        """
        ids = _instance_ids(instances)
        if not ids:
            return None
        self._log.debug("stopping instance(s) %s", ids)
        return self.client.stop_instances(InstanceIds=ids)

    def terminate(self, *instances):
        """Terminate instances.

        Args:
            instances: Instance objects or instance ids
        """
        ids = _instance_ids(instances)
        if not ids:
            return None
        self._log.debug("terminating instance(s) %s", ids)
        return self.client.terminate_instances(InstanceIds=ids)

    def reboot(self, *instances):
        """Reboot instances.

        Args:
            instances: Instance objects or instance ids
        """
        ids = _instance_ids(instances)
        if not ids:
            return None
        self._log.debug("rebooting instance(s) %s", ids)
        return self.client.reboot_instances(InstanceIds=ids)

    # ------------------------------------------
    # Key Pairs
    # ------------------------------------------

    def key_pairs(self) -> List[KeyPair]:
        """List all key pairs loaded on this EC2 region."""
        response = self.client.describe_key_pairs()
        return [KeyPair.from_response(k) for k in response["KeyPairs"]]

    def key_pair(self, name: str) -> Optional[KeyPair]:
        """Find a key pair by name.

        Args:
            name: The key name to look for.

        Returns:
            KeyPair, or None when no key pair has that name
        """
        try:
            response = self.client.describe_key_pairs(KeyNames=[name])
        except botocore.exceptions.ClientError as e:
            if _error_code(e) == _NOT_FOUND_KEY_PAIR:
                return None
            raise
        key_pairs = response["KeyPairs"]
        return KeyPair.from_response(key_pairs[0]) if key_pairs else None

    def create_key_pair(self, name: str) -> KeyPair:
        """Create a key pair.

        The returned KeyPair holds the private key material, which EC2
        will not hand out again.

        Args:
            name: name to reference key by
        """
        self._log.debug("creating SSH key %s", name)
        return KeyPair.from_response(self.client.create_key_pair(KeyName=name))

    def delete_key_pair(self, key_pair: Union[KeyPair, str]):
        """Delete a key pair.

        Args:
            key_pair: KeyPair object or key name to delete
        """
        name = getattr(key_pair, "name", key_pair)
        self._log.debug("deleting SSH key %s", name)
        self.client.delete_key_pair(KeyName=name)

    # ------------------------------------------
    # Security Groups
    # ------------------------------------------

    def security_groups(self) -> List[SecurityGroup]:
        """List all security groups of this EC2 region."""
        groups = PaginatedLister(
            boto3_page_fetcher(
                self.client.describe_security_groups, "SecurityGroups"
            )
        )
        return [SecurityGroup(g) for g in groups]

    def security_group(self, name: str) -> Optional[SecurityGroup]:
        """Find a security group by name.

        Args:
            name: name of the security group

        Returns:
            SecurityGroup, or None when no group has that name
        """
        try:
            response = self.client.describe_security_groups(GroupNames=[name])
        except botocore.exceptions.ClientError as e:
            if _error_code(e) == _NOT_FOUND_GROUP:
                return None
            raise
        groups = response["SecurityGroups"]
        return SecurityGroup(groups[0]) if groups else None

    def create_security_group(
        self, name: str, description: str
    ) -> Optional[SecurityGroup]:
        """Create a security group and return it.

        Args:
            name: name of the security group
            description: free text description of the group
        """
        self._log.debug("creating security group %s", name)
        self.client.create_security_group(
            GroupName=name, Description=description
        )
        return self.security_group(name)

    def delete_security_group(self, security_group: Union[SecurityGroup, str]):
        """Delete a security group.

        Args:
            security_group: SecurityGroup object or group name to delete
        """
        name = getattr(security_group, "name", security_group)
        self._log.debug("deleting security group %s", name)
        self.client.delete_security_group(GroupName=name)

    # ------------------------------------------
    # Paginated listings
    # ------------------------------------------

    def tags(self, **params) -> PaginatedLister[Dict[str, Any]]:
        """Iterate lazily over tag descriptions.

        Args:
            params: extra describe_tags arguments, e.g. Filters

        Returns:
            iterator over describe_tags "Tags" dictionaries
        """
        return PaginatedLister(
            boto3_page_fetcher(self.client.describe_tags, "Tags", **params)
        )

    def instance_statuses(self, **params) -> PaginatedLister[Dict[str, Any]]:
        """Iterate lazily over instance statuses.

        Args:
            params: extra describe_instance_status arguments, e.g.
                IncludeAllInstances

        Returns:
            iterator over "InstanceStatuses" dictionaries
        """
        return PaginatedLister(
            boto3_page_fetcher(
                self.client.describe_instance_status,
                "InstanceStatuses",
                **params,
            )
        )
