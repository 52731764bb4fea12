#!/usr/bin/env python3
# This file is part of pyec2lib. See LICENSE file for license information.
"""Basic examples of various lifecycle with EC2 instances."""

import logging
import sys
import threading

import pyec2lib
from pyec2lib.errors import LaunchCancelledError, LaunchTimeoutError


def launch_multiple(ec2, image_id):
    """Launch two instances and wait until they leave the pending state.

    A timeout keeps a stuck launch from blocking forever; the error still
    carries the instances so they can be cleaned up.
    """
    key_pair = ec2.key_pair("pyec2lib-example") or ec2.create_key_pair(
        "pyec2lib-example"
    )
    try:
        instances = ec2.run_and_await(
            image_id,
            key_pair,
            instance_type="t3.micro",
            min_count=2,
            max_count=2,
            timeout=600,
        )
    except LaunchTimeoutError as e:
        instances = e.instances
        print(e)

    for instance in instances:
        print(instance.id, instance.state, instance.public_ip)

    ec2.terminate(*instances)
    ec2.delete_key_pair(key_pair)


def cancellable_launch(ec2, image_id):
    """Wait for a launch from a worker thread and cancel it."""
    cancel = threading.Event()
    result = {}

    def worker():
        try:
            result["instances"] = ec2.run_and_await(
                image_id, None, cancel_event=cancel
            )
        except LaunchCancelledError as e:
            result["instances"] = e.instances

    thread = threading.Thread(target=worker)
    thread.start()
    cancel.set()
    thread.join()
    ec2.terminate(*result["instances"])


def list_everything(ec2):
    """Walk every paginated listing lazily."""
    for tag in ec2.tags():
        print(tag["ResourceId"], tag["Key"], tag["Value"])

    for status in ec2.instance_statuses(IncludeAllInstances=True):
        print(status["InstanceId"], status["InstanceState"]["Name"])

    for group in ec2.security_groups():
        print(group.id, group.name)


def demo(image_id):
    """Show example of using the EC2 library.

    Connects to EC2 and uses the AMI given on the command line.
    """
    logging.basicConfig(level=logging.DEBUG)

    ec2 = pyec2lib.EC2()
    list_everything(ec2.at("us-west-2"))
    launch_multiple(ec2, image_id)
    cancellable_launch(ec2, image_id)


if __name__ == "__main__":
    demo(sys.argv[1])
