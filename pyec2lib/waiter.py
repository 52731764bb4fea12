# This file is part of pyec2lib. See LICENSE file for license information.
"""Launch instances and block until they leave the pending state."""

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Sequence

from pyec2lib.config import DEFAULT_POLL_INTERVAL_MS
from pyec2lib.errors import LaunchCancelledError, LaunchTimeoutError

log = logging.getLogger(__name__)


class LaunchAwaiter:
    """Submit a launch and poll until no launched instance is pending.

    The awaiter goes through three states: it submits the launch once,
    polls the launched ids at a fixed interval while any of them is
    transient, then returns the latest snapshots. Errors raised by the
    launch or describe callables are not caught.
    """

    def __init__(
        self,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Configure the awaiter.

        Args:
            poll_interval_ms: milliseconds to wait between two polls
            timeout: seconds to wait before raising LaunchTimeoutError,
                None waits forever
            cancel_event: event checked around every sleep, raises
                LaunchCancelledError once set
            sleep: function used to wait between polls; if None, waits on
                cancel_event when given so setting it ends the sleep,
                time.sleep otherwise
            clock: clock used to enforce the timeout, time.monotonic if None
        """
        if poll_interval_ms < 0:
            raise ValueError("poll_interval_ms cannot be negative")
        self.poll_interval_ms = poll_interval_ms
        self.timeout = timeout
        self.cancel_event = cancel_event
        if sleep is None and cancel_event is not None:
            sleep = cancel_event.wait
        self._sleep = sleep or time.sleep
        self._clock = clock or time.monotonic

    def run_and_await(
        self,
        launch: Callable[[], Sequence],
        describe: Callable[[List[str]], Sequence],
        is_transient: Callable[[object], bool],
    ) -> List:
        """Launch instances and wait for all of them to leave transient state.

        Args:
            launch: submits the launch request, returns instance snapshots
            describe: returns fresh snapshots for a list of instance ids
            is_transient: tells whether a snapshot is still transient

        Returns:
            latest snapshots, in launch order

        Raises:
            LaunchTimeoutError: if the timeout expires first
            LaunchCancelledError: if the cancel event gets set first
        """
        working_set: Dict[str, object] = {}
        for instance in launch():
            working_set[instance.id] = instance
        ids = list(working_set)
        log.debug("launched %d instance(s): %s", len(ids), ids)

        deadline = None
        if self.timeout is not None:
            deadline = self._clock() + self.timeout

        polls = 0
        while True:
            pending = [
                i for i, inst in working_set.items() if is_transient(inst)
            ]
            if not pending:
                break
            log.debug(
                "%d instance(s) still pending after %d poll(s): %s",
                len(pending),
                polls,
                pending,
            )
            self._check_cancelled(working_set)
            self._check_deadline(working_set, deadline)
            self._sleep(self.poll_interval_ms / 1000)
            self._check_cancelled(working_set)
            polls += 1
            for instance in describe(ids):
                if instance.id in working_set:
                    working_set[instance.id] = instance

        log.debug("instance(s) left pending state after %d poll(s)", polls)
        return list(working_set.values())

    def _check_cancelled(self, working_set):
        if self.cancel_event is not None and self.cancel_event.is_set():
            log.debug("wait for %s cancelled", list(working_set))
            raise LaunchCancelledError(list(working_set.values()))

    def _check_deadline(self, working_set, deadline):
        if deadline is not None and self._clock() >= deadline:
            log.debug("wait for %s timed out", list(working_set))
            raise LaunchTimeoutError(
                list(working_set.values()), timeout=self.timeout
            )
