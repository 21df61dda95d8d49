"""
Polling helpers for asynchronous operations and eventual consistency.

Two kinds of waiting happen in resource handlers:

1. Waiting for an SDK long-running operation (LRO) poller to finish.
   The SDK does the polling; wait_for_completion() only bounds it by the
   operation deadline.

2. Waiting for a property of the resource to settle after the LRO has
   already reported success (e.g. ``provisioning_state`` moving from
   "Updating" to "Succeeded"). StateChangeConf repeatedly calls a refresh
   function until the reported state reaches a target state.

Usage:
    conf = StateChangeConf(
        pending=["Pending", "Updating", "Creating"],
        target=["Succeeded"],
        refresh=refresh_func,
        timeout=deadline.remaining(),
        min_timeout=15,
    )
    result = conf.wait_for_state()
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from .exceptions import NotFoundError, UnexpectedStateError, WaitTimeoutError
from .timeouts import Deadline

logger = logging.getLogger(__name__)

# refresh() -> (result, state); result None means "not found"
StateRefreshFunc = Callable[[], Tuple[Any, Optional[str]]]

INITIAL_WAIT = 0.1
MAX_WAIT = 10.0
MAX_POLL_INTERVAL = 180.0


@dataclass
class StateChangeConf:
    """
    Configuration for waiting on a state transition.

    Attributes:
        pending: States that mean "keep waiting"
        target: States that mean "done"; empty means "wait until not found"
        refresh: Function returning (result, state)
        timeout: Seconds to wait before giving up
        delay: Seconds to wait before the first refresh
        min_timeout: Lower bound for the backoff between refreshes
        poll_interval: Fixed interval between refreshes (overrides backoff)
        not_found_checks: Consecutive "not found" results tolerated
        continuous_target_occurence: Consecutive target results required
    """

    pending: List[str]
    target: List[str]
    refresh: StateRefreshFunc
    timeout: float
    delay: float = 0
    min_timeout: float = 0
    poll_interval: float = 0
    not_found_checks: int = 20
    continuous_target_occurence: int = 1
    _last_state: Optional[str] = field(default=None, init=False, repr=False)

    def wait_for_state(self) -> Any:
        """
        Poll refresh() until a target state is reached.

        Returns:
            The result of the last refresh() call (None when waiting for
            the resource to disappear)

        Raises:
            WaitTimeoutError: If the timeout elapses first
            UnexpectedStateError: If a state outside pending/target is seen
            NotFoundError: If the resource is missing for too many refreshes
            Exception: Anything raised by refresh() propagates unchanged
        """
        logger.debug(f"Waiting for state to become: {self.target}")
        deadline = time.monotonic() + self.timeout

        if self.delay > 0:
            time.sleep(self.delay)

        wait = INITIAL_WAIT
        not_found_tick = 0
        target_occurence = 0

        while True:
            result, current_state = self.refresh()
            self._last_state = current_state

            if result is None:
                if not self.target:
                    target_occurence += 1
                    if target_occurence >= self.continuous_target_occurence:
                        return None
                else:
                    not_found_tick += 1
                    if not_found_tick > self.not_found_checks:
                        raise NotFoundError(not_found_tick, current_state)
            else:
                not_found_tick = 0
                if current_state in self.target:
                    target_occurence += 1
                    if target_occurence >= self.continuous_target_occurence:
                        return result
                elif current_state in self.pending:
                    target_occurence = 0
                elif self.pending:
                    raise UnexpectedStateError(current_state, self.target)

            # Exponential backoff, except while waiting for the target state to reoccur
            if target_occurence == 0:
                wait *= 2

            if 0 < self.poll_interval < MAX_POLL_INTERVAL:
                wait = self.poll_interval
            elif wait < self.min_timeout:
                wait = self.min_timeout
            elif wait > MAX_WAIT:
                wait = MAX_WAIT

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise WaitTimeoutError(self._last_state, self.target, self.timeout)

            logger.debug(f"Waiting {min(wait, remaining):.1f}s before next try (state: {current_state})")
            time.sleep(min(wait, remaining))


def wait_for_completion(poller: Any, deadline: Deadline) -> Any:
    """
    Wait for an SDK LROPoller, bounded by an operation deadline.

    Args:
        poller: An azure.core.polling.LROPoller
        deadline: Deadline of the current operation

    Returns:
        The poller's final result

    Raises:
        WaitTimeoutError: If the poller has not finished by the deadline
        HttpResponseError: If the operation failed
    """
    result = poller.result(timeout=deadline.remaining())
    if not poller.done():
        status = poller.status() if hasattr(poller, "status") else None
        raise WaitTimeoutError(status, ["Succeeded"], deadline.timeout.total_seconds())
    return result
