"""Polling until a newly written directory object becomes visible."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from adgraph.response import GraphError, response_was_not_found

log = logging.getLogger(__name__)

_INITIAL_WAIT = 0.1
_MAX_WAIT = 10.0
_MAX_POLL_INTERVAL = 180.0

REPLICATION_TIMEOUT = 300.0
REPLICATION_MIN_TIMEOUT = 1.0
REPLICATION_CONTINUOUS_TARGETS = 10

Refresh = Callable[[], "tuple[Any, str]"]


class WaitTimeoutError(TimeoutError):
    """The target state was not reached before the timeout."""

    def __init__(self, target: Sequence[str], last_state: str, timeout: float) -> None:
        super().__init__(
            f"timeout while waiting for state to become '{', '.join(target)}' "
            f"(last state: '{last_state}', timeout: {timeout:g}s)"
        )
        self.target = tuple(target)
        self.last_state = last_state
        self.timeout = timeout


@dataclass
class StateChangeConf:
    """Repeatedly call ``refresh`` until it reports a target state often enough.

    ``refresh`` returns ``(result, state)`` and raises to abort the wait.
    A ``None`` result counts as "not found"; more than ``not_found_checks``
    of those in a row abort the wait. Times are in seconds; a ``timeout``
    of ``None`` waits without limit.
    """

    refresh: Refresh
    pending: Sequence[str] = ()
    target: Sequence[str] = ()
    timeout: float | None = None
    min_timeout: float = 0.0
    delay: float = 0.0
    poll_interval: float = 0.0
    continuous_target_occurence: int = 1
    not_found_checks: int = 20
    sleep: Callable[[float], None] | None = None
    clock: Callable[[], float] | None = None

    def wait_for_state(self) -> Any:
        """Poll until the target state is seen; return the last result."""
        sleep = self.sleep or time.sleep
        clock = self.clock or time.monotonic
        required = max(self.continuous_target_occurence, 1)
        deadline = None if self.timeout is None else clock() + self.timeout

        if self.delay > 0:
            sleep(self.delay)

        wait = _INITIAL_WAIT
        target_occurence = 0
        not_found = 0
        last_state = ""

        while True:
            result, state = self.refresh()
            last_state = state

            if result is None:
                not_found += 1
                if not_found > self.not_found_checks:
                    raise LookupError(f"couldn't find resource ({not_found} retries)")
            else:
                not_found = 0
                if state in self.target:
                    target_occurence += 1
                    if target_occurence == required:
                        return result
                elif state in self.pending:
                    target_occurence = 0
                elif self.pending:
                    raise RuntimeError(
                        f"unexpected state '{state}', wanted target '{', '.join(self.target)}'"
                    )

            if target_occurence == 0:
                wait *= 2
            if 0 < self.poll_interval < _MAX_POLL_INTERVAL:
                wait = self.poll_interval
            elif wait < self.min_timeout:
                wait = self.min_timeout
            elif wait > _MAX_WAIT:
                wait = _MAX_WAIT

            if deadline is not None:
                remaining = deadline - clock()
                if remaining <= wait:
                    if remaining > 0:
                        sleep(remaining)
                    log.warning("WaitForState timeout after %ss", self.timeout)
                    raise WaitTimeoutError(self.target, last_state, self.timeout)

            log.debug("Waiting %ss before next try", wait)
            sleep(wait)


def replication_error(err: GraphError) -> GraphError:
    """The error raised when a poll fails with something other than a 404."""
    return GraphError(
        f"Error calling f, response was not 404 ({err.response.status_code}): {err}",
        err.response,
    )


def wait_for_replication(fetch: Callable[[], Any]) -> Any:
    """Call ``fetch`` until it succeeds ten times running; return its result.

    A ``GraphError`` with a 404 response keeps the wait going, as does any
    other exception that carries no response. A ``GraphError`` with another
    status ends the wait.
    """

    def refresh() -> tuple[Any, str]:
        try:
            return fetch(), "Found"
        except GraphError as err:
            if response_was_not_found(err.response):
                return err, "404"
            raise replication_error(err) from err
        except Exception as err:  # the call gave back no usable response
            return err, "BadCast"

    return StateChangeConf(
        refresh=refresh,
        pending=("404", "BadCast"),
        target=("Found",),
        timeout=REPLICATION_TIMEOUT,
        min_timeout=REPLICATION_MIN_TIMEOUT,
        continuous_target_occurence=REPLICATION_CONTINUOUS_TARGETS,
    ).wait_for_state()