"""
Bounded polling.

`wait_until` is engine-independent: it only needs a predicate, a clock and a
sleep function, so it can be driven by a fake clock in tests. `ConditionWaiter`
binds it to a backend and a default budget.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import BrowserActionError, ConditionTimeoutError

if TYPE_CHECKING:
    from .backends.protocol import BrowserBackend
    from .conditions import WaitCondition

logger = logging.getLogger(__name__)

Probe = Callable[[], tuple[bool, Any]]


@dataclass
class WaitResult:
    value: Any
    attempts: int
    elapsed_ms: int


def wait_until(
    predicate: Probe,
    *,
    timeout_s: float,
    poll_s: float = 0.1,
    description: str = "condition",
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> WaitResult:
    """
    Evaluate predicate until it reports success or timeout_s elapses.

    The predicate returns (satisfied, value). The first evaluation happens
    immediately. A timeout is raised only once elapsed time has reached timeout_s,
    and sleeps are clamped to the remaining budget.

    Args:
        predicate: Zero-argument probe returning (satisfied, value)
        timeout_s: Wait budget in seconds
        poll_s: Interval between evaluations
        description: Human-readable condition name used in the timeout error
        clock: Monotonic time source
        sleep: Blocking sleep

    Returns:
        WaitResult carrying the value reported by the satisfying evaluation

    Raises:
        ConditionTimeoutError: If the predicate never held within timeout_s
    """
    if timeout_s < 0:
        raise ValueError("timeout_s must be >= 0")
    if poll_s <= 0:
        raise ValueError("poll_s must be > 0")

    start = clock()
    attempts = 0
    last_error: str | None = None
    while True:
        attempts += 1
        try:
            ok, value = predicate()
        except BrowserActionError as e:
            # The document may be mid-render; treat as not yet satisfied.
            ok, value = False, None
            last_error = str(e)
        elapsed = clock() - start
        if ok:
            logger.debug(f"{description} satisfied after {attempts} attempt(s)")
            return WaitResult(value=value, attempts=attempts, elapsed_ms=int(elapsed * 1000))
        if elapsed >= timeout_s:
            raise ConditionTimeoutError(
                description,
                elapsed_ms=int(elapsed * 1000),
                timeout_ms=int(timeout_s * 1000),
                last_error=last_error,
            )
        sleep(min(poll_s, timeout_s - elapsed))


class ConditionWaiter:
    def __init__(
        self,
        backend: BrowserBackend,
        *,
        timeout_s: float = 10.0,
        poll_s: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.backend = backend
        self.timeout_s = timeout_s
        self.poll_s = poll_s
        self._clock = clock
        self._sleep = sleep

    def until(self, condition: WaitCondition, timeout_s: float | None = None) -> Any:
        """Block until condition holds against the current document and return its value."""
        result = wait_until(
            lambda: condition.evaluate(self.backend),
            timeout_s=self.timeout_s if timeout_s is None else timeout_s,
            poll_s=self.poll_s,
            description=condition.describe(),
            clock=self._clock,
            sleep=self._sleep,
        )
        return result.value
