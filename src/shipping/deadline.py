from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]


class DeadlineExceededError(TimeoutError):
    """The caller's time budget ran out before the call could be made."""


def deadline_from_timeout(timeout: float | None, clock: Clock = time.monotonic) -> float | None:
    if timeout is None:
        return None
    return clock() + timeout


def time_left(deadline: float | None, clock: Clock = time.monotonic) -> float | None:
    if deadline is None:
        return None
    return deadline - clock()


def is_expired(deadline: float | None, clock: Clock = time.monotonic) -> bool:
    remaining = time_left(deadline, clock)
    return remaining is not None and remaining <= 0


def effective_timeout(timeout: float, deadline: float | None, clock: Clock = time.monotonic) -> float:
    """Per-request timeout bounded by whatever is left of the caller's budget."""
    remaining = time_left(deadline, clock)
    if remaining is None:
        return timeout
    if remaining <= 0:
        raise DeadlineExceededError("call deadline exceeded")
    return min(timeout, remaining)


__all__ = [
    "Clock",
    "DeadlineExceededError",
    "deadline_from_timeout",
    "effective_timeout",
    "is_expired",
    "time_left",
]
