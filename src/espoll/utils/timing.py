r"""Monotonic deadline and fixed-rate ticker used by the poll executors.

Both objects are plain values computed from the monotonic clock. They
hold no threads or OS timers, so nothing needs to be stopped when a
poll call returns or raises.
"""

from __future__ import annotations

__all__ = ["Deadline", "Ticker"]

import math
from time import monotonic


class Deadline:
    r"""An absolute monotonic instant after which no attempt starts.

    Args:
        timeout: Seconds from now until the deadline.

    Example:
        ```pycon
        >>> from espoll.utils.timing import Deadline
        >>> deadline = Deadline(timeout=60.0)
        >>> deadline.expired()
        False
        >>> 0.0 < deadline.remaining() <= 60.0
        True

        ```
    """

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        self.expires_at = monotonic() + timeout

    def remaining(self) -> float:
        """Return the seconds left before the deadline, never negative."""
        return max(0.0, self.expires_at - monotonic())

    def expired(self) -> bool:
        """Return ``True`` if the deadline has passed."""
        return monotonic() >= self.expires_at


class Ticker:
    r"""A fixed-rate schedule of wake-ups.

    The first tick is due one interval after creation. Ticks missed
    while the caller was busy collapse into a single tick that is due
    immediately, after which the schedule realigns on the original
    cadence.

    Args:
        interval: Seconds between two ticks. Must be > 0.

    Example:
        ```pycon
        >>> from espoll.utils.timing import Ticker
        >>> ticker = Ticker(interval=0.5)
        >>> 0.0 <= ticker.remaining() <= 0.5
        True

        ```
    """

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self.next_tick = monotonic() + interval

    def remaining(self) -> float:
        """Return the seconds until the next tick is due, never
        negative."""
        return max(0.0, self.next_tick - monotonic())

    def advance(self) -> None:
        """Consume the current tick and schedule the next one."""
        now = monotonic()
        self.next_tick += self.interval
        if self.next_tick < now:
            missed = math.ceil((now - self.next_tick) / self.interval)
            self.next_tick += missed * self.interval
