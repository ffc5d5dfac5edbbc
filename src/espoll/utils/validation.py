r"""Parameter validation utilities for poll options.

This module provides validation functions for poll parameters to ensure
they meet the required constraints before being used by the poll
executors.
"""

from __future__ import annotations

__all__ = ["validate_poll_params"]


def validate_poll_params(timeout: float | None, interval: float) -> None:
    """Validate poll parameters.

    Args:
        timeout: Maximum seconds to keep polling while the condition is
            unsatisfied. Must be > 0, or ``None`` for an unbounded wait.
        interval: Seconds between successive attempts once the first
            condition check fails. Must be > 0.

    Raises:
        ValueError: If timeout or interval are non-positive.

    Example:
        ```pycon
        >>> from espoll.utils.validation import validate_poll_params
        >>> validate_poll_params(timeout=60.0, interval=0.1)
        >>> validate_poll_params(timeout=None, interval=1.0)
        >>> validate_poll_params(timeout=0, interval=0.1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0 or None, got 0

        ```
    """
    if timeout is not None and timeout <= 0:
        msg = f"timeout must be > 0 or None, got {timeout}"
        raise ValueError(msg)
    if interval <= 0:
        msg = f"interval must be > 0, got {interval}"
        raise ValueError(msg)
