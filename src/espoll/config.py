r"""Poll options and their defaults.

This module provides the defaults and a frozen dataclass-based options
object consumed by the poll executors and the poll clients.
"""

from __future__ import annotations

__all__ = ["DEFAULT_INTERVAL", "DEFAULT_TIMEOUT", "RequestOptions"]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from espoll.utils.validation import validate_poll_params

if TYPE_CHECKING:
    from espoll.conditions import Condition


# Default time budget in seconds while waiting for a condition
# Large enough to cover cluster and index/shard initialisation; it should
# never be reached under normal conditions
DEFAULT_TIMEOUT = 60.0

# Default spacing in seconds between two attempts
DEFAULT_INTERVAL = 0.1


@dataclass(frozen=True)
class RequestOptions:
    r"""Options controlling how a request is polled.

    Without a condition, a request is sent exactly once and ``timeout``
    and ``interval`` are ignored.

    Args:
        timeout: Maximum seconds to keep polling while the condition is
            unsatisfied. ``None`` disables the deadline and polls until
            the condition holds. Must be > 0 otherwise.
        interval: Seconds between two attempts once the first condition
            check fails. Must be > 0.
        condition: Optional predicate over the response. The request is
            re-sent until it returns ``True``.

    Example:
        ```pycon
        >>> from espoll.config import RequestOptions
        >>> options = RequestOptions()
        >>> options.timeout, options.interval
        (60.0, 0.1)
        >>> options = options.merge(timeout=5.0)
        >>> options.timeout
        5.0
        >>> RequestOptions(timeout=None).timeout is None
        True

        ```
    """

    timeout: float | None = DEFAULT_TIMEOUT
    interval: float = DEFAULT_INTERVAL
    condition: Condition | None = None

    def __post_init__(self) -> None:
        """Validate options after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_poll_params(timeout=self.timeout, interval=self.interval)

    def merge(self, **overrides: Any) -> RequestOptions:
        """Create new options with the specified fields overridden.

        Every supplied field replaces the current value, including
        ``None``, which for ``timeout`` means an unbounded wait.

        Args:
            **overrides: Keyword arguments for the fields to override.

        Returns:
            A new RequestOptions instance with overrides applied.

        Example:
            ```pycon
            >>> from espoll.config import RequestOptions
            >>> options = RequestOptions(interval=1.0)
            >>> options.merge(interval=2.0).interval
            2.0
            >>> options.interval  # Original unchanged
            1.0

            ```
        """
        return replace(self, **overrides)
