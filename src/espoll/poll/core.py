r"""Shared core logic for poll executors.

This module provides helper functions used by both the synchronous and
asynchronous poll executors. They encapsulate response classification,
output decoding, and the choice between the next tick and the deadline.
"""

from __future__ import annotations

__all__ = ["handle_response", "next_wait"]

import logging
from typing import TYPE_CHECKING, Any

from espoll.exceptions import ResponseError
from espoll.utils.decode import decode_into

if TYPE_CHECKING:
    from collections.abc import MutableMapping, MutableSequence

    import httpx

    from espoll.utils.timing import Deadline, Ticker

logger: logging.Logger = logging.getLogger(__name__)


def handle_response(
    response: httpx.Response,
    out: MutableMapping[str, Any] | MutableSequence[Any] | None,
) -> None:
    """Classify a fully read response and decode it into ``out``.

    Args:
        response: The response of one attempt. Its body must already be
            read.
        out: Optional destination for the decoded JSON body.

    Raises:
        ResponseError: If the service answered with an error status.
        json.JSONDecodeError: If ``out`` is given and the body is not
            valid JSON.
        TypeError: If ``out`` is given and the body does not match its
            shape.
    """
    if response.is_error:
        logger.debug(f"request failed with non-retryable status {response.status_code}")
        raise ResponseError(
            status_code=response.status_code,
            message=response.text,
            response=response,
        )
    if out is not None:
        decode_into(response, out)


def next_wait(ticker: Ticker, deadline: Deadline | None) -> tuple[float, bool]:
    """Compute how long to wait before the next attempt.

    Args:
        ticker: The running poll ticker.
        deadline: The call deadline, or ``None`` when unbounded.

    Returns:
        Tuple of (delay, expired). ``expired`` is ``True`` when the
        deadline falls at or before the next tick, in which case
        ``delay`` is the time left until the deadline and no further
        attempt may start.
    """
    delay = ticker.remaining()
    if deadline is not None:
        remaining = deadline.remaining()
        if remaining <= delay:
            return (remaining, True)
    return (delay, False)
