r"""Synchronous poll executor.

This module provides the PollExecutor class that sends a request and
re-sends it until a condition over the response holds or the deadline
elapses.
"""

from __future__ import annotations

__all__ = ["PollExecutor"]

import logging
import time
from typing import TYPE_CHECKING, Any

from espoll.config import RequestOptions
from espoll.exceptions import DeadlineExceededError, PollCancelledError
from espoll.poll.core import handle_response, next_wait
from espoll.transport import BodyReplayTransport
from espoll.utils.timing import Deadline, Ticker

if TYPE_CHECKING:
    import threading
    from collections.abc import MutableMapping, MutableSequence

    import httpx

    from espoll.requests import Request
    from espoll.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


class PollExecutor:
    r"""Sends a request until a condition over its response holds.

    Without a condition, exactly one attempt is made and its outcome is
    final. With a condition, the transport is wrapped in a
    :class:`~espoll.transport.BodyReplayTransport` so the request body
    can be re-sent, and attempts are repeated every ``interval``
    seconds until the condition holds or ``timeout`` elapses.

    Only "request succeeded but the condition does not hold yet" is
    retried. Transport errors, error statuses and decode errors end the
    call at once.

    Args:
        options: The poll options. Defaults to ``RequestOptions()``.

    Attributes:
        options: The poll options.

    Example:
        ```pycon
        >>> import httpx
        >>> from espoll.config import RequestOptions
        >>> from espoll.poll import PollExecutor
        >>> from espoll.requests import ApiRequest
        >>> client = httpx.Client(
        ...     base_url="http://localhost:9200",
        ...     transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"count": 1})),
        ... )
        >>> executor = PollExecutor(
        ...     RequestOptions(condition=lambda response: response.json()["count"] > 0)
        ... )
        >>> out = {}
        >>> response = executor.execute(ApiRequest("GET", "/logs/_count"), client, out=out)
        >>> out
        {'count': 1}

        ```
    """

    def __init__(self, options: RequestOptions | None = None) -> None:
        self.options: RequestOptions = options or RequestOptions()

    def execute(
        self,
        request: Request,
        transport: Transport,
        out: MutableMapping[str, Any] | MutableSequence[Any] | None = None,
        cancel: threading.Event | None = None,
    ) -> httpx.Response:
        """Execute ``request`` until the condition holds.

        Args:
            request: The request to send. It is performed once per
                attempt.
            transport: The transport used to send the request.
            out: Optional destination for the decoded JSON body of the
                final response.
            cancel: Optional event that, once set, stops polling before
                the next attempt.

        Returns:
            The response of the last attempt. Its body is fully read and
            can be read again by the caller.

        Raises:
            ResponseError: If the service answered with an error status.
            DeadlineExceededError: If the timeout elapsed before the
                condition held.
            PollCancelledError: If ``cancel`` was set while waiting.
            httpx.TransportError: If the transport failed to send the
                request.
        """
        condition = self.options.condition
        deadline: Deadline | None = None
        if condition is not None:
            transport = BodyReplayTransport(transport)
            if self.options.timeout is not None:
                deadline = Deadline(self.options.timeout)

        ticker: Ticker | None = None
        attempt = 0
        while True:
            if ticker is not None:
                self._wait(ticker, deadline, attempt, cancel)

            attempt += 1
            logger.debug(f"sending request (attempt {attempt})")
            response = request.perform(transport)
            try:
                response.read()
            finally:
                response.close()
            handle_response(response, out)

            if condition is None or condition(response):
                logger.debug(f"request completed after {attempt} attempt(s)")
                return response

            if ticker is None:
                ticker = Ticker(self.options.interval)
            logger.debug(
                f"condition not satisfied after attempt {attempt}, "
                f"retrying in {ticker.remaining():.3f}s"
            )

    def _wait(
        self,
        ticker: Ticker,
        deadline: Deadline | None,
        attempt: int,
        cancel: threading.Event | None,
    ) -> None:
        delay, expired = next_wait(ticker, deadline)
        self._sleep(delay, attempt, cancel)
        if expired:
            logger.debug(f"deadline exceeded after {attempt} attempt(s)")
            raise DeadlineExceededError(timeout=self.options.timeout, attempts=attempt)
        ticker.advance()

    def _sleep(self, delay: float, attempt: int, cancel: threading.Event | None) -> None:
        if cancel is None:
            time.sleep(delay)
            return
        if cancel.wait(delay):
            logger.debug(f"polling cancelled after {attempt} attempt(s)")
            raise PollCancelledError(attempts=attempt)
