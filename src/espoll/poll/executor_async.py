r"""Asynchronous poll executor.

This module provides the AsyncPollExecutor class, the asyncio
counterpart of :class:`~espoll.poll.executor.PollExecutor`.
"""

from __future__ import annotations

__all__ = ["AsyncPollExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from espoll.config import RequestOptions
from espoll.exceptions import DeadlineExceededError
from espoll.poll.core import handle_response, next_wait
from espoll.transport import AsyncBodyReplayTransport
from espoll.utils.timing import Deadline, Ticker

if TYPE_CHECKING:
    from collections.abc import MutableMapping, MutableSequence

    import httpx

    from espoll.requests import AsyncRequest
    from espoll.transport import AsyncTransport

logger: logging.Logger = logging.getLogger(__name__)


class AsyncPollExecutor:
    r"""Sends a request until a condition over its response holds.

    Behaves like :class:`~espoll.poll.executor.PollExecutor`. Waiting
    between attempts uses ``asyncio.sleep``, so cancelling the task
    running :meth:`execute` raises ``asyncio.CancelledError`` at the
    wait. An attempt already in flight is cancelled by the transport.

    Args:
        options: The poll options. Defaults to ``RequestOptions()``.

    Attributes:
        options: The poll options.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from espoll.config import RequestOptions
        >>> from espoll.poll import AsyncPollExecutor
        >>> from espoll.requests import ApiRequest
        >>> async def main():
        ...     async with httpx.AsyncClient(
        ...         base_url="http://localhost:9200",
        ...         transport=httpx.MockTransport(
        ...             lambda request: httpx.Response(200, json={"count": 1})
        ...         ),
        ...     ) as client:
        ...         executor = AsyncPollExecutor(
        ...             RequestOptions(condition=lambda response: response.json()["count"] > 0)
        ...         )
        ...         return await executor.execute(ApiRequest("GET", "/logs/_count"), client)
        ...
        >>> asyncio.run(main()).json()
        {'count': 1}

        ```
    """

    def __init__(self, options: RequestOptions | None = None) -> None:
        self.options: RequestOptions = options or RequestOptions()

    async def execute(
        self,
        request: AsyncRequest,
        transport: AsyncTransport,
        out: MutableMapping[str, Any] | MutableSequence[Any] | None = None,
    ) -> httpx.Response:
        """Execute ``request`` until the condition holds.

        Args:
            request: The request to send. It is performed once per
                attempt.
            transport: The asynchronous transport used to send the
                request.
            out: Optional destination for the decoded JSON body of the
                final response.

        Returns:
            The response of the last attempt. Its body is fully read and
            can be read again by the caller.

        Raises:
            ResponseError: If the service answered with an error status.
            DeadlineExceededError: If the timeout elapsed before the
                condition held.
            httpx.TransportError: If the transport failed to send the
                request.
        """
        condition = self.options.condition
        deadline: Deadline | None = None
        if condition is not None:
            transport = AsyncBodyReplayTransport(transport)
            if self.options.timeout is not None:
                deadline = Deadline(self.options.timeout)

        ticker: Ticker | None = None
        attempt = 0
        while True:
            if ticker is not None:
                delay, expired = next_wait(ticker, deadline)
                await asyncio.sleep(delay)
                if expired:
                    logger.debug(f"deadline exceeded after {attempt} attempt(s)")
                    raise DeadlineExceededError(timeout=self.options.timeout, attempts=attempt)
                ticker.advance()

            attempt += 1
            logger.debug(f"sending request (attempt {attempt})")
            response = await request.perform_async(transport)
            try:
                await response.aread()
            finally:
                await response.aclose()
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
