r"""Asynchronous context manager client for polling requests.

This module provides the asyncio counterpart of
:class:`~espoll.client.PollClient`, wrapping an ``httpx.AsyncClient``.
"""

from __future__ import annotations

__all__ = ["AsyncPollClient", "wrap_async_client"]

from typing import TYPE_CHECKING, Any

import httpx

from espoll.client import DEFAULT_BASE_URL
from espoll.config import RequestOptions
from espoll.poll import AsyncPollExecutor
from espoll.requests import SearchRequest

if TYPE_CHECKING:
    from collections.abc import MutableMapping, MutableSequence
    from types import TracebackType
    from typing import Self

    from espoll.query import Query
    from espoll.requests import AsyncRequest


class AsyncPollClient:
    r"""Asynchronous context manager for polling requests.

    Args:
        client: Optional httpx.AsyncClient to send requests with. If
            ``None``, a new client is created for ``base_url``.
        base_url: Base URL of the API, used only when ``client`` is
            ``None``.
        options: Default poll options applied to every request. Can be
            replaced per call.

    Example:
        ```pycon
        >>> from espoll import AsyncPollClient, RequestOptions
        >>> from espoll.conditions import hits_condition
        >>> async def main():
        ...     async with AsyncPollClient() as client:
        ...         return await client.search(
        ...             "logs-*", options=RequestOptions(condition=hits_condition(1))
        ...         )
        ...

        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        options: RequestOptions | None = None,
    ) -> None:
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(base_url=base_url)
        self._options: RequestOptions = options or RequestOptions()
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying httpx client."""
        return self._client

    @property
    def options(self) -> RequestOptions:
        """The default poll options."""
        return self._options

    async def __aenter__(self) -> Self:
        if self._owns_client:
            await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_client:
            await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def do(
        self,
        request: AsyncRequest,
        out: MutableMapping[str, Any] | MutableSequence[Any] | None = None,
        *,
        options: RequestOptions | None = None,
    ) -> httpx.Response:
        r"""Send ``request``, re-sending it until the condition holds.

        Args:
            request: The request to send.
            out: Optional destination for the decoded JSON body.
            options: Optional poll options replacing the client
                defaults for this call.

        Returns:
            The final response, with its body fully read.
        """
        executor = AsyncPollExecutor(options or self._options)
        return await executor.execute(request, self._client, out=out)

    async def search(
        self,
        index: str,
        query: Query | MutableMapping[str, Any] | None = None,
        out: MutableMapping[str, Any] | None = None,
        *,
        options: RequestOptions | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        r"""Search ``index``, re-sending the search until the condition
        holds.

        Args:
            index: The index, alias or pattern to search.
            query: Optional query.
            out: Optional destination for the decoded search result.
            options: Optional poll options replacing the client
                defaults for this call.
            **kwargs: Additional keyword arguments passed to
                :class:`~espoll.requests.SearchRequest`.

        Returns:
            The final response, with its body fully read.
        """
        return await self.do(SearchRequest(index, query=query, **kwargs), out, options=options)


def wrap_async_client(
    client: httpx.AsyncClient, options: RequestOptions | None = None
) -> AsyncPollClient:
    r"""Wrap an existing httpx async client into an
    :class:`AsyncPollClient`.

    Args:
        client: The httpx async client to wrap.
        options: Optional default poll options.

    Returns:
        The poll client.
    """
    return AsyncPollClient(client, options=options)
