r"""Synchronous context manager client for polling requests.

This module provides a client that wraps an ``httpx.Client`` pointed at
an Elasticsearch-compatible API and sends requests through a
:class:`~espoll.poll.PollExecutor`.
"""

from __future__ import annotations

__all__ = ["DEFAULT_BASE_URL", "PollClient", "wrap_client"]

from typing import TYPE_CHECKING, Any

import httpx

from espoll.config import RequestOptions
from espoll.poll import PollExecutor
from espoll.requests import SearchRequest

if TYPE_CHECKING:
    import threading
    from collections.abc import MutableMapping, MutableSequence
    from types import TracebackType
    from typing import Self

    from espoll.query import Query
    from espoll.requests import Request

DEFAULT_BASE_URL = "http://localhost:9200"


class PollClient:
    r"""Synchronous context manager for polling requests.

    When an ``httpx.Client`` is passed in, its lifecycle is left to the
    caller. Otherwise ``PollClient`` creates its own client, enters it on
    ``__enter__`` and closes it on ``__exit__``.

    Args:
        client: Optional httpx.Client to send requests with. If
            ``None``, a new client is created for ``base_url``.
        base_url: Base URL of the API, used only when ``client`` is
            ``None``.
        options: Default poll options applied to every request. Can be
            replaced per call.

    Example:
        ```pycon
        >>> from espoll import PollClient, RequestOptions
        >>> from espoll.conditions import hits_condition
        >>> from espoll.query import TermQuery
        >>> with PollClient() as client:  # doctest: +SKIP
        ...     out = {}
        ...     client.search(
        ...         "traces-*",
        ...         TermQuery(field="service.name", value="checkout"),
        ...         out,
        ...         options=RequestOptions(condition=hits_condition(1)),
        ...     )
        ...

        ```
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        options: RequestOptions | None = None,
    ) -> None:
        self._client: httpx.Client = client or httpx.Client(base_url=base_url)
        self._options: RequestOptions = options or RequestOptions()
        self._owns_client = client is None

    @property
    def client(self) -> httpx.Client:
        """The underlying httpx client."""
        return self._client

    @property
    def options(self) -> RequestOptions:
        """The default poll options."""
        return self._options

    def __enter__(self) -> Self:
        if self._owns_client:
            self._client.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_client:
            self._client.__exit__(exc_type, exc_val, exc_tb)

    def do(
        self,
        request: Request,
        out: MutableMapping[str, Any] | MutableSequence[Any] | None = None,
        *,
        options: RequestOptions | None = None,
        cancel: threading.Event | None = None,
    ) -> httpx.Response:
        r"""Send ``request``, re-sending it until the condition holds.

        Args:
            request: The request to send.
            out: Optional destination for the decoded JSON body.
            options: Optional poll options replacing the client
                defaults for this call.
            cancel: Optional event that stops polling once set.

        Returns:
            The final response, with its body fully read.

        Raises:
            ResponseError: If the service answered with an error status.
            DeadlineExceededError: If the timeout elapsed before the
                condition held.
            PollCancelledError: If ``cancel`` was set while waiting.
        """
        executor = PollExecutor(options or self._options)
        return executor.execute(request, self._client, out=out, cancel=cancel)

    def search(
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
        return self.do(SearchRequest(index, query=query, **kwargs), out, options=options)


def wrap_client(client: httpx.Client, options: RequestOptions | None = None) -> PollClient:
    r"""Wrap an existing httpx client into a :class:`PollClient`.

    Args:
        client: The httpx client to wrap. Its lifecycle stays with the
            caller.
        options: Optional default poll options.

    Returns:
        The poll client.
    """
    return PollClient(client, options=options)
