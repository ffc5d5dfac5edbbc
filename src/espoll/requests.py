r"""Re-executable request descriptors.

A request descriptor holds everything needed to build an ``httpx``
request and can be performed several times against the same
transport. Each call builds a brand new ``httpx.Request``.
"""

from __future__ import annotations

__all__ = ["ApiRequest", "AsyncRequest", "Request", "SearchRequest"]

import json
from collections.abc import AsyncIterable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from espoll.query import Query, encode_query

if TYPE_CHECKING:
    import httpx

    from espoll.transport import AsyncTransport, Transport


class Request(Protocol):
    r"""A request that can be performed against a synchronous
    transport."""

    def perform(self, transport: Transport) -> httpx.Response: ...


class AsyncRequest(Protocol):
    r"""A request that can be performed against an asynchronous
    transport."""

    async def perform_async(self, transport: AsyncTransport) -> httpx.Response: ...


@dataclass
class ApiRequest:
    r"""A generic API request.

    Args:
        method: The HTTP method.
        path: The request path, resolved against the client base URL.
        params: Optional query string parameters.
        headers: Optional request headers.
        body: Optional request body. ``bytes``, ``bytearray`` and
            ``str`` are sent as-is, a query fragment is sent as
            ``{"query": ...}``, a mapping, list or tuple is sent as
            JSON, and any other iterable or async iterable is treated
            as a stream of byte chunks.

    Example:
        ```pycon
        >>> import httpx
        >>> from espoll.requests import ApiRequest
        >>> client = httpx.Client(
        ...     base_url="http://localhost:9200",
        ...     transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        ... )
        >>> response = ApiRequest("POST", "/logs/_refresh").perform(client)
        >>> response.status_code
        200

        ```
    """

    method: str
    path: str
    params: Mapping[str, Any] | None = None
    headers: Mapping[str, str] | None = None
    body: Any = None

    def build(self, transport: Transport | AsyncTransport) -> httpx.Request:
        """Build a fresh ``httpx.Request`` with ``transport``."""
        headers = dict(self.headers or {})
        kwargs: dict[str, Any] = {}
        body = self.body
        if isinstance(body, Query):
            body = {"query": body}
        if isinstance(body, (bytes, str)):
            kwargs["content"] = body
        elif isinstance(body, (bytearray, memoryview)):
            kwargs["content"] = bytes(body)
        elif isinstance(body, (Mapping, list, tuple)):
            kwargs["content"] = json.dumps(encode_query(body)).encode("utf-8")
            headers.setdefault("Content-Type", "application/json")
        elif isinstance(body, (Iterable, AsyncIterable)):
            kwargs["content"] = body
        elif body is not None:
            msg = f"unsupported request body type: {type(body).__name__}"
            raise TypeError(msg)
        return transport.build_request(
            self.method,
            self.path,
            params=dict(self.params) if self.params else None,
            headers=headers,
            **kwargs,
        )

    def perform(self, transport: Transport) -> httpx.Response:
        """Build and send the request with a synchronous transport."""
        return transport.send(self.build(transport))

    async def perform_async(self, transport: AsyncTransport) -> httpx.Response:
        """Build and send the request with an asynchronous transport."""
        return await transport.send(self.build(transport))


@dataclass
class SearchRequest:
    r"""A ``_search`` request against one or more indices.

    Args:
        index: The index, alias or comma-separated pattern to search.
            An empty string searches all indices.
        query: Optional query, either a fragment or a mapping.
        size: Optional maximum number of hits to return.
        sort: Optional sort clauses.
        track_total_hits: Optional ``track_total_hits`` setting.
        params: Optional query string parameters.

    Example:
        ```pycon
        >>> from espoll.query import TermQuery
        >>> from espoll.requests import SearchRequest
        >>> request = SearchRequest("traces-*", query=TermQuery(field="status", value="ok"))
        >>> api_request = request.to_api_request()
        >>> api_request.method, api_request.path
        ('POST', '/traces-*/_search')
        >>> api_request.body
        {'query': {'term': {'status': {'value': 'ok'}}}}

        ```
    """

    index: str = ""
    query: Query | Mapping[str, Any] | None = None
    size: int | None = None
    sort: list[Any] | None = None
    track_total_hits: bool | int | None = None
    params: Mapping[str, Any] | None = None

    def to_api_request(self) -> ApiRequest:
        """Return the equivalent generic API request."""
        body: dict[str, Any] = {}
        if self.query is not None:
            body["query"] = encode_query(self.query)
        if self.size is not None:
            body["size"] = self.size
        if self.sort is not None:
            body["sort"] = encode_query(self.sort)
        if self.track_total_hits is not None:
            body["track_total_hits"] = self.track_total_hits
        return ApiRequest(
            method="POST",
            path=f"/{self.index}/_search" if self.index else "/_search",
            params=self.params,
            body=body or None,
        )

    def perform(self, transport: Transport) -> httpx.Response:
        return self.to_api_request().perform(transport)

    async def perform_async(self, transport: AsyncTransport) -> httpx.Response:
        return await self.to_api_request().perform_async(transport)
