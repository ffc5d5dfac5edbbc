r"""Transport boundary and the body replay wrappers.

A transport is anything that can build and send ``httpx`` requests;
``httpx.Client`` and ``httpx.AsyncClient`` satisfy the protocols
directly. The replay wrappers let one logical request be sent several
times even when its body is a one-shot stream: the body is captured on
the first send and a fresh stream over the same bytes is installed on
every send.
"""

from __future__ import annotations

__all__ = [
    "AsyncBodyReplayTransport",
    "AsyncTransport",
    "BodyReplayTransport",
    "Transport",
]

import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

if TYPE_CHECKING:
    from httpx import URL

logger: logging.Logger = logging.getLogger(__name__)


class Transport(Protocol):
    r"""Synchronous transport protocol, satisfied by ``httpx.Client``."""

    def build_request(self, method: str, url: URL | str, **kwargs: Any) -> httpx.Request: ...

    def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response: ...


class AsyncTransport(Protocol):
    r"""Asynchronous transport protocol, satisfied by
    ``httpx.AsyncClient``."""

    def build_request(self, method: str, url: URL | str, **kwargs: Any) -> httpx.Request: ...

    async def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response: ...


class BodyReplayTransport:
    r"""Wrap a transport so the same request body can be re-sent.

    The first call to :meth:`send` reads the whole outgoing body and
    keeps the bytes. Every call, the first included, then installs a
    fresh ``httpx.ByteStream`` over the captured bytes on the request
    before delegating, so the wrapped transport always sees an
    unconsumed body. Only ``request.stream`` is replaced: headers,
    method and URL are left untouched.

    An instance is scoped to one poll call and must not be shared
    between logical requests.

    Args:
        transport: The transport to delegate to.

    Example:
        ```pycon
        >>> import httpx
        >>> from espoll.transport import BodyReplayTransport
        >>> seen = []
        >>> def handler(request):
        ...     seen.append(request.read())
        ...     return httpx.Response(200)
        ...
        >>> client = httpx.Client(transport=httpx.MockTransport(handler))
        >>> transport = BodyReplayTransport(client)
        >>> chunks = iter([b'{"query":', b"{}}"])
        >>> for _ in range(2):
        ...     request = transport.build_request("POST", "http://es/_search", content=chunks)
        ...     _ = transport.send(request)
        ...
        >>> seen
        [b'{"query":{}}', b'{"query":{}}']

        ```
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._body: bytes | None = None

    @property
    def body(self) -> bytes | None:
        """The captured request body, or ``None`` before the first
        send."""
        return self._body

    def build_request(self, method: str, url: URL | str, **kwargs: Any) -> httpx.Request:
        return self._transport.build_request(method, url, **kwargs)

    def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response:
        """Send ``request`` with the captured body.

        Args:
            request: The request to send.
            **kwargs: Additional keyword arguments passed to the wrapped
                transport.

        Returns:
            The response of the wrapped transport.

        Raises:
            Exception: Any error raised while reading the body on the
                first send, unchanged.
        """
        if self._body is None:
            self._body = request.read()
            logger.debug(f"captured {len(self._body)} request body bytes for replay")
        request.stream = httpx.ByteStream(self._body)
        return self._transport.send(request, **kwargs)


class AsyncBodyReplayTransport:
    r"""Asynchronous counterpart of :class:`BodyReplayTransport`.

    Args:
        transport: The asynchronous transport to delegate to.
    """

    def __init__(self, transport: AsyncTransport) -> None:
        self._transport = transport
        self._body: bytes | None = None

    @property
    def body(self) -> bytes | None:
        """The captured request body, or ``None`` before the first
        send."""
        return self._body

    def build_request(self, method: str, url: URL | str, **kwargs: Any) -> httpx.Request:
        return self._transport.build_request(method, url, **kwargs)

    async def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response:
        if self._body is None:
            self._body = await request.aread()
            logger.debug(f"captured {len(self._body)} request body bytes for replay")
        request.stream = httpx.ByteStream(self._body)
        return await self._transport.send(request, **kwargs)
