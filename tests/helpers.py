r"""Shared test helpers for poll executor and client tests.

This module contains a fake monotonic clock and a recording handler for
``httpx.MockTransport`` used across multiple test files.
"""

from __future__ import annotations

__all__ = [
    "BASE_URL",
    "FakeClock",
    "RecordingHandler",
    "search_response",
]

from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

BASE_URL = "http://localhost:9200"


class FakeClock:
    r"""A monotonic clock that only advances when ``sleep`` is called.

    Attributes:
        now: The current time in seconds.
        sleeps: The durations passed to ``sleep``.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


def search_response(total: int, **kwargs: Any) -> httpx.Response:
    """Create a search response reporting ``total`` hits."""
    return httpx.Response(200, json={"hits": {"total": {"value": total}, "hits": []}}, **kwargs)


class RecordingHandler:
    r"""A ``httpx.MockTransport`` handler returning canned responses and
    recording the requests it receives.

    The last response is repeated once ``responses`` is exhausted. An
    exception in ``responses`` is raised instead of being returned.

    Args:
        responses: The responses to return, in order.
        on_request: Optional hook called with each request.

    Attributes:
        requests: The requests received, in order.
        bodies: The body bytes of the requests received, in order.
    """

    def __init__(
        self,
        responses: Sequence[httpx.Response | Exception],
        on_request: Callable[[httpx.Request], None] | None = None,
    ) -> None:
        self._responses = list(responses)
        self._on_request = on_request
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.content)
        if self._on_request is not None:
            self._on_request(request)
        index = min(len(self.requests), len(self._responses)) - 1
        outcome = self._responses[index]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(
            outcome.status_code,
            headers=outcome.headers,
            content=outcome.content,
        )
