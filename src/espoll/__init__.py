r"""espoll - Poll an Elasticsearch-compatible API until a condition holds.

Search and index services acknowledge writes before the data becomes
searchable. This package sends a request and re-sends it until a
condition over the response holds or a deadline elapses, which makes
test assertions against such services reliable.

Key Features:
    - Synchronous and asyncio poll executors and clients built on httpx
    - Request bodies captured once and replayed byte-for-byte on every attempt
    - Composable response conditions
    - Deadline checked only between attempts, with a lazily started poll ticker
    - Transport errors, error statuses and decode errors are never retried
    - Builders for common JSON query DSL fragments

Example:
    ```pycon
    >>> from espoll import PollClient, RequestOptions
    >>> from espoll.conditions import hits_condition
    >>> from espoll.query import BoolQuery, TermQuery
    >>> with PollClient(base_url="http://localhost:9200") as client:  # doctest: +SKIP
    ...     result = {}
    ...     client.search(
    ...         "traces-apm*",
    ...         BoolQuery(filter=[TermQuery(field="processor.event", value="transaction")]),
    ...         result,
    ...         options=RequestOptions(timeout=30.0, condition=hits_condition(3)),
    ...     )
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncPollClient",
    "DeadlineExceededError",
    "PollCancelledError",
    "PollClient",
    "RequestOptions",
    "ResponseError",
    "__version__",
    "all_condition",
    "wrap_async_client",
    "wrap_client",
]

from importlib.metadata import PackageNotFoundError, version

from espoll.client import PollClient, wrap_client
from espoll.client_async import AsyncPollClient, wrap_async_client
from espoll.conditions import all_condition
from espoll.config import RequestOptions
from espoll.exceptions import DeadlineExceededError, PollCancelledError, ResponseError

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
