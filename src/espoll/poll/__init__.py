r"""Poll executors.

This package provides the executors that send a request and re-send it
until a condition over the response holds or a deadline elapses.

Public API:
    - PollExecutor: Synchronous poll executor
    - AsyncPollExecutor: Asynchronous poll executor
"""

from __future__ import annotations

__all__ = ["AsyncPollExecutor", "PollExecutor"]

from espoll.poll.executor import PollExecutor
from espoll.poll.executor_async import AsyncPollExecutor
