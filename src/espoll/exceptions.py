r"""Exception types raised while polling an Elasticsearch-compatible API.

Transport failures (``httpx.TransportError``), local I/O failures while
buffering a request body, and JSON decode failures are not wrapped: they
propagate to the caller exactly as raised by the underlying library.
"""

from __future__ import annotations

__all__ = ["DeadlineExceededError", "PollCancelledError", "ResponseError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class ResponseError(Exception):
    r"""Raised when the remote service answers with an error status.

    Application errors are terminal: a request the service rejected is
    never re-sent, even when a condition and a generous timeout are set.

    Args:
        status_code: The HTTP status code returned by the service.
        message: The raw error body returned by the service.
        response: The response object, if available.

    Attributes:
        status_code: The HTTP status code returned by the service.
        message: The raw error body returned by the service.
        response: The response object, if available.

    Example:
        ```pycon
        >>> from espoll.exceptions import ResponseError
        >>> error = ResponseError(status_code=404, message='{"found":false}')
        >>> error.status_code
        404
        >>> str(error)
        '{"found":false}'

        ```
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.response = response

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(status_code={self.status_code}, message={self.message!r})"


class DeadlineExceededError(TimeoutError):
    r"""Raised when the deadline elapses before the condition holds.

    Only a call with a condition and a finite timeout can raise this
    error. The in-flight attempt is always allowed to complete, so the
    error is raised between attempts.

    Args:
        timeout: The configured timeout in seconds.
        attempts: The number of attempts made before giving up.

    Example:
        ```pycon
        >>> from espoll.exceptions import DeadlineExceededError
        >>> error = DeadlineExceededError(timeout=1.0, attempts=10)
        >>> str(error)
        'deadline exceeded after 10 attempts (timeout=1.0s)'

        ```
    """

    def __init__(self, timeout: float, attempts: int) -> None:
        super().__init__(f"deadline exceeded after {attempts} attempts (timeout={timeout}s)")
        self.timeout = timeout
        self.attempts = attempts


class PollCancelledError(Exception):
    r"""Raised when the caller's cancel event is set while waiting for
    the next attempt.

    Args:
        attempts: The number of attempts made before cancellation.
    """

    def __init__(self, attempts: int) -> None:
        super().__init__(f"polling cancelled after {attempts} attempts")
        self.attempts = attempts
