r"""Decode a JSON response body into a caller-provided destination."""

from __future__ import annotations

__all__ = ["decode_into"]

from collections.abc import MutableMapping, MutableSequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


def decode_into(
    response: httpx.Response,
    out: MutableMapping[str, Any] | MutableSequence[Any],
) -> None:
    r"""Decode the JSON body of ``response`` into ``out`` in place.

    A mapping destination is cleared and updated with the decoded JSON
    object. A sequence destination has its contents replaced with the
    decoded JSON array. The response body must already be read.

    Args:
        response: The response whose body is decoded.
        out: The destination that receives the decoded value.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON.
        TypeError: If the decoded value does not match the shape of
            ``out``.

    Example:
        ```pycon
        >>> import httpx
        >>> from espoll.utils.decode import decode_into
        >>> response = httpx.Response(200, json={"hits": {"total": {"value": 3}}})
        >>> out = {}
        >>> decode_into(response, out)
        >>> out["hits"]["total"]["value"]
        3

        ```
    """
    value = response.json()
    if isinstance(out, MutableMapping):
        if not isinstance(value, dict):
            msg = f"cannot decode JSON {type(value).__name__} into {type(out).__name__}"
            raise TypeError(msg)
        out.clear()
        out.update(value)
        return
    if isinstance(out, MutableSequence):
        if not isinstance(value, list):
            msg = f"cannot decode JSON {type(value).__name__} into {type(out).__name__}"
            raise TypeError(msg)
        out[:] = value
        return
    msg = f"unsupported decode destination: {type(out).__name__}"
    raise TypeError(msg)
