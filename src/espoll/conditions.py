r"""Conditions over a response that decide when polling may stop.

A condition is a plain callable taking an ``httpx.Response`` and
returning a boolean. Conditions must not have side effects: the
combinators evaluate them lazily and in order.
"""

from __future__ import annotations

__all__ = ["Condition", "all_condition", "any_condition", "hits_condition"]

import logging
from collections.abc import Callable

import httpx

logger: logging.Logger = logging.getLogger(__name__)

Condition = Callable[[httpx.Response], bool]


def all_condition(*conditions: Condition) -> Condition:
    r"""Return a condition that holds when every condition holds.

    Conditions are evaluated in the given order and evaluation stops at
    the first one returning ``False``. With no conditions the returned
    condition is always ``True``.

    Args:
        *conditions: The conditions to combine.

    Returns:
        The combined condition.

    Example:
        ```pycon
        >>> import httpx
        >>> from espoll.conditions import all_condition
        >>> response = httpx.Response(200, json={})
        >>> all_condition()(response)
        True
        >>> all_condition(lambda r: True, lambda r: False)(response)
        False

        ```
    """

    def condition(response: httpx.Response) -> bool:
        return all(cond(response) for cond in conditions)

    return condition


def any_condition(*conditions: Condition) -> Condition:
    r"""Return a condition that holds when at least one condition
    holds.

    Conditions are evaluated in the given order and evaluation stops at
    the first one returning ``True``. With no conditions the returned
    condition is always ``False``.

    Args:
        *conditions: The conditions to combine.

    Returns:
        The combined condition.
    """

    def condition(response: httpx.Response) -> bool:
        return any(cond(response) for cond in conditions)

    return condition


def hits_condition(minimum: int) -> Condition:
    r"""Return a condition that holds when a search response reports at
    least ``minimum`` hits.

    Both the object form (``{"total": {"value": 3}}``) and the legacy
    integer form (``{"total": 3}``) of ``hits.total`` are supported. A
    body that is not a search result counts as zero hits.

    Args:
        minimum: The minimum number of hits.

    Returns:
        The condition.

    Example:
        ```pycon
        >>> import httpx
        >>> from espoll.conditions import hits_condition
        >>> response = httpx.Response(200, json={"hits": {"total": {"value": 2}}})
        >>> hits_condition(2)(response)
        True
        >>> hits_condition(3)(response)
        False

        ```
    """

    def condition(response: httpx.Response) -> bool:
        total = _total_hits(response)
        logger.debug(f"search returned {total} hits, waiting for {minimum}")
        return total >= minimum

    return condition


def _total_hits(response: httpx.Response) -> int:
    try:
        body = response.json()
    except ValueError:
        return 0
    if not isinstance(body, dict):
        return 0
    hits = body.get("hits")
    if not isinstance(hits, dict):
        return 0
    total = hits.get("total", 0)
    if isinstance(total, dict):
        total = total.get("value", 0)
    return total if isinstance(total, int) else 0
