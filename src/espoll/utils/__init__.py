r"""Utility helpers for the poll executors.

This package provides parameter validation, the monotonic deadline and
ticker used to schedule attempts, and decoding of JSON response bodies
into caller-provided destinations.
"""

from __future__ import annotations

__all__ = ["Deadline", "Ticker", "decode_into", "validate_poll_params"]

from espoll.utils.decode import decode_into
from espoll.utils.timing import Deadline, Ticker
from espoll.utils.validation import validate_poll_params
