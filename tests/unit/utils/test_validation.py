from __future__ import annotations

import pytest

from espoll.utils.validation import validate_poll_params


@pytest.mark.parametrize(("timeout", "interval"), [(60.0, 0.1), (None, 1.0), (0.001, 0.001)])
def test_validate_poll_params_valid(timeout: float | None, interval: float) -> None:
    validate_poll_params(timeout=timeout, interval=interval)


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_validate_poll_params_invalid_timeout(timeout: float) -> None:
    with pytest.raises(ValueError, match=rf"timeout must be > 0 or None, got {timeout}"):
        validate_poll_params(timeout=timeout, interval=0.1)


@pytest.mark.parametrize("interval", [0, -0.1])
def test_validate_poll_params_invalid_interval(interval: float) -> None:
    with pytest.raises(ValueError, match=rf"interval must be > 0, got {interval}"):
        validate_poll_params(timeout=None, interval=interval)
