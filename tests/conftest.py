from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

from tests.helpers import FakeClock

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def fake_clock() -> Generator[FakeClock, None, None]:
    """Drive deadlines, tickers and time.sleep from a fake clock.

    Sleeping advances the clock instantly, so deadline tests do not
    wait for real time to pass.
    """
    clock = FakeClock()
    with (
        patch("espoll.utils.timing.monotonic", new=clock.monotonic),
        patch("time.sleep", side_effect=clock.sleep),
    ):
        yield clock


@pytest.fixture
def fake_async_clock() -> Generator[FakeClock, None, None]:
    """Drive deadlines, tickers and asyncio.sleep from a fake clock."""
    clock = FakeClock()
    with (
        patch("espoll.utils.timing.monotonic", new=clock.monotonic),
        patch("asyncio.sleep", new=AsyncMock(side_effect=clock.sleep)),
    ):
        yield clock

