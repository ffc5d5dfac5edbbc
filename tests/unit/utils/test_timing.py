from __future__ import annotations

import pytest

from espoll.utils.timing import Deadline, Ticker
from tests.helpers import FakeClock


##############################
#     Tests for Deadline     #
##############################


def test_deadline_remaining(fake_clock: FakeClock) -> None:
    deadline = Deadline(timeout=10.0)
    fake_clock.advance(4.0)

    assert deadline.timeout == 10.0
    assert deadline.remaining() == pytest.approx(6.0)
    assert not deadline.expired()


def test_deadline_expired(fake_clock: FakeClock) -> None:
    deadline = Deadline(timeout=1.0)
    fake_clock.advance(1.0)

    assert deadline.expired()
    assert deadline.remaining() == 0.0


def test_deadline_remaining_never_negative(fake_clock: FakeClock) -> None:
    deadline = Deadline(timeout=1.0)
    fake_clock.advance(100.0)

    assert deadline.remaining() == 0.0


############################
#     Tests for Ticker     #
############################


def test_ticker_first_tick_one_interval_later(fake_clock: FakeClock) -> None:
    ticker = Ticker(interval=0.5)
    assert ticker.remaining() == pytest.approx(0.5)


def test_ticker_advance_fixed_rate(fake_clock: FakeClock) -> None:
    ticker = Ticker(interval=1.0)
    fake_clock.advance(1.0)
    ticker.advance()
    fake_clock.advance(0.25)

    assert ticker.next_tick == pytest.approx(2.0)
    assert ticker.remaining() == pytest.approx(0.75)


def test_ticker_overdue_tick_is_due_now(fake_clock: FakeClock) -> None:
    ticker = Ticker(interval=1.0)
    fake_clock.advance(3.5)

    assert ticker.remaining() == 0.0


def test_ticker_advance_skips_missed_ticks(fake_clock: FakeClock) -> None:
    ticker = Ticker(interval=1.0)
    fake_clock.advance(3.5)
    ticker.advance()

    assert ticker.next_tick == pytest.approx(4.0)
    assert ticker.remaining() == pytest.approx(0.5)
