"""Pytest configuration and shared fixtures."""

import pytest
from typing import Callable

from tradescan_app.data.models import Trade

HEADER = "Period\tTime\tClosing Price\tChange\tVolume"

SAMPLE_ROWS = [
    "1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t314,937.689",
    "2\tSun, 11/17, 20:00\t$233.96\t+$0.56\t190,728.773",
    "3\tSun, 11/17, 21:00\t$233.48\t$-0.48\t209,209.63",
    "4\tSun, 11/17, 22:00\t$233.86\t+$0.38\t190,428.269",
    "5\tSun, 11/17, 23:00\t$232.74\t$-1.12\t158,095.099",
    "6\tMon, 11/18, 00:00\t$235.40\t+$2.66\t174,984.659",
    "7\tMon, 11/18, 01:00\t$234.85\t$-0.55\t152,686.214",
    "8\tMon, 11/18, 02:00\t$235.42\t+$0.57\t174,935.147",
    "9\tMon, 11/18, 03:00\t$234.74\t$-0.68\t197,104.863",
    "10\tMon, 11/18, 04:00\t$237.47\t+$2.73\t239,350.042",
]


@pytest.fixture
def sample_text() -> str:
    """Six-row tabular sample."""
    return "\n".join([HEADER] + SAMPLE_ROWS[:6])


@pytest.fixture
def full_sample_text() -> str:
    """Ten-row tabular sample."""
    return "\n".join([HEADER] + SAMPLE_ROWS)


@pytest.fixture
def make_trade() -> Callable[..., Trade]:
    """Factory for Trades with sensible defaults."""
    def _make(period: int = 1, day: str = "Mon", time: str = "09:00",
              price: float = 100.0, date: str = "11/18/23") -> Trade:
        return Trade(period=period, day=day, date=date, time=time, price=price)
    return _make


@pytest.fixture
def make_trades(make_trade) -> Callable[[list[float]], list[Trade]]:
    """Build consecutive-period Trades from a list of prices."""
    def _make(prices: list[float]) -> list[Trade]:
        return [make_trade(period=i + 1, price=price) for i, price in enumerate(prices)]
    return _make
