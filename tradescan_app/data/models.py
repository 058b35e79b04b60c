"""
Canonical data models for parsed price history.

This module defines immutable data structures that represent validated
price observations after parsing from pasted text.
"""

from dataclasses import dataclass
from typing import Optional

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class Trade:
    """Single parsed price observation."""
    period: int                     # Sequence index as given in the source row
    day: str                        # Three-letter weekday abbreviation
    date: str                       # Normalized MM/DD/<year> string
    time: str                       # H:MM or HH:MM, verbatim
    price: float                    # Closing price
    change: Optional[float] = None  # Signed delta vs previous period
    volume: Optional[float] = None  # Volume, thousands separators stripped


@dataclass(frozen=True)
class TradePair:
    """Round-trip formed from an entry trade and the following exit trade."""
    entry: Trade
    exit: Trade
    pnl: float

    @classmethod
    def from_trades(cls, entry: Trade, exit: Trade) -> "TradePair":
        """Build a pair, computing PnL as exit price minus entry price."""
        return cls(entry=entry, exit=exit, pnl=exit.price - entry.price)

    @property
    def holding_period(self) -> int:
        """Number of periods between entry and exit."""
        return self.exit.period - self.entry.period

    @property
    def is_win(self) -> bool:
        return self.pnl > 0

    @property
    def is_loss(self) -> bool:
        return self.pnl < 0


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing a block of pasted text."""
    trades: tuple[Trade, ...]
    mode: str                   # "tabular" or "inline"
    candidate_lines: int        # Non-blank lines considered (header excluded)
    rejected_lines: int         # Candidate lines dropped as malformed

    @property
    def success(self) -> bool:
        """True if at least one trade was parsed."""
        return len(self.trades) > 0
