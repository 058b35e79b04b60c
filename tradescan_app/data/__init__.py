"""
Price-history ingestion module.

Turns pasted tabular or inline price text into ordered, immutable Trade
records.
"""

from .models import ParseResult, Trade, TradePair
from .parsers import parse_trade_text, parse_trades

__all__ = [
    "ParseResult",
    "Trade",
    "TradePair",
    "parse_trade_text",
    "parse_trades",
]
