"""
TradeScan - Price History Strategy Analyzer

Parses pasted price-history tables and derives trading-strategy statistics:
the most profitable buy/sell pair, weekday and time-of-day price rankings,
sequential round-trip PnL and high win-rate entry/exit patterns.
"""

__version__ = "0.1.0"
__author__ = "TradeScan Team"
