"""Profitability and pattern analyses over parsed trade sequences"""

from .buckets import aggregate_buckets
from .max_profit import find_max_profit
from .patterns import build_recommendation, filter_patterns, mine_opportunities, mine_patterns
from .pnl import compute_pnl_statistics, pair_trades

__all__ = [
    "aggregate_buckets",
    "find_max_profit",
    "build_recommendation",
    "filter_patterns",
    "mine_opportunities",
    "mine_patterns",
    "compute_pnl_statistics",
    "pair_trades",
]
