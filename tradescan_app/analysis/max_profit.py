"""Exhaustive best buy/sell pair search"""

from collections.abc import Sequence

from ..data.models import Trade
from ..errors import InsufficientDataError
from ..logging.config import get_analysis_logger
from .models import MaxProfitResult

logger = get_analysis_logger(__name__, "max_profit")


def find_max_profit(trades: Sequence[Trade]) -> MaxProfitResult:
    """
    Find the buy/sell pair (i < j) with the largest price difference.

    Every ordered pair is examined. Updates use a strict comparison, so on
    ties the first pair in (i, j) scan order wins. The profit is not floored
    at zero: a steadily falling series yields the least negative pair.

    Args:
        trades: Trades in source-row order

    Returns:
        MaxProfitResult with the buy trade, sell trade and signed profit

    Raises:
        InsufficientDataError: If fewer than two trades are given
    """
    if len(trades) < 2:
        raise InsufficientDataError(
            "At least two trades are required to find a buy/sell pair",
            required_count=2,
            available_count=len(trades)
        )

    best_i, best_j = 0, 1
    max_profit = float("-inf")

    for i in range(len(trades) - 1):
        buy_price = trades[i].price
        for j in range(i + 1, len(trades)):
            profit = trades[j].price - buy_price
            if profit > max_profit:
                max_profit = profit
                best_i, best_j = i, j

    logger.debug(
        "Max profit scan complete",
        trade_count=len(trades),
        buy_index=best_i,
        sell_index=best_j,
        profit=max_profit
    )

    return MaxProfitResult(
        buy=trades[best_i],
        sell=trades[best_j],
        buy_index=best_i,
        sell_index=best_j,
        profit=max_profit,
    )
