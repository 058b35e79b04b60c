"""Sequential round-trip PnL accounting"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..config.defaults import PnLParams
from ..data.models import Trade, TradePair
from ..errors import InsufficientDataError
from ..logging.config import get_analysis_logger
from .models import PnLStatistics

logger = get_analysis_logger(__name__, "pnl")


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round to ``decimals`` places with halves going up (2.5 -> 3), unlike round()."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def pair_trades(trades: Sequence[Trade]) -> tuple[TradePair, ...]:
    """
    Pair trades in fixed steps of two: (0, 1), (2, 3), ...

    A trailing unpaired trade is ignored.
    """
    return tuple(
        TradePair.from_trades(trades[i], trades[i + 1])
        for i in range(0, len(trades) - 1, 2)
    )


def compute_pnl_statistics(trades: Sequence[Trade],
                           params: Optional[PnLParams] = None) -> PnLStatistics:
    """
    Compute PnL statistics over sequentially paired trades.

    Args:
        trades: Trades in source-row order
        params: PnL parameters (win-rate rounding)

    Returns:
        PnLStatistics; max_profit/max_loss are None when no pair exists

    Raises:
        InsufficientDataError: If fewer than two trades are given
    """
    params = params or PnLParams()

    if len(trades) < 2:
        raise InsufficientDataError(
            "At least two trades are required for PnL pairing",
            required_count=2,
            available_count=len(trades)
        )

    pairs = pair_trades(trades)

    net_pnl = 0.0
    profitable_trades = 0
    loss_trades = 0
    total_profit_value = 0.0
    total_loss_value = 0.0
    highest_pnl = float("-inf")
    lowest_pnl = float("inf")
    max_profit: Optional[TradePair] = None
    max_loss: Optional[TradePair] = None

    for pair in pairs:
        net_pnl += pair.pnl

        if pair.is_win:
            profitable_trades += 1
            total_profit_value += pair.pnl
        elif pair.is_loss:
            loss_trades += 1
            total_loss_value += abs(pair.pnl)

        if pair.pnl > highest_pnl:
            highest_pnl = pair.pnl
            max_profit = pair
        if pair.pnl < lowest_pnl:
            lowest_pnl = pair.pnl
            max_loss = pair

    total_pairs = len(pairs)
    win_rate = round_half_up(profitable_trades / total_pairs * 100, params.win_rate_decimals) if total_pairs else 0.0

    statistics = PnLStatistics(
        pairs=pairs,
        total_pairs=total_pairs,
        net_pnl=net_pnl,
        profitable_trades=profitable_trades,
        loss_trades=loss_trades,
        total_profit_value=total_profit_value,
        total_loss_value=total_loss_value,
        max_profit=max_profit,
        max_loss=max_loss,
        win_rate=win_rate,
        avg_profit=total_profit_value / profitable_trades if profitable_trades else 0.0,
        avg_loss=total_loss_value / loss_trades if loss_trades else 0.0,
        profit_factor=total_profit_value / total_loss_value if total_loss_value else None,
    )

    logger.info(
        "PnL statistics computed",
        total_pairs=total_pairs,
        net_pnl=round(net_pnl, 4),
        win_rate=win_rate,
        profitable_trades=profitable_trades,
        loss_trades=loss_trades
    )

    return statistics
