"""Day and time-of-day average price buckets"""

from collections.abc import Callable, Sequence

from ..data.models import Trade
from ..errors import InsufficientDataError
from ..logging.config import get_analysis_logger
from .models import Bucket, BucketAnalysis

logger = get_analysis_logger(__name__, "buckets")


def build_buckets(trades: Sequence[Trade], key: Callable[[Trade], str]) -> dict[str, Bucket]:
    """
    Fold trades into buckets keyed by ``key(trade)``.

    Buckets keep insertion order, i.e. the order in which each key was first
    seen, and update their average after every trade.
    """
    buckets: dict[str, Bucket] = {}
    for trade in trades:
        bucket_key = key(trade)
        if bucket_key not in buckets:
            buckets[bucket_key] = Bucket()
        buckets[bucket_key].add(trade)
    return buckets


def lowest_average(buckets: dict[str, Bucket]) -> str:
    """Key with the minimum average price; first created bucket wins ties."""
    best = None
    for bucket_key, bucket in buckets.items():
        if best is None or bucket.avg_price < buckets[best].avg_price:
            best = bucket_key
    if best is None:
        raise InsufficientDataError("Cannot rank empty buckets", required_count=1, available_count=0)
    return best


def highest_average(buckets: dict[str, Bucket]) -> str:
    """Key with the maximum average price; first created bucket wins ties."""
    best = None
    for bucket_key, bucket in buckets.items():
        if best is None or bucket.avg_price > buckets[best].avg_price:
            best = bucket_key
    if best is None:
        raise InsufficientDataError("Cannot rank empty buckets", required_count=1, available_count=0)
    return best


def aggregate_buckets(trades: Sequence[Trade]) -> BucketAnalysis:
    """
    Group trades by weekday and by time of day and rank the groups.

    The best buy day/time is the bucket with the lowest average price and the
    best sell day/time the one with the highest.

    Raises:
        InsufficientDataError: If no trades are given
    """
    if not trades:
        raise InsufficientDataError(
            "At least one trade is required for bucket analysis",
            required_count=1,
            available_count=0
        )

    day_buckets = build_buckets(trades, lambda t: t.day)
    time_buckets = build_buckets(trades, lambda t: t.time)

    analysis = BucketAnalysis(
        day_buckets=day_buckets,
        time_buckets=time_buckets,
        best_buy_day=lowest_average(day_buckets),
        best_sell_day=highest_average(day_buckets),
        best_buy_time=lowest_average(time_buckets),
        best_sell_time=highest_average(time_buckets),
    )

    logger.debug(
        "Bucket analysis complete",
        day_buckets=len(day_buckets),
        time_buckets=len(time_buckets),
        best_buy_day=analysis.best_buy_day,
        best_sell_day=analysis.best_sell_day,
        best_buy_time=analysis.best_buy_time,
        best_sell_time=analysis.best_sell_time
    )

    return analysis
