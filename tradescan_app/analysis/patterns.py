"""
High win-rate pattern mining over sequential round-trips.

Three independent aggregations run over the same (2k, 2k+1) pairing used for
PnL accounting:

1. Win-rate buckets keyed by entry day, entry time and holding period,
   filtered to a minimum sample size and a strict win-rate threshold.
2. A strategy recommendation built from winning round-trips, produced only
   when the overall win rate clears its threshold.
3. Day x time entry/exit opportunities, counted separately for the entry and
   the exit side of every pair.
"""

from collections.abc import Iterable, Sequence
from typing import Optional

from ..config.defaults import PatternParams
from ..data.models import Trade, TradePair
from ..errors import NoWinningPairsError
from ..logging.config import get_analysis_logger
from .models import (
    Opportunity,
    OpportunityBucket,
    PatternBucket,
    PatternKey,
    PatternReport,
    PnLStatistics,
    Recommendation,
    SideStats,
)
from .pnl import round_half_up

logger = get_analysis_logger(__name__, "patterns")


def filter_patterns(buckets: Iterable[PatternBucket],
                    params: Optional[PatternParams] = None) -> tuple[PatternBucket, ...]:
    """
    Keep buckets with enough samples and a win rate strictly above the threshold.

    Result is sorted by win rate, highest first; equal win rates keep their
    input order.
    """
    params = params or PatternParams()
    kept = [
        bucket for bucket in buckets
        if bucket.total >= params.min_samples and bucket.win_rate > params.min_win_rate_pct
    ]
    return tuple(sorted(kept, key=lambda b: b.win_rate, reverse=True))


def _bucket(buckets: dict, key: PatternKey) -> PatternBucket:
    if key not in buckets:
        buckets[key] = PatternBucket(key=key)
    return buckets[key]


def mine_win_rate_patterns(
    trades: Sequence[Trade],
    pairs: Sequence[TradePair],
    params: Optional[PatternParams] = None,
) -> tuple[tuple[PatternBucket, ...], tuple[PatternBucket, ...], tuple[PatternBucket, ...]]:
    """
    Build day, time and holding-period win-rate buckets and filter them.

    Day and time buckets are seeded for every trade, entries and exits alike,
    so bucket order follows first appearance in the input. Pairs are then
    credited to their entry's day and time and to their holding period.

    Returns:
        (high_probability_days, high_probability_times, high_probability_holding_periods)
    """
    day_buckets: dict[str, PatternBucket] = {}
    time_buckets: dict[str, PatternBucket] = {}
    holding_buckets: dict[int, PatternBucket] = {}

    for trade in trades:
        _bucket(day_buckets, trade.day)
        _bucket(time_buckets, trade.time)

    for pair in pairs:
        _bucket(day_buckets, pair.entry.day).add(pair)
        _bucket(time_buckets, pair.entry.time).add(pair)
        _bucket(holding_buckets, pair.holding_period).add(pair)

    return (
        filter_patterns(day_buckets.values(), params),
        filter_patterns(time_buckets.values(), params),
        filter_patterns(holding_buckets.values(), params),
    )


def _best_ratio(tallies: dict[str, PatternBucket]) -> str:
    best = None
    for key, tally in tallies.items():
        if best is None or tally.win_rate > tallies[best].win_rate:
            best = key
    return best


def build_recommendation(pairs: Sequence[TradePair]) -> Recommendation:
    """
    Derive an entry day/time and holding period from winning round-trips.

    Every pair counts as an entry for its entry day and time; only winning
    pairs count as profitable. The day and time with the best
    profitable/entries ratio are chosen, first seen winning ties.

    Raises:
        NoWinningPairsError: If no pair has a positive PnL
    """
    winners = [pair for pair in pairs if pair.is_win]
    if not winners:
        raise NoWinningPairsError(
            "No winning round-trips to base a recommendation on",
            total_pairs=len(pairs)
        )

    day_tallies: dict[str, PatternBucket] = {}
    time_tallies: dict[str, PatternBucket] = {}
    for pair in pairs:
        _bucket(day_tallies, pair.entry.day).add(pair)
        _bucket(time_tallies, pair.entry.time).add(pair)

    avg_holding = sum(pair.holding_period for pair in winners) / len(winners)

    sample_trade = winners[0]
    for pair in winners[1:]:
        if pair.pnl > sample_trade.pnl:
            sample_trade = pair

    return Recommendation(
        best_entry_day=_best_ratio(day_tallies),
        best_entry_time=_best_ratio(time_tallies),
        avg_holding_period=int(round_half_up(avg_holding)),
        sample_trade=sample_trade,
    )


def _opportunities(buckets: Iterable[OpportunityBucket], side: str,
                   params: PatternParams) -> tuple[Opportunity, ...]:
    found = []
    for bucket in buckets:
        stats: SideStats = bucket.entries if side == "entry" else bucket.exits
        if stats.count < params.min_samples:
            continue
        if stats.win_rate > params.min_win_rate_pct:
            found.append(Opportunity(
                day=bucket.day,
                time=bucket.time,
                side=side,
                win_rate=stats.win_rate,
                avg_price=stats.avg_price,
                sample_count=stats.count,
            ))
    return tuple(sorted(found, key=lambda o: o.win_rate, reverse=True))


def mine_opportunities(
    pairs: Sequence[TradePair],
    params: Optional[PatternParams] = None,
) -> tuple[tuple[Opportunity, ...], tuple[Opportunity, ...]]:
    """
    Rank day x time combinations as entry and exit points.

    Returns:
        (entry_opportunities, exit_opportunities), each sorted by win rate
    """
    params = params or PatternParams()
    buckets: dict[tuple[str, str], OpportunityBucket] = {}

    def bucket_for(trade: Trade) -> OpportunityBucket:
        key = (trade.day, trade.time)
        if key not in buckets:
            buckets[key] = OpportunityBucket(day=trade.day, time=trade.time)
        return buckets[key]

    for pair in pairs:
        success = pair.is_win
        bucket_for(pair.entry).entries.add(pair.entry.price, success)
        bucket_for(pair.exit).exits.add(pair.exit.price, success)

    return (
        _opportunities(buckets.values(), "entry", params),
        _opportunities(buckets.values(), "exit", params),
    )


def mine_patterns(trades: Sequence[Trade], statistics: PnLStatistics,
                  params: Optional[PatternParams] = None) -> PatternReport:
    """
    Run all pattern aggregations over the pairs in ``statistics``.

    The recommendation is only attempted when the overall win rate is above
    ``params.recommendation_win_rate_pct`` and is None when no pair won.
    """
    params = params or PatternParams()
    pairs = statistics.pairs

    days, times, holdings = mine_win_rate_patterns(trades, pairs, params)

    recommendation = None
    if statistics.win_rate > params.recommendation_win_rate_pct:
        try:
            recommendation = build_recommendation(pairs)
        except NoWinningPairsError as e:
            logger.info("Recommendation omitted", reason=str(e), total_pairs=e.total_pairs)

    entries, exits = mine_opportunities(pairs, params)

    report = PatternReport(
        high_probability_days=days,
        high_probability_times=times,
        high_probability_holding_periods=holdings,
        recommendation=recommendation,
        entry_opportunities=entries,
        exit_opportunities=exits,
    )

    logger.info(
        "Pattern mining complete",
        high_probability_days=len(days),
        high_probability_times=len(times),
        high_probability_holding_periods=len(holdings),
        entry_opportunities=len(entries),
        exit_opportunities=len(exits),
        has_recommendation=recommendation is not None
    )

    return report
