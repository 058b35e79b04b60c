"""
Main analysis engine coordinator.

Orchestrates the price-history pipeline:
Pasted Text → Parser → (Max-Profit Scan + Buckets) and (PnL Pairing → Pattern Mining)

Every call builds its results from scratch; the engine holds nothing but its
frozen configuration.
"""

from collections.abc import Sequence
from dataclasses import dataclass, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional

import orjson

from .analysis.buckets import aggregate_buckets
from .analysis.max_profit import find_max_profit
from .analysis.models import BucketAnalysis, PatternBucket, PatternReport, PnLStatistics, SideStats
from .analysis.patterns import mine_patterns
from .analysis.pnl import compute_pnl_statistics
from .config.defaults import DefaultConfig, get_default_config
from .config.loader import load_config
from .data.models import ParseResult, Trade, TradePair
from .data.parsers import parse_trade_text
from .errors import ParseEmptyError
from .logging.config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MarketAnalysis:
    """Single-shot analysis: best buy/sell pair plus day/time rankings"""
    max_profit: float
    best_buy: Trade
    best_sell: Trade
    best_buy_day: str
    best_sell_day: str
    best_buy_time: str
    best_sell_time: str
    buckets: BucketAnalysis


@dataclass(frozen=True)
class PnLReport:
    """Sequential PnL statistics and the patterns mined from the same pairs"""
    statistics: PnLStatistics
    patterns: PatternReport


@dataclass(frozen=True)
class AnalysisReport:
    """Everything derived from one block of pasted text"""
    parse: ParseResult
    market: MarketAnalysis
    pnl: PnLReport

    @property
    def total_trades(self) -> int:
        return len(self.parse.trades)


class TradeAnalysisEngine:
    """
    Stateless coordinator for price-history analysis.

    Each public method is a pure function of its arguments and the engine's
    configuration.
    """

    def __init__(self, config: Optional[DefaultConfig] = None) -> None:
        self.config = config or get_default_config()

    @classmethod
    def from_config_dir(cls, config_dir: Optional[Path] = None,
                        overrides: Optional[dict[str, Any]] = None) -> "TradeAnalysisEngine":
        """Create an engine from analyzer.yaml and keyword overrides."""
        return cls(load_config(config_dir, overrides))

    def parse(self, text: str) -> tuple[Trade, ...]:
        """Parse text into Trades; empty when nothing matched."""
        return parse_trade_text(text, self.config.parser).trades

    def parse_strict(self, text: str) -> ParseResult:
        """
        Parse text and require at least one Trade.

        Raises:
            ParseEmptyError: If no line produced a Trade
        """
        result = parse_trade_text(text, self.config.parser)
        if not result.success:
            logger.warning(
                "No valid trades found in input",
                mode=result.mode,
                candidate_lines=result.candidate_lines,
                rejected_lines=result.rejected_lines
            )
            raise ParseEmptyError(
                "No valid data found in input",
                line_count=result.candidate_lines,
                context={"mode": result.mode, "rejected_lines": result.rejected_lines}
            )
        return result

    def analyze_max_profit_and_buckets(self, trades: Sequence[Trade]) -> MarketAnalysis:
        """
        Find the most profitable buy/sell pair and rank days and times.

        Raises:
            InsufficientDataError: If fewer than two trades are given
        """
        best = find_max_profit(trades)
        buckets = aggregate_buckets(trades)

        return MarketAnalysis(
            max_profit=best.profit,
            best_buy=best.buy,
            best_sell=best.sell,
            best_buy_day=buckets.best_buy_day,
            best_sell_day=buckets.best_sell_day,
            best_buy_time=buckets.best_buy_time,
            best_sell_time=buckets.best_sell_time,
            buckets=buckets,
        )

    def compute_pnl(self, trades: Sequence[Trade]) -> PnLReport:
        """
        Pair trades sequentially and mine win-rate patterns from the pairs.

        Raises:
            InsufficientDataError: If fewer than two trades are given
        """
        statistics = compute_pnl_statistics(trades, self.config.pnl)
        patterns = mine_patterns(trades, statistics, self.config.patterns)
        return PnLReport(statistics=statistics, patterns=patterns)

    def analyze_text(self, text: str) -> AnalysisReport:
        """
        Run the complete pipeline over pasted text.

        Raises:
            ParseEmptyError: If no valid trades were parsed
            InsufficientDataError: If only one trade was parsed
        """
        parsed = self.parse_strict(text)
        market = self.analyze_max_profit_and_buckets(parsed.trades)
        pnl = self.compute_pnl(parsed.trades)

        logger.info(
            "Analysis complete",
            total_trades=len(parsed.trades),
            max_profit=round(market.max_profit, 4),
            net_pnl=round(pnl.statistics.net_pnl, 4),
            win_rate=pnl.statistics.win_rate
        )

        return AnalysisReport(parse=parsed, market=market, pnl=pnl)


# Read-only properties included alongside dataclass fields in JSON output
_DERIVED_FIELDS: dict[type, tuple[str, ...]] = {
    TradePair: ("holding_period",),
    PatternBucket: ("win_rate", "avg_profit"),
    SideStats: ("win_rate", "avg_price"),
    AnalysisReport: ("total_trades",),
}


def _serialize(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        data = {f.name: getattr(obj, f.name) for f in fields(obj)}
        for name in _DERIVED_FIELDS.get(type(obj), ()):
            data[name] = getattr(obj, name)
        return data
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def report_to_json(report: Any, indent: bool = True) -> bytes:
    """
    Serialize an analysis result to JSON bytes with orjson.

    Dataclasses are expanded field by field, with derived values such as
    win rates included.
    """
    option = orjson.OPT_PASSTHROUGH_DATACLASS | orjson.OPT_NON_STR_KEYS
    if indent:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(report, default=_serialize, option=option)


def analyze_text(text: str, config: Optional[DefaultConfig] = None) -> AnalysisReport:
    """Convenience wrapper: analyze pasted text with the given or default config."""
    return TradeAnalysisEngine(config).analyze_text(text)
