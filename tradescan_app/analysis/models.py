"""Result models for price-history analyses"""

from dataclasses import dataclass, field
from typing import Optional, Union

from ..data.models import Trade, TradePair

PatternKey = Union[str, int]


@dataclass(frozen=True)
class MaxProfitResult:
    """Best single buy/sell pair found by the exhaustive scan"""
    buy: Trade
    sell: Trade
    buy_index: int
    sell_index: int
    profit: float


@dataclass
class Bucket:
    """Running price average for trades sharing a day or time key"""
    count: int = 0
    sum_price: float = 0.0
    avg_price: float = 0.0
    trades: list[Trade] = field(default_factory=list)

    def add(self, trade: Trade) -> None:
        self.count += 1
        self.sum_price += trade.price
        self.avg_price = self.sum_price / self.count
        self.trades.append(trade)


@dataclass(frozen=True)
class BucketAnalysis:
    """Day and time buckets with their best buy/sell keys"""
    day_buckets: dict[str, Bucket]
    time_buckets: dict[str, Bucket]
    best_buy_day: str
    best_sell_day: str
    best_buy_time: str
    best_sell_time: str


@dataclass(frozen=True)
class PnLStatistics:
    """Sequential round-trip PnL summary"""
    pairs: tuple[TradePair, ...]
    total_pairs: int
    net_pnl: float
    profitable_trades: int
    loss_trades: int
    total_profit_value: float
    total_loss_value: float
    max_profit: Optional[TradePair]
    max_loss: Optional[TradePair]
    win_rate: float
    avg_profit: float = 0.0
    avg_loss: float = 0.0
    profit_factor: Optional[float] = None


@dataclass
class PatternBucket:
    """Win/loss tally for pairs sharing a day, time or holding-period key"""
    key: PatternKey
    total: int = 0
    profitable: int = 0
    total_abs_value: float = 0.0
    profitable_value: float = 0.0

    def add(self, pair: TradePair) -> None:
        self.total += 1
        self.total_abs_value += abs(pair.pnl)
        if pair.is_win:
            self.profitable += 1
            self.profitable_value += pair.pnl

    @property
    def win_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.profitable / self.total * 100

    @property
    def avg_profit(self) -> float:
        if self.profitable == 0:
            return 0.0
        return self.profitable_value / self.profitable


@dataclass(frozen=True)
class Recommendation:
    """Entry timing suggested by winning round-trips"""
    best_entry_day: str
    best_entry_time: str
    avg_holding_period: int
    sample_trade: TradePair


@dataclass
class SideStats:
    """Entry or exit tally for one day/time combination"""
    count: int = 0
    success_count: int = 0
    prices: list[float] = field(default_factory=list)

    def add(self, price: float, success: bool) -> None:
        self.count += 1
        self.prices.append(price)
        if success:
            self.success_count += 1

    @property
    def win_rate(self) -> float:
        if self.count == 0:
            return 0.0
        return self.success_count / self.count * 100

    @property
    def avg_price(self) -> float:
        if not self.prices:
            return 0.0
        return sum(self.prices) / len(self.prices)


@dataclass
class OpportunityBucket:
    """Entries and exits observed at one day/time combination"""
    day: str
    time: str
    entries: SideStats = field(default_factory=SideStats)
    exits: SideStats = field(default_factory=SideStats)


@dataclass(frozen=True)
class Opportunity:
    """Day/time combination whose entries or exits cleared the win-rate filter"""
    day: str
    time: str
    side: str           # "entry" or "exit"
    win_rate: float
    avg_price: float
    sample_count: int


@dataclass(frozen=True)
class PatternReport:
    """All pattern-mining outputs for one analysis call"""
    high_probability_days: tuple[PatternBucket, ...]
    high_probability_times: tuple[PatternBucket, ...]
    high_probability_holding_periods: tuple[PatternBucket, ...]
    recommendation: Optional[Recommendation]
    entry_opportunities: tuple[Opportunity, ...]
    exit_opportunities: tuple[Opportunity, ...]

    @property
    def top_entry(self) -> Optional[Opportunity]:
        return self.entry_opportunities[0] if self.entry_opportunities else None

    @property
    def top_exit(self) -> Optional[Opportunity]:
        return self.exit_opportunities[0] if self.exit_opportunities else None
