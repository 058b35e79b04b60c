"""Default configuration parameters for the price-history analyzer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserParams:
    """Record parser parameters."""
    default_year_token: str = "23"      # Appended as "/23" to dates without a year
    century_prefix: str = "20"          # Prefixed to two-digit years


@dataclass(frozen=True)
class PatternParams:
    """High-probability pattern filter thresholds."""
    min_samples: int = 3                        # Minimum bucket sample size
    min_win_rate_pct: float = 60.0              # Strict lower bound on bucket win rate
    recommendation_win_rate_pct: float = 60.0   # Overall win rate needed for a recommendation


@dataclass(frozen=True)
class PnLParams:
    """Sequential PnL parameters."""
    win_rate_decimals: int = 2


@dataclass(frozen=True)
class DefaultConfig:
    """Complete analyzer configuration."""
    parser: ParserParams
    patterns: PatternParams
    pnl: PnLParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        parser=ParserParams(),
        patterns=PatternParams(),
        pnl=PnLParams(),
    )
