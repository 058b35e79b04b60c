#!/usr/bin/env python3
"""Analyze pasted price history from a file or stdin.

Usage:
    python scripts/analyze_prices.py prices.txt
    pbpaste | python scripts/analyze_prices.py --json
"""

import argparse
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tradescan_app.engine import AnalysisReport, TradeAnalysisEngine, report_to_json
from tradescan_app.errors import AnalysisError, ConfigurationError, InsufficientDataError, ParseEmptyError
from tradescan_app.logging import configure_logging


def render_report(report: AnalysisReport) -> str:
    """Render an analysis report as plain text."""
    market = report.market
    stats = report.pnl.statistics
    patterns = report.pnl.patterns
    day_buckets = market.buckets.day_buckets
    time_buckets = market.buckets.time_buckets

    lines = [
        f"Total trades:     {report.total_trades} ({report.parse.rejected_lines} lines skipped)",
        f"Maximum profit:   ${market.max_profit:.2f}",
        f"Best entry:       {market.best_buy.day}, {market.best_buy.date} {market.best_buy.time} @ ${market.best_buy.price:.2f}",
        f"Best exit:        {market.best_sell.day}, {market.best_sell.date} {market.best_sell.time} @ ${market.best_sell.price:.2f}",
        f"Best buy day:     {market.best_buy_day} (avg ${day_buckets[market.best_buy_day].avg_price:.2f})",
        f"Best sell day:    {market.best_sell_day} (avg ${day_buckets[market.best_sell_day].avg_price:.2f})",
        f"Best buy time:    {market.best_buy_time} (avg ${time_buckets[market.best_buy_time].avg_price:.2f})",
        f"Best sell time:   {market.best_sell_time} (avg ${time_buckets[market.best_sell_time].avg_price:.2f})",
        "",
        f"Round trips:      {stats.total_pairs}",
        f"Net PnL:          ${stats.net_pnl:.2f}",
        f"Win rate:         {stats.win_rate:.2f}% ({stats.profitable_trades} wins / {stats.loss_trades} losses)",
    ]

    if stats.max_profit is not None:
        lines.append(f"Largest win:      ${stats.max_profit.pnl:.2f}")
    if stats.max_loss is not None:
        lines.append(f"Largest loss:     ${stats.max_loss.pnl:.2f}")

    for title, buckets in (
        ("High win-rate days", patterns.high_probability_days),
        ("High win-rate times", patterns.high_probability_times),
        ("High win-rate holding periods", patterns.high_probability_holding_periods),
    ):
        if buckets:
            lines.append("")
            lines.append(f"{title}:")
            for bucket in buckets:
                lines.append(f"  {bucket.key}: {bucket.win_rate:.1f}% of {bucket.total} (avg win ${bucket.avg_profit:.2f})")

    if patterns.recommendation is not None:
        rec = patterns.recommendation
        lines.append("")
        lines.append(
            f"Recommendation:   enter {rec.best_entry_day} at {rec.best_entry_time}, "
            f"hold ~{rec.avg_holding_period} periods (best sample ${rec.sample_trade.pnl:.2f})"
        )

    for label, opportunity in (("Top entry", patterns.top_entry), ("Top exit", patterns.top_exit)):
        if opportunity is not None:
            lines.append(
                f"{label}:        {opportunity.day} {opportunity.time} - {opportunity.win_rate:.1f}% "
                f"over {opportunity.sample_count} samples, avg ${opportunity.avg_price:.2f}"
            )

    return "\n".join(lines)


def main() -> int:
    parser = argparse.ArgumentParser(description="Analyze pasted price history")
    parser.add_argument("path", nargs="?", help="File to read (default: stdin)")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    parser.add_argument("--config-dir", type=Path, default=None, help="Directory holding analyzer.yaml")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    configure_logging(level=args.log_level, include_timestamp=False)

    try:
        text = Path(args.path).read_text() if args.path else sys.stdin.read()
    except OSError as e:
        print(f"Cannot read input: {e}", file=sys.stderr)
        return 1

    try:
        engine = TradeAnalysisEngine.from_config_dir(args.config_dir)
        report = engine.analyze_text(text)
    except ParseEmptyError:
        print("No valid data found. Please check your input format.", file=sys.stderr)
        return 1
    except InsufficientDataError as e:
        print(f"Not enough data: need {e.required_count} trades, found {e.available_count}.", file=sys.stderr)
        return 1
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        for error in e.errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})", file=sys.stderr)
        return 2
    except AnalysisError as e:
        print(f"Analysis failed: {e}", file=sys.stderr)
        return 1

    if args.json:
        sys.stdout.write(report_to_json(report).decode())
        sys.stdout.write("\n")
    else:
        print(render_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
