#!/usr/bin/env python3
"""
Basic Usage Example - TradeScan Price History Analyzer

This script runs the analyzer over a small pasted price table and shows how
to:
- Parse tabular price history
- Find the most profitable buy/sell pair and the best days/times
- Compute sequential round-trip PnL
- Read mined win-rate patterns

Run: python examples/basic_usage.py
"""

from tradescan_app.engine import TradeAnalysisEngine, report_to_json
from tradescan_app.logging import configure_logging

SAMPLE_DATA = """Period\tTime\tClosing Price\tChange\tVolume
1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t314,937.689
2\tSun, 11/17, 20:00\t$233.96\t+$0.56\t190,728.773
3\tSun, 11/17, 21:00\t$233.48\t$-0.48\t209,209.63
4\tSun, 11/17, 22:00\t$233.86\t+$0.38\t190,428.269
5\tSun, 11/17, 23:00\t$232.74\t$-1.12\t158,095.099
6\tMon, 11/18, 00:00\t$235.40\t+$2.66\t174,984.659
7\tMon, 11/18, 01:00\t$234.85\t$-0.55\t152,686.214
8\tMon, 11/18, 02:00\t$235.42\t+$0.57\t174,935.147
9\tMon, 11/18, 03:00\t$234.74\t$-0.68\t197,104.863
10\tMon, 11/18, 04:00\t$237.47\t+$2.73\t239,350.042"""


def main() -> None:
    configure_logging(level="INFO", include_timestamp=False)

    engine = TradeAnalysisEngine()
    report = engine.analyze_text(SAMPLE_DATA)

    market = report.market
    print(f"📊 Parsed {report.total_trades} trades")
    print(f"📈 Max profit ${market.max_profit:.2f}: buy {market.best_buy.day} {market.best_buy.time} "
          f"@ ${market.best_buy.price:.2f}, sell {market.best_sell.day} {market.best_sell.time} "
          f"@ ${market.best_sell.price:.2f}")
    print(f"📅 Buy on {market.best_buy_day} at {market.best_buy_time}, "
          f"sell on {market.best_sell_day} at {market.best_sell_time}")

    stats = report.pnl.statistics
    print(f"💰 {stats.total_pairs} round trips, net ${stats.net_pnl:.2f}, win rate {stats.win_rate:.2f}%")

    recommendation = report.pnl.patterns.recommendation
    if recommendation:
        print(f"🎯 Enter {recommendation.best_entry_day} at {recommendation.best_entry_time}, "
              f"hold ~{recommendation.avg_holding_period} period(s)")

    print(report_to_json(report.pnl.statistics).decode())


if __name__ == "__main__":
    main()
