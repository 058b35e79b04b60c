"""
Record parser for pasted price-history text.

This module turns a raw multi-line text blob into an ordered tuple of Trade
records. Malformed lines are dropped individually and logged; they never
invalidate the rest of the input.
"""

from typing import Optional

from ..config.defaults import ParserParams
from ..logging.config import get_logger, log_line_rejected
from .grammars import LINE_FORMATS, LineFormat, LineRejected, select_format
from .models import ParseResult, Trade

logger = get_logger(__name__)


def parse_trade_text(text: str, params: Optional[ParserParams] = None,
                     formats: tuple[LineFormat, ...] = LINE_FORMATS) -> ParseResult:
    """
    Parse pasted price-history text into Trades.

    The block format is chosen by sniffing the first line: a header containing
    "Period", "Time" and "Closing Price" selects the tabular format, anything
    else falls back to the inline "**"-delimited format.

    Args:
        text: Raw pasted text
        params: Parser parameters (year token, century prefix)
        formats: Block formats to try, in priority order

    Returns:
        ParseResult with trades in source-line order; empty when nothing matched
    """
    params = params or ParserParams()
    lines = text.strip().splitlines() if text else []

    if not lines:
        logger.info("No input lines to parse")
        return ParseResult(trades=(), mode="none", candidate_lines=0, rejected_lines=0)

    line_format = select_format(lines[0], formats)
    if line_format is None:
        logger.warning("No line format accepted the input", first_line=lines[0])
        return ParseResult(trades=(), mode="none", candidate_lines=0, rejected_lines=0)

    start = 1 if line_format.has_header else 0
    trades: list[Trade] = []
    candidates = 0
    rejected = 0

    for line_number, raw_line in enumerate(lines[start:], start=start + 1):
        line = raw_line.strip()
        if not line:
            continue

        candidates += 1
        try:
            trades.append(line_format.parse_line(line, params))
        except LineRejected as e:
            rejected += 1
            log_line_rejected(logger, line_number, str(e), line, context={"mode": line_format.name})

    logger.info(
        "Parsed price history",
        mode=line_format.name,
        trades=len(trades),
        candidate_lines=candidates,
        rejected_lines=rejected
    )

    return ParseResult(
        trades=tuple(trades),
        mode=line_format.name,
        candidate_lines=candidates,
        rejected_lines=rejected,
    )


def parse_trades(text: str, params: Optional[ParserParams] = None) -> tuple[Trade, ...]:
    """Parse pasted text and return only the Trades."""
    return parse_trade_text(text, params).trades
