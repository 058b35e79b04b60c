"""
Error handling tests for the analyzer.

Tests cover the error taxonomy and how each analysis entry point reports
empty, short or unprofitable input.
"""

import pytest

from tradescan_app.engine import TradeAnalysisEngine
from tradescan_app.errors import (
    AnalysisError,
    ConfigurationError,
    InsufficientDataError,
    NoWinningPairsError,
    ParseEmptyError,
)


class TestErrorClassification:
    """Test error classification system."""

    def test_analysis_error_hierarchy(self):
        """Test that analysis errors share a base with context."""
        base_error = AnalysisError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        empty_error = ParseEmptyError("nothing parsed", line_count=4)
        assert isinstance(empty_error, AnalysisError)
        assert empty_error.line_count == 4

        insufficient_error = InsufficientDataError("too few", required_count=2, available_count=1)
        assert isinstance(insufficient_error, AnalysisError)
        assert insufficient_error.required_count == 2
        assert insufficient_error.available_count == 1

        no_wins_error = NoWinningPairsError("no wins", total_pairs=3, context={"win_rate": 0.0})
        assert isinstance(no_wins_error, AnalysisError)
        assert no_wins_error.total_pairs == 3
        assert no_wins_error.context == {"win_rate": 0.0}

    def test_configuration_error(self):
        """Test configuration errors are not recoverable."""
        error = ConfigurationError("bad config", errors=["x"])
        assert error.recoverable is False
        assert error.errors == ["x"]
        assert not isinstance(error, AnalysisError)


class TestEmptyInputHandling:
    """Test how the pipeline reports unusable input."""

    @pytest.mark.parametrize("text", ["", "   \n  ", "hello\nworld"])
    def test_unparseable_text_raises_parse_empty(self, text):
        """Test blank or unmatched text raises ParseEmptyError."""
        engine = TradeAnalysisEngine()

        with pytest.raises(ParseEmptyError):
            engine.analyze_text(text)

    def test_parse_empty_carries_line_counts(self):
        """Test ParseEmptyError reports how many lines were tried."""
        text = "Period\tTime\tClosing Price\tChange\tVolume\nbad row\nanother bad row"

        with pytest.raises(ParseEmptyError) as exc_info:
            TradeAnalysisEngine().parse_strict(text)

        assert exc_info.value.line_count == 2
        assert exc_info.value.context["mode"] == "tabular"
        assert exc_info.value.context["rejected_lines"] == 2

    def test_plain_parse_returns_empty(self):
        """Test the non-strict parse returns an empty sequence instead."""
        assert TradeAnalysisEngine().parse("hello") == ()

    def test_single_trade_is_insufficient(self):
        """Test one parsed trade cannot be analyzed."""
        text = "Period\tTime\tClosing Price\tChange\tVolume\n1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t1"

        with pytest.raises(InsufficientDataError) as exc_info:
            TradeAnalysisEngine().analyze_text(text)

        assert exc_info.value.available_count == 1

    def test_pnl_requires_two_trades(self):
        """Test compute_pnl reports insufficient data."""
        with pytest.raises(InsufficientDataError):
            TradeAnalysisEngine().compute_pnl([])
