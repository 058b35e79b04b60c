"""Tests for the price-history record parser"""

import pytest
from structlog.testing import capture_logs

from tradescan_app.config.defaults import ParserParams
from tradescan_app.data.grammars import LINE_FORMATS, InlineFormat, LineFormat, TabularFormat, select_format
from tradescan_app.data.models import Trade
from tradescan_app.data.parsers import parse_trade_text, parse_trades

HEADER = "Period\tTime\tClosing Price\tChange\tVolume"


class TestTabularParsing:
    """Test header-led tabular input"""

    def test_single_row(self):
        """Test a well-formed row parses into a complete Trade"""
        text = HEADER + "\n1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t314,937.689"

        trades = parse_trades(text)

        assert trades == (Trade(
            period=1,
            day="Sun",
            date="11/17/23",
            time="19:00",
            price=233.40,
            change=0.0,
            volume=314937.689,
        ),)

    def test_sample_block(self, sample_text):
        """Test every row of the sample block is parsed in order"""
        result = parse_trade_text(sample_text)

        assert result.mode == "tabular"
        assert [t.period for t in result.trades] == [1, 2, 3, 4, 5, 6]
        assert [t.price for t in result.trades] == [233.40, 233.96, 233.48, 233.86, 232.74, 235.40]
        assert result.trades[2].change == -0.48
        assert result.trades[5].day == "Mon"
        assert result.rejected_lines == 0

    def test_multi_space_separated_columns(self):
        """Test columns separated by runs of spaces"""
        text = "Period  Time  Closing Price  Change  Volume\n7  Mon, 11/18, 01:00  $234.85  $-0.55  152,686.214"

        trades = parse_trades(text)

        assert len(trades) == 1
        assert trades[0].period == 7
        assert trades[0].time == "01:00"
        assert trades[0].change == -0.55
        assert trades[0].volume == 152686.214

    def test_header_is_skipped(self):
        """Test header-only input yields no trades"""
        result = parse_trade_text(HEADER)

        assert result.trades == ()
        assert result.mode == "tabular"
        assert result.candidate_lines == 0

    def test_too_few_fields_dropped(self):
        """Test rows with fewer than five fields are dropped"""
        text = HEADER + "\n1\tSun, 11/17, 19:00\t$233.40\t+$0.00"

        result = parse_trade_text(text)

        assert result.trades == ()
        assert result.rejected_lines == 1

    def test_blank_lines_ignored(self):
        """Test blank lines between rows are skipped and not counted"""
        text = (HEADER + "\n\n1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t1,000\n   \n"
                "2\tSun, 11/17, 20:00\t$233.96\t+$0.56\t2,000\n")

        result = parse_trade_text(text)

        assert len(result.trades) == 2
        assert result.candidate_lines == 2

    def test_windows_line_endings(self):
        """Test CRLF input"""
        text = HEADER + "\r\n1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t1,000\r\n"

        trades = parse_trades(text)

        assert len(trades) == 1
        assert trades[0].volume == 1000.0

    def test_source_order_kept(self):
        """Test trades keep row order even when periods are unsorted"""
        text = "\n".join([
            HEADER,
            "9\tMon, 11/18, 03:00\t$234.74\t$-0.68\t1",
            "2\tSun, 11/17, 20:00\t$233.96\t+$0.56\t1",
            "5\tSun, 11/17, 23:00\t$232.74\t$-1.12\t1",
        ])

        assert [t.period for t in parse_trades(text)] == [9, 2, 5]

    def test_single_digit_hour(self):
        """Test H:MM times are kept verbatim"""
        text = HEADER + "\n1\tTue, 11/19, 7:05\t$230.00\t+$0.00\t1"

        assert parse_trades(text)[0].time == "7:05"


class TestDateNormalization:
    """Test year handling in time-info fields"""

    def test_two_digit_year_expanded(self):
        """Test a two-digit year becomes 20YY"""
        text = HEADER + "\n1\tFri, 12/06/23, 00:00\t$240.10\t+$1.00\t10"

        assert parse_trades(text)[0].date == "12/06/2023"

    def test_missing_year_gets_fixed_token(self):
        """Test the hard-coded /23 suffix for year-less dates (known quirk)"""
        text = HEADER + "\n1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t1"

        assert parse_trades(text)[0].date == "11/17/23"

    def test_four_digit_year_kept(self):
        """Test a four-digit year is kept as given"""
        text = HEADER + "\n1\tFri, 12/06/2024, 00:00\t$240.10\t+$1.00\t10"

        assert parse_trades(text)[0].date == "12/06/2024"

    def test_custom_year_token(self):
        """Test the year token comes from parser parameters"""
        text = HEADER + "\n1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t1"

        trades = parse_trades(text, ParserParams(default_year_token="24"))

        assert trades[0].date == "11/17/24"


class TestMalformedLines:
    """Test local recovery from bad rows"""

    def test_non_numeric_price_dropped(self):
        """Test one bad price row does not affect the valid rows"""
        rows = [
            "1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t314,937.689",
            "2\tSun, 11/17, 20:00\t$233.96\t+$0.56\t190,728.773",
            "99\tSun, 11/17, 20:30\t$abc\t+$0.10\t1,000",
            "3\tSun, 11/17, 21:00\t$233.48\t$-0.48\t209,209.63",
            "4\tSun, 11/17, 22:00\t$233.86\t+$0.38\t190,428.269",
            "5\tSun, 11/17, 23:00\t$232.74\t$-1.12\t158,095.099",
        ]

        result = parse_trade_text("\n".join([HEADER] + rows))

        assert [t.period for t in result.trades] == [1, 2, 3, 4, 5]
        assert result.rejected_lines == 1

    @pytest.mark.parametrize("row", [
        "x1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t1",
        "1.5\tSun, 11/17, 19:00\t$233.40\t+$0.00\t1",
        "1\tFun, 11/17, 19:00\t$233.40\t+$0.00\t1",
        "1\tSun, 11-17, 19:00\t$233.40\t+$0.00\t1",
        "1\tSun, 11/17, 19h00\t$233.40\t+$0.00\t1",
        "1\tSun, 11/17, 19:00\t$233.40\tn/a\t1",
        "1\tSun, 11/17, 19:00\t$233.40\t+$0.00\tlots",
        "1\tSun, 11/17, 19:00\t$nan\t+$0.00\t1",
    ])
    def test_invalid_field_drops_row(self, row):
        """Test each kind of invalid field drops the whole row"""
        assert parse_trades(HEADER + "\n" + row) == ()

    def test_rejected_lines_logged(self):
        """Test dropped lines are logged at debug level with their line number"""
        text = HEADER + "\n1\tSun, 11/17, 19:00\t$abc\t+$0.00\t1"

        with capture_logs() as logs:
            parse_trades(text)

        rejected = [entry for entry in logs if entry["event"] == "Line rejected"]
        assert len(rejected) == 1
        assert rejected[0]["log_level"] == "debug"
        assert rejected[0]["line_number"] == 2


class TestInlineParsing:
    """Test the '**'-delimited single-line format"""

    def test_inline_row(self):
        """Test an inline record with a positive change"""
        result = parse_trade_text("2Sun, 11/17, 20:00**$233.96+$0.56**190,728.773")

        assert result.mode == "inline"
        assert result.trades == (Trade(
            period=2,
            day="Sun",
            date="11/17/23",
            time="20:00",
            price=233.96,
            change=0.56,
            volume=190728.773,
        ),)

    def test_inline_stray_dollar_negative_change(self):
        """Test the optional '$' before a negative change"""
        trades = parse_trades("3Sun, 11/17, 21:00**$233.48$-0.48**209,209.63")

        assert trades[0].change == -0.48
        assert trades[0].volume == 209209.63

    def test_inline_with_year(self):
        """Test inline rows with a two-digit year"""
        trades = parse_trades("12Fri, 12/06/23, 00:00**$240.10+$1.00**1,000")

        assert trades[0].period == 12
        assert trades[0].date == "12/06/2023"

    def test_inline_mixed_with_garbage(self):
        """Test unmatched lines are skipped in inline mode"""
        text = "\n".join([
            "1Sun, 11/17, 19:00**$233.40+$0.00**314,937.689",
            "this is not a price row",
            "2Sun, 11/17, 20:00**$233.96+$0.56**190,728.773",
        ])

        result = parse_trade_text(text)

        assert [t.period for t in result.trades] == [1, 2]
        assert result.rejected_lines == 1

    def test_partial_header_falls_back_to_inline(self):
        """Test header sniffing requires all three column names"""
        text = "Period\tTime\tPrice\n1\tSun, 11/17, 19:00\t$233.40\t+$0.00\t1"

        result = parse_trade_text(text)

        assert result.mode == "inline"
        assert result.trades == ()


class TestEmptyInput:
    """Test inputs with nothing to parse"""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t\n"])
    def test_blank_text(self, text):
        """Test blank input produces an empty result, not an error"""
        result = parse_trade_text(text)

        assert result.trades == ()
        assert result.success is False
        assert result.mode == "none"


class TestLineFormats:
    """Test block format selection"""

    def test_base_format_is_abstract(self):
        """Test LineFormat cannot be used without detect and parse_line"""
        with pytest.raises(TypeError):
            LineFormat()

    def test_incomplete_subclass_is_abstract(self):
        """Test a subclass missing parse_line cannot be instantiated"""
        class DetectOnly(LineFormat):
            def detect(self, first_line):
                return True

        with pytest.raises(TypeError):
            DetectOnly()

    def test_formats_tried_in_order(self):
        """Test a header line selects tabular and anything else falls through to inline"""
        assert isinstance(select_format(HEADER, LINE_FORMATS), TabularFormat)
        assert isinstance(select_format("1Sun, 11/17, 19:00**$1+$0**1", LINE_FORMATS), InlineFormat)

    def test_no_matching_format(self):
        """Test None when no format accepts the block"""
        assert select_format("no header here", (TabularFormat(),)) is None
