"""
Line grammars for pasted price-history text.

Two block formats are recognised, tried in order:

    tabular  - header row containing "Period", "Time" and "Closing Price",
               then tab or multi-space separated columns:
               1	Sun, 11/17, 19:00	$233.40	+$0.00	314,937.689
    inline   - one record per line with "**" delimiters:
               1Sun, 11/17, 19:00**$233.40+$0.00**314,937.689

Inside either format the time-info part is matched against an ordered list of
date grammars (with year first, then without year). The first grammar that
matches decides how the date is normalized.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import ParserParams
from .models import WEEKDAYS, Trade

DAY_SOURCE = "(?P<day>" + "|".join(WEEKDAYS) + ")"
TIME_SOURCE = r"(?P<time>\d{1,2}:\d{2})"

HEADER_TOKENS = ("Period", "Time", "Closing Price")
FIELD_SEPARATOR = re.compile(r"\t+|\s{2,}")
MIN_TABULAR_FIELDS = 5

_INTEGER = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")


class LineRejected(ValueError):
    """Raised when a single input line cannot be turned into a Trade."""
    pass


@dataclass(frozen=True)
class TimeInfo:
    """Day, normalized date and time extracted from a time-info field."""
    day: str
    date: str
    time: str


@dataclass(frozen=True)
class DateGrammar:
    """One accepted shape of "<day>, <date>, <time>"."""
    date_source: str
    has_year: bool

    @property
    def source(self) -> str:
        return DAY_SOURCE + r",\s*" + self.date_source + r",\s*" + TIME_SOURCE

    def compile(self) -> re.Pattern:
        return re.compile(self.source)

    def normalize_date(self, groups: dict[str, str], params: ParserParams) -> str:
        """Build the normalized date string from matched groups."""
        month_day = groups["month_day"]
        if not self.has_year:
            return f"{month_day}/{params.default_year_token}"

        year = groups["year"]
        if len(year) == 2:
            year = params.century_prefix + year
        return f"{month_day}/{year}"

    def time_info(self, match: re.Match, params: ParserParams) -> TimeInfo:
        groups = match.groupdict()
        return TimeInfo(
            day=groups["day"],
            date=self.normalize_date(groups, params),
            time=groups["time"],
        )


DATE_GRAMMARS: tuple[DateGrammar, ...] = (
    DateGrammar(
        date_source=r"(?P<month_day>\d{1,2}/\d{1,2})/(?P<year>\d{4}|\d{2})",
        has_year=True,
    ),
    DateGrammar(
        date_source=r"(?P<month_day>\d{1,2}/\d{1,2})",
        has_year=False,
    ),
)

_TIME_INFO_PATTERNS = tuple((grammar, grammar.compile()) for grammar in DATE_GRAMMARS)


def match_time_info(text: str, params: ParserParams) -> TimeInfo:
    """
    Match a composite time-info field against the date grammars in priority order.

    Raises:
        LineRejected: If no grammar matches
    """
    for grammar, pattern in _TIME_INFO_PATTERNS:
        match = pattern.search(text)
        if match:
            return grammar.time_info(match, params)
    raise LineRejected(f"Unrecognized time info '{text}'")


def parse_period(raw: str) -> int:
    """Parse a period index, rejecting anything that is not an integer."""
    value = raw.strip()
    if not _INTEGER.fullmatch(value):
        raise LineRejected(f"Invalid period '{raw}'")
    return int(value)


def parse_number(raw: str, field: str) -> float:
    """
    Parse a numeric field after stripping "$", "+" and thousands separators.

    Raises:
        LineRejected: If the remaining text is not a plain decimal number
    """
    value = raw.strip().replace("$", "").replace("+", "").replace(",", "")
    if not _DECIMAL.fullmatch(value):
        raise LineRejected(f"Invalid {field} '{raw}'")
    return float(value)


class LineFormat(ABC):
    """Base class for block-level formats."""

    name = "base"
    has_header = False

    @abstractmethod
    def detect(self, first_line: str) -> bool:
        """Return True if this format applies to the whole block."""
        pass

    @abstractmethod
    def parse_line(self, line: str, params: ParserParams) -> Trade:
        """Parse one trimmed line into a Trade or raise LineRejected."""
        pass


class TabularFormat(LineFormat):
    """Header-led table with tab or multi-space separated columns."""

    name = "tabular"
    has_header = True

    def detect(self, first_line: str) -> bool:
        return all(token in first_line for token in HEADER_TOKENS)

    def parse_line(self, line: str, params: ParserParams) -> Trade:
        parts = FIELD_SEPARATOR.split(line)
        if len(parts) < MIN_TABULAR_FIELDS:
            raise LineRejected(f"Expected at least {MIN_TABULAR_FIELDS} fields, got {len(parts)}")

        period, time_field, price, change, volume = parts[:MIN_TABULAR_FIELDS]
        info = match_time_info(time_field, params)

        return Trade(
            period=parse_period(period),
            day=info.day,
            date=info.date,
            time=info.time,
            price=parse_number(price, "price"),
            change=parse_number(change, "change"),
            volume=parse_number(volume, "volume"),
        )


class InlineFormat(LineFormat):
    """Single-line records: <period><day>, <date>, <time>**$<price>$?<change>**<volume>."""

    name = "inline"
    has_header = False

    VALUE_SOURCE = (
        r"\*\*\$(?P<price>\d+\.?\d*)\$?(?P<change>[+-]\$?\d+\.?\d*)"
        r"\*\*(?P<volume>\d+(?:,\d+)*\.?\d*)"
    )

    def __init__(self) -> None:
        self._patterns = tuple(
            (grammar, re.compile(r"(?P<period>\d+)" + grammar.source + self.VALUE_SOURCE))
            for grammar in DATE_GRAMMARS
        )

    def detect(self, first_line: str) -> bool:
        return True

    def parse_line(self, line: str, params: ParserParams) -> Trade:
        for grammar, pattern in self._patterns:
            match = pattern.search(line)
            if match is None:
                continue

            info = grammar.time_info(match, params)
            return Trade(
                period=parse_period(match.group("period")),
                day=info.day,
                date=info.date,
                time=info.time,
                price=parse_number(match.group("price"), "price"),
                change=parse_number(match.group("change"), "change"),
                volume=parse_number(match.group("volume"), "volume"),
            )

        raise LineRejected("Line does not match inline record grammar")


# Tried in order; the first format whose detect() accepts the block wins.
LINE_FORMATS: tuple[LineFormat, ...] = (TabularFormat(), InlineFormat())


def select_format(first_line: str, formats: tuple[LineFormat, ...] = LINE_FORMATS) -> Optional[LineFormat]:
    """Return the first block format that accepts the given first line."""
    for line_format in formats:
        if line_format.detect(first_line):
            return line_format
    return None
