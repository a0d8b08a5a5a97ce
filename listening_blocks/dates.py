from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Sequence

# Two-digit years below the pivot belong to the 2000s, the rest to the 1900s.
CENTURY_PIVOT = 70

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class NormalizedDate:
    formatted: str
    sortable: int
    parsed: bool = True


def _leading_int(value: str) -> int | None:
    m = _LEADING_INT_RE.match(value)
    if m is None:
        return None
    return int(m.group(1))


def expand_two_digit_year(year: int) -> int:
    return 2000 + year if year < CENTURY_PIVOT else 1900 + year


def _calendar_date(year: int | None, month: int | None, day: int | None) -> date | None:
    if year is None or month is None or day is None:
        return None
    if not (1 <= day <= 31 and 1 <= month <= 12):
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_day_month_short_year(token: str) -> date | None:
    """DD-MM-YY, e.g. 29-08-24."""
    parts = token.split("-")
    if len(parts) != 3:
        return None
    year = _leading_int(parts[2])
    if year is None or not (0 <= year <= 99):
        return None
    return _calendar_date(expand_two_digit_year(year), _leading_int(parts[1]), _leading_int(parts[0]))


def parse_day_month_year(token: str) -> date | None:
    """D/M/YYYY or DD/MM/YYYY."""
    parts = token.split("/")
    if len(parts) != 3:
        return None
    year = _leading_int(parts[2])
    if year is None or year < 100:
        return None
    return _calendar_date(year, _leading_int(parts[1]), _leading_int(parts[0]))


def parse_iso_date(token: str) -> date | None:
    """YYYY-MM-DD; the first component must be exactly four characters."""
    parts = token.split("-")
    if len(parts) != 3 or len(parts[0]) != 4:
        return None
    year = _leading_int(parts[0])
    if year is None or year < 100:
        return None
    return _calendar_date(year, _leading_int(parts[1]), _leading_int(parts[2]))


DATE_PARSERS: Sequence[Callable[[str], date | None]] = (
    parse_day_month_short_year,
    parse_day_month_year,
    parse_iso_date,
)


def epoch_millis(value: date) -> int:
    return int(datetime(value.year, value.month, value.day).timestamp() * 1000)


def format_short_date(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year % 100:02d}"


def normalize_date(token: str) -> NormalizedDate:
    """
    Normalize a raw date token to DD/MM/YY plus an epoch-millisecond sort key.

    Parsers are tried in DATE_PARSERS order and the first valid calendar date wins. When
    none applies the raw token is kept unchanged and the sort key is 0.
    """
    raw = token or ""
    for parser in DATE_PARSERS:
        parsed = parser(raw)
        if parsed is not None:
            return NormalizedDate(formatted=format_short_date(parsed), sortable=epoch_millis(parsed))
    return NormalizedDate(formatted=raw, sortable=0, parsed=False)
