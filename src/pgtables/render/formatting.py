"""
Text formatting shared by the plain and rich renderers.

Both renderers take their content from here so the two output modes never
drift apart.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from pgtables.catalog.models import ColumnDescriptor, CountMode, RowCount
from pgtables.catalog.types import human_data_type, is_boolean, is_numeric, is_temporal, is_time_only

NO_TABLES_MESSAGE = "No tables found."
UNKNOWN_COUNT_LABEL = "error"
SEPARATOR = " \u2014 "
MIN_RANGE_WIDTH = len("range")
COLUMN_HEADERS = ("name", "type", "range", "values")

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

_OFFSET = r"(?P<tz>Z|[+-]\d{2}(?::?\d{2}(?::?\d{2})?)?)?"
_DATE_LIKE_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:[T ](?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.\d+)?)?)?"
    + _OFFSET + r"$"
)
_TIME_ONLY_RE = re.compile(
    r"^(?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.\d+)?)?" + _OFFSET + r"$"
)


@dataclass(frozen=True)
class ColumnRow:
    """One rendered column line."""
    name: str
    type_label: str
    range: str
    values: str


def header(mode: CountMode) -> str:
    if mode == CountMode.ESTIMATED:
        return f"Tables (schema.table){SEPARATOR}~rows (estimated), columns:"
    return f"Tables (schema.table){SEPARATOR}rows (exact), columns:"


def row_count_label(row_count: RowCount) -> str:
    if row_count.mode == CountMode.ESTIMATED:
        return f"~{row_count.value or 0}"
    if row_count.is_unknown:
        return UNKNOWN_COUNT_LABEL
    return str(row_count.value)


def percent_of(count: int, total: int) -> str:
    """Percentage with one decimal, rounded half up.

    >>> percent_of(28000, 42000)
    '66.7%'
    """
    if total <= 0:
        return "0.0%"
    permille = (count * 1000 + total // 2) // total
    return f"{permille // 10}.{permille % 10}%"


def boolean_values(true_count: int, false_count: int) -> str:
    total = true_count + false_count
    return (
        f"Yes {true_count} ({percent_of(true_count, total)}) | "
        f"No {false_count} ({percent_of(false_count, total)})"
    )


def numeric_range(min_value: str, max_value: str) -> str:
    return f"{min_value}-{max_value}"


def _offset(tz: Optional[str]) -> timedelta:
    if not tz or tz == "Z":
        return timedelta(0)
    sign = -1 if tz[0] == "-" else 1
    digits = tz[1:].replace(":", "")
    hours = int(digits[0:2])
    minutes = int(digits[2:4] or 0)
    seconds = int(digits[4:6] or 0)
    return sign * timedelta(hours=hours, minutes=minutes, seconds=seconds)


def parse_date_like(value: str) -> Optional[datetime]:
    """Parses a date or timestamp bound into a naive UTC datetime.

    Returns None for anything that is not a plain ISO-style value, such as
    ``infinity`` or BC dates.
    """
    m = _DATE_LIKE_RE.match(value.strip())
    if not m:
        return None
    try:
        parsed = datetime(
            int(m["year"]), int(m["month"]), int(m["day"]),
            int(m["hour"] or 0), int(m["minute"] or 0), int(m["second"] or 0),
        )
        return parsed - _offset(m["tz"])
    except (ValueError, OverflowError):
        return None


def parse_time_only(value: str) -> Optional[int]:
    """Parses a time bound into minutes after midnight UTC."""
    m = _TIME_ONLY_RE.match(value.strip())
    if not m:
        return None
    hour, minute = int(m["hour"]), int(m["minute"])
    if hour > 24 or minute > 59:
        return None
    total = hour * 60 + minute - int(_offset(m["tz"]).total_seconds() // 60)
    return total % (24 * 60)


def _month_year(d: datetime) -> str:
    return f"{MONTHS[d.month - 1]} {d.year}"


def _hh_mm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def temporal_range(min_value: str, max_value: str, data_type: str) -> Optional[str]:
    """Month range for dates/timestamps, HH:MM range for time-only types.

    Returns None when either bound cannot be parsed.
    """
    if is_time_only(data_type):
        lo, hi = parse_time_only(min_value), parse_time_only(max_value)
        if lo is None or hi is None:
            return None
        return f"{_hh_mm(lo)}-{_hh_mm(hi)}"

    d1, d2 = parse_date_like(min_value), parse_date_like(max_value)
    if d1 is None or d2 is None:
        return None
    return f"{_month_year(d1)}-{_month_year(d2)}"


def column_range(column: ColumnDescriptor) -> str:
    stats = column.statistics
    if stats is None or not stats.has_range:
        return ""
    if is_numeric(column.data_type):
        return numeric_range(stats.min_value, stats.max_value)
    if is_temporal(column.data_type):
        return temporal_range(stats.min_value, stats.max_value, column.data_type) or ""
    return ""


def column_values(column: ColumnDescriptor) -> str:
    stats = column.statistics
    if stats is None or not stats.has_histogram or not is_boolean(column.data_type):
        return ""
    return boolean_values(stats.true_count, stats.false_count)


def column_rows(columns: Sequence[ColumnDescriptor]) -> List[ColumnRow]:
    return [
        ColumnRow(
            name=c.column_name,
            type_label=human_data_type(c.data_type),
            range=column_range(c),
            values=column_values(c),
        )
        for c in columns
    ]


def column_widths(rows: Sequence[ColumnRow]) -> tuple:
    """(name, type, range) widths for one table's rows, header included."""
    name_w = max([len(COLUMN_HEADERS[0])] + [len(r.name) for r in rows])
    type_w = max([len(COLUMN_HEADERS[1])] + [len(r.type_label) for r in rows])
    range_w = max([MIN_RANGE_WIDTH] + [len(r.range) for r in rows])
    return name_w, type_w, range_w
