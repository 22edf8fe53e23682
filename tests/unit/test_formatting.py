import pytest

from pgtables.catalog.models import ColumnStatistics, CountMode, RowCount
from pgtables.render.formatting import (
    boolean_values,
    column_range,
    column_rows,
    column_values,
    column_widths,
    header,
    numeric_range,
    parse_date_like,
    parse_time_only,
    percent_of,
    row_count_label,
    temporal_range,
)

from conftest import make_column


class TestPercentOf:

    def test_zero_total(self):
        assert percent_of(0, 0) == "0.0%"

    @pytest.mark.parametrize(
        "count, total, expected",
        [
            (28000, 42000, "66.7%"),
            (14000, 42000, "33.3%"),
            (1, 3, "33.3%"),
            (2, 3, "66.7%"),
            (1, 8, "12.5%"),
            (1, 16, "6.3%"),
            (5, 5, "100.0%"),
            (0, 7, "0.0%"),
        ],
    )
    def test_one_decimal_half_up(self, count, total, expected):
        assert percent_of(count, total) == expected

    @pytest.mark.parametrize("t, f", [(0, 1), (1, 2), (7, 3), (1, 999), (333, 667), (12345, 6789)])
    def test_complementary_percentages_sum_to_hundred(self, t, f):
        p1 = float(percent_of(t, t + f).rstrip("%"))
        p2 = float(percent_of(f, t + f).rstrip("%"))
        assert abs((p1 + p2) - 100.0) <= 0.1 + 1e-9


def test_boolean_values():
    assert boolean_values(28000, 14000) == "Yes 28000 (66.7%) | No 14000 (33.3%)"
    assert boolean_values(0, 0) == "Yes 0 (0.0%) | No 0 (0.0%)"


def test_numeric_range():
    assert numeric_range("1", "42000") == "1-42000"
    assert numeric_range("0.5", "99.75") == "0.5-99.75"


class TestTemporalRange:

    def test_date_range_by_month(self):
        assert temporal_range("2020-01-15", "2025-10-03", "date") == "Jan 2020-Oct 2025"

    def test_timestamp_without_time_zone(self):
        assert temporal_range(
            "2021-03-01 08:15:00", "2021-12-31 23:59:59.123", "timestamp without time zone"
        ) == "Mar 2021-Dec 2021"

    def test_timestamptz_is_converted_to_utc(self):
        # 2021-12-31 23:30 at -05 is already January in UTC
        assert temporal_range(
            "2020-06-01 00:00:00+00", "2021-12-31 23:30:00-05", "timestamp with time zone"
        ) == "Jun 2020-Jan 2022"

    def test_time_only_range(self):
        assert temporal_range("08:05:00", "17:45:30.5", "time without time zone") == "08:05-17:45"

    def test_timetz_is_converted_to_utc(self):
        assert temporal_range("09:00:00+02", "18:30:00+05:30", "time with time zone") == "07:00-13:00"

    @pytest.mark.parametrize(
        "lo, hi, data_type",
        [
            ("infinity", "2020-01-01", "date"),
            ("2020-01-01", "not a date", "date"),
            ("0044-03-15 BC", "2020-01-01", "date"),
            ("2020-13-01", "2020-01-01", "date"),
            ("noon", "18:00:00", "time without time zone"),
        ],
    )
    def test_malformed_bounds_yield_none(self, lo, hi, data_type):
        assert temporal_range(lo, hi, data_type) is None


def test_parse_helpers():
    parsed = parse_date_like("2024-02-29 12:00:00+01:00")
    assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2024, 2, 29, 11)
    assert parse_time_only("24:00:00") == 0
    assert parse_time_only("23:59") == 23 * 60 + 59


class TestColumnCells:

    def test_numeric_column_range(self):
        col = make_column("id", "integer", statistics=ColumnStatistics(min_value="-5", max_value="10"))
        assert column_range(col) == "-5-10"
        assert column_values(col) == ""

    def test_no_statistics(self):
        col = make_column("id", "integer")
        assert column_range(col) == ""

    def test_unavailable_statistics_render_empty(self):
        col = make_column("amount", "numeric", statistics=ColumnStatistics.unavailable())
        assert column_range(col) == ""

    def test_empty_table_bounds_render_empty(self):
        col = make_column("amount", "numeric", statistics=ColumnStatistics(min_value=None, max_value=None))
        assert column_range(col) == ""

    def test_malformed_temporal_renders_empty(self):
        col = make_column("d", "date", statistics=ColumnStatistics(min_value="-infinity", max_value="infinity"))
        assert column_range(col) == ""

    def test_boolean_values(self):
        col = make_column("active", "boolean",
                          statistics=ColumnStatistics(true_count=28000, false_count=14000))
        assert column_values(col) == "Yes 28000 (66.7%) | No 14000 (33.3%)"
        assert column_range(col) == ""

    def test_text_column_has_no_hints(self):
        col = make_column("email", "text", statistics=ColumnStatistics(min_value="a", max_value="z"))
        assert column_range(col) == ""
        assert column_values(col) == ""


def test_column_rows_and_widths(users_view):
    rows = column_rows(users_view.columns)

    assert [r.name for r in rows] == ["id", "created_at", "active", "email"]
    assert [r.type_label for r in rows] == ["int", "date", "bool", "varchar"]
    assert rows[0].range == "1-42000"
    assert rows[1].range == "Jan 2020-Oct 2025"
    assert rows[2].values == "Yes 28000 (66.7%) | No 14000 (33.3%)"

    assert column_widths(rows) == (len("created_at"), len("varchar"), len("Jan 2020-Oct 2025"))


def test_column_widths_respect_header_minimums():
    rows = column_rows([make_column("x", "text")])
    assert column_widths(rows) == (4, 4, 5)


def test_row_count_labels():
    assert row_count_label(RowCount(mode=CountMode.ESTIMATED, value=1200)) == "~1200"
    assert row_count_label(RowCount(mode=CountMode.ESTIMATED, value=0)) == "~0"
    assert row_count_label(RowCount(mode=CountMode.EXACT, value=0)) == "0"
    assert row_count_label(RowCount(mode=CountMode.EXACT, value=17)) == "17"
    assert row_count_label(RowCount(mode=CountMode.EXACT, value=None)) == "error"


def test_headers_differ_by_mode():
    assert "estimated" in header(CountMode.ESTIMATED)
    assert "exact" in header(CountMode.EXACT)
