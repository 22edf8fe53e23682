from unittest.mock import patch

from pgtables.catalog.models import CountMode, RowCount
from pgtables.stats.row_counter import RowCounter, count_sql

from conftest import make_table, permission_denied, statement_timeout


def test_count_sql_quotes_identifiers():
    assert count_sql(make_table(schema="Sales", name='odd"name')) == (
        'SELECT COUNT(*)::bigint AS count FROM "Sales"."odd""name"'
    )


@patch("pgtables.stats.row_counter.fetch_generated")
def test_estimated_mode_issues_no_queries(mock_fetch, mock_engine):
    tables = [make_table(name="a", estimated_rows=10), make_table(name="b", estimated_rows=-3)]

    counts = RowCounter(mock_engine).count(tables, CountMode.ESTIMATED)

    mock_fetch.assert_not_called()
    assert counts[("public", "a")] == RowCount(mode=CountMode.ESTIMATED, value=10)
    assert counts[("public", "b")] == RowCount(mode=CountMode.ESTIMATED, value=0)


@patch("pgtables.stats.row_counter.fetch_generated")
def test_exact_mode_isolates_failures(mock_fetch, mock_engine):
    def respond(engine, sql, timeout_ms=None):
        if '"broken"' in sql:
            raise permission_denied(sql)
        if '"slow"' in sql:
            raise statement_timeout(sql)
        if '"empty"' in sql:
            return {"count": 0}
        return {"count": 1234}

    mock_fetch.side_effect = respond
    tables = [make_table(name=n) for n in ("ok", "broken", "slow", "empty")]

    counts = RowCounter(mock_engine).exact(tables)

    assert counts[("public", "ok")].value == 1234
    assert counts[("public", "broken")].is_unknown
    assert counts[("public", "slow")].is_unknown
    assert counts[("public", "empty")].value == 0
    assert not counts[("public", "empty")].is_unknown


@patch("pgtables.stats.row_counter.fetch_generated")
def test_statement_timeout_is_passed_per_query(mock_fetch, mock_engine):
    mock_fetch.return_value = {"count": 5}

    RowCounter(mock_engine, concurrency=2, statement_timeout_ms=2500).exact(
        [make_table(name="a"), make_table(name="b")]
    )

    assert mock_fetch.call_count == 2
    for call in mock_fetch.call_args_list:
        assert call.kwargs["timeout_ms"] == 2500


@patch("pgtables.stats.row_counter.fetch_generated")
def test_missing_row_is_unknown(mock_fetch, mock_engine):
    mock_fetch.return_value = None

    counts = RowCounter(mock_engine).exact([make_table()])

    assert counts[("public", "users")].is_unknown
