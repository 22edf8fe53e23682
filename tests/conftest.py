import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError, ProgrammingError

from pgtables.catalog.models import (
    ColumnDescriptor,
    ColumnStatistics,
    CountMode,
    RowCount,
    TableDescriptor,
    TableView,
)


def make_table(schema="public", name="users", column_count=3, estimated_rows=100) -> TableDescriptor:
    return TableDescriptor(
        table_schema=schema,
        table_name=name,
        column_count=column_count,
        estimated_rows=estimated_rows,
    )


def make_column(name, data_type, schema="public", table="users", position=1, statistics=None) -> ColumnDescriptor:
    return ColumnDescriptor(
        table_schema=schema,
        table_name=table,
        column_name=name,
        data_type=data_type,
        ordinal_position=position,
        statistics=statistics,
    )


def permission_denied(sql: str = "SELECT 1") -> ProgrammingError:
    return ProgrammingError(sql, {}, Exception("permission denied for table secrets"))


def statement_timeout(sql: str = "SELECT 1") -> OperationalError:
    return OperationalError(sql, {}, Exception("canceling statement due to statement timeout"))


@pytest.fixture
def mock_engine():
    """Engine stand-in; database access is patched at the engine_factory helpers."""
    return MagicMock(name="engine")


@pytest.fixture
def users_view():
    """A table with numeric, temporal, boolean, and text columns, stats attached."""
    columns = [
        make_column("id", "integer", position=1,
                    statistics=ColumnStatistics(min_value="1", max_value="42000")),
        make_column("created_at", "date", position=2,
                    statistics=ColumnStatistics(min_value="2020-01-15", max_value="2025-10-03")),
        make_column("active", "boolean", position=3,
                    statistics=ColumnStatistics(true_count=28000, false_count=14000)),
        make_column("email", "character varying", position=4),
    ]
    return TableView(
        table=make_table(column_count=4, estimated_rows=42000),
        columns=columns,
        row_count=RowCount(mode=CountMode.ESTIMATED, value=42000),
    )
