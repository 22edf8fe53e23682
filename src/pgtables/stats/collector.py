from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pgtables.catalog.models import ColumnDescriptor, ColumnKey, ColumnStatistics
from pgtables.catalog.quoting import qualify, quote_ident
from pgtables.catalog.types import is_boolean, wants_range
from pgtables.common.logger import get_logger
from pgtables.engine_factory import fetch_generated
from pgtables.stats.runner import run_bounded

logger = get_logger("statistics_collector")


def range_sql(column: ColumnDescriptor) -> str:
    col = quote_ident(column.column_name)
    return (
        f"SELECT MIN({col})::text AS min, MAX({col})::text AS max "
        f"FROM {qualify(column.table_schema, column.table_name)}"
    )


def histogram_sql(column: ColumnDescriptor) -> str:
    col = quote_ident(column.column_name)
    return (
        f"SELECT COUNT(*) FILTER (WHERE {col} IS TRUE)::bigint AS t, "
        f"COUNT(*) FILTER (WHERE {col} IS FALSE)::bigint AS f "
        f"FROM {qualify(column.table_schema, column.table_name)}"
    )


def _to_count(value) -> Optional[int]:
    return int(value) if value is not None else None


class StatisticsCollector:
    """
    Collects min/max bounds for numeric and temporal columns and true/false
    counts for boolean columns, one query per qualifying column.

    A failing column is recorded as unavailable and does not stop the others.
    """

    def __init__(self, engine: Engine, concurrency: int = 1):
        self.engine = engine
        self.concurrency = concurrency

    @staticmethod
    def qualifies(column: ColumnDescriptor) -> bool:
        return wants_range(column.data_type) or is_boolean(column.data_type)

    def collect_column(self, column: ColumnDescriptor) -> ColumnStatistics:
        """Runs the statistics query for a single column."""
        try:
            if is_boolean(column.data_type):
                row = fetch_generated(self.engine, histogram_sql(column)) or {}
                return ColumnStatistics(
                    true_count=_to_count(row.get("t")),
                    false_count=_to_count(row.get("f")),
                )
            row = fetch_generated(self.engine, range_sql(column)) or {}
            return ColumnStatistics(min_value=row.get("min"), max_value=row.get("max"))
        except SQLAlchemyError as e:
            logger.debug(
                f"Statistics unavailable for {column.table_schema}.{column.table_name}.{column.column_name}: {e}",
                extra={"table": column.table_name, "column": column.column_name},
            )
            return ColumnStatistics.unavailable()

    def collect(self, columns: Sequence[ColumnDescriptor]) -> Dict[ColumnKey, ColumnStatistics]:
        """Collects statistics for every qualifying column.

        Args:
            columns: Candidate columns. Non-qualifying columns are skipped.

        Returns:
            Dict keyed by (schema, table, column).
        """
        targets = [(c.key, c) for c in columns if self.qualifies(c)]
        logger.info(f"Collecting statistics for {len(targets)} columns")
        return run_bounded(targets, self.collect_column, self.concurrency)

    @staticmethod
    def attach(
        columns: Sequence[ColumnDescriptor], stats: Dict[ColumnKey, ColumnStatistics]
    ) -> List[ColumnDescriptor]:
        """Returns copies of ``columns`` with statistics filled in where known."""
        return [
            c.model_copy(update={"statistics": stats[c.key]}) if c.key in stats else c
            for c in columns
        ]
