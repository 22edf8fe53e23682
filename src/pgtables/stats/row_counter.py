from __future__ import annotations

from typing import Dict, Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pgtables.catalog.models import CountMode, RowCount, TableDescriptor, TableKey
from pgtables.catalog.quoting import qualify
from pgtables.common.logger import get_logger
from pgtables.engine_factory import fetch_generated
from pgtables.stats.runner import run_bounded

logger = get_logger("row_counter")


def count_sql(table: TableDescriptor) -> str:
    return f"SELECT COUNT(*)::bigint AS count FROM {qualify(table.table_schema, table.table_name)}"


class RowCounter:
    """
    Produces row counts in estimated mode (from the catalog, no queries) or
    exact mode (one COUNT(*) per table).

    In exact mode a failed or timed-out count becomes an unknown RowCount for
    that table only.
    """

    def __init__(self, engine: Engine, concurrency: int = 1, statement_timeout_ms: int = 0):
        self.engine = engine
        self.concurrency = concurrency
        self.statement_timeout_ms = statement_timeout_ms

    @staticmethod
    def estimated(tables: Sequence[TableDescriptor]) -> Dict[TableKey, RowCount]:
        return {
            t.key: RowCount(mode=CountMode.ESTIMATED, value=t.estimated_rows)
            for t in tables
        }

    def count_table(self, table: TableDescriptor) -> RowCount:
        """Runs an exact COUNT(*) for one table."""
        try:
            row = fetch_generated(
                self.engine, count_sql(table), timeout_ms=self.statement_timeout_ms
            )
        except SQLAlchemyError as e:
            logger.debug(
                f"Exact count failed for {table.qualified_name}: {e}",
                extra={"table": table.table_name},
            )
            return RowCount(mode=CountMode.EXACT, value=None)

        if not row or row.get("count") is None:
            return RowCount(mode=CountMode.EXACT, value=None)
        return RowCount(mode=CountMode.EXACT, value=int(row["count"]))

    def exact(self, tables: Sequence[TableDescriptor]) -> Dict[TableKey, RowCount]:
        logger.info(
            f"Counting rows in {len(tables)} tables "
            f"(concurrency={self.concurrency}, timeout_ms={self.statement_timeout_ms})"
        )
        return run_bounded(((t.key, t) for t in tables), self.count_table, self.concurrency)

    def count(self, tables: Sequence[TableDescriptor], mode: CountMode) -> Dict[TableKey, RowCount]:
        if mode == CountMode.EXACT:
            return self.exact(tables)
        return self.estimated(tables)
