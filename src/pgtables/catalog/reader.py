from __future__ import annotations

from typing import Dict, List, Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pgtables.catalog.models import ColumnDescriptor, TableDescriptor, TableKey
from pgtables.common.errors import CatalogError
from pgtables.common.logger import get_logger
from pgtables.engine_factory import fetch_all

logger = get_logger("catalog_reader")

SYSTEM_SCHEMAS = ("pg_catalog", "information_schema", "pg_toast")

TABLES_SQL = """
WITH cols AS (
    SELECT table_schema, table_name, COUNT(*)::int AS column_count
    FROM information_schema.columns
    GROUP BY table_schema, table_name
)
SELECT n.nspname AS table_schema,
       c.relname AS table_name,
       COALESCE(cols.column_count, 0) AS column_count,
       GREATEST(c.reltuples::bigint, 0) AS estimated_rows
FROM pg_class c
JOIN pg_namespace n ON n.oid = c.relnamespace
LEFT JOIN cols ON cols.table_schema = n.nspname AND cols.table_name = c.relname
WHERE c.relkind = 'r'
  AND c.relpersistence <> 't'
  AND n.nspname <> ALL(:excluded)
ORDER BY n.nspname, c.relname
"""

COLUMNS_SQL = """
SELECT table_schema, table_name, column_name, data_type, ordinal_position
FROM information_schema.columns
WHERE table_schema <> ALL(:excluded)
ORDER BY table_schema, table_name, ordinal_position
"""


class CatalogReader:
    """
    Read-only enumeration of user tables and columns from the system catalog.

    Every call queries the live catalog; nothing is cached. Any failure is
    fatal for the run and surfaces as CatalogError.
    """

    def __init__(self, engine: Engine, excluded_schemas: Sequence[str] = SYSTEM_SCHEMAS):
        self.engine = engine
        self.excluded_schemas = list(excluded_schemas)

    def _query(self, sql: str, what: str) -> List[dict]:
        try:
            return fetch_all(self.engine, sql, {"excluded": self.excluded_schemas})
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {what}: {e}")
            raise CatalogError(f"Catalog query for {what} failed: {e}") from e

    def list_tables(self) -> List[TableDescriptor]:
        """Returns all user tables ordered by schema and name."""
        rows = self._query(TABLES_SQL, "tables")
        tables = [
            TableDescriptor(
                table_schema=r["table_schema"],
                table_name=r["table_name"],
                column_count=int(r["column_count"] or 0),
                estimated_rows=r["estimated_rows"],
            )
            for r in rows
        ]
        logger.info(f"Found {len(tables)} user tables")
        return tables

    def list_columns(self) -> List[ColumnDescriptor]:
        """Returns all user columns in declaration order within each table."""
        rows = self._query(COLUMNS_SQL, "columns")
        return [
            ColumnDescriptor(
                table_schema=r["table_schema"],
                table_name=r["table_name"],
                column_name=r["column_name"],
                data_type=r["data_type"],
                ordinal_position=int(r.get("ordinal_position") or 0),
            )
            for r in rows
        ]

    @staticmethod
    def columns_by_table(columns: Sequence[ColumnDescriptor]) -> Dict[TableKey, List[ColumnDescriptor]]:
        """Groups columns by (schema, table), keeping their input order."""
        by_table: Dict[TableKey, List[ColumnDescriptor]] = {}
        for col in columns:
            by_table.setdefault(col.table_key, []).append(col)
        return by_table
