from typing import Dict, List, Mapping, Sequence

from pgtables.catalog.models import (
    ColumnDescriptor,
    CountMode,
    RowCount,
    TableDescriptor,
    TableKey,
    TableView,
)


def _fallback_count(table: TableDescriptor, mode: CountMode) -> RowCount:
    if mode == CountMode.ESTIMATED:
        return RowCount(mode=mode, value=table.estimated_rows)
    return RowCount(mode=mode, value=None)


def build_views(
    tables: Sequence[TableDescriptor],
    columns_by_table: Mapping[TableKey, List[ColumnDescriptor]],
    row_counts: Dict[TableKey, RowCount],
    mode: CountMode,
) -> List[TableView]:
    """Join tables with their columns and row counts, preserving table order.

    Pure function: no I/O.
    """
    return [
        TableView(
            table=t,
            columns=list(columns_by_table.get(t.key, [])),
            row_count=row_counts.get(t.key) or _fallback_count(t, mode),
        )
        for t in tables
    ]
