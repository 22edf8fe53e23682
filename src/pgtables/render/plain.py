from typing import List

from pgtables.catalog.models import SummaryResult, TableView
from pgtables.render.formatting import (
    COLUMN_HEADERS,
    NO_TABLES_MESSAGE,
    SEPARATOR,
    column_rows,
    column_widths,
    header,
    row_count_label,
)

INDENT = "  "
GAP = "  "


def _table_lines(view: TableView) -> List[str]:
    lines = [
        "",
        f"- {view.qualified_name}{SEPARATOR}{row_count_label(view.row_count)} rows, "
        f"{view.table.column_count} cols",
    ]
    rows = column_rows(view.columns)
    if not rows:
        return lines

    name_w, type_w, range_w = column_widths(rows)

    def fmt(name: str, type_label: str, range_text: str, values: str) -> str:
        line = GAP.join([
            name.ljust(name_w),
            type_label.ljust(type_w),
            range_text.ljust(range_w),
            values,
        ])
        return (INDENT + line).rstrip()

    lines.append("")
    lines.append(fmt(*COLUMN_HEADERS))
    for r in rows:
        lines.append(fmt(r.name, r.type_label, r.range, r.values))
    return lines


def render_plain(result: SummaryResult) -> List[str]:
    """Renders the summary as plain text lines, without trailing newlines."""
    if not result.views:
        return [NO_TABLES_MESSAGE]

    lines = [header(result.mode)]
    for view in result.views:
        lines.extend(_table_lines(view))
    return lines
