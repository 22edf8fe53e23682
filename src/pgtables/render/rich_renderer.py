from typing import Optional

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pgtables.catalog.models import CountMode, SummaryResult, TableView
from pgtables.render.formatting import (
    COLUMN_HEADERS,
    NO_TABLES_MESSAGE,
    SEPARATOR,
    column_rows,
    header,
    row_count_label,
)


def _count_style(view: TableView) -> str:
    if view.row_count.mode == CountMode.ESTIMATED:
        return "magenta"
    return "red" if view.row_count.is_unknown else "green"


def _title(view: TableView) -> Text:
    title = Text()
    title.append(view.qualified_name, style="bold yellow")
    title.append(SEPARATOR)
    title.append(f"{row_count_label(view.row_count)} rows", style=_count_style(view))
    title.append(", ")
    title.append(f"{view.table.column_count} cols", style="blue")
    return title


def _columns_table(view: TableView) -> Optional[Table]:
    rows = column_rows(view.columns)
    if not rows:
        return None

    table = Table(
        box=None,
        show_header=True,
        header_style="bold grey50",
        show_edge=False,
        pad_edge=False,
        padding=(0, 2, 0, 0),
    )
    # Identifiers stay on one line; range and values wrap on narrow consoles
    table.add_column(COLUMN_HEADERS[0], style="green", no_wrap=True)
    table.add_column(COLUMN_HEADERS[1], style="grey50", no_wrap=True)
    table.add_column(COLUMN_HEADERS[2], style="yellow", overflow="fold")
    table.add_column(COLUMN_HEADERS[3], style="yellow", overflow="fold")

    for r in rows:
        table.add_row(Text(r.name), Text(r.type_label), Text(r.range), Text(r.values))
    return table


def table_panel(view: TableView) -> Panel:
    """One bordered section per table: title line, then the column grid."""
    parts = [_title(view)]
    columns = _columns_table(view)
    if columns is not None:
        parts.append(Text(""))
        parts.append(columns)
    return Panel(Group(*parts), box=box.ROUNDED, border_style="grey50", padding=(1, 1), expand=False)


def render_rich(result: SummaryResult, console: Optional[Console] = None) -> None:
    """Prints the summary using rich panels and tables."""
    console = console or Console()
    if not result.views:
        console.print(NO_TABLES_MESSAGE, highlight=False)
        return

    console.print(Text(header(result.mode), style="bold cyan"))
    for view in result.views:
        console.print()
        console.print(table_panel(view))
