#!/usr/bin/env python3
"""Command line entry point: summarize the user tables of a PostgreSQL database."""
import pathlib
from typing import Optional

import typer
from typing_extensions import Annotated

from pgtables.catalog.models import CountMode, SummaryOptions
from pgtables.common.decorators import handle_cli_errors
from pgtables.common.logger import configure_logging, get_logger
from pgtables.common.settings import load_settings
from pgtables.pipeline import run_summary
from pgtables.render.plain import render_plain
from pgtables.render.rich_renderer import render_rich

logger = get_logger("cli")

app = typer.Typer(
    name="pgtables",
    help="Summarize user tables: columns, row counts, ranges, and boolean histograms.",
    add_completion=False,
)


@app.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@handle_cli_errors
def main(
    ctx: typer.Context,
    exact: Annotated[bool, typer.Option("--exact", help="Run COUNT(*) per table instead of using catalog estimates")] = False,
    concurrency: Annotated[Optional[int], typer.Option("--concurrency", min=1, help="Max parallel statistics/count queries")] = None,
    statement_timeout_ms: Annotated[Optional[int], typer.Option("--statement-timeout-ms", min=0, help="Per-table timeout for exact counts (0 = none)")] = None,
    plain: Annotated[bool, typer.Option("--plain", help="Plain text output instead of the rich layout")] = False,
    skip_stats: Annotated[bool, typer.Option("--skip-stats", help="Skip per-column range and histogram queries")] = False,
    env_file: Annotated[Optional[pathlib.Path], typer.Option("--env-file", help="Load connection variables from this file")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress to stderr")] = False,
):
    """
    List user tables with row counts and per-column hints.
    """
    settings = load_settings(env_file)
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_format.lower() == "json",
    )
    if ctx.args:
        logger.debug(f"Ignoring unrecognized arguments: {ctx.args}")

    options = SummaryOptions(
        mode=CountMode.EXACT if exact else CountMode.ESTIMATED,
        concurrency=concurrency if concurrency is not None else settings.concurrency,
        statement_timeout_ms=(
            statement_timeout_ms if statement_timeout_ms is not None else settings.statement_timeout_ms
        ),
        collect_statistics=not skip_stats,
    )

    result = run_summary(settings, options)

    if plain:
        for line in render_plain(result):
            typer.echo(line)
    else:
        render_rich(result)


def run():
    app()


if __name__ == "__main__":
    run()
