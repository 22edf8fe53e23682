"""
Summarization pipeline.

Catalog Reader -> Statistics Collector -> Row Counter -> View Builder.
Rendering is left to the caller, so an interrupted run prints nothing.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.engine import Engine

from pgtables.catalog.models import CountMode, SummaryOptions, SummaryResult
from pgtables.catalog.reader import CatalogReader
from pgtables.common.logger import get_logger
from pgtables.common.settings import Settings
from pgtables.engine_factory import make_engine, verify_connection
from pgtables.stats.collector import StatisticsCollector
from pgtables.stats.row_counter import RowCounter
from pgtables.view import build_views

logger = get_logger("pipeline")


def summarize(engine: Engine, options: SummaryOptions) -> SummaryResult:
    """Runs the catalog queries, statistics, and row counts against ``engine``.

    Args:
        engine: An engine for the target database.
        options: Count mode, concurrency, timeout, and whether to collect stats.

    Returns:
        SummaryResult: One view per user table, in schema/name order.

    Raises:
        CatalogError: If enumerating tables or columns fails.
    """
    reader = CatalogReader(engine)
    tables = reader.list_tables()
    if not tables:
        return SummaryResult(mode=options.mode, views=[])

    known = {t.key for t in tables}
    columns = [c for c in reader.list_columns() if c.table_key in known]

    if options.collect_statistics:
        collector = StatisticsCollector(engine, concurrency=options.concurrency)
        columns = collector.attach(columns, collector.collect(columns))

    counter = RowCounter(
        engine,
        concurrency=options.concurrency,
        statement_timeout_ms=options.statement_timeout_ms,
    )
    row_counts = counter.count(tables, options.mode)

    views = build_views(tables, CatalogReader.columns_by_table(columns), row_counts, options.mode)
    return SummaryResult(mode=options.mode, views=views)


def run_summary(settings: Settings, options: Optional[SummaryOptions] = None) -> SummaryResult:
    """Creates the engine, verifies the connection, summarizes, and disposes.

    The engine's pool is released on every exit path.
    """
    options = options or SummaryOptions(
        concurrency=settings.concurrency,
        statement_timeout_ms=settings.statement_timeout_ms,
    )
    engine = make_engine(settings, pool_size=options.concurrency)
    try:
        verify_connection(engine)
        result = summarize(engine, options)
        logger.info(
            f"Summarized {len(result.views)} tables in {options.mode.value} mode",
        )
        return result
    finally:
        engine.dispose()
