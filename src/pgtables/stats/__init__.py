"""Per-column statistics and per-table row counts."""
from pgtables.stats.collector import StatisticsCollector
from pgtables.stats.row_counter import RowCounter
from pgtables.stats.runner import run_bounded

__all__ = ["StatisticsCollector", "RowCounter", "run_bounded"]
