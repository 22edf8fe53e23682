"""pgtables: quick data-quality summaries of PostgreSQL user tables."""
from pgtables.catalog.models import CountMode, SummaryOptions, SummaryResult, TableView
from pgtables.pipeline import run_summary, summarize

__version__ = "0.1.0"

__all__ = [
    "CountMode",
    "SummaryOptions",
    "SummaryResult",
    "TableView",
    "run_summary",
    "summarize",
]
