"""Catalog enumeration, identifier quoting, and the summary data model."""
from pgtables.catalog.models import (
    ColumnDescriptor,
    ColumnStatistics,
    CountMode,
    RowCount,
    SummaryOptions,
    SummaryResult,
    TableDescriptor,
    TableView,
)
from pgtables.catalog.quoting import qualify, quote_ident
from pgtables.catalog.reader import SYSTEM_SCHEMAS, CatalogReader

__all__ = [
    "CatalogReader",
    "SYSTEM_SCHEMAS",
    "ColumnDescriptor",
    "ColumnStatistics",
    "CountMode",
    "RowCount",
    "SummaryOptions",
    "SummaryResult",
    "TableDescriptor",
    "TableView",
    "qualify",
    "quote_ident",
]
