from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

TableKey = Tuple[str, str]
ColumnKey = Tuple[str, str, str]


class CountMode(str, Enum):
    """How row counts are obtained."""
    ESTIMATED = "estimated"
    EXACT = "exact"


class TableDescriptor(BaseModel):
    """A user table as enumerated from the catalog.

    Attributes:
        table_schema (str): Schema name.
        table_name (str): Table name.
        column_count (int): Number of columns in information_schema.
        estimated_rows (int): Planner estimate from pg_class.reltuples, never negative.
    """
    model_config = ConfigDict(frozen=True)

    table_schema: str
    table_name: str
    column_count: int = 0
    estimated_rows: int = 0

    @field_validator("estimated_rows", mode="before")
    @classmethod
    def _clamp_estimate(cls, value):
        # reltuples is -1 for tables that were never vacuumed or analyzed
        if value is None:
            return 0
        return max(int(value), 0)

    @property
    def key(self) -> TableKey:
        return (self.table_schema, self.table_name)

    @property
    def qualified_name(self) -> str:
        return f"{self.table_schema}.{self.table_name}"


class ColumnStatistics(BaseModel):
    """Range or histogram hints for one column.

    ``available`` is False when the statistics query for the column failed.
    Null bounds with ``available`` True mean the table (or column) holds no
    non-null values.
    """
    min_value: Optional[str] = None
    max_value: Optional[str] = None
    true_count: Optional[int] = Field(default=None, ge=0)
    false_count: Optional[int] = Field(default=None, ge=0)
    available: bool = True

    @classmethod
    def unavailable(cls) -> "ColumnStatistics":
        return cls(available=False)

    @property
    def has_range(self) -> bool:
        return self.available and self.min_value is not None and self.max_value is not None

    @property
    def has_histogram(self) -> bool:
        return self.available and self.true_count is not None and self.false_count is not None


class ColumnDescriptor(BaseModel):
    """A column of a user table, in declaration order."""
    table_schema: str
    table_name: str
    column_name: str
    data_type: str
    ordinal_position: int = 0
    statistics: Optional[ColumnStatistics] = None

    @property
    def key(self) -> ColumnKey:
        return (self.table_schema, self.table_name, self.column_name)

    @property
    def table_key(self) -> TableKey:
        return (self.table_schema, self.table_name)


class RowCount(BaseModel):
    """Row count figure for a table.

    ``value`` is None only in exact mode, when the count query failed. That
    state is kept distinct from a genuine count of zero.
    """
    mode: CountMode
    value: Optional[int] = None

    @property
    def is_unknown(self) -> bool:
        return self.value is None


class TableView(BaseModel):
    """Display record joining a table, its columns, and its row count."""
    table: TableDescriptor
    columns: List[ColumnDescriptor] = Field(default_factory=list)
    row_count: RowCount

    @property
    def qualified_name(self) -> str:
        return self.table.qualified_name


class SummaryOptions(BaseModel):
    """Options for a single summary run."""
    mode: CountMode = CountMode.ESTIMATED
    concurrency: int = Field(default=1, ge=1)
    statement_timeout_ms: int = Field(default=0, ge=0)
    collect_statistics: bool = True


class SummaryResult(BaseModel):
    """Everything a renderer needs."""
    mode: CountMode
    views: List[TableView] = Field(default_factory=list)
