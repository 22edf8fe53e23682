"""
Classification of PostgreSQL ``information_schema.columns.data_type`` values.

Type names arrive in their SQL-standard spelling (``timestamp with time zone``,
``double precision``); short aliases are accepted as well.
"""
from __future__ import annotations

NUMERIC_TYPES = frozenset({
    "numeric",
    "decimal",
    "smallint",
    "integer",
    "bigint",
    "real",
    "double precision",
})

TIME_ONLY_TYPES = frozenset({
    "time with time zone",
    "time without time zone",
    "timetz",
    "time",
})

TEMPORAL_TYPES = frozenset({
    "date",
    "timestamp with time zone",
    "timestamp without time zone",
    "timestamptz",
    "timestamp",
}) | TIME_ONLY_TYPES

BOOLEAN_TYPES = frozenset({"boolean"})

MAX_LABEL_LENGTH = 8

TYPE_LABELS = {
    # timestamp/time
    "timestamp with time zone": "tstz",
    "timestamptz": "tstz",
    "timestamp without time zone": "ts-ntz",
    "timestamp": "ts-ntz",
    "time with time zone": "time-tz",
    "timetz": "time-tz",
    "time without time zone": "time-ntz",
    "time": "time-ntz",
    # strings
    "character varying": "varchar",
    "varchar": "varchar",
    "character": "char",
    "char": "char",
    "text": "text",
    # numerics
    "integer": "int",
    "int4": "int",
    "bigint": "bigint",
    "int8": "bigint",
    "smallint": "smallint",
    "int2": "smallint",
    "numeric": "numeric",
    "decimal": "decimal",
    "real": "real",
    "double precision": "float8",
    "float8": "float8",
    # misc
    "boolean": "bool",
    "bool": "bool",
    "uuid": "uuid",
    "jsonb": "jsonb",
    "json": "json",
    "bytea": "bytea",
    "date": "date",
    "interval": "interval",
}


def _norm(data_type: str) -> str:
    return data_type.strip().lower()


def is_numeric(data_type: str) -> bool:
    return _norm(data_type) in NUMERIC_TYPES


def is_temporal(data_type: str) -> bool:
    return _norm(data_type) in TEMPORAL_TYPES


def is_time_only(data_type: str) -> bool:
    return _norm(data_type) in TIME_ONLY_TYPES


def is_boolean(data_type: str) -> bool:
    return _norm(data_type) in BOOLEAN_TYPES


def wants_range(data_type: str) -> bool:
    """Whether min/max bounds are collected for this type."""
    return is_numeric(data_type) or is_temporal(data_type)


def human_data_type(data_type: str) -> str:
    """Short display label for a type, at most 8 characters."""
    label = TYPE_LABELS.get(_norm(data_type), data_type)
    return label[:MAX_LABEL_LENGTH]
