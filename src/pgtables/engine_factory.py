from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pgtables.common.errors import DatabaseConnectionError
from pgtables.common.logger import get_logger
from pgtables.common.settings import Settings

logger = get_logger("engine_factory")


def make_engine(settings: Settings, pool_size: int = 5) -> Engine:
    """
    Create a SQLAlchemy engine for the configured PostgreSQL database.

    Sessions are opened read-only via connect args. The pool is sized so that
    ``pool_size`` concurrent queries never wait on each other.

    Args:
        settings: Resolved connection settings.
        pool_size: Number of persistent connections to keep.

    Returns:
        A SQLAlchemy Engine instance. No connection is opened yet.
    """
    return create_engine(
        settings.sqlalchemy_url(),
        pool_pre_ping=True,
        pool_size=max(pool_size, 1),
        connect_args=settings.connect_args(),
    )


def verify_connection(engine: Engine) -> None:
    """
    Open one connection and run ``SELECT 1``.

    Raises:
        DatabaseConnectionError: If the database is unreachable or rejects the login.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Failed to connect to database: {e}")
        raise DatabaseConnectionError(f"Could not connect to database: {e}") from e


def _apply_statement_timeout(conn, timeout_ms: Optional[int]) -> None:
    # set_config(..., true) scopes the timeout to the current transaction only
    if timeout_ms and timeout_ms > 0:
        conn.execute(
            text("SELECT set_config('statement_timeout', :timeout, true)"),
            {"timeout": str(int(timeout_ms))},
        )


def fetch_all(
    engine: Engine, sql: str, params: Dict[str, Any] | None = None
) -> List[Dict[str, Any]]:
    """
    Execute a read query and return all rows as dicts keyed by column label.
    """
    with engine.connect() as conn:
        result = conn.execute(text(sql), params or {})
        return [dict(row) for row in result.mappings().all()]


def fetch_generated(
    engine: Engine, sql: str, timeout_ms: Optional[int] = None
) -> Optional[Dict[str, Any]]:
    """
    Execute a generated statement and return its first row as a dict, or None.

    Generated statements embed quoted identifiers and take no bind parameters,
    so they are sent through the driver as-is. A ":" inside an identifier must
    not be parsed as a bind parameter.

    Args:
        engine: The SQLAlchemy engine.
        sql: The SQL statement built with quote_ident.
        timeout_ms: Optional statement timeout applied to this query only.
    """
    with engine.connect() as conn:
        _apply_statement_timeout(conn, timeout_ms)
        row = conn.exec_driver_sql(sql).mappings().first()
        return dict(row) if row is not None else None
