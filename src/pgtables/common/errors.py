from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Standardized error codes for fatal run failures."""
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"
    CONNECTION_FAILED = "CONNECTION_FAILED"
    CATALOG_QUERY_FAILED = "CATALOG_QUERY_FAILED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class PgTablesError(Exception):
    """Base class for errors that abort a summary run.

    Attributes:
        message (str): A human-readable error message.
        code (ErrorCode): The standardized error code.
    """

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PgTablesError):
    """Raised when connection settings cannot be turned into a database URL."""
    code = ErrorCode.CONFIGURATION_INVALID


class DatabaseConnectionError(PgTablesError):
    """Raised when the initial connection to the database fails."""
    code = ErrorCode.CONNECTION_FAILED


class CatalogError(PgTablesError):
    """Raised when enumerating tables or columns from the catalog fails."""
    code = ErrorCode.CATALOG_QUERY_FAILED
