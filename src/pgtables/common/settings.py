import pathlib
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from pgtables.common.errors import ConfigurationError

DRIVER_NAME = "postgresql+psycopg2"


class Settings(BaseSettings):
    """Connection and run settings backed by environment variables."""

    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")

    pghost: str = Field(default="localhost", validation_alias="PGHOST")
    pgport: int = Field(default=5432, validation_alias="PGPORT")
    pgdatabase: Optional[str] = Field(default=None, validation_alias="PGDATABASE")
    pguser: Optional[str] = Field(default=None, validation_alias="PGUSER")
    pgpassword: Optional[str] = Field(default=None, validation_alias="PGPASSWORD")
    pgssl: Optional[str] = Field(
        default=None,
        validation_alias="PGSSL",
        description="SSL toggle for discrete connection settings ('true' or '1' enables it)."
    )

    concurrency: int = Field(
        default=1,
        ge=1,
        validation_alias="PGTABLES_CONCURRENCY",
        description="Max parallel per-table/per-column queries."
    )
    statement_timeout_ms: int = Field(
        default=0,
        ge=0,
        validation_alias="PGTABLES_STATEMENT_TIMEOUT_MS",
        description="Per-query timeout for exact row counts. 0 disables it."
    )

    log_level: str = Field(default="WARNING", validation_alias="PGTABLES_LOG_LEVEL")
    log_format: str = Field(
        default="text",
        validation_alias="PGTABLES_LOG_FORMAT",
        description="Log output format: 'text' or 'json'."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def ssl_enabled(self) -> bool:
        if not self.pgssl:
            return False
        return self.pgssl.lower() == "true" or self.pgssl == "1"

    def sqlalchemy_url(self) -> str:
        """Builds the SQLAlchemy URL for the target database.

        DATABASE_URL takes precedence over the discrete PG* variables.

        Returns:
            str: A URL using the psycopg2 driver.

        Raises:
            ConfigurationError: If DATABASE_URL cannot be parsed.
        """
        if self.database_url:
            raw = self.database_url
            if raw.startswith("postgres://"):
                raw = "postgresql://" + raw[len("postgres://"):]
            try:
                url = make_url(raw)
            except Exception as e:
                raise ConfigurationError(f"Invalid DATABASE_URL: {e}") from e
            if url.drivername == "postgresql":
                url = url.set(drivername=DRIVER_NAME)
            return url.render_as_string(hide_password=False)

        url = URL.create(
            DRIVER_NAME,
            username=self.pguser,
            password=self.pgpassword,
            host=self.pghost,
            port=self.pgport,
            database=self.pgdatabase,
        )
        return url.render_as_string(hide_password=False)

    def connect_args(self) -> Dict[str, Any]:
        """DBAPI connect arguments: read-only sessions, optional SSL."""
        args: Dict[str, Any] = {"options": "-c default_transaction_read_only=on"}
        if not self.database_url and self.ssl_enabled:
            args["sslmode"] = "require"
        return args


def load_settings(env_file: Optional[pathlib.Path] = None) -> Settings:
    """Loads settings, reading an environment file into os.environ first.

    Args:
        env_file (Optional[pathlib.Path]): Explicit env file. Defaults to ./.env.

    Returns:
        Settings: The resolved settings.
    """
    if env_file is not None:
        if not env_file.exists():
            raise ConfigurationError(f"Env file not found: {env_file}")
        load_dotenv(env_file, override=True)
    else:
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path)
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
