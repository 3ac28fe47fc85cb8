"""Typed configuration for the database used by migration runs."""

from __future__ import annotations

import os
from collections.abc import Mapping
from urllib.parse import urlparse

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt, field_validator

__all__ = [
    "APPLICATION_NAME_ENV",
    "DSN_ENV",
    "DatabaseRuntimeConfig",
    "DatabaseSettings",
    "load_database_settings",
]

DSN_ENV = "TIMESCALE_MIGRATIONS_DSN"
APPLICATION_NAME_ENV = "TIMESCALE_MIGRATIONS_APPLICATION_NAME"


class DatabaseRuntimeConfig(BaseModel):
    """Session level runtime options applied to every connection."""

    application_name: str = Field(
        "timescale-migrations",
        min_length=1,
        description="Identifier visible in PostgreSQL monitoring views for tracking client activity.",
    )
    connect_timeout_seconds: PositiveFloat = Field(
        5.0,
        description="Timeout, in seconds, for establishing new database connections.",
    )
    statement_timeout_ms: PositiveInt = Field(
        600_000,
        description=(
            "Upper bound, in milliseconds, for individual statements. Converting a large table with "
            "migrate_data can take a long time, hence the generous default."
        ),
    )
    lock_timeout_ms: PositiveInt | None = Field(
        default=None,
        description=(
            "Optional upper bound, in milliseconds, for waiting on table locks so DDL fails fast instead of "
            "queueing behind long running transactions."
        ),
    )


class DatabaseSettings(BaseModel):
    """Connection settings for the TimescaleDB instance being migrated."""

    dsn: str = Field(..., description="SQLAlchemy URL of the PostgreSQL server running TimescaleDB.")
    runtime: DatabaseRuntimeConfig = Field(default_factory=DatabaseRuntimeConfig)
    echo_statements: bool = Field(
        False,
        description="Enable SQLAlchemy statement logging.",
    )

    @field_validator("dsn")
    @classmethod
    def _validate_dsn(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("dsn must be a non-empty connection URL")
        if not urlparse(value).scheme.lower().startswith("postgres"):
            raise ValueError("dsn must target a PostgreSQL server")
        return value


def load_database_settings(environ: Mapping[str, str] | None = None) -> DatabaseSettings:
    """Build :class:`DatabaseSettings` from environment variables."""

    env = os.environ if environ is None else environ
    dsn = env.get(DSN_ENV, "").strip()
    if not dsn:
        raise RuntimeError(f"{DSN_ENV} must be set to run migrations")
    runtime = DatabaseRuntimeConfig()
    application_name = env.get(APPLICATION_NAME_ENV, "").strip()
    if application_name:
        runtime = DatabaseRuntimeConfig(application_name=application_name)
    return DatabaseSettings(dsn=dsn, runtime=runtime)
