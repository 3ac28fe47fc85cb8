"""Build the SQLAlchemy engine used to run migrations."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from .config import DatabaseRuntimeConfig, DatabaseSettings

__all__ = ["create_engine_from_config"]


def _session_parameters(runtime: DatabaseRuntimeConfig) -> dict[str, object]:
    parameters: dict[str, object] = {"statement_timeout": int(runtime.statement_timeout_ms)}
    if runtime.lock_timeout_ms is not None:
        parameters["lock_timeout"] = int(runtime.lock_timeout_ms)
    parameters["timezone"] = "UTC"
    return parameters


def _build_connect_args(runtime: DatabaseRuntimeConfig) -> dict[str, object]:
    """Return psycopg keyword arguments, session parameters passed as ``-c`` options."""

    return {
        "connect_timeout": int(runtime.connect_timeout_seconds),
        "application_name": runtime.application_name,
        "options": " ".join(f"-c {name}={value}" for name, value in _session_parameters(runtime).items()),
    }


def create_engine_from_config(settings: DatabaseSettings) -> Engine:
    """Instantiate a single-connection :class:`QueuePool` engine for migration runs."""

    return create_engine(
        settings.dsn,
        echo=settings.echo_statements,
        poolclass=QueuePool,
        pool_size=1,
        max_overflow=0,
        pool_pre_ping=True,
        connect_args=_build_connect_args(settings.runtime),
    )
