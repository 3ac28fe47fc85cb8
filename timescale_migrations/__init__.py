"""Helpers converting PostgreSQL tables into TimescaleDB hypertables from migrations."""

from .access import (
    EngineStatementExecutor,
    MetadataTableBuilder,
    StatementExecutor,
    TableBuilder,
)
from .config import DatabaseRuntimeConfig, DatabaseSettings, load_database_settings
from .engine import create_engine_from_config
from .exceptions import HypertableError, HypertableOptionError
from .functions import approximate_row_count, first, histogram, last
from .operations import AlembicStatementExecutor, AlembicTableBuilder, alembic_migrator
from .options import HYPERTABLE_OPTION_NAMES, HypertableOptions, format_interval
from .schema_migration import DEFAULT_FUNCTION_NAME, HypertableMigrator, create_hypertable_sql

__all__ = [
    "AlembicStatementExecutor",
    "AlembicTableBuilder",
    "DEFAULT_FUNCTION_NAME",
    "DatabaseRuntimeConfig",
    "DatabaseSettings",
    "EngineStatementExecutor",
    "HYPERTABLE_OPTION_NAMES",
    "HypertableError",
    "HypertableMigrator",
    "HypertableOptionError",
    "HypertableOptions",
    "MetadataTableBuilder",
    "StatementExecutor",
    "TableBuilder",
    "alembic_migrator",
    "approximate_row_count",
    "create_engine_from_config",
    "create_hypertable_sql",
    "first",
    "format_interval",
    "histogram",
    "last",
    "load_database_settings",
]
