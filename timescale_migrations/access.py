"""Collaborator interfaces used by the hypertable migrator.

The migrator never talks to a database directly.  It relies on two small
collaborators:

* a :class:`StatementExecutor` that runs a single SQL statement and either
  returns its result or raises;
* a :class:`TableBuilder` that creates the relation from column definitions
  when the caller asks for it.

This module also ships SQLAlchemy backed implementations of both so the
helpers can be used outside of an Alembic migration, for example from a
bootstrap script holding an :class:`~sqlalchemy.engine.Engine`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import MetaData, Table, text
from sqlalchemy.engine import Engine, Row

from .options import HYPERTABLE_OPTION_NAMES

__all__ = [
    "EngineStatementExecutor",
    "MetadataTableBuilder",
    "StatementExecutor",
    "TableBuilder",
    "table_keyword_arguments",
]


@runtime_checkable
class StatementExecutor(Protocol):
    """Protocol for objects able to run raw SQL statements."""

    def execute(self, sql: str) -> Any:  # pragma: no cover - runtime duck typing
        """Run *sql* and return its result, raising on failure."""


@runtime_checkable
class TableBuilder(Protocol):
    """Protocol for objects able to create a table from column definitions."""

    def create_table(
        self, relation: str, options: Mapping[str, Any], columns: Sequence[Any]
    ) -> Any:  # pragma: no cover - runtime duck typing
        """Create *relation* with *columns* honouring the relevant *options*."""


def table_keyword_arguments(options: Mapping[str, Any]) -> dict[str, Any]:
    """Drop hypertable options, keeping what :class:`~sqlalchemy.Table` accepts.

    SQLAlchemy rejects keyword arguments it does not know, so only the extras
    the caller passed alongside the hypertable options are forwarded.
    """

    return {key: value for key, value in options.items() if key not in HYPERTABLE_OPTION_NAMES}


@dataclass(slots=True)
class EngineStatementExecutor:
    """Run statements on a SQLAlchemy engine, one transaction per statement.

    Parameters
    ----------
    engine:
        Engine used to open a connection for every statement.
    """

    engine: Engine

    def execute(self, sql: str) -> list[Row[Any]] | None:
        """Execute *sql* and commit.

        Rows are returned when the statement produces a result set.  On
        failure the transaction is rolled back and the exception is
        propagated to the caller.
        """

        with self.engine.begin() as connection:
            result = connection.execute(text(sql))
            if result.returns_rows:
                return list(result.fetchall())
            return None


@dataclass(slots=True)
class MetadataTableBuilder:
    """Create tables through SQLAlchemy :class:`~sqlalchemy.Table` metadata."""

    engine: Engine

    def create_table(self, relation: str, options: Mapping[str, Any], columns: Sequence[Any]) -> Table:
        table = Table(relation, MetaData(), *columns, **table_keyword_arguments(options))
        with self.engine.begin() as connection:
            table.create(connection)
        return table
