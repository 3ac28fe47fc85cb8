"""Alembic adapters for :class:`~timescale_migrations.schema_migration.HypertableMigrator`.

Inside a revision the helpers are usually reached through
:func:`alembic_migrator`::

    from timescale_migrations import alembic_migrator

    def upgrade() -> None:
        alembic_migrator().create_hyper_table("check_ins", time_column_name="checked_in_at")

In offline mode (``alembic upgrade --sql``) the statements are written to the
generated script instead of being executed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from alembic.operations import Operations

from .access import table_keyword_arguments
from .schema_migration import DEFAULT_FUNCTION_NAME, HypertableMigrator

__all__ = ["AlembicStatementExecutor", "AlembicTableBuilder", "alembic_migrator"]


def _resolve(operations: Operations | None) -> Operations:
    if operations is not None:
        return operations
    from alembic import op

    return op  # type: ignore[return-value]


class AlembicStatementExecutor:
    """Run statements through ``op.execute``."""

    def __init__(self, operations: Operations | None = None) -> None:
        self._operations = operations

    def execute(self, sql: str) -> Any:
        return _resolve(self._operations).execute(sql)


class AlembicTableBuilder:
    """Create tables through ``op.create_table``."""

    def __init__(self, operations: Operations | None = None) -> None:
        self._operations = operations

    def create_table(self, relation: str, options: Mapping[str, Any], columns: Sequence[Any]) -> Any:
        return _resolve(self._operations).create_table(
            relation, *columns, **table_keyword_arguments(options)
        )


def alembic_migrator(
    operations: Operations | None = None,
    *,
    function_name: str = DEFAULT_FUNCTION_NAME,
    logger: logging.Logger | None = None,
) -> HypertableMigrator:
    """Build a migrator bound to *operations*, or to ``alembic.op`` when omitted.

    ``alembic.op`` is resolved lazily on every statement, so the migrator can
    be created at import time of a revision module.
    """

    return HypertableMigrator(
        AlembicStatementExecutor(operations),
        AlembicTableBuilder(operations),
        function_name=function_name,
        logger=logger,
    )
