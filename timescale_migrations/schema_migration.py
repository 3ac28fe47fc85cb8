"""Convert relations into TimescaleDB hypertables from schema migrations.

Examples
--------
Create the table and convert it in one step::

    migrator.create_hyper_table(
        "check_ins",
        sa.Column("user_id", sa.BigInteger()),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=False),
        time_column_name="checked_in_at",
    )

Convert a table that already exists::

    migrator.create_hyper_table("check_ins", time_column_name="checked_in_at", migrate_data=True)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .access import StatementExecutor, TableBuilder
from .exceptions import HypertableError
from .options import HypertableOptions

__all__ = ["DEFAULT_FUNCTION_NAME", "DEFAULT_TIME_COLUMN", "HypertableMigrator", "create_hypertable_sql"]

DEFAULT_TIME_COLUMN = "created_at"
DEFAULT_FUNCTION_NAME = "create_hyper_table"


def create_hypertable_sql(
    relation: str,
    time_column_name: str,
    options: HypertableOptions,
    *,
    function_name: str = DEFAULT_FUNCTION_NAME,
) -> str:
    """Return the administrative statement converting *relation*."""

    return f"SELECT * FROM {function_name}('{relation}', '{time_column_name}', {options.to_sql()})"


class HypertableMigrator:
    """Issue ``create_hyper_table`` statements through injected collaborators.

    Parameters
    ----------
    executor:
        Runs the generated statement. Its result is returned unchanged and its
        errors propagate unchanged.
    table_builder:
        Creates the relation when column definitions are given. Only required
        by callers that pass columns.
    function_name:
        Name of the engine function called by the statement.
    logger:
        Optional logger, defaults to the module logger.
    """

    def __init__(
        self,
        executor: StatementExecutor,
        table_builder: TableBuilder | None = None,
        *,
        function_name: str = DEFAULT_FUNCTION_NAME,
        logger: logging.Logger | None = None,
    ) -> None:
        self._executor = executor
        self._table_builder = table_builder
        self._function_name = function_name
        self._logger = logger or logging.getLogger(__name__)

    def create_hyper_table(
        self,
        relation: str,
        *columns: Any,
        time_column_name: str | None = DEFAULT_TIME_COLUMN,
        **options: Any,
    ) -> Any:
        """Convert *relation* into a hypertable partitioned on *time_column_name*.

        When *columns* are given the relation is created first, receiving the
        extra keyword arguments alongside the hypertable options. Without
        columns the relation must already exist. ``None`` for
        *time_column_name* selects ``created_at``.

        Recognized options are ``partitioning_column``, ``number_partitions``,
        ``chunk_time_interval``, ``create_default_indexes``, ``if_not_exists``,
        ``partitioning_func``, ``associated_schema_name``,
        ``associated_table_prefix``, ``migrate_data``,
        ``time_partitioning_func``, ``replication_factor``, ``data_nodes`` and
        ``distributed``. See :class:`~timescale_migrations.options.HypertableOptions`.
        """

        if time_column_name is None:
            time_column_name = DEFAULT_TIME_COLUMN
        hypertable_options = HypertableOptions.from_options(options)
        if columns:
            self._create_table(relation, hypertable_options, columns)
        statement = create_hypertable_sql(
            relation, time_column_name, hypertable_options, function_name=self._function_name
        )
        self._logger.info(
            "Converting %s to a hypertable on %s (distributed=%s)",
            relation,
            time_column_name,
            hypertable_options.distributed,
        )
        self._logger.debug("Executing %s", statement)
        return self._executor.execute(statement)

    def create_distributed_hyper_table(self, relation: str, *columns: Any, **options: Any) -> Any:
        """Same as :meth:`create_hyper_table` with ``distributed`` forced to true.

        A caller supplied ``distributed`` value, ``False`` included, is
        overridden.
        """

        return self.create_hyper_table(relation, *columns, **_merge(options, distributed=True))

    def _create_table(self, relation: str, options: HypertableOptions, columns: tuple[Any, ...]) -> None:
        if self._table_builder is None:
            raise HypertableError(f"Cannot create {relation}: no table builder configured")
        self._logger.info("Creating table %s with %d column definitions", relation, len(columns))
        self._table_builder.create_table(relation, options.table_creation_args(), columns)


def _merge(options: Mapping[str, Any], **overrides: Any) -> dict[str, Any]:
    merged = dict(options)
    merged.update(overrides)
    return merged
