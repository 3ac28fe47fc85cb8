"""Tests for the SQLAlchemy backed collaborators."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from timescale_migrations.access import (
    EngineStatementExecutor,
    MetadataTableBuilder,
    StatementExecutor,
    TableBuilder,
    table_keyword_arguments,
)
from timescale_migrations.schema_migration import HypertableMigrator


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = sa.create_engine("sqlite://")
    yield engine
    engine.dispose()


def test_executor_returns_rows(engine: Engine) -> None:
    executor = EngineStatementExecutor(engine)

    assert [tuple(row) for row in executor.execute("SELECT 1, 'two'")] == [(1, "two")]


def test_executor_returns_none_without_result_set(engine: Engine) -> None:
    executor = EngineStatementExecutor(engine)

    assert executor.execute("CREATE TABLE probe (id INTEGER)") is None
    assert sa.inspect(engine).has_table("probe")


def test_executor_propagates_engine_errors(engine: Engine) -> None:
    with pytest.raises(OperationalError):
        EngineStatementExecutor(engine).execute("SELECT * FROM missing_table")


def test_table_builder_creates_table_with_extras_only(engine: Engine) -> None:
    builder = MetadataTableBuilder(engine)

    table = builder.create_table(
        "check_ins",
        {"comment": "Check-ins", "migrate_data": True, "data_nodes": ()},
        (sa.Column("id", sa.Integer(), primary_key=True), sa.Column("checked_in_at", sa.DateTime())),
    )

    assert table.comment == "Check-ins"
    columns = {column["name"] for column in sa.inspect(engine).get_columns("check_ins")}
    assert columns == {"id", "checked_in_at"}


def test_table_is_created_even_when_conversion_is_rejected(engine: Engine) -> None:
    migrator = HypertableMigrator(EngineStatementExecutor(engine), MetadataTableBuilder(engine))

    with pytest.raises(OperationalError):
        migrator.create_hyper_table("readings", sa.Column("taken_at", sa.DateTime()), time_column_name="taken_at")

    assert sa.inspect(engine).has_table("readings")


def test_table_keyword_arguments_drop_hypertable_options() -> None:
    assert table_keyword_arguments({"schema": "metrics", "if_not_exists": True, "distributed": None}) == {
        "schema": "metrics"
    }


def test_collaborators_satisfy_protocols(engine: Engine) -> None:
    assert isinstance(EngineStatementExecutor(engine), StatementExecutor)
    assert isinstance(MetadataTableBuilder(engine), TableBuilder)
