"""SQLAlchemy shortcuts for TimescaleDB aggregate and catalog functions."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, text
from sqlalchemy.engine import Connection
from sqlalchemy.sql.functions import Function

__all__ = ["approximate_row_count", "first", "histogram", "last"]

_APPROXIMATE_ROW_COUNT = text("SELECT * FROM approximate_row_count(CAST(:relation AS regclass))")


def first(value: Any, time: Any) -> Function[Any]:
    """Value of *value* at the earliest *time* within an aggregate group."""

    return func.first(value, time)


def last(value: Any, time: Any) -> Function[Any]:
    """Value of *value* at the latest *time* within an aggregate group."""

    return func.last(value, time)


def histogram(value: Any, min_value: Any, max_value: Any, nbuckets: Any) -> Function[Any]:
    """Bucket *value* into *nbuckets* between *min_value* (inclusive) and *max_value* (exclusive)."""

    return func.histogram(value, min_value, max_value, nbuckets)


def approximate_row_count(connection: Connection, relation: str) -> int:
    """Return the catalog based row estimate for a hypertable or plain table.

    Accuracy depends on up to date statistics, refreshed by ``VACUUM`` and
    ``ANALYZE``.
    """

    result = connection.execute(_APPROXIMATE_ROW_COUNT, {"relation": relation})
    return int(result.scalar_one())
