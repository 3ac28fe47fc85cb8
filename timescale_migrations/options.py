"""Compile hypertable options into ``create_hyper_table`` named arguments.

Values rendered as quoted strings are interpolated into the statement as-is,
embedded quote characters included. They must be identifiers written by the
migration author (column names, schema names, chunk prefixes, function names),
never values that originate from end users.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from datetime import timedelta
from types import MappingProxyType
from typing import Any

from .exceptions import HypertableOptionError

__all__ = [
    "DEFAULT_CHUNK_TIME_INTERVAL",
    "HYPERTABLE_OPTION_NAMES",
    "HypertableOptions",
    "format_interval",
]

DEFAULT_CHUNK_TIME_INTERVAL = "7 days"

_STRING_OPTIONS = (
    "partitioning_column",
    "partitioning_func",
    "associated_schema_name",
    "associated_table_prefix",
    "time_partitioning_func",
)
_INTEGER_OPTIONS = ("number_partitions", "replication_factor")
_BOOLEAN_OPTIONS = ("create_default_indexes", "if_not_exists", "migrate_data", "distributed")


def format_interval(value: timedelta) -> str:
    """Render a PostgreSQL interval literal in the largest whole unit.

    Sub-second durations keep their precision, falling back to milliseconds
    or microseconds.
    """

    microseconds = value // timedelta(microseconds=1)
    if microseconds % 1_000_000:
        if microseconds % 1_000 == 0:
            return f"INTERVAL '{microseconds // 1_000} milliseconds'"
        return f"INTERVAL '{microseconds} microseconds'"
    total_seconds = microseconds // 1_000_000
    if total_seconds % 86_400 == 0:
        days = total_seconds // 86_400
        return f"INTERVAL '{days} days'"
    if total_seconds % 3_600 == 0:
        hours = total_seconds // 3_600
        return f"INTERVAL '{hours} hours'"
    if total_seconds % 60 == 0:
        minutes = total_seconds // 60
        return f"INTERVAL '{minutes} minutes'"
    return f"INTERVAL '{total_seconds} seconds'"


def _quote(value: str) -> str:
    return f"'{value}'"


def _boolean(value: bool) -> str:
    return "true" if value else "false"


def _type_error(name: str, expected: str, value: object) -> HypertableOptionError:
    return HypertableOptionError(f"{name} must be {expected}, got {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class HypertableOptions:
    """Normalized partitioning configuration for a single hypertable.

    ``None`` marks an option as absent, which leaves the decision to the
    engine. Explicit falsy values such as ``distributed=False`` or
    ``number_partitions=0`` are kept and rendered.

    Keys that are not hypertable options are kept in :attr:`extra`. They are
    handed to the table builder and never rendered into the statement.
    """

    partitioning_column: str | None = None
    number_partitions: int | None = None
    chunk_time_interval: str | int | timedelta = DEFAULT_CHUNK_TIME_INTERVAL
    create_default_indexes: bool = True
    if_not_exists: bool = False
    partitioning_func: str | None = None
    associated_schema_name: str = "_timescaledb_internal"
    associated_table_prefix: str = "_hyper"
    migrate_data: bool = False
    time_partitioning_func: str | None = None
    replication_factor: int | None = None
    data_nodes: tuple[str, ...] = ()
    distributed: bool | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        for name in _STRING_OPTIONS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise _type_error(name, "a string", value)
        for name in _INTEGER_OPTIONS:
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise _type_error(name, "an integer", value)
        for name in _BOOLEAN_OPTIONS:
            value = getattr(self, name)
            if value is None and name == "distributed":
                continue
            if not isinstance(value, bool):
                raise _type_error(name, "a boolean", value)
        interval = self.chunk_time_interval
        if isinstance(interval, bool) or not isinstance(interval, (str, int, timedelta)):
            raise _type_error("chunk_time_interval", "a string, an integer or a timedelta", interval)
        object.__setattr__(self, "data_nodes", self._normalize_data_nodes(self.data_nodes))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @staticmethod
    def _normalize_data_nodes(value: Iterable[str]) -> tuple[str, ...]:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            raise _type_error("data_nodes", "a sequence of node names", value)
        nodes = tuple(value)
        for node in nodes:
            if not isinstance(node, str):
                raise _type_error("data_nodes entries", "strings", node)
        return nodes

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> HypertableOptions:
        """Split *options* into hypertable options and table creation extras.

        ``None`` for an option that has a non-``None`` default counts as not
        supplied, so the default applies.
        """

        recognized: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for name, value in options.items():
            if name not in HYPERTABLE_OPTION_NAMES:
                extra[name] = value
            elif value is not None or _DEFAULTS[name] is None:
                recognized[name] = value
        return cls(**recognized, extra=extra)

    def table_creation_args(self) -> dict[str, Any]:
        """Return the extras merged with every hypertable option."""

        args = dict(self.extra)
        args.update({name: getattr(self, name) for name in _OPTION_ORDER})
        return args

    def to_sql(self) -> str:
        """Render the comma separated ``name => literal`` argument list."""

        sql: list[str] = []
        if self.partitioning_column is not None:
            sql.append(f"partitioning_column => {_quote(self.partitioning_column)}")
        if self.number_partitions is not None:
            sql.append(f"number_partitions => {self.number_partitions}")
        sql.append(f"if_not_exists => {_boolean(self.if_not_exists)}")
        if self.partitioning_func is not None:
            sql.append(f"partitioning_func => {_quote(self.partitioning_func)}")
        sql.append(f"associated_schema_name => {_quote(self.associated_schema_name)}")
        sql.append(f"associated_table_prefix => {_quote(self.associated_table_prefix)}")
        sql.append(f"migrate_data => {_boolean(self.migrate_data)}")
        if self.time_partitioning_func is not None:
            sql.append(f"time_partitioning_func => {_quote(self.time_partitioning_func)}")
        if self.replication_factor is not None:
            sql.append(f"replication_factor => {self.replication_factor}")
        if self.data_nodes:
            sql.append(f"data_nodes => '{{ {', '.join(self.data_nodes)} }}'")
        if self.distributed is not None:
            sql.append(f"distributed => {_boolean(self.distributed)}")
        sql.append(f"chunk_time_interval => {self._chunk_time_interval_sql()}")
        return ", ".join(sql)

    def _chunk_time_interval_sql(self) -> str:
        interval = self.chunk_time_interval
        if isinstance(interval, str):
            return f"INTERVAL {_quote(interval)}"
        if isinstance(interval, timedelta):
            return format_interval(interval)
        return str(interval)


_OPTION_ORDER = tuple(option.name for option in fields(HypertableOptions) if option.name != "extra")
_DEFAULTS = {option.name: option.default for option in fields(HypertableOptions) if option.name != "extra"}

HYPERTABLE_OPTION_NAMES = frozenset(_OPTION_ORDER)
"""Option names consumed by :class:`HypertableOptions`."""
