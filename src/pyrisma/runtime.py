"""
Runtime support imported by generated clients.

Generated code talks to the database only through the small protocols
defined here (Connection, ResultSet, Row) and renders SQL with the literal
helpers below. No database driver is bundled; ``DbApiConnection`` adapts any
DB-API 2.0 connection (psycopg, sqlite3, ...) to the Connection protocol.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator, Sequence
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Collaborator protocols
# =============================================================================


class Row(Protocol):
    """One result row with column-name keyed access."""

    def get(self, column: str) -> Any:
        """Return the value of ``column``; raise KeyError if it is absent."""
        ...

    def get_optional(self, column: str) -> Any | None:
        """Return the value of ``column``, or None when absent or NULL."""
        ...


class ResultSet(Protocol):
    """Rows returned by one statement."""

    @property
    def row_count(self) -> int: ...

    def __iter__(self) -> Iterator[Row]: ...


class Connection(Protocol):
    """Executes SQL text and returns its result set."""

    def execute(self, sql: str) -> ResultSet: ...


class DictRow:
    """Row backed by a mapping of column name to value."""

    def __init__(self, values: dict[str, Any]):
        self.values = values

    def get(self, column: str) -> Any:
        if column not in self.values:
            raise KeyError(f"Column {column!r} not in result row")
        return self.values[column]

    def get_optional(self, column: str) -> Any | None:
        return self.values.get(column)

    def __repr__(self) -> str:
        return f"DictRow({self.values!r})"


class ListResultSet:
    """Result set over an in-memory list of rows."""

    def __init__(self, rows: Sequence[Row]):
        self.rows = list(rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def first(self) -> Row | None:
        return self.rows[0] if self.rows else None


class DbApiConnection:
    """
    Adapts a DB-API 2.0 connection to the Connection protocol.

    Each ``execute`` runs on a fresh cursor and commits unless
    ``autocommit=False``.
    """

    def __init__(self, connection: Any, autocommit: bool = True):
        self.connection = connection
        self.autocommit = autocommit

    def execute(self, sql: str) -> ListResultSet:
        logger.debug("Executing SQL: %s", sql)
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql)
            rows: list[Row] = []
            if cursor.description:
                columns = [d[0] for d in cursor.description]
                rows = [DictRow(dict(zip(columns, values))) for values in cursor.fetchall()]
            if self.autocommit:
                self.connection.commit()
            return ListResultSet(rows)
        finally:
            cursor.close()


# =============================================================================
# SQL text
# =============================================================================


class SqlBuilder:
    """Accumulates SQL text."""

    def __init__(self) -> None:
        self.parts: list[str] = []

    def sql(self, text: str) -> SqlBuilder:
        """Append raw text."""
        self.parts.append(text)
        return self

    def build(self) -> str:
        """Produce the final statement text."""
        return "".join(self.parts)


def quote_literal(value: Any) -> str:
    """Single-quoted SQL string literal. Enum members use their value."""
    if isinstance(value, Enum):
        value = value.value
    return "'" + str(value).replace("'", "''") + "'"


def bool_literal(value: bool) -> str:
    return "TRUE" if value else "FALSE"


def number_literal(value: int | float | Decimal) -> str:
    if isinstance(value, bool):
        raise TypeError("Boolean passed where a number was expected")
    return str(value)


def timestamp_literal(value: datetime) -> str:
    """``to_timestamp(<unix seconds>)``; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return f"to_timestamp({value.timestamp()!r})"


def json_literal(value: Any) -> str:
    text = json.dumps(value, sort_keys=True, default=str)
    return quote_literal(text) + "::jsonb"


# =============================================================================
# Row value conversion
# =============================================================================


def parse_datetime(value: Any) -> datetime:
    """Convert a driver value (datetime, ISO string or epoch number) to datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    raise TypeError(f"Cannot convert {value!r} to datetime")


def parse_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_json(value: Any) -> Any:
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


def maybe(convert: Callable[[Any], T], value: Any) -> T | None:
    """Apply ``convert`` unless ``value`` is None."""
    if value is None:
        return None
    return convert(value)


# =============================================================================
# Sentinels, relation caching and errors
# =============================================================================


class _Unset:
    """Placeholder for values the database supplies on insert."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class Arena:
    """
    Owner of cached relation results.

    Records hold cached relation values only while they are registered here.
    ``reset`` drops everything at once.
    """

    def __init__(self) -> None:
        self._values: list[Any] = []

    def keep(self, value: Any) -> Any:
        self._values.append(value)
        return value

    def release(self, value: Any) -> None:
        for i, kept in enumerate(self._values):
            if kept is value:
                del self._values[i]
                return

    def reset(self) -> None:
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)


class PyrismaRuntimeError(Exception):
    """Base class for errors raised by generated clients."""


class ArenaNotConfiguredError(PyrismaRuntimeError):
    """A cached relation loader was called before ``set_arena``."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path}: call set_arena() before using cached relation loaders")


class RelationNotImplementedError(PyrismaRuntimeError, NotImplementedError):
    """The relation cannot be loaded because its query is not supported."""

    def __init__(self, path: str, reason: str = "reverse foreign key loading is not supported"):
        self.path = path
        super().__init__(f"{path}: {reason}")
