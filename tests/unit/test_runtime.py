"""Tests for the runtime support module used by generated clients."""

import sqlite3
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum

import pytest

from pyrisma.runtime import (
    UNSET,
    Arena,
    ArenaNotConfiguredError,
    DbApiConnection,
    DictRow,
    ListResultSet,
    PyrismaRuntimeError,
    RelationNotImplementedError,
    SqlBuilder,
    bool_literal,
    json_literal,
    maybe,
    number_literal,
    parse_datetime,
    parse_decimal,
    parse_json,
    quote_literal,
    timestamp_literal,
)


class Color(str, Enum):
    RED = "red"


class TestLiterals:
    def test_quote_literal_doubles_quotes(self):
        assert quote_literal("it's") == "'it''s'"

    def test_quote_literal_uses_enum_value(self):
        assert quote_literal(Color.RED) == "'red'"

    def test_bool_literal(self):
        assert bool_literal(True) == "TRUE"
        assert bool_literal(False) == "FALSE"

    def test_number_literal(self):
        assert number_literal(3) == "3"
        assert number_literal(Decimal("1.10")) == "1.10"
        with pytest.raises(TypeError):
            number_literal(True)

    def test_timestamp_literal_naive_is_utc(self):
        assert timestamp_literal(datetime(1970, 1, 1, 0, 0, 10)) == "to_timestamp(10.0)"

    def test_timestamp_literal_aware(self):
        plus_one = timezone(timedelta(hours=1))
        assert timestamp_literal(datetime(1970, 1, 1, 1, 0, 10, tzinfo=plus_one)) == "to_timestamp(10.0)"

    def test_json_literal(self):
        assert json_literal({"b": 1, "a": "x'y"}) == "'{\"a\": \"x''y\", \"b\": 1}'::jsonb"


class TestConverters:
    def test_parse_datetime(self):
        value = datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert parse_datetime(value) is value
        assert parse_datetime("2024-05-01T00:00:00+00:00") == value
        assert parse_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        with pytest.raises(TypeError):
            parse_datetime(object())

    def test_parse_decimal(self):
        assert parse_decimal(1.5) == Decimal("1.5")
        assert parse_decimal("2.25") == Decimal("2.25")

    def test_parse_json(self):
        data = {"a": 1}
        assert parse_json('{"a": 1}') == data
        assert parse_json(data) is data

    def test_maybe(self):
        assert maybe(int, None) is None
        assert maybe(int, "3") == 3


class TestRowsAndResults:
    def test_dict_row(self):
        row = DictRow({"a": 1, "b": None})
        assert row.get("a") == 1
        assert row.get_optional("b") is None
        assert row.get_optional("missing") is None
        with pytest.raises(KeyError):
            row.get("missing")

    def test_list_result_set(self):
        rows = ListResultSet([DictRow({"a": 1}), DictRow({"a": 2})])
        assert rows.row_count == 2
        assert [r.get("a") for r in rows] == [1, 2]
        assert rows.first().get("a") == 1
        assert ListResultSet([]).first() is None

    def test_sql_builder(self):
        assert SqlBuilder().sql("SELECT ").sql("1").build() == "SELECT 1"


class TestDbApiConnection:
    def test_round_trip_through_sqlite(self):
        raw = sqlite3.connect(":memory:")
        connection = DbApiConnection(raw)
        ddl = connection.execute('CREATE TABLE "t" ("a" INTEGER, "b" TEXT)')
        assert ddl.row_count == 0

        connection.execute("INSERT INTO \"t\" (\"a\", \"b\") VALUES (1, 'x')")
        rows = list(connection.execute('SELECT * FROM "t"'))
        assert [(r.get("a"), r.get("b")) for r in rows] == [(1, "x")]
        raw.close()


class TestUnset:
    def test_singleton(self):
        assert type(UNSET)() is UNSET

    def test_falsy_and_repr(self):
        assert not UNSET
        assert repr(UNSET) == "UNSET"


class TestArena:
    def test_keep_and_release(self):
        arena = Arena()
        a, b = ["a"], ["a"]
        assert arena.keep(a) is a
        arena.keep(b)
        arena.release(b)
        assert len(arena) == 1
        arena.release(["not kept"])
        assert len(arena) == 1

    def test_reset(self):
        arena = Arena()
        arena.keep(1)
        arena.keep(2)
        arena.reset()
        assert len(arena) == 0


class TestErrors:
    def test_arena_not_configured(self):
        error = ArenaNotConfiguredError("Post.author")
        assert isinstance(error, PyrismaRuntimeError)
        assert str(error).startswith("Post.author: ")

    def test_relation_not_implemented(self):
        error = RelationNotImplementedError("User.posts")
        assert isinstance(error, NotImplementedError)
        assert str(error) == "User.posts: reverse foreign key loading is not supported"
