"""Tests for schema type to SQL/Python type mapping."""

import pytest

from pyrisma.core import ir
from pyrisma.core.errors import GenerationError
from pyrisma.core.type_mapping import (
    filter_type,
    is_recognized_native_hint,
    native_sql_type,
    python_type,
    sql_type,
)


def make_field(kind: ir.FieldTypeKind, ref: str | None = None, hint: str | None = None) -> ir.FieldSpec:
    attributes = [ir.NativeTypeAttribute(hint=hint)] if hint else []
    return ir.FieldSpec(name="f", type=ir.FieldType(kind=kind, ref=ref), attributes=attributes)


class TestSqlType:
    @pytest.mark.parametrize(
        "kind,expected",
        [
            (ir.FieldTypeKind.STRING, "TEXT"),
            (ir.FieldTypeKind.INT, "INTEGER"),
            (ir.FieldTypeKind.BIGINT, "BIGINT"),
            (ir.FieldTypeKind.FLOAT, "DOUBLE PRECISION"),
            (ir.FieldTypeKind.DECIMAL, "DECIMAL(65,30)"),
            (ir.FieldTypeKind.BOOLEAN, "BOOLEAN"),
            (ir.FieldTypeKind.DATETIME, "TIMESTAMP"),
            (ir.FieldTypeKind.JSON, "JSONB"),
        ],
    )
    def test_scalar_defaults(self, kind, expected):
        assert sql_type(make_field(kind), "postgresql") == expected

    def test_native_hint_with_arguments(self):
        field = make_field(ir.FieldTypeKind.STRING, hint="db.VarChar(255)")
        assert sql_type(field, "postgresql") == "VARCHAR(255)"

    def test_native_hint_keyword(self):
        field = make_field(ir.FieldTypeKind.STRING, hint="db.Uuid")
        assert sql_type(field, "postgresql") == "UUID"

    def test_native_hint_ignored_for_other_providers(self):
        field = make_field(ir.FieldTypeKind.STRING, hint="db.VarChar(255)")
        assert sql_type(field, "sqlite") == "TEXT"
        assert sql_type(field, None) == "TEXT"

    def test_enum_column(self):
        field = make_field(ir.FieldTypeKind.ENUM, ref="Role")
        assert sql_type(field, "postgresql") == '"Role"'
        assert sql_type(field, "sqlite") == "TEXT"

    def test_native_sql_type_two_arguments(self):
        assert native_sql_type(ir.NativeTypeAttribute(hint="db.Decimal(10, 2)")) == "DECIMAL(10, 2)"


class TestPythonTypes:
    def test_scalars(self):
        assert python_type(ir.FieldType(kind=ir.FieldTypeKind.DECIMAL)) == "Decimal"
        assert python_type(ir.FieldType(kind=ir.FieldTypeKind.JSON)) == "Any"
        assert python_type(ir.FieldType(kind=ir.FieldTypeKind.BIGINT)) == "int"

    def test_enum_uses_its_name(self):
        assert python_type(ir.FieldType(kind=ir.FieldTypeKind.ENUM, ref="Role")) == "Role"

    def test_enum_without_name_rejected(self):
        with pytest.raises(GenerationError, match="no enum name"):
            python_type(ir.FieldType(kind=ir.FieldTypeKind.ENUM))

    def test_filters(self):
        assert filter_type(ir.FieldType(kind=ir.FieldTypeKind.ENUM, ref="Role")) == "StringFilter"
        assert filter_type(ir.FieldType(kind=ir.FieldTypeKind.BIGINT)) == "IntFilter"
        assert filter_type(ir.FieldType(kind=ir.FieldTypeKind.DATETIME)) == "DateTimeFilter"


def test_recognized_native_hints():
    assert is_recognized_native_hint("VarChar")
    assert is_recognized_native_hint("Timestamptz")
    assert not is_recognized_native_hint("Inet")
