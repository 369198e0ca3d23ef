"""
Fixed mapping tables from schema types to physical SQL types and to
generated Python types.

The physical type of a column is the native-type hint when one is present
and the datasource provider is PostgreSQL, otherwise the scalar default.
"""

from __future__ import annotations

from . import ir
from .errors import GenerationError

POSTGRESQL = "postgresql"

# Scalar -> default physical column type
SQL_TYPES: dict[ir.FieldTypeKind, str] = {
    ir.FieldTypeKind.STRING: "TEXT",
    ir.FieldTypeKind.INT: "INTEGER",
    ir.FieldTypeKind.BIGINT: "BIGINT",
    ir.FieldTypeKind.FLOAT: "DOUBLE PRECISION",
    ir.FieldTypeKind.DECIMAL: "DECIMAL(65,30)",
    ir.FieldTypeKind.BOOLEAN: "BOOLEAN",
    ir.FieldTypeKind.DATETIME: "TIMESTAMP",
    ir.FieldTypeKind.JSON: "JSONB",
    ir.FieldTypeKind.ENUM: "TEXT",
    ir.FieldTypeKind.MODEL_REF: "INTEGER",
}

# Scalar -> annotation used in generated code
PYTHON_TYPES: dict[ir.FieldTypeKind, str] = {
    ir.FieldTypeKind.STRING: "str",
    ir.FieldTypeKind.INT: "int",
    ir.FieldTypeKind.BIGINT: "int",
    ir.FieldTypeKind.FLOAT: "float",
    ir.FieldTypeKind.DECIMAL: "Decimal",
    ir.FieldTypeKind.BOOLEAN: "bool",
    ir.FieldTypeKind.DATETIME: "datetime",
    ir.FieldTypeKind.JSON: "Any",
}

# Scalar -> shared filter class
FILTER_TYPES: dict[ir.FieldTypeKind, str] = {
    ir.FieldTypeKind.STRING: "StringFilter",
    ir.FieldTypeKind.INT: "IntFilter",
    ir.FieldTypeKind.BIGINT: "IntFilter",
    ir.FieldTypeKind.FLOAT: "FloatFilter",
    ir.FieldTypeKind.DECIMAL: "DecimalFilter",
    ir.FieldTypeKind.BOOLEAN: "BooleanFilter",
    ir.FieldTypeKind.DATETIME: "DateTimeFilter",
    ir.FieldTypeKind.JSON: "JsonFilter",
    ir.FieldTypeKind.ENUM: "StringFilter",
}

FILTER_CLASS_NAMES = frozenset(FILTER_TYPES.values())

# Per-model classes the generator derives from a model name
MODEL_CLASS_SUFFIXES = ("Where", "UpdateData", "Operations")

# Native hint name -> canonical keyword for PostgreSQL
NATIVE_TYPES: dict[str, str] = {
    "Uuid": "UUID",
    "VarChar": "VARCHAR",
    "Char": "CHAR",
    "Text": "TEXT",
    "Timestamptz": "TIMESTAMPTZ",
    "Timestamp": "TIMESTAMP",
    "Date": "DATE",
    "Time": "TIME",
    "Serial": "SERIAL",
    "BigSerial": "BIGSERIAL",
    "SmallInt": "SMALLINT",
    "Integer": "INTEGER",
    "BigInt": "BIGINT",
    "Real": "REAL",
    "DoublePrecision": "DOUBLE PRECISION",
    "Decimal": "DECIMAL",
    "Boolean": "BOOLEAN",
    "Json": "JSON",
    "JsonB": "JSONB",
}


def is_recognized_native_hint(type_name: str) -> bool:
    """Whether ``@db.<type_name>`` has a physical type mapping."""
    return type_name in NATIVE_TYPES


def native_sql_type(hint: ir.NativeTypeAttribute) -> str:
    """
    Normalize a native hint to SQL.

    ``db.VarChar(255)`` keeps its parameter (``VARCHAR(255)``);
    ``db.Uuid`` maps to the canonical keyword (``UUID``).
    """
    keyword = NATIVE_TYPES[hint.type_name]
    args = hint.arguments
    if args:
        return f"{keyword}({args})"
    return keyword


def sql_type(field: ir.FieldSpec, provider: str | None) -> str:
    """
    Effective physical column type of a field.

    Args:
        field: Field specification
        provider: Datasource provider (e.g. "postgresql")

    Returns:
        SQL type text
    """
    hint = field.native_type
    if hint is not None and provider == POSTGRESQL:
        return native_sql_type(hint)
    if field.type.kind == ir.FieldTypeKind.ENUM and provider == POSTGRESQL:
        return f'"{field.type.ref}"'
    return SQL_TYPES.get(field.type.kind, "TEXT")


def python_type(field_type: ir.FieldType) -> str:
    """Annotation text for a scalar or enum field type."""
    if field_type.kind == ir.FieldTypeKind.ENUM:
        if field_type.ref is None:
            raise GenerationError("Enum field type has no enum name")
        return field_type.ref
    return PYTHON_TYPES[field_type.kind]


def filter_type(field_type: ir.FieldType) -> str:
    return FILTER_TYPES[field_type.kind]
