"""
Per-type expression fragments shared by the builders.
"""

from __future__ import annotations

from ..core import ir
from ..core.errors import GenerationError
from ..core.type_mapping import python_type
from .naming import Namer, py_str

SQL_LITERAL_HELPERS: dict[ir.FieldTypeKind, str] = {
    ir.FieldTypeKind.STRING: "quote_literal",
    ir.FieldTypeKind.ENUM: "quote_literal",
    ir.FieldTypeKind.INT: "number_literal",
    ir.FieldTypeKind.BIGINT: "number_literal",
    ir.FieldTypeKind.FLOAT: "number_literal",
    ir.FieldTypeKind.DECIMAL: "number_literal",
    ir.FieldTypeKind.BOOLEAN: "bool_literal",
    ir.FieldTypeKind.DATETIME: "timestamp_literal",
    ir.FieldTypeKind.JSON: "json_literal",
}

ROW_CONVERTERS: dict[ir.FieldTypeKind, str] = {
    ir.FieldTypeKind.DATETIME: "parse_datetime",
    ir.FieldTypeKind.DECIMAL: "parse_decimal",
    ir.FieldTypeKind.JSON: "parse_json",
}


def annotation(namer: Namer, field: ir.FieldSpec) -> str:
    if field.type.kind == ir.FieldTypeKind.ENUM:
        base = namer.class_name(field.type.ref or "")
    else:
        base = python_type(field.type)
    return f"Optional[{base}]" if field.optional else base


def sql_literal(field: ir.FieldSpec, expr: str) -> str:
    """SQL literal for a non-None value of ``field``."""
    return f"{SQL_LITERAL_HELPERS[field.type.kind]}({expr})"


def nullable_sql_literal(field: ir.FieldSpec, expr: str) -> str:
    return f'"NULL" if {expr} is None else {sql_literal(field, expr)}'


def row_value(namer: Namer, field: ir.FieldSpec) -> str:
    """Expression reading ``field`` from ``row`` by its physical column name."""
    column = py_str(field.column_name)
    if field.type.kind == ir.FieldTypeKind.ENUM:
        converter: str | None = namer.class_name(field.type.ref or "")
    else:
        converter = ROW_CONVERTERS.get(field.type.kind)

    if field.optional:
        getter = f"row.get_optional({column})"
        return f"maybe({converter}, {getter})" if converter else getter
    getter = f"row.get({column})"
    return f"{converter}({getter})" if converter else getter


def default_value(namer: Namer, schema: ir.SchemaSpec, model: ir.ModelSpec, field: ir.FieldSpec) -> str:
    """
    Constructor expression for a field that is not a constructor parameter.

    Raises:
        GenerationError: If a default cannot be expressed for the field type
    """
    default = field.default
    if default is None:
        return "None"
    if default.is_database_supplied:
        return "UNSET"
    if default.is_now:
        return "datetime.now(timezone.utc)"
    if default.is_uuid:
        return "str(uuid.uuid4())"

    kind = field.type.kind
    value = default.value
    where = f"{model.name}.{field.name}"

    if kind == ir.FieldTypeKind.ENUM:
        enum_name = field.type.ref or ""
        enum = schema.get_enum(enum_name)
        enum_cls = namer.class_name(enum_name)
        if default.value_kind == ir.DefaultKind.IDENTIFIER and enum is not None:
            return f"{enum_cls}.{namer.enum_member(value)}"
        raise GenerationError(f"Default for enum field {where} must name a member of {enum_name}")
    if kind == ir.FieldTypeKind.STRING:
        return py_str(value)
    if kind == ir.FieldTypeKind.BOOLEAN and value in ("true", "false"):
        return "True" if value == "true" else "False"
    if default.value_kind == ir.DefaultKind.NUMBER:
        if kind in (ir.FieldTypeKind.INT, ir.FieldTypeKind.BIGINT, ir.FieldTypeKind.FLOAT):
            return value
        if kind == ir.FieldTypeKind.DECIMAL:
            return f"Decimal({py_str(value)})"
    if default.value_kind == ir.DefaultKind.STRING:
        if kind == ir.FieldTypeKind.DATETIME:
            return f"parse_datetime({py_str(value)})"
        if kind == ir.FieldTypeKind.JSON:
            return f"parse_json({py_str(value)})"
        if kind == ir.FieldTypeKind.DECIMAL:
            return f"Decimal({py_str(value)})"

    raise GenerationError(f"Cannot express default '{value}' for {where} ({field.type.display()})")
