"""
Identifier and literal rendering for generated code.

All generated identifiers derived from schema names go through ``Namer`` so
a name that collides with a reserved word is escaped the same way at every
declaration and reference site.
"""

from __future__ import annotations

import keyword

from ..core import ir
from ..core.type_mapping import FILTER_CLASS_NAMES, MODEL_CLASS_SUFFIXES

# Names the generated module binds at top level or uses in method bodies
MODULE_NAMES = frozenset(
    {
        "self",
        "cls",
        "logger",
        "logging",
        "uuid",
        "dataclass",
        "datetime",
        "timezone",
        "Decimal",
        "Enum",
        "Any",
        "Optional",
        "UNSET",
        "Arena",
        "ArenaNotConfiguredError",
        "Connection",
        "RelationNotImplementedError",
        "Row",
        "SqlBuilder",
        "bool_literal",
        "json_literal",
        "maybe",
        "number_literal",
        "parse_datetime",
        "parse_decimal",
        "parse_json",
        "quote_literal",
        "timestamp_literal",
    }
)

# Builtins called or annotated in generated method bodies
BUILTIN_NAMES = frozenset({"str", "list"})

# Methods and private members every record class defines
RECORD_MEMBERS = frozenset(
    {"from_row", "to_sql_values", "set_arena", "clear_relation_caches", "_arena"}
)

# Members of the client class that are not model slots
CLIENT_MEMBERS = frozenset({"connection"})


def is_reserved(name: str) -> bool:
    return keyword.iskeyword(name) or name in MODULE_NAMES or name in BUILTIN_NAMES


def escape(name: str, extra: frozenset[str] | set[str] = frozenset()) -> str:
    """Append ``_`` to a name that is reserved here."""
    if is_reserved(name) or name in extra:
        return name + "_"
    return name


class Namer:
    """
    Computes generated identifiers for one schema.

    Schema-declared class names are reserved as well, so a field parameter
    can never shadow a class referenced in a constructor body.
    """

    def __init__(self, schema: ir.SchemaSpec, client_name: str = "PrismaClient"):
        self.schema = schema
        self.client_name = client_name
        self.class_names = {m.name for m in schema.models} | {e.name for e in schema.enums}
        self.generated_names = {
            model.name + suffix for model in schema.models for suffix in MODEL_CLASS_SUFFIXES
        }
        self.reserved = frozenset(
            self.class_names | self.generated_names | FILTER_CLASS_NAMES | {client_name}
        )

    def class_name(self, name: str) -> str:
        return escape(name)

    def field_attr(self, model: ir.ModelSpec, field: ir.FieldSpec) -> str:
        """Record member / parameter / Where slot name for a field."""
        extra = set(RECORD_MEMBERS) | self.reserved
        for rel in model.relation_fields:
            extra.add(f"load_{rel.name}")
            extra.add(f"load_{rel.name}_cached")
        return escape(field.name, extra)

    def cache_slot(self, model: ir.ModelSpec, field: ir.FieldSpec) -> str:
        return f"_{self.field_attr(model, field)}_cache"

    def loader(self, model: ir.ModelSpec, field: ir.FieldSpec, cached: bool = False) -> str:
        name = f"load_{self.field_attr(model, field)}"
        return name + "_cached" if cached else name

    def client_slot(self, model: ir.ModelSpec) -> str:
        return escape(model.name.lower(), CLIENT_MEMBERS | self.reserved)

    def enum_member(self, name: str) -> str:
        # Enum bodies only need to avoid keywords and the Enum internals
        if keyword.iskeyword(name) or name in ("name", "value") or name.startswith("_"):
            return name + "_"
        return name

    def where_class(self, model: ir.ModelSpec) -> str:
        return f"{model.name}Where"

    def update_class(self, model: ir.ModelSpec) -> str:
        return f"{model.name}UpdateData"

    def operations_class(self, model: ir.ModelSpec) -> str:
        return f"{model.name}Operations"


def py_str(text: str) -> str:
    """
    Python string literal for ``text``.

    Double quotes unless the text contains one; anything needing escapes
    falls back to ``repr``.
    """
    if "\\" in text or "\n" in text or "\r" in text:
        return repr(text)
    if '"' not in text:
        return f'"{text}"'
    if "'" not in text:
        return f"'{text}'"
    return repr(text)


def sql_ident(name: str) -> str:
    """Double-quoted SQL identifier."""
    return '"' + name.replace('"', '""') + '"'
