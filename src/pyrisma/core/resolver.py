"""
Post-parse resolution and validation.

A bare capitalised type name can only be classified once the whole schema is
known: it is an enum value type when an enum with that name is declared,
otherwise a reference to another model. This pass rewrites those references
and checks the cross-declaration invariants the parser cannot see.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import ir
from .errors import make_validation_error
from .type_mapping import FILTER_CLASS_NAMES, MODEL_CLASS_SUFFIXES

logger = logging.getLogger(__name__)


class SchemaResolver:
    """
    Resolves model/enum references and validates a parsed schema.

    Args:
        schema: Unresolved schema from the parser
        file: Schema path, used in error locations
    """

    def __init__(self, schema: ir.SchemaSpec, file: Path | None = None):
        self.schema = schema
        self.file = file
        self.model_names = {m.name for m in schema.models}
        self.enums = {e.name: e for e in schema.enums}

    def resolve(self) -> ir.SchemaSpec:
        """
        Run the pass.

        Returns:
            A new SchemaSpec with enum-typed fields classified

        Raises:
            SchemaValidationError: On the first semantic error
        """
        self._check_declarations()
        models = [self._resolve_model(model) for model in self.schema.models]
        for model in models:
            self._check_relations(model, models)
        logger.debug(
            "Resolved %d models and %d enums", len(models), len(self.schema.enums)
        )
        return self.schema.model_copy(update={"models": models, "resolved": True})

    def _fail(self, message: str, line: int | None = None, column: int | None = None):
        return make_validation_error(message, self.file, line, column)

    def _check_declarations(self) -> None:
        seen: dict[str, str] = {}
        for model in self.schema.models:
            if model.name in seen:
                raise self._fail(f"Duplicate model '{model.name}'", model.line)
            seen[model.name] = "model"
        for enum in self.schema.enums:
            if enum.name in seen:
                raise self._fail(
                    f"Enum '{enum.name}' conflicts with an existing {seen[enum.name]}", enum.line
                )
            seen[enum.name] = "enum"
            member_names = [v.name for v in enum.values]
            if not member_names:
                raise self._fail(f"Enum '{enum.name}' has no values", enum.line)
            duplicates = {n for n in member_names if member_names.count(n) > 1}
            if duplicates:
                raise self._fail(
                    f"Enum '{enum.name}' declares {sorted(duplicates)[0]} more than once", enum.line
                )

        generated = {name: "a shared filter class" for name in FILTER_CLASS_NAMES}
        for model in self.schema.models:
            for suffix in MODEL_CLASS_SUFFIXES:
                generated.setdefault(
                    model.name + suffix, f"the {suffix} class of model '{model.name}'"
                )
        for decl in [*self.schema.models, *self.schema.enums]:
            if decl.name in generated:
                raise self._fail(
                    f"{seen[decl.name].capitalize()} '{decl.name}' collides with "
                    f"{generated[decl.name]}",
                    decl.line,
                )

    def _resolve_model(self, model: ir.ModelSpec) -> ir.ModelSpec:
        names: set[str] = set()
        fields: list[ir.FieldSpec] = []
        for field in model.fields:
            if field.name in names:
                raise self._fail(
                    f"Duplicate field '{field.name}' in model '{model.name}'",
                    field.line,
                    field.column,
                )
            names.add(field.name)
            fields.append(self._resolve_field(model, field))
        return model.model_copy(update={"fields": fields})

    def _resolve_field(self, model: ir.ModelSpec, field: ir.FieldSpec) -> ir.FieldSpec:
        kind = field.type.kind
        ref = field.type.ref
        where = f"{model.name}.{field.name}"

        if kind == ir.FieldTypeKind.MODEL_ARRAY:
            if ref in ir.SCALAR_TYPES or ref in self.enums:
                raise self._fail(f"Scalar lists are not supported ({where})", field.line, field.column)
            if ref not in self.model_names:
                raise self._fail(f"Unknown model '{ref}' in {where}", field.line, field.column)
            return field

        if kind != ir.FieldTypeKind.MODEL_REF:
            return field

        if ref in self.enums:
            if field.relation is not None:
                raise self._fail(
                    f"Enum field {where} cannot carry @relation", field.line, field.column
                )
            default = field.default
            if default is not None and default.value_kind not in (
                ir.DefaultKind.IDENTIFIER,
                ir.DefaultKind.DB_GENERATED,
            ):
                raise self._fail(
                    f"Default for enum field {where} must be a member name of '{ref}', "
                    f"got {default.value_kind.value} '{default.value}'",
                    field.line,
                    field.column,
                )
            if default is not None and default.value_kind == ir.DefaultKind.IDENTIFIER:
                if self.enums[ref].get_value(default.value) is None:
                    raise self._fail(
                        f"Default '{default.value}' is not a member of enum '{ref}' ({where})",
                        field.line,
                        field.column,
                    )
            return field.model_copy(update={"type": ir.FieldType(kind=ir.FieldTypeKind.ENUM, ref=ref)})

        if ref not in self.model_names:
            raise self._fail(f"Unknown type '{ref}' in {where}", field.line, field.column)
        return field

    def _check_relations(self, model: ir.ModelSpec, models: list[ir.ModelSpec]) -> None:
        by_name = {m.name: m for m in models}
        for field in model.fields:
            relation = field.relation
            if relation is None:
                continue
            where = f"{model.name}.{field.name}"
            if not field.type.is_model:
                raise self._fail(
                    f"@relation on {where} requires a model type, got {field.type.display()}",
                    field.line,
                    field.column,
                )
            if len(relation.fields) != len(relation.references):
                raise self._fail(
                    f"@relation on {where} lists {len(relation.fields)} fields "
                    f"but {len(relation.references)} references",
                    field.line,
                    field.column,
                )
            for local in relation.fields:
                local_field = model.get_field(local)
                if local_field is None or local_field.is_relation:
                    raise self._fail(
                        f"@relation on {where} names unknown scalar field '{local}'",
                        field.line,
                        field.column,
                    )
            target = by_name.get(field.related_model or "")
            if target is None:
                continue
            for referenced in relation.references:
                if target.get_field(referenced) is None:
                    raise self._fail(
                        f"@relation on {where} references unknown field "
                        f"'{target.name}.{referenced}'",
                        field.line,
                        field.column,
                    )


def resolve_schema(schema: ir.SchemaSpec, file: Path | None = None) -> ir.SchemaSpec:
    """Classify model references and validate ``schema``."""
    return SchemaResolver(schema, file).resolve()
