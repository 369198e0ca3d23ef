"""
Builders for enum classes and per-model record classes.
"""

from __future__ import annotations

import logging

from ..core import ir
from ..core.errors import GenerationError
from ..core.type_mapping import filter_type, sql_type
from . import expressions as ex
from .naming import Namer, py_str
from .output_model import Block, ClassDecl, MemberDecl, MethodDecl, Param

logger = logging.getLogger(__name__)


def build_enum(namer: Namer, enum: ir.EnumSpec) -> ClassDecl:
    members = [
        MemberDecl(name=namer.enum_member(value.name), default=py_str(value.db_value))
        for value in enum.values
    ]
    return ClassDecl(
        name=namer.class_name(enum.name),
        role="enum",
        bases=["str", "Enum"],
        members=members,
        model=enum.name,
    )


class RecordBuilder:
    """
    Builds the record class for one model.

    Args:
        namer: Identifier rules for the schema
        schema: Resolved schema
        model: Model to build
    """

    def __init__(self, namer: Namer, schema: ir.SchemaSpec, model: ir.ModelSpec):
        self.namer = namer
        self.schema = schema
        self.model = model
        self.provider = schema.provider

    def attr(self, field: ir.FieldSpec) -> str:
        return self.namer.field_attr(self.model, field)

    def build(self) -> ClassDecl:
        model = self.model
        logger.debug("Building record class for %s", model.name)
        methods = [
            self._build_init(),
            self._build_from_row(),
            self._build_to_sql_values(),
            self._build_set_arena(),
            self._build_clear_caches(),
        ]
        for field in model.relation_fields:
            if field.related_model is None:
                continue
            methods.append(self._build_loader(field))
            methods.append(self._build_cached_loader(field))

        return ClassDecl(
            name=self.namer.class_name(model.name),
            role="record",
            docstring=f"Record for model {model.name}, stored in table {model.table}.",
            members=self._build_members(),
            methods=methods,
            model=model.name,
        )

    def _column_comment(self, field: ir.FieldSpec) -> str:
        parts = [f'Column "{field.column_name}" {sql_type(field, self.provider)}']
        if field.is_primary_key:
            parts.append("primary key")
        elif field.is_unique:
            parts.append("unique")
        if field.default is not None:
            parts.append(f"default {field.default.value}")
        return ", ".join(parts)

    def _build_members(self) -> list[MemberDecl]:
        members = [
            MemberDecl(
                name=self.attr(field),
                annotation=ex.annotation(self.namer, field),
                comment=self._column_comment(field),
                source_field=field.name,
            )
            for field in self.model.scalar_fields
        ]
        members.append(MemberDecl(name="_arena", annotation="Optional[Arena]"))
        for field in self.model.relation_fields:
            target = self.namer.class_name(field.related_model or "Any")
            annotation = f"Optional[list[{target}]]" if field.is_array_relation else f"Optional[{target}]"
            members.append(
                MemberDecl(
                    name=self.namer.cache_slot(self.model, field),
                    annotation=annotation,
                    source_field=field.name,
                )
            )
        return members

    def _cache_reset(self, target: str) -> list[str]:
        lines = [f"{target}._arena = None"]
        for field in self.model.relation_fields:
            lines.append(f"{target}.{self.namer.cache_slot(self.model, field)} = None")
        return lines

    def _build_init(self) -> MethodDecl:
        params = [Param("self")]
        body: list[str] = []
        refs: list[tuple[str, str]] = []
        for field in self.model.scalar_fields:
            attr = self.attr(field)
            refs.append((field.name, attr))
            if not field.optional and field.default is None:
                params.append(Param(attr, ex.annotation(self.namer, field), source_field=field.name))
                body.append(f"self.{attr} = {attr}")
            else:
                value = ex.default_value(self.namer, self.schema, self.model, field)
                body.append(f"self.{attr} = {value}")
        body.extend(self._cache_reset("self"))
        return MethodDecl(name="__init__", params=params, returns="None", body=body, field_refs=refs)

    def _build_from_row(self) -> MethodDecl:
        cls_name = self.namer.class_name(self.model.name)
        body: list[str] = ["record = cls.__new__(cls)"]
        refs: list[tuple[str, str]] = []
        for field in self.model.scalar_fields:
            attr = self.attr(field)
            refs.append((field.name, attr))
            body.append(f"record.{attr} = {ex.row_value(self.namer, field)}")
        body.extend(self._cache_reset("record"))
        body.append("return record")
        return MethodDecl(
            name="from_row",
            params=[Param("cls"), Param("row", "Row")],
            returns=cls_name,
            body=body,
            decorators=["classmethod"],
            docstring="Build a record from a result row, keyed by physical column names.",
            field_refs=refs,
        )

    def _build_to_sql_values(self) -> MethodDecl:
        body: list[str | Block] = ["values: list[str] = []"]
        refs: list[tuple[str, str]] = []
        for field in self.model.scalar_fields:
            attr = self.attr(field)
            refs.append((field.name, attr))
            expr = f"self.{attr}"
            literal = ex.sql_literal(field, expr)
            if field.optional:
                literal = ex.nullable_sql_literal(field, expr)
            if field.default is not None and field.default.is_database_supplied:
                literal = f'"DEFAULT" if {expr} is UNSET else {literal}'
            body.append(
                Block(f"if {py_str(field.column_name)} in columns:", [f"values.append({literal})"])
            )
        body.append('return ", ".join(values)')
        return MethodDecl(
            name="to_sql_values",
            params=[Param("self"), Param("columns", "list[str]")],
            returns="str",
            body=body,
            docstring="Render the values of ``columns`` as a comma-separated SQL list.",
            field_refs=refs,
        )

    def _build_set_arena(self) -> MethodDecl:
        return MethodDecl(
            name="set_arena",
            params=[Param("self"), Param("arena", "Arena")],
            returns="None",
            body=["self._arena = arena"],
        )

    def _build_clear_caches(self) -> MethodDecl:
        body: list[str | Block] = []
        for field in self.model.relation_fields:
            slot = self.namer.cache_slot(self.model, field)
            if field.is_array_relation:
                body.append(
                    Block(
                        f"if self.{slot} is not None and self._arena is not None:",
                        [f"self._arena.release(self.{slot})"],
                    )
                )
            body.append(f"self.{slot} = None")
        return MethodDecl(
            name="clear_relation_caches",
            params=[Param("self")],
            returns="None",
            body=body,
            docstring="Drop every cached relation result.",
        )

    def _relation_path(self, field: ir.FieldSpec) -> str:
        return py_str(f"{self.model.name}.{field.name}")

    def _target_annotation(self, field: ir.FieldSpec) -> str:
        target = self.namer.class_name(field.related_model or "")
        return f"list[{target}]" if field.is_array_relation else f"Optional[{target}]"

    def _build_loader(self, field: ir.FieldSpec) -> MethodDecl:
        params = [Param("self"), Param("connection", "Connection")]
        name = self.namer.loader(self.model, field)
        relation = field.relation
        target = self.schema.get_model(field.related_model or "")

        if field.is_array_relation:
            body: list[str | Block] = [f"raise RelationNotImplementedError({self._relation_path(field)})"]
            return MethodDecl(
                name=name,
                params=params,
                returns=self._target_annotation(field),
                body=body,
                docstring=f"Load {field.name}. Reverse foreign key queries are not supported yet.",
            )

        if relation is None or not relation.fields or target is None:
            reason = py_str("the foreign key is stored on the related model")
            return MethodDecl(
                name=name,
                params=params,
                returns=self._target_annotation(field),
                body=[f"raise RelationNotImplementedError({self._relation_path(field)}, {reason})"],
            )

        refs: list[tuple[str, str]] = []
        checks: list[str] = []
        filters: list[str] = []
        for local_name, referenced_name in relation.key_pairs:
            local = self.model.get_field(local_name)
            referenced = target.get_field(referenced_name)
            if local is None or referenced is None:
                raise GenerationError(
                    f"Relation {self.model.name}.{field.name} names a missing key "
                    f"{local_name} -> {target.name}.{referenced_name}"
                )
            local_attr = self.attr(local)
            refs.append((local.name, local_attr))
            checks.append(f"self.{local_attr} is None")
            filters.append(
                f"{self.namer.field_attr(target, referenced)}="
                f"{filter_type(referenced.type)}(equals=self.{local_attr})"
            )

        ops = self.namer.operations_class(target)
        where = self.namer.where_class(target)
        body = [
            Block(f"if {' or '.join(checks)}:", ["return None"]),
            f"return {ops}(connection).find_unique({where}({', '.join(filters)}))",
        ]
        return MethodDecl(
            name=name,
            params=params,
            returns=self._target_annotation(field),
            body=body,
            docstring=f"Load {field.name} by its foreign key without caching.",
            field_refs=refs,
        )

    def _build_cached_loader(self, field: ir.FieldSpec) -> MethodDecl:
        slot = self.namer.cache_slot(self.model, field)
        loader = self.namer.loader(self.model, field)
        keep = [f"self.{slot} = self._arena.keep(loaded)"]
        body: list[str | Block] = [
            Block(f"if self.{slot} is not None:", [f"return self.{slot}"]),
            Block("if self._arena is None:", [f"raise ArenaNotConfiguredError({self._relation_path(field)})"]),
            f"loaded = self.{loader}(connection)",
        ]
        if field.is_array_relation:
            body.extend(keep)
        else:
            body.append(Block("if loaded is not None:", keep))
        body.append("return loaded")
        return MethodDecl(
            name=self.namer.loader(self.model, field, cached=True),
            params=[Param("self"), Param("connection", "Connection")],
            returns=self._target_annotation(field),
            body=body,
        )
