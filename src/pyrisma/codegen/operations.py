"""
Builders for shared filter classes, per-model Where / UpdateData classes,
per-model CRUD operation classes, and the aggregate client.
"""

from __future__ import annotations

import logging

from ..core import ir
from ..core.type_mapping import filter_type
from . import expressions as ex
from .naming import Namer, py_str, sql_ident
from .output_model import Block, ClassDecl, MemberDecl, MethodDecl, Param, Statement

logger = logging.getLogger(__name__)

TEXT_OPERATORS = ["equals", "contains", "starts_with", "ends_with"]
ORDERED_OPERATORS = ["equals", "lt", "lte", "gt", "gte"]

# name -> (value annotation, operator slots), in output order
FILTERS: list[tuple[str, str, list[str]]] = [
    ("StringFilter", "str", TEXT_OPERATORS),
    ("IntFilter", "int", ORDERED_OPERATORS),
    ("FloatFilter", "float", ORDERED_OPERATORS),
    ("DecimalFilter", "Decimal", ORDERED_OPERATORS),
    ("BooleanFilter", "bool", ["equals"]),
    ("DateTimeFilter", "datetime", ORDERED_OPERATORS),
    ("JsonFilter", "Any", ["equals"]),
]


def build_filters() -> list[ClassDecl]:
    """The shared filter classes, emitted once per generated module."""
    classes = []
    for name, value_type, operators in FILTERS:
        classes.append(
            ClassDecl(
                name=name,
                role="filter",
                decorators=["dataclass"],
                members=[
                    MemberDecl(name=op, annotation=f"Optional[{value_type}]", default="None")
                    for op in operators
                ],
            )
        )
    return classes


def build_client(namer: Namer, schema: ir.SchemaSpec) -> ClassDecl:
    body = ["self.connection = connection"]
    for model in schema.models:
        body.append(f"self.{namer.client_slot(model)} = {namer.operations_class(model)}(connection)")
    return ClassDecl(
        name=namer.client_name,
        role="client",
        docstring="Entry point holding one operations object per model.",
        methods=[
            MethodDecl(
                name="__init__",
                params=[Param("self"), Param("connection", "Connection")],
                returns="None",
                body=body,
            )
        ],
    )


class OperationsBuilder:
    """
    Builds the Where, UpdateData and Operations classes for one model.
    """

    def __init__(self, namer: Namer, schema: ir.SchemaSpec, model: ir.ModelSpec):
        self.namer = namer
        self.schema = schema
        self.model = model
        self.record = namer.class_name(model.name)
        self.table = sql_ident(model.table)

    def attr(self, field: ir.FieldSpec) -> str:
        return self.namer.field_attr(self.model, field)

    def build(self) -> list[ClassDecl]:
        logger.debug("Building operations for %s", self.model.name)
        return [self.build_where(), self.build_update_data(), self.build_operations()]

    def build_where(self) -> ClassDecl:
        return ClassDecl(
            name=self.namer.where_class(self.model),
            role="where",
            decorators=["dataclass"],
            members=[
                MemberDecl(
                    name=self.attr(field),
                    annotation=f"Optional[{filter_type(field.type)}]",
                    default="None",
                    source_field=field.name,
                )
                for field in self.model.scalar_fields
            ],
            model=self.model.name,
        )

    def build_update_data(self) -> ClassDecl:
        members = []
        for field in self.model.scalar_fields:
            value_type = ex.annotation(self.namer, field.model_copy(update={"optional": False}))
            members.append(
                MemberDecl(
                    name=self.attr(field),
                    annotation=f"Optional[{value_type}]",
                    default="UNSET",
                    source_field=field.name,
                )
            )
        return ClassDecl(
            name=self.namer.update_class(self.model),
            role="update_data",
            decorators=["dataclass"],
            docstring="Fields left as UNSET are not updated; None writes NULL.",
            members=members,
            model=self.model.name,
        )

    def build_operations(self) -> ClassDecl:
        name = self.namer.operations_class(self.model)
        return ClassDecl(
            name=name,
            role="operations",
            docstring=f"CRUD operations for {self.model.name}.",
            members=[MemberDecl(name="table", default=py_str(self.model.table))],
            methods=[
                MethodDecl(
                    name="__init__",
                    params=[Param("self"), Param("connection", "Connection")],
                    returns="None",
                    body=["self.connection = connection"],
                ),
                self._build_create(),
                self._build_find_many(),
                self._build_find_unique(),
                self._build_update(),
                self._build_delete(),
                self._build_where_conditions(),
            ],
            model=self.model.name,
        )

    def _insert_fields(self) -> list[ir.FieldSpec]:
        return [
            f
            for f in self.model.scalar_fields
            if not (f.is_primary_key and f.default is not None)
        ]

    def _first_row_or(self, fallback: str) -> list[Statement]:
        return [
            Block("for row in result:", [f"return {self.record}.from_row(row)"]),
            f"return {fallback}",
        ]

    def _build_create(self) -> MethodDecl:
        fields = self._insert_fields()
        body: list[Statement]
        if fields:
            columns = [f.column_name for f in fields]
            column_sql = ", ".join(sql_ident(c) for c in columns)
            body = [
                f"columns = [{', '.join(py_str(c) for c in columns)}]",
                "builder = SqlBuilder()",
                f"builder.sql({py_str(f'INSERT INTO {self.table} ({column_sql}) VALUES (')})",
                "builder.sql(data.to_sql_values(columns))",
                f"builder.sql({py_str(') RETURNING *')})",
                "result = self.connection.execute(builder.build())",
            ]
        else:
            body = [
                f"result = self.connection.execute({py_str(f'INSERT INTO {self.table} DEFAULT VALUES RETURNING *')})"
            ]
        body.extend(self._first_row_or("data"))
        return MethodDecl(
            name="create",
            params=[Param("self"), Param("data", self.record)],
            returns=self.record,
            body=body,
            docstring=(
                "Insert ``data`` and return the stored row.\n\n"
                "Falls back to ``data`` itself when the database returns no row."
            ),
        )

    def _build_find_many(self) -> MethodDecl:
        where = self.namer.where_class(self.model)
        message = py_str(f"{where} filters are not applied by find_many; returning all rows")
        body: list[Statement] = [
            Block("if where is not None:", [f"logger.warning({message})"]),
            f"result = self.connection.execute({py_str(f'SELECT * FROM {self.table}')})",
            f"return [{self.record}.from_row(row) for row in result]",
        ]
        return MethodDecl(
            name="find_many",
            params=[Param("self"), Param("where", f"Optional[{where}]", "None")],
            returns=f"list[{self.record}]",
            body=body,
        )

    def _require(self, name: str, what: str) -> Block:
        message = py_str(f"{self.namer.operations_class(self.model)}.{what}")
        return Block(f"if not {name}:", [f"raise ValueError({message})"])

    def _build_find_unique(self) -> MethodDecl:
        where = self.namer.where_class(self.model)
        body: list[Statement] = [
            "conditions = self._where_conditions(where)",
            self._require("conditions", "find_unique requires at least one equals filter"),
            "builder = SqlBuilder()",
            f"builder.sql({py_str(f'SELECT * FROM {self.table} WHERE ')})",
            'builder.sql(" AND ".join(conditions))',
            'builder.sql(" LIMIT 1")',
            "result = self.connection.execute(builder.build())",
            *self._first_row_or("None"),
        ]
        return MethodDecl(
            name="find_unique",
            params=[Param("self"), Param("where", where)],
            returns=f"Optional[{self.record}]",
            body=body,
        )

    def _build_update(self) -> MethodDecl:
        where = self.namer.where_class(self.model)
        update = self.namer.update_class(self.model)
        body: list[Statement] = ["assignments: list[str] = []"]
        refs: list[tuple[str, str]] = []
        for field in self.model.scalar_fields:
            # Primary keys are never reassigned
            if field.is_primary_key:
                continue
            attr = self.attr(field)
            refs.append((field.name, attr))
            literal = ex.nullable_sql_literal(field, f"data.{attr}")
            body.append(
                Block(
                    f"if data.{attr} is not UNSET:",
                    [f"assignments.append({py_str(sql_ident(field.column_name) + ' = ')} + ({literal}))"],
                )
            )
        body.extend(
            [
                self._require("assignments", "update requires at least one field to set"),
                "conditions = self._where_conditions(where)",
                self._require("conditions", "update requires at least one equals filter"),
                "builder = SqlBuilder()",
                f"builder.sql({py_str(f'UPDATE {self.table} SET ')})",
                'builder.sql(", ".join(assignments))',
                'builder.sql(" WHERE ")',
                'builder.sql(" AND ".join(conditions))',
                'builder.sql(" RETURNING *")',
                "result = self.connection.execute(builder.build())",
                *self._first_row_or("None"),
            ]
        )
        return MethodDecl(
            name="update",
            params=[Param("self"), Param("where", where), Param("data", update)],
            returns=f"Optional[{self.record}]",
            body=body,
            field_refs=refs,
        )

    def _build_delete(self) -> MethodDecl:
        where = self.namer.where_class(self.model)
        body: list[Statement] = [
            "conditions = self._where_conditions(where)",
            self._require("conditions", "delete requires at least one equals filter"),
            "builder = SqlBuilder()",
            f"builder.sql({py_str(f'DELETE FROM {self.table} WHERE ')})",
            'builder.sql(" AND ".join(conditions))',
            "self.connection.execute(builder.build())",
        ]
        return MethodDecl(
            name="delete",
            params=[Param("self"), Param("where", where)],
            returns="None",
            body=body,
        )

    def _build_where_conditions(self) -> MethodDecl:
        where = self.namer.where_class(self.model)
        body: list[Statement] = ["conditions: list[str] = []"]
        refs: list[tuple[str, str]] = []
        for field in self.model.scalar_fields:
            attr = self.attr(field)
            refs.append((field.name, attr))
            slot = f"where.{attr}"
            body.append(
                Block(
                    f"if {slot} is not None and {slot}.equals is not None:",
                    [
                        f"conditions.append({py_str(sql_ident(field.column_name) + ' = ')} + "
                        f"{ex.sql_literal(field, f'{slot}.equals')})"
                    ],
                )
            )
        body.append("return conditions")
        return MethodDecl(
            name="_where_conditions",
            params=[Param("self"), Param("where", where)],
            returns="list[str]",
            body=body,
            docstring="AND-able conditions for every populated equals filter.",
            field_refs=refs,
        )
