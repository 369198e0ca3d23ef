"""
Migration SQL rendering.

Renders CREATE statements for a resolved schema. The database is never
contacted; ``migrate-dev`` only writes the SQL file.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from .. import __version__
from ..core import ir
from ..core.type_mapping import POSTGRESQL, sql_type
from .naming import sql_ident

logger = logging.getLogger(__name__)

REFERENTIAL_ACTIONS = {
    "Cascade": "CASCADE",
    "Restrict": "RESTRICT",
    "NoAction": "NO ACTION",
    "SetNull": "SET NULL",
    "SetDefault": "SET DEFAULT",
}


def sql_string(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class MigrationRenderer:
    """
    Renders DDL for a schema.

    Args:
        schema: Resolved schema
    """

    def __init__(self, schema: ir.SchemaSpec):
        self.schema = schema
        self.provider = schema.provider
        self.models = {m.name: m for m in schema.models}

    def render(self) -> str:
        parts = [f"-- Migration generated by pyrisma {__version__}\n"]
        if self.provider == POSTGRESQL:
            for enum in self.schema.enums:
                values = ", ".join(sql_string(v.db_value) for v in enum.values)
                parts.append(f"-- CreateEnum\nCREATE TYPE {sql_ident(enum.name)} AS ENUM ({values});\n")
        for model in self.schema.models:
            parts.append(self.render_table(model))
        for model in self.schema.models:
            parts.extend(self.render_indexes(model))
        for model in self.schema.models:
            parts.extend(self.render_foreign_keys(model))
        return "\n".join(parts)

    def column_type(self, field: ir.FieldSpec) -> str:
        if field.is_autoincrement and field.native_type is None:
            base = "BIGINT" if field.type.kind == ir.FieldTypeKind.BIGINT else "INTEGER"
            return f"{base} GENERATED BY DEFAULT AS IDENTITY"
        return sql_type(field, self.provider)

    def default_clause(self, field: ir.FieldSpec) -> str | None:
        default = field.default
        if default is None or default.is_autoincrement:
            return None
        kind = field.type.kind
        if default.is_now:
            return "CURRENT_TIMESTAMP"
        if default.is_uuid:
            return "gen_random_uuid()" if self.provider == POSTGRESQL else None
        if default.value_kind == ir.DefaultKind.DB_GENERATED:
            return default.value or None
        if default.value_kind == ir.DefaultKind.FUNCTION:
            return None
        if kind == ir.FieldTypeKind.BOOLEAN:
            return "TRUE" if default.value == "true" else "FALSE"
        if kind == ir.FieldTypeKind.ENUM:
            enum = self.schema.get_enum(field.type.ref or "")
            member = enum.get_value(default.value) if enum else None
            return sql_string(member.db_value if member else default.value)
        if kind == ir.FieldTypeKind.JSON:
            return sql_string(default.value) + "::jsonb"
        if default.value_kind == ir.DefaultKind.NUMBER:
            return default.value
        return sql_string(default.value)

    def column_definition(self, field: ir.FieldSpec, single_pk: bool) -> str:
        text = f"    {sql_ident(field.column_name)} {self.column_type(field)}"
        if not field.optional:
            text += " NOT NULL"
        default = self.default_clause(field)
        if default:
            text += f" DEFAULT {default}"
        if field.is_primary_key and single_pk:
            text += " PRIMARY KEY"
        return text

    def _columns(self, model: ir.ModelSpec, field_names: list[str]) -> list[str]:
        columns = []
        for name in field_names:
            field = model.get_field(name)
            columns.append(field.column_name if field else name)
        return columns

    def render_table(self, model: ir.ModelSpec) -> str:
        compound_ids = [i for i in model.indexes if i.kind == ir.IndexKind.ID and i.fields]
        lines = [self.column_definition(f, single_pk=not compound_ids) for f in model.scalar_fields]
        for index in compound_ids:
            columns = ", ".join(sql_ident(c) for c in self._columns(model, index.fields))
            lines.append(f"    PRIMARY KEY ({columns})")
        body = ",\n".join(lines)
        return f"-- CreateTable\nCREATE TABLE {sql_ident(model.table)} (\n{body}\n);\n"

    def render_indexes(self, model: ir.ModelSpec) -> list[str]:
        table = model.table
        statements = []
        for field in model.scalar_fields:
            if field.is_unique and not field.is_primary_key:
                name = sql_ident(f"{table}_{field.column_name}_key")
                statements.append(
                    f"-- CreateIndex\nCREATE UNIQUE INDEX {name} ON {sql_ident(table)}"
                    f"({sql_ident(field.column_name)});\n"
                )
        for index in model.indexes:
            if index.kind == ir.IndexKind.ID or not index.fields:
                if index.kind != ir.IndexKind.ID:
                    logger.warning("Skipping @@%s(%s) on %s", index.kind.value, index.raw, model.name)
                continue
            columns = self._columns(model, index.fields)
            unique = index.kind == ir.IndexKind.UNIQUE
            name = sql_ident(f"{table}_{'_'.join(columns)}_{'key' if unique else 'idx'}")
            column_sql = ", ".join(sql_ident(c) for c in columns)
            statements.append(
                f"-- CreateIndex\nCREATE {'UNIQUE ' if unique else ''}INDEX {name} "
                f"ON {sql_ident(table)}({column_sql});\n"
            )
        return statements

    def render_foreign_keys(self, model: ir.ModelSpec) -> list[str]:
        statements = []
        for field in model.relation_fields:
            relation = field.relation
            target = self.models.get(field.related_model or "")
            if relation is None or not relation.fields or target is None:
                continue
            local = self._columns(model, relation.fields)
            remote = self._columns(target, relation.references)
            name = sql_ident(f"{model.table}_{'_'.join(local)}_fkey")
            text = (
                f"-- AddForeignKey\nALTER TABLE {sql_ident(model.table)} ADD CONSTRAINT {name} "
                f"FOREIGN KEY ({', '.join(sql_ident(c) for c in local)}) "
                f"REFERENCES {sql_ident(target.table)}({', '.join(sql_ident(c) for c in remote)})"
            )
            if relation.on_delete:
                text += f" ON DELETE {REFERENTIAL_ACTIONS.get(relation.on_delete, relation.on_delete.upper())}"
            if relation.on_update:
                text += f" ON UPDATE {REFERENTIAL_ACTIONS.get(relation.on_update, relation.on_update.upper())}"
            statements.append(text + ";\n")
        return statements


def render_migration(schema: ir.SchemaSpec) -> str:
    """Render the full migration script for ``schema``."""
    return MigrationRenderer(schema).render()


def migration_filename(name: str, now: datetime | None = None) -> str:
    """``<UTC timestamp>_<slug>.sql``, e.g. ``20250101120000_init.sql``."""
    now = now or datetime.now(timezone.utc)
    slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_") or "migration"
    return f"{now.strftime('%Y%m%d%H%M%S')}_{slug}.sql"


def migration_path(directory: Path, name: str, now: datetime | None = None) -> Path:
    return directory / migration_filename(name, now)
