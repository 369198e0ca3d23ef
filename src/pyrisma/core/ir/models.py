"""
Model specifications for the schema IR.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .fields import FieldSpec


class IndexKind(str, Enum):
    """Model-level index declarations."""

    INDEX = "index"
    UNIQUE = "unique"
    ID = "id"


class IndexSpec(BaseModel):
    """
    A model-level ``@@index`` / ``@@unique`` / ``@@id`` declaration.

    ``raw`` keeps the parenthesised text; ``fields`` is filled when the first
    argument is a simple bracketed list of field names.
    """

    kind: IndexKind
    raw: str
    fields: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ModelSpec(BaseModel):
    """
    A model declaration.

    Attributes:
        name: Model identifier
        fields: Fields in source order
        table_name: Explicit table name from ``@@map``
        indexes: Raw model-level index declarations
        line: Source line of the declaration
    """

    name: str
    fields: list[FieldSpec] = Field(default_factory=list)
    table_name: str | None = None
    indexes: list[IndexSpec] = Field(default_factory=list)
    line: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def table(self) -> str:
        """Physical table name: the @@map override or the lowercase model name."""
        return self.table_name if self.table_name else self.name.lower()

    def get_field(self, name: str) -> FieldSpec | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def scalar_fields(self) -> list[FieldSpec]:
        """Fields stored as columns, i.e. every non-relation field."""
        return [f for f in self.fields if not f.is_relation]

    @property
    def relation_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.is_relation]

    @property
    def primary_key(self) -> FieldSpec | None:
        for field in self.fields:
            if field.is_primary_key:
                return field
        return None
