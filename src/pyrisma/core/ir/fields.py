"""
Field type and attribute definitions for the schema IR.

This module contains the field type system, the closed set of field-level
attributes, and field specifications.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class FieldTypeKind(str, Enum):
    """Enumeration of field type variants."""

    STRING = "String"
    INT = "Int"
    BIGINT = "BigInt"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    BOOLEAN = "Boolean"
    DATETIME = "DateTime"
    JSON = "Json"
    # Assigned by the resolver when a MODEL_REF names a declared enum
    ENUM = "enum"
    MODEL_REF = "model_ref"
    MODEL_ARRAY = "model_array"


SCALAR_TYPES: dict[str, FieldTypeKind] = {
    "String": FieldTypeKind.STRING,
    "Int": FieldTypeKind.INT,
    "BigInt": FieldTypeKind.BIGINT,
    "Float": FieldTypeKind.FLOAT,
    "Decimal": FieldTypeKind.DECIMAL,
    "Boolean": FieldTypeKind.BOOLEAN,
    "DateTime": FieldTypeKind.DATETIME,
    "Json": FieldTypeKind.JSON,
}


class FieldType(BaseModel):
    """
    Represents a field type.

    Examples:
        - String: FieldType(kind=STRING)
        - Post: FieldType(kind=MODEL_REF, ref="Post")
        - Post[]: FieldType(kind=MODEL_ARRAY, ref="Post")
        - Role (declared enum): FieldType(kind=ENUM, ref="Role")
    """

    kind: FieldTypeKind
    ref: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_identifier(cls, name: str, is_array: bool = False) -> FieldType | None:
        """
        Classify a type identifier.

        Returns None for a lowercase identifier that is not a scalar.
        """
        if is_array:
            return cls(kind=FieldTypeKind.MODEL_ARRAY, ref=name)
        if name in SCALAR_TYPES:
            return cls(kind=SCALAR_TYPES[name])
        if name[:1].isupper():
            return cls(kind=FieldTypeKind.MODEL_REF, ref=name)
        return None

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_TYPES.values()

    @property
    def is_model(self) -> bool:
        return self.kind in (FieldTypeKind.MODEL_REF, FieldTypeKind.MODEL_ARRAY)

    @property
    def is_textual(self) -> bool:
        return self.kind in (FieldTypeKind.STRING, FieldTypeKind.ENUM)

    def display(self) -> str:
        if self.kind == FieldTypeKind.MODEL_ARRAY:
            return f"{self.ref}[]"
        if self.ref:
            return self.ref
        return self.kind.value


class DefaultKind(str, Enum):
    """How a default value was written in the schema."""

    STRING = "string"
    NUMBER = "number"
    IDENTIFIER = "identifier"
    FUNCTION = "function"
    DB_GENERATED = "dbgenerated"


class IdAttribute(BaseModel):
    """@id - primary key marker."""

    kind: Literal["id"] = "id"

    model_config = ConfigDict(frozen=True)


class UniqueAttribute(BaseModel):
    """@unique - uniqueness marker."""

    kind: Literal["unique"] = "unique"

    model_config = ConfigDict(frozen=True)


class DefaultAttribute(BaseModel):
    """
    @default(...) expression.

    Attributes:
        value: Literal text with quotes stripped, or the reconstructed call
            text such as ``now()``. For ``dbgenerated("...")`` only the inner
            argument text is kept.
        value_kind: How the value was written
    """

    kind: Literal["default"] = "default"
    value: str
    value_kind: DefaultKind

    model_config = ConfigDict(frozen=True)

    @property
    def function_name(self) -> str | None:
        if self.value_kind != DefaultKind.FUNCTION:
            return None
        return self.value.split("(", 1)[0]

    @property
    def is_autoincrement(self) -> bool:
        return self.function_name == "autoincrement"

    @property
    def is_now(self) -> bool:
        return self.function_name == "now"

    @property
    def is_uuid(self) -> bool:
        return self.function_name == "uuid"

    @property
    def is_database_supplied(self) -> bool:
        """True when the database produces the value on insert."""
        if self.value_kind == DefaultKind.DB_GENERATED:
            return True
        return self.value_kind == DefaultKind.FUNCTION and not (self.is_now or self.is_uuid)


class MapAttribute(BaseModel):
    """@map("column") - physical column name."""

    kind: Literal["map"] = "map"
    name: str

    model_config = ConfigDict(frozen=True)


class RelationAttribute(BaseModel):
    """
    @relation(...) descriptor.

    Attributes:
        name: Optional relation name for disambiguation
        fields: Local fields holding the foreign key, in order
        references: Referenced fields on the target model, in order
        on_delete: Referential action text (e.g. Cascade)
        on_update: Referential action text
    """

    kind: Literal["relation"] = "relation"
    name: str | None = None
    fields: list[str] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)
    on_delete: str | None = None
    on_update: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def key_pairs(self) -> list[tuple[str, str]]:
        """(local field, referenced field) pairs."""
        return list(zip(self.fields, self.references))


class NativeTypeAttribute(BaseModel):
    """
    @db.X / @db.X(args) native type hint, kept verbatim (e.g. ``db.VarChar(255)``).
    """

    kind: Literal["native_type"] = "native_type"
    hint: str

    model_config = ConfigDict(frozen=True)

    @property
    def type_name(self) -> str:
        base = self.hint.split("(", 1)[0]
        return base.split(".", 1)[1] if "." in base else base

    @property
    def arguments(self) -> str | None:
        if "(" not in self.hint:
            return None
        return self.hint.split("(", 1)[1].rstrip(")")


FieldAttribute = Annotated[
    IdAttribute
    | UniqueAttribute
    | DefaultAttribute
    | MapAttribute
    | RelationAttribute
    | NativeTypeAttribute,
    Field(discriminator="kind"),
]

AttrT = TypeVar("AttrT", bound=BaseModel)


class FieldSpec(BaseModel):
    """
    Specification for a single field in a model.

    Attributes:
        name: Field identifier
        type: Field type
        optional: Declared with the ``?`` marker
        attributes: Field attributes in source order
        line: Source line of the field name
        column: Source column of the field name
    """

    name: str
    type: FieldType
    optional: bool = False
    attributes: list[FieldAttribute] = Field(default_factory=list)
    line: int = 0
    column: int = 0

    model_config = ConfigDict(frozen=True)

    def get_attribute(self, attr_type: type[AttrT]) -> AttrT | None:
        """Return the first attribute of the given type."""
        for attr in self.attributes:
            if isinstance(attr, attr_type):
                return attr
        return None

    @property
    def column_name(self) -> str:
        """Physical column name: the @map override or the field name."""
        mapped = self.get_attribute(MapAttribute)
        return mapped.name if mapped else self.name

    @property
    def is_primary_key(self) -> bool:
        return self.get_attribute(IdAttribute) is not None

    @property
    def is_unique(self) -> bool:
        return self.get_attribute(UniqueAttribute) is not None or self.is_primary_key

    @property
    def default(self) -> DefaultAttribute | None:
        return self.get_attribute(DefaultAttribute)

    @property
    def relation(self) -> RelationAttribute | None:
        return self.get_attribute(RelationAttribute)

    @property
    def native_type(self) -> NativeTypeAttribute | None:
        return self.get_attribute(NativeTypeAttribute)

    @property
    def is_relation(self) -> bool:
        return self.type.is_model or self.relation is not None

    @property
    def is_array_relation(self) -> bool:
        return self.type.kind == FieldTypeKind.MODEL_ARRAY

    @property
    def related_model(self) -> str | None:
        return self.type.ref if self.type.is_model else None

    @property
    def is_autoincrement(self) -> bool:
        default = self.default
        return default is not None and default.is_autoincrement
