"""
Intermediate representation of a parsed schema.

All IR types are immutable pydantic models.
"""

from .enums import EnumSpec, EnumValueSpec
from .fields import (
    SCALAR_TYPES,
    DefaultAttribute,
    DefaultKind,
    FieldAttribute,
    FieldSpec,
    FieldType,
    FieldTypeKind,
    IdAttribute,
    MapAttribute,
    NativeTypeAttribute,
    RelationAttribute,
    UniqueAttribute,
)
from .models import IndexKind, IndexSpec, ModelSpec
from .schema import DatasourceConfig, GeneratorConfig, SchemaSpec

__all__ = [
    "SCALAR_TYPES",
    "DatasourceConfig",
    "DefaultAttribute",
    "DefaultKind",
    "EnumSpec",
    "EnumValueSpec",
    "FieldAttribute",
    "FieldSpec",
    "FieldType",
    "FieldTypeKind",
    "GeneratorConfig",
    "IdAttribute",
    "IndexKind",
    "IndexSpec",
    "MapAttribute",
    "ModelSpec",
    "NativeTypeAttribute",
    "RelationAttribute",
    "SchemaSpec",
    "UniqueAttribute",
]
