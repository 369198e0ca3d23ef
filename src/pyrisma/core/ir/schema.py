"""
Top-level schema value and configuration blocks.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import EnumSpec
from .models import ModelSpec


class GeneratorConfig(BaseModel):
    """A ``generator <name> { key = "value" }`` block."""

    name: str
    values: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def provider(self) -> str | None:
        return self.values.get("provider")

    @property
    def output(self) -> str | None:
        return self.values.get("output")


class DatasourceConfig(BaseModel):
    """
    A ``datasource <name> { ... }`` block.

    ``env("VAR")`` values are already resolved to concrete strings.
    """

    name: str
    values: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def provider(self) -> str | None:
        return self.values.get("provider")

    @property
    def url(self) -> str | None:
        return self.values.get("url")


class SchemaSpec(BaseModel):
    """
    The parsed representation of one schema file.

    Attributes:
        models: Models in source order
        enums: Enums in source order
        generator: Generator block, if declared
        datasource: Datasource block, if declared
        resolved: Set once the post-parse resolution pass has run
    """

    models: list[ModelSpec] = Field(default_factory=list)
    enums: list[EnumSpec] = Field(default_factory=list)
    generator: GeneratorConfig | None = None
    datasource: DatasourceConfig | None = None
    resolved: bool = False

    model_config = ConfigDict(frozen=True)

    def get_model(self, name: str) -> ModelSpec | None:
        for model in self.models:
            if model.name == name:
                return model
        return None

    def get_enum(self, name: str) -> EnumSpec | None:
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None

    @property
    def provider(self) -> str | None:
        return self.datasource.provider if self.datasource else None
