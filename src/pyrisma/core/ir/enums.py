"""
Enum declarations for the schema IR.

Schema syntax:

    enum Role {
      USER
      ADMIN @map("administrator")
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EnumValueSpec(BaseModel):
    """A single enum member; ``mapped`` overrides the stored value."""

    name: str
    mapped: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def db_value(self) -> str:
        return self.mapped if self.mapped is not None else self.name


class EnumSpec(BaseModel):
    """
    An enum declaration.

    Attributes:
        name: Enum identifier (e.g. Role)
        values: Members in source order
        line: Source line of the declaration
    """

    name: str
    values: list[EnumValueSpec] = Field(default_factory=list)
    line: int = 0

    model_config = ConfigDict(frozen=True)

    def get_value(self, name: str) -> EnumValueSpec | None:
        for value in self.values:
            if value.name == name:
                return value
        return None
