"""
Structured model of a generated Python module.

Builders produce these declarations; ``printer.print_module`` is the only
place that turns them into source text. Every member, parameter and body
reference that stands for a schema field records the field it came from, so
naming rules can be checked over the model rather than over text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass
class Block:
    """A compound statement: ``header`` ends with ``:`` and owns ``body``."""

    header: str
    body: list[Statement] = field(default_factory=list)


Statement = Union[str, Block]


@dataclass
class Param:
    name: str
    annotation: str | None = None
    default: str | None = None
    source_field: str | None = None

    def render(self) -> str:
        text = self.name
        if self.annotation:
            text += f": {self.annotation}"
        if self.default is not None:
            text += f" = {self.default}" if self.annotation else f"={self.default}"
        return text


@dataclass
class MemberDecl:
    """A class-level annotated member, enum member, or class attribute."""

    name: str
    annotation: str | None = None
    default: str | None = None
    comment: str | None = None
    source_field: str | None = None


@dataclass
class MethodDecl:
    name: str
    params: list[Param] = field(default_factory=list)
    returns: str | None = None
    body: list[Statement] = field(default_factory=list)
    decorators: list[str] = field(default_factory=list)
    docstring: str | None = None
    # (schema field name, identifier) for every field access in ``body``
    field_refs: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class ClassDecl:
    """
    A generated class.

    Attributes:
        role: enum, record, filter, client, where, update_data or operations
        model: Schema model or enum the class was generated for
    """

    name: str
    role: str
    bases: list[str] = field(default_factory=list)
    decorators: list[str] = field(default_factory=list)
    docstring: str | None = None
    members: list[MemberDecl] = field(default_factory=list)
    methods: list[MethodDecl] = field(default_factory=list)
    model: str | None = None

    def get_method(self, name: str) -> MethodDecl | None:
        for method in self.methods:
            if method.name == name:
                return method
        return None


@dataclass
class ModuleDecl:
    docstring: str
    imports: list[str] = field(default_factory=list)
    preamble: list[str] = field(default_factory=list)
    classes: list[ClassDecl] = field(default_factory=list)

    def classes_with_role(self, role: str) -> list[ClassDecl]:
        return [c for c in self.classes if c.role == role]

    def get_class(self, name: str) -> ClassDecl | None:
        for cls in self.classes:
            if cls.name == name:
                return cls
        return None
