"""
Client generator.

Generation runs in two phases: ``build_module`` walks the resolved schema and
produces a structured ModuleDecl, then ``printer.print_module`` renders it.
The schema is never modified.

Output order:
    enums, record classes, shared filters, client, then per model the
    Where, UpdateData and Operations classes.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .. import __version__
from ..core import ir
from ..core.errors import GenerationError
from ..core.resolver import resolve_schema
from ..core.type_mapping import FILTER_CLASS_NAMES
from .naming import Namer
from .operations import OperationsBuilder, build_client, build_filters
from .output_model import ModuleDecl
from .printer import print_module
from .records import RecordBuilder, build_enum

logger = logging.getLogger(__name__)

RUNTIME_IMPORTS = [
    "UNSET",
    "Arena",
    "ArenaNotConfiguredError",
    "Connection",
    "RelationNotImplementedError",
    "Row",
    "SqlBuilder",
    "bool_literal",
    "json_literal",
    "maybe",
    "number_literal",
    "parse_datetime",
    "parse_decimal",
    "parse_json",
    "quote_literal",
    "timestamp_literal",
]

MODULE_IMPORTS = [
    "from __future__ import annotations",
    "",
    "import logging",
    "import uuid",
    "from dataclasses import dataclass",
    "from datetime import datetime, timezone",
    "from decimal import Decimal",
    "from enum import Enum",
    "from typing import Any, Optional",
    "",
    "from pyrisma.runtime import (",
    *[f"    {name}," for name in RUNTIME_IMPORTS],
    ")",
]


@dataclass
class GeneratorResult:
    """
    Result from a generator execution.

    Attributes:
        files_created: Files written
        artifacts: Data for callers (e.g. the rendered source)
        warnings: Warnings to display to the user
    """

    files_created: list[Path] = field(default_factory=list)
    artifacts: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    def add_file(self, path: Path) -> None:
        self.files_created.append(path)

    def add_artifact(self, key: str, value: Any) -> None:
        self.artifacts[key] = value

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


def build_module(schema: ir.SchemaSpec, client_name: str = "PrismaClient") -> ModuleDecl:
    """
    Build the structured output model for ``schema``.

    Raises:
        GenerationError: If the schema has not been resolved, the client name
            collides with a generated class, or a default cannot be expressed
    """
    if not schema.resolved:
        raise GenerationError("Schema must be resolved before generation")

    namer = Namer(schema, client_name)
    if client_name in namer.class_names | namer.generated_names | FILTER_CLASS_NAMES:
        raise GenerationError(
            f"Client class name '{client_name}' collides with a generated class"
        )
    module = ModuleDecl(
        docstring=f"Database client generated by pyrisma {__version__}.\n\nDo not edit by hand.",
        imports=list(MODULE_IMPORTS),
        preamble=["logger = logging.getLogger(__name__)"],
    )

    for enum in schema.enums:
        module.classes.append(build_enum(namer, enum))
    for model in schema.models:
        module.classes.append(RecordBuilder(namer, schema, model).build())
    module.classes.extend(build_filters())
    module.classes.append(build_client(namer, schema))
    for model in schema.models:
        module.classes.extend(OperationsBuilder(namer, schema, model).build())

    return module


def generate_source(schema: ir.SchemaSpec, client_name: str = "PrismaClient") -> str:
    """Generate client source text. Deterministic for a given schema."""
    return print_module(build_module(schema, client_name))


def write_atomic(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a temporary file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise


class ClientGenerator:
    """
    Generates the client module for a schema and writes it to disk.

    Example:
        schema = parse_schema_file(Path("schema.prisma"))
        result = ClientGenerator(schema, Path("generated/client.py")).generate()
    """

    def __init__(self, schema: ir.SchemaSpec, output: Path, client_name: str = "PrismaClient"):
        """
        Initialize generator.

        Args:
            schema: Parsed schema (resolved here if it is not yet)
            output: Path of the module to write
            client_name: Name of the aggregate client class
        """
        self.schema = schema if schema.resolved else resolve_schema(schema)
        self.output = output
        self.client_name = client_name

    def generate(self) -> GeneratorResult:
        """
        Render and write the client. Nothing is written if rendering fails.

        Raises:
            GenerationError: If rendering or writing fails
        """
        result = GeneratorResult()
        source = generate_source(self.schema, self.client_name)

        try:
            write_atomic(self.output, source)
        except OSError as e:
            raise GenerationError(f"Cannot write {self.output}: {e}") from e

        result.add_file(self.output)
        result.add_artifact("source", source)
        result.add_artifact("models", [m.name for m in self.schema.models])
        for model in self.schema.models:
            if model.primary_key is None:
                result.add_warning(
                    f"Model {model.name} has no @id field; find_unique and relation loaders "
                    "need explicit filters"
                )
        logger.info("Wrote %s (%d models)", self.output, len(self.schema.models))
        return result
