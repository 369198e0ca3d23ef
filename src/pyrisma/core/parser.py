"""
Schema parsing entry points.

``parse_schema`` runs the full front end: tokenize, parse, then the
resolution pass. The returned schema is immutable and fully resolved.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import ir
from .env import EnvResolver
from .resolver import resolve_schema
from .schema_parser_impl import parse_schema_text

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_NAME = "schema.prisma"


def parse_schema(
    text: str,
    file: Path | None = None,
    env_resolver: EnvResolver | None = None,
) -> ir.SchemaSpec:
    """
    Parse and resolve schema text.

    Args:
        text: Schema source text
        file: Source path for error messages
        env_resolver: Provider chain for env("VAR") values

    Returns:
        Resolved SchemaSpec

    Raises:
        ParseError: On lexical or syntax errors
        SchemaValidationError: On semantic errors
    """
    file = file or Path(DEFAULT_SCHEMA_NAME)
    schema = parse_schema_text(text, file, env_resolver=env_resolver)
    return resolve_schema(schema, file)


def parse_schema_file(
    path: Path,
    env_resolver: EnvResolver | None = None,
    env_file: Path | None = None,
) -> ir.SchemaSpec:
    """
    Read and parse a schema file.

    When no resolver is given, env("VAR") lookups fall back to ``env_file``
    (default: ``.env`` beside the schema).
    """
    text = path.read_text(encoding="utf-8")
    if env_resolver is None:
        env_resolver = EnvResolver.default(env_file or path.parent / ".env")
    logger.debug("Parsing %s", path)
    return parse_schema(text, path, env_resolver=env_resolver)
