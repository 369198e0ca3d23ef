"""
Shared CLI helpers: version lookup, logging setup and path resolution.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from pyrisma import __version__
from pyrisma.core import ir
from pyrisma.core.manifest import ProjectManifest, find_manifest

DEFAULT_OUTPUT = Path("generated") / "client.py"


def get_version() -> str:
    """Installed package version, falling back to the source version."""
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("pyrisma")
    except PackageNotFoundError:
        return __version__


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pyrisma {get_version()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Log to stderr; DEBUG when verbose, otherwise warnings only."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def load_project(schema: str | None) -> tuple[ProjectManifest, Path]:
    """Manifest for the current directory and the schema path to use."""
    manifest = find_manifest(Path.cwd())
    schema_path = Path(schema) if schema else manifest.schema_path
    return manifest, schema_path


def resolve_output(
    option: str | None,
    manifest: ProjectManifest,
    schema: ir.SchemaSpec,
    schema_path: Path,
) -> Path:
    """
    Output module path, by precedence: --output, pyrisma.toml, the schema's
    generator ``output`` (relative to the schema), then generated/client.py.

    A path without a ``.py`` suffix is treated as a directory.
    """
    if option:
        path = Path(option)
    elif manifest.generate.output:
        path = manifest.root / manifest.generate.output
    elif schema.generator is not None and schema.generator.output:
        path = schema_path.parent / schema.generator.output
    else:
        path = schema_path.parent / DEFAULT_OUTPUT

    if path.suffix != ".py":
        path = path / "client.py"
    return path
