"""
Project configuration from ``pyrisma.toml``.

Every section is optional:

    [project]
    schema = "prisma/schema.prisma"

    [generate]
    output = "generated/client.py"
    client_name = "PrismaClient"

    [env]
    file = ".env"

    [migrate]
    directory = "migrations"
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError

MANIFEST_NAME = "pyrisma.toml"


@dataclass
class GenerateConfig:
    """Client generation settings."""

    output: str | None = None  # Overrides the schema's generator `output`
    client_name: str = "PrismaClient"


@dataclass
class MigrateConfig:
    """Migration SQL settings."""

    directory: str = "migrations"


@dataclass
class ProjectManifest:
    """Parsed pyrisma.toml, with paths relative to ``root``."""

    root: Path
    schema: str = "schema.prisma"
    env_file: str = ".env"
    generate: GenerateConfig = field(default_factory=GenerateConfig)
    migrate: MigrateConfig = field(default_factory=MigrateConfig)

    @property
    def schema_path(self) -> Path:
        return self.root / self.schema

    @property
    def env_path(self) -> Path:
        return self.root / self.env_file

    @property
    def migrations_path(self) -> Path:
        return self.root / self.migrate.directory


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load a manifest file.

    Raises:
        ConfigError: If the file is not valid TOML or has wrongly typed values
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid {path.name}: {e}") from e

    project = data.get("project", {})
    generate_data = data.get("generate", {})
    env_data = data.get("env", {})
    migrate_data = data.get("migrate", {})

    manifest = ProjectManifest(
        root=path.parent,
        schema=project.get("schema", "schema.prisma"),
        env_file=env_data.get("file", ".env"),
        generate=GenerateConfig(
            output=generate_data.get("output"),
            client_name=generate_data.get("client_name", "PrismaClient"),
        ),
        migrate=MigrateConfig(directory=migrate_data.get("directory", "migrations")),
    )

    for name, value in (
        ("project.schema", manifest.schema),
        ("env.file", manifest.env_file),
        ("generate.client_name", manifest.generate.client_name),
        ("migrate.directory", manifest.migrate.directory),
    ):
        if not isinstance(value, str):
            raise ConfigError(f"{path.name}: '{name}' must be a string")
    if not manifest.generate.client_name.isidentifier():
        raise ConfigError(f"{path.name}: 'generate.client_name' must be a Python identifier")
    if manifest.generate.output is not None and not isinstance(manifest.generate.output, str):
        raise ConfigError(f"{path.name}: 'generate.output' must be a string")

    return manifest


def find_manifest(start: Path) -> ProjectManifest:
    """
    Load ``pyrisma.toml`` from ``start`` if present, else return defaults
    rooted at ``start``.
    """
    path = start / MANIFEST_NAME
    if path.is_file():
        return load_manifest(path)
    return ProjectManifest(root=start)
