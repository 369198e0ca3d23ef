"""
Code generation: Python client source and migration SQL.
"""

from .generator import ClientGenerator, GeneratorResult, build_module, generate_source
from .migration import MigrationRenderer, render_migration

__all__ = [
    "ClientGenerator",
    "GeneratorResult",
    "MigrationRenderer",
    "build_module",
    "generate_source",
    "render_migration",
]
