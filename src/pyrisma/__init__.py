"""
Pyrisma - a schema compiler that turns Prisma-style data models into a
type-safe Python database client.
"""

__version__ = "0.4.0"

from .core.errors import ParseError, PyrismaError, SchemaValidationError
from .core.parser import parse_schema, parse_schema_file

__all__ = [
    "__version__",
    "PyrismaError",
    "ParseError",
    "SchemaValidationError",
    "parse_schema",
    "parse_schema_file",
]
