"""Tests for error formatting."""

from pathlib import Path

from pyrisma.core.errors import (
    ErrorContext,
    SchemaValidationError,
    extract_snippet,
    make_parse_error,
    make_validation_error,
)


class TestErrorContext:
    def test_location_and_lexeme(self):
        context = ErrorContext(file=Path("schema.prisma"), line=3, column=5, lexeme="Strng")
        assert context.format() == "schema.prisma:3:5 near 'Strng'"

    def test_snippet_marker(self):
        text = "model A {\n  id Strng\n}\n"
        error = make_parse_error(
            "Unknown field type",
            Path("schema.prisma"),
            2,
            6,
            lexeme="Strng",
            snippet=extract_snippet(text, 2),
        )
        assert str(error) == (
            "schema.prisma:2:6 near 'Strng'\n"
            "   1 | model A {\n"
            "   2 |   id Strng\n"
            "            ^\n"
            "Unknown field type"
        )

    def test_snippet_on_first_line(self):
        assert extract_snippet("model A {\n}\n", 1) == "model A {"


class TestValidationErrors:
    def test_without_location(self):
        error = make_validation_error("Duplicate model 'A'")
        assert isinstance(error, SchemaValidationError)
        assert error.context is None
        assert str(error) == "Duplicate model 'A'"

    def test_with_location(self):
        error = make_validation_error("Unknown type", Path("s.prisma"), 4)
        assert error.context.column == 1
        assert str(error) == "s.prisma:4:1\nUnknown type"
