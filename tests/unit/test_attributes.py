"""Tests for attribute outcomes and relation argument edge cases."""

from pathlib import Path

import pytest

from pyrisma.core import ir
from pyrisma.core.errors import ParseError
from pyrisma.core.lexer import tokenize
from pyrisma.core.schema_parser_impl import AttributeOutcome, Parser
from pyrisma.core.env import EnvResolver, MappingEnvProvider


def attribute_parser(text: str) -> Parser:
    """Parser positioned at the first ``@`` of ``text``."""
    file = Path("schema.prisma")
    return Parser(tokenize(text, file), file, text, EnvResolver([MappingEnvProvider({})]))


class TestAttributeOutcome:
    def test_produced(self):
        outcome = AttributeOutcome.produced(ir.IdAttribute())
        assert not outcome.is_skipped
        assert outcome.attribute == ir.IdAttribute()

    def test_skipped(self):
        outcome = AttributeOutcome.skipped("no consumer")
        assert outcome.is_skipped
        assert outcome.skip_reason == "no consumer"

    def test_updated_at_is_an_explicit_skip(self):
        outcome = attribute_parser("@updatedAt").parse_field_attribute()
        assert outcome.is_skipped
        assert "@updatedAt" in outcome.skip_reason

    def test_unrecognized_hint_reports_full_text(self):
        outcome = attribute_parser("@db.Inet(4)").parse_field_attribute()
        assert outcome.is_skipped
        assert "@db.Inet(4)" in outcome.skip_reason

    def test_recognized_hint_with_two_arguments(self):
        outcome = attribute_parser("@db.Decimal(10,2)").parse_field_attribute()
        assert outcome.attribute == ir.NativeTypeAttribute(hint="db.Decimal(10, 2)")

    def test_id_with_arguments(self):
        parser = attribute_parser('@id(map: "pk")')
        assert parser.parse_field_attribute().attribute == ir.IdAttribute()
        assert parser.current_token().type.name == "EOF"


class TestRelationArguments:
    def test_unknown_key_is_skipped(self):
        parser = attribute_parser('@relation(fields: [a], references: [b], map: "fk_a")')
        relation = parser.parse_field_attribute().attribute
        assert relation.fields == ["a"]
        assert relation.references == ["b"]

    def test_empty_relation(self):
        relation = attribute_parser("@relation()").parse_field_attribute().attribute
        assert relation == ir.RelationAttribute()

    def test_unclosed_list(self):
        with pytest.raises(ParseError):
            attribute_parser("@relation(fields: [a, b\n").parse_field_attribute()

    def test_missing_separator_in_list(self):
        with pytest.raises(ParseError, match="Expected ',' or ']'"):
            attribute_parser("@relation(fields: [a b])").parse_field_attribute()

    def test_unclosed_relation(self):
        with pytest.raises(ParseError, match="Unclosed @relation"):
            attribute_parser('@relation("Name"\n').parse_field_attribute()


class TestDefaultArguments:
    def test_unclosed_call(self):
        with pytest.raises(ParseError, match="Unclosed function call"):
            attribute_parser("@default(now(\n").parse_field_attribute()

    def test_negative_number(self):
        attr = attribute_parser("@default(-1)").parse_field_attribute().attribute
        assert attr == ir.DefaultAttribute(value="-1", value_kind=ir.DefaultKind.NUMBER)

    def test_uuid_is_not_database_supplied(self):
        attr = attribute_parser("@default(uuid())").parse_field_attribute().attribute
        assert attr.is_uuid
        assert not attr.is_database_supplied

    def test_cuid_is_database_supplied(self):
        attr = attribute_parser("@default(cuid())").parse_field_attribute().attribute
        assert attr.function_name == "cuid"
        assert attr.is_database_supplied
