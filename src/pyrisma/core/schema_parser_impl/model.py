"""
Model parser mixin.

Schema syntax:

    model User {
      id    Int     @id @default(autoincrement())
      email String  @unique
      posts Post[]

      @@map("users")
    }
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType

logger = logging.getLogger(__name__)

INDEX_ATTRIBUTES = {
    "index": ir.IndexKind.INDEX,
    "unique": ir.IndexKind.UNIQUE,
    "id": ir.IndexKind.ID,
}


class ModelParserMixin:
    """Parser mixin for model blocks and their fields."""

    if TYPE_CHECKING:
        expect: Any
        expect_identifier: Any
        advance: Any
        match: Any
        current_token: Any
        error: Any
        skip_newlines: Any
        skip_rest_of_line: Any
        parse_field_attribute: Any

    def parse_model(self) -> ir.ModelSpec:
        """
        Parse a model block.

        Grammar:
            model IDENTIFIER { (field | @@attribute | NEWLINE)* }
        """
        keyword = self.expect(TokenType.MODEL)
        name = self.expect_identifier("model name").value
        self.expect(TokenType.LBRACE)

        fields: list[ir.FieldSpec] = []
        table_name: str | None = None
        indexes: list[ir.IndexSpec] = []

        while True:
            self.skip_newlines()
            if self.match(TokenType.RBRACE):
                self.advance()
                break
            if self.match(TokenType.EOF):
                raise self.error(f"Unexpected end of file in model '{name}'")

            if self.match(TokenType.DOUBLE_AT):
                self.advance()
                attr_token = self.expect_identifier("model attribute name")
                if attr_token.value == "map":
                    self.expect(TokenType.LPAREN)
                    table_name = self.expect(TokenType.STRING, "table name").value
                    self.expect(TokenType.RPAREN)
                elif attr_token.value in INDEX_ATTRIBUTES and self.match(TokenType.LPAREN):
                    indexes.append(self._parse_index(INDEX_ATTRIBUTES[attr_token.value]))
                else:
                    logger.debug("Discarding @@%s in model %s", attr_token.value, name)
                self.skip_rest_of_line()
            else:
                fields.append(self.parse_field())

        return ir.ModelSpec(
            name=name,
            fields=fields,
            table_name=table_name,
            indexes=indexes,
            line=keyword.line,
        )

    def parse_field(self) -> ir.FieldSpec:
        """
        Parse a field line.

        Grammar:
            IDENTIFIER IDENTIFIER ([ ])? ?? attribute* (anything)* NEWLINE
        """
        name_token = self.expect_identifier("field name")
        type_token = self.expect(TokenType.IDENTIFIER, "field type")

        is_array = False
        if self.match(TokenType.LBRACKET):
            self.advance()
            self.expect(TokenType.RBRACKET)
            is_array = True

        field_type = ir.FieldType.from_identifier(type_token.value, is_array=is_array)
        if field_type is None:
            raise self.error(f"Unknown field type '{type_token.value}'", type_token)

        optional = False
        if self.match(TokenType.QUESTION):
            self.advance()
            optional = True

        attributes: list[ir.FieldAttribute] = []
        while self.match(TokenType.AT):
            outcome = self.parse_field_attribute()
            if outcome.is_skipped:
                logger.debug(
                    "Skipped attribute on %s (line %d): %s",
                    name_token.value,
                    name_token.line,
                    outcome.skip_reason,
                )
                continue
            attributes.append(outcome.attribute)

        # Trailing tokens on the line are tolerated
        self.skip_rest_of_line()

        return ir.FieldSpec(
            name=name_token.value,
            type=field_type,
            optional=optional,
            attributes=attributes,
            line=name_token.line,
            column=name_token.column,
        )

    def _parse_index(self, kind: ir.IndexKind) -> ir.IndexSpec:
        """Capture ``( ... )`` of a model-level index attribute as raw text."""
        self.expect(TokenType.LPAREN)
        parts: list[str] = []
        fields: list[str] = []
        depth = 1
        bracket_depth = 0
        while True:
            token = self.current_token()
            if token.type in (TokenType.EOF, TokenType.NEWLINE):
                raise self.error("Unclosed model attribute arguments", token)
            self.advance()
            if token.type == TokenType.LPAREN:
                depth += 1
            elif token.type == TokenType.RPAREN:
                depth -= 1
                if depth == 0:
                    break
            elif token.type == TokenType.LBRACKET:
                bracket_depth += 1
            elif token.type == TokenType.RBRACKET:
                bracket_depth -= 1
            elif token.type == TokenType.IDENTIFIER and bracket_depth == 1 and depth == 1:
                if not parts or parts[-1] in ("[", ", "):
                    fields.append(token.value)
            parts.append(", " if token.type == TokenType.COMMA else token.lexeme)
        return ir.IndexSpec(kind=kind, raw="".join(parts), fields=fields)
