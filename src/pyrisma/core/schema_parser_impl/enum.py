"""
Enum parser mixin.

``enum`` is recognised only at the top level, so it stays usable as a field
name inside models.

Schema syntax:

    enum Role {
      USER
      ADMIN  @map("administrator")
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class EnumParserMixin:
    """Parser mixin for enum blocks."""

    if TYPE_CHECKING:
        expect: Any
        expect_identifier: Any
        advance: Any
        match: Any
        current_token: Any
        error: Any
        skip_newlines: Any
        skip_rest_of_line: Any

    def at_enum_declaration(self) -> bool:
        token = self.current_token()
        return token.type == TokenType.IDENTIFIER and token.value == "enum"

    def parse_enum(self) -> ir.EnumSpec:
        """
        Parse an enum block.

        Grammar:
            enum IDENTIFIER { (IDENTIFIER (@map(STRING))? NEWLINE)* }
        """
        keyword = self.advance()
        name = self.expect_identifier("enum name").value
        self.expect(TokenType.LBRACE)

        values: list[ir.EnumValueSpec] = []
        while True:
            self.skip_newlines()
            if self.match(TokenType.RBRACE):
                self.advance()
                break
            if self.match(TokenType.EOF):
                raise self.error(f"Unexpected end of file in enum '{name}'")
            if self.match(TokenType.DOUBLE_AT):
                self.skip_rest_of_line()
                continue

            value_token = self.expect_identifier("enum value")
            mapped = None
            if self.match(TokenType.AT):
                self.advance()
                attr = self.expect(TokenType.IDENTIFIER, "attribute name")
                if attr.value != "map":
                    raise self.error(f"Unknown enum value attribute '@{attr.value}'", attr)
                self.expect(TokenType.LPAREN)
                mapped = self.expect(TokenType.STRING, "mapped value").value
                self.expect(TokenType.RPAREN)
            values.append(ir.EnumValueSpec(name=value_token.value, mapped=mapped))
            self.skip_rest_of_line()

        return ir.EnumSpec(name=name, values=values, line=keyword.line)
