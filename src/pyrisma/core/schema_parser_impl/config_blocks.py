"""
Generator and datasource block parser mixin.

Schema syntax:

    generator client {
      provider = "pyrisma"
      output   = "./generated/client.py"
    }

    datasource db {
      provider = "postgresql"
      url      = env("DATABASE_URL")
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class ConfigBlockParserMixin:
    """Parser mixin for flat key/value configuration blocks."""

    if TYPE_CHECKING:
        expect: Any
        expect_identifier: Any
        advance: Any
        match: Any
        current_token: Any
        error: Any
        skip_newlines: Any
        skip_rest_of_line: Any
        env_resolver: Any

    def parse_generator(self) -> ir.GeneratorConfig:
        self.expect(TokenType.GENERATOR)
        name = self.expect_identifier("generator name").value
        return ir.GeneratorConfig(name=name, values=self._parse_key_values(allow_env=False))

    def parse_datasource(self) -> ir.DatasourceConfig:
        """
        Parse a datasource block. ``env("VAR")`` values are resolved here,
        so the returned config always holds concrete strings.
        """
        self.expect(TokenType.DATASOURCE)
        name = self.expect_identifier("datasource name").value
        return ir.DatasourceConfig(name=name, values=self._parse_key_values(allow_env=True))

    def _parse_key_values(self, allow_env: bool) -> dict[str, str]:
        self.expect(TokenType.LBRACE)
        values: dict[str, str] = {}

        while True:
            self.skip_newlines()
            if self.match(TokenType.RBRACE):
                self.advance()
                return values
            if self.match(TokenType.EOF):
                raise self.error("Unexpected end of file in configuration block")

            key = self.expect_identifier("configuration key").value
            self.expect(TokenType.EQUALS)

            token = self.current_token()
            if token.type == TokenType.STRING:
                self.advance()
                values[key] = token.value
            elif allow_env and token.type == TokenType.IDENTIFIER and token.value == "env":
                self.advance()
                self.expect(TokenType.LPAREN)
                var_name = self.expect(TokenType.STRING, "environment variable name").value
                self.expect(TokenType.RPAREN)
                values[key] = self.env_resolver.resolve(var_name)
            else:
                raise self.error(f"Expected a string value for '{key}'", token)

            self.skip_rest_of_line()
