"""
Attribute parser mixin.

Parses field-level attributes (``@id``, ``@default(...)``, ``@relation(...)``
and friends). Each attribute yields an explicit AttributeOutcome: either a
produced attribute or a skip. Failures raise ParseError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType
from ..type_mapping import is_recognized_native_hint

logger = logging.getLogger(__name__)

# Attributes accepted for compatibility that have no consumer
IGNORED_ATTRIBUTES = {"updatedAt", "ignore"}


@dataclass(frozen=True)
class AttributeOutcome:
    """Result of parsing one attribute: a value, or an explicit skip."""

    attribute: ir.FieldAttribute | None = None
    skip_reason: str | None = None

    @classmethod
    def produced(cls, attribute: ir.FieldAttribute) -> AttributeOutcome:
        return cls(attribute=attribute)

    @classmethod
    def skipped(cls, reason: str) -> AttributeOutcome:
        return cls(skip_reason=reason)

    @property
    def is_skipped(self) -> bool:
        return self.attribute is None


class AttributeParserMixin:
    """Parser mixin for field attributes."""

    if TYPE_CHECKING:
        expect: Any
        expect_identifier: Any
        advance: Any
        match: Any
        current_token: Any
        error: Any
        skip_balanced: Any
        invalid_token_error: Any

    def parse_field_attribute(self) -> AttributeOutcome:
        """
        Parse one ``@name...`` attribute.

        Returns:
            AttributeOutcome with the attribute, or a skip

        Raises:
            ParseError: On unknown attribute names or malformed arguments
        """
        self.expect(TokenType.AT)
        name_token = self.expect_identifier("attribute name")
        name = name_token.value

        if name == "id":
            self._skip_optional_arguments()
            return AttributeOutcome.produced(ir.IdAttribute())
        if name == "unique":
            self._skip_optional_arguments()
            return AttributeOutcome.produced(ir.UniqueAttribute())
        if name == "default":
            return AttributeOutcome.produced(self.parse_default_attribute())
        if name == "map":
            self.expect(TokenType.LPAREN)
            column = self.expect(TokenType.STRING, "column name").value
            self.expect(TokenType.RPAREN)
            return AttributeOutcome.produced(ir.MapAttribute(name=column))
        if name == "relation":
            return AttributeOutcome.produced(self.parse_relation_attribute())
        if name == "db":
            return self.parse_native_type_attribute()
        if name in IGNORED_ATTRIBUTES:
            self._skip_optional_arguments()
            return AttributeOutcome.skipped(f"@{name} has no effect on generated code")

        raise self.error(f"Unknown attribute '@{name}'", name_token)

    def _skip_optional_arguments(self) -> None:
        if self.match(TokenType.LPAREN):
            self.skip_balanced(TokenType.LPAREN, TokenType.RPAREN)

    def parse_default_attribute(self) -> ir.DefaultAttribute:
        """
        Parse ``@default(...)`` after the name.

        Grammar:
            default ( STRING | NUMBER | IDENTIFIER | IDENTIFIER ( args ) )
        """
        self.expect(TokenType.LPAREN)
        token = self.current_token()

        if token.type == TokenType.STRING:
            self.advance()
            attr = ir.DefaultAttribute(value=token.value, value_kind=ir.DefaultKind.STRING)
        elif token.type == TokenType.NUMBER:
            self.advance()
            attr = ir.DefaultAttribute(value=token.value, value_kind=ir.DefaultKind.NUMBER)
        elif token.type == TokenType.IDENTIFIER:
            self.advance()
            if self.match(TokenType.LPAREN):
                self.advance()
                inner = self._read_call_arguments()
                if token.value == "dbgenerated":
                    attr = ir.DefaultAttribute(value=inner, value_kind=ir.DefaultKind.DB_GENERATED)
                else:
                    attr = ir.DefaultAttribute(
                        value=f"{token.value}({inner})", value_kind=ir.DefaultKind.FUNCTION
                    )
            else:
                attr = ir.DefaultAttribute(value=token.value, value_kind=ir.DefaultKind.IDENTIFIER)
        elif token.type == TokenType.INVALID:
            raise self.invalid_token_error(token)
        else:
            raise self.error("Invalid default value", token)

        self.expect(TokenType.RPAREN)
        return attr

    def _read_call_arguments(self) -> str:
        """
        Rebuild the text of a call's arguments up to its closing paren.

        Nested calls keep their parentheses and commas; nested string
        literals lose their quotes. The closing paren is consumed.
        """
        parts: list[str] = []
        depth = 1
        while True:
            token = self.current_token()
            if token.type in (TokenType.EOF, TokenType.NEWLINE):
                raise self.error("Unclosed function call in default value", token)
            if token.type == TokenType.INVALID:
                raise self.invalid_token_error(token)
            self.advance()
            if token.type == TokenType.LPAREN:
                depth += 1
                parts.append("(")
            elif token.type == TokenType.RPAREN:
                depth -= 1
                if depth == 0:
                    return "".join(parts)
                parts.append(")")
            else:
                parts.append(token.value)

    def parse_relation_attribute(self) -> ir.RelationAttribute:
        """
        Parse ``@relation(...)`` after the name.

        Keys may appear in any order:
            "Name" | name: "Name" | fields: [a, b] | references: [x, y]
            | onDelete: Action | onUpdate: Action
        """
        self.expect(TokenType.LPAREN)
        values: dict[str, Any] = {}

        while not self.match(TokenType.RPAREN):
            token = self.current_token()
            if token.type == TokenType.STRING:
                self.advance()
                values["name"] = token.value
            elif token.type == TokenType.IDENTIFIER:
                key = self.advance().value
                self.expect(TokenType.COLON)
                if key in ("fields", "references"):
                    values[key] = self._parse_identifier_list()
                elif key in ("onDelete", "onUpdate"):
                    action = self.expect(TokenType.IDENTIFIER, "referential action").value
                    values["on_delete" if key == "onDelete" else "on_update"] = action
                elif key == "name":
                    values["name"] = self.expect(TokenType.STRING, "relation name").value
                else:
                    logger.debug("Ignoring @relation argument %r at line %d", key, token.line)
                    self._skip_relation_value()
            elif token.type == TokenType.INVALID:
                raise self.invalid_token_error(token)
            elif token.type in (TokenType.EOF, TokenType.NEWLINE):
                raise self.error("Unclosed @relation(...)", token)
            else:
                raise self.error("Unexpected token in @relation(...)", token)

            if self.match(TokenType.COMMA):
                self.advance()

        self.expect(TokenType.RPAREN)
        return ir.RelationAttribute(**values)

    def _parse_identifier_list(self) -> list[str]:
        self.expect(TokenType.LBRACKET)
        names: list[str] = []
        while not self.match(TokenType.RBRACKET):
            names.append(self.expect_identifier("field name").value)
            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RBRACKET):
                raise self.error("Expected ',' or ']' in field list")
        self.expect(TokenType.RBRACKET)
        return names

    def _skip_relation_value(self) -> None:
        if self.match(TokenType.LBRACKET):
            self.skip_balanced(TokenType.LBRACKET, TokenType.RBRACKET)
        elif self.match(TokenType.LPAREN):
            self.skip_balanced(TokenType.LPAREN, TokenType.RPAREN)
        else:
            self.advance()

    def parse_native_type_attribute(self) -> AttributeOutcome:
        """
        Parse ``@db.Name`` or ``@db.Name(args)`` after the ``db`` identifier.

        The full text is kept verbatim. Hints without a physical type mapping
        are skipped.
        """
        self.expect(TokenType.DOT)
        type_token = self.expect(TokenType.IDENTIFIER, "native type name")
        hint = f"db.{type_token.value}"

        if self.match(TokenType.LPAREN):
            self.advance()
            args: list[str] = []
            while not self.match(TokenType.RPAREN):
                token = self.current_token()
                if token.type in (TokenType.EOF, TokenType.NEWLINE):
                    raise self.error("Unclosed native type arguments", token)
                self.advance()
                args.append(", " if token.type == TokenType.COMMA else token.lexeme)
            self.expect(TokenType.RPAREN)
            hint += "(" + "".join(args) + ")"

        if not is_recognized_native_hint(type_token.value):
            return AttributeOutcome.skipped(f"no physical type mapping for @{hint}")
        return AttributeOutcome.produced(ir.NativeTypeAttribute(hint=hint))
