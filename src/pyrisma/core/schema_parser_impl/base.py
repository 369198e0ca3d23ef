"""
Base parser class for schema files.

Provides the token cursor and utility methods used by all parser mixins.
The cursor only ever moves forward; lookahead is limited to peeking.
"""

from pathlib import Path

from ..errors import ParseError, extract_snippet, make_parse_error
from ..lexer import Token, TokenType


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing,
    including token navigation, matching, and error generation.
    """

    def __init__(self, tokens: list[Token], file: Path, text: str = ""):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            text: Source text, used for error snippets
        """
        self.tokens = tokens
        self.file = file
        self.text = text
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def error(self, message: str, token: Token | None = None) -> ParseError:
        """Build a ParseError located at ``token`` (default: current token)."""
        token = token or self.current_token()
        snippet = extract_snippet(self.text, token.line) if self.text else None
        return make_parse_error(
            message,
            self.file,
            token.line,
            token.column,
            lexeme=token.lexeme if token.type != TokenType.EOF else "end of file",
            snippet=snippet,
        )

    def invalid_token_error(self, token: Token) -> ParseError:
        if token.value.startswith('"'):
            return self.error("Unterminated string literal", token)
        return self.error(f"Unexpected character {token.value!r}", token)

    def expect(self, token_type: TokenType, what: str | None = None) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type == TokenType.INVALID:
            raise self.invalid_token_error(token)
        if token.type != token_type:
            expected = what or repr(token_type.value)
            raise self.error(f"Expected {expected}, got {token.type.value}", token)
        return self.advance()

    def expect_identifier(self, what: str = "identifier") -> Token:
        """
        Expect an identifier. The three block keywords are accepted too so
        they stay usable as field and key names.
        """
        if self.match(TokenType.MODEL, TokenType.GENERATOR, TokenType.DATASOURCE):
            return self.advance()
        return self.expect(TokenType.IDENTIFIER, what)

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    def skip_rest_of_line(self) -> None:
        """Discard tokens up to the next newline or closing brace."""
        while not self.match(TokenType.NEWLINE, TokenType.RBRACE, TokenType.EOF):
            self.advance()
        if self.match(TokenType.NEWLINE):
            self.advance()

    def skip_balanced(self, open_type: TokenType, close_type: TokenType) -> None:
        """Consume a bracketed group; the opening token must be current."""
        self.expect(open_type)
        depth = 1
        while depth > 0:
            token = self.advance()
            if token.type == TokenType.EOF:
                raise self.error(f"Expected {close_type.value!r} before end of file", token)
            if token.type == open_type:
                depth += 1
            elif token.type == close_type:
                depth -= 1
