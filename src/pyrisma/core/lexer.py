"""
Lexer/Tokenizer for schema files.

Converts raw schema text into a flat stream of tokens with source location
tracking. Newlines are significant: they terminate field definitions and
key/value lines, so they are emitted as NEWLINE tokens rather than skipped.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class TokenType(Enum):
    """Token types in the schema language."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Keywords
    MODEL = "model"
    GENERATOR = "generator"
    DATASOURCE = "datasource"

    # Symbols
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    QUESTION = "?"
    AT = "@"
    DOUBLE_AT = "@@"
    EQUALS = "="
    COMMA = ","
    COLON = ":"
    DOT = "."

    # Structure
    NEWLINE = "NEWLINE"
    EOF = "EOF"
    INVALID = "INVALID"


KEYWORDS = {
    "model": TokenType.MODEL,
    "generator": TokenType.GENERATOR,
    "datasource": TokenType.DATASOURCE,
}

SYMBOLS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "?": TokenType.QUESTION,
    "=": TokenType.EQUALS,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ".": TokenType.DOT,
}


@dataclass
class Token:
    """
    A single token in a schema file.

    Attributes:
        type: Type of token
        value: Token text (string literals without their quotes)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"

    @property
    def lexeme(self) -> str:
        """Token text as it appeared in the source."""
        if self.type == TokenType.STRING:
            return f'"{self.value}"'
        if self.type == TokenType.NEWLINE:
            return "\\n"
        return self.value


class Lexer:
    """
    Lexer for schema files.

    Unterminated string literals and unknown characters are emitted as
    INVALID tokens; the parser reports them when it reaches them.
    """

    def __init__(self, text: str, file: Path):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at a raw character without consuming anything."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace_and_comments(self) -> None:
        """Skip horizontal whitespace and // comments (but not newlines)."""
        while True:
            ch = self.current_char()
            if ch in (" ", "\t", "\r"):
                self.advance()
            elif ch == "/" and self.peek_char() == "/":
                while self.current_char() is not None and self.current_char() != "\n":
                    self.advance()
            else:
                return

    def read_string(self) -> tuple[str, bool]:
        """
        Read a double-quoted string. No escape processing is done.

        Returns:
            Tuple of (content, terminated)
        """
        self.advance()  # opening quote
        chars = []
        while True:
            current = self.current_char()
            if current is None:
                return "".join(chars), False
            if current == '"':
                self.advance()
                return "".join(chars), True
            chars.append(current)
            self.advance()

    def read_number(self) -> str:
        """Read an integer literal with an optional sign and fractional part."""
        chars = []
        if self.current_char() == "-":
            chars.append("-")
            self.advance()
        while (current := self.current_char()) is not None and current.isdigit():
            chars.append(current)
            self.advance()
        nxt = self.peek_char()
        if self.current_char() == "." and nxt is not None and nxt.isdigit():
            chars.append(".")
            self.advance()
            while (current := self.current_char()) is not None and current.isdigit():
                chars.append(current)
                self.advance()
        return "".join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        while (current := self.current_char()) is not None and (current.isalnum() or current == "_"):
            chars.append(current)
            self.advance()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF
        """
        while True:
            self.skip_whitespace_and_comments()
            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column

            if ch == "\n":
                self.advance()
                self.tokens.append(Token(TokenType.NEWLINE, "\n", token_line, token_col))

            elif ch == '"':
                value, terminated = self.read_string()
                if terminated:
                    self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))
                else:
                    self.tokens.append(Token(TokenType.INVALID, '"' + value, token_line, token_col))

            elif ch == "@":
                # "@@" only when the second @ follows with no whitespace
                if self.peek_char() == "@":
                    self.advance()
                    self.advance()
                    self.tokens.append(Token(TokenType.DOUBLE_AT, "@@", token_line, token_col))
                else:
                    self.advance()
                    self.tokens.append(Token(TokenType.AT, "@", token_line, token_col))

            elif ch.isdigit() or (ch == "-" and (self.peek_char() or "").isdigit()):
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, token_line, token_col))

            elif ch.isalpha() or ch == "_":
                value = self.read_identifier()
                token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
                self.tokens.append(Token(token_type, value, token_line, token_col))

            elif ch in SYMBOLS:
                self.advance()
                self.tokens.append(Token(SYMBOLS[ch], ch, token_line, token_col))

            else:
                self.advance()
                self.tokens.append(Token(TokenType.INVALID, ch, token_line, token_col))

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens


def tokenize(text: str, file: Path) -> list[Token]:
    """
    Convenience function to tokenize schema text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
