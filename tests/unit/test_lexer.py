"""Tests for the schema lexer."""

from pathlib import Path

from pyrisma.core.lexer import TokenType, tokenize


def types_of(text: str) -> list[TokenType]:
    return [t.type for t in tokenize(text, Path("test.prisma"))]


class TestTokens:
    """Token kinds and values."""

    def test_keywords_are_promoted(self):
        """model/generator/datasource get their own token types."""
        assert types_of("model generator datasource enum") == [
            TokenType.MODEL,
            TokenType.GENERATOR,
            TokenType.DATASOURCE,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_structural_symbols(self):
        assert types_of("{ } ( ) [ ] ? = , : .") == [
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.LBRACKET,
            TokenType.RBRACKET,
            TokenType.QUESTION,
            TokenType.EQUALS,
            TokenType.COMMA,
            TokenType.COLON,
            TokenType.DOT,
            TokenType.EOF,
        ]

    def test_string_value_excludes_quotes(self):
        tokens = tokenize('"users"', Path("t"))
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "users"
        assert tokens[0].lexeme == '"users"'

    def test_string_has_no_escape_processing(self):
        tokens = tokenize(r'"a\nb"', Path("t"))
        assert tokens[0].value == r"a\nb"

    def test_numbers(self):
        tokens = tokenize("42 -1 1.5", Path("t"))
        assert [(t.type, t.value) for t in tokens[:3]] == [
            (TokenType.NUMBER, "42"),
            (TokenType.NUMBER, "-1"),
            (TokenType.NUMBER, "1.5"),
        ]

    def test_identifier_with_digits_and_underscores(self):
        tokens = tokenize("user_id2 _private", Path("t"))
        assert [t.value for t in tokens[:2]] == ["user_id2", "_private"]


class TestLayout:
    """Newlines, whitespace and comments."""

    def test_newlines_are_significant(self):
        assert types_of("a\nb") == [
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_comments_are_discarded(self):
        assert types_of("a // comment { }\nb") == [
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_single_slash_is_invalid(self):
        assert types_of("/")[0] == TokenType.INVALID

    def test_positions(self):
        tokens = tokenize("model User {\n  id Int\n}", Path("t"))
        id_token = next(t for t in tokens if t.value == "id")
        assert (id_token.line, id_token.column) == (2, 3)


class TestAtSigns:
    """Field vs model attribute markers."""

    def test_double_at_without_space(self):
        assert types_of("@@map")[:2] == [TokenType.DOUBLE_AT, TokenType.IDENTIFIER]

    def test_separated_at_signs_stay_single(self):
        assert types_of("@ @map")[:3] == [TokenType.AT, TokenType.AT, TokenType.IDENTIFIER]

    def test_single_at(self):
        assert types_of("@id")[:2] == [TokenType.AT, TokenType.IDENTIFIER]


class TestInvalidInput:
    def test_unterminated_string_is_invalid_token(self):
        tokens = tokenize('name "oops\n', Path("t"))
        assert tokens[1].type == TokenType.INVALID
        assert tokens[1].value.startswith('"oops')

    def test_unknown_character_is_invalid_token(self):
        assert types_of("#")[0] == TokenType.INVALID
