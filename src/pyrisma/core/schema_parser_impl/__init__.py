"""
Schema parser package.

The parser is built from mixins, one per construct type:

- ModelParserMixin: model blocks, fields, model-level attributes
- AttributeParserMixin: field attributes
- ConfigBlockParserMixin: generator and datasource blocks
- EnumParserMixin: enum blocks

Usage:
    from pyrisma.core.schema_parser_impl import parse_schema_text

    schema = parse_schema_text(text, Path("schema.prisma"))
"""

from pathlib import Path

from .. import ir
from ..env import EnvResolver
from ..lexer import TokenType, tokenize
from .attributes import AttributeOutcome, AttributeParserMixin
from .base import BaseParser
from .config_blocks import ConfigBlockParserMixin
from .enum import EnumParserMixin
from .model import ModelParserMixin


class Parser(
    BaseParser,
    ModelParserMixin,
    AttributeParserMixin,
    ConfigBlockParserMixin,
    EnumParserMixin,
):
    """Complete schema parser."""

    def __init__(
        self,
        tokens: list,
        file: Path,
        text: str = "",
        env_resolver: EnvResolver | None = None,
    ):
        super().__init__(tokens, file, text)
        self.env_resolver = env_resolver or EnvResolver.default()

    def parse(self) -> ir.SchemaSpec:
        """
        Parse top-level declarations until end of input.

        Returns:
            Unresolved SchemaSpec (model references not yet classified)

        Raises:
            ParseError: On the first error encountered
        """
        models: list[ir.ModelSpec] = []
        enums: list[ir.EnumSpec] = []
        generator: ir.GeneratorConfig | None = None
        datasource: ir.DatasourceConfig | None = None

        while True:
            self.skip_newlines()
            token = self.current_token()

            if token.type == TokenType.EOF:
                break
            elif token.type == TokenType.MODEL:
                models.append(self.parse_model())
            elif token.type == TokenType.GENERATOR:
                if generator is not None:
                    raise self.error("A schema declares at most one generator block", token)
                generator = self.parse_generator()
            elif token.type == TokenType.DATASOURCE:
                if datasource is not None:
                    raise self.error("A schema declares at most one datasource block", token)
                datasource = self.parse_datasource()
            elif self.at_enum_declaration():
                enums.append(self.parse_enum())
            elif token.type == TokenType.INVALID:
                raise self.invalid_token_error(token)
            else:
                raise self.error(
                    "Expected 'model', 'enum', 'generator' or 'datasource' declaration", token
                )

        return ir.SchemaSpec(
            models=models,
            enums=enums,
            generator=generator,
            datasource=datasource,
        )


def parse_schema_text(
    text: str, file: Path, env_resolver: EnvResolver | None = None
) -> ir.SchemaSpec:
    """
    Tokenize and parse schema text without running resolution.

    Args:
        text: Schema source text
        file: Source file path
        env_resolver: Provider chain for env("VAR") values

    Returns:
        Unresolved SchemaSpec
    """
    tokens = tokenize(text, file)
    parser = Parser(tokens, file, text=text, env_resolver=env_resolver)
    return parser.parse()


__all__ = [
    "AttributeOutcome",
    "BaseParser",
    "Parser",
    "parse_schema_text",
]
