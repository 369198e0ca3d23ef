"""
Serializes a ModuleDecl to Python source text.
"""

from __future__ import annotations

from .output_model import Block, ClassDecl, MemberDecl, MethodDecl, ModuleDecl, Statement

INDENT = "    "


def print_module(module: ModuleDecl) -> str:
    """
    Render a module.

    The output is a pure function of ``module``: the same declarations
    always produce byte-identical text.
    """
    lines: list[str] = ['"""', *module.docstring.splitlines(), '"""', ""]
    lines.extend(module.imports)
    if module.preamble:
        lines.append("")
        lines.extend(module.preamble)

    for cls in module.classes:
        lines.extend(["", ""])
        lines.extend(_print_class(cls))

    return "\n".join(lines) + "\n"


def _print_class(cls: ClassDecl) -> list[str]:
    lines = [f"@{d}" for d in cls.decorators]
    bases = f"({', '.join(cls.bases)})" if cls.bases else ""
    lines.append(f"class {cls.name}{bases}:")

    body: list[str] = []
    if cls.docstring:
        body.extend(_docstring(cls.docstring))
    if cls.members:
        if body:
            body.append("")
        for member in cls.members:
            body.extend(_print_member(member))
    for method in cls.methods:
        if body:
            body.append("")
        body.extend(_print_method(method))
    if not body:
        body.append("pass")

    lines.extend(_indent(body))
    return lines


def _print_member(member: MemberDecl) -> list[str]:
    lines = []
    if member.comment:
        lines.append(f"#: {member.comment}")
    text = member.name
    if member.annotation:
        text += f": {member.annotation}"
    if member.default is not None:
        text += f" = {member.default}"
    lines.append(text)
    return lines


def _print_method(method: MethodDecl) -> list[str]:
    lines = [f"@{d}" for d in method.decorators]
    params = ", ".join(p.render() for p in method.params)
    returns = f" -> {method.returns}" if method.returns else ""
    lines.append(f"def {method.name}({params}){returns}:")

    body: list[str] = []
    if method.docstring:
        body.extend(_docstring(method.docstring))
    body.extend(_print_statements(method.body))
    if not method.body and not method.docstring:
        body.append("pass")
    lines.extend(_indent(body))
    return lines


def _print_statements(statements: list[Statement]) -> list[str]:
    lines: list[str] = []
    for stmt in statements:
        if isinstance(stmt, Block):
            lines.append(stmt.header)
            lines.extend(_indent(_print_statements(stmt.body) or ["pass"]))
        else:
            lines.append(stmt)
    return lines


def _docstring(text: str) -> list[str]:
    text_lines = text.splitlines()
    if len(text_lines) == 1:
        return [f'"""{text_lines[0]}"""']
    return ['"""', *text_lines, '"""']


def _indent(lines: list[str]) -> list[str]:
    return [INDENT + line if line else "" for line in lines]
