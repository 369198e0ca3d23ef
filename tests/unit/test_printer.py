"""Tests for the source printer and identifier helpers."""

from pyrisma.codegen.naming import Namer, escape, py_str, sql_ident
from pyrisma.codegen.output_model import Block, ClassDecl, MemberDecl, MethodDecl, ModuleDecl, Param
from pyrisma.codegen.printer import print_module


class TestPrintModule:
    def test_layout(self):
        module = ModuleDecl(
            docstring="Doc.",
            imports=["import x"],
            preamble=["X = 1"],
            classes=[
                ClassDecl(
                    name="A",
                    role="record",
                    docstring="A doc.",
                    members=[MemberDecl("a", "int", comment="c")],
                    methods=[
                        MethodDecl(
                            "f",
                            [Param("self")],
                            "int",
                            [Block("if True:", ["return 1"]), "return 0"],
                        )
                    ],
                ),
                ClassDecl(name="E", role="enum"),
            ],
        )
        assert print_module(module) == (
            '"""\nDoc.\n"""\n\nimport x\n\nX = 1\n\n\n'
            'class A:\n    """A doc."""\n\n    #: c\n    a: int\n\n'
            "    def f(self) -> int:\n        if True:\n            return 1\n        return 0\n\n\n"
            "class E:\n    pass\n"
        )

    def test_decorators_and_bases(self):
        module = ModuleDecl(
            docstring="D",
            classes=[
                ClassDecl(
                    name="Role",
                    role="enum",
                    bases=["str", "Enum"],
                    members=[MemberDecl("USER", default='"USER"')],
                ),
                ClassDecl(
                    name="W",
                    role="where",
                    decorators=["dataclass"],
                    members=[MemberDecl("id", "Optional[int]", "None")],
                ),
            ],
        )
        text = print_module(module)
        assert 'class Role(str, Enum):\n    USER = "USER"\n' in text
        assert "@dataclass\nclass W:\n    id: Optional[int] = None\n" in text

    def test_method_with_docstring_only(self):
        module = ModuleDecl(
            docstring="D",
            classes=[
                ClassDecl(
                    name="A",
                    role="record",
                    methods=[MethodDecl("noop", [Param("self")], "None", docstring="Nothing.")],
                )
            ],
        )
        assert print_module(module).endswith('    def noop(self) -> None:\n        """Nothing."""\n')

    def test_multiline_docstring_and_empty_block(self):
        method = MethodDecl(
            "f",
            [Param("self"), Param("x", "int", "1"), Param("y", default="2")],
            docstring="First.\n\nSecond.",
            body=[Block("for _ in []:", [])],
            decorators=["classmethod"],
        )
        module = ModuleDecl(docstring="D", classes=[ClassDecl(name="A", role="record", methods=[method])])
        text = print_module(module)
        assert "    @classmethod\n    def f(self, x: int = 1, y=2):\n" in text
        assert '        """\n        First.\n\n        Second.\n        """\n' in text
        assert "        for _ in []:\n            pass\n" in text


class TestNaming:
    def test_py_str(self):
        assert py_str("a") == '"a"'
        assert py_str('say "hi"') == "'say \"hi\"'"
        assert py_str("it's \"x\"") == repr("it's \"x\"")
        assert py_str("a\nb") == repr("a\nb")

    def test_sql_ident(self):
        assert sql_ident("users") == '"users"'
        assert sql_ident('a"b') == '"a""b"'

    def test_escape(self):
        assert escape("class") == "class_"
        assert escape("logger") == "logger_"
        assert escape("email") == "email"
        assert escape("email", {"email"}) == "email_"

    def test_client_slot_avoids_connection(self, parse):
        schema = parse("model Connection {\n  id Int @id\n}\n")
        namer = Namer(schema)
        assert namer.client_slot(schema.models[0]) == "connection_"
        assert namer.class_name("Connection") == "Connection_"

    def test_enum_members(self, blog_schema):
        namer = Namer(blog_schema)
        assert namer.enum_member("USER") == "USER"
        assert namer.enum_member("value") == "value_"
        assert namer.enum_member("_hidden") == "_hidden_"
        assert namer.enum_member("None") == "None_"
