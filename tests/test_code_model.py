"""Tests for string escaping and generated source rendering."""

import ast

import pytest

from mezzanine.declarations import ContentPair
from mezzanine.errors import DuplicateMemberError
from mezzanine.generation import (
    ConstantSpec,
    TypeSpec,
    escape_string,
    generate_compilation_unit,
    generate_mezzanine_type_spec,
    generate_type_spec,
)
from mezzanine.generation.code_model import render_string_expression


class TestEscaping:
    """Escaped literals must evaluate back to the exact original text."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "plain",
            'Hello\n"World"\n',
            "back\\slash and 'single' quotes",
            "tabs\tand\r\ncarriage returns\r",
            "café 日本語 \U0001f600",
            "\x00\x07\x1b\x7f controls",
            "\u2028line separator\u2029",
            "lone \ud800 surrogate",
        ],
    )
    def test_literal_round_trips(self, text):
        literal = escape_string(text)

        assert ast.literal_eval(literal) == text

    def test_literal_is_ascii(self):
        literal = escape_string("café \U0001f600 \x00")

        assert literal.isascii()
        assert literal == '"caf\\xe9 \\U0001f600 \\x00"'

    def test_short_escapes(self):
        assert escape_string('a"b\\c\n') == '"a\\"b\\\\c\\n"'


class TestStringExpression:

    def test_single_line_is_one_literal(self):
        assert render_string_expression("MIT") == ['"MIT"']

    def test_empty_text(self):
        assert render_string_expression("") == ['""']

    def test_multi_line_text_is_parenthesized(self):
        lines = render_string_expression('Hello\n"World"\n', indent=1)

        assert lines == [
            "(",
            '        "Hello\\n"',
            '        "\\"World\\"\\n"',
            "    )",
        ]

    @pytest.mark.parametrize("text", ["a\nb", "a\nb\n", "\n\n", "x\r\ny\rz\u2028w"])
    def test_multi_line_round_trips(self, text):
        expression = "\n".join(render_string_expression(text))

        assert ast.literal_eval(expression) == text


class TestTypeSpecMerging:

    def test_same_named_types_merge(self):
        mezzanine = TypeSpec(name="Mezzanine")
        mezzanine.add_type(TypeSpec(name="Licenses", constants=[ConstantSpec("A", "a")]))
        mezzanine.add_type(TypeSpec(name="Licenses", constants=[ConstantSpec("B", "b")]))

        assert len(mezzanine.types) == 1
        assert [c.name for c in mezzanine.types[0].constants] == ["A", "B"]

    def test_duplicate_constant_is_rejected(self):
        mezzanine = TypeSpec(name="Mezzanine")
        mezzanine.add_type(TypeSpec(name="Licenses", constants=[ConstantSpec("A", "a")]))

        with pytest.raises(DuplicateMemberError) as exc_info:
            mezzanine.add_type(TypeSpec(name="Licenses", constants=[ConstantSpec("A", "other", origin="b.py:3")]))

        assert exc_info.value.qualified_name == "Mezzanine.Licenses.A"
        assert "b.py:3" in str(exc_info.value)

    def test_type_clashing_with_constant_is_rejected(self):
        outer = TypeSpec(name="Outer", constants=[ConstantSpec("Inner", "text")])

        with pytest.raises(DuplicateMemberError):
            outer.add_type(TypeSpec(name="Inner"))

    def test_constant_count_includes_nested(self):
        spec = TypeSpec(
            name="Mezzanine",
            constants=[ConstantSpec("A", "")],
            types=[TypeSpec(name="Inner", constants=[ConstantSpec("B", ""), ConstantSpec("C", "")])],
        )

        assert spec.constant_count() == 3


class TestGenerator:

    def test_type_spec_mirrors_enclosing_type(self, make_declaration):
        declaration = make_declaration("TEXT", enclosing_type=("Outer", "Inner"))

        spec = generate_type_spec(ContentPair(declaration, "hello"))

        assert spec.name == "Outer"
        assert spec.types[0].name == "Inner"
        assert spec.types[0].constants[0].name == "TEXT"
        assert spec.types[0].constants[0].value == "hello"

    def test_rendered_unit_evaluates_to_original_text(self, make_declaration):
        pair = ContentPair(make_declaration(), 'Hello\n"World"\n')
        unit = generate_compilation_unit(generate_mezzanine_type_spec([generate_type_spec(pair)]))

        namespace = {}
        exec(compile(unit.render(), "mezzanine.py", "exec"), namespace)

        value = namespace["Mezzanine"].Licenses.LICENSE
        assert value == 'Hello\n"World"\n'
        assert len(value) == 14

    def test_rendered_unit_layout(self, make_declaration):
        pair = ContentPair(make_declaration(), "MIT")
        unit = generate_compilation_unit(generate_mezzanine_type_spec([generate_type_spec(pair)]))

        assert unit.render() == (
            "# Generated by Mezzanine. Do not edit.\n"
            "\n"
            "\n"
            "class Mezzanine:\n"
            '    """Text resources embedded at build time."""\n'
            "\n"
            "    class Licenses:\n"
            '        LICENSE: str = "MIT"\n'
        )
        assert unit.relative_path.as_posix() == "mezzanine_generated/mezzanine.py"

    def test_empty_umbrella_is_valid_python(self):
        unit = generate_compilation_unit(generate_mezzanine_type_spec([]))

        namespace = {}
        exec(compile(unit.render(), "mezzanine.py", "exec"), namespace)

        assert "Mezzanine" in namespace
