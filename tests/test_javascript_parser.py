import pytest

from findimports.core.nodes import (
    ASSIGNMENT_PATTERN, CALL_EXPRESSION, IDENTIFIER, IMPORT_DECLARATION, IMPORT_DEFAULT_SPECIFIER,
    IMPORT_NAMESPACE_SPECIFIER, IMPORT_SPECIFIER, MEMBER_EXPRESSION, OBJECT_PATTERN, OBJECT_PROPERTY,
    PROGRAM, REST_ELEMENT, STRING_LITERAL, VARIABLE_DECLARATION,
)
from findimports.core.template import statement, statements
from findimports.exceptions import TemplateError
from findimports.structured_processing import ast_utils
from findimports.structured_processing.language_parsers.javascript_parser import parse_program
from findimports.util import get_language_hint, strip_utf8_bom

ast_utils.load_language_configs()


def test_program_skips_comments():
    program = parse_program("// header\n/* block */\nimport a from 'a'\n")
    assert program.type == PROGRAM
    assert [s.type for s in program.body] == [IMPORT_DECLARATION]


def test_import_clause_specifier_types():
    decl = parse_program("import Def, * as NS from 'm'").body[0]
    assert decl.source.value == "m"
    assert [s.type for s in decl.specifiers] == [IMPORT_DEFAULT_SPECIFIER, IMPORT_NAMESPACE_SPECIFIER]
    assert [s.local.name for s in decl.specifiers] == ["Def", "NS"]
    assert decl.import_kind is None


def test_named_specifiers_and_kinds():
    decl = parse_program("import {type foo, bar as baz} from \"qux\"").body[0]
    assert decl.source.value == "qux"
    assert all(s.type == IMPORT_SPECIFIER for s in decl.specifiers)
    assert [s.imported.name for s in decl.specifiers] == ["foo", "bar"]
    assert [s.local.name for s in decl.specifiers] == ["foo", "baz"]
    assert [s.import_kind for s in decl.specifiers] == ["type", None]


def test_type_only_import_statement():
    decl = parse_program("import type {foo as qlob} from 'baz'").body[0]
    assert decl.import_kind == "type"
    assert decl.specifiers[0].import_kind is None
    assert decl.specifiers[0].local.name == "qlob"


def test_default_as_specifier_keeps_default_name():
    decl = parse_program("import {default as Baz} from 'baz'").body[0]
    assert decl.specifiers[0].imported.name == "default"
    assert decl.specifiers[0].local.name == "Baz"


def test_side_effect_import_has_no_specifiers():
    decl = parse_program("import 'polyfill'").body[0]
    assert decl.type == IMPORT_DECLARATION
    assert decl.specifiers == []
    assert decl.source.value == "polyfill"


@pytest.mark.parametrize("keyword", ["const", "let", "var"])
def test_variable_declaration_kind(keyword):
    decl = parse_program(f"{keyword} x = require('m')").body[0]
    assert decl.type == VARIABLE_DECLARATION
    assert decl.kind == keyword
    init = decl.declarations[0].init
    assert init.type == CALL_EXPRESSION
    assert init.callee.name == "require"
    assert init.arguments[0].type == STRING_LITERAL
    assert init.arguments[0].value == "m"


def test_require_default_member():
    init = parse_program("const x = require('foo').default").body[0].declarations[0].init
    assert init.type == MEMBER_EXPRESSION
    assert init.computed is False
    assert init.property.name == "default"
    assert init.object.type == CALL_EXPRESSION


def test_subscript_is_computed_member():
    init = parse_program("const x = require('foo')['default']").body[0].declarations[0].init
    assert init.type == MEMBER_EXPRESSION
    assert init.computed is True
    assert init.property.value == "default"


def test_parenthesized_require_is_unwrapped():
    init = parse_program("const x = (require('m'))").body[0].declarations[0].init
    assert init.type == CALL_EXPRESSION


def test_object_pattern_properties():
    pattern = parse_program("const {a, b: c, 'd-e': f, g = 1, ...rest} = require('m')").body[0].declarations[0].id
    assert pattern.type == OBJECT_PATTERN
    a, b, d, g, rest = pattern.properties
    assert a.type == OBJECT_PROPERTY and a.shorthand and a.key.name == "a" and a.value.name == "a"
    assert b.key.name == "b" and b.value.name == "c" and not b.shorthand
    assert d.key.type == STRING_LITERAL and d.key.value == "d-e" and d.value.name == "f"
    assert g.key.name == "g" and g.value.type == ASSIGNMENT_PATTERN and g.value.left.name == "g"
    assert rest.type == REST_ELEMENT and rest.argument.name == "rest"


def test_computed_pattern_key_is_flagged():
    prop = parse_program("const {[key]: v} = require('m')").body[0].declarations[0].id.properties[0]
    assert prop.computed is True
    assert prop.key.type == IDENTIFIER


def test_other_statements_get_camel_case_tags():
    body = parse_program("foo()\nfunction f() {}\nexport const y = 1\n").body
    assert [s.type for s in body] == ["ExpressionStatement", "FunctionDeclaration", "ExportStatement"]


def test_import_equals_require_is_not_an_import_declaration():
    body = parse_program("import x = require('y')", "typescript").body
    assert body[0].type == "TSImportEqualsDeclaration"


def test_nodes_carry_byte_offsets():
    program = parse_program("import a from 'a'")
    local = program.body[0].specifiers[0].local
    assert (local.start_byte, local.end_byte) == (7, 8)


def test_syntax_errors_still_produce_a_program():
    program = parse_program("import a from 'a'\nconst = ;\n")
    assert program.body[0].type == IMPORT_DECLARATION


def test_bytes_input_is_accepted():
    assert parse_program(b"import a from 'a'").body[0].specifiers[0].local.name == "a"


def test_template_statement_requires_exactly_one():
    assert statement("import a from 'a'").type == IMPORT_DECLARATION
    with pytest.raises(TemplateError):
        statement("import a from 'a'\nimport b from 'b'")
    with pytest.raises(TemplateError):
        statement("")


def test_template_statements_returns_all():
    assert len(statements("import a from 'a'\nconst b = require('b')\n")) == 2


@pytest.mark.parametrize(
    "extension, expected",
    [(".ts", "typescript"), ("mts", "typescript"), (".tsx", "tsx"), (".js", "tsx"), (".mjs", "tsx"), (None, "tsx")],
)
def test_language_hint(extension, expected):
    assert get_language_hint(extension) == expected


def test_strip_utf8_bom():
    assert strip_utf8_bom(b"\xef\xbb\xbfimport a from 'a'") == b"import a from 'a'"
    assert strip_utf8_bom(b"x") == b"x"
