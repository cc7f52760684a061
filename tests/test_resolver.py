"""Tests for resolving desired import/require statements against a program."""
import pytest

from findimports.core import builders
from findimports.core.collection import Collection
from findimports.core.nodes import IDENTIFIER, MEMBER_EXPRESSION, STRING_LITERAL
from findimports.core.resolver import resolve, resolve_names
from findimports.core.template import statement
from findimports.exceptions import InvalidRequireError, UnsupportedStatementError
from findimports.structured_processing.language_parsers.javascript_parser import parse_program


def find(code, desired):
    return resolve_names(parse_program(code), desired)


class TestRequireStatements:
    """Desired statements written as require() declarations."""

    def test_throws_if_statement_contains_a_non_require_declarator(self):
        with pytest.raises(InvalidRequireError):
            find("import Baz from 'baz'", statement("const foo = require('baz'), bar = invalid(true)"))

    def test_throws_for_require_without_a_module_name(self):
        with pytest.raises(InvalidRequireError):
            find("import Baz from 'baz'", statement("const foo = require()"))

    def test_non_default_import_with_alias(self):
        assert find("import {foo as bar} from 'baz'", statement("const {foo: qux} = require('baz')")) == {"qux": "bar"}

    def test_non_default_import_without_alias(self):
        assert find("import {foo} from 'baz'", statement("const {foo: qux} = require('baz')")) == {"qux": "foo"}

    def test_default_requires(self):
        assert find("const foo = require('baz')", statement("const qux = require('baz')")) == {"qux": "foo"}

    def test_plain_require_ignores_es_imports(self):
        # a bare require only reuses another bare require
        assert find("import foo from 'baz'", statement("const qux = require('baz')")) == {}

    def test_destructured_property_with_default_value(self):
        assert find("import {foo as bar} from 'baz'", statement("const {foo = 1} = require('baz')")) == {"foo": "bar"}

    def test_string_keyed_destructure_synthesizes_computed_access(self):
        program = parse_program("const R = require('m')")
        result = resolve(program, statement("const {'foo-bar': fb} = require('m')"))
        binding = result["fb"]
        assert binding.type == MEMBER_EXPRESSION
        assert binding.computed is True
        assert binding.property.type == STRING_LITERAL
        assert resolve_names(program, statement("const {'foo-bar': fb} = require('m')")) == {"fb": "R['foo-bar']"}

    def test_computed_and_rest_properties_are_skipped(self):
        assert find("const M = require('m')", statement("const {[key]: v, ...rest} = require('m')")) == {}

    def test_multiple_declarators_are_resolved_independently(self):
        code = "const A = require('a')\nconst {b: B} = require('b')"
        assert find(code, statement("const x = require('a'), {b} = require('b')")) == {"x": "A", "b": "B"}


class TestImportStatements:
    """Desired statements written as ES import declarations."""

    def test_default_imports(self):
        assert find("import Baz from 'baz'", statement("import Foo from 'baz'")) == {"Foo": "Baz"}

    def test_funky_default_imports(self):
        result = find("import {default as Baz} from 'baz'", statement("import {default as Foo} from 'baz'"))
        assert result == {"Foo": "Baz"}

    def test_default_import_satisfied_by_default_as_specifier(self):
        assert find("import {default as Baz} from 'baz'", statement("import Foo from 'baz'")) == {"Foo": "Baz"}

    def test_non_default_import_specifiers_with_aliases(self):
        assert find("import {foo as bar} from 'baz'", statement("import {foo as qux} from 'baz'")) == {"qux": "bar"}

    def test_non_default_import_type_specifiers_with_aliases(self):
        code = "import {foo as bar} from 'baz'\nimport type {foo as qlob} from 'baz'"
        assert find(code, statement("import type {foo as qux} from 'baz'")) == {"qux": "qlob"}

    def test_non_default_import_specifiers_without_aliases(self):
        assert find("import {foo} from 'baz'", statement("import {foo} from 'baz'")) == {"foo": "foo"}

    def test_non_default_require_specifiers_with_aliases(self):
        assert find("const {foo: bar} = require('baz')", statement("import {foo} from 'baz'")) == {"foo": "bar"}

    def test_namespace_imports(self):
        assert find("import * as React from 'react'", statement("import * as R from 'react'")) == {"R": "React"}

    def test_namespace_import_has_no_require_fallback(self):
        assert find("const React = require('react')", statement("import * as R from 'react'")) == {}

    def test_require_defaults(self):
        assert find("const bar = require('foo').default", statement("import foo from 'foo'")) == {"foo": "bar"}

    def test_destructured_require_defaults(self):
        assert find("const {default: bar} = require('foo')", statement("import foo from 'foo'")) == {"foo": "bar"}

    def test_other_modules_are_ignored(self):
        code = "import foo from 'other'\nconst {foo: bar} = require('other')"
        assert find(code, statement("import foo, {foo as f} from 'foo'")) == {}


class TestDefaultPriority:
    """Default bindings are chosen in a fixed order of preference."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("const x = require('foo')\nconst y = require('foo').default\nimport {default as w} from 'foo'\nimport z from 'foo'", "z"),
            ("const x = require('foo')\nconst y = require('foo').default\nimport {default as w} from 'foo'", "w"),
            ("const x = require('foo')\nconst y = require('foo').default", "y"),
            ("const x = require('foo')", "x"),
        ],
    )
    def test_priority_order(self, code, expected):
        assert find(code, statement("import d from 'foo'")) == {"d": expected}

    def test_last_default_unwrapped_require_wins(self):
        code = "const a = require('foo').default\nconst b = require('foo').default"
        assert find(code, statement("import d from 'foo'")) == {"d": "b"}

    def test_first_plain_require_wins(self):
        code = "const a = require('foo')\nconst b = require('foo')"
        assert find(code, statement("import d from 'foo'")) == {"d": "a"}

    def test_destructured_require_does_not_count_as_module_binding(self):
        code = "const {bar} = require('foo')\nconst mod = require('foo')"
        assert find(code, statement("import d from 'foo'")) == {"d": "mod"}


class TestBindingKinds:
    """value / type / typeof bindings only match their own kind."""

    def test_type_request_does_not_match_value_import(self):
        code = "import {foo, type bar} from 'baz'"
        assert find(code, statement("import {type foo, type bar} from 'baz'")) == {"bar": "bar"}

    def test_value_request_does_not_match_type_import(self):
        assert find("import type {foo} from 'baz'", statement("import {foo} from 'baz'")) == {}

    def test_requires_match_any_kind(self):
        assert find("const {foo: bar} = require('baz')", statement("import type {foo} from 'baz'")) == {"foo": "bar"}

    def test_typeof_imports(self):
        program = builders.program([
            builders.import_declaration(
                [builders.import_default_specifier(builders.identifier("T"))],
                builders.string_literal("foo"),
                import_kind="typeof",
            ),
        ])
        typeof_desired = builders.import_declaration(
            [builders.import_default_specifier(builders.identifier("X"))],
            builders.string_literal("foo"),
            import_kind="typeof",
        )
        value_desired = builders.import_declaration(
            [builders.import_default_specifier(builders.identifier("X"))],
            builders.string_literal("foo"),
        )
        assert resolve_names(program, typeof_desired) == {"X": "T"}
        assert resolve_names(program, value_desired) == {}

    def test_specifier_kind_overrides_statement_kind(self):
        program = builders.program([
            builders.import_declaration(
                [builders.import_specifier(builders.identifier("Foo"), import_kind="typeof")],
                builders.string_literal("foo"),
            ),
        ])
        desired = builders.import_declaration(
            [builders.import_specifier(builders.identifier("Foo"), builders.identifier("F"), import_kind="typeof")],
            builders.string_literal("foo"),
            import_kind="type",
        )
        assert resolve_names(program, desired) == {"F": "Foo"}


class TestMemberSynthesis:
    """Named exports reached through a module or namespace binding."""

    def test_namespace_import_member(self):
        program = parse_program("import * as R from 'react'")
        result = resolve(program, statement("import {Component as C} from 'react'"))
        binding = result["C"]
        assert binding.type == MEMBER_EXPRESSION
        assert binding.computed is False
        assert binding.object is program.body[0].specifiers[0].local
        assert resolve_names(program, statement("import {Component as C} from 'react'")) == {"C": "R.Component"}

    def test_require_member(self):
        program = parse_program("const R = require('react')")
        result = resolve(program, statement("import {Component as C} from 'react'"))
        assert result["C"].object is program.body[0].declarations[0].id
        assert result["C"].property.type == IDENTIFIER
        assert resolve_names(program, statement("import {Component as C} from 'react'")) == {"C": "R.Component"}

    def test_require_preferred_over_namespace(self):
        code = "import * as NS from 'm'\nconst R = require('m')"
        assert find(code, statement("import {x} from 'm'")) == {"x": "R.x"}

    def test_destructured_require_preferred_over_member(self):
        code = "const R = require('m')\nconst {x: y} = require('m')"
        assert find(code, statement("import {x} from 'm'")) == {"x": "y"}

    def test_first_plain_require_is_the_member_base(self):
        code = "const A = require('m')\nconst B = require('m')"
        assert find(code, statement("const {x} = require('m')")) == {"x": "A.x"}

    def test_destructure_key_node_becomes_property(self):
        program = parse_program("import * as NS from 'm'")
        desired = statement("const {x: y} = require('m')")
        result = resolve(program, desired)
        assert result["y"].property is desired.declarations[0].id.properties[0].key


class TestStatementSequences:
    def test_multiple_statements_specifiers_and_declarators(self):
        code = "const {foo: _foo, bar: _bar} = require('foo')\nimport baz, {qux} from 'baz'\n"
        desired = [
            statement("const {foo, bar} = require('foo')"),
            statement("import blah, {qux} from 'baz'"),
        ]
        assert find(code, desired) == {"foo": "_foo", "bar": "_bar", "blah": "baz", "qux": "qux"}

    def test_later_statements_overwrite_earlier_aliases(self):
        code = "import A from 'a'\nimport B from 'b'"
        first, second = statement("import X from 'a'"), statement("import X from 'b'")
        program = parse_program(code)
        merged = {}
        merged.update(resolve_names(program, first))
        merged.update(resolve_names(program, second))
        assert resolve_names(program, [first, second]) == merged == {"X": "B"}

    def test_invalid_statement_in_sequence_raises(self):
        desired = [statement("import Foo from 'baz'"), statement("const x = invalid(true)")]
        with pytest.raises(InvalidRequireError):
            find("import Baz from 'baz'", desired)


class TestInputs:
    def test_unsupported_statement_type(self):
        with pytest.raises(UnsupportedStatementError, match="ExpressionStatement"):
            find("import Baz from 'baz'", statement("foo()"))

    def test_accepts_a_collection_root(self):
        program = parse_program("import Baz from 'baz'")
        assert resolve_names(Collection.from_node(program), statement("import Foo from 'baz'")) == {"Foo": "Baz"}

    def test_result_is_a_reference_into_the_program(self):
        program = parse_program("import {foo as bar} from 'baz'")
        result = resolve(program, statement("import {foo} from 'baz'"))
        assert result["foo"] is program.body[0].specifiers[0].local
