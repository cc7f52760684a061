# findimports/core/resolver.py
"""
Finds the existing bindings in a program that satisfy a desired import.

Given a desired statement such as ``import {foo as qux} from 'baz'`` or
``const {foo: qux} = require('baz')``, :func:`resolve` returns a mapping from
each alias in the desired statement (``qux``) to the binding the program
already uses for the same export. The binding is either an ``Identifier`` node
from the program or a synthesized ``MemberExpression`` such as ``R.foo`` when
the export is only reachable through another binding.

Four binding styles are recognised, all keyed on the exact module string:

1. ES import specifiers (default, named, namespace), with their
   ``type``/``typeof`` qualifiers.
2. ``const x = require('m')``: the whole module object.
3. ``const {a: b} = require('m')``: destructured exports.
4. ``const x = require('m').default``: the unwrapped default export.

Exports that have no matching binding are left out of the result.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

import structlog

from findimports.core import builders
from findimports.core.collection import Collection, NodePath
from findimports.core.nodes import (
    ASSIGNMENT_PATTERN,
    BINDING_KINDS,
    CALL_EXPRESSION,
    IDENTIFIER,
    IMPORT_DECLARATION,
    IMPORT_DEFAULT_SPECIFIER,
    IMPORT_NAMESPACE_SPECIFIER,
    IMPORT_SPECIFIER,
    MEMBER_EXPRESSION,
    OBJECT_PATTERN,
    OBJECT_PROPERTY,
    PROGRAM,
    STRING_LITERAL,
    VALUE,
    VARIABLE_DECLARATION,
    Node,
    export_name,
)
from findimports.core.printer import to_source
from findimports.exceptions import FindImportsError, InvalidRequireError, UnsupportedStatementError

log = structlog.get_logger(__name__)

DEFAULT = "default"
_IDENTIFIER_NAME = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

Desired = Union[Node, Sequence[Node]]


@dataclass
class ImportCandidates:
    """Existing bindings of one module, gathered once per desired statement."""
    source: str
    imports: Collection
    requires: List[Node] = field(default_factory=list)
    default_requires: List[Node] = field(default_factory=list)


def get_import_kind(path: NodePath) -> str:
    # own qualifier, else the enclosing declaration's, else value.
    own_kind = path.node.get("import_kind")
    if own_kind in BINDING_KINDS:
        return own_kind
    if path.parent is not None and path.parent.node.get("import_kind") in BINDING_KINDS:
        return path.parent.node.get("import_kind")
    return VALUE


def is_require_call(node: Optional[Node], source: Optional[str] = None) -> bool:
    if node is None or node.type != CALL_EXPRESSION:
        return False
    callee = node.callee
    if callee.type != IDENTIFIER or callee.name != "require":
        return False
    if source is None:
        return True
    args = node.arguments
    return bool(args) and args[0].type == STRING_LITERAL and args[0].value == source


def is_default_require(node: Optional[Node], source: str) -> bool:
    # require(source).default
    return (
        node is not None
        and node.type == MEMBER_EXPRESSION
        and not node.computed
        and node.property.type == IDENTIFIER
        and node.property.name == DEFAULT
        and is_require_call(node.object, source)
    )


def is_identifier_name(name: str) -> bool:
    return bool(_IDENTIFIER_NAME.match(name))


def binding_identifier(pattern: Optional[Node]) -> Optional[Node]:
    # the local identifier bound by a destructured property value, `b` in `{a: b}` or `{a: b = 1}`.
    if pattern is None:
        return None
    if pattern.type == IDENTIFIER:
        return pattern
    if pattern.type == ASSIGNMENT_PATTERN and pattern.left.type == IDENTIFIER:
        return pattern.left
    return None


def property_key_name(prop: Node) -> Optional[str]:
    # statically known key of a destructured property; None for spreads and computed keys.
    if prop.type != OBJECT_PROPERTY or prop.get("computed"):
        return None
    return export_name(prop.key)


def collect_candidates(program: Node, source: str) -> ImportCandidates:
    root = Collection.from_node(program)
    candidates = ImportCandidates(
        source=source,
        imports=root.find(IMPORT_DECLARATION, {"source": {"value": source}}),
    )
    for statement in program.body:
        if statement.type != VARIABLE_DECLARATION:
            continue
        for declarator in statement.declarations:
            init = declarator.init
            if init is None:
                continue
            if is_require_call(init, source):
                candidates.requires.append(declarator)
            elif is_default_require(init, source) and declarator.id.type == IDENTIFIER:
                candidates.default_requires.append(declarator)
    log.debug(
        "collected_import_candidates",
        source=source,
        imports=candidates.imports.size(),
        requires=len(candidates.requires),
        default_requires=len(candidates.default_requires),
    )
    return candidates


def _named_specifiers(imports: Collection, name: str, kind: str) -> Collection:
    return imports.find(IMPORT_SPECIFIER).filter(
        lambda p: export_name(p.node.imported) == name and get_import_kind(p) == kind
    )


def _first_require_identifier(requires: List[Node]) -> Optional[Node]:
    for declarator in requires:
        if declarator.id.type == IDENTIFIER:
            return declarator.id
    return None


def _find_destructured(requires: List[Node], name: str) -> Optional[Node]:
    for declarator in requires:
        if declarator.id.type != OBJECT_PATTERN:
            continue
        for prop in declarator.id.properties:
            if property_key_name(prop) != name:
                continue
            local = binding_identifier(prop.value)
            if local is not None:
                return local
    return None


def _member_of(base: Node, name: str, property_node: Optional[Node] = None) -> Node:
    prop = property_node
    if prop is None:
        prop = builders.identifier(name) if is_identifier_name(name) else builders.string_literal(name)
    return builders.member_expression(base, prop, computed=prop.type != IDENTIFIER)


def find_import(
    candidates: ImportCandidates,
    name: str,
    kind: str,
    property_node: Optional[Node] = None,
) -> Optional[Node]:
    """Finds the binding for export ``name`` of ``kind`` among ``candidates``.

    ``property_node`` is used as the property when a member expression has
    to be synthesized (e.g. the string key of ``{'a-b': x}``).
    """
    imports = candidates.imports
    if name == DEFAULT:
        matches = imports.find(IMPORT_DEFAULT_SPECIFIER).filter(lambda p: get_import_kind(p) == kind)
        if matches.size():
            return matches.nodes()[0].local
        matches = _named_specifiers(imports, DEFAULT, kind)
        if matches.size():
            return matches.nodes()[0].local
        if candidates.default_requires:
            return candidates.default_requires[-1].id
        found = _first_require_identifier(candidates.requires)
        if found is not None:
            return found
        # const {default: x} = require(m)
        return _find_destructured(candidates.requires, DEFAULT)

    matches = _named_specifiers(imports, name, kind)
    if matches.size():
        return matches.nodes()[0].local
    found = _find_destructured(candidates.requires, name)
    if found is not None:
        return found
    module_binding = _first_require_identifier(candidates.requires)
    if module_binding is not None:
        return _member_of(module_binding, name, property_node)
    namespaces = imports.find(IMPORT_NAMESPACE_SPECIFIER)
    if namespaces.size():
        return _member_of(namespaces.nodes()[0].local, name, property_node)
    return None


def _record(result: Dict[str, Node], alias: str, binding: Optional[Node], source: str) -> None:
    if binding is None:
        log.debug("specifier_unresolved", alias=alias, source=source)
        return
    log.debug("specifier_resolved", alias=alias, source=source, binding=binding.type)
    result[alias] = binding


def _resolve_import_declaration(program: Node, statement: Node) -> Dict[str, Node]:
    source = statement.source.value
    statement_kind = statement.get("import_kind") or VALUE
    candidates = collect_candidates(program, source)

    result: Dict[str, Node] = {}
    for specifier in statement.specifiers:
        alias = specifier.local.name
        if specifier.type == IMPORT_NAMESPACE_SPECIFIER:
            namespaces = candidates.imports.find(IMPORT_NAMESPACE_SPECIFIER)
            _record(result, alias, namespaces.nodes()[0].local if namespaces.size() else None, source)
            continue
        if specifier.type == IMPORT_DEFAULT_SPECIFIER:
            name = DEFAULT
        else:
            name = export_name(specifier.imported)
        kind = specifier.get("import_kind") or statement_kind
        _record(result, alias, find_import(candidates, name, kind), source)
    return result


def _resolve_require_declarator(program: Node, declarator: Node) -> Dict[str, Node]:
    init = declarator.init
    if not is_require_call(init):
        raise InvalidRequireError("statement must be an import or require")
    args = init.arguments
    if not args or args[0].type != STRING_LITERAL:
        raise InvalidRequireError("require() must be called with a string literal module name")
    source = args[0].value
    candidates = collect_candidates(program, source)

    result: Dict[str, Node] = {}
    pattern = declarator.id
    if pattern.type == OBJECT_PATTERN:
        for prop in pattern.properties:
            key = property_key_name(prop)
            local = binding_identifier(prop.value) if prop.type == OBJECT_PROPERTY else None
            if key is None or local is None:
                continue
            _record(result, local.name, find_import(candidates, key, VALUE, prop.key), source)
    elif pattern.type == IDENTIFIER:
        _record(result, pattern.name, _first_require_identifier(candidates.requires), source)
    return result


def _program_node(root: Union[Node, Collection]) -> Node:
    if isinstance(root, Node) and root.type == PROGRAM:
        return root
    collection = root if isinstance(root, Collection) else Collection.from_node(root)
    programs = collection.find(PROGRAM).nodes()
    if not programs:
        raise FindImportsError("no Program node to search")
    return programs[0]


def resolve(root: Union[Node, Collection], desired: Desired) -> Dict[str, Node]:
    """Maps every alias in ``desired`` to the binding ``root`` already has for it.

    ``desired`` is a statement node or a sequence of them; sequences are
    resolved in order, later statements overwriting earlier aliases.
    """
    program = _program_node(root)
    if isinstance(desired, (list, tuple)):
        result: Dict[str, Node] = {}
        for statement in desired:
            result.update(resolve(program, statement))
        return result

    if desired.type == IMPORT_DECLARATION:
        return _resolve_import_declaration(program, desired)
    if desired.type == VARIABLE_DECLARATION:
        result = {}
        for declarator in desired.declarations:
            result.update(_resolve_require_declarator(program, declarator))
        return result
    raise UnsupportedStatementError(f"invalid statement type: {desired.type}")


def resolve_names(root: Union[Node, Collection], desired: Desired) -> Dict[str, str]:
    """Like :func:`resolve`, with each binding rendered as source text."""
    return {alias: to_source(binding) for alias, binding in resolve(root, desired).items()}
