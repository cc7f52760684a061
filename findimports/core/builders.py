# findimports/core/builders.py
"""Construction helpers for synthesized nodes and hand-built program trees."""
from typing import List, Optional, Sequence

from findimports.core.nodes import (
    ASSIGNMENT_PATTERN,
    CALL_EXPRESSION,
    IDENTIFIER,
    IMPORT_DECLARATION,
    IMPORT_DEFAULT_SPECIFIER,
    IMPORT_NAMESPACE_SPECIFIER,
    IMPORT_SPECIFIER,
    MEMBER_EXPRESSION,
    NUMERIC_LITERAL,
    OBJECT_PATTERN,
    OBJECT_PROPERTY,
    PROGRAM,
    STRING_LITERAL,
    VARIABLE_DECLARATION,
    VARIABLE_DECLARATOR,
    Node,
)


def identifier(name: str) -> Node:
    return Node(IDENTIFIER, {"name": name})

def string_literal(value: str) -> Node:
    return Node(STRING_LITERAL, {"value": value})

def numeric_literal(raw: str) -> Node:
    return Node(NUMERIC_LITERAL, {"raw": raw})

def member_expression(obj: Node, prop: Node, computed: bool = False) -> Node:
    """Builds ``obj.prop``, or ``obj[prop]`` when ``computed`` is set."""
    return Node(MEMBER_EXPRESSION, {"object": obj, "property": prop, "computed": computed})

def call_expression(callee: Node, arguments: Sequence[Node]) -> Node:
    return Node(CALL_EXPRESSION, {"callee": callee, "arguments": list(arguments)})

def require_call(source: str) -> Node:
    return call_expression(identifier("require"), [string_literal(source)])

def import_declaration(specifiers: Sequence[Node], source: Node, import_kind: Optional[str] = None) -> Node:
    return Node(IMPORT_DECLARATION, {"specifiers": list(specifiers), "source": source, "import_kind": import_kind})

def import_specifier(imported: Node, local: Optional[Node] = None, import_kind: Optional[str] = None) -> Node:
    if local is None:
        local = identifier(imported.name)
    return Node(IMPORT_SPECIFIER, {"imported": imported, "local": local, "import_kind": import_kind})

def import_default_specifier(local: Node) -> Node:
    return Node(IMPORT_DEFAULT_SPECIFIER, {"local": local})

def import_namespace_specifier(local: Node) -> Node:
    return Node(IMPORT_NAMESPACE_SPECIFIER, {"local": local})

def variable_declaration(kind: str, declarations: Sequence[Node]) -> Node:
    return Node(VARIABLE_DECLARATION, {"kind": kind, "declarations": list(declarations)})

def variable_declarator(id_: Node, init: Optional[Node] = None) -> Node:
    return Node(VARIABLE_DECLARATOR, {"id": id_, "init": init})

def object_pattern(properties: Sequence[Node]) -> Node:
    return Node(OBJECT_PATTERN, {"properties": list(properties)})

def object_property(key: Node, value: Node, computed: bool = False, shorthand: bool = False) -> Node:
    return Node(OBJECT_PROPERTY, {"key": key, "value": value, "computed": computed, "shorthand": shorthand})

def assignment_pattern(left: Node, right: Optional[Node] = None) -> Node:
    return Node(ASSIGNMENT_PATTERN, {"left": left, "right": right})

def program(body: List[Node]) -> Node:
    return Node(PROGRAM, {"body": list(body)})
