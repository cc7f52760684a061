# findimports/core/printer.py
"""Renders resolved binding nodes back to source text."""
import json

from findimports.core.nodes import (
    IDENTIFIER,
    MEMBER_EXPRESSION,
    NUMERIC_LITERAL,
    OPTIONAL_MEMBER_EXPRESSION,
    STRING_LITERAL,
    Node,
)
from findimports.exceptions import OutputError


def _quote(value: str) -> str:
    # single-quoted js string literal.
    body = json.dumps(value, ensure_ascii=False)[1:-1].replace("\\\"", "\"").replace("'", "\\'")
    return f"'{body}'"


def to_source(node: Node) -> str:
    if node.type == IDENTIFIER:
        return node.name
    if node.type == STRING_LITERAL:
        return _quote(node.value)
    if node.type == NUMERIC_LITERAL:
        return node.raw
    if node.type in (MEMBER_EXPRESSION, OPTIONAL_MEMBER_EXPRESSION):
        base = to_source(node.object)
        dot = "?." if node.type == OPTIONAL_MEMBER_EXPRESSION else "."
        if node.computed:
            bracket = "?.[" if node.type == OPTIONAL_MEMBER_EXPRESSION else "["
            return f"{base}{bracket}{to_source(node.property)}]"
        return f"{base}{dot}{to_source(node.property)}"
    raise OutputError(f"cannot render {node.type} node as source")
