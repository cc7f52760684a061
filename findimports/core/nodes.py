# findimports/core/nodes.py
"""
Tagged node model for parsed JavaScript/TypeScript programs.

Every node carries a discriminating ``type`` tag (Babel-style names) plus a
tag-specific set of fields. Matching code switches on the tag; there is no
class per node kind. Nodes compare by identity, so a binding returned by the
resolver is a reference into the tree it was found in.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

PROGRAM = "Program"
IMPORT_DECLARATION = "ImportDeclaration"
IMPORT_SPECIFIER = "ImportSpecifier"
IMPORT_DEFAULT_SPECIFIER = "ImportDefaultSpecifier"
IMPORT_NAMESPACE_SPECIFIER = "ImportNamespaceSpecifier"
VARIABLE_DECLARATION = "VariableDeclaration"
VARIABLE_DECLARATOR = "VariableDeclarator"
CALL_EXPRESSION = "CallExpression"
MEMBER_EXPRESSION = "MemberExpression"
OPTIONAL_MEMBER_EXPRESSION = "OptionalMemberExpression"
IDENTIFIER = "Identifier"
STRING_LITERAL = "StringLiteral"
NUMERIC_LITERAL = "NumericLiteral"
OBJECT_PATTERN = "ObjectPattern"
OBJECT_PROPERTY = "ObjectProperty"
REST_ELEMENT = "RestElement"
ASSIGNMENT_PATTERN = "AssignmentPattern"
ARRAY_PATTERN = "ArrayPattern"

# binding kinds
VALUE = "value"
TYPE = "type"
TYPEOF = "typeof"
BINDING_KINDS = (VALUE, TYPE, TYPEOF)


@dataclass(eq=False, repr=False)
class Node:
    """A single syntax node: a tag plus its fields."""
    type: str
    fields: Dict[str, Any] = field(default_factory=dict)
    start_byte: Optional[int] = None
    end_byte: Optional[int] = None

    def __getattr__(self, name: str) -> Any:
        # only reached when normal attribute lookup fails
        if name.startswith("__"):
            raise AttributeError(name)
        try:
            return self.__dict__["fields"][name]
        except KeyError:
            raise AttributeError(f"{self.__dict__.get('type', 'Node')} node has no field '{name}'") from None

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def iter_children(self) -> Iterator[Tuple[str, "Node"]]:
        for field_name, value in self.fields.items():
            if isinstance(value, Node):
                yield field_name, value
            elif isinstance(value, (list, tuple)):
                for item in value:
                    if isinstance(item, Node):
                        yield field_name, item

    def __repr__(self) -> str:
        parts = []
        for key, value in self.fields.items():
            if isinstance(value, (list, tuple)):
                parts.append(f"{key}=[{', '.join(repr(v) for v in value)}]")
            else:
                parts.append(f"{key}={value!r}")
        return f"{self.type}({', '.join(parts)})"


def export_name(node: Optional[Node]) -> Optional[str]:
    # the name an import specifier or object key refers to: `foo` in `{foo as bar}` or `{'foo': bar}`.
    if node is None:
        return None
    if node.type == IDENTIFIER:
        return node.name
    if node.type == STRING_LITERAL:
        return node.value
    if node.type == NUMERIC_LITERAL:
        return node.raw
    return None
