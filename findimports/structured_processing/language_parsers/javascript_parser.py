from typing import List, Optional, Union
import structlog

from findimports.core.nodes import (
    ARRAY_PATTERN, ASSIGNMENT_PATTERN, CALL_EXPRESSION, IDENTIFIER, IMPORT_DECLARATION,
    IMPORT_DEFAULT_SPECIFIER, IMPORT_NAMESPACE_SPECIFIER, IMPORT_SPECIFIER, MEMBER_EXPRESSION,
    NUMERIC_LITERAL, OBJECT_PATTERN, OBJECT_PROPERTY, OPTIONAL_MEMBER_EXPRESSION, PROGRAM,
    REST_ELEMENT, STRING_LITERAL, VARIABLE_DECLARATION, VARIABLE_DECLARATOR, Node,
)
from findimports.exceptions import ParseError
from findimports.structured_processing import ast_utils as ts

log = structlog.get_logger(__name__)
DEFAULT_LANG = "typescript"

# anonymous tokens that qualify an import statement or a single specifier.
_KIND_TOKENS = ("type", "typeof")

def _camel_tag(ts_type: str) -> str:
    # tag for syntax the resolver never inspects: `expression_statement` -> `ExpressionStatement`.
    return "".join(part.capitalize() for part in ts_type.split("_"))


class _TreeConverter:
    """Converts a tree-sitter javascript/typescript tree into tagged nodes."""

    def __init__(self, content_bytes: bytes, lang: str):
        self.content = content_bytes
        self.lang = lang

    def _text(self, ts_node: ts.Node) -> str:
        return ts.get_node_text(ts_node, self.content)

    def _is(self, ts_node: Optional[ts.Node], type_key: str) -> bool:
        return ts.is_node_type(ts_node, self.lang, type_key)

    def _children(self, ts_node: Optional[ts.Node]) -> List[ts.Node]:
        return ts.named_children_without_comments(ts_node, self.lang)

    def _node(self, tag: str, ts_node: ts.Node, **fields) -> Node:
        return Node(tag, fields, ts_node.start_byte, ts_node.end_byte)

    def _generic(self, ts_node: ts.Node) -> Node:
        return self._node(_camel_tag(ts_node.type), ts_node)

    def _identifier(self, ts_node: ts.Node) -> Node:
        return self._node(IDENTIFIER, ts_node, name=self._text(ts_node))

    def _string(self, ts_node: ts.Node) -> Node:
        raw = self._text(ts_node)
        value = raw[1:-1] if len(raw) >= 2 and raw[0] in "'\"" else raw
        return self._node(STRING_LITERAL, ts_node, value=value, raw=raw)

    def _import_kind(self, ts_node: ts.Node) -> Optional[str]:
        for child in ts_node.children:
            if not child.is_named and child.type in _KIND_TOKENS:
                return child.type
        return None

    def program(self, root: ts.Node) -> Node:
        return self._node(PROGRAM, root, body=[self.statement(c) for c in self._children(root)])

    def statement(self, ts_node: ts.Node) -> Node:
        if self._is(ts_node, "import_statement"):
            if ts.find_child_by_type(ts_node, self.lang, "import_require_clause"):
                # `import x = require('y')`
                return self._node("TSImportEqualsDeclaration", ts_node)
            return self.import_declaration(ts_node)
        if self._is(ts_node, "lexical_declaration") or self._is(ts_node, "variable_declaration"):
            return self.variable_declaration(ts_node)
        return self._generic(ts_node)

    def import_declaration(self, ts_node: ts.Node) -> Node:
        source_ts = ts.find_child_by_field(ts_node, "source") or ts.find_child_by_type(ts_node, self.lang, "string")
        source = self._string(source_ts) if source_ts else self._node(STRING_LITERAL, ts_node, value="", raw="")

        specifiers: List[Node] = []
        clause = ts.find_child_by_type(ts_node, self.lang, "import_clause")
        for child in self._children(clause):
            if self._is(child, "identifier"):
                specifiers.append(self._node(IMPORT_DEFAULT_SPECIFIER, child, local=self._identifier(child)))
            elif self._is(child, "namespace_import"):
                local_ts = ts.find_child_by_type(child, self.lang, "identifier")
                if local_ts:
                    specifiers.append(self._node(IMPORT_NAMESPACE_SPECIFIER, child, local=self._identifier(local_ts)))
            elif self._is(child, "named_imports"):
                for spec in self._children(child):
                    if self._is(spec, "import_specifier"):
                        specifiers.append(self.import_specifier(spec))

        return self._node(
            IMPORT_DECLARATION, ts_node,
            specifiers=specifiers, source=source, import_kind=self._import_kind(ts_node),
        )

    def import_specifier(self, ts_node: ts.Node) -> Node:
        name_ts = ts.find_child_by_field(ts_node, "name")
        alias_ts = ts.find_child_by_field(ts_node, "alias")
        if name_ts is None:
            named = self._children(ts_node)
            name_ts = named[0] if named else ts_node

        if self._is(name_ts, "string"):
            imported = self._string(name_ts)
            imported_name = imported.value
        else:
            # `default` in `{default as X}` may come through as a keyword token; its text is all we need.
            imported_name = self._text(name_ts)
            imported = self._node(IDENTIFIER, name_ts, name=imported_name)

        if alias_ts is not None:
            local = self._identifier(alias_ts)
        else:
            local = self._node(IDENTIFIER, name_ts, name=imported_name)
        return self._node(
            IMPORT_SPECIFIER, ts_node,
            imported=imported, local=local, import_kind=self._import_kind(ts_node),
        )

    def variable_declaration(self, ts_node: ts.Node) -> Node:
        kind = ts_node.children[0].type if ts_node.children else "var"
        declarations = [
            self.variable_declarator(c) for c in self._children(ts_node) if self._is(c, "variable_declarator")
        ]
        return self._node(VARIABLE_DECLARATION, ts_node, kind=kind, declarations=declarations)

    def variable_declarator(self, ts_node: ts.Node) -> Node:
        name_ts = ts.find_child_by_field(ts_node, "name")
        value_ts = ts.find_child_by_field(ts_node, "value")
        return self._node(
            VARIABLE_DECLARATOR, ts_node,
            id=self.pattern(name_ts) if name_ts else self._generic(ts_node),
            init=self.expression(value_ts) if value_ts else None,
        )

    def expression(self, ts_node: ts.Node) -> Node:
        if self._is(ts_node, "identifier"):
            return self._identifier(ts_node)
        if self._is(ts_node, "string"):
            return self._string(ts_node)
        if self._is(ts_node, "number"):
            return self._node(NUMERIC_LITERAL, ts_node, raw=self._text(ts_node))
        if self._is(ts_node, "parenthesized_expression"):
            inner = self._children(ts_node)
            return self.expression(inner[0]) if inner else self._generic(ts_node)
        if self._is(ts_node, "call_expression"):
            return self.call_expression(ts_node)
        if self._is(ts_node, "member_expression") or self._is(ts_node, "subscript_expression"):
            return self.member_expression(ts_node)
        return self._generic(ts_node)

    def call_expression(self, ts_node: ts.Node) -> Node:
        callee_ts = ts.find_child_by_field(ts_node, "function")
        args_ts = ts.find_child_by_field(ts_node, "arguments")
        if callee_ts is None or not self._is(args_ts, "arguments"):
            # tagged templates: require`x`
            return self._node("TaggedTemplateExpression", ts_node)
        return self._node(
            CALL_EXPRESSION, ts_node,
            callee=self.expression(callee_ts),
            arguments=[self.expression(a) for a in self._children(args_ts)],
        )

    def member_expression(self, ts_node: ts.Node) -> Node:
        optional = any(self._is(c, "optional_chain") for c in ts_node.children)
        tag = OPTIONAL_MEMBER_EXPRESSION if optional else MEMBER_EXPRESSION
        object_ts = ts.find_child_by_field(ts_node, "object")
        obj = self.expression(object_ts) if object_ts else self._generic(ts_node)
        if self._is(ts_node, "subscript_expression"):
            index_ts = ts.find_child_by_field(ts_node, "index")
            prop = self.expression(index_ts) if index_ts else self._generic(ts_node)
            return self._node(tag, ts_node, object=obj, property=prop, computed=True)
        prop_ts = ts.find_child_by_field(ts_node, "property")
        prop = self._identifier(prop_ts) if prop_ts else self._generic(ts_node)
        return self._node(tag, ts_node, object=obj, property=prop, computed=False)

    def pattern(self, ts_node: ts.Node) -> Node:
        if self._is(ts_node, "identifier"):
            return self._identifier(ts_node)
        if self._is(ts_node, "object_pattern"):
            return self._node(
                OBJECT_PATTERN, ts_node,
                properties=[self.object_pattern_property(c) for c in self._children(ts_node)],
            )
        if self._is(ts_node, "array_pattern"):
            return self._node(ARRAY_PATTERN, ts_node, elements=[self.pattern(c) for c in self._children(ts_node)])
        if self._is(ts_node, "assignment_pattern"):
            left_ts = ts.find_child_by_field(ts_node, "left")
            right_ts = ts.find_child_by_field(ts_node, "right")
            return self._node(
                ASSIGNMENT_PATTERN, ts_node,
                left=self.pattern(left_ts) if left_ts else self._generic(ts_node),
                right=self.expression(right_ts) if right_ts else None,
            )
        if self._is(ts_node, "rest_pattern"):
            inner = self._children(ts_node)
            return self._node(REST_ELEMENT, ts_node, argument=self.pattern(inner[0]) if inner else None)
        return self._generic(ts_node)

    def object_pattern_property(self, ts_node: ts.Node) -> Node:
        if self._is(ts_node, "shorthand_property_identifier_pattern"):
            return self._node(
                OBJECT_PROPERTY, ts_node,
                key=self._identifier(ts_node), value=self._identifier(ts_node),
                computed=False, shorthand=True,
            )
        if self._is(ts_node, "pair_pattern"):
            key_ts = ts.find_child_by_field(ts_node, "key")
            value_ts = ts.find_child_by_field(ts_node, "value")
            computed = self._is(key_ts, "computed_property_name")
            return self._node(
                OBJECT_PROPERTY, ts_node,
                key=self.property_key(key_ts) if key_ts else self._generic(ts_node),
                value=self.pattern(value_ts) if value_ts else self._generic(ts_node),
                computed=computed, shorthand=False,
            )
        if self._is(ts_node, "object_assignment_pattern"):
            # `{foo = 1}`
            left_ts = ts.find_child_by_field(ts_node, "left")
            right_ts = ts.find_child_by_field(ts_node, "right")
            if self._is(left_ts, "shorthand_property_identifier_pattern"):
                default = self._node(
                    ASSIGNMENT_PATTERN, ts_node,
                    left=self._identifier(left_ts),
                    right=self.expression(right_ts) if right_ts else None,
                )
                return self._node(
                    OBJECT_PROPERTY, ts_node,
                    key=self._identifier(left_ts), value=default, computed=False, shorthand=True,
                )
            return self._generic(ts_node)
        if self._is(ts_node, "rest_pattern"):
            return self.pattern(ts_node)
        return self._generic(ts_node)

    def property_key(self, ts_node: ts.Node) -> Node:
        if self._is(ts_node, "string"):
            return self._string(ts_node)
        if self._is(ts_node, "number"):
            return self._node(NUMERIC_LITERAL, ts_node, raw=self._text(ts_node))
        if self._is(ts_node, "computed_property_name"):
            inner = self._children(ts_node)
            return self.expression(inner[0]) if inner else self._generic(ts_node)
        return self._identifier(ts_node)


def parse_program(content: Union[str, bytes], lang: str = DEFAULT_LANG) -> Node:
    # parses javascript/typescript source into a tagged Program node.
    content_bytes = content.encode("utf-8") if isinstance(content, str) else content
    ast = ts.parse_code_to_ast(content_bytes, lang)
    if ast is None:
        raise ParseError(f"could not parse source as {lang}")
    if ast.has_error:
        # keep whatever tree-sitter recovered.
        log.warning("source_contains_syntax_errors", lang=lang)
    program = _TreeConverter(content_bytes, lang).program(ast)
    log.debug("parsed_program", lang=lang, statements=len(program.body))
    return program
