# findimports/structured_processing/ast_utils.py
from tree_sitter import Parser, Language, Node
from tree_sitter_language_pack import get_language
from typing import Dict, Any, Optional
import structlog

log = structlog.get_logger(__name__)

SUPPORTED_LANGUAGES = ("typescript", "tsx", "javascript")

LANG_CONFIG_TS: Dict[str, Dict[str, Any]] = {}
PARSERS_TS: Dict[str, Parser] = {}

# tree-sitter node types the javascript parser adapter cares about, shared by all three grammars.
NODE_TYPES: Dict[str, str] = {
    "program": "program", "comment": "comment",
    "import_statement": "import_statement", "import_clause": "import_clause",
    "named_imports": "named_imports", "namespace_import": "namespace_import",
    "import_specifier": "import_specifier",
    "lexical_declaration": "lexical_declaration", "variable_declaration": "variable_declaration",
    "variable_declarator": "variable_declarator",
    "identifier": "identifier", "property_identifier": "property_identifier",
    "private_property_identifier": "private_property_identifier",
    "string": "string", "number": "number",
    "call_expression": "call_expression", "member_expression": "member_expression",
    "subscript_expression": "subscript_expression", "parenthesized_expression": "parenthesized_expression",
    "optional_chain": "optional_chain",
    "object_pattern": "object_pattern", "pair_pattern": "pair_pattern",
    "shorthand_property_identifier_pattern": "shorthand_property_identifier_pattern",
    "object_assignment_pattern": "object_assignment_pattern", "assignment_pattern": "assignment_pattern",
    "rest_pattern": "rest_pattern", "array_pattern": "array_pattern",
    "computed_property_name": "computed_property_name", "arguments": "arguments",
    "import_require_clause": "import_require_clause",
}

def load_language_configs():
    global LANG_CONFIG_TS
    if LANG_CONFIG_TS:
        return

    log.info("initializing_tree_sitter_language_configurations")

    for lang_name in SUPPORTED_LANGUAGES:
        try:
            lang_obj: Optional[Language] = get_language(lang_name)
            if lang_obj:
                LANG_CONFIG_TS[lang_name] = {
                    "ts_language_object": lang_obj,
                    "node_types": NODE_TYPES,
                }
        except Exception as e:
            log.warning("failed_to_load_language_config", lang=lang_name, error=str(e))

def _ensure_parser_initialized(lang_name: str) -> Optional[Parser]:
    if not LANG_CONFIG_TS:
        load_language_configs()
    if lang_name not in PARSERS_TS:
        if lang_name not in LANG_CONFIG_TS:
            log.error("language_not_configured", lang=lang_name)
            return None
        try:
            parser = Parser()
            parser.language = LANG_CONFIG_TS[lang_name]["ts_language_object"]
            PARSERS_TS[lang_name] = parser
        except Exception as e:
            log.error("parser_initialization_failed", lang=lang_name, error=str(e))
            return None
    return PARSERS_TS.get(lang_name)

def parse_code_to_ast(content_bytes: bytes, language_name: str) -> Optional[Node]:
    parser = _ensure_parser_initialized(language_name)
    if not parser: return None
    try:
        return parser.parse(content_bytes).root_node
    except Exception as e:
        log.error("code_parsing_failed", lang=language_name, error=str(e))
        return None

def get_node_text(node: Optional[Node], content_bytes: bytes) -> str:
    if node:
        return content_bytes[node.start_byte:node.end_byte].decode('utf-8', 'replace')
    return ""

def get_node_type(lang_name: str, type_key: str) -> Optional[str]:
    return LANG_CONFIG_TS.get(lang_name, {}).get("node_types", {}).get(type_key)

def is_node_type(node: Optional[Node], lang_name: str, type_key: str) -> bool:
    if not node: return False
    expected_type = get_node_type(lang_name, type_key)
    return expected_type is not None and node.type == expected_type

def find_child_by_field(node: Optional[Node], field_name: str) -> Optional[Node]:
    return node.child_by_field_name(field_name) if node else None

def find_child_by_type(node: Optional[Node], lang_name: str, type_key: str) -> Optional[Node]:
    if not node: return None
    for child in node.named_children:
        if is_node_type(child, lang_name, type_key):
            return child
    return None

def named_children_without_comments(node: Optional[Node], lang_name: str) -> list:
    if not node: return []
    return [c for c in node.named_children if not is_node_type(c, lang_name, "comment")]
