# findimports/core/template.py
"""
Builds desired-statement nodes from code snippets.

    >>> stmt = statement("import {foo as bar} from 'baz'")
    >>> stmt.type
    'ImportDeclaration'
"""
from typing import List

import structlog

from findimports.core.nodes import Node
from findimports.exceptions import TemplateError
from findimports.structured_processing.language_parsers import javascript_parser

log = structlog.get_logger(__name__)


def statements(code: str, language: str = javascript_parser.DEFAULT_LANG) -> List[Node]:
    """Parses ``code`` and returns every top-level statement it contains."""
    program = javascript_parser.parse_program(code, language)
    return list(program.body)


def statement(code: str, language: str = javascript_parser.DEFAULT_LANG) -> Node:
    """Parses ``code`` as exactly one top-level statement."""
    body = statements(code, language)
    if len(body) != 1:
        log.debug("template_statement_count_mismatch", code=code, count=len(body))
        raise TemplateError(f"expected exactly one statement, found {len(body)} in: {code!r}")
    return body[0]
