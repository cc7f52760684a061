# findimports/core/pipeline.py
from typing import Dict, List

import structlog

from findimports.config.settings import FinderConfig, Language
from findimports.core import template
from findimports.core.nodes import Node
from findimports.core.output import format_bindings
from findimports.core.resolver import resolve
from findimports.exceptions import ConfigError
from findimports.structured_processing.language_parsers import javascript_parser
from findimports.util import get_language_hint, strip_utf8_bom

log = structlog.get_logger(__name__)


class ImportFinder:
    # reads one source file, parses the desired statements and resolves them against it.
    def __init__(self, config: FinderConfig):
        self.config: FinderConfig = config
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")
        self.bindings: Dict[str, Node] = {}

    def _language(self) -> str:
        if self.config.language != Language.AUTO:
            return self.config.language.value
        suffix = self.config.source_path.suffix if self.config.source_path else None
        return get_language_hint(suffix)

    def _read_source(self) -> bytes:
        if self.config.source_text is not None:
            data = self.config.source_text.encode("utf-8")
        elif self.config.source_path is not None:
            try:
                data = self.config.source_path.read_bytes()
            except OSError as e:
                raise ConfigError(f"cannot read source file '{self.config.source_path}': {e}")
        else:
            raise ConfigError("no source file given")
        return strip_utf8_bom(data)

    def _desired_statements(self, lang: str) -> List[Node]:
        desired: List[Node] = []
        for code in self.config.statements:
            desired.extend(template.statements(code, lang))
        for path in self.config.statement_files:
            try:
                code = strip_utf8_bom(path.read_bytes()).decode("utf-8", errors="replace")
            except OSError as e:
                raise ConfigError(f"cannot read statements file '{path}': {e}")
            desired.extend(template.statements(code, lang))
        if not desired:
            raise ConfigError("no desired statements given; use --statement or --statements-file")
        return desired

    def run(self) -> Dict[str, Node]:
        lang = self._language()
        self.log.info("resolving_imports", source=str(self.config.source_path or "<stdin>"), lang=lang)
        program = javascript_parser.parse_program(self._read_source(), lang)
        desired = self._desired_statements(lang)
        self.bindings = resolve(program, desired)
        self.log.info("imports_resolved", desired_statements=len(desired), found=len(self.bindings))
        return self.bindings

    def render(self) -> str:
        return format_bindings(self.bindings, self.config.output_format)
