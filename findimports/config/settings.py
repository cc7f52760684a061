from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional
import structlog

log = structlog.get_logger(__name__)

class Language(Enum):
    # tree-sitter grammar used to parse both the searched source and the desired statements.
    AUTO = "auto"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    JAVASCRIPT = "javascript"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Optional["Language"]:
        if not s:
            return None
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_language_string", input_string=s)
            return None

class OutputFormat(Enum):
    # defines how the alias -> binding mapping is printed.
    JSON = "json"
    TEXT = "text"
    TABLE = "table"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Optional["OutputFormat"]:
        if not s:
            return None
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_output_format_string", input_string=s)
            return None

DEFAULT_LANGUAGE = Language.AUTO
DEFAULT_OUTPUT_FORMAT = OutputFormat.JSON

@dataclass
class FinderConfig:
    # holds all configuration parameters for a single run.
    source_path: Optional[Path] = None
    source_text: Optional[str] = None
    statements: List[str] = field(default_factory=list)
    statement_files: List[Path] = field(default_factory=list)
    language: Language = DEFAULT_LANGUAGE
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT
    output_file: Optional[Path] = None

    # internal state, not set directly by user flags.
    base_dir: Path = field(init=False)

    def __post_init__(self):
        self.base_dir = Path.cwd().resolve()
        # relative statement files are taken from the working directory.
        self.statement_files = [Path(p) if Path(p).is_absolute() else self.base_dir / p for p in self.statement_files]
