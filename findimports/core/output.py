# findimports/core/output.py
"""Formats a resolved alias -> binding mapping and sends it to stdout or a file."""
import io
import json
import sys
from pathlib import Path
from typing import Dict

from rich.console import Console as RichConsole
from rich.table import Table
import structlog

from findimports.config.settings import OutputFormat
from findimports.core.nodes import Node
from findimports.core.printer import to_source
from findimports.exceptions import OutputError

log = structlog.get_logger(__name__)

TABLE_WIDTH = 100


def binding_origin(binding: Node) -> str:
    # synthesized member expressions carry no source position.
    return "existing" if binding.start_byte is not None else "synthesized"


def format_bindings(bindings: Dict[str, Node], output_format: OutputFormat) -> str:
    names = {alias: to_source(binding) for alias, binding in bindings.items()}
    if output_format == OutputFormat.TEXT:
        return "".join(f"{alias} -> {name}\n" for alias, name in names.items())
    if output_format == OutputFormat.TABLE:
        table = Table("alias", "binding", "origin", title=f"{len(names)} binding(s) found")
        for alias, binding in bindings.items():
            table.add_row(alias, names[alias], binding_origin(binding))
        buffer = io.StringIO()
        RichConsole(file=buffer, force_terminal=False, width=TABLE_WIDTH).print(table)
        return buffer.getvalue()
    return json.dumps(names, indent=2) + "\n"


def write_to_stdout(text_content: str):
    try:
        sys.stdout.write(text_content)
        sys.stdout.flush()
    except UnicodeEncodeError as e:
        # terminals without utf-8 still get the bytes.
        log.warning("stdout_encoding_failed_writing_bytes", error=str(e))
        sys.stdout.buffer.write(text_content.encode("utf-8", errors="replace"))
        sys.stdout.buffer.flush()


def write_to_file(output_file_path: Path, text_content: str):
    log.info("writing_bindings_to_file", path=str(output_file_path), chars=len(text_content))
    try:
        output_file_path.write_text(text_content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e
