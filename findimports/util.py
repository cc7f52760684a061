import structlog

log = structlog.get_logger(__name__)
utf8_bom = b"\xef\xbb\xbf"

def strip_utf8_bom(data: bytes) -> bytes:
    # removes the utf-8 byte order mark from byte data if present.
    if data.startswith(utf8_bom):
        return data[len(utf8_bom):]
    return data

def get_language_hint(extension: str | None) -> str:
    # picks the tree-sitter grammar for a file extension. tsx covers jsx and flow-style type imports.
    if not extension:
        return "tsx"
    ext = extension.lower().strip(".")
    ext_map = {
        "ts": "typescript", "mts": "typescript", "cts": "typescript",
        "tsx": "tsx", "js": "tsx", "jsx": "tsx", "mjs": "tsx", "cjs": "tsx", "flow": "tsx",
    }
    grammar = ext_map.get(ext)
    if grammar is None:
        log.debug("unknown_extension_defaulting_grammar", extension=ext, grammar="tsx")
        return "tsx"
    return grammar
