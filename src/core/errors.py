"""
Errors - indexer and extractor exceptions

Builtin OSError/SyntaxError types cover the rest.
"""

from typing import Any


class NotIndexedError(LookupError):
    """Raised when a requested symbol is not among a file's indexed symbols."""

    def __init__(self, file_name: str, name: str):
        super().__init__(f"Function not found: {name} in {file_name}")
        self.file_name = file_name
        self.name = name


def source_syntax_error(file_name: str, source: bytes, node: Any) -> SyntaxError:
    """Build a SyntaxError pointing at a tree-sitter error node."""
    row, column = node.start_point
    lines = source.split(b"\n")
    text = lines[row].rstrip(b"\r").decode("utf-8", errors="replace") if row < len(lines) else ""
    kind = f"missing {node.type}" if node.is_missing else "unexpected syntax"
    return SyntaxError(f"Cannot parse {file_name}: {kind}", (file_name, row + 1, column + 1, text))
