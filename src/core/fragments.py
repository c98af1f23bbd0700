"""
Fragments - symbol listings, symbol contents and ranged file reads

Nothing is cached; every call re-reads from disk.
"""

import errno
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .file_index import list_files
from .ignore_rules import DEFAULT_IGNORE_FILE
from .languages import is_supported_source
from .symbols import SymbolRecord, extract_function_by_name, extract_symbols, parse_file

logger = logging.getLogger(__name__)

ELISION_MARKER = "// ..."
MIN_LINES = 2

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def minimize(body: str) -> str:
    """
    Shrink a code fragment to its first and last line.

    This is a lossy display heuristic: everything between the first and the
    last line is replaced by ELISION_MARKER, whatever it contains. Text of at
    most two lines is returned unchanged.
    """
    lines = _LINE_BREAK.split(body)
    if len(lines) <= MIN_LINES:
        return body
    return "\n".join((lines[0], ELISION_MARKER, lines[-1]))


@dataclass(frozen=True)
class FunctionContent:
    minimal: str
    full: str

    @classmethod
    def from_text(cls, full: str) -> "FunctionContent":
        return cls(minimal=minimize(full), full=full)


@dataclass(frozen=True)
class FileSymbols:
    file_name: str
    symbols: List[SymbolRecord]

    def to_dict(self) -> Dict[str, Any]:
        return {"file_name": self.file_name, "symbols": [s.to_dict() for s in self.symbols]}


@dataclass(frozen=True)
class SymbolContent:
    file_name: str
    name: str
    content: FunctionContent
    start_offset: int
    end_offset: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_name": self.file_name,
            "name": self.name,
            "minimal": self.content.minimal,
            "full": self.content.full,
            "start_offset": self.start_offset,
            "end_offset": self.end_offset,
        }


@dataclass(frozen=True)
class FileSlice:
    file_name: str
    content: str
    start_byte: int
    end_byte: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_name": self.file_name,
            "content": self.content,
            "start_byte": self.start_byte,
            "end_byte": self.end_byte,
        }


def list_symbols(
    root: str,
    file_filter: Optional[str] = None,
    ignore_file_name: str = DEFAULT_IGNORE_FILE,
    ignore_case: bool = True,
) -> List[FileSymbols]:
    """
    List the symbols of every eligible TypeScript file under ``root``.

    Args:
        root: Project root directory
        file_filter: Optional root-relative file; restricts output to that file
        ignore_file_name: Name of the per-directory ignore file
        ignore_case: Match ignore patterns case-insensitively

    Raises:
        SyntaxError: an eligible file cannot be parsed
    """
    results: List[FileSymbols] = []
    for file_path in list_files(root, file_filter, ignore_file_name, ignore_case):
        if not is_supported_source(file_path):
            continue
        _, tree = parse_file(file_path)
        results.append(FileSymbols(file_name=file_path, symbols=extract_symbols(tree)))

    logger.debug("Extracted symbols from %d files under %s", len(results), root)
    return results


def get_symbol_content(file_name: str, name: str) -> Optional[SymbolContent]:
    """
    Fetch one symbol's source from a file.

    Returns None when no indexed symbol has that name; parse failures raise
    SyntaxError instead.
    """
    source, tree = parse_file(file_name)
    byte_range = extract_function_by_name(tree, name)
    if byte_range is None:
        return None

    full = source[byte_range.start:byte_range.end].decode("utf-8", errors="replace")
    return SymbolContent(
        file_name=file_name,
        name=name,
        content=FunctionContent.from_text(full),
        start_offset=byte_range.start,
        end_offset=byte_range.end,
    )


def read_file_slice(file_name: str, start_byte: Optional[int] = None, end_byte: Optional[int] = None) -> FileSlice:
    """Read ``[start_byte, end_byte)`` of a file; bounds default to the whole file."""
    with open(file_name, "rb") as f:
        data = f.read()

    start = 0 if start_byte is None else start_byte
    end = len(data) if end_byte is None else end_byte
    if start < 0 or end < 0:
        raise ValueError("Byte offsets must be non-negative")
    if start > end:
        raise ValueError(f"start_byte ({start}) is past end_byte ({end})")
    start, end = min(start, len(data)), min(end, len(data))

    return FileSlice(
        file_name=file_name,
        content=data[start:end].decode("utf-8", errors="replace"),
        start_byte=start,
        end_byte=end,
    )


def create_file(file_name: str, content: str, allow_overwrite: bool = False) -> str:
    """
    Write a new file, creating parent directories.

    Raises:
        ValueError: content is empty
        FileExistsError: the file exists and overwriting is not allowed
    """
    if not content:
        raise ValueError("Missing file content")

    parent = os.path.dirname(file_name)
    if parent:
        os.makedirs(parent, exist_ok=True)
    if os.path.isdir(file_name):
        raise IsADirectoryError(errno.EISDIR, "Path is a directory", file_name)

    with open(file_name, "w" if allow_overwrite else "x", encoding="utf-8") as f:
        f.write(content)

    logger.info("Created file %s", file_name)
    return file_name
