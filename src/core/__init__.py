"""
Core - file indexing and symbol extraction

Plain functions over transient data, recomputed from disk on every call.
"""

from .errors import NotIndexedError
from .file_index import list_files
from .fragments import (ELISION_MARKER, FileSlice, FileSymbols, FunctionContent, SymbolContent,
                        create_file, get_symbol_content, list_symbols, minimize, read_file_slice)
from .ignore_rules import ExclusionRule, ExclusionRuleSet
from .symbols import (ByteRange, DeclarationKind, SymbolRecord, extract_function_by_name,
                      extract_symbols, parse_source)

__all__ = [
    "ByteRange",
    "DeclarationKind",
    "ELISION_MARKER",
    "ExclusionRule",
    "ExclusionRuleSet",
    "FileSlice",
    "FileSymbols",
    "FunctionContent",
    "NotIndexedError",
    "SymbolContent",
    "SymbolRecord",
    "create_file",
    "extract_function_by_name",
    "extract_symbols",
    "get_symbol_content",
    "list_files",
    "list_symbols",
    "minimize",
    "parse_source",
    "read_file_slice",
]
