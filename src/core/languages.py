"""
Languages - tree-sitter grammar loading

The Language is cached; get_parser builds a fresh Parser per call.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import tree_sitter
import tree_sitter_typescript

DEFAULT_LANGUAGE = "typescript"

LANGUAGE_MAP = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
}

_GRAMMARS = {
    "typescript": tree_sitter_typescript.language_typescript,
}


@lru_cache(maxsize=None)
def get_language(language: str = DEFAULT_LANGUAGE) -> tree_sitter.Language:
    """Load the tree-sitter Language for ``language``."""
    grammar = _GRAMMARS.get(language)
    if grammar is None:
        raise ValueError(f"Unsupported language: {language}")
    return tree_sitter.Language(grammar())


def get_parser(language: str = DEFAULT_LANGUAGE) -> tree_sitter.Parser:
    return tree_sitter.Parser(get_language(language))


def detect_language(file_path: str) -> Optional[str]:
    """Map a file extension to a supported language, or None."""
    return LANGUAGE_MAP.get(Path(file_path).suffix.lower())


def is_supported_source(file_path: str) -> bool:
    return detect_language(file_path) is not None
