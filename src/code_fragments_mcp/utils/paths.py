"""Path helpers shared by the tools."""

import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote


def resolve_file_path(base_path: str, file_path: str) -> str:
    """
    Resolve a request path against the project root.

    Percent-encoded names are decoded. Absolute paths are accepted only when
    they point inside ``base_path``.

    Raises:
        ValueError: the path is empty or escapes the project root
    """
    if not isinstance(file_path, str) or not file_path.strip():
        raise ValueError("File name should be a non-empty string")

    base = Path(base_path).resolve()
    candidate = Path(unquote(file_path))
    resolved = (candidate if candidate.is_absolute() else base / candidate).resolve()

    if resolved != base and base not in resolved.parents:
        raise ValueError(f"Path is outside the project root: {file_path}")
    return str(resolved)


def relative_to_base(base_path: str, file_path: str) -> str:
    """Root-relative POSIX form of a path produced by the indexer."""
    return Path(os.path.relpath(file_path, base_path)).as_posix()


def to_sub_path(base_path: str, file_path: Optional[str]) -> Optional[str]:
    """Root-relative form of an optional request path, or None for the root itself."""
    if not file_path:
        return None
    relative = relative_to_base(str(Path(base_path).resolve()), resolve_file_path(base_path, file_path))
    return None if relative == "." else relative
