"""
Fragment tools - the operations exposed over MCP.

Each tool resolves request paths against the project root, calls into core
and returns a plain dict. Errors are raised and turned into responses by
handle_mcp_errors.
"""

import errno
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from core import (NotIndexedError, create_file, get_symbol_content, list_files, list_symbols,
                  read_file_slice)

from ..config import get_config
from ..utils import handle_mcp_errors, relative_to_base, resolve_file_path, to_sub_path

logger = logging.getLogger(__name__)

_project_root: Optional[str] = None
_root_lock = threading.Lock()


def get_project_root() -> str:
    """Current project root; defaults to the configured base path."""
    with _root_lock:
        if _project_root is None:
            return str(Path(get_config().base_path).resolve())
        return _project_root


def set_project_root(path: str) -> str:
    global _project_root
    resolved = str(Path(path).resolve())
    if not os.path.exists(resolved):
        raise FileNotFoundError(errno.ENOENT, "Project path does not exist", path)
    if not os.path.isdir(resolved):
        raise NotADirectoryError(errno.ENOTDIR, "Project path is not a directory", path)
    with _root_lock:
        _project_root = resolved
    return resolved


def reset_project_root() -> None:
    """Forget the explicit project root (mainly for testing)."""
    global _project_root
    with _root_lock:
        _project_root = None


def _list_relative(root: str, sub_path: Optional[str] = None) -> List[str]:
    config = get_config()
    files = list_files(root, sub_path, config.ignore_file, config.ignore_case)
    return [relative_to_base(root, f) for f in files]


# ----- Tools -----


@handle_mcp_errors
def tool_set_project_path(path: str) -> Dict[str, Any]:
    """Point the tools at a project directory."""
    root = set_project_root(path)
    logger.info("Project path set to %s", root)
    return {"path": root, "file_count": len(_list_relative(root))}


@handle_mcp_errors
def tool_list_files(sub_path: Optional[str] = None) -> Dict[str, Any]:
    """List eligible files, optionally below one subdirectory."""
    root = get_project_root()
    logger.info("Listing files under %s", sub_path or root)
    files = _list_relative(root, to_sub_path(root, sub_path))
    return {"files": files, "count": len(files)}


@handle_mcp_errors
def tool_get_file_content(
    file_name: str,
    start_byte: Optional[int] = None,
    end_byte: Optional[int] = None,
) -> Dict[str, Any]:
    """Read a byte range of a file; a directory name lists its files instead."""
    root = get_project_root()
    file_path = resolve_file_path(root, file_name)

    if os.path.isdir(file_path):
        logger.info("Listing files in directory %s", file_name)
        files = _list_relative(root, to_sub_path(root, file_name))
        return {"file_name": file_name, "files": files, "count": len(files)}

    logger.info("Reading file content %s", file_name)
    result = read_file_slice(file_path, start_byte, end_byte).to_dict()
    result["file_name"] = file_name
    return result


@handle_mcp_errors
def tool_list_symbols(file_name: Optional[str] = None) -> Dict[str, Any]:
    """List top-level functions of every eligible file, or of one file."""
    root = get_project_root()
    config = get_config()
    logger.info("Listing symbols in %s", file_name or root)

    entries = []
    for file_symbols in list_symbols(root, to_sub_path(root, file_name), config.ignore_file, config.ignore_case):
        entry = file_symbols.to_dict()
        entry["file_name"] = relative_to_base(root, file_symbols.file_name)
        entries.append(entry)
    return {"files": entries, "count": sum(len(e["symbols"]) for e in entries)}


@handle_mcp_errors
def tool_get_symbol_content(file_name: str, name: str) -> Dict[str, Any]:
    """Return the full and minimized source of one function."""
    if not isinstance(name, str) or not name:
        raise ValueError("Function name should be a non-empty string")

    root = get_project_root()
    logger.info("Reading %s to inspect function %s", file_name, name)
    content = get_symbol_content(resolve_file_path(root, file_name), name)
    if content is None:
        raise NotIndexedError(file_name, name)

    result = content.to_dict()
    result["file_name"] = file_name
    return result


@handle_mcp_errors
def tool_create_file(file_name: str, content: str) -> Dict[str, Any]:
    """Create a new file below the project root."""
    root = get_project_root()
    logger.info("Creating a new file named %s", file_name)
    create_file(resolve_file_path(root, file_name), content, get_config().allow_overwrite)
    return {"file_name": file_name, "message": "File created successfully"}
