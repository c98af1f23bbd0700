"""
File Index - ignore-aware project walker

Depth-first, name-ordered; nested ignore rules stay in their own subtree.
"""

import errno
import logging
import os
import stat
from pathlib import PurePosixPath, PurePath
from typing import List, Optional, Tuple

from .ignore_rules import DEFAULT_IGNORE_FILE, ExclusionRuleSet, read_ignore_file

logger = logging.getLogger(__name__)


def _sub_path_parts(root: str, sub_path: Optional[str]) -> Tuple[str, ...]:
    """Split ``sub_path`` into root-relative components."""
    if not sub_path:
        return ()

    path = PurePath(sub_path)
    if path.is_absolute():
        try:
            path = path.relative_to(os.path.abspath(root))
        except ValueError:
            raise ValueError(f"Path is outside the project root: {sub_path}") from None

    parts = tuple(p for p in PurePosixPath(path.as_posix()).parts if p not in ("", "."))
    if ".." in parts:
        raise ValueError(f"Path is outside the project root: {sub_path}")
    return parts


def _entry_is_file(entry: os.DirEntry, st: os.stat_result) -> bool:
    """Regular files, and symlinks that resolve to regular files."""
    if stat.S_ISREG(st.st_mode):
        return True
    if not stat.S_ISLNK(st.st_mode):
        return False
    try:
        return stat.S_ISREG(os.stat(entry.path).st_mode)
    except FileNotFoundError:
        logger.debug("Skipping dangling symlink %s", entry.path)
        return False


def _walk(
    root: str,
    relative_dir: str,
    rules: ExclusionRuleSet,
    ignore_file_name: str,
    target: Tuple[str, ...],
    files: List[str],
) -> None:
    directory = os.path.join(root, relative_dir) if relative_dir else root
    rules = rules.extend(
        read_ignore_file(os.path.join(directory, ignore_file_name)), base=relative_dir
    )

    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        if target and entry.name != target[0]:
            continue

        relative_path = f"{relative_dir}/{entry.name}" if relative_dir else entry.name
        st = entry.stat(follow_symlinks=False)
        is_dir = stat.S_ISDIR(st.st_mode)

        if rules.is_excluded(relative_path, is_dir):
            logger.debug("Excluded %s%s", relative_path, "/" if is_dir else "")
            continue

        if is_dir:
            _walk(root, relative_path, rules, ignore_file_name, target[1:], files)
        elif len(target) <= 1 and _entry_is_file(entry, st):
            files.append(os.path.join(root, relative_path))


def list_files(
    root: str,
    sub_path: Optional[str] = None,
    ignore_file_name: str = DEFAULT_IGNORE_FILE,
    ignore_case: bool = True,
) -> List[str]:
    """
    List every eligible file under ``root``.

    Args:
        root: Project root directory
        sub_path: Optional root-relative directory or file to restrict the walk to
        ignore_file_name: Name of the per-directory ignore file
        ignore_case: Match ignore patterns case-insensitively

    Returns:
        Root-joined file paths in traversal order

    Raises:
        FileNotFoundError: root or sub_path does not exist
        NotADirectoryError: root is not a directory
        PermissionError: a directory or entry cannot be read
    """
    root = os.fspath(root)
    if not os.path.exists(root):
        raise FileNotFoundError(errno.ENOENT, "Project root does not exist", root)
    if not os.path.isdir(root):
        raise NotADirectoryError(errno.ENOTDIR, "Project root is not a directory", root)

    target = _sub_path_parts(root, sub_path)
    if target and not os.path.lexists(os.path.join(root, *target)):
        raise FileNotFoundError(errno.ENOENT, "Path does not exist", os.path.join(root, *target))

    files: List[str] = []
    _walk(root, "", ExclusionRuleSet.with_defaults(ignore_case), ignore_file_name, target, files)

    logger.debug("Listed %d files under %s", len(files), root)
    return files
