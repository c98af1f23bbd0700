"""
Ignore Rules - gitignore-style exclusion matching

Compiled once into an immutable ExclusionRuleSet; extend() returns a new set.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Tuple

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE = ".gitignore"

# Version-control metadata and dependency cache, excluded at any depth
PERMANENT_PATTERNS = (".git/", "node_modules/")

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")
_TRAILING_SPACE = re.compile(r"(?<!\\)[ \t]+$")


@dataclass(frozen=True)
class ExclusionRule:
    """One compiled ignore pattern scoped to ``base`` (root-relative, POSIX)."""

    pattern: str
    negated: bool
    directory_only: bool
    base: str
    regex: Pattern

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        if self.base:
            prefix = self.base + "/"
            if not relative_path.startswith(prefix):
                return False
            relative_path = relative_path[len(prefix):]

        candidate = relative_path + "/" if is_dir else relative_path
        return self.regex.match(candidate) is not None


def _translate_segment(segment: str) -> str:
    """Translate one path segment of a glob into a regex fragment."""
    out: List[str] = []
    i, n = 0, len(segment)
    while i < n:
        c = segment[i]
        i += 1
        if c == "\\" and i < n:
            out.append(re.escape(segment[i]))
            i += 1
        elif c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            j = i
            if j < n and segment[j] in "!^":
                j += 1
            if j < n and segment[j] == "]":
                j += 1
            while j < n and segment[j] != "]":
                j += 1
            if j >= n:
                out.append("\\[")
                continue
            body = segment[i:j].replace("\\", "\\\\")
            if body[0] in "!^":
                body = "^" + body[1:]
            out.append("[" + body + "]")
            i = j + 1
        else:
            out.append(re.escape(c))
    return "".join(out)


def _translate(body: str) -> str:
    """Translate a gitignore pattern body (no trailing slash) to a regex."""
    anchored = "/" in body
    body = body.lstrip("/")

    parts = body.split("/")
    out: List[str] = []
    for i, part in enumerate(parts):
        last = i == len(parts) - 1
        if part == "**":
            # A trailing ** never matches the directory itself
            out.append(".+" if last else "(?:.*/)?")
            continue
        out.append(_translate_segment(part))
        if not last:
            out.append("/")

    return ("" if anchored else "(?:.*/)?") + "".join(out)


def compile_rule(pattern: str, base: str = "", ignore_case: bool = True) -> Optional[ExclusionRule]:
    """
    Compile a single ignore-file line into a rule.

    Args:
        pattern: The raw pattern, possibly prefixed with ``!``
        base: Root-relative directory the pattern is scoped to
        ignore_case: Match case-insensitively

    Returns:
        The compiled rule, or None for blank lines and comments
    """
    raw = _TRAILING_SPACE.sub("", pattern)
    if not raw or raw.startswith("#"):
        return None

    negated = raw.startswith("!")
    body = raw[1:] if negated else raw
    if body.startswith(("\\#", "\\!")):
        body = body[1:]

    directory_only = body.endswith("/")
    body = body.rstrip("/")
    if not body:
        return None

    suffix = "/.*" if directory_only else "(?:/.*)?"
    flags = re.IGNORECASE if ignore_case else 0
    regex = re.compile("^" + _translate(body) + suffix + "$", flags | re.DOTALL)

    return ExclusionRule(
        pattern=raw,
        negated=negated,
        directory_only=directory_only,
        base=base.strip("/"),
        regex=regex,
    )


def parse_ignore_lines(text: str) -> List[str]:
    """
    Split ignore-file content into patterns.

    Comment and blank lines are dropped and a single leading separator is
    stripped, so root-anchored patterns become relative ones.
    """
    patterns: List[str] = []
    for line in _LINE_SPLIT.split(text):
        line = _TRAILING_SPACE.sub("", line)
        if not line or line.startswith("#"):
            continue

        negated = line.startswith("!")
        body = line[1:] if negated else line
        if body.startswith("/"):
            body = body[1:]
        if not body:
            continue

        patterns.append(("!" if negated else "") + body)
    return patterns


def read_ignore_file(path: str) -> List[str]:
    """Read patterns from an ignore file; a missing file yields no patterns."""
    if not os.path.isfile(path):
        return []

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        patterns = parse_ignore_lines(f.read())

    logger.debug("Loaded %d ignore patterns from %s", len(patterns), path)
    return patterns


@dataclass(frozen=True)
class ExclusionRuleSet:
    """Ordered, immutable collection of exclusion rules."""

    rules: Tuple[ExclusionRule, ...] = ()
    ignore_case: bool = True

    @classmethod
    def with_defaults(cls, ignore_case: bool = True) -> "ExclusionRuleSet":
        """Rule set holding only the permanent exclusions."""
        return cls(ignore_case=ignore_case).extend(PERMANENT_PATTERNS)

    def extend(self, patterns: Iterable[str], base: str = "") -> "ExclusionRuleSet":
        """Return a new set with ``patterns`` appended, scoped to ``base``."""
        compiled = [compile_rule(p, base, self.ignore_case) for p in patterns]
        added = tuple(rule for rule in compiled if rule is not None)
        if not added:
            return self
        return ExclusionRuleSet(rules=self.rules + added, ignore_case=self.ignore_case)

    def is_excluded(self, relative_path: str, is_dir: bool = False) -> bool:
        """
        Check a root-relative POSIX path against the rules.

        The last matching rule decides, so a later negation re-includes a
        path excluded by an earlier pattern.
        """
        path = relative_path.replace("\\", "/").strip("/")
        excluded = False
        for rule in self.rules:
            if rule.matches(path, is_dir):
                excluded = not rule.negated
        return excluded

    def __len__(self) -> int:
        return len(self.rules)
