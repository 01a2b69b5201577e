"""
Input file discovery.

Arguments are either glob patterns (anything containing '*', '?', '[' or '{')
or direct paths. Globs are matched against POSIX paths relative to the base
directory:

    *       any characters within one path segment
    **      any characters across path segments
    ?       exactly one character other than '/'
    [abc]   one character from the set ('[!abc]' negates)
    {a,b}   either alternative

Direct paths name a file, or a directory whose regular files are collected
recursively. Ignore patterns follow the same rules and are subtracted from
the included files.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from lic_context import RunContext
from lic_logger import log_debug

GLOB_CHARS = "*?[{"


class GlobPatternError(ValueError):
    """Raised when a glob pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid glob pattern '{pattern}': {reason}")
        self.pattern = pattern


def is_glob_pattern(pattern: str) -> bool:
    return any(c in GLOB_CHARS for c in pattern)


def normalize_pattern(pattern: str) -> str:
    """Strip a leading './' and use forward slashes."""
    if pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.replace("\\", "/")


def _closing_brace(pattern: str, start: int) -> int:
    """Index of the '}' matching the '{' at start, or -1 when unclosed."""
    depth = 0
    for j in range(start, len(pattern)):
        if pattern[j] == "{":
            depth += 1
        elif pattern[j] == "}":
            depth -= 1
            if depth == 0:
                return j
    return -1


def _char_class(body: str) -> Optional[str]:
    negate = body.startswith("!")
    if negate:
        body = body[1:]
    if not body:
        return None
    escaped = "".join(c if c == "-" else re.escape(c) for c in body)
    return f"[{'^' if negate else ''}{escaped}]"


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """
    Compile a glob pattern into a regex to be used with fullmatch().

    An unclosed '{' or '[' and an empty '[]' or '[!]' match themselves.
    Raises GlobPatternError when the result is still not a valid regex,
    e.g. for a reversed range like '[z-a]'.
    """
    out: List[str] = []
    depth = 0
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                out.append(".*")
                i += 2
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 1)
            cls = _char_class(pattern[i + 1:end]) if end >= 0 else None
            if cls is None:
                out.append(re.escape(c))
            else:
                out.append(cls)
                i = end + 1
                continue
        elif c == "{":
            if _closing_brace(pattern, i) < 0:
                out.append(re.escape(c))
            else:
                out.append("(?:")
                depth += 1
        elif c == "}" and depth > 0:
            out.append(")")
            depth -= 1
        elif c == "," and depth > 0:
            out.append("|")
        else:
            out.append(re.escape(c))
        i += 1
    try:
        return re.compile("".join(out))
    except re.error as e:
        raise GlobPatternError(pattern, str(e)) from e


def _absolute(path: Path) -> Path:
    return Path(os.path.abspath(path))


def _resolve(path: str, base_dir: Path) -> Path:
    p = Path(path)
    return _absolute(p if p.is_absolute() else base_dir / p)


def _walk_files(root: Path) -> List[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


def _is_glob(pattern: str, base_dir: Path) -> bool:
    # an existing path is taken literally even when it holds glob characters
    return is_glob_pattern(pattern) and not _resolve(pattern, base_dir).exists()


def expand_patterns(patterns: Iterable[str], base_dir: Path) -> List[Path]:
    """
    Expand globs and direct paths into the files they name, without duplicates.

    Raises GlobPatternError for a pattern that cannot be compiled.
    """
    base_dir = _absolute(base_dir)
    normalized = [normalize_pattern(p) for p in patterns]
    globs = [p for p in normalized if _is_glob(p, base_dir)]
    direct = [p for p in normalized if not _is_glob(p, base_dir)]

    # dict as an ordered set
    found: Dict[Path, None] = {}
    for p in direct:
        resolved = _resolve(p, base_dir)
        if resolved.is_file():
            found[resolved] = None
        elif resolved.is_dir():
            for f in _walk_files(resolved):
                found[f] = None

    if globs:
        regexes = [glob_to_regex(g) for g in globs]
        for f in _walk_files(base_dir):
            rel = f.relative_to(base_dir).as_posix()
            if any(r.fullmatch(rel) for r in regexes):
                found[f] = None

    return list(found)


def collect_files(
    globs: Iterable[str],
    ignore_globs: Iterable[str],
    base_dir: Path,
    context: Optional[RunContext] = None,
) -> List[Path]:
    """
    Collect input files matching globs and not matching ignore_globs.

    Returns absolute, duplicate-free paths in sorted order.
    """
    context = context or RunContext.default()
    globs = list(globs)
    ignore_globs = list(ignore_globs)
    log_debug(context, f"Base directory: {base_dir}")
    log_debug(context, f"Input globs: {', '.join(globs)}")
    log_debug(context, f"Ignore globs: {', '.join(ignore_globs)}")

    candidates = expand_patterns(globs, base_dir)
    log_debug(context, f"Candidates: {len(candidates)}")
    if not ignore_globs:
        return sorted(candidates)

    ignored = set(expand_patterns(ignore_globs, base_dir))
    result = [p for p in candidates if p not in ignored]
    log_debug(context, f"After ignores: {len(result)}")
    return sorted(result)
