#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union


class LicenseState(Enum):
    """Result of checking a file's leading content against the license text."""
    MISSING = "missing"
    PRESENT = "present"
    EXTERNAL = "external"


# Substrings that indicate some other license header is already present.
EXTERNAL_MARKERS = ("Copyright", "SPDX-License-Identifier")
EXTERNAL_SCAN_LINES = 3


# ==========================
# Comment families
# ==========================

@dataclass(frozen=True)
class LinePrefixFamily:
    """Every line prefixed with a comment marker, e.g. '# ' or '// '."""
    prefix: str


@dataclass(frozen=True)
class BlockFamily:
    """A single block comment, e.g. '/*' ... '*/'."""
    open: str
    close: str


@dataclass(frozen=True)
class FrontmatterBlockFamily:
    """A block comment placed after a leading '---' frontmatter block."""
    open: str
    close: str


CommentFamily = Union[LinePrefixFamily, BlockFamily, FrontmatterBlockFamily]

HASHTAG = LinePrefixFamily("#")
SLASH_SLASH = LinePrefixFamily("//")
COLON_COLON = LinePrefixFamily("::")
HTML_BLOCK = BlockFamily("<!--", "-->")
CSS_BLOCK = BlockFamily("/*", "*/")
JSX_BLOCK = FrontmatterBlockFamily("{/*", "*/}")


def text_lines(text: str) -> List[str]:
    """
    Split text into lines on '\\n', dropping a trailing '\\r' from each line.

    A final newline does not produce an empty last line, and empty text has
    no lines at all.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def first_line(text: str) -> str:
    lines = text_lines(text)
    return lines[0] if lines else ""


def render_header(family: CommentFamily, raw: str) -> str:
    """
    Render plain license text as a comment header for one family.

    The result always ends with a newline. Line-prefix families write a bare
    marker for blank lines so no trailing whitespace is introduced.
    """
    lines = text_lines(raw)
    if isinstance(family, LinePrefixFamily):
        rendered = [
            family.prefix if not line.strip() else f"{family.prefix} {line}"
            for line in lines
        ]
        return "\n".join(rendered) + "\n"
    if isinstance(family, (BlockFamily, FrontmatterBlockFamily)):
        body = "\n".join(lines)
        return f"{family.open}\n{body}\n{family.close}\n"
    raise TypeError(f"unknown comment family: {family!r}")


def has_external_marker(lines: List[str]) -> bool:
    stripped = [line.strip() for line in lines]
    return any(marker in line for marker in EXTERNAL_MARKERS for line in stripped)


# ==========================
# Start-of-file policy
# ==========================

def check_start_of_file(family: CommentFamily, file_dump: str, license_text: str) -> LicenseState:
    """
    Classify a file whose header belongs at byte offset 0.

    Only the first line is compared: the renderer is deterministic, so any
    earlier run produced exactly this first line.
    """
    expected_first = first_line(render_header(family, license_text))
    actual_first = first_line(file_dump)
    if actual_first == expected_first:
        return LicenseState.PRESENT
    if has_external_marker(text_lines(file_dump)[:EXTERNAL_SCAN_LINES]):
        return LicenseState.EXTERNAL
    return LicenseState.MISSING


def add_start_of_file(family: CommentFamily, file_dump: str, license_text: str) -> Tuple[str, bool]:
    """Prepend the rendered header when the file is missing one."""
    if check_start_of_file(family, file_dump, license_text) is not LicenseState.MISSING:
        return file_dump, False
    return render_header(family, license_text) + file_dump, True
