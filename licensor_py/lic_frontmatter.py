"""
Frontmatter-aware header placement.

Some document formats (MDX, Astro) may open with a metadata block fenced by
'---' lines that another tool reads before the document body:

    ---
    title: Hello
    ---

    {/*
    SPDX-License-Identifier: MIT
    Copyright: 2026 Acme
    */}
    body...

For these formats the header is detected and inserted right after the second
fence instead of at the start of the file. With fewer than two fences the
file is treated as having no frontmatter and the header goes at line 0.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from typing import List, Tuple

from lic_headers import (
    EXTERNAL_SCAN_LINES,
    CommentFamily,
    LicenseState,
    first_line,
    has_external_marker,
    render_header,
)

FRONTMATTER_FENCE = "---"


def split_lines(text: str) -> List[str]:
    """
    Split on '\\n' keeping every piece, including a trailing empty one, so that
    joining with '\\n' gives back the text (minus any '\\r' line endings).
    """
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def frontmatter_insert_index(lines: List[str]) -> int:
    """
    Return the line index where the header belongs.

    One past the second line whose trimmed content starts with '---', or 0
    when there are fewer than two such lines.
    """
    markers = [idx for idx, line in enumerate(lines) if line.strip().startswith(FRONTMATTER_FENCE)]
    if len(markers) >= 2:
        return markers[1] + 1
    return 0


def skip_blank_lines(lines: List[str], start_at: int) -> int:
    idx = start_at
    while idx < len(lines) and not lines[idx].strip():
        idx += 1
    return idx


def check_after_frontmatter(family: CommentFamily, file_dump: str, license_text: str) -> LicenseState:
    lines = split_lines(file_dump)
    insert_at = frontmatter_insert_index(lines)
    content_at = skip_blank_lines(lines, insert_at)

    expected_first = first_line(render_header(family, license_text))
    actual_first = lines[content_at] if content_at < len(lines) else ""
    if actual_first == expected_first:
        return LicenseState.PRESENT
    # The scan window is relative to the insertion point, after blank lines.
    if has_external_marker(lines[content_at:content_at + EXTERNAL_SCAN_LINES]):
        return LicenseState.EXTERNAL
    return LicenseState.MISSING


def insert_after_frontmatter(file_dump: str, rendered: str) -> str:
    """
    Splice a rendered header into the file after its frontmatter.

    The blank run at the insertion point is replaced by a single separator
    line (only when real frontmatter was found) followed by the header, so
    repeated runs never accumulate blank lines.
    """
    lines = split_lines(file_dump)
    insert_at = frontmatter_insert_index(lines)
    blank_end = skip_blank_lines(lines, insert_at)
    header_lines = split_lines(rendered[:-1] if rendered.endswith("\n") else rendered)
    separator = [""] if insert_at > 0 else []
    lines[insert_at:blank_end] = separator + header_lines
    return "\n".join(lines)


def add_after_frontmatter(family: CommentFamily, file_dump: str, license_text: str) -> Tuple[str, bool]:
    if check_after_frontmatter(family, file_dump, license_text) is not LicenseState.MISSING:
        return file_dump, False
    return insert_after_frontmatter(file_dump, render_header(family, license_text)), True
