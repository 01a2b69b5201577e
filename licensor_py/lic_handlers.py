#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

from lic_frontmatter import add_after_frontmatter, check_after_frontmatter
from lic_headers import (
    COLON_COLON,
    CSS_BLOCK,
    HASHTAG,
    HTML_BLOCK,
    JSX_BLOCK,
    SLASH_SLASH,
    CommentFamily,
    FrontmatterBlockFamily,
    LicenseState,
    add_start_of_file,
    check_start_of_file,
)


@dataclass(frozen=True)
class FormatHandler:
    """
    Rendering, detection and insertion behavior for a set of extensions.

    - name: handler identity, used in registry conflict messages
    - extensions: lowercase extensions without the leading dot
    - family: comment family driving check and add
    """
    name: str
    extensions: FrozenSet[str]
    family: CommentFamily

    def check_license(self, file_dump: str, license_text: str) -> LicenseState:
        if isinstance(self.family, FrontmatterBlockFamily):
            return check_after_frontmatter(self.family, file_dump, license_text)
        return check_start_of_file(self.family, file_dump, license_text)

    def add_license(self, file_dump: str, license_text: str) -> Tuple[str, bool]:
        """Return (new contents, changed). Present and External files are never touched."""
        if isinstance(self.family, FrontmatterBlockFamily):
            return add_after_frontmatter(self.family, file_dump, license_text)
        return add_start_of_file(self.family, file_dump, license_text)


def make_handler(name: str, family: CommentFamily, *extensions: str) -> FormatHandler:
    return FormatHandler(name=name, extensions=frozenset(extensions), family=family)


HASHTAG_HANDLER = make_handler(
    "hashtag", HASHTAG,
    "py", "sh", "bash", "zsh", "rb", "pl", "ps1", "psm1", "psd1",
    "yml", "yaml", "toml", "ini", "cfg", "conf",
)

SLASH_SLASH_HANDLER = make_handler(
    "slash-slash", SLASH_SLASH,
    "js", "jsx", "ts", "tsx", "java", "scala", "kt", "kts", "rs", "go",
    "c", "cpp", "cc", "cxx", "h", "hpp", "cs", "swift", "dart", "php",
)

ASTRO_HANDLER = make_handler("astro", JSX_BLOCK, "astro")

MDX_HANDLER = make_handler("mdx", JSX_BLOCK, "mdx")

HTML_HANDLER = make_handler(
    "html", HTML_BLOCK,
    "html", "htm", "xhtml", "xml", "svg", "svelte", "md", "vue",
    "hbs", "handlebars", "mustache",
)

CSS_HANDLER = make_handler("css", CSS_BLOCK, "css", "scss", "sass", "less")

CMD_HANDLER = make_handler("cmd", COLON_COLON, "cmd", "bat")


def builtin_handlers() -> List[FormatHandler]:
    return [
        HASHTAG_HANDLER,
        SLASH_SLASH_HANDLER,
        ASTRO_HANDLER,
        MDX_HANDLER,
        HTML_HANDLER,
        CSS_HANDLER,
        CMD_HANDLER,
    ]
