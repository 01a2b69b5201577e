#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from lic_handlers import FormatHandler, builtin_handlers


class DuplicateExtensionError(Exception):
    """Raised when more than one handler claims the same extension."""

    def __init__(self, conflicts: Dict[str, List[str]]):
        self.conflicts = conflicts
        lines = "\n".join(
            f"  .{ext}: {', '.join(names)}" for ext, names in sorted(conflicts.items())
        )
        super().__init__(f"Multiple handlers registered for the same extensions:\n{lines}")


def extension_of(filename: str) -> str:
    """
    Lowercase extension of a file name, without the dot.

    Empty when the name has no dot or ends with one.
    """
    dot = filename.rfind(".")
    if dot < 0 or dot == len(filename) - 1:
        return ""
    return filename[dot + 1:].lower()


class FormatRegistry:
    """
    Maps file extensions to format handlers.

    Built once per run; construction fails with DuplicateExtensionError when
    two handlers claim the same extension, listing every conflict.
    """

    def __init__(self, handlers: Iterable[FormatHandler]):
        self.handlers: List[FormatHandler] = list(handlers)
        self._by_extension: Dict[str, FormatHandler] = {}
        claims: Dict[str, List[str]] = {}

        for handler in self.handlers:
            for ext in handler.extensions:
                claims.setdefault(ext, []).append(handler.name)
                self._by_extension.setdefault(ext, handler)

        conflicts = {ext: sorted(set(names)) for ext, names in claims.items() if len(names) > 1}
        if conflicts:
            raise DuplicateExtensionError(conflicts)

    @staticmethod
    def default() -> 'FormatRegistry':
        return FormatRegistry(builtin_handlers())

    def lookup(self, extension: str) -> Optional[FormatHandler]:
        return self._by_extension.get(extension.lstrip(".").lower())

    def supported_extensions(self) -> Set[str]:
        return set(self._by_extension.keys())
