#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from lic_context import RunContext
from lic_diagnostics import Diagnostic
from lic_handlers import FormatHandler
from lic_headers import LicenseState
from lic_logger import log_error, log_info, log_stage, log_warning
from lic_registry import FormatRegistry, extension_of

UTF8_BOM = "\ufeff"


@dataclass
class RunSummary:
    """
    Outcome of a check or add run over a list of files.

    Counters are per file; diagnostics hold per-file failures (unreadable or
    unwritable files), which never abort the batch.
    """
    present: int = 0
    external: int = 0
    missing: int = 0
    added: int = 0
    unchanged: int = 0
    skipped: int = 0
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.diagnostics)

    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.diagnostics)


class LicenseDriver:
    """
    Per-file processing loop shared by the check and add commands.

    Holds the read-only state of a run: the license text, the format
    registry, the base directory used to display paths, and the run context.
    Files are processed sequentially, in the order given.
    """

    def __init__(
        self,
        license_text: str,
        registry: FormatRegistry | None = None,
        base_dir: Path | None = None,
        context: RunContext | None = None,
    ):
        self.license_text = license_text
        self.registry = registry or FormatRegistry.default()
        self.base_dir = base_dir or Path.cwd()
        self.context = context or RunContext.default()

    # --- Public API ---

    def check_files(self, paths: Iterable[Path]) -> RunSummary:
        """Classify every file; nothing is written."""
        paths = list(paths)
        log_stage(self.context, "Checking", f"{len(paths)} file(s)")
        summary = RunSummary()

        for path in paths:
            handler = self._handler_for(path, summary)
            if handler is None:
                continue
            loaded = self._read(path, summary)
            if loaded is None:
                continue
            _, text = loaded

            state = handler.check_license(text, self.license_text)
            shown = self.display_path(path)
            if state is LicenseState.PRESENT:
                summary.present += 1
                log_info(self.context, f"Present: {shown}")
            elif state is LicenseState.EXTERNAL:
                summary.external += 1
                log_info(self.context, f"External: {shown}")
            else:
                summary.missing += 1
                log_warning(self.context, f"Missing: {shown}")

        log_info(self.context, f"Skipped: {summary.skipped}")
        log_info(self.context, f"Missing: {summary.missing}")
        self._log_failures(summary)
        return summary

    def add_files(self, paths: Iterable[Path], dry_run: bool = False) -> RunSummary:
        """Add the header to every file missing one. With dry_run, report but do not write."""
        paths = list(paths)
        log_stage(self.context, "Adding", f"{len(paths)} file(s)")
        summary = RunSummary()

        for path in paths:
            handler = self._handler_for(path, summary)
            if handler is None:
                continue
            loaded = self._read(path, summary)
            if loaded is None:
                continue
            bom, text = loaded

            updated, changed = handler.add_license(text, self.license_text)
            shown = self.display_path(path)
            if not changed:
                summary.unchanged += 1
                log_info(self.context, f"Unchanged: {shown}")
                continue
            if not dry_run and not self._write(path, bom + updated, summary):
                continue
            summary.added += 1
            log_info(self.context, f"{'Would add' if dry_run else 'Added'}: {shown}")

        log_info(self.context, f"Skipped: {summary.skipped}")
        log_info(self.context, f"Added: {summary.added}")
        self._log_failures(summary)
        return summary

    def display_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.base_dir).as_posix()
        except ValueError:
            return path.as_posix()

    # --- Internals ---

    def _handler_for(self, path: Path, summary: RunSummary) -> Optional[FormatHandler]:
        handler = self.registry.lookup(extension_of(path.name))
        if handler is None:
            summary.skipped += 1
            log_warning(self.context, f"Skipping unsupported file type: {self.display_path(path)}")
        return handler

    def _read(self, path: Path, summary: RunSummary) -> Optional[Tuple[str, str]]:
        """Return (bom, text) with any UTF-8 BOM split off, or None on failure."""
        try:
            # newline="" keeps line endings as they are on disk
            with path.open("r", encoding="utf-8", newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            self._fail(summary, "LIC-0040", f"cannot read file: {e}", path)
            return None
        if text.startswith(UTF8_BOM):
            return UTF8_BOM, text[len(UTF8_BOM):]
        return "", text

    def _write(self, path: Path, text: str, summary: RunSummary) -> bool:
        try:
            with path.open("w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as e:
            self._fail(summary, "LIC-0041", f"cannot write file: {e}", path)
            return False
        return True

    def _fail(self, summary: RunSummary, code: str, message: str, path: Path) -> None:
        diag = Diagnostic(kind="error", code=code, message=message, filename=self.display_path(path))
        summary.diagnostics.append(diag)
        log_error(self.context, diag.format())

    def _log_failures(self, summary: RunSummary) -> None:
        if summary.failed:
            log_info(self.context, f"Failed: {summary.failed}")
