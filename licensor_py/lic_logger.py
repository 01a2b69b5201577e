"""Leveled logging to the run context's stream."""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from lic_context import RunContext, LogLevel


def log(context: Optional[RunContext], log_level: LogLevel, message: str) -> None:
    """Print message when the context's level admits log_level."""
    if context is None:
        print(f"No context provided for logging: {message}", file=sys.stderr)
        return
    if context.log_level < log_level:
        return
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        message = f"{timestamp} [{log_level.name}] {message}"
    print(message, file=context.stream or sys.stderr)



def log_error(context: Optional[RunContext], message: str) -> None:
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[RunContext], message: str) -> None:
    """Log a file that needs attention: missing header or unsupported type."""
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[RunContext], message: str) -> None:
    """Log a per-file status line or a summary count."""
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[RunContext], message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[RunContext], stage: str, detail: Optional[str] = None) -> None:
    if detail:
        log(context, LogLevel.DEBUG, f"{stage} ({detail})")
    else:
        log(context, LogLevel.DEBUG, f"{stage}...")
