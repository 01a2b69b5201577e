"""
Run context for cross-cutting licensor options.

This module defines the RunContext dataclass which holds the options that
affect every stage of a run (logging level, log format and the stream that
status lines are written to).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, TextIO


class LogLevel(IntEnum):
    """Hierarchical logging levels for licensor."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (-q)
    INFO = 10       # Per-file status lines and summaries (default)
    DEBUG = 30      # File discovery details (-v)


@dataclass
class RunContext:
    """
    Holds cross-cutting options shared by every stage of a run.

    Attributes:
        log_rich_format:    If True, emit logs in rich format: timestamp and level tag.
        log_level:          Current logging level.
        stream:             Where log lines go; None means the current sys.stderr.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.INFO
    stream: Optional[TextIO] = None

    @staticmethod
    def default() -> 'RunContext':
        """Create a RunContext with default settings."""
        return RunContext(log_level=LogLevel.INFO)
