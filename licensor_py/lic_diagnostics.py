#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from typing import Optional


DIAGNOSTIC_CODE_FAMILIES = {
    # Run-level: reported once, abort before any file is touched.
    "RUN": [
        "LIC-0010",  # no input files matched
        "LIC-0011",  # invalid glob pattern
        "LIC-0020",  # config file not found
        "LIC-0021",  # invalid configuration
        "LIC-0030",  # duplicate extension claims
    ],
    # Per-file: reported for one file, the batch continues.
    "FILE": [
        "LIC-0040",  # cannot read input file
        "LIC-0041",  # cannot write input file
    ],
}


@dataclass
class Diagnostic:
    kind: str  # "error" or "warning"
    code: str
    message: str
    filename: Optional[str] = None  # display path, relative to the base directory

    # Return the one-line form, e.g. "src/a.py: error: [LIC-0040] cannot read ..."
    def format(self) -> str:
        loc = f"{self.filename}: " if self.filename is not None else ""
        return f"{loc}{self.kind}: [{self.code}] {self.message}"
