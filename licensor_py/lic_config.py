"""
Licensing configuration and the canonical license text.

A run is configured by a small YAML document:

    holder: Acme Corp        # required
    spdx: MIT                # optional, "All rights reserved" when absent
    year: [2020, 2026]       # optional, a year or a two-element range

The parsed LicenseConfig is turned once per run into the plain license text
(no comment syntax) that every format handler renders.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import datetime
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml

DEFAULT_CONFIG_NAME = "licensor-config.yaml"


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""

    def __init__(self, message: str, *, not_found: bool = False):
        super().__init__(message)
        self.message = message
        self.not_found = not_found


@dataclass(frozen=True)
class SingleYear:
    year: int


@dataclass(frozen=True)
class YearRange:
    # start/end are passed through as configured, no ordering check
    start: int
    end: int


YearSpec = Union[SingleYear, YearRange]


@dataclass(frozen=True)
class LicenseConfig:
    """
    Parsed licensing configuration.

    - holder: copyright holder, non-empty and trimmed
    - spdx_id: SPDX identifier, if provided
    - years: copyright year or year range
    """
    holder: str
    spdx_id: Optional[str]
    years: YearSpec


def format_years(years: YearSpec) -> str:
    if isinstance(years, YearRange):
        return f"{years.start}-{years.end}"
    return str(years.year)


def to_license_text(config: LicenseConfig) -> str:
    """
    Build the plain-text license content from config values.

    The first line is the SPDX line (or "All rights reserved"), the second
    the copyright line. No trailing newline.
    """
    if config.spdx_id is not None:
        spdx_line = f"SPDX-License-Identifier: {config.spdx_id}"
    else:
        spdx_line = "All rights reserved"
    return f"{spdx_line}\nCopyright: {format_years(config.years)} {config.holder}"


def _is_int(value: Any) -> bool:
    # YAML booleans load as bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_years(value: Any, current_year: Optional[int]) -> YearSpec:
    if value is None:
        return SingleYear(current_year if current_year is not None else datetime.date.today().year)
    if _is_int(value):
        return SingleYear(value)
    if isinstance(value, list):
        if len(value) != 2:
            raise ConfigError("Expected 'year' array with exactly two numbers")
        start, end = value
        if not (_is_int(start) and _is_int(end)):
            raise ConfigError("Expected 'year' array with two numbers")
        return YearRange(start, end)
    raise ConfigError("Expected 'year' to be a number or an array of two numbers")


def parse_config(yaml_text: str, *, current_year: Optional[int] = None) -> LicenseConfig:
    """
    Parse YAML text into a LicenseConfig.

    Args:
        yaml_text:      YAML document content.
        current_year:   Year used when 'year' is absent (default: today's year).

    Raises ConfigError on any invalid input.
    """
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML: {e}") from e

    if data is None:
        raise ConfigError("Config file is empty")
    if not isinstance(data, dict):
        raise ConfigError(f"Expected YAML mapping at top level, got: {type(data).__name__}")

    holder = data.get("holder")
    if not isinstance(holder, str) or not holder.strip():
        raise ConfigError("Missing or empty 'holder' in config")

    spdx = data.get("spdx")
    spdx_id = spdx.strip() if isinstance(spdx, str) and spdx.strip() else None

    years = _parse_years(data.get("year"), current_year)
    return LicenseConfig(holder=holder.strip(), spdx_id=spdx_id, years=years)


def resolve_config_path(path: str | Path, base_dir: Path) -> Path:
    p = Path(path)
    return p if p.is_absolute() else base_dir / p


def load_config(path: str | Path, base_dir: Path, *, current_year: Optional[int] = None) -> LicenseConfig:
    """
    Load and parse a YAML config file.

    Relative paths are resolved against base_dir. Raises ConfigError when the
    file is missing, unreadable or invalid.
    """
    config_path = resolve_config_path(path, base_dir)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {path}", not_found=True)
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    return parse_config(text, current_year=current_year)
