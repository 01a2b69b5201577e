#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path
from textwrap import dedent

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from lic_config import LicenseConfig, SingleYear, to_license_text


MIT_ACME_TEXT = "SPDX-License-Identifier: MIT\nCopyright: 2026 Acme"


@pytest.fixture
def license_text() -> str:
    return MIT_ACME_TEXT


@pytest.fixture
def acme_config() -> LicenseConfig:
    return LicenseConfig(holder="Acme", spdx_id="MIT", years=SingleYear(2024))


@pytest.fixture
def acme_text(acme_config: LicenseConfig) -> str:
    return to_license_text(acme_config)


@pytest.fixture
def write_file(tmp_path: Path):
    """Write a file below tmp_path, creating parent directories.

    Usage:
        def test_something(write_file):
            path = write_file("src/a.py", "print(1)\\n")
    """

    def _write(relpath: str, content: str) -> Path:
        file_path = tmp_path / relpath
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content.encode("utf-8"))
        return file_path

    return _write


@pytest.fixture
def write_config(tmp_path: Path):
    def _write(content: str, name: str = "licensor-config.yaml") -> Path:
        file_path = tmp_path / name
        file_path.write_text(dedent(content), encoding="utf-8")
        return file_path

    return _write


def read_file(path: Path) -> str:
    return path.read_bytes().decode("utf-8")
