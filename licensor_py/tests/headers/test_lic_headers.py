#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from lic_headers import (
    COLON_COLON,
    CSS_BLOCK,
    HASHTAG,
    HTML_BLOCK,
    JSX_BLOCK,
    SLASH_SLASH,
    LicenseState,
    add_start_of_file,
    check_start_of_file,
    render_header,
    text_lines,
)


# -------------------------
# text_lines
# -------------------------


def test_text_lines_drops_final_newline_and_carriage_returns():
    assert text_lines("a\r\nb\n") == ["a", "b"]
    assert text_lines("a\n\nb") == ["a", "", "b"]
    assert text_lines("") == []


# -------------------------
# Rendering
# -------------------------


def test_hashtag_blank_line_is_bare_marker():
    assert render_header(HASHTAG, "first\n\nthird") == "# first\n#\n# third\n"


def test_whitespace_only_line_is_bare_marker():
    assert render_header(SLASH_SLASH, "a\n   \nb") == "// a\n//\n// b\n"


@pytest.mark.parametrize(
    "family, expected",
    [
        (HASHTAG, "# SPDX-License-Identifier: MIT\n# Copyright: 2026 Acme\n"),
        (SLASH_SLASH, "// SPDX-License-Identifier: MIT\n// Copyright: 2026 Acme\n"),
        (COLON_COLON, ":: SPDX-License-Identifier: MIT\n:: Copyright: 2026 Acme\n"),
        (HTML_BLOCK, "<!--\nSPDX-License-Identifier: MIT\nCopyright: 2026 Acme\n-->\n"),
        (CSS_BLOCK, "/*\nSPDX-License-Identifier: MIT\nCopyright: 2026 Acme\n*/\n"),
        (JSX_BLOCK, "{/*\nSPDX-License-Identifier: MIT\nCopyright: 2026 Acme\n*/}\n"),
    ],
)
def test_render_families(family, expected, license_text):
    assert render_header(family, license_text) == expected


def test_render_is_stable(license_text):
    assert render_header(CSS_BLOCK, license_text) == render_header(CSS_BLOCK, license_text)


# -------------------------
# Start-of-file detection
# -------------------------


def test_check_missing_on_plain_file(license_text):
    assert check_start_of_file(HASHTAG, "print(1)\n", license_text) is LicenseState.MISSING


def test_check_present_compares_first_line_only(license_text):
    dump = "# SPDX-License-Identifier: MIT\n# something else\nprint(1)\n"

    assert check_start_of_file(HASHTAG, dump, license_text) is LicenseState.PRESENT


def test_check_external_marker_within_three_lines(license_text):
    dump = "#!/usr/bin/env python\n# vim: set ft=python\n# Copyright (c) 2019 Other\n"

    assert check_start_of_file(HASHTAG, dump, license_text) is LicenseState.EXTERNAL


def test_check_external_spdx_with_different_id(license_text):
    dump = "# SPDX-License-Identifier: GPL-3.0-only\nprint(1)\n"

    assert check_start_of_file(HASHTAG, dump, license_text) is LicenseState.EXTERNAL


def test_check_marker_beyond_scan_window_is_missing(license_text):
    dump = "a = 1\nb = 2\nc = 3\n# Copyright 2019 Other\n"

    assert check_start_of_file(HASHTAG, dump, license_text) is LicenseState.MISSING


def test_check_crlf_first_line_is_present(license_text):
    dump = "// SPDX-License-Identifier: MIT\r\n// Copyright: 2026 Acme\r\nint x;\r\n"

    assert check_start_of_file(SLASH_SLASH, dump, license_text) is LicenseState.PRESENT


def test_check_follows_license_text_changes():
    dump = render_header(HASHTAG, "SPDX-License-Identifier: MIT\nCopyright: 2026 Acme")

    other = "All rights reserved\nCopyright: 2026 Acme"
    assert check_start_of_file(HASHTAG, dump, other) is LicenseState.EXTERNAL


# -------------------------
# Start-of-file insertion
# -------------------------


def test_add_prepends_without_separator(license_text):
    updated, changed = add_start_of_file(HASHTAG, "print(1)\n", license_text)

    assert changed
    assert updated == "# SPDX-License-Identifier: MIT\n# Copyright: 2026 Acme\nprint(1)\n"


def test_add_to_empty_file(license_text):
    updated, changed = add_start_of_file(CSS_BLOCK, "", license_text)

    assert changed
    assert updated == render_header(CSS_BLOCK, license_text)


def test_add_is_idempotent(license_text):
    once, changed_once = add_start_of_file(SLASH_SLASH, "int main() {}\n", license_text)
    twice, changed_twice = add_start_of_file(SLASH_SLASH, once, license_text)

    assert changed_once
    assert not changed_twice
    assert twice == once
    assert check_start_of_file(SLASH_SLASH, once, license_text) is LicenseState.PRESENT


def test_add_leaves_external_header_untouched(license_text):
    dump = "/* Copyright 2001 Someone Else */\nbody {}\n"

    assert check_start_of_file(CSS_BLOCK, dump, license_text) is LicenseState.EXTERNAL
    assert add_start_of_file(CSS_BLOCK, dump, license_text) == (dump, False)
