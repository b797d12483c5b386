# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for path normalisation across POSIX, DOS and UNC spellings."""

from __future__ import annotations

import pytest

from flylint.paths import (
    is_absolute,
    is_within,
    matches_any_prefix,
    normalize_identity,
    same_file,
    slash,
    sys_path,
    to_uri,
    uri_scheme,
    uri_to_path,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("a/b", "a/b"),
        ("/a/b", "/a/b"),
        ("\\a\\b.txt", "/a/b.txt"),
        ("c:\\a\\b.txt", "c:/a/b.txt"),
        ("C:a\\b.txt", "a/b.txt"),
        ("C:/a/b.txt", "C:/a/b.txt"),
        ("C:a/b.txt", "a/b.txt"),
        ("\\\\.\\a.txt", "//./a.txt"),
        ("\\\\?\\a.txt", "//?/a.txt"),
        ("\\\\127.0.0.1\\c$\\a.txt", "//127.0.0.1/c$/a.txt"),
        ("\\\\.\\UNC\\LOCALHOST\\c$\\a.txt", "//./UNC/LOCALHOST/c$/a.txt"),
    ],
)
def test_sys_path(raw: str, expected: str) -> None:
    assert sys_path(raw) == expected


def test_slash_leaves_extended_length_and_non_ascii_paths() -> None:
    assert slash("C:\\src\\main.c") == "C:/src/main.c"
    assert slash("\\\\?\\C:\\src\\main.c") == "\\\\?\\C:\\src\\main.c"
    assert slash("C:\\src\\mäin.c") == "C:\\src\\mäin.c"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("/usr/src/main.c", True),
        ("\\src\\main.c", True),
        ("C:\\src\\main.c", True),
        ("C:/src/main.c", True),
        ("C:src\\main.c", False),
        ("src/main.c", False),
    ],
)
def test_is_absolute(raw: str, expected: bool) -> None:
    assert is_absolute(raw) is expected


def test_normalize_identity_resolves_relative_names_against_root() -> None:
    assert normalize_identity("src/../include/app.h", "/work/proj") == "/work/proj/include/app.h"
    assert normalize_identity("./main.c", "/work/proj/") == "/work/proj/main.c"


def test_normalize_identity_handles_dos_and_unc_names() -> None:
    assert normalize_identity("C:\\proj\\src\\..\\main.c", "/ignored") == "C:/proj/main.c"
    assert normalize_identity("stdlib.h", "C:\\proj") == "C:/proj/stdlib.h"
    assert normalize_identity("\\\\server\\share\\a.c", "/ignored") == "//server/share/a.c"


def test_is_within_compares_drive_letters_case_insensitively() -> None:
    assert is_within("c:/proj/src/main.c", "C:/proj")
    assert is_within("/work/proj", "/work/proj")
    assert not is_within("/work/project2/main.c", "/work/proj")
    assert same_file("c:/proj/main.c", "C:/proj/main.c")
    assert not same_file("/proj/Main.c", "/proj/main.c")


def test_matches_any_prefix() -> None:
    prefixes = ("/work/proj/vendor", "/work/proj/build")

    assert matches_any_prefix("/work/proj/vendor/zlib/zlib.h", prefixes)
    assert not matches_any_prefix("/work/proj/src/main.c", prefixes)


def test_uri_round_trip_for_posix_and_drive_paths() -> None:
    posix = to_uri("/work/proj/main file.c")
    drive = to_uri("C:/proj/main.c")

    assert posix == "file:///work/proj/main%20file.c"
    assert drive == "file:///C:/proj/main.c"
    assert uri_to_path(posix) == "/work/proj/main file.c"
    assert uri_to_path(drive) == "C:/proj/main.c"
    assert uri_scheme(drive) == "file"


def test_uri_to_path_rejects_other_schemes() -> None:
    with pytest.raises(ValueError):
        uri_to_path("untitled:Untitled-1")
