# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the CppCheck adapter."""

from __future__ import annotations

import pytest

from flylint.config import Settings
from flylint.linters.cppcheck import OUTPUT_TEMPLATE, CppCheck
from flylint.severity import Severity

PREAMBLE = [
    "Defines: CURRENT_DEVICE_VERSION=1;BIG_VERSION=1;PRIu32=\"u\";NETSTACK_CONF_WITH_IPV6=1",
    "Includes: -I/Users/username/contiki_ud_ng/ -I/Users/username/contiki_ud_ng/lib/",
    "Platform:Native",
]


def _cppcheck(settings: Settings | None = None) -> CppCheck:
    return CppCheck(settings or Settings(), "/work")


@pytest.mark.parametrize("file_name", ["main.cc", "main.h"])
def test_default_command_line(file_name: str) -> None:
    command = _cppcheck().build_command_line(file_name, file_name)

    assert command == [
        "cppcheck",
        "--inline-suppr",
        "--enable=warning,style,performance,portability,information",
        "--std=c99",
        "--language=c",
        "--platform=native",
        OUTPUT_TEMPLATE,
        file_name,
    ]


def test_command_line_options() -> None:
    settings = Settings(defines=["A=1"])
    settings.cppcheck.unused_functions = True
    settings.cppcheck.suppressions = ["unusedStructMember"]
    settings.cppcheck.addons = ["misra"]
    settings.cppcheck.platform = "unix64"
    settings.cppcheck.inconclusive = True
    settings.cppcheck.extra_args = ["--max-configs=1"]

    command = _cppcheck(settings).build_command_line("src/main.c", "src/main.c")

    assert "--enable=warning,style,performance,portability,information,unusedFunction" in command
    assert "--addon=misra" in command
    assert "--suppress=unusedStructMember" in command
    assert "-DA=1" in command
    assert "--platform=unix64" in command
    assert "--max-configs=1" in command
    assert command[-2:] == ["--inconclusive", "src/main.c"]


def test_invalid_line_is_a_parse_error() -> None:
    parsed = _cppcheck().parse_line("should not parse!")

    assert parsed is not None
    assert parsed.is_parse_error


@pytest.mark.parametrize("quote", ["", '"'])
def test_skips_excluded_lines(quote: str) -> None:
    lines = [
        *PREAMBLE,
        "Checking flist.c: _WIN32...",
        "Checking flist.c: __GNUC__...",
        "flist.c  2837  style unusedStructMember: struct member 'Anonymous5::name_space' is never used.",
        "Checking flist.c: iconv_t...",
        "    information missingIncludeSystem: Cppcheck cannot find all the include files "
        "(use --check-config for details)",
        "    information missingInclude: Cppcheck cannot find all the include files (use --check-config for details)",
    ]

    results = _cppcheck().parse_lines(f"{quote}{line}{quote}" for line in lines)

    assert len(results) == 1
    result = results[0]
    assert result.file_name == "flist.c"
    assert result.line == 2836
    assert result.column == 0
    assert result.severity is Severity.INFORMATION
    assert result.code == "unusedStructMember"
    assert result.message == "struct member 'Anonymous5::name_space' is never used."


def test_misra_addon_output() -> None:
    message = "misra violation (use --rule-texts=<file> to get proper output)"
    lines = [
        *PREAMBLE,
        '"Checking flist.c ..."',
        f'"flist.c  9  style misra-c2012-10.4: {message}"',
        f'"flist.c  11  style misra-c2012-17.7: {message}"',
        f'"flist.c  20  style misra-c2012-18.8: {message}"',
        f'"flist.c  1  style misra-c2012-21.6: {message}"',
    ]

    results = _cppcheck().parse_lines(lines)

    assert [(result.line, result.code) for result in results] == [
        (8, "misra-c2012-10.4"),
        (10, "misra-c2012-17.7"),
        (19, "misra-c2012-18.8"),
        (0, "misra-c2012-21.6"),
    ]
    assert {result.message for result in results} == {message}


def test_identical_errors_on_different_lines() -> None:
    lines = [
        '"flist.c  9  error zerodiv: Division by zero"',
        '"flist.c  23  error zerodiv: Division by zero"',
        '"flist.c  15  style misra-c2012-10.4: misra violation"',
        '"flist.c  36  style misra-c2012-10.4: misra violation"',
    ]

    results = _cppcheck().parse_lines(lines)

    assert [(result.line, result.severity) for result in results] == [
        (8, Severity.ERROR),
        (22, Severity.ERROR),
        (14, Severity.INFORMATION),
        (35, Severity.INFORMATION),
    ]


def test_missing_override() -> None:
    results = _cppcheck().parse_lines(
        [
            "Checking example110.cpp ...",
            "Checking example110.cpp: HAVE_CONFIG_H=1...",
            "example110.cpp  6  style missingOverride: The function 'baz' overrides a function in a base class "
            "but is not marked with a 'override' specifier.",
            "example110.cpp  2  style unusedFunction: The function 'baz' is never used.",
        ],
    )

    assert len(results) == 2
    assert results[0].line == 5
    assert results[0].code == "missingOverride"
    assert results[0].message.startswith("The function 'baz' overrides a function in a base class")


def test_unexpandable_arguments_are_dropped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FLYLINT_UNSET_VAR", raising=False)
    settings = Settings()
    settings.cppcheck.suppressions = ["${FLYLINT_UNSET_VAR}", "missingInclude"]
    settings.cppcheck.addons = ["${FLYLINT_UNSET_VAR}"]
    settings.cppcheck.platform = "${FLYLINT_UNSET_VAR}"
    settings.cppcheck.extra_args = ["${FLYLINT_UNSET_VAR}", "--max-configs=${FLYLINT_UNSET_VAR:-1}"]

    command = _cppcheck(settings).build_command_line("/work/a.c", "/work/a.c")

    assert "--suppress=" not in command
    assert "--suppress=missingInclude" in command
    assert not any(arg.startswith(("--addon=", "--platform=")) for arg in command)
    assert not any("FLYLINT_UNSET_VAR" in arg for arg in command)
    assert command[-2:] == ["--max-configs=1", "/work/a.c"]


def test_extra_args_expand_workspace_variables() -> None:
    settings = Settings()
    settings.cppcheck.extra_args = ["--cppcheck-build-dir=${workspaceRoot}/.cppcheck"]

    assert "--cppcheck-build-dir=/work/.cppcheck" in _cppcheck(settings).build_command_line("a.c", "a.c")
