# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the PC-lint Plus adapter."""

from __future__ import annotations

import pytest

from flylint.config import Settings
from flylint.linters.pclintplus import PclintPlus
from flylint.severity import Severity

TAIL = ["    file 'me-project.lnt'", "me-project.lnt", "^", ""]

MAIN = "c:\\Users\\Username\\source\\repos\\Array\\mainXC16.c"
STDIO = "c:\\program files (x86)\\microchip\\xc16\\v1.41\\bin\\bin\\../..\\include\\lega-c\\stdio.h"
STRING = "c:\\program files (x86)\\microchip\\xc16\\v1.41\\bin\\bin\\../..\\include\\lega-c\\string.h"

XC16_OUTPUT = [
    f"{MAIN}:78:4: warning 534: ignoring return value of function 'printf'",
    f"{STDIO}:102:4: supplemental 891: declared here",
    f"{MAIN}:79:4: warning 534: ignoring return value of function 'printf'",
    f"{STDIO}:102:4: supplemental 891: declared here",
    f"{MAIN}:81:4: warning 534: ignoring return value of function 'memset'",
    f"{STRING}:29:7: supplemental 891: declared here",
    f"{MAIN}:82:4: warning 534: ignoring return value of function 'memset'",
    f"{STRING}:29:7: supplemental 891: declared here",
    f"{MAIN}:71:8: warning 530: 'i' is likely uninitialized",
    f"{MAIN}:56:8: supplemental 891: allocated here",
    f"{MAIN}:76:6: info 838: previous value assigned to 'i' not used",
    f"{MAIN}:73:10: supplemental 891: previous assignment is here",
    f"{MAIN}:89:4: warning 438: last value assigned to 'i' not used",
    f"{MAIN}:76:6: supplemental 891: previous assignment is here",
    f"{MAIN}:60:29: warning 641: implicit conversion of enum 'mainXC16_enum' to integral type 'int'",
    f"{MAIN}:68:25: info 713: implicit conversion (assignment) from 'unsigned int' to 'int'",
    f"{MAIN}:69:26: info 713: implicit conversion (assignment) from 'unsigned int' to 'int'",
    f"{MAIN}:81:21: info 732: loss of sign (call) ('int' to 'size_t' (aka 'unsigned int'))",
    f"{MAIN}:82:21: info 732: loss of sign (call) ('int' to 'size_t' (aka 'unsigned int'))",
    f"{MAIN}:84:11: info 716: infinite loop via while",
    f"{MAIN}:44:1: info 751: local typedef 'mainXC16_enum_t' not referenced",
    f"{MAIN}:30:5: info 714: external symbol 'init_uart' was defined but not referenced",
    f"{MAIN}:30:5: info 765: external symbol 'init_uart' could be made static",
    "",
]


def _pclint() -> PclintPlus:
    return PclintPlus(Settings(), "/work")


def test_command_line_for_source() -> None:
    command = _pclint().build_command_line("main.cc", "main.cc")

    assert len(command) == 9
    assert command[:2] == ["pclp", ".pclintplus.lnt"]
    assert command[-1] == "main.cc"


def test_command_line_for_header() -> None:
    assert len(_pclint().build_command_line("main.h", "main.h")) == 16


def test_command_line_uses_forward_slashes() -> None:
    assert _pclint().build_command_line("C:\\src\\main.c", "")[-1] == "C:/src/main.c"


def test_invalid_line_is_a_parse_error() -> None:
    parsed = _pclint().parse_line("should not parse!")

    assert parsed is not None
    assert parsed.is_parse_error


@pytest.mark.parametrize(
    "first",
    [
        "C:\\pclp-1.3.5\\windows\\config\\co-xc16.lnt  164 0  error 307: cannot open indirect ",
        "C:\\pclp-1.3.5\\windows\\config\\co-xc16.lnt:164:0: error 307: cannot open indirect ",
    ],
)
def test_both_message_layouts(first: str) -> None:
    results = _pclint().parse_lines([first, *TAIL])

    assert len(results) == 1
    result = results[0]
    assert result.file_name == "C:\\pclp-1.3.5\\windows\\config\\co-xc16.lnt"
    assert result.line == 163
    assert result.column == 0
    assert result.severity is Severity.ERROR
    assert result.code == "307"
    assert result.message.startswith("cannot open indirect")


def test_parses_multiple_lines() -> None:
    results = _pclint().parse_lines(XC16_OUTPUT)

    assert len(results) == 23
    assert results[1].file_name == STDIO
    assert results[1].severity is Severity.HINT
    last = results[-1]
    assert last.file_name == MAIN
    assert last.line == 29
    assert last.severity is Severity.INFORMATION
    assert last.code == "765"
    assert last.message == "external symbol 'init_uart' could be made static"


def test_backfills_elided_locations_and_drops_completion() -> None:
    source = "c:\\experiments\\VSCodeDemo\\src\\main.cpp"
    results = _pclint().parse_lines(
        [
            f"{source}  1 0  Warning 686: Option '-e*' is suspicious",
            f"{source}  7 7  Note 1960: Violates MISRA C++ 2008 Required Rule 16-0-3, use of '#undef' is discouraged",
            f"{source}  10 0  Note 1960: Violates MISRA C++ 2008 Required Rule 7-3-1, Global declaration of symbol 'avg' ",
            "  0 0  Note 1960: Violates MISRA C++ 2008 Required Rule 0-1-8, Void return type for function without "
            "external side-effects: avg(void)",
            f"{source}  7 7  Note 1960: Violates MISRA C++ 2008 Required Rule 16-0-3, use of '#undef' is discouraged",
            f"{source}  10 0  Note 1960: Violates MISRA C++ 2008 Required Rule 7-3-1, Global declaration of symbol 'avg' ",
            "  0 0  Note 974: Worst case function for stack usage: 'avg' is finite",
            "  0 0  Note 900: Successful completion, 7 messages produced",
            "",
        ],
    )

    assert len(results) == 7
    assert all(result.code != "900" for result in results)
    inherited = results[3]
    assert inherited.file_name == source
    assert inherited.line == 9
    assert inherited.severity is Severity.HINT
    assert "Required Rule 0-1-8" in inherited.message
    assert "Required Rule 7-3-1" in results[2].message


def test_location_memory_resets_between_runs() -> None:
    linter = _pclint()
    linter.parse_lines(["main.c  4 0  Warning 534: ignoring return value"])

    linter.reset()
    parsed = linter.parse_line("  0 0  Note 974: Worst case function for stack usage")

    assert parsed is not None
    assert parsed.file_name == ""
