# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Clang ``-fsyntax-only`` adapter."""

from __future__ import annotations

import posixpath
import re
from typing import Final, final

from ..config import ClangSettings, LintTrigger
from ..models import Diagnostic
from ..paths import slash, sys_path
from ..severity import Severity
from .base import Linter

CLANG_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(.+?):([0-9]+):([0-9]+):\s(fatal|error|warning|note)(?: error)?:\s(.*)$",
)
INCLUDED_FROM_PATTERN: Final[re.Pattern[str]] = re.compile(r"^In file included from (.+?):([0-9]+):$")
EXCLUDE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(WX.*|_WX.*|__WX.*|Q_.*|warning: .* incompatible with .*|warning: .* input unused"
    r"|warning: include location .* is unsafe for cross-compilation.*)$",
)
INCLUDED_FROM_MESSAGE: Final[str] = "Issues in file included from here"

_BASE_FLAGS: Final[tuple[str, ...]] = (
    "-fsyntax-only",
    "-fno-color-diagnostics",
    "-fno-caret-diagnostics",
    "-fno-diagnostics-show-option",
    "-fdiagnostics-show-category=name",
    "-ferror-limit=200",
)
_DEFAULT_STANDARDS: Final[tuple[str, ...]] = ("c11", "c++11")


@final
class Clang(Linter):
    """Run ``clang -fsyntax-only`` and parse its GCC-style diagnostics.

    In ``onType`` mode the shadow copy is compiled instead of the document, so
    the real directory is added with ``-iquote`` and diagnostics naming the
    shadow file are mapped back to the real one.
    """

    name = "Clang"
    settings_key = "clang"

    @property
    def options(self) -> ClangSettings:
        return self.settings.clang

    def reset(self) -> None:
        self._actual_file_name = ""
        self._tmp_file_name = ""

    def lint_on(self) -> frozenset[LintTrigger]:
        return frozenset({LintTrigger.ON_SAVE, LintTrigger.ON_TYPE, LintTrigger.ON_BUILD})

    def build_command_line(self, file_name: str, tmp_file_name: str) -> list[str]:
        options = self.options
        on_type = self.settings.run == "onType"

        iquote_params: list[str] = []
        if on_type:
            iquote_params = self.expanded_args_for(
                "-iquote",
                False,
                [posixpath.dirname(slash(file_name)), *self.include_paths],
                None,
            )
        pedantic_params = [
            flag
            for flag, wanted in (("-pedantic", options.pedantic), ("-pedantic-errors", options.pedantic_errors))
            if wanted
        ]
        toggles = [
            flag
            for flag, wanted in (
                ("-fms-extensions", options.ms_extensions),
                ("-fno-exceptions", options.no_exceptions),
                ("-fno-rtti", options.no_rtti),
                ("-fblocks", options.blocks),
            )
            if wanted
        ]
        language_params = ["-x", self.language] if self.is_valid_language(self.language) else []

        args = [
            self.executable,
            *_BASE_FLAGS,
            *iquote_params,
            *self.expanded_args_for("--std=", True, self.standard, _DEFAULT_STANDARDS),
            *pedantic_params,
            *self.expanded_args_for("--stdlib=", True, options.standard_libs, None),
            *toggles,
            *self.expanded_args_for("-include", False, options.includes, None),
            *self.expanded_args_for("-W", True, options.warnings, None),
            *self.expanded_args_for("-D", True, self.defines, None),
            *self.expanded_args_for("-U", True, self.undefines, None),
            *self.include_path_params(),
            *language_params,
            *self.extra_args_params(),
        ]
        args.append(sys_path(tmp_file_name if on_type else file_name))

        self._actual_file_name = file_name
        self._tmp_file_name = tmp_file_name
        return args

    def _real_name(self, reported: str) -> str:
        if self._tmp_file_name and reported in (self._tmp_file_name, sys_path(self._tmp_file_name)):
            return self._actual_file_name
        return reported

    def parse_line(self, line: str) -> Diagnostic | None:
        if line == "" or EXCLUDE_PATTERN.match(line):
            return None

        included = INCLUDED_FROM_PATTERN.match(line)
        if included is not None:
            return Diagnostic(
                file_name=self._real_name(included.group(1)),
                line=int(included.group(2)) - 1,
                column=0,
                severity=Severity.WARNING,
                message=INCLUDED_FROM_MESSAGE,
                source=self.name,
            )

        match = CLANG_PATTERN.match(line)
        if match is None:
            return self.unparsable(line)
        file_name, line_no, column, severity, message = match.groups()
        return Diagnostic(
            file_name=self._real_name(file_name),
            line=int(line_no) - 1,
            column=int(column) - 1,
            severity=self.severity_for(severity),
            message=message,
            source=self.name,
        )


__all__ = ["Clang"]
