# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CppCheck adapter."""

from __future__ import annotations

import re
from typing import Final, final

from ..config import CppCheckSettings
from ..models import Diagnostic
from ..paths import sys_path
from .base import Linter

CPPCHECK_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(.+?)\s\s([0-9]+)\s([0-9]+\s)?\s(style|information|portability|performance|warning|error)\s(.+?):\s(.*)$",
)
EXCLUDE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^((Checking |Active checkers:|Defines:|Undefines:|Includes:|Platform:|.*information.*missingInclude.*).*"
    r"|cppcheck: .*. Disabling .* check.|)$",
)
OUTPUT_TEMPLATE: Final[str] = '--template="{file}  {line}  {severity} {id}: {message}"'
ENABLED_CHECKS: Final[str] = "warning,style,performance,portability,information"

_DEFAULT_STANDARDS: Final[tuple[str, ...]] = ("c11", "c++11")


@final
class CppCheck(Linter):
    name = "CppCheck"
    settings_key = "cppcheck"

    @property
    def options(self) -> CppCheckSettings:
        return self.settings.cppcheck

    def build_command_line(self, file_name: str, tmp_file_name: str) -> list[str]:
        options = self.options
        checks = f"{ENABLED_CHECKS},unusedFunction" if options.unused_functions else ENABLED_CHECKS
        platforms = [options.platform] if options.platform else None
        language_params = [f"--language={self.language}"] if self.is_valid_language(self.language) else []

        args = [
            self.executable,
            "--inline-suppr",
            f"--enable={checks}",
            *self.expanded_args_for("--addon=", True, options.addons, None),
            *self.include_path_params(),
            *self.expanded_args_for("--std=", True, self.standard, _DEFAULT_STANDARDS),
            *self.expanded_args_for("-D", True, self.defines, None),
            *self.expanded_args_for("-U", True, self.undefines, None),
            *self.expanded_args_for("--suppress=", True, options.suppressions, None),
            *language_params,
            *self.expanded_args_for("--platform=", True, platforms, ["native"]),
            OUTPUT_TEMPLATE,
            *self.extra_args_params(),
        ]
        for flag, wanted in (
            ("--verbose", options.verbose),
            ("--force", options.force),
            ("--inconclusive", options.inconclusive),
        ):
            if wanted:
                args.append(flag)
        args.append(sys_path(file_name))
        return args

    def parse_line(self, line: str) -> Diagnostic | None:
        if EXCLUDE_PATTERN.match(line):
            return None
        match = CPPCHECK_PATTERN.match(line)
        if match is None:
            return self.unparsable(line)
        file_name, line_no, column, severity, code, message = match.groups()
        return Diagnostic(
            file_name=file_name,
            line=int(line_no) - 1,
            column=int(column) if column else 0,
            severity=self.severity_for(severity),
            code=code,
            message=message,
            source=self.name,
        )


__all__ = ["CppCheck"]
