# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PC-lint Plus adapter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, final

from ..config import PclintPlusSettings
from ..models import Diagnostic
from ..paths import sys_path
from .base import Linter, is_header
from .flexelint import OUTPUT_FORMAT, header_arguments

_SEVERITIES: Final[str] = r"[iI]nfo|[wW]arning|[eE]rror|[nN]ote|[sS]upplemental"

PCLINT_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(([^ ]+)?\s\s([0-9]+)\s([0-9]+\s)?\s({_SEVERITIES})\s([0-9]+):\s(.*)"
    rf"|(.+?):([0-9]+):([0-9]+:)?\s({_SEVERITIES})\s([0-9]+):\s(.*))$",
)
EXCLUDE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(\s+file '.*'|PC-lint.*|licensed.*|LICENSED.*|.*evaluation license.*|[^ \t]+|)$",
)
COMPLETION_CODE: Final[str] = "900"


@dataclass(slots=True)
class _Location:
    file_name: str
    line: str
    column: str | None


@final
class PclintPlus(Linter):
    """Run PC-lint Plus and parse both of its message layouts.

    The tool elides the file name on lines that continue the previous
    location, so the last reported location is remembered for the duration
    of one lint and backfilled into such lines.
    """

    name = "PclintPlus"
    settings_key = "pclintplus"
    requires_config = True

    @property
    def options(self) -> PclintPlusSettings:
        return self.settings.pclintplus

    def reset(self) -> None:
        self._last: _Location | None = None

    def build_command_line(self, file_name: str, tmp_file_name: str) -> list[str]:
        args = [
            self.executable,
            self.config_file,
            "-v",
            "-b",
            OUTPUT_FORMAT,
            "-h1",
            "-width(0,0)",
            "-zero(400)",
        ]
        if is_header(file_name):
            args.extend(header_arguments(self.options.header_args))
        args.append(sys_path(file_name))
        return args

    def _remember(self, file_name: str | None, line: str, column: str | None) -> _Location:
        if file_name is None:
            if self._last is not None:
                return self._last
            return _Location("", line, column)
        self._last = _Location(file_name, line, column)
        return self._last

    def parse_line(self, line: str) -> Diagnostic | None:
        if EXCLUDE_PATTERN.match(line):
            return None
        match = PCLINT_PATTERN.match(line)
        if match is None:
            return self.unparsable(line)

        if match.group(3) is not None:
            location = self._remember(match.group(2), match.group(3), match.group(4))
            severity, code, message = match.group(5, 6, 7)
        else:
            location = self._remember(match.group(8), match.group(9), match.group(10))
            severity, code, message = match.group(11, 12, 13)
        return Diagnostic(
            file_name=location.file_name,
            line=int(location.line) - 1,
            column=0,
            severity=self.severity_for(severity.lower()),
            code=code,
            message=message,
            source=self.name,
        )

    def transform_parse(
        self,
        current: Diagnostic | None,
        parsed: Diagnostic | None,
    ) -> tuple[Diagnostic | None, Diagnostic | None]:
        if parsed is not None and parsed.code == COMPLETION_CODE:
            return current, None
        return current, parsed


__all__ = ["PclintPlus"]
