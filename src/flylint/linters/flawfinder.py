# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""FlawFinder adapter."""

from __future__ import annotations

import re
from typing import Final, final

from ..models import Diagnostic
from .base import Linter

FLAWFINDER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^([a-zA-Z]?:?[^:]+):(\d+):(\d+)?:?  \[([0-5])\] ([^:]+):(.+)$",
)
EXCLUDE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^((Examining ).*|)$")


@final
class FlawFinder(Linter):
    """Run FlawFinder in single-line data mode; risk levels 0-5 map through the severity table."""

    name = "FlawFinder"
    settings_key = "flawfinder"

    def build_command_line(self, file_name: str, tmp_file_name: str) -> list[str]:
        return [self.executable, "--columns", "--dataonly", "--singleline", file_name]

    def parse_line(self, line: str) -> Diagnostic | None:
        if EXCLUDE_PATTERN.match(line):
            return None
        match = FLAWFINDER_PATTERN.match(line)
        if match is None:
            return self.unparsable(line)
        file_name, line_no, column, level, code, message = match.groups()
        return Diagnostic(
            file_name=file_name,
            line=int(line_no) - 1,
            column=max(int(column) - 1, 0) if column else 0,
            severity=self.severity_for(level),
            code=code,
            message=message,
            source=self.name,
        )


__all__ = ["FlawFinder"]
