# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lizard cyclomatic complexity adapter."""

from __future__ import annotations

import re
from typing import Final, final

from ..models import Diagnostic
from ..severity import Severity
from .base import Linter

LIZARD_PATTERN: Final[re.Pattern[str]] = re.compile(r"^([a-zA-Z]?:?[^:]+):(\d+)?:? warning: (.+)$")
COMPLEXITY_CODE: Final[str] = "Cyclomatic complexity"


@final
class Lizard(Linter):
    name = "Lizard"
    settings_key = "lizard"

    def build_command_line(self, file_name: str, tmp_file_name: str) -> list[str]:
        return [self.executable, "--warnings_only", *self.extra_args_params(), file_name]

    def parse_line(self, line: str) -> Diagnostic | None:
        if not line:
            return None
        match = LIZARD_PATTERN.match(line)
        if match is None:
            return self.unparsable(line)
        file_name, line_no, message = match.groups()
        return Diagnostic(
            file_name=file_name,
            line=int(line_no) - 1 if line_no else 0,
            column=0,
            # lizard only reports threshold violations
            severity=Severity.WARNING,
            code=COMPLEXITY_CODE,
            message=message,
            source=self.name,
        )


__all__ = ["Lizard"]
