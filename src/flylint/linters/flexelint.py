# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Flexelint adapter."""

from __future__ import annotations

import re
from typing import Final, final

from ..config import FlexelintSettings
from ..models import Diagnostic
from .base import Linter, is_header

FLEXELINT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(.+?)\s\s([0-9]+)\s([0-9]+\s)?\s(Info|Warning|Error|Note)\s([0-9]+):\s(.*)$",
)
EXCLUDE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^((During Specific Walk:|\s\sFile\s).*|)$")
OUTPUT_FORMAT: Final[str] = "-format=%f  %l %c  %t %n: %m"

# continuation codes and the scaffold text printed when they carry no location
LOCATION_CITED: Final[tuple[str, str]] = ("830", "Location cited in prior message")
REFERENCE_CITED: Final[tuple[str, str]] = ("831", "Reference cited in prior message")


def header_arguments(header_args: str | list[str]) -> list[str]:
    return [header_args] if isinstance(header_args, str) else list(header_args)


@final
class Flexelint(Linter):
    """Run Flexelint with a machine-readable message format.

    Messages 830 and 831 point back at the location cited by the message
    before them: they relocate that buffered diagnostic and never surface on
    their own.
    """

    name = "Flexelint"
    settings_key = "flexelint"
    requires_config = True

    @property
    def options(self) -> FlexelintSettings:
        return self.settings.flexelint

    def build_command_line(self, file_name: str, tmp_file_name: str) -> list[str]:
        args = [
            self.executable,
            "-v",
            "-b",
            OUTPUT_FORMAT,
            self.config_file,
            "-hsFr_1",
            "-width(4096,0)",
            "-zero(400)",
        ]
        if is_header(file_name):
            args.extend(header_arguments(self.options.header_args))
        args.append(file_name)
        return args

    def transform_parse(
        self,
        current: Diagnostic | None,
        parsed: Diagnostic | None,
    ) -> tuple[Diagnostic | None, Diagnostic | None]:
        if parsed is None or parsed.code not in (LOCATION_CITED[0], REFERENCE_CITED[0]):
            return current, parsed
        if (parsed.code, parsed.message) not in (LOCATION_CITED, REFERENCE_CITED) and current is not None:
            current.line = parsed.line
            current.column = parsed.column
        return current, None

    def parse_line(self, line: str) -> Diagnostic | None:
        if EXCLUDE_PATTERN.match(line):
            return None
        match = FLEXELINT_PATTERN.match(line)
        if match is None:
            return self.unparsable(line)
        file_name, line_no, _column, severity, code, message = match.groups()
        return Diagnostic(
            file_name=file_name,
            line=int(line_no) - 1,
            column=0,
            severity=self.severity_for(severity),
            code=code,
            message=message,
            source=self.name,
        )


__all__ = ["Flexelint", "header_arguments"]
