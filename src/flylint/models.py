# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the flylint package."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity

DiagnosticCode = str | int | None


class Diagnostic(BaseModel):
    """Analyzer finding as parsed from a single output line.

    ``line`` and ``column`` are 0-based; a column of ``0`` means the analyzer
    did not report one. ``file_name`` is kept exactly as the analyzer printed
    it and is only normalised during aggregation.
    """

    model_config = ConfigDict(validate_assignment=True)

    file_name: str = ""
    line: int = 0
    column: int = 0
    severity: Severity = Severity.ERROR
    code: DiagnosticCode = None
    message: str = ""
    source: str = ""
    parse_error: str | None = None

    @classmethod
    def unparsable(cls, line: str, *, source: str) -> Diagnostic:
        """Return the marker produced for a line no pattern recognises."""

        return cls(parse_error=f"Line could not be parsed: {line}", source=source)

    @property
    def is_parse_error(self) -> bool:
        return self.parse_error is not None


class Position(BaseModel):
    """Zero-based location inside a text document."""

    model_config = ConfigDict(frozen=True)

    line: int
    character: int


class Range(BaseModel):
    """Half-open span between two positions."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class PublishedDiagnostic(BaseModel):
    """Diagnostic in the shape an editor client consumes."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    range: Range
    message: str
    code: DiagnosticCode = None
    source: str = "flylint"

    @property
    def dedupe_key(self) -> tuple[int, str, str]:
        """Return the ``(line, code, message)`` identity used for de-duplication."""

        return (self.range.start.line, "" if self.code is None else str(self.code), self.message)

    def to_lsp(self) -> dict[str, Any]:
        """Return the protocol dictionary for this diagnostic."""

        payload: dict[str, Any] = {
            "severity": int(self.severity),
            "range": self.range.model_dump(),
            "message": self.message,
            "source": self.source,
        }
        if self.code is not None:
            payload["code"] = self.code
        return payload


class FileDiagnostics(BaseModel):
    """Complete diagnostic set for one file; an empty list clears the file."""

    model_config = ConfigDict(validate_assignment=True)

    uri: str
    path: str
    diagnostics: list[PublishedDiagnostic] = Field(default_factory=list)

    @property
    def is_clear(self) -> bool:
        return not self.diagnostics

    def to_lsp(self) -> dict[str, Any]:
        return {"uri": self.uri, "diagnostics": [diag.to_lsp() for diag in self.diagnostics]}


__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "FileDiagnostics",
    "Position",
    "PublishedDiagnostic",
    "Range",
]
