# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import Final

from .errors import SeverityMappingError


class Severity(IntEnum):
    """Closed severity vocabulary shared with editor clients.

    The integer values match the diagnostic severities used by the language
    server protocol, so members can be handed to a client unchanged.
    """

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4

    @property
    def label(self) -> str:
        """Return the editor-facing name of the severity (``Error``, ``Hint``...)."""

        return _LABELS[self]

    @classmethod
    def from_label(cls, value: SeverityLevel) -> Severity:
        """Return the severity described by ``value``.

        Args:
            value: Either a protocol integer (1-4), an existing member, or one of
                the labels ``Error``, ``Warning``, ``Information`` or ``Hint``.

        Returns:
            Severity: Matching member.

        Raises:
            SeverityMappingError: If ``value`` falls outside the vocabulary.
        """

        if isinstance(value, Severity):
            return value
        if isinstance(value, bool):
            raise SeverityMappingError(f"The diagnostic code {value!r} was neither a number nor string!")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as exc:
                raise SeverityMappingError(f"The diagnostic code {value} has no mapping to a severity.") from exc
        if not isinstance(value, str):
            raise SeverityMappingError(f"The diagnostic code {value!r} was neither a number nor string!")
        member = _BY_LABEL.get(value)
        if member is None:
            raise SeverityMappingError(f"The diagnostic code {value} has no mapping to a severity.")
        return member


SeverityLevel = Severity | int | str
SeverityTable = Mapping[str, SeverityLevel]

_LABELS: Final[dict[Severity, str]] = {
    Severity.ERROR: "Error",
    Severity.WARNING: "Warning",
    Severity.INFORMATION: "Information",
    Severity.HINT: "Hint",
}
_BY_LABEL: Final[dict[str, Severity]] = {label: member for member, label in _LABELS.items()}


def map_severity(label: str, table: SeverityTable, default: Severity = Severity.ERROR) -> Severity:
    """Translate an analyzer-native severity ``label`` through ``table``.

    Labels missing from the table fall back to ``default``; table values that
    do not describe one of the four severities raise.
    """

    configured = table.get(label)
    if configured is None:
        return default
    return Severity.from_label(configured)


__all__ = ["Severity", "SeverityLevel", "SeverityTable", "map_severity"]
