# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy and error batching for analyzer runs."""

from __future__ import annotations

from collections.abc import Callable, Sequence


class FlylintError(Exception):
    """Base class for errors raised by flylint."""


class ConfigError(FlylintError):
    """Raised when configuration input is invalid."""


class SeverityMappingError(FlylintError, ValueError):
    """Raised when a severity table entry does not name a known severity."""


class ProbeError(FlylintError):
    """Raised when an analyzer cannot be enabled in the current environment."""

    def __init__(self, linter: str, message: str) -> None:
        super().__init__(message)
        self.linter = linter


class ExecutableNotFoundError(ProbeError):
    """Raised when the analyzer executable cannot be resolved."""

    def __init__(self, linter: str, executable: str) -> None:
        super().__init__(linter, f"The executable was not found for {linter}, disabling linter")
        self.executable = executable


class ConfigFileNotFoundError(ProbeError):
    """Raised when a required analyzer configuration file cannot be located."""

    def __init__(self, linter: str, config_file: str) -> None:
        super().__init__(linter, f"could not locate configuration file for {linter}, disabling linter")
        self.config_file = config_file


class LinterParseError(FlylintError):
    """Raised when analyzer output contains a line no parser understands."""

    def __init__(self, linter: str, detail: str) -> None:
        super().__init__(detail)
        self.linter = linter
        self.detail = detail


class ErrorTracker:
    """Collect user-facing error messages raised during one validation pass.

    Messages are de-duplicated while keeping their first-seen order so a batch
    can be surfaced once the pass has finished.
    """

    def __init__(self) -> None:
        self._messages: list[str] = []

    def add(self, message: str) -> None:
        if message not in self._messages:
            self._messages.append(message)

    def add_error(self, exc: BaseException, *, document: str | None = None) -> None:
        """Record ``exc`` using the standard validation failure wording."""

        detail = str(exc) or exc.__class__.__name__
        if document is None:
            self.add(f"flylint: '{detail}'")
        else:
            self.add(f"flylint: '{detail}' while validating: {document}. Please review the flylint log output.")

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(self._messages)

    def send(self, sink: Callable[[Sequence[str]], None]) -> None:
        """Deliver the batch to ``sink`` (when non-empty) and reset the tracker."""

        if not self._messages:
            return
        batch = tuple(self._messages)
        self._messages.clear()
        sink(batch)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __len__(self) -> int:
        return len(self._messages)


__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ErrorTracker",
    "ExecutableNotFoundError",
    "FlylintError",
    "LinterParseError",
    "ProbeError",
    "SeverityMappingError",
]
