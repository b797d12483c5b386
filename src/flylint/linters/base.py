# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared contract for wrapping an external C/C++ analyzer.

An adapter supplies two hooks: :meth:`Linter.build_command_line` turns the
settings plus a target file into an argument vector, and
:meth:`Linter.parse_line` turns one output line into a :class:`Diagnostic`
(or ``None`` for chatter). :meth:`Linter.parse_lines` drives the hooks and
lets :meth:`Linter.transform_parse` fold continuation lines into the
previously buffered diagnostic.
"""

from __future__ import annotations

import logging
import os
import posixpath
import shlex
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import ClassVar, Final

from ..config import AnalyzerSettings, LintTrigger, Settings
from ..errors import ConfigFileNotFoundError, ExecutableNotFoundError, LinterParseError, ProbeError
from ..expansion import ExpansionResult, VariableExpander
from ..models import Diagnostic
from ..paths import slash
from ..process import CommandRunner, find_executable, run_analyzer
from ..severity import Severity, map_severity

LOGGER = logging.getLogger(__name__)

HEADER_EXTENSIONS: Final[frozenset[str]] = frozenset({".h", ".H", ".hh", ".hpp", ".h++", ".hxx"})
VALID_LANGUAGES: Final[frozenset[str]] = frozenset({"c", "c++"})
DEFAULT_LINT_ON: Final[frozenset[LintTrigger]] = frozenset({LintTrigger.ON_SAVE, LintTrigger.ON_BUILD})

_QUOTES: Final[frozenset[str]] = frozenset({"'", '"'})


def is_header(file_name: str) -> bool:
    """Return ``True`` when ``file_name`` carries one of the recognised header extensions."""

    return posixpath.splitext(slash(file_name))[1] in HEADER_EXTENSIONS


def strip_quotes(line: str) -> str:
    """Remove one layer of quoting from a line that starts with a quote character."""

    if line[:1] in _QUOTES:
        line = line[1:]
        if line[-1:] in _QUOTES:
            line = line[:-1]
    return line


def split_output(text: str | None) -> list[str]:
    if text is None:
        return []
    return text.replace("\r", "").split("\n")


def locate_file(directory: Path, file_name: str) -> Path | None:
    """Search for a readable ``file_name`` from ``directory`` up to the filesystem root.

    Absolute names are checked directly.
    """

    if not file_name:
        return None
    candidate_name = Path(file_name)
    if candidate_name.is_absolute():
        return candidate_name if _readable(candidate_name) else None
    for folder in (directory, *directory.parents):
        candidate = folder / candidate_name
        if _readable(candidate):
            return candidate
    return None


def _readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


class Linter(ABC):
    """Base class for the analyzer adapters.

    Attributes:
        name: Display name used as the diagnostic ``source``.
        settings_key: Name of the analyzer block inside :class:`Settings`.
        requires_config: Whether the analyzer refuses to run without a
            configuration file located above the workspace root.
        active: The settings asked for this analyzer.
        enabled: The analyzer passed its probe (or was never probed).
        probe_error: Reason the probe disabled the analyzer, if it did.
    """

    name: ClassVar[str]
    settings_key: ClassVar[str]
    requires_config: ClassVar[bool] = False

    def __init__(
        self,
        settings: Settings,
        workspace_root: str | Path,
        *,
        runner: CommandRunner = run_analyzer,
        search_dirs: Sequence[Path] | None = None,
    ) -> None:
        self.settings = settings
        self.workspace_root = str(workspace_root)
        block = settings.analyzer(self.settings_key)
        common = settings.cascaded(self.settings_key)
        self.language = common.language
        self.standard = common.standard
        self.defines = common.defines
        self.undefines = common.undefines
        self.include_paths = common.include_paths
        self.executable = block.executable
        self.config_file = block.config_file
        self.active = self.enabled = block.enable
        self.probe_error: ProbeError | None = None
        self._runner = runner
        self._search_dirs = search_dirs
        self._expander = VariableExpander(self.workspace_root)
        self.reset()

    @property
    def options(self) -> AnalyzerSettings:
        return self.settings.analyzer(self.settings_key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(active={self.active}, enabled={self.enabled}, executable={self.executable!r})"

    def reset(self) -> None:
        """Clear per-invocation scratch state; called at the start of every lint."""

    def lint_on(self) -> frozenset[LintTrigger]:
        return DEFAULT_LINT_ON

    def initialize(self) -> Linter:
        """Probe the environment, disabling the analyzer instead of raising.

        Returns:
            Linter: ``self``, enabled or not. A failed probe leaves the reason
            in :attr:`probe_error`.
        """

        if not self.active:
            return self
        try:
            self.maybe_enable()
        except ProbeError as exc:
            self.probe_error = exc
            LOGGER.info("%s", exc)
        return self

    def maybe_enable(self) -> None:
        """Resolve the executable and configuration file.

        Raises:
            ExecutableNotFoundError: If the executable is not on the search path.
            ConfigFileNotFoundError: If a required configuration file is missing.
        """

        resolved = find_executable(self.executable, self._search_dirs)
        if resolved is None:
            self.enabled = False
            if self.settings.debug:
                LOGGER.debug("The executable was not found for %s; looked for %s", self.name, self.executable)
            raise ExecutableNotFoundError(self.name, self.executable)
        self.executable = resolved
        if self.requires_config:
            located = self._locate_config()
            if located is None:
                self.enabled = False
                LOGGER.info(
                    "The configuration file was not found for %s; looked for %s",
                    self.name,
                    self.config_file,
                )
                raise ConfigFileNotFoundError(self.name, self.config_file)
            self.config_file = str(located)
        self.enabled = True

    def _locate_config(self) -> Path | None:
        expanded = self.expand_variables(self.config_file) if self.config_file else None
        if expanded is None or expanded.value is None:
            return None
        return locate_file(Path(self.workspace_root), expanded.value)

    def lint(self, file_name: str, directory: str | None = None, tmp_file_name: str = "") -> list[Diagnostic]:
        """Run the analyzer against ``file_name`` and return its parsed diagnostics.

        Args:
            file_name: Real path of the document.
            directory: Working directory; defaults to the workspace root.
            tmp_file_name: Shadow copy holding unsaved editor content.

        Returns:
            list[Diagnostic]: Parsed diagnostics; empty when disabled.

        Raises:
            LinterParseError: On an unrecognised line when parse errors are
                not ignored.
            OSError: If the analyzer process cannot be started.
        """

        if not self.enabled:
            return []
        self.reset()
        command = self.build_command_line(file_name, tmp_file_name)
        if self.settings.debug:
            LOGGER.debug("executing: %s", shlex.join(command))
        completed = self._runner(command, Path(directory or self.workspace_root))
        stdout = split_output(completed.stdout)
        stderr = split_output(completed.stderr)
        if self.settings.debug:
            LOGGER.debug("%s stdout: %s", self.name, stdout)
            LOGGER.debug("%s stderr: %s", self.name, stderr)
        if completed.returncode != 0:
            LOGGER.info("%s exited with status code %s", self.name, completed.returncode)
        return self.parse_lines([*stdout, *stderr])

    def parse_lines(self, lines: Iterable[str]) -> list[Diagnostic]:
        """Parse analyzer output, folding continuation lines into their parent.

        Raises:
            LinterParseError: On an unrecognised line when parse errors are
                not ignored; the remaining lines are abandoned.
        """

        results: list[Diagnostic] = []
        current: Diagnostic | None = None
        for raw in lines:
            parsed = self.parse_line(strip_quotes(raw))
            if parsed is None:
                continue
            if parsed.parse_error is not None:
                if self.settings.ignore_parse_errors:
                    LOGGER.warning("%s", parsed.parse_error)
                    continue
                raise LinterParseError(self.name, parsed.parse_error)
            current, next_parsed = self.transform_parse(current, parsed)
            if current is not None:
                results.append(current)
            current = next_parsed
        if current is not None:
            results.append(current)
        return results

    def transform_parse(
        self,
        current: Diagnostic | None,
        parsed: Diagnostic | None,
    ) -> tuple[Diagnostic | None, Diagnostic | None]:
        """Return the ``(current, parsed)`` pair after folding continuation lines."""

        return current, parsed

    @abstractmethod
    def build_command_line(self, file_name: str, tmp_file_name: str) -> list[str]:
        """Return the analyzer argument vector, executable first and target last."""

    @abstractmethod
    def parse_line(self, line: str) -> Diagnostic | None:
        """Return the diagnostic on ``line``, ``None`` to skip it, or a parse failure."""

    def unparsable(self, line: str) -> Diagnostic:
        return Diagnostic.unparsable(line, source=self.name)

    def severity_for(self, label: str) -> Severity:
        return map_severity(label, self.options.severity_levels)

    def is_valid_language(self, language: str) -> bool:
        return language in VALID_LANGUAGES

    def expand_variables(self, value: str) -> ExpansionResult:
        return self._expander.expand(value)

    def expanded_args_for(
        self,
        key: str,
        joined: bool,
        values: Iterable[str] | None,
        defaults: Iterable[str] | None,
    ) -> list[str]:
        """Expand ``values`` (or ``defaults`` when ``values`` is ``None``) into flags.

        Joined flags render as ``f"{key}{value}"``; separate flags as
        ``[key, value]``. Entries that fail to expand are dropped with a
        warning.
        """

        source = values if values is not None else defaults
        params: list[str] = []
        for element in source or ():
            expanded = self.expand_variables(element)
            if expanded.value is None:
                LOGGER.warning("Error expanding '%s': %s", element, expanded.error)
                continue
            if joined:
                params.append(f"{key}{expanded.value}")
            else:
                params.extend((key, expanded.value))
        return params

    def include_path_params(self) -> list[str]:
        return self.expanded_args_for("-I", False, self.include_paths, None)

    def extra_args_params(self) -> list[str]:
        return self._expander.expand_all(self.options.extra_args or ())


__all__ = [
    "DEFAULT_LINT_ON",
    "HEADER_EXTENSIONS",
    "Linter",
    "VALID_LANGUAGES",
    "is_header",
    "locate_file",
    "split_output",
    "strip_quotes",
]
