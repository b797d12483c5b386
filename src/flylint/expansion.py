# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Variable substitution for user-editable command-line fragments."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ConfigError
from .paths import slash

LOGGER = logging.getLogger(__name__)

WORKSPACE_VARIABLES: Final[tuple[str, ...]] = ("workspaceRoot", "workspaceFolder")

_VARIABLE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(\w+)|\$\{([^}]*)\}")
_UNTERMINATED_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{[^}]*$")
_BRACED_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?:env:)?(\w+)(?::-(.*))?$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class ExpansionResult:
    """Outcome of expanding one string; exactly one of ``value``/``error`` is set."""

    value: str | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class VariableExpander:
    """Expand ``$NAME``, ``${NAME}``, ``${env:NAME}`` and ``${NAME:-default}`` references.

    ``workspaceRoot`` and ``workspaceFolder`` resolve to the workspace root;
    every other name is looked up in the environment and expands to an empty
    string when undefined. Results are slash-normalised.
    """

    def __init__(self, workspace_root: str | Path, env: Mapping[str, str] | None = None) -> None:
        variables = dict(os.environ if env is None else env)
        root = str(workspace_root)
        for name in WORKSPACE_VARIABLES:
            variables[name] = root
        self._variables: Mapping[str, str] = variables

    def expand(self, value: str) -> ExpansionResult:
        """Return the expansion of ``value``.

        Args:
            value: Raw string taken from the settings.

        Returns:
            ExpansionResult: Expanded text, or an error describing why the
            string cannot be used (malformed reference or empty result).
        """

        if _UNTERMINATED_PATTERN.search(value):
            return ExpansionResult(None, f"Unterminated variable reference in '{value}'.")
        try:
            expanded = _VARIABLE_PATTERN.sub(self._replace, value)
        except ConfigError as exc:
            return ExpansionResult(None, str(exc))
        if expanded == "":
            return ExpansionResult(None, f"Expanding '{value}' resulted in an empty string.")
        return ExpansionResult(slash(expanded))

    def expand_all(self, values: Iterable[str]) -> list[str]:
        """Expand ``values`` dropping (and logging) every entry that fails."""

        expanded: list[str] = []
        for value in values:
            result = self.expand(value)
            if result.value is None:
                LOGGER.warning("Dropping argument: %s", result.error)
                continue
            expanded.append(result.value)
        return expanded

    def _replace(self, match: re.Match[str]) -> str:
        bare = match.group(1)
        if bare is not None:
            return self._variables.get(bare, "")
        braced = _BRACED_PATTERN.match(match.group(2))
        if braced is None:
            raise ConfigError(f"Bad substitution '{match.group(0)}'.")
        name, default = braced.groups()
        resolved = self._variables.get(name, "")
        if resolved == "" and default is not None:
            return default
        return resolved


__all__ = ["ExpansionResult", "VariableExpander", "WORKSPACE_VARIABLES"]
