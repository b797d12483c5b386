# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load flylint settings from TOML, ``pyproject.toml`` or editor JSON files."""

from __future__ import annotations

import json
import logging
import os
import re
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from .config import Settings
from .errors import ConfigError
from .expansion import WORKSPACE_VARIABLES
from .paths import FILE_SCHEME, uri_scheme, uri_to_path

LOGGER = logging.getLogger(__name__)

FLYLINT_TOML: Final[str] = ".flylint.toml"
PYPROJECT_TOML: Final[str] = "pyproject.toml"
EDITOR_SETTINGS: Final[Path] = Path(".vscode") / "settings.json"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "flylint"
EDITOR_SECTION_KEY: Final[str] = "c-cpp-flylint"

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    # workspace variables are resolved per document by the analyzers
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None or key in WORKSPACE_VARIABLES:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration at {path} must be an object")
    return data


def _unflatten(data: Mapping[str, Any], prefix: str) -> dict[str, Any]:
    """Collect ``prefix.a.b`` style keys into nested tables."""

    nested: dict[str, Any] = {}
    marker = f"{prefix}."
    for key, value in data.items():
        if not key.startswith(marker):
            continue
        *parents, leaf = key[len(marker) :].split(".")
        target = nested
        for parent in parents:
            target = target.setdefault(parent, {})
        target[leaf] = value
    return nested


def _section_from_json(data: Mapping[str, Any]) -> dict[str, Any]:
    section = data.get(EDITOR_SECTION_KEY, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{EDITOR_SECTION_KEY}' must be an object")
    return _deep_merge(_unflatten(data, EDITOR_SECTION_KEY), section)


def _section_from_pyproject(data: Mapping[str, Any]) -> dict[str, Any] | None:
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return None
    flylint_section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(flylint_section, Mapping):
        return None
    return dict(flylint_section)


def load_payload(path: Path) -> dict[str, Any]:
    """Return the raw flylint settings table stored in ``path``."""

    if path.suffix == ".json":
        return _section_from_json(_read_json(path))
    data = _read_toml(path)
    if path.name == PYPROJECT_TOML:
        return _section_from_pyproject(data) or {}
    return data


def discover_config(root: Path) -> Path | None:
    """Return the first settings file found in ``root``, if any.

    ``.flylint.toml`` wins over a ``pyproject.toml`` carrying ``[tool.flylint]``,
    which wins over the editor's ``.vscode/settings.json``.
    """

    candidate = root / FLYLINT_TOML
    if candidate.is_file():
        return candidate
    pyproject = root / PYPROJECT_TOML
    if pyproject.is_file() and _section_from_pyproject(_read_toml(pyproject)) is not None:
        return pyproject
    editor = root / EDITOR_SETTINGS
    if editor.is_file():
        return editor
    return None


def load_settings(
    root: Path,
    path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings for the workspace at ``root``.

    Args:
        root: Workspace root searched when ``path`` is omitted.
        path: Explicit settings file (TOML, ``pyproject.toml`` or JSON).
        overrides: Values applied on top of the file contents.
        env: Environment used to expand ``$NAME`` references.

    Returns:
        Settings: Validated settings; defaults when no file exists.

    Raises:
        ConfigError: If a file cannot be read or fails validation.
    """

    source = path if path is not None else discover_config(root)
    payload: dict[str, Any] = {}
    if source is not None:
        if not source.is_file():
            raise ConfigError(f"Configuration file {source} does not exist")
        LOGGER.debug("Loading flylint settings from %s", source)
        payload = load_payload(source)
    if overrides:
        payload = _deep_merge(payload, overrides)
    expanded = _expand_env(payload, os.environ if env is None else env)
    return Settings.from_mapping(expanded)


class FileSettingsProvider:
    """Resolve workspace roots and settings for documents from files on disk."""

    def __init__(
        self,
        workspace_folders: Sequence[Path] = (),
        *,
        config_path: Path | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self._folders = sorted(
            (folder.resolve() for folder in workspace_folders),
            key=lambda folder: len(str(folder)),
            reverse=True,
        )
        self._config_path = config_path
        self._overrides = dict(overrides or {})

    def workspace_root(self, uri: str) -> Path:
        """Return the most specific workspace folder holding ``uri``, else its directory."""

        document = _document_path(uri).resolve()
        for folder in self._folders:
            if document == folder or folder in document.parents:
                return folder
        return document.parent

    def settings_for(self, uri: str) -> Settings:
        return load_settings(
            self.workspace_root(uri),
            self._config_path,
            overrides=self._overrides,
        )


def _document_path(uri: str) -> Path:
    if uri_scheme(uri) == FILE_SCHEME:
        return Path(uri_to_path(uri))
    return Path(uri)


__all__ = [
    "EDITOR_SECTION_KEY",
    "FLYLINT_TOML",
    "FileSettingsProvider",
    "discover_config",
    "load_payload",
    "load_settings",
]
