# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``flylint lint``: analyse files once and report the merged diagnostics."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import typer

from ..config_loader import FileSettingsProvider
from ..errors import ConfigError
from ..logging import configure_logging, detect_tty, fail, get_console_manager, ok, warn
from ..models import FileDiagnostics
from ..paths import is_within, normalize_identity, to_uri
from ..reporting import has_errors, render_json, render_text, write_json_report
from ..session import TextDocument, ValidationSession
from ._options import (
    COLOR_OPTION,
    CONFIG_OPTION,
    DEBUG_OPTION,
    EMOJI_OPTION,
    FILES_ARGUMENT,
    FORMAT_OPTION,
    OUTPUT_OPTION,
    PARALLEL_OPTION,
    PARSE_ERRORS_OPTION,
    ROOT_OPTION,
    OutputFormat,
    resolve_root,
)

LOGGER = logging.getLogger(__name__)

CONFIG_ERROR_EXIT = 2


class CollectingPublisher:
    """Publisher that keeps the latest diagnostic set per file and echoes messages."""

    def __init__(self, *, use_emoji: bool, use_color: bool | None, quiet: bool = False) -> None:
        self.results: dict[str, FileDiagnostics] = {}
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self._quiet = quiet
        self._use_emoji = use_emoji
        self._use_color = use_color

    def publish(self, diagnostics: FileDiagnostics) -> None:
        self.results[diagnostics.path] = diagnostics

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)
        if self._quiet:
            LOGGER.warning("%s", message)
            return
        warn(message, use_emoji=self._use_emoji, use_color=self._use_color)

    def show_errors(self, messages: Sequence[str]) -> None:
        for message in messages:
            self.errors.append(message)
            if self._quiet:
                LOGGER.error("%s", message)
                continue
            fail(message, use_emoji=self._use_emoji, use_color=self._use_color)

    def reported(self) -> list[FileDiagnostics]:
        return [entry for entry in self.results.values() if not entry.is_clear]


def _overrides(ignore_parse_errors: bool | None, parallel: bool | None, debug: bool) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if ignore_parse_errors is not None:
        overrides["ignoreParseErrors"] = ignore_parse_errors
    if parallel is not None:
        overrides["parallel"] = parallel
    if debug:
        overrides["debug"] = True
    return overrides


def lint_command(
    files: FILES_ARGUMENT,
    root: ROOT_OPTION = None,
    config: CONFIG_OPTION = None,
    output_format: FORMAT_OPTION = OutputFormat.TEXT,
    ignore_parse_errors: PARSE_ERRORS_OPTION = None,
    parallel: PARALLEL_OPTION = None,
    debug: DEBUG_OPTION = False,
    color: COLOR_OPTION = None,
    emoji: EMOJI_OPTION = True,
    output: OUTPUT_OPTION = None,
) -> None:
    """Run every enabled analyzer on FILES and print the diagnostics."""

    configure_logging(debug=debug, use_color=color)
    workspace = resolve_root(root)
    provider = FileSettingsProvider(
        (workspace,),
        config_path=config,
        overrides=_overrides(ignore_parse_errors, parallel, debug),
    )
    publisher = CollectingPublisher(
        use_emoji=emoji,
        use_color=color,
        quiet=output_format is OutputFormat.JSON,
    )
    session = ValidationSession(provider, publisher)
    root_identity = normalize_identity(workspace, workspace)

    try:
        for path in files:
            identity = normalize_identity(path, workspace)
            if not is_within(identity, root_identity):
                publisher.show_warning(
                    f"{path} is outside the workspace root {workspace}; its diagnostics are not reported.",
                )
            uri = to_uri(identity)
            text = Path(path).read_text(encoding="utf-8", errors="replace")
            session.validate(TextDocument(uri=uri, version=0, text=text), force=True)
    except ConfigError as exc:
        fail(str(exc), use_emoji=emoji, use_color=color)
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from exc

    reported = publisher.reported()
    if output is not None:
        write_json_report(reported, output)
    if output_format is OutputFormat.JSON:
        typer.echo(render_json(reported))
    else:
        console = get_console_manager().get(color=detect_tty() if color is None else color, emoji=emoji)
        for line in render_text(reported, root=root_identity):
            console.print(line, markup=False, highlight=False)
        if not reported and not publisher.errors:
            ok("No diagnostics reported", use_emoji=emoji, use_color=color)

    if has_errors(reported):
        raise typer.Exit(code=1)


__all__ = ["CollectingPublisher", "lint_command"]
