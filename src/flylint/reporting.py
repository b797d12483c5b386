# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render published diagnostics for terminals and machine consumers."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path

from .models import FileDiagnostics
from .severity import Severity


def _display_path(path: str, root: str | None) -> str:
    if root:
        prefix = root.rstrip("/") + "/"
        if path.startswith(prefix):
            return path[len(prefix) :]
    return path


def render_text(results: Iterable[FileDiagnostics], *, root: str | None = None) -> list[str]:
    """Return one ``path:line:col: severity [source code] message`` line per diagnostic.

    Line and column numbers are 1-based; paths under ``root`` are shown
    relative to it.
    """

    lines: list[str] = []
    for entry in results:
        path = _display_path(entry.path, root)
        for diagnostic in entry.diagnostics:
            start = diagnostic.range.start
            tag = diagnostic.source if diagnostic.code is None else f"{diagnostic.source} {diagnostic.code}"
            lines.append(
                f"{path}:{start.line + 1}:{start.character + 1}: "
                f"{diagnostic.severity.label.lower()} [{tag}] {diagnostic.message}",
            )
    return lines


def render_json(results: Iterable[FileDiagnostics]) -> str:
    """Return the protocol dictionaries for ``results`` as an indented JSON array."""

    return json.dumps([entry.to_lsp() for entry in results], indent=2)


def write_json_report(results: Sequence[FileDiagnostics], path: Path) -> None:
    path.write_text(render_json(results), encoding="utf-8")


def severity_counts(results: Iterable[FileDiagnostics]) -> Counter[Severity]:
    return Counter(diagnostic.severity for entry in results for diagnostic in entry.diagnostics)


def has_errors(results: Iterable[FileDiagnostics]) -> bool:
    return severity_counts(results)[Severity.ERROR] > 0


__all__ = ["has_errors", "render_json", "render_text", "severity_counts", "write_json_report"]
