# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``flylint doctor``: report which analyzers can run in this workspace."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from ..config import Settings
from ..config_loader import load_settings
from ..errors import ConfigError
from ..linters.base import Linter
from ..linters.registry import LINTER_TYPES
from ..process import SubprocessExecutionError, run_command
from ._options import CONFIG_OPTION, ROOT_OPTION, resolve_root

VERSION_TIMEOUT = 10.0


@dataclass(slots=True)
class AnalyzerStatus:
    """Outcome of probing one analyzer."""

    name: str
    executable: str
    status: str
    ok: bool
    detail: str


def _capture_version(executable: str, root: Path) -> str | None:
    try:
        completed = run_command(
            [executable, "--version"],
            cwd=root,
            check=True,
            capture_output=True,
            discard_stdin=True,
            timeout=VERSION_TIMEOUT,
        )
    except (SubprocessExecutionError, OSError):
        return None
    output = (completed.stdout or completed.stderr or "").strip()
    return output.splitlines()[0] if output else None


def probe_analyzers(settings: Settings, root: Path) -> list[AnalyzerStatus]:
    """Probe every analyzer, whether or not the settings enable it."""

    statuses: list[AnalyzerStatus] = []
    for cls in LINTER_TYPES:
        linter: Linter = cls(settings, root)
        if not linter.active:
            statuses.append(AnalyzerStatus(cls.name, linter.executable, "disabled", True, "Disabled in settings"))
            continue
        linter.initialize()
        if linter.probe_error is not None:
            statuses.append(AnalyzerStatus(cls.name, linter.executable, "missing", False, str(linter.probe_error)))
            continue
        version = _capture_version(linter.executable, root)
        statuses.append(AnalyzerStatus(cls.name, linter.executable, "ok", True, version or linter.config_file or "-"))
    return statuses


def run_doctor(root: Path, config: Path | None = None, *, console: Console | None = None) -> int:
    """Print analyzer availability and return 0 when every enabled analyzer can run."""

    console = console or Console()
    console.print(Rule("[bold cyan]flylint Doctor[/bold cyan]"))
    try:
        settings = load_settings(root, config)
    except ConfigError as exc:
        console.print(Panel(f"[red]Failed to load configuration:[/red] {exc}", title="Configuration", border_style="red"))
        return 1

    table = Table(title="Analyzers", box=box.SIMPLE, expand=True)
    table.add_column("Analyzer", style="bold")
    table.add_column("Executable")
    table.add_column("Status")
    table.add_column("Details", overflow="fold")
    statuses = probe_analyzers(settings, root)
    for status in statuses:
        style = "green" if status.ok else "red"
        table.add_row(status.name, status.executable, f"[{style}]{status.status}[/]", status.detail)
    console.print(table)

    healthy = all(status.ok for status in statuses)
    overall_style = "green" if healthy else "red"
    console.print(Panel(f"[{overall_style}]Doctor completed[/]", border_style=overall_style))
    return 0 if healthy else 1


def doctor_command(root: ROOT_OPTION = None, config: CONFIG_OPTION = None) -> None:
    """Probe every analyzer and show which ones are available."""

    raise typer.Exit(code=run_doctor(resolve_root(root), config))


__all__ = ["AnalyzerStatus", "doctor_command", "probe_analyzers", "run_doctor"]
