# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared Typer option declarations for the flylint commands."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


FILES_ARGUMENT = Annotated[
    list[Path],
    typer.Argument(
        help="C/C++ source or header files to analyse.",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
]
ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Workspace root; defaults to the current directory."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Settings file (.flylint.toml, pyproject.toml or settings.json)."),
]
FORMAT_OPTION = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", case_sensitive=False, help="Report format."),
]
PARSE_ERRORS_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--ignore-parse-errors/--strict",
        help="Skip analyzer output lines that cannot be parsed instead of failing the analyzer.",
    ),
]
PARALLEL_OPTION = Annotated[
    bool | None,
    typer.Option("--parallel/--serial", help="Run the analyzers for a file concurrently."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Log analyzer command lines and raw output."),
]
COLOR_OPTION = Annotated[
    bool | None,
    typer.Option("--color/--no-color", help="Force or disable coloured output."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
OUTPUT_OPTION = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Also write the JSON report to this path."),
]


def resolve_root(root: Path | None) -> Path:
    return (root or Path.cwd()).resolve()


__all__ = [
    "COLOR_OPTION",
    "CONFIG_OPTION",
    "DEBUG_OPTION",
    "EMOJI_OPTION",
    "FILES_ARGUMENT",
    "FORMAT_OPTION",
    "OUTPUT_OPTION",
    "OutputFormat",
    "PARALLEL_OPTION",
    "PARSE_ERRORS_OPTION",
    "ROOT_OPTION",
    "resolve_root",
]
