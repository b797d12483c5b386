# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the flylint commands."""

from __future__ import annotations

import typer

from .doctor import doctor_command
from .lint import lint_command

app = typer.Typer(help="Run C/C++ static analyzers and merge their diagnostics.", no_args_is_help=True)
app.command(name="lint")(lint_command)
app.command(name="doctor")(doctor_command)

__all__ = ["app"]
