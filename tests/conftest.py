# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from flylint.config import Settings

RunnerFactory = Callable[..., "FakeRunner"]


class FakeRunner:
    """Command runner double returning canned analyzer output."""

    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.calls: list[tuple[list[str], Path]] = []

    def __call__(self, args: Sequence[str], cwd: Path) -> subprocess.CompletedProcess[str]:
        self.calls.append((list(args), cwd))
        return subprocess.CompletedProcess(list(args), self.returncode, self.stdout, self.stderr)


@pytest.fixture
def settings() -> Settings:
    """Return default settings."""
    return Settings()


@pytest.fixture
def make_runner() -> RunnerFactory:
    return FakeRunner


@pytest.fixture
def fake_executables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Resolve every analyzer executable to ``/usr/bin/<name>``."""

    def _find(name: str, extra_dirs: object = None) -> str | None:
        return f"/usr/bin/{name}" if name else None

    monkeypatch.setattr("flylint.linters.base.find_executable", _find)
