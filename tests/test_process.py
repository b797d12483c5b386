# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for subprocess helpers."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from flylint.process import (
    TOOLS_DIR_ENV,
    SubprocessExecutionError,
    bundled_tools_dir,
    find_executable,
    run_analyzer,
    run_command,
    search_path,
)

pytestmark = pytest.mark.skipif(os.name == "nt", reason="uses POSIX shell scripts")


def _script(directory: Path, name: str) -> Path:
    path = directory / name
    path.write_text("#!/bin/sh\necho ok\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


def test_search_path_prepends_and_deduplicates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATH", os.pathsep.join(["/usr/bin", "/bin", "/usr/bin"]))

    assert search_path(["/opt/tools", "/bin"]) == os.pathsep.join(["/opt/tools", "/bin", "/usr/bin"])


def test_bundled_tools_dir_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(TOOLS_DIR_ENV, str(tmp_path))

    assert bundled_tools_dir() == tmp_path


def test_find_executable_searches_extra_dirs(tmp_path: Path) -> None:
    script = _script(tmp_path, "flylint-fake-cppcheck")

    assert find_executable("flylint-fake-cppcheck", [tmp_path]) == str(script)
    assert find_executable("flylint-not-installed", [tmp_path]) is None
    assert find_executable("", [tmp_path]) is None


def test_run_command_raises_on_failure_when_checked() -> None:
    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command(["/bin/sh", "-c", "echo bad >&2; exit 3"], capture_output=True)

    assert excinfo.value.returncode == 3
    assert excinfo.value.stderr == "bad\n"


def test_run_analyzer_ignores_exit_status(tmp_path: Path) -> None:
    completed = run_analyzer(["/bin/sh", "-c", "pwd; echo warn >&2; exit 1"], tmp_path)

    assert completed.returncode == 1
    assert Path(completed.stdout.strip()).resolve() == tmp_path.resolve()
    assert completed.stderr == "warn\n"


def test_run_command_reports_timeouts() -> None:
    completed = run_command(["/bin/sh", "-c", "sleep 5"], check=False, capture_output=True, timeout=0.2)

    assert completed.returncode == 124
    assert "timed out" in completed.stderr


def test_missing_relative_executable() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["flylint-not-installed"])
