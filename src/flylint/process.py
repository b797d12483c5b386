# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution and executable lookup."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# analyzer execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    # Bandit: type-only import of subprocess metadata is part of the safe wrapper.
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404

TOOLS_DIR_ENV: Final[str] = "FLYLINT_TOOLS_DIR"
TIMEOUT_RETURNCODE: Final[int] = 124

CommandRunner = Callable[[Sequence[str], Path], subprocess.CompletedProcess[str]]


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def bundled_tools_dir() -> Path:
    """Return the extra directory searched for bundled analyzer executables."""

    override = os.environ.get(TOOLS_DIR_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent


def search_path(extra_dirs: Iterable[str | Path] = ()) -> str:
    """Return ``PATH`` with ``extra_dirs`` prepended and duplicates removed."""

    entries = [str(entry) for entry in extra_dirs]
    entries.extend(os.environ.get("PATH", "").split(os.pathsep))
    return os.pathsep.join(dict.fromkeys(entry for entry in entries if entry))


def find_executable(name: str, extra_dirs: Iterable[str | Path] | None = None) -> str | None:
    """Resolve ``name`` on ``PATH`` plus the bundled tools directory.

    Args:
        name: Executable name or path from the settings.
        extra_dirs: Directories searched before ``PATH``; defaults to
            :func:`bundled_tools_dir`.

    Returns:
        str | None: Absolute path to the executable, or ``None`` when missing.
    """

    if not name:
        return None
    dirs = [bundled_tools_dir()] if extra_dirs is None else list(extra_dirs)
    return shutil.which(name, path=search_path(dirs))


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    capture_output: bool = False,
    timeout: float | None = None,
    discard_stdin: bool = False,
) -> _CompletedProcess[str]:
    """Execute *args* after normalising the executable path.

    Output is decoded as UTF-8 with undecodable bytes replaced.
    """
    normalized = _normalize_args(args)

    def _ensure_text(value: str | bytes | None) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return value.decode("utf-8", errors="replace")

    try:
        # Bandit: commands originate from validated analyzer settings; we pass
        # argument lists directly without shell expansion.
        completed: _CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            check=False,
            capture_output=capture_output,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            stdin=subprocess.DEVNULL if discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        stdout = _ensure_text(exc.stdout) or ""
        stderr = _ensure_text(exc.stderr)
        timeout_msg = (
            f"Command timed out after {timeout:.1f}s"
            if timeout is not None
            else "Command timed out"
        )
        combined_stderr = f"{stderr}\n{timeout_msg}" if stderr else timeout_msg
        completed = subprocess.CompletedProcess(
            args=(list(exc.cmd) if isinstance(exc.cmd, (list, tuple)) else list(normalized)),
            returncode=TIMEOUT_RETURNCODE,
            stdout=stdout,
            stderr=combined_stderr,
        )

    if check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


def run_analyzer(args: Sequence[str], cwd: Path) -> _CompletedProcess[str]:
    """Run an analyzer command line, capturing output and ignoring the exit status."""

    return run_command(args, cwd=cwd, check=False, capture_output=True, discard_stdin=True)


__all__ = [
    "CommandRunner",
    "SubprocessExecutionError",
    "TOOLS_DIR_ENV",
    "bundled_tools_dir",
    "find_executable",
    "run_analyzer",
    "run_command",
    "search_path",
]
