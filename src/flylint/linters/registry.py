# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Closed catalogue of analyzer adapters and the factory that probes them."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..config import Settings
from ..process import CommandRunner, run_analyzer
from .base import Linter
from .clang import Clang
from .cppcheck import CppCheck
from .flawfinder import FlawFinder
from .flexelint import Flexelint
from .lizard import Lizard
from .pclintplus import PclintPlus

LOGGER = logging.getLogger(__name__)

# Execution and publication order.
LINTER_TYPES: Final[tuple[type[Linter], ...]] = (
    Clang,
    CppCheck,
    Flexelint,
    PclintPlus,
    FlawFinder,
    Lizard,
)

def build_linters(
    settings: Settings,
    workspace_root: str | Path,
    *,
    runner: CommandRunner = run_analyzer,
    search_dirs: Sequence[Path] | None = None,
) -> list[Linter]:
    """Instantiate and probe every adapter whose settings block is enabled.

    Args:
        settings: Resolved settings for the workspace.
        workspace_root: Root used for variable expansion and config lookup.
        runner: Command runner handed to each adapter.
        search_dirs: Extra directories searched before ``PATH``.

    Returns:
        list[Linter]: Probed adapters in catalogue order. Adapters whose probe
        failed are included with ``enabled`` set to ``False``.
    """

    linters: list[Linter] = []
    for cls in LINTER_TYPES:
        if not settings.analyzer(cls.settings_key).enable:
            continue
        linter = cls(settings, workspace_root, runner=runner, search_dirs=search_dirs).initialize()
        LOGGER.debug("prepared %r", linter)
        linters.append(linter)
    return linters


__all__ = ["LINTER_TYPES", "build_linters"]
