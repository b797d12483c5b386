# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the analyzer catalogue."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from flylint.config import Settings
from flylint.errors import ConfigFileNotFoundError
from flylint.linters import LINTER_TYPES, build_linters


def test_catalogue_order() -> None:
    assert [cls.name for cls in LINTER_TYPES] == [
        "Clang",
        "CppCheck",
        "Flexelint",
        "PclintPlus",
        "FlawFinder",
        "Lizard",
    ]


@pytest.mark.usefixtures("fake_executables")
def test_build_linters_skips_disabled_blocks_and_probes_the_rest(tmp_path: Path) -> None:
    settings = Settings()
    settings.cppcheck.enable = False
    settings.flexelint.config_file = "flylint-test-missing.lnt"
    settings.pclintplus.config_file = "flylint-test-missing.lnt"

    linters = build_linters(settings, tmp_path)

    assert [linter.name for linter in linters] == ["Clang", "Flexelint", "PclintPlus", "FlawFinder", "Lizard"]
    enabled = {linter.name: linter.enabled for linter in linters}
    assert enabled == {
        "Clang": True,
        "Flexelint": False,
        "PclintPlus": False,
        "FlawFinder": True,
        "Lizard": True,
    }
    assert isinstance(linters[1].probe_error, ConfigFileNotFoundError)


@pytest.mark.usefixtures("fake_executables")
def test_build_linters_passes_runner(tmp_path: Path, make_runner: Callable[..., Any]) -> None:
    settings = Settings()
    for key in ("clang", "cppcheck", "flexelint", "pclintplus", "flawfinder"):
        settings.analyzer(key).enable = False
    runner = make_runner()

    (lizard,) = build_linters(settings, tmp_path, runner=runner)
    lizard.lint("main.c")

    assert runner.calls[0][0] == ["/usr/bin/lizard", "--warnings_only", "main.c"]
