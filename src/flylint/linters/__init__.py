# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Adapters that run one external C/C++ analyzer and parse its output."""

from __future__ import annotations

from .base import Linter, is_header, locate_file, strip_quotes
from .clang import Clang
from .cppcheck import CppCheck
from .flawfinder import FlawFinder
from .flexelint import Flexelint
from .lizard import Lizard
from .pclintplus import PclintPlus
from .registry import LINTER_TYPES, build_linters

__all__ = [
    "Clang",
    "CppCheck",
    "FlawFinder",
    "Flexelint",
    "LINTER_TYPES",
    "Linter",
    "Lizard",
    "PclintPlus",
    "build_linters",
    "is_header",
    "locate_file",
    "strip_quotes",
]
