# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run C/C++ static analyzers and merge their output into per-file diagnostics."""

from __future__ import annotations

from importlib import metadata

from .aggregator import DiagnosticAggregator, LintPassResult
from .config import LintTrigger, Settings
from .errors import ConfigError, ErrorTracker, FlylintError, LinterParseError
from .models import Diagnostic, FileDiagnostics, PublishedDiagnostic
from .session import TextDocument, ValidationSession
from .severity import Severity

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticAggregator",
    "ErrorTracker",
    "FileDiagnostics",
    "FlylintError",
    "LintPassResult",
    "LintTrigger",
    "LinterParseError",
    "PublishedDiagnostic",
    "Settings",
    "Severity",
    "TextDocument",
    "ValidationSession",
    "__version__",
]

try:
    __version__ = metadata.version("flylint")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
