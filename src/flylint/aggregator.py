# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Merge analyzer results into per-file diagnostic sets ready for publication.

A validation pass is split in three steps. :meth:`DiagnosticAggregator.collect`
runs every enabled analyzer against one document and keeps their raw output;
:meth:`DiagnosticAggregator.aggregate` groups that output by normalised file
identity, converts it to editor ranges and drops duplicates; finally
:meth:`DiagnosticAggregator.publications` decides which files are published and
which previously published files must be cleared.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ErrorTracker
from .expansion import VariableExpander
from .linters.base import Linter
from .models import Diagnostic, FileDiagnostics, Position, PublishedDiagnostic, Range
from .paths import is_within, matches_any_prefix, normalize_identity, same_file, to_uri

LOGGER = logging.getLogger(__name__)

UNKNOWN_MESSAGE = "Unknown error"
DEFAULT_SOURCE = "flylint"

_NON_BLANK = re.compile(r"\S")


@dataclass(slots=True)
class LintPassResult:
    """Raw output of one validation pass over a single document."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    tracker: ErrorTracker = field(default_factory=ErrorTracker)


def split_document(text: str) -> list[str]:
    return text.replace("\r", "").split("\n")


def make_diagnostic(diagnostic: Diagnostic, document_lines: Sequence[str] | None = None) -> PublishedDiagnostic:
    """Convert a parsed diagnostic into its published form.

    When ``document_lines`` holds the text of the file the diagnostic points
    at, the line is clamped to the document and a diagnostic without a column
    spans the line from its first non-blank character to its end. Otherwise
    the range covers the single character at the reported column.
    """

    line = diagnostic.line
    column = diagnostic.column or 0
    start = column
    end = column + 1
    if document_lines:
        line = max(0, min(line, len(document_lines) - 1))
        if column == 0:
            text = document_lines[line]
            first = _NON_BLANK.search(text)
            if first is not None:
                start = first.start()
            end = len(text)
    return PublishedDiagnostic(
        severity=diagnostic.severity,
        range=Range(start=Position(line=line, character=start), end=Position(line=line, character=end)),
        message=diagnostic.message or UNKNOWN_MESSAGE,
        code=diagnostic.code or None,
        source=diagnostic.source or DEFAULT_SOURCE,
    )


def dedupe(diagnostics: Iterable[PublishedDiagnostic]) -> list[PublishedDiagnostic]:
    """Return ``diagnostics`` without repeated ``(line, code, message)`` keys, first one wins."""

    seen: set[tuple[int, str, str]] = set()
    unique: list[PublishedDiagnostic] = []
    for diagnostic in diagnostics:
        key = diagnostic.dedupe_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(diagnostic)
    return unique


class DiagnosticAggregator:
    """Group and filter analyzer output for one workspace root.

    Args:
        workspace_root: Root used to resolve relative file names and to decide
            which files may be published.
        exclude_paths: Path prefixes whose diagnostics are never published.
            Relative prefixes are joined to the root; variables are expanded.
    """

    def __init__(self, workspace_root: str | Path, exclude_paths: Iterable[str] = ()) -> None:
        self.workspace_root = str(workspace_root)
        self.root_identity = normalize_identity(self.workspace_root, self.workspace_root)
        expander = VariableExpander(self.workspace_root)
        self.excluded = tuple(
            normalize_identity(path, self.workspace_root) for path in expander.expand_all(exclude_paths)
        )

    def identity(self, file_name: str) -> str:
        return normalize_identity(file_name, self.workspace_root)

    def collect(
        self,
        linters: Sequence[Linter],
        file_path: str,
        tmp_file_name: str,
        *,
        parallel: bool = False,
    ) -> LintPassResult:
        """Run every enabled linter against ``file_path`` and gather its diagnostics.

        Failures are recorded per analyzer in the result's tracker and never
        abort the pass. Diagnostics keep the analyzer order even when the
        analyzers run concurrently.
        """

        result = LintPassResult()
        runnable = [linter for linter in linters if linter.enabled]
        outputs: list[list[Diagnostic]] = [[] for _ in runnable]

        if parallel and len(runnable) > 1:
            with ThreadPoolExecutor(max_workers=len(runnable)) as executor:
                future_map = {
                    executor.submit(linter.lint, file_path, self.workspace_root, tmp_file_name): index
                    for index, linter in enumerate(runnable)
                }
                for future in as_completed(future_map):
                    index = future_map[future]
                    try:
                        outputs[index] = future.result()
                    except Exception as exc:  # noqa: BLE001
                        self._record_failure(result.tracker, runnable[index], exc, file_path)
        else:
            for index, linter in enumerate(runnable):
                try:
                    outputs[index] = linter.lint(file_path, self.workspace_root, tmp_file_name)
                except Exception as exc:  # noqa: BLE001
                    self._record_failure(result.tracker, linter, exc, file_path)

        for diagnostics in outputs:
            result.diagnostics.extend(diagnostics)
        return result

    @staticmethod
    def _record_failure(tracker: ErrorTracker, linter: Linter, exc: Exception, file_path: str) -> None:
        LOGGER.warning("%s failed while validating %s: %s", linter.name, file_path, exc, exc_info=exc)
        tracker.add_error(exc, document=file_path)

    def aggregate(
        self,
        raw: Iterable[Diagnostic],
        file_path: str,
        document_lines: Sequence[str] | None = None,
    ) -> dict[str, list[PublishedDiagnostic]]:
        """Group ``raw`` by file identity and convert it to published diagnostics.

        Args:
            raw: Diagnostics in analyzer order.
            file_path: Path of the document that was validated.
            document_lines: Text of that document, used for its ranges.

        Returns:
            dict[str, list[PublishedDiagnostic]]: Identity to de-duplicated
            diagnostics, in order of first appearance.
        """

        target = self.identity(file_path)
        grouped: dict[str, list[PublishedDiagnostic]] = {}
        for diagnostic in raw:
            if diagnostic.is_parse_error:
                continue
            identity = self.identity(diagnostic.file_name) if diagnostic.file_name else target
            lines = document_lines if same_file(identity, target) else None
            grouped.setdefault(identity, []).append(make_diagnostic(diagnostic, lines))
        return {identity: dedupe(diagnostics) for identity, diagnostics in grouped.items()}

    def is_publishable(self, identity: str) -> bool:
        return is_within(identity, self.root_identity) and not matches_any_prefix(identity, self.excluded)

    def publications(
        self,
        groups: Mapping[str, Sequence[PublishedDiagnostic]],
        file_path: str,
        previous: Iterable[str] = (),
    ) -> list[FileDiagnostics]:
        """Return the diagnostic sets to publish after a pass.

        Args:
            groups: Output of :meth:`aggregate`.
            file_path: Path of the document that was validated.
            previous: Identities that carried diagnostics after the last pass.

        Returns:
            list[FileDiagnostics]: One set per publishable file with
            diagnostics, then clears for the target and for previously
            published files that no longer have any.
        """

        published: list[FileDiagnostics] = []
        reported: list[str] = []
        for identity, diagnostics in groups.items():
            if not diagnostics:
                continue
            if not self.is_publishable(identity):
                LOGGER.debug("not publishing diagnostics for %s", identity)
                continue
            published.append(FileDiagnostics(uri=to_uri(identity), path=identity, diagnostics=list(diagnostics)))
            reported.append(identity)

        for identity in (self.identity(file_path), *previous):
            if any(same_file(identity, seen) for seen in reported):
                continue
            published.append(FileDiagnostics(uri=to_uri(identity), path=identity))
            reported.append(identity)
        return published


__all__ = [
    "DiagnosticAggregator",
    "LintPassResult",
    "dedupe",
    "make_diagnostic",
    "split_document",
]
