# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Per-document validation driver sitting between an editor transport and the analyzers.

The session owns four caches keyed by document URI: resolved settings, probed
analyzers, the last validated version and the files that carried diagnostics
after the last pass. Transports feed it :class:`TextDocument` snapshots and
receive results through a :class:`DiagnosticPublisher`.
"""

from __future__ import annotations

import copy
import logging
import tempfile
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Protocol

from .aggregator import DiagnosticAggregator, split_document
from .config import LintTrigger, Settings, should_run
from .linters.base import Linter
from .linters.registry import build_linters
from .models import FileDiagnostics
from .paths import FILE_SCHEME, uri_scheme, uri_to_path

LOGGER = logging.getLogger(__name__)

LinterFactory = Callable[[Settings, Path], list[Linter]]


@dataclass(frozen=True, slots=True)
class TextDocument:
    """Snapshot of an open document as the editor last reported it."""

    uri: str
    version: int
    text: str

    @property
    def lines(self) -> list[str]:
        return split_document(self.text)


class SettingsProvider(Protocol):
    """Source of settings and workspace roots for documents."""

    def workspace_root(self, uri: str) -> Path: ...

    def settings_for(self, uri: str) -> Settings: ...


class DiagnosticPublisher(Protocol):
    """Sink receiving diagnostics and user-facing messages."""

    def publish(self, diagnostics: FileDiagnostics) -> None: ...

    def show_warning(self, message: str) -> None: ...

    def show_errors(self, messages: Sequence[str]) -> None: ...


@contextmanager
def _shadow_copy(text: str, suffix: str) -> Iterator[Path]:
    """Yield a temporary file holding ``text``; removed afterwards."""

    handle = tempfile.NamedTemporaryFile("w", suffix=suffix, delete=False, encoding="utf-8", newline="")
    path = Path(handle.name)
    try:
        with handle:
            handle.write(text)
        yield path
    finally:
        path.unlink(missing_ok=True)


def _default_factory(settings: Settings, workspace_root: Path) -> list[Linter]:
    return build_linters(settings, workspace_root)


class ValidationSession:
    """Validate documents and publish the merged analyzer diagnostics.

    Args:
        settings_provider: Resolves settings and the workspace root per URI.
        publisher: Receives per-file diagnostic sets and messages.
        linter_factory: Builds probed analyzers from settings; defaults to
            :func:`flylint.linters.registry.build_linters`.
    """

    def __init__(
        self,
        settings_provider: SettingsProvider,
        publisher: DiagnosticPublisher,
        *,
        linter_factory: LinterFactory = _default_factory,
    ) -> None:
        self._provider = settings_provider
        self._publisher = publisher
        self._factory = linter_factory
        self._settings: dict[str, Settings] = {}
        self._linters: dict[str, list[Linter]] = {}
        self._versions: dict[str, int] = {}
        self._published: dict[str, tuple[str, ...]] = {}

    def settings_for(self, uri: str) -> Settings:
        settings = self._settings.get(uri)
        if settings is None:
            settings = self._provider.settings_for(uri).snapshot()
            self._settings[uri] = settings
        return settings

    def linters_for(self, uri: str) -> list[Linter]:
        """Return the cached analyzers for ``uri``, probing them on first use."""

        linters = self._linters.get(uri)
        if linters is None:
            linters = self._factory(self.settings_for(uri), self._provider.workspace_root(uri))
            for linter in linters:
                if linter.active and not linter.enabled:
                    self._publisher.show_warning(f"Unable to activate {linter.name} analyzer.")
            self._linters[uri] = linters
        return linters

    def last_version(self, uri: str) -> int | None:
        return self._versions.get(uri)

    def validate(
        self,
        document: TextDocument,
        *,
        force: bool = False,
        trigger: LintTrigger | None = None,
    ) -> list[FileDiagnostics] | None:
        """Run one validation pass over ``document``.

        Args:
            document: Snapshot to validate.
            force: Validate even when this version was already validated.
            trigger: Editor event that caused the request; ``None`` for
                explicit requests.

        Returns:
            list[FileDiagnostics] | None: The published sets, or ``None`` when
            the pass was skipped.
        """

        uri = document.uri
        if uri_scheme(uri) != FILE_SCHEME:
            LOGGER.info("Skipping scan of non-local content at %s", uri)
            return None

        settings = self.settings_for(uri)
        if not settings.enable:
            return None
        if not should_run(trigger, settings.run):
            LOGGER.debug("Skipping analysis of %s for %s in %s mode", uri, trigger, settings.run)
            return None

        last = self._versions.get(uri)
        if last is not None and document.version <= last and not force:
            if settings.debug:
                LOGGER.debug("Skipping %s; version %s was already scanned", uri, document.version)
            return None

        file_path = uri_to_path(uri)
        workspace_root = self._provider.workspace_root(uri)
        linters = copy.deepcopy(self.linters_for(uri))
        aggregator = DiagnosticAggregator(workspace_root, settings.exclude_from_workspace_paths)

        LOGGER.info("Performing lint scan of %s...", file_path)
        with _shadow_copy(document.text, PurePath(file_path).suffix) as shadow:
            result = aggregator.collect(linters, file_path, str(shadow), parallel=settings.parallel)

        groups = aggregator.aggregate(result.diagnostics, file_path, document.lines)
        publications = aggregator.publications(groups, file_path, self._published.get(uri, ()))
        for publication in publications:
            self._publisher.publish(publication)

        self._published[uri] = tuple(entry.path for entry in publications if not entry.is_clear)
        self._versions[uri] = document.version
        result.tracker.send(self._publisher.show_errors)
        LOGGER.info("Completed lint scans of %s", file_path)
        return publications

    def validate_all(
        self,
        documents: Iterable[TextDocument],
        *,
        force: bool = False,
        trigger: LintTrigger | None = None,
    ) -> dict[str, list[FileDiagnostics] | None]:
        return {document.uri: self.validate(document, force=force, trigger=trigger) for document in documents}

    def close(self, uri: str) -> None:
        """Forget every cached entry for ``uri``."""

        self._settings.pop(uri, None)
        self._linters.pop(uri, None)
        self._versions.pop(uri, None)
        self._published.pop(uri, None)

    def flush(self) -> None:
        """Drop cached settings, analyzers and versions; published files are kept for clearing."""

        self._settings.clear()
        self._linters.clear()
        self._versions.clear()

    def reconfigure(self, documents: Iterable[TextDocument], *, force: bool = False) -> None:
        """Re-read settings after a configuration change and revalidate ``documents``."""

        self.flush()
        self.validate_all(documents, force=force)


__all__ = [
    "DiagnosticPublisher",
    "LinterFactory",
    "SettingsProvider",
    "TextDocument",
    "ValidationSession",
]
