# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the flylint analyzer adapters.

Every model accepts the editor's camelCase keys (``includePaths``,
``severityLevels``...) as well as the snake_case field names. Options shared by
all analyzers live on :class:`Settings` and cascade into each analyzer block
unless that block overrides them; an override of ``None`` means "inherit".
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Final, Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .errors import ConfigError
from .severity import Severity

_IS_WINDOWS: Final[bool] = sys.platform == "win32"

RunMode = Literal["onSave", "onType", "onBuild"]

DEFAULT_HEADER_ARGS: Final[tuple[str, ...]] = (
    "-e750",
    "-e751",
    "-e752",
    "-e753",
    "-e754",
    "-e1526",
    "-e1714",
)


def _executable(name: str) -> str:
    return f"{name}.exe" if _IS_WINDOWS else name


class LintTrigger(IntEnum):
    """Editor events that can start a validation pass."""

    ON_SAVE = 1
    ON_TYPE = 2
    ON_BUILD = 3

    @classmethod
    def from_setting(cls, value: str) -> LintTrigger:
        """Return the trigger for a ``run`` setting (``onSave``, ``onType``, ``onBuild``)."""

        try:
            return _TRIGGERS_BY_SETTING[value]
        except KeyError as exc:
            raise ConfigError(f"Unknown onLint value of {value}") from exc


_TRIGGERS_BY_SETTING: Final[dict[str, LintTrigger]] = {
    "onSave": LintTrigger.ON_SAVE,
    "onType": LintTrigger.ON_TYPE,
    "onBuild": LintTrigger.ON_BUILD,
}


def should_run(trigger: LintTrigger | None, run: RunMode) -> bool:
    """Return ``True`` when an event of kind ``trigger`` should lint under ``run``.

    ``None`` stands for explicit requests (document open, analyse commands)
    which always run. Saving also lints in ``onType`` mode.
    """

    if trigger is None:
        return True
    configured = LintTrigger.from_setting(run)
    if trigger is LintTrigger.ON_SAVE:
        return configured in (LintTrigger.ON_SAVE, LintTrigger.ON_TYPE)
    return configured is trigger


class _SettingsModel(BaseModel):
    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class AnalyzerSettings(_SettingsModel):
    """Options shared by every analyzer block."""

    enable: bool = True
    executable: str = ""
    config_file: str = ""
    severity_levels: dict[str, Severity] = Field(default_factory=dict)
    language: str | None = None
    standard: list[str] | None = None
    defines: list[str] | None = None
    undefines: list[str] | None = None
    include_paths: list[str] | None = None
    extra_args: list[str] | None = None

    @field_validator("severity_levels", mode="before")
    @classmethod
    def _coerce_severity_levels(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        return {str(key): Severity.from_label(level) for key, level in value.items()}


class ClangSettings(AnalyzerSettings):
    executable: str = _executable("clang")
    config_file: str = ".clang_complete"
    severity_levels: dict[str, Severity] = Field(
        default_factory=lambda: {
            "error": Severity.ERROR,
            "fatal": Severity.ERROR,
            "warning": Severity.WARNING,
            "note": Severity.INFORMATION,
        },
    )
    warnings: list[str] | None = Field(default_factory=lambda: ["all", "extra", "everything"])
    pedantic: bool = False
    pedantic_errors: bool = False
    ms_extensions: bool = False
    no_exceptions: bool = True
    no_rtti: bool = True
    blocks: bool = True
    includes: list[str] | None = None
    standard_libs: list[str] | None = None


class CppCheckSettings(AnalyzerSettings):
    executable: str = _executable("cppcheck")
    config_file: str = ".clang_complete"
    severity_levels: dict[str, Severity] = Field(
        default_factory=lambda: {
            "error": Severity.ERROR,
            "warning": Severity.WARNING,
            "style": Severity.INFORMATION,
            "performance": Severity.WARNING,
            "portability": Severity.WARNING,
            "information": Severity.INFORMATION,
        },
    )
    unused_functions: bool = False
    verbose: bool = False
    force: bool = False
    inconclusive: bool = False
    platform: str | None = "native"
    suppressions: list[str] = Field(default_factory=list)
    addons: list[str] = Field(default_factory=list)


class FlexelintSettings(AnalyzerSettings):
    executable: str = _executable("flexelint")
    config_file: str = ".flexelint.lnt"
    header_args: str | list[str] = Field(default_factory=lambda: list(DEFAULT_HEADER_ARGS))
    severity_levels: dict[str, Severity] = Field(
        default_factory=lambda: {
            "Error": Severity.ERROR,
            "Warning": Severity.WARNING,
            "Info": Severity.INFORMATION,
            "Note": Severity.HINT,
        },
    )


class PclintPlusSettings(AnalyzerSettings):
    executable: str = _executable("pclp")
    config_file: str = ".pclintplus.lnt"
    header_args: str | list[str] = Field(default_factory=lambda: list(DEFAULT_HEADER_ARGS))
    severity_levels: dict[str, Severity] = Field(
        default_factory=lambda: {
            "error": Severity.ERROR,
            "warning": Severity.WARNING,
            "info": Severity.INFORMATION,
            "note": Severity.HINT,
            "supplemental": Severity.HINT,
        },
    )


class FlawFinderSettings(AnalyzerSettings):
    executable: str = "flawfinder"
    severity_levels: dict[str, Severity] = Field(
        default_factory=lambda: {
            "5": Severity.ERROR,
            "4": Severity.WARNING,
            "3": Severity.INFORMATION,
            "2": Severity.INFORMATION,
            "1": Severity.INFORMATION,
            "0": Severity.INFORMATION,
        },
    )


class LizardSettings(AnalyzerSettings):
    executable: str = "lizard"


@dataclass(frozen=True, slots=True)
class CommonOptions:
    """Common options after cascading the top-level values into one analyzer."""

    language: str
    standard: list[str] | None
    defines: list[str]
    undefines: list[str]
    include_paths: list[str]


ANALYZER_KEYS: Final[tuple[str, ...]] = (
    "clang",
    "cppcheck",
    "flexelint",
    "pclintplus",
    "flawfinder",
    "lizard",
)


class Settings(_SettingsModel):
    """Resolved settings for one document."""

    enable: bool = True
    debug: bool = False
    run: RunMode = "onSave"
    ignore_parse_errors: bool = False
    parallel: bool = False
    exclude_from_workspace_paths: list[str] = Field(default_factory=list)

    language: str = "c"
    standard: list[str] | None = Field(default_factory=lambda: ["c99"])
    defines: list[str] = Field(default_factory=list)
    undefines: list[str] = Field(default_factory=list)
    include_paths: list[str] = Field(default_factory=list)

    clang: ClangSettings = Field(default_factory=ClangSettings)
    cppcheck: CppCheckSettings = Field(default_factory=CppCheckSettings)
    flexelint: FlexelintSettings = Field(default_factory=FlexelintSettings)
    pclintplus: PclintPlusSettings = Field(default_factory=PclintPlusSettings)
    flawfinder: FlawFinderSettings = Field(default_factory=FlawFinderSettings)
    lizard: LizardSettings = Field(default_factory=LizardSettings)

    def analyzer(self, key: str) -> AnalyzerSettings:
        """Return the settings block for analyzer ``key`` (``clang``, ``cppcheck``...)."""

        if key not in ANALYZER_KEYS:
            raise ConfigError(f"Unknown analyzer '{key}'")
        return cast(AnalyzerSettings, getattr(self, key))

    def cascaded(self, key: str) -> CommonOptions:
        """Return the common options for ``key`` with analyzer overrides applied."""

        block = self.analyzer(key)
        return CommonOptions(
            language=block.language if block.language is not None else self.language,
            standard=list(block.standard) if block.standard is not None else _copy(self.standard),
            defines=list(block.defines if block.defines is not None else self.defines),
            undefines=list(block.undefines if block.undefines is not None else self.undefines),
            include_paths=list(
                block.include_paths if block.include_paths is not None else self.include_paths,
            ),
        )

    def snapshot(self) -> Settings:
        """Return a deep copy insulated from later mutation of this instance."""

        return self.model_copy(deep=True)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Settings:
        """Validate ``data`` into settings, raising :class:`ConfigError` on failure."""

        try:
            return cls.model_validate(dict(data))
        except ValueError as exc:
            raise ConfigError(f"Invalid flylint settings: {exc}") from exc


def _copy(values: list[str] | None) -> list[str] | None:
    return None if values is None else list(values)


__all__ = [
    "ANALYZER_KEYS",
    "AnalyzerSettings",
    "ClangSettings",
    "CommonOptions",
    "CppCheckSettings",
    "DEFAULT_HEADER_ARGS",
    "FlawFinderSettings",
    "FlexelintSettings",
    "LintTrigger",
    "LizardSettings",
    "PclintPlusSettings",
    "RunMode",
    "Settings",
    "should_run",
]
