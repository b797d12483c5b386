# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about analyzer-reported filesystem paths.

Analyzers print paths in whatever convention their toolchain uses: POSIX,
DOS drive-letter (``C:\\src\\main.c``), drive-relative (``C:src\\main.c``) or
UNC (``\\\\server\\share\\main.c``). Everything here works on strings so the
same identity rules apply whatever platform flylint itself runs on.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable
from os import PathLike
from typing import Final
from urllib.parse import quote, unquote, urlparse

_Pathish = str | PathLike[str]

_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[\\/]+")
_DRIVE_ABSOLUTE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z]:[\\/]")
_DRIVE_PREFIX: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z]:")
_UNIXIFY_PREFIX: Final[re.Pattern[str]] = re.compile(r"^([a-zA-Z]+:|\./)")
_EXTENDED_LENGTH_PREFIX: Final[str] = "\\\\?\\"
_UNC_PREFIX: Final[str] = "//"
FILE_SCHEME: Final[str] = "file"


def _unixify(path: str) -> str:
    collapsed = _SEPARATORS.sub("/", path)
    if len(collapsed) > 1 and collapsed.endswith("/"):
        collapsed = collapsed[:-1]
    return _UNIXIFY_PREFIX.sub("", collapsed, count=1)


def sys_path(path: _Pathish) -> str:
    """Return ``path`` in the forward-slash form passed to analyzer processes.

    DOS absolute paths keep their drive letter (``c:\\a\\b.txt`` becomes
    ``c:/a/b.txt``), drive-relative paths lose it (``C:a\\b.txt`` becomes
    ``a/b.txt``) and UNC paths keep both leading slashes.

    Args:
        path: Path as supplied by the editor or the settings.

    Returns:
        str: Slash-separated rendition suitable for POSIX-style toolchains.
    """

    text = str(path)
    if _DRIVE_PREFIX.match(text):
        if _DRIVE_ABSOLUTE.match(text):
            segments = _SEPARATORS.split(text)
            if segments and segments[-1] == "":
                segments.pop()
            return "/".join(segments)
        text = text[2:]
    elif text.startswith("\\\\"):
        return "/" + _unixify(text)
    return _unixify(text)


def slash(path: str) -> str:
    """Convert backslashes to forward slashes, leaving extended-length and non-ASCII paths untouched."""

    if path.startswith(_EXTENDED_LENGTH_PREFIX) or not path.isascii():
        return path
    return path.replace("\\", "/")


def is_absolute(path: str) -> bool:
    """Return ``True`` for POSIX, DOS drive-absolute and UNC paths."""

    return path.startswith(("/", "\\")) or bool(_DRIVE_ABSOLUTE.match(path))


def _normalise_slashes(path: str) -> str:
    if path.startswith(("\\\\", "//")):
        return _UNC_PREFIX + _SEPARATORS.sub("/", path[2:])
    return _SEPARATORS.sub("/", path)


def normalize_identity(file_name: _Pathish, root: _Pathish) -> str:
    """Return the absolute, slash-normalised identity used to group diagnostics.

    Relative names are resolved against ``root``; ``.`` and ``..`` segments are
    collapsed; letter case is preserved.

    Args:
        file_name: Path exactly as an analyzer reported it.
        root: Workspace root used for relative names.

    Returns:
        str: Canonical identity string.
    """

    candidate = str(file_name)
    if not is_absolute(candidate):
        candidate = f"{str(root).rstrip('/').rstrip(chr(92))}/{candidate}"
    candidate = _normalise_slashes(candidate)
    drive = ""
    if _DRIVE_ABSOLUTE.match(candidate):
        drive, candidate = candidate[:2], candidate[2:]
    normalised = posixpath.normpath(candidate)
    return f"{drive}{normalised}"


def _comparable(identity: str) -> str:
    if _DRIVE_PREFIX.match(identity):
        return identity[0].lower() + identity[1:]
    return identity


def is_within(identity: str, root_identity: str) -> bool:
    """Return ``True`` when ``identity`` equals ``root_identity`` or lies beneath it."""

    path = _comparable(identity)
    base = _comparable(root_identity).rstrip("/")
    if not base:
        return path.startswith("/")
    return path == base or path.startswith(base + "/")


def same_file(left: str, right: str) -> bool:
    """Return ``True`` when two identities name the same file."""

    return _comparable(left) == _comparable(right)


def matches_any_prefix(identity: str, prefixes: Iterable[str]) -> bool:
    """Return ``True`` when ``identity`` lies under any of the ``prefixes`` identities."""

    return any(is_within(identity, prefix) for prefix in prefixes)


def to_uri(identity: str) -> str:
    """Return the ``file://`` URI for a normalised identity."""

    path = identity if identity.startswith("/") else f"/{identity}"
    return f"{FILE_SCHEME}://{quote(path, safe='/:$')}"


def uri_to_path(uri: str) -> str:
    """Return the filesystem path encoded in a ``file://`` URI.

    Raises:
        ValueError: If ``uri`` does not use the ``file`` scheme.
    """

    parsed = urlparse(uri)
    if parsed.scheme != FILE_SCHEME:
        raise ValueError(f"not a file URI: {uri}")
    path = unquote(parsed.path)
    if parsed.netloc:
        return f"//{parsed.netloc}{path}"
    if re.match(r"^/[A-Za-z]:", path):
        return path[1:]
    return path


def uri_scheme(uri: str) -> str:
    return urlparse(uri).scheme


__all__ = [
    "FILE_SCHEME",
    "is_absolute",
    "is_within",
    "matches_any_prefix",
    "normalize_identity",
    "same_file",
    "slash",
    "sys_path",
    "to_uri",
    "uri_scheme",
    "uri_to_path",
]
