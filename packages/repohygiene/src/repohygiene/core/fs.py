"""Filesystem access used by checks.

Not-found conditions are returned as values; every other ``OSError`` is left to
propagate so the runner can abort with the failing check attached.
"""

from __future__ import annotations

import fnmatch
import glob
from pathlib import Path

_MISSING_ERRORS = (FileNotFoundError, NotADirectoryError)


def is_glob(pattern: str) -> bool:
    return glob.has_magic(pattern)


def resolve_under(root: Path, rel: str) -> Path:
    return root / rel.lstrip("/")


def rel_posix(root: Path, path: Path) -> str:
    try:
        rel = path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
    return rel or "."


def _glob_files(root: Path, pattern: str) -> list[Path]:
    """Match ``pattern`` against regular files, ignoring case in the final component."""
    parent, _, name = pattern.rstrip("/").rpartition("/")
    if is_glob(parent):
        return sorted(match for match in root.glob(pattern) if match.is_file())
    directory = resolve_under(root, parent) if parent else root
    try:
        entries = sorted(directory.iterdir())
    except _MISSING_ERRORS:
        return []
    wanted = name.lower()
    return [entry for entry in entries if entry.is_file() and fnmatch.fnmatchcase(entry.name.lower(), wanted)]


def candidate_exists(root: Path, candidate: str) -> bool:
    if is_glob(candidate):
        return bool(_glob_files(root, candidate))
    return resolve_under(root, candidate).exists()


def read_text_if_exists(path: Path, encoding: str = "utf-8") -> str | None:
    try:
        data = path.read_bytes()
    except (*_MISSING_ERRORS, IsADirectoryError):
        return None
    return data.decode(encoding, errors="replace")


def read_text(path: Path, encoding: str = "utf-8") -> str:
    return path.read_bytes().decode(encoding, errors="replace")


def list_files(directory: Path, suffixes: tuple[str, ...]) -> list[Path]:
    try:
        entries = sorted(directory.iterdir())
    except _MISSING_ERRORS:
        return []
    return [entry for entry in entries if entry.is_file() and entry.suffix.lower() in suffixes]


def write_text_file(path: Path, content: str, *, encoding: str = "utf-8") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding=encoding)
    return path
