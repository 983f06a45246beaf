"""Generalized "artifact presence" check.

Every fixed-location rule (license, changelog, codeowners, CI workflow, ...)
is one ``PresenceCheck`` parameterized by its candidate paths, its message and
an optional starter template used only when the caller enables fix mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.fs import candidate_exists, is_glob, resolve_under, write_text_file
from .model import CheckDescriptor, CheckOptions, Finding, Severity, validate_check_key


@dataclass(frozen=True)
class Candidate:
    path: str
    label: str = ""


@dataclass(frozen=True)
class PresenceCheck:
    key: str
    description: str
    candidates: tuple[Candidate, ...]
    missing_message: str
    canonical_path: str | None = None
    template: str | None = None
    fixed_message: str | None = None
    detect: bool = False
    level: Severity = Severity.WARN

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", validate_check_key(self.key))
        object.__setattr__(
            self,
            "candidates",
            tuple(item if isinstance(item, Candidate) else Candidate(str(item)) for item in self.candidates),
        )
        if not self.candidates:
            raise ValueError(f"{self.key}: presence check needs at least one candidate path")
        if self.template is not None and self.canonical is None:
            raise ValueError(f"{self.key}: a fix template needs a concrete canonical path")

    @property
    def descriptor(self) -> CheckDescriptor:
        return CheckDescriptor(self.key, self.description)

    @property
    def canonical(self) -> str | None:
        if self.canonical_path is not None:
            return self.canonical_path
        first = self.candidates[0].path
        return None if is_glob(first) else first

    @property
    def expected_locations(self) -> tuple[str, ...]:
        return tuple(item.path for item in self.candidates)

    def first_match(self, root: Path) -> Candidate | None:
        for candidate in self.candidates:
            if candidate_exists(root, candidate.path):
                return candidate
        return None

    def run(self, root: Path, options: CheckOptions) -> list[Finding]:
        match = self.first_match(root)
        if match is not None:
            if not self.detect:
                return []
            label = match.label or "Known"
            return [Finding(self.key, Severity.INFO, f"{label} project detected via {match.path}", path=match.path)]
        path = self.canonical or "."
        if options.fix and self.template is not None:
            write_text_file(resolve_under(root, path), self.template)
            message = self.fixed_message or f"{path} missing, created a starter file"
            return [Finding(self.key, self.level, message, path=path, fixed=True)]
        return [Finding(self.key, self.level, self.missing_message, path=path)]


__all__ = ["Candidate", "PresenceCheck"]
