from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import re
from typing import Callable, Iterable, Protocol, runtime_checkable


_CHECK_KEY_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


def validate_check_key(value: str) -> str:
    raw = str(value).strip()
    if not _CHECK_KEY_PATTERN.fullmatch(raw):
        raise ValueError(f"invalid check key `{raw}`: expected lowercase snake_case")
    return raw


class Severity(str, Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARN: 1, Severity.ERROR: 2}


def max_severity(severities: Iterable[Severity]) -> Severity | None:
    ordered = sorted(severities, key=lambda item: item.rank)
    return ordered[-1] if ordered else None


@dataclass(frozen=True)
class Finding:
    check: str
    severity: Severity
    message: str
    path: str | None = None
    fixed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity(self.severity))
        object.__setattr__(self, "message", str(self.message).strip())

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.check, self.path or "")

    def to_dict(self) -> dict[str, object]:
        row: dict[str, object] = {"check": self.check, "level": self.severity.value, "message": self.message}
        if self.path:
            row["path"] = self.path
        if self.fixed:
            row["fixed"] = True
        return row


@dataclass(frozen=True)
class CheckOptions:
    fix: bool = False


@dataclass(frozen=True)
class CheckDescriptor:
    key: str
    description: str


@runtime_checkable
class Check(Protocol):
    key: str
    description: str

    def run(self, root: Path, options: CheckOptions) -> list[Finding]: ...


CheckFn = Callable[[Path, CheckOptions], list[Finding]]


@dataclass(frozen=True)
class CheckDef:
    key: str
    description: str
    fn: CheckFn

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", validate_check_key(self.key))
        object.__setattr__(self, "description", str(self.description).strip())

    @property
    def descriptor(self) -> CheckDescriptor:
        return CheckDescriptor(self.key, self.description)

    def run(self, root: Path, options: CheckOptions) -> list[Finding]:
        return list(self.fn(root, options))


def descriptor_of(check: Check) -> CheckDescriptor:
    return CheckDescriptor(str(check.key), str(check.description))


__all__ = [
    "Check",
    "CheckDef",
    "CheckDescriptor",
    "CheckFn",
    "CheckOptions",
    "Finding",
    "Severity",
    "descriptor_of",
    "max_severity",
    "validate_check_key",
]
