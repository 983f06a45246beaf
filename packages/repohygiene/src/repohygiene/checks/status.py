from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from .guidance import GuidanceEntry, guidance_for
from .model import Finding, Severity, max_severity


class Status(str, Enum):
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class CheckStatus:
    check: str
    status: Status
    severity: Severity | None
    findings: int
    guidance: GuidanceEntry | None = None

    @property
    def failed(self) -> bool:
        return self.status is Status.FAIL


@dataclass(frozen=True)
class RunSummary:
    total_checks: int
    failed_checks: int
    text: str


def rollup(check: str, findings: Iterable[Finding], guidance: Mapping[str, GuidanceEntry] | None = None) -> CheckStatus:
    """Derive one check's verdict from the findings it produced.

    Guidance is attached to failing checks only; an unknown key yields none.
    """
    rows = [row for row in findings if row.check == check]
    if not rows:
        return CheckStatus(check, Status.PASS, None, 0)
    entry = guidance.get(check) if guidance is not None else guidance_for(check)
    return CheckStatus(check, Status.FAIL, max_severity(row.severity for row in rows), len(rows), entry)


def summary_text(total: int, failed: int) -> str:
    if total == 0:
        return "No checks were executed."
    if failed == 0:
        return f"All checks passed ({total}/{total})."
    return f"{failed} of {total} checks failed."


def summarize(statuses: Iterable[CheckStatus]) -> RunSummary:
    rows = list(statuses)
    failed = sum(1 for row in rows if row.failed)
    return RunSummary(len(rows), failed, summary_text(len(rows), failed))


def severity_counts(findings: Iterable[Finding]) -> dict[str, int]:
    counts = {severity.value: 0 for severity in Severity}
    for row in findings:
        counts[row.severity.value] += 1
    return counts


__all__ = ["CheckStatus", "RunSummary", "Status", "rollup", "severity_counts", "summarize", "summary_text"]
