from __future__ import annotations

from typing import Any, Sequence

from ..checks.model import CheckDescriptor, Finding
from ..checks.runner import CheckRunReport
from ..checks.status import CheckStatus
from ..core.serialize import dumps_json
from .schema import RUN_OUTPUT_SCHEMA, validate


def check_rows(checks: Sequence[CheckDescriptor], statuses: Sequence[CheckStatus]) -> list[dict[str, Any]]:
    descriptions = {item.key: item.description for item in checks}
    rows: list[dict[str, Any]] = []
    for status in statuses:
        row: dict[str, Any] = {
            "check": status.check,
            "description": descriptions.get(status.check, ""),
            "status": status.status.value,
            "findings": status.findings,
        }
        if status.severity is not None:
            row["level"] = status.severity.value
        if status.guidance is not None:
            row["why_important"] = status.guidance.why_important
            row["how_to_resolve"] = status.guidance.how_to_resolve
        rows.append(row)
    return rows


def build_run_payload(report: CheckRunReport) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "summary": report.summary.text,
        "checks": check_rows(report.checks, report.statuses),
        "findings": [row.to_dict() for row in report.findings],
        "counts": report.counts,
    }
    validate(RUN_OUTPUT_SCHEMA, payload)
    return payload


def render_json(report: CheckRunReport, *, pretty: bool = True) -> str:
    return dumps_json(build_run_payload(report), pretty=pretty)


def _table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    widths = [len(item) for item in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))

    def _line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(cells)).rstrip()

    out = [_line(headers), _line(["-" * width for width in widths])]
    out.extend(_line(row) for row in rows)
    return out


def _finding_cells(row: Finding) -> list[str]:
    return [row.check, row.severity.value.upper(), row.path or "-", row.message, "yes" if row.fixed else ""]


def render_table(report: CheckRunReport) -> str:
    out = _table(
        ("CHECK", "STATUS", "LEVEL", "FINDINGS"),
        [
            [row.check, row.status.value.upper(), row.severity.value.upper() if row.severity else "-", str(row.findings)]
            for row in report.statuses
        ],
    )
    if report.findings:
        out.append("")
        ordered = sorted(report.findings, key=lambda row: row.sort_key)
        out.extend(_table(("CHECK", "LEVEL", "PATH", "MESSAGE", "FIXED"), [_finding_cells(row) for row in ordered]))
    failing = [row for row in report.statuses if row.failed and row.guidance is not None]
    if failing:
        out.append("")
        out.append("guidance:")
        for row in failing:
            out.append(f"- {row.check}")
            out.append(f"  why: {row.guidance.why_important}")  # type: ignore[union-attr]
            out.append(f"  fix: {row.guidance.how_to_resolve}")  # type: ignore[union-attr]
    out.append("")
    out.append(report.summary.text)
    return "\n".join(out)


__all__ = ["build_run_payload", "check_rows", "render_json", "render_table"]
