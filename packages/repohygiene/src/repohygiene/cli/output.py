"""CLI payload output helpers."""

from __future__ import annotations

import sys
from typing import Iterable

from ..checks.model import CheckDescriptor, Severity
from ..checks.runner import CheckRunReport
from ..core.exit_codes import ERR_POLICY, OK
from ..core.serialize import dumps_json
from ..reporting.render import render_json, render_table


def emit(text: str) -> None:
    sys.stdout.write(text.rstrip("\n") + "\n")


def render_report(report: CheckRunReport, output_format: str) -> str:
    if output_format == "json":
        return render_json(report)
    return render_table(report)


def render_check_list(descriptors: Iterable[CheckDescriptor]) -> str:
    return "\n".join(f"{item.key} - {item.description}" for item in descriptors)


def exit_code_for(report: CheckRunReport, *, strict: bool) -> int:
    """Map findings to the process exit code.

    Error findings always fail; Warn findings fail only in strict mode.
    """
    levels = {row.severity for row in report.findings}
    if Severity.ERROR in levels or (strict and Severity.WARN in levels):
        return ERR_POLICY
    return OK


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error", **details: object) -> str:
    if as_json:
        error: dict[str, object] = {"code": code, "kind": kind, "message": message}
        error.update({key: value for key, value in details.items() if value not in (None, "", ())})
        return dumps_json({"tool": "repohygiene", "status": "error", "errors": [error]}, pretty=False)
    return f"repohygiene: error: {message}"


__all__ = ["emit", "exit_code_for", "render_check_list", "render_error", "render_report"]
