from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..core.context import RunContext
from ..core.errors import CheckExecutionError, RunCancelled
from ..core.logging import log_event
from .guidance import GUIDANCE
from .model import Check, CheckDescriptor, CheckOptions, Finding, descriptor_of
from .registry import REGISTRY, Registry
from .status import CheckStatus, RunSummary, rollup, severity_counts, summarize


@dataclass(frozen=True)
class CheckRunReport:
    checks: tuple[CheckDescriptor, ...]
    findings: tuple[Finding, ...]
    statuses: tuple[CheckStatus, ...]
    summary: RunSummary

    @property
    def counts(self) -> dict[str, int]:
        return severity_counts(self.findings)

    def findings_for(self, key: str) -> tuple[Finding, ...]:
        return tuple(row for row in self.findings if row.check == key)


_SKIPPED = object()


def _run_single_check(
    check: Check,
    root: Path,
    options: CheckOptions,
    cancel: threading.Event | None,
    ctx: RunContext | None,
) -> list[Finding] | object:
    if cancel is not None and cancel.is_set():
        return _SKIPPED
    if ctx is not None:
        log_event(ctx, "debug", "runner", "check.start", check=check.key)
    started = time.perf_counter()
    try:
        findings = list(check.run(root, options))
    except OSError as exc:
        raise CheckExecutionError(f"check `{check.key}` failed: {exc}", check=check.key) from exc
    if ctx is not None:
        duration_ms = int((time.perf_counter() - started) * 1000)
        log_event(ctx, "debug", "runner", "check.finish", check=check.key, findings=len(findings), duration_ms=duration_ms)
    return findings


def _execute(
    selected: tuple[Check, ...],
    root: Path,
    options: CheckOptions,
    jobs: int,
    cancel: threading.Event | None,
    ctx: RunContext | None,
) -> list[list[Finding] | object]:
    if jobs <= 1 or len(selected) <= 1:
        results: list[list[Finding] | object] = []
        for check in selected:
            outcome = _run_single_check(check, root, options, cancel, ctx)
            results.append(outcome)
            if outcome is _SKIPPED:
                results.extend(_SKIPPED for _ in selected[len(results):])
                break
        return results
    with ThreadPoolExecutor(max_workers=min(jobs, len(selected))) as pool:
        futures = [pool.submit(_run_single_check, check, root, options, cancel, ctx) for check in selected]
        # Collected in submission order so output matches a sequential run.
        return [future.result() for future in futures]


def run_checks(
    root: Path | str,
    *,
    registry: Registry | None = None,
    only: Iterable[str] | None = None,
    options: CheckOptions | None = None,
    jobs: int = 1,
    cancel: threading.Event | None = None,
    ctx: RunContext | None = None,
) -> CheckRunReport:
    """Run the selected checks against ``root`` and aggregate the results.

    The key filter is resolved before anything executes, so an invalid
    selection never leaves partial output or partial fixes behind.
    """
    active = registry or REGISTRY
    selected = active.select(only)
    target = Path(root)
    opts = options or CheckOptions()
    if ctx is not None:
        log_event(ctx, "info", "runner", "run.start", checks=len(selected), jobs=jobs, root=target)
    started = time.perf_counter()
    outcomes = _execute(selected, target, opts, jobs, cancel, ctx)
    skipped = tuple(check.key for check, outcome in zip(selected, outcomes) if outcome is _SKIPPED)
    if skipped:
        raise RunCancelled(f"run cancelled, skipped {len(skipped)} check(s): {', '.join(skipped)}", skipped=skipped)

    findings: list[Finding] = []
    for outcome in outcomes:
        findings.extend(outcome)  # type: ignore[arg-type]
    statuses = tuple(rollup(check.key, findings, GUIDANCE) for check in selected)
    summary = summarize(statuses)
    if ctx is not None:
        duration_ms = int((time.perf_counter() - started) * 1000)
        log_event(ctx, "info", "runner", "run.finish", failed=summary.failed_checks, total=summary.total_checks, duration_ms=duration_ms)
    return CheckRunReport(
        checks=tuple(descriptor_of(check) for check in selected),
        findings=tuple(findings),
        statuses=statuses,
        summary=summary,
    )


__all__ = ["CheckRunReport", "run_checks"]
