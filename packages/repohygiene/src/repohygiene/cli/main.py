from __future__ import annotations

import argparse
import signal
import sys
import threading

from .. import __version__
from ..checks.model import CheckOptions
from ..checks.registry import REGISTRY
from ..checks.runner import run_checks
from ..core.context import OUTPUT_FORMATS, RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CANCELLED, OK
from ..core.logging import log_event
from .output import emit, exit_code_for, render_check_list, render_error, render_report


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="repohygiene", description="Inspect a repository for standard collaboration artifacts.")
    p.add_argument("--version", action="version", version=f"repohygiene {__version__}")
    p.add_argument("--path", default=None, help="repository root to inspect (default: current directory)")
    # Validated in RunContext so a bad value maps to the configuration exit code.
    p.add_argument("--format", default=None, help=f"output format: {' or '.join(OUTPUT_FORMATS)}")
    p.add_argument("--only", default=None, help="comma-separated check keys to run")
    p.add_argument("--strict", action="store_true", help="treat warn findings as failures")
    p.add_argument("--list", action="store_true", help="list registered checks and exit")
    p.add_argument("--fix", action="store_true", help="create missing starter files where a template exists")
    p.add_argument("--jobs", type=int, default=None, help="number of checks to run concurrently")
    p.add_argument("--config", default=None, help="explicit TOML config file")
    p.add_argument("--run-id", default=None, help="run identifier used in log events")
    p.add_argument("--log-format", choices=["text", "json"], default="text", help="stderr log event format")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug log events")
    vg.add_argument("--quiet", action="store_true", help="only emit error log events")
    return p


def _install_cancel_handler(cancel: threading.Event):
    if threading.current_thread() is not threading.main_thread():
        return None
    return signal.signal(signal.SIGTERM, lambda *_: cancel.set())


def _run(ctx: RunContext) -> int:
    cancel = threading.Event()
    previous = _install_cancel_handler(cancel)
    try:
        report = run_checks(
            ctx.target_root,
            only=ctx.only,
            options=CheckOptions(fix=ctx.fix),
            jobs=ctx.jobs,
            cancel=cancel,
            ctx=ctx,
        )
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)
    emit(render_report(report, ctx.output_format))
    code = exit_code_for(report, strict=ctx.strict)
    log_event(ctx, "info", "cli", "finish", exit_code=code, summary=report.summary.text)
    return code


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    if ns.list:
        emit(render_check_list(REGISTRY.descriptors()))
        return OK
    ctx: RunContext | None = None
    try:
        ctx = RunContext.from_args(
            path=ns.path,
            output_format=ns.format,
            only=ns.only,
            strict=ns.strict,
            fix=ns.fix,
            jobs=ns.jobs,
            run_id=ns.run_id,
            config=ns.config,
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_format=ns.log_format,
        )
        log_event(ctx, "debug", "cli", "start", root=ctx.target_root, fmt=ctx.output_format, config=ctx.config_source or "-")
        return _run(ctx)
    except ScriptError as exc:
        as_json = (ctx.output_format if ctx is not None else ns.format) == "json"
        if ctx is not None:
            log_event(ctx, "error", "cli", "abort", kind=exc.kind, code=exc.code)
        details = {"check": getattr(exc, "check", None), "unknown": getattr(exc, "unknown", None)}
        print(render_error(as_json=as_json, message=exc.message, code=exc.code, kind=exc.kind, **details), file=sys.stderr)
        return exc.code
    except KeyboardInterrupt:
        print(render_error(as_json=ns.format == "json", message="interrupted", code=ERR_CANCELLED, kind="cancelled"), file=sys.stderr)
        return ERR_CANCELLED


if __name__ == "__main__":
    sys.exit(main())
