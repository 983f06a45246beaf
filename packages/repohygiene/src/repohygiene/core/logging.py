from __future__ import annotations

import inspect
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from .serialize import dumps_json

if TYPE_CHECKING:
    from .context import RunContext

_LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _enabled(ctx: RunContext, level: str) -> bool:
    rank = _LEVELS.get(level, 20)
    if rank >= _LEVELS["error"]:
        return True
    if ctx.quiet:
        return False
    if rank < _LEVELS["info"]:
        return ctx.verbose
    return True


def log_event(ctx: RunContext, level: str, component: str, action: str, **fields: object) -> None:
    if not _enabled(ctx, level):
        return
    payload: dict[str, object] = {
        "ts": utc_now_iso(),
        "level": level,
        "run_id": ctx.run_id,
        "component": component,
        "action": action,
        **fields,
    }
    if ctx.log_json:
        caller = inspect.currentframe()
        if caller is not None and caller.f_back is not None:
            payload["file"] = caller.f_back.f_code.co_filename
            payload["line"] = caller.f_back.f_lineno
        sys.stderr.write(dumps_json(payload) + "\n")
        return
    core = f"ts={payload['ts']} level={level} run_id={ctx.run_id} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")
