from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from .config import FileConfig, load_config, split_keys
from .env import getenv, getenv_bool, getenv_int
from .errors import ConfigError

OutputFormat = Literal["table", "json"]
LogFormat = Literal["text", "json"]

OUTPUT_FORMATS: tuple[str, ...] = ("table", "json")


@dataclass(frozen=True)
class RunContext:
    run_id: str
    target_root: Path
    output_format: OutputFormat
    only: tuple[str, ...] | None
    strict: bool
    fix: bool
    jobs: int
    verbose: bool
    quiet: bool
    log_json: bool
    config_source: str = ""

    @classmethod
    def from_args(
        cls,
        path: str | None = None,
        output_format: str | None = None,
        only: str | None = None,
        strict: bool = False,
        fix: bool = False,
        jobs: int | None = None,
        run_id: str | None = None,
        config: str | None = None,
        verbose: bool = False,
        quiet: bool = False,
        log_format: LogFormat = "text",
    ) -> "RunContext":
        target_root = Path(path or ".").resolve()
        if not target_root.is_dir():
            raise ConfigError(f"target path is not a directory: {path or '.'}")
        file_cfg = load_config(target_root, config)
        try:
            env_strict = getenv_bool("REPOHYGIENE_STRICT")
            env_jobs = getenv_int("REPOHYGIENE_JOBS")
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        resolved_format = output_format or getenv("REPOHYGIENE_FORMAT") or file_cfg.format or "table"
        if resolved_format not in OUTPUT_FORMATS:
            raise ConfigError(f"invalid format `{resolved_format}`, expected table or json")
        resolved_jobs = jobs if jobs is not None else env_jobs if env_jobs is not None else file_cfg.jobs or 1
        if resolved_jobs < 1:
            raise ConfigError(f"invalid jobs `{resolved_jobs}`, expected a positive integer")
        default_run = f"hygiene-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        return cls(
            run_id=run_id or getenv("RUN_ID") or default_run,
            target_root=target_root,
            output_format=resolved_format,  # type: ignore[arg-type]
            only=_resolve_only(only, file_cfg),
            strict=strict or bool(env_strict if env_strict is not None else file_cfg.strict),
            fix=fix,
            jobs=resolved_jobs,
            verbose=verbose,
            quiet=quiet,
            log_json=log_format == "json",
            config_source=file_cfg.source,
        )


def _resolve_only(cli_value: str | None, file_cfg: FileConfig) -> tuple[str, ...] | None:
    if cli_value is not None:
        return split_keys(cli_value)
    env_value = getenv("REPOHYGIENE_ONLY")
    if env_value is not None:
        return split_keys(env_value)
    return file_cfg.only
