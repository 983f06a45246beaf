"""Run configuration loaded from TOML.

Lookup order: an explicit ``--config`` file, then ``.repohygiene.toml`` in the
scanned root, then ``[tool.repohygiene]`` in the scanned root's
``pyproject.toml``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError

try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

CONFIG_FILE_NAME = ".repohygiene.toml"
PYPROJECT_TABLE = ("tool", "repohygiene")
_KNOWN_KEYS = frozenset({"format", "only", "strict", "jobs"})


@dataclass(frozen=True)
class FileConfig:
    source: str = ""
    format: str | None = None
    only: tuple[str, ...] | None = None
    strict: bool | None = None
    jobs: int | None = None


def split_keys(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _coerce_only(source: str, value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return split_keys(value)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(item.strip() for item in value if item.strip())
    raise ConfigError(f"{source}: `only` must be a string or a list of strings")


def parse_config(source: str, data: Mapping[str, Any]) -> FileConfig:
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source}: unknown config key(s): {', '.join(unknown)}")
    fmt = data.get("format")
    if fmt is not None and not isinstance(fmt, str):
        raise ConfigError(f"{source}: `format` must be a string")
    strict = data.get("strict")
    if strict is not None and not isinstance(strict, bool):
        raise ConfigError(f"{source}: `strict` must be a boolean")
    jobs = data.get("jobs")
    if jobs is not None and (isinstance(jobs, bool) or not isinstance(jobs, int) or jobs < 1):
        raise ConfigError(f"{source}: `jobs` must be a positive integer")
    only = _coerce_only(source, data["only"]) if "only" in data else None
    return FileConfig(source=source, format=fmt, only=only, strict=strict, jobs=jobs)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"{path}: invalid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"{path}: unable to read config: {exc}") from exc


def load_config(root: Path, explicit: str | None = None) -> FileConfig:
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise ConfigError(f"config file not found: {explicit}")
        return parse_config(str(path), _load_toml(path))
    local = root / CONFIG_FILE_NAME
    if local.is_file():
        return parse_config(str(local), _load_toml(local))
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return FileConfig()
    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError):
        # reported by the python_project check instead
        return FileConfig()
    except OSError as exc:
        raise ConfigError(f"{pyproject}: unable to read config: {exc}") from exc
    table: object = data
    for part in PYPROJECT_TABLE:
        table = table.get(part, {}) if isinstance(table, dict) else {}
    if not isinstance(table, dict) or not table:
        return FileConfig()
    return parse_config(f"{pyproject}[tool.repohygiene]", table)


__all__ = ["CONFIG_FILE_NAME", "FileConfig", "load_config", "parse_config", "split_keys"]
