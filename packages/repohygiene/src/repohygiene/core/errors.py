from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CANCELLED, ERR_CONFIG, ERR_INTERNAL, ERR_IO, ERR_VALIDATION


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigError(ScriptError):
    code: int = ERR_CONFIG
    kind: str = "invalid_config"


@dataclass
class RegistryError(ScriptError):
    code: int = ERR_INTERNAL
    kind: str = "invalid_registry"


@dataclass
class SelectionError(ScriptError):
    code: int = ERR_CONFIG
    kind: str = "invalid_selection"
    unknown: tuple[str, ...] = ()


@dataclass
class CheckExecutionError(ScriptError):
    code: int = ERR_IO
    kind: str = "check_failed"
    check: str = ""


@dataclass
class RunCancelled(ScriptError):
    code: int = ERR_CANCELLED
    kind: str = "cancelled"
    skipped: tuple[str, ...] = ()


@dataclass
class OutputContractError(ScriptError):
    code: int = ERR_VALIDATION
    kind: str = "output_contract"


__all__ = [
    "CheckExecutionError",
    "ConfigError",
    "OutputContractError",
    "RegistryError",
    "RunCancelled",
    "ScriptError",
    "SelectionError",
]
