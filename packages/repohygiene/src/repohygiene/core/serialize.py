"""Canonical JSON serialization helpers."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import PurePath
from typing import Any


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, PurePath):
        return value.as_posix()
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"value of type {type(value).__name__} is not JSON serializable")


def dumps_json(payload: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False, default=_jsonable)
    return json.dumps(payload, sort_keys=True, ensure_ascii=False, default=_jsonable)
