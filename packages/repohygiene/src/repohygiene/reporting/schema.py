from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

from ..core.errors import OutputContractError

RUN_OUTPUT_SCHEMA = "run-output.v1"


def schemas_root() -> Path:
    """Return the packaged schema directory path."""
    return Path(str(resources.files(__package__))) / "schemas"


def schema_path_for(schema_name: str) -> Path:
    path = schemas_root() / f"{schema_name}.schema.json"
    if not path.is_file():
        raise OutputContractError(f"unknown output schema `{schema_name}`")
    return path


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    return json.loads(schema_path_for(schema_name).read_text(encoding="utf-8"))


def validate(schema_name: str, payload: Any) -> None:
    schema = load_schema(schema_name)
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise OutputContractError(f"schema validation failed for {schema_name} at {loc}: {exc.message}") from exc


__all__ = ["RUN_OUTPUT_SCHEMA", "load_schema", "schema_path_for", "schemas_root", "validate"]
