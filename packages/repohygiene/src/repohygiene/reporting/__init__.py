"""Run report rendering and output contract validation."""

from .render import build_run_payload, render_json, render_table
from .schema import RUN_OUTPUT_SCHEMA, validate

__all__ = ["RUN_OUTPUT_SCHEMA", "build_run_payload", "render_json", "render_table", "validate"]
