"""Repository hygiene checks: model, registry, runner and status aggregation."""

from .guidance import GUIDANCE, GuidanceEntry, guidance_for
from .model import Check, CheckDef, CheckDescriptor, CheckOptions, Finding, Severity
from .presence import Candidate, PresenceCheck
from .registry import ALL_CHECKS, REGISTRY, Registry, check_keys, get_check, list_checks
from .runner import CheckRunReport, run_checks
from .status import CheckStatus, RunSummary, Status, rollup, summarize, summary_text

__all__ = [
    "ALL_CHECKS",
    "Candidate",
    "Check",
    "CheckDef",
    "CheckDescriptor",
    "CheckOptions",
    "CheckRunReport",
    "CheckStatus",
    "Finding",
    "GUIDANCE",
    "GuidanceEntry",
    "PresenceCheck",
    "REGISTRY",
    "Registry",
    "RunSummary",
    "Severity",
    "Status",
    "check_keys",
    "get_check",
    "guidance_for",
    "list_checks",
    "rollup",
    "run_checks",
    "summarize",
    "summary_text",
]
