"""Checks registry.

The active check set is the ``ALL_CHECKS`` tuple below, in execution order.
Nothing is discovered at runtime: a new check must be added here explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core.config import split_keys
from ..core.errors import RegistryError, SelectionError
from . import templates
from .ecosystem import check_javascript_framework, check_python_project, check_static_site, check_workflow_syntax
from .model import Check, CheckDef, CheckDescriptor, descriptor_of
from .presence import Candidate, PresenceCheck
from .readme import check_readme_links, check_readme_sections


@dataclass(frozen=True)
class Registry:
    checks: tuple[Check, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "checks", tuple(self.checks))
        seen: set[str] = set()
        duplicates: list[str] = []
        for check in self.checks:
            if not isinstance(check, Check):
                raise RegistryError(f"registered object does not implement the check contract: {check!r}")
            if check.key in seen:
                duplicates.append(check.key)
            seen.add(check.key)
        if duplicates:
            raise RegistryError(f"duplicate check key(s): {', '.join(sorted(set(duplicates)))}")

    def keys(self) -> tuple[str, ...]:
        return tuple(check.key for check in self.checks)

    def descriptors(self) -> tuple[CheckDescriptor, ...]:
        return tuple(descriptor_of(check) for check in self.checks)

    def get(self, key: str) -> Check:
        for check in self.checks:
            if check.key == key:
                return check
        raise SelectionError(f"unknown check key: {key}", unknown=(key,))

    def select(self, keys: Iterable[str] | None) -> tuple[Check, ...]:
        """Resolve a key filter to checks in registration order.

        ``None`` selects everything. A bare string is treated as a comma-separated
        list. Unknown keys are all reported at once.
        """
        if keys is None:
            return self.checks
        if isinstance(keys, str):
            keys = split_keys(keys)
        requested = [key.strip() for key in keys if key.strip()]
        known = set(self.keys())
        unknown = tuple(sorted({key for key in requested if key not in known}))
        if unknown:
            raise SelectionError(f"unknown check key(s) in --only: {', '.join(unknown)}", unknown=unknown)
        if not requested:
            raise SelectionError("no valid checks selected via --only")
        wanted = set(requested)
        return tuple(check for check in self.checks if check.key in wanted)


MANIFEST_CANDIDATES: tuple[Candidate, ...] = (
    Candidate("go.mod", "Go"),
    Candidate("package.json", "Node"),
    Candidate("pyproject.toml", "Python"),
    Candidate("requirements.txt", "Python"),
    Candidate("Gemfile", "Ruby"),
    Candidate("Cargo.toml", "Rust"),
    Candidate("composer.json", "PHP"),
    Candidate("_config.yml", "Static site"),
    Candidate(".eleventy.js", "Static site"),
    Candidate("mkdocs.yml", "Static site"),
)

ALL_CHECKS: tuple[Check, ...] = (
    PresenceCheck(
        "manifest",
        "Detects project ecosystem by scanning for common manifests",
        MANIFEST_CANDIDATES,
        "No common project manifest found. Expected one of: go.mod, package.json, pyproject.toml, "
        "requirements.txt, Gemfile, Cargo.toml, composer.json, or a static site config",
        canonical_path=".",
        detect=True,
    ),
    CheckDef("readme", "Ensures README.md exists and includes required sections", check_readme_sections),
    CheckDef("readme_links", "Verifies README.md local file and anchor links resolve", check_readme_links),
    PresenceCheck(
        "license",
        "Ensures LICENSE file is present",
        (Candidate("LICENSE"), Candidate("LICENSE.md"), Candidate("LICENSE.txt")),
        "LICENSE missing. Add a LICENSE, LICENSE.md, or LICENSE.txt file",
        template=templates.MIT_LICENSE,
        fixed_message="LICENSE missing, created MIT license",
    ),
    PresenceCheck(
        "gitignore",
        "Ensures a .gitignore file is present",
        (Candidate(".gitignore"),),
        ".gitignore missing",
        template=templates.GITIGNORE,
        fixed_message=".gitignore missing, created default entries",
    ),
    PresenceCheck(
        "changelog",
        "Ensures CHANGELOG.md exists",
        (Candidate("CHANGELOG.md"),),
        "CHANGELOG.md missing",
        template=templates.CHANGELOG,
        fixed_message="CHANGELOG.md missing, created a starter file",
    ),
    PresenceCheck(
        "codeowners",
        "Ensures CODEOWNERS exists in a standard GitHub location",
        (Candidate("CODEOWNERS"), Candidate(".github/CODEOWNERS"), Candidate("docs/CODEOWNERS")),
        "CODEOWNERS missing. Add ownership rules in CODEOWNERS, .github/CODEOWNERS, or docs/CODEOWNERS",
    ),
    PresenceCheck(
        "contributing",
        "Ensures CONTRIBUTING.md exists in a standard GitHub location",
        (Candidate("CONTRIBUTING.md"), Candidate(".github/CONTRIBUTING.md")),
        "CONTRIBUTING.md missing. Add contributor guidelines in CONTRIBUTING.md or .github/CONTRIBUTING.md",
    ),
    PresenceCheck(
        "security_policy",
        "Ensures SECURITY.md exists in a standard GitHub location",
        (Candidate("SECURITY.md"), Candidate(".github/SECURITY.md")),
        "SECURITY.md missing. Add vulnerability reporting guidance in SECURITY.md or .github/SECURITY.md",
    ),
    PresenceCheck(
        "ci_workflow",
        "Ensures at least one workflow file exists in .github/workflows",
        (Candidate(".github/workflows/*.yml"), Candidate(".github/workflows/*.yaml")),
        "No CI workflow found. Add at least one .yml or .yaml file under .github/workflows",
        canonical_path=".github/workflows",
    ),
    CheckDef("workflow_syntax", "Validates that CI workflow files parse and declare triggers and jobs", check_workflow_syntax),
    CheckDef(
        "javascript_framework",
        "Validates baseline conventions for JavaScript framework projects, including Next.js compatibility",
        check_javascript_framework,
    ),
    CheckDef("python_project", "Validates baseline conventions for Python projects", check_python_project),
    CheckDef("static_site", "Validates minimal structure for static-site projects (e.g., Jekyll)", check_static_site),
)

PRESENCE_CHECK_KEYS: tuple[str, ...] = tuple(
    check.key for check in ALL_CHECKS if isinstance(check, PresenceCheck) and not check.detect
)

REGISTRY = Registry(ALL_CHECKS)


def list_checks() -> tuple[Check, ...]:
    return REGISTRY.checks


def check_keys() -> tuple[str, ...]:
    return REGISTRY.keys()


def get_check(key: str) -> Check:
    return REGISTRY.get(key)


__all__ = [
    "ALL_CHECKS",
    "MANIFEST_CANDIDATES",
    "PRESENCE_CHECK_KEYS",
    "REGISTRY",
    "Registry",
    "check_keys",
    "get_check",
    "list_checks",
]
