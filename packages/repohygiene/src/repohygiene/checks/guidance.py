"""Why each check matters and how to resolve a failure.

The table is read-only; it is shared by every run and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class GuidanceEntry:
    check: str
    why_important: str
    how_to_resolve: str


def _entry(check: str, why_important: str, how_to_resolve: str) -> tuple[str, GuidanceEntry]:
    return check, GuidanceEntry(check, why_important, how_to_resolve)


GUIDANCE: Mapping[str, GuidanceEntry] = MappingProxyType(
    dict(
        (
            _entry(
                "manifest",
                "A manifest helps tools and contributors understand the project stack and dependency model.",
                "Add a standard manifest for your ecosystem, for example go.mod, package.json, pyproject.toml, or Cargo.toml.",
            ),
            _entry(
                "readme",
                "A complete README reduces onboarding friction and clarifies project usage for contributors and consumers.",
                "Create or update README.md to include Overview, Installation, Usage, CI, and License sections.",
            ),
            _entry(
                "readme_links",
                "Broken README links reduce trust and block readers from important docs and setup instructions.",
                "Fix invalid local links and anchors in README.md so each referenced file and heading exists.",
            ),
            _entry(
                "license",
                "A license defines legal reuse terms and protects both maintainers and users.",
                "Add a LICENSE file with the license your project intends to use, for example MIT or Apache-2.0.",
            ),
            _entry(
                "gitignore",
                "A .gitignore prevents accidental commits of build artifacts, secrets, and machine-local files.",
                "Add a .gitignore tuned to your stack to exclude artifacts, editor files, and OS-specific files.",
            ),
            _entry(
                "changelog",
                "A changelog helps users and maintainers track behavior changes across releases.",
                "Add CHANGELOG.md and document notable changes per release, ideally using Keep a Changelog format.",
            ),
            _entry(
                "codeowners",
                "CODEOWNERS clarifies review responsibility and improves governance in collaborative repositories.",
                "Add CODEOWNERS in a standard location and map key paths to responsible reviewers.",
            ),
            _entry(
                "contributing",
                "Contribution guidelines reduce confusion and improve consistency for incoming changes.",
                "Add CONTRIBUTING.md covering setup, coding standards, test expectations, and PR process.",
            ),
            _entry(
                "security_policy",
                "A security policy provides a clear process for responsible vulnerability reporting.",
                "Add SECURITY.md with reporting channels, expected response timelines, and disclosure expectations.",
            ),
            _entry(
                "ci_workflow",
                "CI workflows enforce baseline quality checks before changes are merged.",
                "Add at least one workflow file under .github/workflows to run build and test checks.",
            ),
            _entry(
                "workflow_syntax",
                "A workflow that does not parse is silently skipped by the CI provider.",
                "Fix the YAML syntax and make sure each workflow declares `on` triggers and `jobs`.",
            ),
            _entry(
                "javascript_framework",
                "Framework projects without standard scripts are hard to build in CI and to start locally.",
                "Add dev and build scripts to package.json; Next.js projects also need a start script and app/ or pages/.",
            ),
            _entry(
                "python_project",
                "Modern Python tooling expects pyproject.toml metadata and a discoverable test layout.",
                "Add a valid pyproject.toml and a tests/ directory or pytest/tox configuration.",
            ),
            _entry(
                "static_site",
                "A minimal static-site structure improves reliability for builds, hosting, and navigation.",
                "Add index.md, a pages/ directory with markdown content, and an assets/ directory for static files.",
            ),
        )
    )
)


def guidance_for(check: str) -> GuidanceEntry | None:
    return GUIDANCE.get(check)


__all__ = ["GUIDANCE", "GuidanceEntry", "guidance_for"]
