"""Ecosystem-specific conventions.

Each check is a no-op unless its ecosystem is detected in the scanned root.
Manifests that fail to parse are reported as warnings, never raised.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ..core.fs import list_files, read_text, rel_posix
from .markdown import MARKDOWN_SUFFIXES
from .model import CheckOptions, Finding, Severity

try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

WORKFLOWS_DIR = ".github/workflows"
WORKFLOW_SUFFIXES = (".yml", ".yaml")
JS_FRAMEWORK_DEPS: tuple[str, ...] = (
    "next",
    "react-scripts",
    "vite",
    "nuxt",
    "@angular/core",
    "@sveltejs/kit",
    "gatsby",
    "@remix-run/react",
)
PYTHON_TEST_SIGNALS: tuple[str, ...] = ("pytest.ini", "tox.ini", "noxfile.py", "setup.cfg")


def _yaml_problem(exc: yaml.YAMLError) -> str:
    problem = getattr(exc, "problem", None) or str(exc).splitlines()[0]
    mark = getattr(exc, "problem_mark", None)
    if mark is not None:
        return f"{problem} (line {mark.line + 1})"
    return str(problem)


def check_workflow_syntax(root: Path, options: CheckOptions) -> list[Finding]:
    findings: list[Finding] = []
    for workflow in list_files(root / WORKFLOWS_DIR, WORKFLOW_SUFFIXES):
        rel = rel_posix(root, workflow)
        try:
            data = yaml.safe_load(read_text(workflow))
        except yaml.YAMLError as exc:
            findings.append(Finding("workflow_syntax", Severity.WARN, f"{rel}: workflow is not valid YAML: {_yaml_problem(exc)}", path=rel))
            continue
        if not isinstance(data, dict):
            findings.append(Finding("workflow_syntax", Severity.WARN, f"{rel}: workflow root must be a mapping", path=rel))
            continue
        # YAML 1.1 loads a bare `on` key as the boolean True
        if "on" not in data and True not in data:
            findings.append(Finding("workflow_syntax", Severity.WARN, f"{rel}: workflow missing `on` triggers", path=rel))
        if not isinstance(data.get("jobs"), dict) or not data["jobs"]:
            findings.append(Finding("workflow_syntax", Severity.WARN, f"{rel}: workflow missing `jobs`", path=rel))
    return findings


def _mapping(value: object) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def detect_js_frameworks(pkg: dict[str, Any]) -> list[str]:
    deps = _mapping(pkg.get("dependencies"))
    dev_deps = _mapping(pkg.get("devDependencies"))
    return [name for name in JS_FRAMEWORK_DEPS if name in deps or name in dev_deps]


def check_javascript_framework(root: Path, options: CheckOptions) -> list[Finding]:
    pkg_path = root / "package.json"
    if not pkg_path.is_file():
        return []
    try:
        pkg = json.loads(read_text(pkg_path))
    except json.JSONDecodeError:
        pkg = None
    if not isinstance(pkg, dict):
        return [
            Finding(
                "javascript_framework",
                Severity.WARN,
                "package.json is not valid JSON. Fix JSON syntax so framework checks can run reliably",
                path="package.json",
            )
        ]
    frameworks = detect_js_frameworks(pkg)
    if not frameworks:
        return []
    scripts = _mapping(pkg.get("scripts"))
    findings: list[Finding] = []
    if "dev" not in scripts:
        findings.append(
            Finding("javascript_framework", Severity.WARN, "Missing scripts.dev in package.json. Add a dev script for local development", path="package.json")
        )
    if "build" not in scripts:
        findings.append(
            Finding(
                "javascript_framework",
                Severity.WARN,
                "Missing scripts.build in package.json. Add a build script for CI and production builds",
                path="package.json",
            )
        )
    if "next" in frameworks:
        if "start" not in scripts:
            findings.append(
                Finding(
                    "javascript_framework",
                    Severity.WARN,
                    "Next.js project missing scripts.start. Add a start script for runtime compatibility",
                    path="package.json",
                )
            )
        if not (root / "app").is_dir() and not (root / "pages").is_dir():
            findings.append(
                Finding(
                    "javascript_framework",
                    Severity.WARN,
                    "Next.js project missing both app/ and pages/. Add at least one routing directory",
                    path=".",
                )
            )
    return findings


def _has_python_test_signal(root: Path, pyproject: dict[str, Any] | None) -> bool:
    if (root / "tests").is_dir():
        return True
    if any((root / name).exists() for name in PYTHON_TEST_SIGNALS):
        return True
    tool = _mapping((pyproject or {}).get("tool"))
    return "ini_options" in _mapping(tool.get("pytest"))


def check_python_project(root: Path, options: CheckOptions) -> list[Finding]:
    pyproject_path = root / "pyproject.toml"
    has_pyproject = pyproject_path.is_file()
    has_requirements = (root / "requirements.txt").is_file()
    if not has_pyproject and not has_requirements:
        return []
    findings: list[Finding] = []
    pyproject: dict[str, Any] | None = None
    if has_pyproject:
        try:
            pyproject = tomllib.loads(pyproject_path.read_bytes().decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            findings.append(
                Finding("python_project", Severity.WARN, f"pyproject.toml is not valid TOML: {exc}", path="pyproject.toml")
            )
    if has_requirements and not has_pyproject:
        findings.append(
            Finding(
                "python_project",
                Severity.WARN,
                "requirements.txt found without pyproject.toml. Add pyproject.toml for modern tooling and metadata interoperability",
                path="requirements.txt",
            )
        )
    if not _has_python_test_signal(root, pyproject):
        findings.append(
            Finding(
                "python_project",
                Severity.WARN,
                "No Python test layout/config detected. Add tests/ or pytest/tox configuration to support CI validation",
                path=".",
            )
        )
    return findings


def check_static_site(root: Path, options: CheckOptions) -> list[Finding]:
    if not (root / "_config.yml").exists():
        return []
    findings: list[Finding] = []
    if not (root / "index.md").exists():
        findings.append(Finding("static_site", Severity.WARN, "index.md missing. Add a landing page for the site", path="."))
    pages = root / "pages"
    if not pages.is_dir():
        findings.append(Finding("static_site", Severity.WARN, "pages/ directory missing. Create pages/ with markdown content", path="pages"))
    elif not list_files(pages, MARKDOWN_SUFFIXES):
        findings.append(Finding("static_site", Severity.WARN, "pages/ has no markdown files. Add at least one .md page", path="pages"))
    if not (root / "assets").is_dir():
        findings.append(Finding("static_site", Severity.WARN, "assets/ directory missing. Add assets/ for images, CSS, and JS", path="assets"))
    return findings
