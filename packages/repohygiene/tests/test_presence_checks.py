from __future__ import annotations

from pathlib import Path

import pytest

from repohygiene.checks.model import CheckOptions, Severity
from repohygiene.checks.presence import Candidate, PresenceCheck
from repohygiene.checks.registry import PRESENCE_CHECK_KEYS, get_check


def _notes() -> PresenceCheck:
    return PresenceCheck(
        "notes",
        "Ensures NOTES exists",
        ("NOTES.md", "docs/NOTES.md"),
        "NOTES.md missing. Add NOTES.md or docs/NOTES.md",
        template="# Notes\n",
        fixed_message="NOTES.md missing, created a starter file",
    )


def test_any_candidate_satisfies_the_check(tmp_path: Path) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs/NOTES.md").write_text("x\n", encoding="utf-8")
    assert _notes().run(tmp_path, CheckOptions()) == []


def test_missing_artifact_is_one_warn_at_canonical_path(tmp_path: Path) -> None:
    findings = _notes().run(tmp_path, CheckOptions())
    assert len(findings) == 1
    row = findings[0]
    assert (row.check, row.severity, row.path, row.fixed) == ("notes", Severity.WARN, "NOTES.md", False)
    assert "docs/NOTES.md" in row.message
    assert not (tmp_path / "NOTES.md").exists()


def test_fix_mode_writes_template_to_first_candidate(tmp_path: Path) -> None:
    findings = _notes().run(tmp_path, CheckOptions(fix=True))
    assert [(row.fixed, row.message) for row in findings] == [(True, "NOTES.md missing, created a starter file")]
    assert (tmp_path / "NOTES.md").read_text(encoding="utf-8") == "# Notes\n"
    assert _notes().run(tmp_path, CheckOptions(fix=True)) == []


def test_fix_mode_without_template_only_reports(tmp_path: Path) -> None:
    findings = get_check("codeowners").run(tmp_path, CheckOptions(fix=True))
    assert [row.fixed for row in findings] == [False]
    assert not any(tmp_path.iterdir())


def test_glob_candidates_need_a_matching_file(tmp_path: Path) -> None:
    check = get_check("ci_workflow")
    (tmp_path / ".github/workflows").mkdir(parents=True)
    findings = check.run(tmp_path, CheckOptions())
    assert [row.path for row in findings] == [".github/workflows"]
    (tmp_path / ".github/workflows/nested.yml").mkdir()
    assert [row.path for row in check.run(tmp_path, CheckOptions())] == [".github/workflows"]
    (tmp_path / ".github/workflows/release.yaml").write_text("on: push\n", encoding="utf-8")
    assert check.run(tmp_path, CheckOptions()) == []


def test_glob_candidates_ignore_suffix_case(tmp_path: Path) -> None:
    (tmp_path / ".github/workflows").mkdir(parents=True)
    (tmp_path / ".github/workflows/CI.YML").write_text("on: push\njobs:\n  a:\n    runs-on: x\n", encoding="utf-8")
    assert get_check("ci_workflow").run(tmp_path, CheckOptions()) == []
    assert get_check("workflow_syntax").run(tmp_path, CheckOptions()) == []


def test_manifest_reports_first_match_only(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{}\n", encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    findings = get_check("manifest").run(tmp_path, CheckOptions())
    assert [(row.severity, row.message, row.path) for row in findings] == [
        (Severity.INFO, "Node project detected via package.json", "package.json")
    ]


def test_manifest_missing_is_warn_at_root(tmp_path: Path) -> None:
    findings = get_check("manifest").run(tmp_path, CheckOptions())
    assert [(row.severity, row.path) for row in findings] == [(Severity.WARN, ".")]


@pytest.mark.parametrize("key", PRESENCE_CHECK_KEYS)
def test_every_presence_check_warns_once_on_empty_tree(tmp_path: Path, key: str) -> None:
    check = get_check(key)
    findings = check.run(tmp_path, CheckOptions())
    assert len(findings) == 1
    assert findings[0].severity is Severity.WARN
    assert findings[0].path == check.canonical


def test_license_fix_creates_mit_text(tmp_path: Path) -> None:
    findings = get_check("license").run(tmp_path, CheckOptions(fix=True))
    assert [row.message for row in findings] == ["LICENSE missing, created MIT license"]
    assert (tmp_path / "LICENSE").read_text(encoding="utf-8").startswith("MIT License")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"candidates": ()},
        {"candidates": ("*.cfg",), "template": "x"},
        {"key": "Bad-Key"},
    ],
)
def test_invalid_presence_definitions_are_rejected(kwargs: dict[str, object]) -> None:
    base: dict[str, object] = {"key": "demo", "description": "d", "candidates": ("A",), "missing_message": "m"}
    base.update(kwargs)
    with pytest.raises(ValueError):
        PresenceCheck(**base)  # type: ignore[arg-type]


def test_candidate_labels_default_to_empty() -> None:
    check = _notes()
    assert check.candidates == (Candidate("NOTES.md"), Candidate("docs/NOTES.md"))
    assert check.expected_locations == ("NOTES.md", "docs/NOTES.md")
