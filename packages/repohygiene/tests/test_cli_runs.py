from __future__ import annotations

import json
from pathlib import Path

import pytest
from helpers import run_repohygiene
from jsonschema import Draft202012Validator

from repohygiene.checks.registry import PRESENCE_CHECK_KEYS, check_keys
from repohygiene.cli.main import main
from repohygiene.core.exit_codes import ERR_CONFIG, ERR_POLICY, OK
from repohygiene.reporting.schema import RUN_OUTPUT_SCHEMA, load_schema


def test_packaged_schema_is_valid_draft_2020_12() -> None:
    Draft202012Validator.check_schema(load_schema(RUN_OUTPUT_SCHEMA))


@pytest.mark.integration
def test_list_prints_keys_and_descriptions() -> None:
    proc = run_repohygiene("--list")
    assert proc.returncode == OK, proc.stderr
    lines = proc.stdout.strip().splitlines()
    assert [line.split(" - ", 1)[0] for line in lines] == list(check_keys())
    assert "license - Ensures LICENSE file is present" in lines


@pytest.mark.integration
def test_empty_directory_json_report(empty_repo: Path) -> None:
    proc = run_repohygiene("--path", str(empty_repo), "--format", "json")
    assert proc.returncode == OK, proc.stderr
    payload = json.loads(proc.stdout)
    Draft202012Validator(load_schema(RUN_OUTPUT_SCHEMA)).validate(payload)
    warned = {row["check"] for row in payload["findings"] if row["level"] == "warn"}
    assert set(PRESENCE_CHECK_KEYS) | {"manifest"} <= warned
    rows = {row["check"]: row for row in payload["checks"]}
    assert rows["license"]["status"] == "fail"
    assert rows["license"]["why_important"]
    assert "why_important" not in rows["javascript_framework"]
    assert rows["javascript_framework"]["status"] == "pass"
    assert payload["counts"]["warn"] == len(payload["findings"])


@pytest.mark.integration
def test_strict_turns_warnings_into_policy_failure(empty_repo: Path) -> None:
    proc = run_repohygiene("--path", str(empty_repo), "--strict")
    assert proc.returncode == ERR_POLICY
    assert "checks failed." in proc.stdout


@pytest.mark.integration
def test_strict_ignores_info_findings(healthy_repo: Path) -> None:
    proc = run_repohygiene("--path", str(healthy_repo), "--strict")
    assert proc.returncode == OK, proc.stdout + proc.stderr


@pytest.mark.integration
def test_unknown_only_key_aborts_and_names_it(empty_repo: Path) -> None:
    proc = run_repohygiene("--path", str(empty_repo), "--only", "license,bogus", "--fix")
    assert proc.returncode == ERR_CONFIG
    assert "bogus" in proc.stderr
    assert proc.stdout == ""
    assert not (empty_repo / "LICENSE").exists()


@pytest.mark.integration
def test_invalid_format_aborts(empty_repo: Path) -> None:
    proc = run_repohygiene("--path", str(empty_repo), "--format", "xml")
    assert proc.returncode == ERR_CONFIG
    assert "invalid format `xml`" in proc.stderr


@pytest.mark.integration
def test_json_error_envelope(empty_repo: Path) -> None:
    proc = run_repohygiene("--path", str(empty_repo), "--format", "json", "--only", "ghost")
    assert proc.returncode == ERR_CONFIG
    envelope = json.loads(proc.stderr.strip().splitlines()[-1])
    assert envelope["status"] == "error"
    assert envelope["errors"][0]["kind"] == "invalid_selection"
    assert envelope["errors"][0]["unknown"] == ["ghost"]


@pytest.mark.integration
def test_env_selection_is_honoured(empty_repo: Path) -> None:
    proc = run_repohygiene("--path", str(empty_repo), "--format", "json", env={"REPOHYGIENE_ONLY": "changelog"})
    assert proc.returncode == OK, proc.stderr
    payload = json.loads(proc.stdout)
    assert [row["check"] for row in payload["checks"]] == ["changelog"]
    assert payload["summary"] == "1 of 1 checks failed."


def test_table_output_in_process(healthy_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--path", str(healthy_repo), "--quiet"])
    out = capsys.readouterr().out
    assert code == OK
    assert out.splitlines()[0].split() == ["CHECK", "STATUS", "LEVEL", "FINDINGS"]
    assert "Python project detected via pyproject.toml" in out
    assert out.rstrip().endswith(f"1 of {len(check_keys())} checks failed.")


def test_fix_mode_in_process(empty_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--path", str(empty_repo), "--fix", "--only", "changelog,gitignore", "--format", "json", "--quiet"])
    payload = json.loads(capsys.readouterr().out)
    assert code == OK
    assert all(row.get("fixed") for row in payload["findings"])
    assert (empty_repo / "CHANGELOG.md").is_file()


def test_repeated_json_runs_are_identical(empty_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--path", str(empty_repo), "--format", "json", "--quiet"])
    first = capsys.readouterr().out
    main(["--path", str(empty_repo), "--format", "json", "--quiet", "--jobs", "4"])
    assert capsys.readouterr().out == first


def test_non_utf8_pyproject_is_reported_not_raised(empty_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (empty_repo / "pyproject.toml").write_bytes(b'[project]\nname = "caf\xe9"\n')
    code = main(["--path", str(empty_repo), "--format", "json", "--only", "python_project", "--quiet"])
    payload = json.loads(capsys.readouterr().out)
    assert code == OK
    assert any(row["message"].startswith("pyproject.toml is not valid TOML") for row in payload["findings"])
