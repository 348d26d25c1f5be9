"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from ddscore.cli import app

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path, monkeypatch, dataset):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("ddscore.config.DEFAULT_CONFIG_PATHS", [tmp_path / "ddscore.toml"])
    (tmp_path / "profiles.json").write_text(json.dumps(dataset()))
    (tmp_path / "gaps.json").write_text(json.dumps(dataset(security_profile={"auth": ""})))
    return tmp_path


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "ddscore" in result.output


def test_score_writes_report_and_snapshot(workspace):
    result = runner.invoke(
        app,
        ["score", "sol-1", "env-1", "--data", "profiles.json", "--store", "snaps.jsonl",
         "-f", "json", "-o", "report.json"],
    )
    assert result.exit_code == 0, result.output
    report = json.loads((workspace / "report.json").read_text())
    assert report["global_score"] == 100.0
    assert len((workspace / "snaps.jsonl").read_text().splitlines()) == 1

    history = runner.invoke(app, ["history", "sol-1", "--store", "snaps.jsonl"])
    assert history.exit_code == 0
    assert "Low" in history.output


def test_score_blocked_exits_2_and_records_nothing(workspace):
    result = runner.invoke(
        app,
        ["score", "sol-1", "env-1", "--data", "gaps.json", "--store", "snaps.jsonl",
         "-f", "json", "-o", "blocked.json"],
    )
    assert result.exit_code == 2
    blocked = json.loads((workspace / "blocked.json").read_text())
    assert blocked["missing_identifiers"] == ["SecurityProfile.auth"]
    assert not (workspace / "snaps.jsonl").exists()


def test_check(workspace):
    ok = runner.invoke(app, ["check", "sol-1", "env-1", "--data", "profiles.json"])
    assert ok.exit_code == 0
    assert "ready for scoring" in ok.output

    gaps = runner.invoke(app, ["check", "sol-1", "env-1", "--data", "gaps.json"])
    assert gaps.exit_code == 2


def test_score_without_source_fails(workspace):
    result = runner.invoke(app, ["score", "sol-1", "env-1"])
    assert result.exit_code == 1
    assert "no profile source configured" in result.output


def test_config_masks_token(workspace):
    (workspace / "ddscore.toml").write_text('[scoring]\ngraphql_token = "s3cret"\n')
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "s3cret" not in result.output
    assert "***" in result.output


def test_score_terminal_output_with_bracketed_values(workspace, dataset):
    (workspace / "odd.json").write_text(json.dumps(dataset(security_profile={"auth": "[/sso]"})))
    result = runner.invoke(
        app, ["score", "sol-1", "env-1", "--data", "odd.json", "--store", "snaps.jsonl"]
    )
    assert result.exit_code == 0, result.output
    assert "[/sso]" in result.output


def test_history_skips_corrupt_lines(workspace):
    runner.invoke(
        app, ["score", "sol-1", "env-1", "--data", "profiles.json", "--store", "snaps.jsonl"]
    )
    with (workspace / "snaps.jsonl").open("a") as fh:
        fh.write('{"score_id": "trunc')

    result = runner.invoke(app, ["history", "sol-1", "--store", "snaps.jsonl"])
    assert result.exit_code == 0, result.output
    assert "Low" in result.output
