"""Tests for the deptrust command line interface."""

import json
import time
from pathlib import Path

import pytest
from typer.testing import CliRunner

from deptrust import __version__
from deptrust.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Working directory with a config pointing the cache at a temp file."""
    config = {"cachePath": str(tmp_path / "cache.json")}
    (tmp_path / ".deptrustrc.json").write_text(json.dumps(config), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("DEPTRUST_GITHUB_TOKEN", raising=False)
    return tmp_path


class TestVersion:
    """Tests for the version command."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"deptrust v{__version__}" in result.stdout


class TestCheck:
    """Tests for the check command."""

    def test_offline_json(self, project: Path) -> None:
        result = runner.invoke(app, ["check", "express", "--offline", "--json"])

        assert result.exit_code == 0
        report = json.loads(result.stdout)
        assert report["package"] == "express"
        assert report["trust_score"] == 0
        assert report["insufficient_data"] is True
        assert set(report["sources"].values()) == {"offline"}
        assert report["outlook"]["trend"] == "unknown"

    def test_writes_output_file(self, project: Path) -> None:
        output = project / "report.json"

        result = runner.invoke(app, ["check", "lodash", "--offline", "-o", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text())["package"] == "lodash"
        assert "Outlook:" in result.stdout

    def test_invalid_config(self, project: Path) -> None:
        (project / ".deptrustrc.json").write_text(json.dumps({"minTrustScore": 500}), encoding="utf-8")

        result = runner.invoke(app, ["check", "express", "--offline"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout


class TestScan:
    """Tests for the scan command."""

    def test_no_manifest(self, project: Path) -> None:
        result = runner.invoke(app, ["scan", str(project)])

        assert result.exit_code == 1
        assert "No supported manifest file found." in result.stdout

    def test_offline_scan_passes_threshold(self, project: Path) -> None:
        (project / "package.json").write_text(json.dumps({"dependencies": {"express": "4.18.2"}}), encoding="utf-8")

        result = runner.invoke(app, ["scan", str(project), "--offline", "--min-score", "0"])

        assert result.exit_code == 0
        assert "express" in result.stdout
        assert "Overall trust score: 0/100" in result.stdout

    def test_offline_scan_below_threshold(self, project: Path) -> None:
        (project / "requirements.txt").write_text("requests==2.32.3\n", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(project), "--offline", "--json"])

        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["below_threshold"] == ["requests"]
        assert report["reports"][0]["ecosystem"] == "pypi"
        assert report["reports"][0]["outlook"]["trend"] == "unknown"

    def test_invalid_manifest(self, project: Path) -> None:
        (project / "package.json").write_text("{", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(project), "--offline"])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout


class TestTyposquat:
    """Tests for the typosquat command."""

    def test_risky_name(self) -> None:
        result = runner.invoke(app, ["typosquat", "expresss"])

        assert result.exit_code == 1
        assert "express" in result.stdout

    def test_safe_name(self) -> None:
        result = runner.invoke(app, ["typosquat", "lodash"])

        assert result.exit_code == 0
        assert "does not resemble" in result.stdout

    def test_pypi(self) -> None:
        result = runner.invoke(app, ["typosquat", "reqeusts", "--ecosystem", "pypi"])

        assert result.exit_code == 1
        assert "requests" in result.stdout

    def test_pypi_name_case_is_ignored(self) -> None:
        result = runner.invoke(app, ["typosquat", "Django", "--ecosystem", "pypi"])

        assert result.exit_code == 0
        assert "does not resemble" in result.stdout


class TestCacheCommands:
    """Tests for the cache subcommands."""

    def test_stats_and_clear(self, project: Path) -> None:
        (project / "cache.json").write_text(
            json.dumps({"registry:express@latest": {"value": 1, "created_at": int(time.time()), "ttl": 3600}}),
            encoding="utf-8",
        )

        stats = runner.invoke(app, ["cache", "stats"])
        assert stats.exit_code == 0
        assert "Live entries" in stats.stdout
        assert "1" in stats.stdout

        cleared = runner.invoke(app, ["cache", "clear"])
        assert cleared.exit_code == 0
        assert "Cleared cache" in cleared.stdout

    def test_cleanup(self, project: Path) -> None:
        result = runner.invoke(app, ["cache", "cleanup"])

        assert result.exit_code == 0
        assert "Removed 0 expired entries" in result.stdout
