"""Tests for reading dependencies from project manifests."""

import json
from pathlib import Path

import pytest

from deptrust.manifests import ManifestError, normalize_pypi_name, read_dependencies
from deptrust.models.schemas import Ecosystem


def write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestPackageJson:
    """Tests for npm projects."""

    def test_direct_and_dev_dependencies(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {
            "dependencies": {"express": "4.18.2", "chalk": "^5.3.0"},
            "devDependencies": {"jest": "~29.7.0", "express": "4.17.0", "typescript": "v5.4.5"},
        })

        deps = read_dependencies(tmp_path)

        assert [(d.name, d.version) for d in deps] == [
            ("express", "4.18.2"),
            ("chalk", "latest"),
            ("jest", "latest"),
            ("typescript", "5.4.5"),
        ]
        assert all(d.ecosystem == Ecosystem.NPM and d.is_direct for d in deps)

    def test_lock_file_resolves_versions(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"dependencies": {"chalk": "^5.3.0", "debug": "*"}})
        write_json(tmp_path / "package-lock.json", {
            "lockfileVersion": 3,
            "packages": {
                "": {"name": "app"},
                "node_modules/chalk": {"version": "5.3.0"},
                "node_modules/express/node_modules/debug": {"version": "2.6.9"},
            },
        })

        deps = {d.name: d.version for d in read_dependencies(tmp_path)}

        assert deps == {"chalk": "5.3.0", "debug": "latest"}

    def test_corrupt_lock_file_is_ignored(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"dependencies": {"chalk": "^5.3.0"}})
        (tmp_path / "package-lock.json").write_text("{", encoding="utf-8")

        assert read_dependencies(tmp_path)[0].version == "latest"

    def test_no_dependencies(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"name": "empty"})

        assert read_dependencies(tmp_path) == []

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ManifestError, match="Invalid JSON"):
            read_dependencies(tmp_path)

    def test_npm_takes_precedence(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"dependencies": {"express": "4.18.2"}})
        (tmp_path / "requirements.txt").write_text("requests==2.32.3\n", encoding="utf-8")

        assert [d.name for d in read_dependencies(tmp_path)] == ["express"]


class TestRequirementsTxt:
    """Tests for Python projects."""

    def test_parses_requirements(self, tmp_path: Path) -> None:
        (tmp_path / "requirements.txt").write_text(
            "# web stack\n"
            "requests==2.32.3\n"
            "Django_REST.framework>=3.14  # api\n"
            "uvicorn[standard]==0.30.1\n"
            "pywin32==306; sys_platform == 'win32'\n"
            "-r dev.txt\n"
            "--index-url https://pypi.org/simple\n"
            "\n"
            "numpy\n"
            "requests==2.0.0\n",
            encoding="utf-8",
        )

        deps = read_dependencies(tmp_path)

        assert [(d.name, d.version) for d in deps] == [
            ("requests", "2.32.3"),
            ("django-rest-framework", "latest"),
            ("uvicorn", "0.30.1"),
            ("pywin32", "306"),
            ("numpy", "latest"),
        ]
        assert all(d.ecosystem == Ecosystem.PYPI for d in deps)

    def test_no_manifest(self, tmp_path: Path) -> None:
        assert read_dependencies(tmp_path) is None

    @pytest.mark.parametrize(
        "name, expected",
        [("Django", "django"), ("typing_extensions", "typing-extensions"), ("zope.interface", "zope-interface"), ("a-_.b", "a-b")],
    )
    def test_normalize_pypi_name(self, name: str, expected: str) -> None:
        assert normalize_pypi_name(name) == expected
