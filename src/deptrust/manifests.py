"""Reads direct dependencies from project manifests.

Supported: ``package.json`` (with ``package-lock.json`` for resolved versions)
and ``requirements.txt``. Unpinned requirements are analyzed at "latest".
"""

import json
import logging
import re
from pathlib import Path

from deptrust.models.schemas import Dependency, Ecosystem

logger = logging.getLogger(__name__)

_REQUIREMENT = re.compile(r"^([A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?)\s*(\[.*?\])?\s*(.*)$")
_PINNED = re.compile(r"^===?\s*([A-Za-z0-9._+!-]+)$")
_EXACT_SEMVER = re.compile(r"^v?(\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?)$")


class ManifestError(ValueError):
    """Raised when a manifest exists but cannot be parsed."""


def read_dependencies(project_dir: Path | str) -> list[Dependency] | None:
    """Direct dependencies of the project in ``project_dir``.

    Args:
        project_dir: Project root.

    Returns:
        Dependencies, or None if no supported manifest exists.

    Raises:
        ManifestError: If a manifest is present but malformed.
    """
    root = Path(project_dir)
    if (root / "package.json").is_file():
        logger.info(f"Detected npm project in {root}")
        return read_package_json(root)
    if (root / "requirements.txt").is_file():
        logger.info(f"Detected Python project in {root}")
        return read_requirements(root / "requirements.txt")
    return None


def read_package_json(root: Path) -> list[Dependency]:
    """Direct dependencies and devDependencies from package.json."""
    manifest = _read_json(root / "package.json")
    locked = _locked_versions(root / "package-lock.json")

    deps: dict[str, Dependency] = {}
    for section in ("dependencies", "devDependencies"):
        for name, spec in (manifest.get(section) or {}).items():
            if name in deps:
                continue
            version = locked.get(name) or _exact_npm_version(str(spec))
            deps[name] = Dependency(name=name, version=version, ecosystem=Ecosystem.NPM)
    return list(deps.values())


def read_requirements(path: Path) -> list[Dependency]:
    """Dependencies from a requirements.txt file. Options and URLs are skipped."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e

    deps: dict[str, Dependency] = {}
    for raw in lines:
        line = raw.split("#", 1)[0].strip()
        if not line or line.startswith("-"):
            continue
        # Environment markers
        line = line.split(";", 1)[0].strip()
        match = _REQUIREMENT.match(line)
        if not match:
            logger.debug(f"Skipping unrecognized requirement: {raw}")
            continue

        name = normalize_pypi_name(match.group(1))
        pinned = _PINNED.match(match.group(3).strip())
        version = pinned.group(1) if pinned else "latest"
        deps.setdefault(name, Dependency(name=name, version=version, ecosystem=Ecosystem.PYPI))
    return list(deps.values())


def normalize_pypi_name(name: str) -> str:
    """PEP 503 normalization: lowercase, runs of ``-_.`` become ``-``."""
    return re.sub(r"[-_.]+", "-", name).lower()


def _exact_npm_version(spec: str) -> str:
    match = _EXACT_SEMVER.match(spec.strip())
    return match.group(1) if match else "latest"


def _locked_versions(path: Path) -> dict[str, str]:
    """Top-level installed versions from a v2/v3 package-lock.json."""
    if not path.is_file():
        return {}
    try:
        lock = _read_json(path)
    except ManifestError as e:
        logger.warning(f"Ignoring lock file: {e}")
        return {}

    versions = {}
    for pkg_path, meta in (lock.get("packages") or {}).items():
        # Direct installs only: "node_modules/<name>", not nested node_modules
        if not pkg_path.startswith("node_modules/") or "/node_modules/" in pkg_path:
            continue
        if isinstance(meta, dict) and meta.get("version"):
            versions[pkg_path[len("node_modules/") :]] = meta["version"]
    return versions


def _read_json(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    return data
