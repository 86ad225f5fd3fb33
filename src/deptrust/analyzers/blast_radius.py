"""Blast radius: which project source files import a package."""

import asyncio
import logging
import os
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from deptrust.models.schemas import BlastRadiusResult
from deptrust.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = frozenset({
    ".js", ".ts", ".jsx", ".tsx", ".mjs", ".mts", ".cjs", ".cts",
    ".py",
})  # fmt: skip

IGNORED_DIRS = frozenset({
    "node_modules", ".git", "dist", "build", "out", "coverage",
    ".next", ".nuxt", "__pycache__", ".turbo",
    ".venv", "venv", ".tox", ".mypy_cache", ".pytest_cache", "site-packages",
})  # fmt: skip

BATCH_SIZE = 50


@dataclass
class ImportGraph:
    """Package name -> relative paths of the source files importing it."""

    total_files: int = 0
    importers: dict[str, set[str]] = field(default_factory=dict)

    def blast_radius(self, package_name: str) -> BlastRadiusResult:
        return _result(sorted(self.importers.get(package_name, ())), self.total_files)


class BlastRadiusCalculator:
    """Scans a project's source tree for imports of a package.

    Recognized forms, including sub-path imports (``pkg/sub``, ``pkg.sub``):

    - ``import x from "pkg"`` and ``export ... from "pkg"``
    - ``import "pkg"``
    - ``require("pkg")``
    - ``import("pkg")``
    - ``import pkg``, ``import a, pkg`` and ``from pkg import x`` (Python)

    A name never matches a longer name sharing its prefix, so ``chalk`` does
    not match ``chalk-animation``.
    """

    def __init__(self, batch_size: int = BATCH_SIZE) -> None:
        self.batch_size = batch_size
        self._patterns: dict[tuple[str, bool], re.Pattern[str]] = {}

    def pattern_for(self, package_name: str, python: bool = False) -> re.Pattern[str]:
        """Compiled import pattern for a package, built once per name and language."""
        key = (package_name, python)
        if key not in self._patterns:
            self._patterns[key] = build_import_pattern(package_name, python)
        return self._patterns[key]

    async def calculate(self, package_name: str, project_dir: Path | str) -> BlastRadiusResult:
        """Count the source files under ``project_dir`` that import ``package_name``.

        Args:
            package_name: Package to look for.
            project_dir: Root of the consuming project.

        Returns:
            Affected count, sorted relative paths and percentage of all source
            files. All zero for an empty or unreadable tree.
        """
        graph = await self.build_import_graph([package_name], project_dir)
        return graph.blast_radius(package_name)

    async def build_import_graph(
        self,
        package_names: Iterable[str],
        project_dir: Path | str,
    ) -> ImportGraph:
        """Scan the tree once and record the importers of every package.

        Args:
            package_names: Packages to look for.
            project_dir: Root of the consuming project.

        Returns:
            ImportGraph covering every name, including those with no importers.
        """
        root = Path(project_dir)
        names = list(dict.fromkeys(package_names))
        patterns = {
            python: {name: self.pattern_for(name, python) for name in names} for python in (False, True)
        }
        graph = ImportGraph(importers={name: set() for name in names})

        files = await asyncio.to_thread(collect_source_files, root)
        graph.total_files = len(files)
        if not files or not names:
            return graph

        for start in range(0, len(files), self.batch_size):
            batch = files[start : start + self.batch_size]
            contents = await asyncio.gather(*(asyncio.to_thread(_read_source, path) for path in batch))
            for path, content in zip(batch, contents):
                if content is None:
                    continue
                relative = path.relative_to(root).as_posix()
                for name, pattern in patterns[path.suffix == ".py"].items():
                    if pattern.search(content):
                        graph.importers[name].add(relative)

        logger.debug(f"Scanned {len(files)} source files under {root} for {len(names)} package(s)")
        return graph


def build_import_pattern(package_name: str, python: bool = False) -> re.Pattern[str]:
    """Regex matching the import forms of a package in one language.

    Args:
        package_name: npm or PyPI package name.
        python: Build the Python pattern, where ``-`` in the name is matched
            as ``_`` and a lowercased module name also matches.

    Returns:
        Compiled multiline pattern.
    """
    if python:
        modules = {package_name.replace("-", "_"), package_name.replace("-", "_").lower()}
        module = "|".join(re.escape(m) for m in sorted(modules))
        py_module = rf"(?:{module})(?:\.[\w.]+)?"
        alternatives = [
            rf"^\s*import\s+(?:[\w.]+(?:\s+as\s+\w+)?\s*,\s*)*{py_module}(?=\s|,|;|$)",
            rf"^\s*from\s+{py_module}\s+import\b",
        ]
        return re.compile("|".join(alternatives), re.MULTILINE)

    escaped = re.escape(package_name)
    # Name, optionally followed by a sub-path, up to the closing quote
    pkg = rf"{escaped}(?:/[^'\"]*)?"
    alternatives = [
        rf"from\s+['\"]{pkg}['\"]",
        rf"import\s+['\"]{pkg}['\"]",
        rf"require\s*\(\s*['\"]{pkg}['\"]\s*\)",
        rf"import\s*\(\s*['\"]{pkg}['\"]\s*\)",
    ]
    return re.compile("|".join(alternatives))


def collect_source_files(root: Path) -> list[Path]:
    """All source files under ``root``, skipping vendor, build and hidden directories."""
    files = []

    def on_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory: {error}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = [d for d in dirnames if d not in IGNORED_DIRS and not d.startswith(".")]
        for filename in filenames:
            if os.path.splitext(filename)[1] in SOURCE_EXTENSIONS:
                files.append(Path(dirpath) / filename)
    return files


def _read_source(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Skipping unreadable file {path}: {e}")
        return None


def _result(affected: list[str], total_files: int) -> BlastRadiusResult:
    if total_files == 0:
        return BlastRadiusResult()
    return BlastRadiusResult(
        affected_file_count=len(affected),
        affected_file_paths=affected,
        percentage=round_half_up(len(affected) / total_files * 10_000) / 100,
    )
