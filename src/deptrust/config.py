"""Configuration loading: defaults < config file < environment < overrides."""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from deptrust.models.schemas import Settings

logger = logging.getLogger(__name__)

# Searched in order inside the project directory
CONFIG_FILENAMES = (
    ".deptrustrc",
    ".deptrustrc.json",
    ".deptrustrc.yaml",
    ".deptrustrc.yml",
    "deptrust.yaml",
)

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "DEPTRUST_GITHUB_TOKEN")


class ConfigError(ValueError):
    """Raised for invalid configuration (bad file content or weights)."""


def find_config_file(project_dir: Path) -> Path | None:
    """Return the first config file present in ``project_dir``."""
    for filename in CONFIG_FILENAMES:
        candidate = project_dir / filename
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a config file. YAML is a superset of JSON, so one parser covers both.

    Raises:
        ConfigError: If the file is unreadable, not YAML or not a mapping.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config file at {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a mapping")
    return {_snake_case(str(k)): v for k, v in raw.items()}


def load_config(
    project_dir: Path | str | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load and validate settings for a project.

    Args:
        project_dir: Directory searched for a config file. Defaults to the cwd.
        overrides: Values from CLI flags or programmatic use. Highest precedence;
            None values are ignored.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If the config file or the merged values are invalid.
    """
    project_dir = Path(project_dir) if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}
    path = find_config_file(project_dir)
    if path is not None:
        logger.debug(f"Using config file {path}")
        merged.update(read_config_file(path))

    for var in TOKEN_ENV_VARS:
        if os.environ.get(var):
            merged["github_token"] = os.environ[var]
            break

    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _snake_case(key: str) -> str:
    """minTrustScore -> min_trust_score."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()
