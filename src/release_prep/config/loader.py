"""Loading configuration from ``pyproject.toml``."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_prep.config.models import ReleasePrepConfig
from release_prep.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_SECTION = "release-prep"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find ``pyproject.toml`` in ``start`` or one of its parents.

    Raises:
        ConfigNotFoundError: If no file is found up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT_FILENAME
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No {PYPROJECT_FILENAME} found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_prep_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-prep]`` table, or an empty dict."""
    section = pyproject.get("tool", {}).get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(f"[tool.{CONFIG_SECTION}] must be a table")
    return section


def load_config(project_root: Path) -> ReleasePrepConfig:
    """Load configuration for the project rooted at ``project_root``.

    Defaults are used when the project has no ``pyproject.toml`` or the file
    has no ``[tool.release-prep]`` section.

    Raises:
        ConfigValidationError: If the section contains invalid values
    """
    pyproject_path = project_root / PYPROJECT_FILENAME
    if not pyproject_path.is_file():
        logger.debug("no %s in %s, using defaults", PYPROJECT_FILENAME, project_root)
        return ReleasePrepConfig()

    raw = extract_release_prep_config(load_pyproject_toml(pyproject_path))
    try:
        return ReleasePrepConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid [tool.{CONFIG_SECTION}] configuration in {pyproject_path}:\n{e}"
        ) from e
