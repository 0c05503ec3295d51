"""Loading configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_maker.config.models import ReleaseMakerConfig
from release_maker.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_KEY = "release-maker"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find the nearest pyproject.toml, searching upward from ``start``.

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or any parent directory")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_maker_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the [tool.release-maker] table, or an empty dict."""
    section = pyproject.get("tool", {}).get(TOOL_KEY, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(f"[tool.{TOOL_KEY}] must be a table")
    return section


def load_config(path: Path | None = None) -> ReleaseMakerConfig:
    """Load configuration for the project at ``path``.

    A missing pyproject.toml or a missing [tool.release-maker] table is not
    an error: the defaults are returned.

    Raises:
        ConfigValidationError: If the table contains invalid values
    """
    try:
        pyproject_path = find_pyproject_toml(path)
    except ConfigNotFoundError:
        logger.debug("No pyproject.toml found, using default configuration")
        return ReleaseMakerConfig()

    data = extract_release_maker_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded [tool.%s] from %s: %s", TOOL_KEY, pyproject_path, data)

    try:
        return ReleaseMakerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid [tool.{TOOL_KEY}] configuration in {pyproject_path}:\n{e}"
        ) from e
