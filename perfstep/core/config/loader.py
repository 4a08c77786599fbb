"""
Configuration loader — reads perfstep.yml into StepSettings.

The file is optional: without one, the stock Taurus settings apply.
It reads YAML, validates against the Pydantic schema, and returns a
typed settings object.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from perfstep.core.models.step import StepSettings

logger = logging.getLogger(__name__)

# Default config filename
STEP_CONFIG_FILE = "perfstep.yml"


class ConfigError(Exception):
    """Raised when step configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for perfstep.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to perfstep.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / STEP_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, start_dir: Path | None = None) -> StepSettings:
    """Load and validate step settings.

    Args:
        path: Explicit path to perfstep.yml. Must exist when given.
        start_dir: Where to start the upward search when ``path`` is None.

    Returns:
        Validated StepSettings (defaults when no file is found).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(start_dir)
        if path is None:
            logger.debug("No %s found, using defaults", STEP_CONFIG_FILE)
            return StepSettings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading step config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return StepSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "perfstep" key or be flat
    step_data = data.get("perfstep", data)
    if not isinstance(step_data, dict):
        raise ConfigError(f"Expected a mapping under 'perfstep' in {path}")

    try:
        settings = StepSettings.model_validate(step_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid step configuration: {e}") from e

    logger.info("Loaded step config from %s (tool=%s)", path, settings.tool)
    return settings
