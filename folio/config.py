"""Project configuration for Folio.

Settings live in an optional ``folio.yaml`` at the project root and are
overlaid on DEFAULT_CONFIG.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

CONFIG_FILE = "folio.yaml"

DEFAULT_CONFIG = {
    "content_dir": "content",
    "extensions": [".md", ".markdown"],
    "include_drafts": False,
    "encoding": "utf-8",
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load project configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigError: If folio.yaml is not valid YAML, not a mapping, or holds
            values of the wrong type.
    """
    config_path = project_root / CONFIG_FILE
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid {config_path}: {exc}") from exc
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Invalid {config_path}: expected a mapping, got {type(loaded).__name__}"
            )
        config.update(loaded)
    config["extensions"] = _normalize_extensions(config["extensions"])
    if not isinstance(config["include_drafts"], bool):
        raise ConfigError("'include_drafts' must be true or false")
    return config


def _normalize_extensions(value: Any) -> list[str]:
    """Accept a single suffix or a list, with or without the leading dot."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(ext, str) for ext in value):
        raise ConfigError("'extensions' must be a string or a list of strings")
    return [ext if ext.startswith(".") else f".{ext}" for ext in value]
