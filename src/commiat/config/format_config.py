"""
Project-local commit message format.

A repository may carry a ``.commiat`` JSON file at its root::

    {
        "format": "{type}({scope}): {msg}",
        "variables": {"scope": "The area of the code that changed"}
    }

``format`` is handed to the model as the desired message shape and
``variables`` describes the custom placeholders it contains.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from commiat.config.loader import ConfigError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


LOCAL_CONFIG_FILENAME = ".commiat"
DEFAULT_FORMAT = "{type}: {msg}"


@dataclass
class FormatConfig:
    """Commit message format and descriptions of its custom variables."""

    format: str = DEFAULT_FORMAT
    variables: Dict[str, str] = field(default_factory=dict)


def local_config_path(repo_root: Path) -> Path:
    return repo_root / LOCAL_CONFIG_FILENAME


def load_format_config(repo_root: Path) -> Optional[FormatConfig]:
    """Load the ``.commiat`` file from ``repo_root``.

    Returns
    -------
    Optional[FormatConfig]
        The parsed configuration, or None if the file does not exist.

    Raises
    ------
    ConfigError
        If the file is unreadable, not JSON, or not shaped like
        ``{"format": str, "variables": {...}}``.
    """
    path = local_config_path(repo_root)
    if not path.exists():
        logger.debug("No local format config at %s", path)
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse %s: %s", path, exc)
        raise ConfigError(f"Error reading or parsing {LOCAL_CONFIG_FILENAME}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid format in {LOCAL_CONFIG_FILENAME}. Expected a JSON object.")
    fmt = data.get("format")
    variables = data.get("variables")
    if not isinstance(fmt, str) or not fmt.strip() or not isinstance(variables, dict):
        raise ConfigError(
            f'Invalid format in {LOCAL_CONFIG_FILENAME}. Expected {{ "format": "...", "variables": {{...}} }}.'
        )
    logger.debug("Loaded format from %s", path)
    return FormatConfig(format=fmt, variables={str(k): str(v) for k, v in variables.items()})


def save_format_config(repo_root: Path, config: FormatConfig) -> Path:
    """Write ``config`` to the ``.commiat`` file in ``repo_root``."""
    path = local_config_path(repo_root)
    content = json.dumps({"format": config.format, "variables": config.variables}, indent=2)
    path.write_text(content, encoding="utf-8")
    logger.debug("Saved format config to %s", path)
    return path
