"""
Configuration management for JSONVista.

Handles persistent configuration including:
- The document opened on startup
- Viewport auto-fit preference

Config is stored in config.json next to the executable/project root.
Environment variables (optionally loaded from .env) take priority.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from jsonvista.paths import get_config_path

logger = logging.getLogger(__name__)

DOCUMENT_ENV_VAR = "JSONVISTA_DOCUMENT"
AUTO_FIT_ENV_VAR = "JSONVISTA_AUTO_FIT"


def load_config() -> dict:
    """Load configuration from config.json."""
    config_path = get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}
    return {}


def save_config(config: dict) -> None:
    """Save configuration to config.json."""
    config_path = get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def get_document_path() -> Optional[Path]:
    """
    Get the document to open on startup.

    Priority:
    1. Environment variable JSONVISTA_DOCUMENT
    2. Stored in config.json
    """
    env_path = os.environ.get(DOCUMENT_ENV_VAR)
    if env_path:
        return Path(env_path)

    stored = load_config().get("document_path")
    return Path(stored) if stored else None


def set_document_path(path: Path) -> None:
    """Remember the document to open on the next startup."""
    config = load_config()
    config["document_path"] = str(path)
    save_config(config)


def is_auto_fit_enabled() -> bool:
    """Whether the graph viewport is refit after a document reload."""
    env_value = os.environ.get(AUTO_FIT_ENV_VAR)
    if env_value is not None:
        return env_value.strip().lower() not in ("0", "false", "no", "off")
    return bool(load_config().get("auto_fit", True))
