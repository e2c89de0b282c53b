"""Load and save the JSON application config."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from weighticket.config.constants import (
    CONFIG_FILENAME,
    DATA_DIR_ENV,
    DEFAULT_DATA_DIR,
    OUTPUT_SUBDIR,
    REGISTRY_FILENAME,
)
from weighticket.config.schema import AppConfig

logger = logging.getLogger(__name__)


def data_dir(override: Optional[Path] = None) -> Path:
    """Data directory: explicit override, then $WEIGHTICKET_DATA_DIR, then ./data."""
    if override is not None:
        return Path(override)
    return Path(os.environ.get(DATA_DIR_ENV, DEFAULT_DATA_DIR))


def config_path(base: Optional[Path] = None) -> Path:
    return data_dir(base) / CONFIG_FILENAME


def registry_path(base: Optional[Path] = None) -> Path:
    return data_dir(base) / REGISTRY_FILENAME


def output_dir(base: Optional[Path] = None) -> Path:
    return data_dir(base) / OUTPUT_SUBDIR


def load_config(path: Path) -> AppConfig:
    """Read the config file, falling back to defaults if missing or broken."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"No config at {path}, using defaults")
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return AppConfig.from_dict(data)
    except (json.JSONDecodeError, TypeError, ValueError, AttributeError) as exc:
        logger.warning(f"Could not parse config {path} ({exc}), using defaults")
        return AppConfig()


def save_config(config: AppConfig, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    logger.info(f"Config saved to {path}")
    return path
