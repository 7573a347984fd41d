"""Configuration for dufmt.

Settings are read from ``~/.dufmt/config.json`` (or the file named by the
``DUFMT_CONFIG`` environment variable). Any key may be omitted.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from dufmt.dircolors import DEFAULT_COLORS_ENV_VAR, DEFAULT_DIRCOLORS_COMMAND
from dufmt.models import ColorMode
from dufmt.report import DEFAULT_DU_COMMAND

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DUFMT_CONFIG"
CONFIG_FILE = Path(os.path.expanduser("~/.dufmt/config.json"))


class Settings(BaseModel):
    """Runtime settings."""

    du_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DU_COMMAND),
        description="Size report command; paths are appended",
    )
    dircolors_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DIRCOLORS_COMMAND),
        description="Command printing a shell-quoted color specification",
    )
    colors_env_var: str = Field(DEFAULT_COLORS_ENV_VAR, description="Env var holding the color specification")
    color: ColorMode = Field(ColorMode.AUTO, description="Default color mode")


def config_path() -> Path:
    """Location of the config file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(os.path.expanduser(override))
    return CONFIG_FILE


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or config_path()
    if not path.exists():
        return Settings()

    try:
        with open(path) as f:
            data = json.load(f)
        return Settings.model_validate(data)
    except (json.JSONDecodeError, OSError, ValidationError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return Settings()
