"""
Global Configuration and Defaults.

Centralizes the constants the validator and layout rely on, and the
user-tunable settings loaded from .cfngraph.yaml and the environment.
"""

import logging
import os
from enum import StrEnum
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# --- Template validation ---
SUPPORTED_FORMAT_VERSION = "2010-09-09"
MAX_DESCRIPTION_LENGTH = 1024
# Objects and arrays, counted from the document root
MAX_NESTING_DEPTH = 128

# --- Layout (pixels) ---
DEFAULT_NODE_WIDTH = 200
DEFAULT_NODE_HEIGHT = 80
DEFAULT_NODE_SPACING = 100
DEFAULT_LAYER_SPACING = 80

# --- Grouping ---
DEFAULT_MIN_GROUP_SIZE = 2

CONFIG_FILENAME = ".cfngraph.yaml"
ENV_LAYOUT_DIRECTION = "CFNGRAPH_LAYOUT_DIRECTION"
ENV_MIN_GROUP_SIZE = "CFNGRAPH_MIN_GROUP_SIZE"


class LayoutDirection(StrEnum):
    """Primary axis along which dependencies flow into consumers."""
    DOWN = "DOWN"
    RIGHT = "RIGHT"


class LayoutOptions(BaseModel):
    direction: LayoutDirection = LayoutDirection.DOWN
    node_width: float = Field(default=DEFAULT_NODE_WIDTH, gt=0)
    node_height: float = Field(default=DEFAULT_NODE_HEIGHT, gt=0)
    node_spacing: float = Field(default=DEFAULT_NODE_SPACING, ge=0)
    layer_spacing: float = Field(default=DEFAULT_LAYER_SPACING, ge=0)


class GroupingConfig(BaseModel):
    enabled: bool = True
    min_group_size: int = Field(default=DEFAULT_MIN_GROUP_SIZE, ge=1)


class Settings(BaseModel):
    layout: LayoutOptions = Field(default_factory=LayoutOptions)
    grouping: GroupingConfig = Field(default_factory=GroupingConfig)


def load_settings(path: Path | None = None) -> Settings:
    """
    Resolve settings from defaults, the YAML file, then the environment.

    Args:
        path: Settings file to read. Defaults to .cfngraph.yaml in the
            working directory; a missing file is not an error.

    Raises:
        ConfigError: The file exists but is not valid YAML or does not
            match the settings schema.
    """
    config_path = path or Path.cwd() / CONFIG_FILENAME
    data: Dict[str, Any] = {}

    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping at the top level")
        logger.debug(f"Loaded settings from {config_path}")

    _apply_env_overrides(data)

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


def _apply_env_overrides(data: Dict[str, Any]) -> None:
    direction = os.getenv(ENV_LAYOUT_DIRECTION)
    if direction:
        data.setdefault("layout", {})["direction"] = direction.upper()

    min_size = os.getenv(ENV_MIN_GROUP_SIZE)
    if min_size:
        data.setdefault("grouping", {})["min_group_size"] = min_size
