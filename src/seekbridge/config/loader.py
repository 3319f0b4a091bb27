"""Configuration loading and validation."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from seekbridge.config.schema import SeekbridgeConfig

DEFAULT_CONFIG_PATH = Path.home() / ".seekbridge" / "seekbridge.yaml"
API_KEY_ENV_VAR = "DEEPSEEK_API_KEY"


class ConfigError(Exception):
    """Configuration loading or validation error."""


def load_config(path: Optional[Path] = None) -> SeekbridgeConfig:
    """Load and validate seekbridge configuration from YAML file.

    Args:
        path: Path to config file. If None, tries default location.
              If file doesn't exist, returns default config.

    Returns:
        Validated configuration object. A missing API key is taken from
        the DEEPSEEK_API_KEY environment variable.

    Raises:
        ConfigError: If config file exists but is invalid
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    if not path.exists():
        config = SeekbridgeConfig()
    else:
        config = _read_config(path)

    if not config.deepseek.api_key:
        config.deepseek.api_key = os.environ.get(API_KEY_ENV_VAR) or None

    return config


def _read_config(path: Path) -> SeekbridgeConfig:
    try:
        with open(path, "r") as f:
            config_data = yaml.safe_load(f)

        # Handle empty file
        if config_data is None:
            return SeekbridgeConfig()

        return SeekbridgeConfig(**config_data)

    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
    except Exception as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e


def save_config(config: SeekbridgeConfig, path: Optional[Union[str, Path]] = None) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration object to save
        path: Destination path (string or Path object). If None, uses default location.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    elif isinstance(path, str):
        path = Path(path)

    path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump()

    with open(path, "w") as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)
