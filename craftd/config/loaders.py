import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from cerberus import Validator
from pydantic import ValidationError

from craftd.config.models import CraftdConfig

# Configure logger for this module
logger = logging.getLogger(__name__)

# Top-level shape of craftd.yaml; value types are checked by the pydantic models
CONFIG_SCHEMA: Dict[str, Any] = {
    "currency": {"type": "string", "required": False},
    "heatmap": {
        "type": "dict",
        "required": False,
        "schema": {
            "days": {"type": "integer", "required": False},
            "weeks_to_show": {"type": "integer", "required": False},
        },
    },
    "salary_chart": {
        "type": "dict",
        "required": False,
        "schema": {"consolidation": {"type": "string", "required": False}},
    },
    "logging": {
        "type": "dict",
        "required": False,
        "schema": {
            "log_dir": {"type": "string", "required": False},
            "debug": {"type": "boolean", "required": False},
            "clear_existing": {"type": "boolean", "required": False},
        },
    },
}


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads configuration data from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration. An empty file gives
        an empty dictionary.

    Raises:
        ConfigLoadError: If the file cannot be found or parsed.
    """
    config_path = Path(config_path)
    logger.info(f"Attempting to load configuration from: {config_path}")

    if not config_path.is_file():
        logger.error(f"Configuration file not found at path: {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {config_path}") from e
    except OSError as e:
        logger.exception(f"Could not read configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Could not read configuration file {config_path}") from e

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def validate_config(config_data: Dict[str, Any]) -> CraftdConfig:
    """
    Validate raw configuration data and build the typed config.

    Raises:
        ConfigLoadError: On unknown keys, wrong shapes or invalid values.
    """
    v = Validator(CONFIG_SCHEMA)
    if not v.validate(config_data):
        raise ConfigLoadError(f"Config validation failed: {v.errors}")

    try:
        return CraftdConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigLoadError(f"Config validation failed: {e}") from e


def load_config(config_path: Optional[Union[str, Path]] = None) -> CraftdConfig:
    """
    Load ``CraftdConfig`` from YAML, or return the defaults when no path is given.
    """
    if config_path is None:
        logger.debug("No configuration file given; using defaults")
        return CraftdConfig()

    config = validate_config(load_yaml_config(config_path))
    logger.debug(f"Configuration loaded: {config.model_dump()}")
    return config


# Expose for import
__all__ = [
    "CONFIG_SCHEMA",
    "ConfigLoadError",
    "load_config",
    "load_yaml_config",
    "validate_config",
]
