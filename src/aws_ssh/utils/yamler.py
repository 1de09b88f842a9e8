import yaml
from pathlib import Path
from typing import Any, Dict, List, Union

from ..exceptions import ConfigError, ConfigNotFoundError

DEFAULT_KEYS = {"environment", "role", "region", "suffix", "skip_roles", "profile", "direct_proxy"}
TOP_LEVEL_KEYS = {"defaults", "allowed_environments", "allowed_roles"}


def load_yaml_file(yaml_file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML configuration file into a dictionary.

    Args:
        yaml_file_path: Path to the YAML configuration file

    Returns:
        Dict[str, Any]: Parsed configuration (empty for an empty file)

    Raises:
        ConfigNotFoundError: If the YAML file cannot be found
        ConfigError: If the YAML file is malformed or not a mapping
    """
    try:
        with open(yaml_file_path, 'r') as file:
            config = yaml.safe_load(file)
    except FileNotFoundError:
        raise ConfigNotFoundError(f"YAML file not found at path: {yaml_file_path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML file {yaml_file_path}", cause=e)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Top level of {yaml_file_path} must be a mapping")
    return config


def _check_keys(section: Dict[str, Any], allowed: set, where: str) -> None:
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ConfigError(
            f"Unknown key(s) in {where}: {', '.join(unknown)}. "
            f"Available keys: {', '.join(sorted(allowed))}"
        )


def get_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get the 'defaults' section of a configuration.

    Raises:
        ConfigError: If the configuration holds unknown keys
    """
    _check_keys(config, TOP_LEVEL_KEYS, "configuration")

    defaults = config.get('defaults') or {}
    if not isinstance(defaults, dict):
        raise ConfigError("'defaults' must be a mapping")
    _check_keys(defaults, DEFAULT_KEYS, "'defaults'")
    return defaults


def get_allow_lists(config: Dict[str, Any]) -> Dict[str, List[str]]:
    """Get the environment and role allow-lists; missing lists are empty."""
    return {
        'allowed_environments': config.get('allowed_environments') or [],
        'allowed_roles': config.get('allowed_roles') or [],
    }
