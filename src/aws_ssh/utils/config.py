"""
Configuration utilities for building the run configuration.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..exceptions import ConfigError
from ..models import RunConfig
from .yamler import get_allow_lists, get_defaults, load_yaml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / ".aws-ssh.yaml"


def validate_allow_lists(config: RunConfig) -> None:
    """
    Check environment and role against the configured allow-lists.

    An empty allow-list accepts any value, and an empty role always passes.

    Raises:
        ConfigError: If a value is not in its non-empty allow-list
    """
    if config.allowed_environments and config.environment not in config.allowed_environments:
        raise ConfigError(
            f"Environment '{config.environment}' is not allowed. "
            f"Allowed environments: {', '.join(config.allowed_environments)}"
        )
    if config.role and config.allowed_roles and config.role not in config.allowed_roles:
        raise ConfigError(
            f"Role '{config.role}' is not allowed. "
            f"Allowed roles: {', '.join(config.allowed_roles)}"
        )


def load_run_config(
    overrides: Dict[str, Any], config_file: Optional[str] = None
) -> RunConfig:
    """
    Build the run configuration from the config file and CLI overrides.

    Args:
        overrides: Values given on the command line; None means "not given"
        config_file: Explicit config file path. When omitted the default
            ~/.aws-ssh.yaml is used if it exists.

    Returns:
        RunConfig: Validated run configuration

    Raises:
        ConfigError: On unreadable config, invalid values or allow-list violations
    """
    settings: Dict[str, Any] = {}

    if config_file is not None:
        path = Path(config_file).expanduser()
    elif DEFAULT_CONFIG_FILE.exists():
        path = DEFAULT_CONFIG_FILE
    else:
        path = None

    if path is not None:
        logger.debug(f"Loading configuration from {path}")
        file_config = load_yaml_file(path)
        settings.update(get_defaults(file_config))
        settings.update(get_allow_lists(file_config))

    settings.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = RunConfig(**settings)
    except ValidationError as e:
        raise ConfigError("Invalid configuration", cause=e)

    validate_allow_lists(config)
    return config
