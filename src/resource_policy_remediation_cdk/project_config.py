"""Loading and validation of the deployment config.yaml."""

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError

REQUIRED_KEYS = [
    "account",
    "region",
    "accelerator_prefix",
    "home_region",
    "config_dir",
    "log_retention_days",
    "tags",
]


def load_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Loaded configuration dictionary

    Raises:
        FileNotFoundError: If config.yaml doesn't exist
        ConfigurationError: If config is invalid
    """
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please create config.yaml in the project root."
        )

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError("Invalid YAML in config file", path=str(config_path)) from e

    if not config:
        raise ConfigurationError("Configuration file is empty", path=str(config_path))

    return config


def validate_environment_config(config: dict[str, Any], environment: str) -> dict[str, Any]:
    """Validate that required environment configuration exists.

    Args:
        config: Full configuration dictionary
        environment: Environment name (e.g., 'PROD')

    Returns:
        The environment's configuration block

    Raises:
        ConfigurationError: If environment config is missing or invalid
    """
    if environment not in config:
        available = [k for k in config.keys() if k.isupper()]
        raise ConfigurationError(
            f"Environment '{environment}' not found in config.yaml",
            available=", ".join(available),
        )

    env_config = config[environment]
    missing_keys = [key for key in REQUIRED_KEYS if key not in env_config]
    if missing_keys:
        raise ConfigurationError(
            f"Missing required configuration keys for {environment}",
            missing=", ".join(missing_keys),
        )

    for index, policy in enumerate(env_config.get("policies") or []):
        if "name" not in policy or "path" not in policy:
            raise ConfigurationError(
                "Policy entries need 'name' and 'path'",
                environment=environment,
                index=index,
            )

    return env_config


__all__ = ["REQUIRED_KEYS", "load_config", "validate_environment_config"]
