"""YAML configuration file parser and resolver."""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from retriable.core.config import RetryConfig
from retriable.core.exceptions import ConfigurationError, ValidationError


def _normalize_keys(data: Mapping[Any, Any]) -> Dict[str, Any]:
    # Keys are case-insensitive and accept "-" in place of "_"
    return {str(key).strip().lower().replace("-", "_"): value for key, value in data.items()}


def read_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Read raw settings from a YAML configuration file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Mapping of normalized keys to values (empty for an empty file)

    Raises:
        ConfigurationError: If file not found, invalid YAML or not a mapping
    """
    path = Path(config_path)

    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Failed to read {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid config structure in {path}: expected a mapping, "
            f"got {type(data).__name__}"
        )

    return _normalize_keys(data)


def parse_config(config_path: Union[str, Path]) -> RetryConfig:
    """Parse retry configuration from YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated RetryConfig

    Raises:
        ConfigurationError: If file not found or invalid YAML
        ValidationError: If a value is invalid

    Example:
        >>> config = parse_config("retry.yaml")
        >>> print(config.retries)
        9
    """
    return parse_config_from_dict(read_config_file(config_path))


def parse_config_from_dict(data: Mapping[str, Any]) -> RetryConfig:
    """Parse retry configuration from dictionary.

    Raises:
        ValidationError: If a value is invalid
    """
    try:
        return RetryConfig.model_validate(_normalize_keys(data))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid configuration:\n{e}")


def resolve_config(
    overrides: Mapping[str, Any], config_path: Optional[Union[str, Path]] = None
) -> RetryConfig:
    """Merge defaults, config file and explicit settings.

    Explicit settings come from flags or environment variables; only keys
    that were actually given should be present in ``overrides``.

    Args:
        overrides: Settings that take precedence over the config file
        config_path: Optional path to a YAML configuration file

    Returns:
        Validated RetryConfig

    Raises:
        ConfigurationError: If the config file cannot be read
        ValidationError: If a merged value is invalid
    """
    data: Dict[str, Any] = {}
    if config_path:
        data.update(read_config_file(config_path))
    data.update(_normalize_keys(overrides))
    return parse_config_from_dict(data)
