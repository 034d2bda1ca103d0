"""Configuration and command-line parsers."""

from .command_parser import parse_command
from .config_parser import parse_config, parse_config_from_dict, resolve_config

__all__ = [
    "parse_command",
    "parse_config",
    "parse_config_from_dict",
    "resolve_config",
]
