"""Configuration loader with YAML support and environment variable substitution."""

import copy
import os
import re
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = 'config.yaml'

DEFAULT_CONFIG: Dict[str, Any] = {
    'title': {
        'product_names': ['ChatGPT'],
    },
    'roles': {
        'text_prefix_heuristic': True,
    },
    'export': {
        'output_directory': '.',
        'encoding': 'utf-8',
    },
    'session': {
        'url': '',
        'download_directory': '.',
        'poll_interval': 1.0,
    },
    'logging': {
        'level': None,
        'file': None,
    },
}


class ConfigLoader:
    """Handles loading and validation of configuration files."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)\}')

    @classmethod
    def load(cls, config_path: Optional[str] = None, required: bool = False) -> Dict[str, Any]:
        """
        Load configuration from YAML file with environment variable substitution.

        Values from the file are deep-merged over the built-in defaults, so a
        partial file only needs to name the settings it changes.

        Args:
            config_path: Path to YAML configuration file (defaults to config.yaml)
            required: Raise if the file is missing instead of using defaults

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If a required config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ValueError: If the file does not contain a mapping
        """
        config = copy.deepcopy(DEFAULT_CONFIG)
        config_path = config_path or DEFAULT_CONFIG_PATH

        if not os.path.exists(config_path):
            if required:
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            return config
        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a dictionary")

        # Substitute environment variables recursively
        config_data = cls._substitute_env_vars_recursive(config_data)

        deep_merge(config, config_data)
        return config

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> None:
        """
        Validate configuration for correct types and values.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValueError: If validation fails
        """
        product_names = get_nested(config, 'title.product_names', [])
        if not isinstance(product_names, list) or not all(isinstance(n, str) for n in product_names):
            raise ValueError("title.product_names must be a list of strings")

        heuristic = get_nested(config, 'roles.text_prefix_heuristic', True)
        if not isinstance(heuristic, bool):
            raise ValueError("roles.text_prefix_heuristic must be a boolean")

        cls._validate_directory(config, 'export.output_directory')
        cls._validate_directory(config, 'session.download_directory')

        encoding = get_nested(config, 'export.encoding', 'utf-8')
        if not isinstance(encoding, str) or not encoding:
            raise ValueError("export.encoding must be a non-empty string")

        poll_interval = get_nested(config, 'session.poll_interval', 1.0)
        if isinstance(poll_interval, bool) or not isinstance(poll_interval, (int, float)) or poll_interval <= 0:
            raise ValueError("session.poll_interval must be a positive number")

        level = get_nested(config, 'logging.level')
        if level is not None:
            allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
            if not isinstance(level, str) or level.upper() not in allowed_levels:
                raise ValueError(f"logging.level must be one of: {sorted(allowed_levels)}")

    @classmethod
    def merge_with_args(cls, config: Dict[str, Any], args) -> Dict[str, Any]:
        """
        Merge configuration file with CLI arguments.
        CLI arguments take precedence over config file values.

        Args:
            config: Base configuration dictionary
            args: CLI arguments with attributes matching config keys

        Returns:
            Merged configuration dictionary
        """
        merged = copy.deepcopy(config)

        for section in ('export', 'session', 'logging'):
            if section not in merged:
                merged[section] = {}

        if getattr(args, 'output_dir', None):
            merged['export']['output_directory'] = args.output_dir
            merged['session']['download_directory'] = args.output_dir

        if getattr(args, 'url', None):
            merged['session']['url'] = args.url

        if getattr(args, 'log_file', None):
            merged['logging']['file'] = args.log_file

        verbose = getattr(args, 'verbose', 0) or 0
        if verbose >= 2:
            merged['logging']['level'] = 'DEBUG'
        elif verbose >= 1:
            merged['logging']['level'] = 'INFO'

        return merged

    @classmethod
    def _substitute_env_vars_recursive(cls, data: Any) -> Any:
        """Recursively substitute environment variables in data structure."""
        if isinstance(data, dict):
            return {key: cls._substitute_env_vars_recursive(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [cls._substitute_env_vars_recursive(item) for item in data]
        elif isinstance(data, str):
            return cls._substitute_env_vars(data)
        else:
            return data

    @classmethod
    def _substitute_env_vars(cls, value: str) -> str:
        """Substitute environment variables in a string value."""
        def replace_match(match):
            var_name = match.group(1)
            env_value = os.getenv(var_name)
            return env_value if env_value is not None else match.group(0)

        return cls.ENV_VAR_PATTERN.sub(replace_match, value)

    @staticmethod
    def _validate_directory(config: Dict[str, Any], field: str) -> None:
        """Validate that a directory setting is a string and not an existing file."""
        value = get_nested(config, field)
        if not isinstance(value, str) or not value:
            raise ValueError(f"Missing required configuration: {field}")
        if os.path.exists(value) and not os.path.isdir(value):
            raise ValueError(f"{field} '{value}' is not a directory")


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``source`` into ``target`` in place; nested dicts are merged, other values replaced."""
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, dict):
            deep_merge(target[key], value)
        else:
            target[key] = value
    return target


def get_nested(config: dict, path: str, default: Any = None) -> Any:
    """Safely retrieve nested configuration values using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "export.output_directory")
        default: Default value if path doesn't exist

    Returns:
        Value at the nested path or default
    """
    keys = path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


__all__ = ['ConfigLoader', 'DEFAULT_CONFIG', 'deep_merge', 'get_nested']
