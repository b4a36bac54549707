"""Configuration loader for YAML files and environment variables."""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .config_schema import AppConfig

DEFAULT_CONFIG_PATH = "config.yaml"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "NOTION_TOKEN": ("notion", "api_key"),
    "API_KEY": ("auth", "api_key"),
    "PORT": ("server", "port"),
}


class ConfigLoader:
    """Load and validate configuration from YAML files and the environment."""

    @staticmethod
    def read_yaml(path: str) -> Dict[str, Any]:
        """
        Read a YAML configuration file.

        Args:
            path: Path to configuration file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is empty or not a mapping
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)

        if not config_dict:
            raise ValueError("Configuration file is empty")
        if not isinstance(config_dict, dict):
            raise ValueError("Configuration file must contain a mapping")

        return config_dict

    @staticmethod
    def apply_env(config: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
        """
        Overlay environment variables on a configuration dictionary.

        Args:
            config: Configuration dictionary (not modified)
            environ: Environment mapping

        Returns:
            New dictionary with overrides applied
        """
        merged = {key: dict(value) if isinstance(value, dict) else value for key, value in config.items()}
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = environ.get(env_name)
            if value:
                # A section with all keys commented out loads as None
                merged[section] = dict(merged.get(section) or {})
                merged[section][key] = value
        return merged

    @staticmethod
    def load_config(
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> AppConfig:
        """
        Load configuration from a YAML file and the environment.

        Args:
            path: Path to configuration file. When None, config.yaml is used
                if it exists, otherwise only the environment is read.
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Validated AppConfig instance

        Raises:
            FileNotFoundError: If an explicitly given config file doesn't exist
            ValueError: If config is invalid
        """
        if path is None and Path(DEFAULT_CONFIG_PATH).exists():
            path = DEFAULT_CONFIG_PATH

        config_dict = ConfigLoader.read_yaml(path) if path is not None else {}
        config_dict = ConfigLoader.apply_env(
            config_dict, os.environ if environ is None else environ
        )

        return AppConfig(**config_dict)


def load_config(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Convenience function to load configuration.

    Args:
        path: Path to configuration file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated AppConfig instance
    """
    return ConfigLoader.load_config(path, environ)
