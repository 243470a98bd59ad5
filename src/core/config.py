"""Configuration management for aggregation authorization management.

This module handles YAML configuration loading, validation, and
environment variable overrides. The file declares the home region the
Config client talks to and the authorizations that should exist there.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


DEFAULT_CONFIG_PATHS = ("config.yaml", "config/settings.yaml")


class Configuration:
    """Configuration management with YAML loading and validation.

    Expected layout::

        aws:
          home_region: us-east-1
          profile_name: audit        # optional
        authorizations:
          - account_id: "123456789012"
            region: us-west-2
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file.
                        If None, auto-detects config.yaml in current directory.

        Raises:
            ConfigurationError: When configuration file is invalid
        """
        self._config: Dict[str, Any] = {}
        self._config_path = self._resolve_config_path(config_path)
        self._load_configuration()
        self._apply_environment_overrides()
        self._validate_configuration()

    def _resolve_config_path(self, config_path: Optional[str]) -> Path:
        """Resolve configuration file path.

        Raises:
            ConfigurationError: When configuration file not found
        """
        if config_path:
            path = Path(config_path)
        else:
            path = Path(DEFAULT_CONFIG_PATHS[0])
            if not path.exists():
                path = Path(DEFAULT_CONFIG_PATHS[1])

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}. "
                "Please create a configuration file or specify a valid path."
            )

        return path

    def _load_configuration(self) -> None:
        """Load configuration from YAML file.

        Raises:
            ConfigurationError: When YAML file is invalid
        """
        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {self._config_path}: {e}"
            )
        except IOError as e:
            raise ConfigurationError(
                f"Unable to read configuration file {self._config_path}: {e}"
            )

        if not isinstance(self._config, dict):
            raise ConfigurationError(
                f"Configuration file {self._config_path} must contain a mapping"
            )

    def _validate_configuration(self) -> None:
        """Validate configuration has required fields.

        Raises:
            ConfigurationError: When required fields are missing
        """
        if "aws" not in self._config:
            raise ConfigurationError("Required configuration section 'aws' is missing")

        aws_config = self._config["aws"]
        if not isinstance(aws_config, dict):
            raise ConfigurationError("Section 'aws' must be a mapping")

        if "home_region" not in aws_config:
            raise ConfigurationError("Required field 'aws.home_region' is missing")

        home_region = aws_config["home_region"]
        if not isinstance(home_region, str) or not home_region:
            raise ConfigurationError("Field 'aws.home_region' must be a non-empty string")

        authorizations = self._config.get("authorizations", [])
        if authorizations is None:
            authorizations = []
        if not isinstance(authorizations, list):
            raise ConfigurationError("Field 'authorizations' must be a list")

        normalized = []
        for index, entry in enumerate(authorizations):
            if not isinstance(entry, dict):
                raise ConfigurationError(
                    f"Entry authorizations[{index}] must be a mapping"
                )
            for key in ("account_id", "region"):
                if entry.get(key) in (None, ""):
                    raise ConfigurationError(
                        f"Required field 'authorizations[{index}].{key}' is missing"
                    )
            # YAML reads unquoted account ids as integers, and as octal
            # when they start with 0, so only full 12-digit values are safe
            account_id = entry["account_id"]
            if isinstance(account_id, int) and not isinstance(account_id, bool):
                if not 10**11 <= account_id < 10**12:
                    raise ConfigurationError(
                        f"Field 'authorizations[{index}].account_id' must be "
                        "a quoted 12-digit string (e.g. \"012345678901\")"
                    )
            normalized.append(
                {"account_id": str(account_id), "region": str(entry["region"])}
            )
        self._config["authorizations"] = normalized

    def _apply_environment_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        if "AWS_REGION" in os.environ:
            self._set_nested_value("aws.home_region", os.environ["AWS_REGION"])

        if "AWS_PROFILE" in os.environ:
            self._set_nested_value(
                "aws.profile_name", os.environ["AWS_PROFILE"]
            )

    def _set_nested_value(self, key_path: str, value: Any) -> None:
        """Set nested configuration value using dot notation."""
        keys = key_path.split(".")
        current = self._config

        for key in keys[:-1]:
            if key not in current or not isinstance(current[key], dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key_path: Dot-separated key path (e.g., 'aws.home_region')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        current = self._config

        try:
            for key in keys:
                current = current[key]
            return current
        except (KeyError, TypeError):
            return default

    def get_home_region(self) -> str:
        """Get the region the Config service client operates in."""
        return self.get("aws.home_region")

    def get_profile_name(self) -> Optional[str]:
        return self.get("aws.profile_name")

    def get_authorizations(self) -> List[Dict[str, str]]:
        """Get declared authorizations.

        Returns:
            List of dicts with 'account_id' and 'region' keys
        """
        return [dict(entry) for entry in self.get("authorizations", [])]

    def to_dict(self) -> Dict[str, Any]:
        """Get complete configuration as dictionary."""
        return self._config.copy()
