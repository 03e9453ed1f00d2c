"""Configuration loader with multi-level hierarchy."""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Pick up ROLEMATCH_* variables from a local .env file
load_dotenv()

ENV_PREFIX = "ROLEMATCH_"


class ConfigLoader:
    """Load and merge configuration from multiple sources.

    Hierarchy (later overrides earlier):
    1. Default config (config/default.yaml)
    2. Environment config (config/environments/{env}.yaml)
    3. Overrides (provided programmatically) [optional]
    4. Environment variables (ROLEMATCH_*)
    """

    def __init__(self, config_dir: Path | str | None = None):
        """Initialize config loader.

        Args:
            config_dir: Configuration directory (defaults to <project>/config)
        """
        if config_dir is None:
            # rolematch/core/config/loader.py -> <project>/config
            config_dir = Path(__file__).parent.parent.parent.parent / "config"
        self.config_dir = Path(config_dir)

    def load(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """Load configuration with full hierarchy.

        Args:
            overrides: Configuration dict provided programmatically, e.g.
                ``{"fetcher": {"timeout": 5}}``

        Returns:
            Merged configuration dictionary
        """
        # 1. Shipped defaults
        config = self._load_yaml(self.config_dir / "default.yaml")

        # 2. Deployment environment (development, staging, production...)
        env = os.getenv("ROLEMATCH_ENV", "development")
        env_config_path = self.config_dir / f"environments/{env}.yaml"
        if env_config_path.exists():
            config = self._deep_merge(config, self._load_yaml(env_config_path))

        # 3. Caller overrides
        if overrides:
            config = self._deep_merge(config, overrides)

        # 4. ROLEMATCH_* variables win over everything
        return self._apply_env_overrides(config)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load a YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Parsed mapping, or an empty dict for a missing or empty file
        """
        if not path.exists():
            return {}

        with open(path) as f:
            content = yaml.safe_load(f)
            return content if content else {}

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary (base is not modified)
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                # Nested sections merge key by key
                result[key] = self._deep_merge(result[key], value)
            else:
                # Scalars and lists are replaced whole
                result[key] = value
        return result

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Override config with environment variables.

        Each ``_`` after the prefix descends one level, so config keys
        themselves carry no underscores.
        Example: ROLEMATCH_FETCHER_TIMEOUT overrides config["fetcher"]["timeout"]

        Args:
            config: Configuration dictionary

        Returns:
            Config with environment variable overrides applied
        """
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX):
                path = key[len(ENV_PREFIX):].lower().split("_")
                self._set_nested(config, path, value)

        return config

    def _set_nested(self, config: dict[str, Any], path: list[str], value: str) -> None:
        """Set a nested configuration value.

        Args:
            config: Configuration dictionary
            path: Path to nested key (e.g., ["proxy", "port"])
            value: Raw string from the environment
        """
        current = config
        for key in path[:-1]:
            if key not in current:
                current[key] = {}
            elif not isinstance(current[key], dict):
                # A scalar is in the way; leave it alone
                return
            current = current[key]

        current[path[-1]] = self._convert_value(value)

    def _convert_value(self, value: str) -> Any:
        """Convert an environment string to bool, int, float or str.

        ``"1"`` and ``"0"`` stay numbers so ports and timeouts survive.

        Args:
            value: String value from environment variable

        Returns:
            Converted value
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value


# Process-wide loader, created on first use
_config_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get the process-wide configuration loader.

    Returns:
        ConfigLoader reading the project's config directory
    """
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def load_config(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Load configuration (convenience function).

    Args:
        overrides: Configuration provided programmatically

    Returns:
        Merged configuration dictionary
    """
    return get_config_loader().load(overrides=overrides)
