"""Configuration loader for dessert."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..domain.models import DessertError
from .models import DessertConfig

logger = logging.getLogger(__name__)


class ConfigurationError(DessertError):
    """Raised when configuration loading or validation fails."""

    pass


class ConfigLoader:
    """Configuration loader that merges config files, environment variables, and CLI arguments."""

    DEFAULT_CONFIG_FILES = [
        ".dessert.toml",  # TOML files (preferred)
        ".dessert.yml",
        ".dessert.yaml",
        "dessert.toml",
        "dessert.yml",
        "dessert.yaml",
    ]

    ENV_PREFIX = "DESSERT_"

    # String-typed config keys; their environment values are never coerced
    STRING_ENV_KEYS = {
        ("llm", "provider"),
        ("llm", "model"),
        ("llm", "openai_base_url"),
        ("llm", "claude_base_url"),
        ("llm", "gemini_base_url"),
        ("logging", "level"),
    }

    # Plain variables understood by the IDE plugin, mapped to config keys
    ENV_ALIASES = {
        "AI_PROVIDER": ("llm", "provider"),
        "MODEL_NAME": ("llm", "model"),
    }

    def __init__(
        self,
        config_file: str | Path | None = None,
        search_dir: str | Path | None = None,
    ):
        """Initialize the configuration loader.

        Args:
            config_file: Path to configuration file. If None, will search for default files.
            search_dir: Directory searched for default files (current directory if None)
        """
        self.config_file = Path(config_file) if config_file else None
        self.search_dir = Path(search_dir) if search_dir else None
        self._config_cache: DessertConfig | None = None

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        cli_overrides: dict[str, Any] | None = None,
        reload: bool = False,
    ) -> DessertConfig:
        """Load configuration from all sources.

        Args:
            env_overrides: Environment variable overrides
            cli_overrides: CLI argument overrides
            reload: Force reload even if cached

        Returns:
            Validated dessert configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self._config_cache is not None and not reload:
            return self._config_cache

        try:
            config_dict: dict[str, Any] = {}

            # 1. Load from configuration file (TOML or YAML)
            file_config = self._load_config_file()
            if file_config:
                config_dict = self._deep_merge(config_dict, file_config)
                logger.debug(f"Loaded configuration from {self._get_config_file_path()}")

            # 2. Apply environment variable overrides
            env_config = env_overrides if env_overrides is not None else self._load_env_config()
            if env_config:
                config_dict = self._deep_merge(config_dict, env_config)
                logger.debug("Applied environment variable overrides")

            # 3. Apply CLI overrides (highest priority)
            if cli_overrides:
                config_dict = self._deep_merge(config_dict, cli_overrides)
                logger.debug("Applied CLI argument overrides")

            # 4. Validate and create Pydantic model
            self._config_cache = DessertConfig(**config_dict)
            logger.debug("Configuration loaded and validated successfully")

            return self._config_cache

        except ConfigurationError:
            raise
        except ValidationError as e:
            error_msg = f"Configuration validation failed: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e
        except Exception as e:
            error_msg = f"Failed to load configuration: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_config_file(self) -> dict[str, Any] | None:
        """Load configuration from TOML or YAML file."""
        config_file = self._get_config_file_path()

        if not config_file or not config_file.exists():
            logger.debug("No configuration file found, using defaults")
            return None

        try:
            if config_file.suffix.lower() == ".toml":
                return self._load_toml_file(config_file)
            elif config_file.suffix.lower() in (".yml", ".yaml"):
                return self._load_yaml_file(config_file)
            else:
                logger.warning(f"Unknown configuration file type: {config_file}")
                return None

        except OSError as e:
            error_msg = f"Failed to read {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_toml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from TOML file."""
        try:
            with open(config_file, "rb") as f:
                content = tomllib.load(f)

            if not content:
                logger.warning(f"Configuration file {config_file} is empty")
                return None

            return content

        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_yaml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, encoding="utf-8") as f:
                content = yaml.safe_load(f)

            if not content:
                logger.warning(f"Configuration file {config_file} is empty")
                return None

            if not isinstance(content, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file} must contain a mapping"
                )

            return content

        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(self.ENV_PREFIX):
                # e.g., DESSERT_LLM__TIMEOUT -> llm.timeout
                config_key = key[len(self.ENV_PREFIX) :].lower()
                nested_keys = config_key.replace("__", ".").split(".")
                if tuple(nested_keys) in self.STRING_ENV_KEYS:
                    parsed: Any = value
                else:
                    parsed = self._parse_env_value(value)
                self._set_nested_value(env_config, nested_keys, parsed)

        # Plain aliases win over prefixed variables; values stay strings
        for env_var, nested_keys in self.ENV_ALIASES.items():
            value = os.getenv(env_var)
            if value and value.strip():
                self._set_nested_value(env_config, list(nested_keys), value.strip())

        return env_config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate Python type."""
        # Handle numeric values
        try:
            if "." not in value:
                return int(value)
            else:
                return float(value)
        except ValueError:
            pass

        # Handle boolean values
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        # Handle list values (comma-separated)
        if "," in value:
            return [item.strip() for item in value.split(",")]

        return value

    def _set_nested_value(self, config: dict[str, Any], keys: list, value: Any) -> None:
        """Set a nested value in the configuration dictionary."""
        current = config

        for key in keys[:-1]:
            if key not in current or not isinstance(current[key], dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _get_config_file_path(self) -> Path | None:
        """Get the path to the configuration file."""
        if self.config_file:
            return self.config_file

        base = self.search_dir or Path(".")
        for filename in self.DEFAULT_CONFIG_FILES:
            path = base / filename
            if path.exists():
                return path

        return None

    def _deep_merge(
        self, base: dict[str, Any], updates: dict[str, Any]
    ) -> dict[str, Any]:
        """Deeply merge updates into base dictionary."""
        result = base.copy()

        for key, value in updates.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_file: str | Path | None = None,
    search_dir: str | Path | None = None,
    **cli_overrides: Any,
) -> DessertConfig:
    """Load configuration with the default loader."""
    return ConfigLoader(config_file, search_dir).load_config(cli_overrides=cli_overrides or None)
