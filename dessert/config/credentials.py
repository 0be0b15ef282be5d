"""Secure credential management for dessert AI providers."""

import logging
import os

from pydantic import SecretStr

from .loader import ConfigurationError

logger = logging.getLogger(__name__)


class CredentialError(ConfigurationError):
    """Raised when the API key is missing or unusable."""

    pass


class CredentialManager:
    """Loads the provider API key from the environment.

    Keys are never read from configuration files.
    """

    # Environment variable mappings
    ENV_MAPPINGS = {
        "api_key": ["API_KEY"],
    }

    def __init__(self) -> None:
        self._api_key_cache: SecretStr | None = None

    def load_api_key(self, reload: bool = False) -> SecretStr | None:
        """Load the API key from the environment."""
        if self._api_key_cache is not None and not reload:
            return self._api_key_cache

        value = self._load_from_env(self.ENV_MAPPINGS["api_key"])
        self._api_key_cache = SecretStr(value) if value else None
        return self._api_key_cache

    def has_api_key(self) -> bool:
        return self.load_api_key() is not None

    def get_api_key(self, provider: str) -> str:
        """Return the API key as plain text for a request to ``provider``.

        Raises:
            CredentialError: If no API key is set
        """
        api_key = self.load_api_key()
        if api_key is None:
            logger.error("No API key available for provider %s", provider)
            raise CredentialError(
                "API_KEY environment variable not set. "
                f"Set API_KEY to your {provider} API key."
            )
        return api_key.get_secret_value()

    def _load_from_env(self, env_vars: list[str]) -> str | None:
        """Load value from environment variables (try in order)."""
        for env_var in env_vars:
            value = os.getenv(env_var)
            if value and value.strip():
                return value.strip()
        return None
