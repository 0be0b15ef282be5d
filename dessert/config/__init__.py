"""Configuration management for dessert."""

from .credentials import CredentialError, CredentialManager
from .loader import ConfigLoader, ConfigurationError, load_config
from .models import (
    DEFAULT_MODELS,
    DEFAULT_PROVIDER,
    CaptureConfig,
    DessertConfig,
    LLMProviderConfig,
    LoggingConfig,
)

__all__ = [
    "CaptureConfig",
    "ConfigLoader",
    "ConfigurationError",
    "CredentialError",
    "CredentialManager",
    "DEFAULT_MODELS",
    "DEFAULT_PROVIDER",
    "DessertConfig",
    "LLMProviderConfig",
    "LoggingConfig",
    "load_config",
]
