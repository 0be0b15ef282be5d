"""Configuration models for dessert."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

ProviderName = Literal["openai", "claude", "gemini"]

DEFAULT_PROVIDER: ProviderName = "gemini"

DEFAULT_MODELS: dict[str, str] = {
    "openai": "o4-mini",
    "claude": "claude-3-7-sonnet-latest",
    "gemini": "gemini-2.5-flash",
}


class LLMProviderConfig(BaseModel):
    """Configuration for the AI provider used to generate tests."""

    provider: ProviderName = Field(
        default=DEFAULT_PROVIDER,
        description="AI provider: openai, claude or gemini (or set AI_PROVIDER)",
    )
    model: str | None = Field(
        default=None,
        description="Model identifier (or set MODEL_NAME); provider default when unset",
    )
    timeout: float = Field(
        default=180.0,
        ge=5.0,
        le=600.0,
        description="Transport timeout for provider requests (seconds)",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="SDK-level retries; 0 keeps one request in flight per run",
    )
    openai_base_url: str | None = Field(
        default=None, description="Custom OpenAI-compatible API base URL"
    )
    claude_base_url: str | None = Field(
        default=None, description="Custom Anthropic API base URL"
    )
    gemini_base_url: str | None = Field(
        default=None, description="Custom Gemini API base URL"
    )

    @field_validator("provider", mode="before")
    @classmethod
    def normalize_provider(cls, v):
        """Accept provider names in any case."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("model", mode="before")
    @classmethod
    def blank_model_is_default(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def resolved_model(self) -> str:
        """The configured model, or the provider's default model."""
        return self.model or DEFAULT_MODELS[self.provider]


class CaptureConfig(BaseModel):
    """Configuration for debugger capture."""

    variable_timeout_seconds: float = Field(
        default=3.0,
        gt=0.0,
        le=60.0,
        description="How long to wait for the debugger to enumerate frame variables",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging behavior."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root log level when neither --verbose nor --quiet is given"
    )
    suppress_modules: list[str] = Field(
        default=["httpx", "httpcore", "openai", "anthropic"],
        description="External library modules to keep at WARNING in non-verbose mode",
    )


class DessertConfig(BaseModel):
    """Main configuration model for dessert."""

    llm: LLMProviderConfig = Field(
        default_factory=LLMProviderConfig,
        description="AI provider configuration",
    )
    capture: CaptureConfig = Field(
        default_factory=CaptureConfig,
        description="Debugger capture configuration",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging behavior configuration",
    )
