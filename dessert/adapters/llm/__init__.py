from .base import MAX_OUTPUT_TOKENS, TEMPERATURE, BaseLLMAdapter
from .claude import ClaudeAdapter
from .gemini import GeminiAdapter
from .openai import OpenAIAdapter
from .router import PROVIDERS, LLMRouter, create_llm_adapter

__all__ = [
    "MAX_OUTPUT_TOKENS",
    "TEMPERATURE",
    "BaseLLMAdapter",
    "ClaudeAdapter",
    "GeminiAdapter",
    "OpenAIAdapter",
    "PROVIDERS",
    "LLMRouter",
    "create_llm_adapter",
]
