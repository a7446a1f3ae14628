"""LLM module - provides unified interface for LLM API providers."""

from .base import LLMProvider, LLMMessage, LLMResponse
from .openai_provider import OpenAIProvider, GeminiProvider
from .volcengine_provider import VolcEngineProvider
from .factory import create_llm_provider

__all__ = [
    'LLMProvider',
    'LLMMessage',
    'LLMResponse',
    'OpenAIProvider',
    'GeminiProvider',
    'VolcEngineProvider',
    'create_llm_provider',
]
