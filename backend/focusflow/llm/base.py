"""
LLM Provider Base - Abstract base for the AI providers behind the study studio.

Every provider is an HTTP client for a chat-completions style endpoint, so
the base keeps the connection settings (base URL, key, timeout) and the
request defaults; subclasses only implement the call itself.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field


@dataclass
class LLMMessage:
    """A single chat message."""
    role: str  # "system", "user", "assistant"
    content: str

    @staticmethod
    def text(role: str, text: str) -> "LLMMessage":
        return LLMMessage(role=role, content=text)


@dataclass
class LLMResponse:
    """Result of one chat completion."""
    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    raw: Optional[Dict[str, Any]] = None


class LLMProvider(ABC):
    """
    Abstract chat-completion provider.

    Attributes:
        name: Registry name used by create_llm_provider and in log fields
        base_url: Endpoint root without a trailing slash
        timeout: Request timeout in seconds
    """

    name = "base"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "",
        default_temperature: float = 0.7,
        default_max_tokens: int = 2048,
        timeout: float = 60.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens
        self.timeout = timeout

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: System prompt followed by the user request
            temperature: Overrides default_temperature
            max_tokens: Overrides default_max_tokens

        Raises:
            httpx.HTTPError: On transport or HTTP status errors; callers wrap these
        """

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _format_messages(self, messages: List[LLMMessage]) -> List[Dict[str, Any]]:
        return [{"role": m.role, "content": m.content} for m in messages]
