"""
Volcano Engine (火山引擎) LLM Provider.
The Ark API speaks the OpenAI chat/completions format, so only defaults differ.
"""

from .openai_provider import OpenAIProvider


class VolcEngineProvider(OpenAIProvider):
    """Provider for Volcano Engine Doubao / Ark models."""

    name = "volcengine"

    def __init__(
        self,
        api_key: str,
        model: str = "doubao-1-5-pro-256k-250115",
        base_url: str = "https://ark.cn-beijing.volces.com/api/v3",
        timeout: float = 120.0,
        **kwargs
    ):
        super().__init__(api_key, model=model, base_url=base_url, timeout=timeout, **kwargs)
