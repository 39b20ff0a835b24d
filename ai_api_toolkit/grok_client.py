"""
xAI Grok API client.

The Grok API follows the OpenAI chat completions shape, so this client reuses
the OpenAI-compatible transport with xAI's endpoint, key and models.
"""

from typing import Any, Dict, Optional
from .completions_client import OpenAICompletionsClient
from .models.data_models import ChatMessage, CompletionResult
from .exceptions import InvalidInputError


class GrokClient(OpenAICompletionsClient):
    """Client for xAI's Grok chat completions API."""

    provider_name = "xAI"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, **kwargs):
        """
        Initialize the client.

        Args:
            api_key: xAI API key (defaults to XAI_API_KEY)
            model: Grok model name used for every request
            **kwargs: base_url, max_tokens or session overrides
        """
        super().__init__(api_key=api_key, model=model, chat_model=model, **kwargs)

    def _default_settings(self, config) -> Dict[str, Any]:
        return {
            "api_key": config.xai.api_key,
            "base_url": config.xai.base_url,
            "model": config.xai.model,
            "chat_model": config.xai.model,
            "max_tokens": config.xai.max_tokens,
        }

    def complete(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **params
    ) -> CompletionResult:
        """
        Generate a completion by sending the prompt as a single user message.

        Args:
            prompt: User prompt
            max_tokens: Optional cap on generated tokens
            temperature: Optional sampling temperature
            **params: Extra request fields; system_prompt adds a system message

        Raises:
            InvalidInputError: If the prompt is empty
            ProviderError: If the API call fails
        """
        if not prompt or not prompt.strip():
            raise InvalidInputError("Prompt cannot be empty")

        messages = []
        system_prompt = params.pop("system_prompt", None)
        if system_prompt:
            messages.append(ChatMessage("system", system_prompt))
        messages.append(ChatMessage("user", prompt))
        return self.chat(messages, max_tokens=max_tokens, temperature=temperature, **params)
