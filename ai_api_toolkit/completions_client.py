"""
OpenAI-style completions client.

Calls the `/completions` and `/chat/completions` REST endpoints with a bearer
key and maps the JSON response onto CompletionResult.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union
import requests
from .http_client import BaseRestClient, post_json
from .models.data_models import ChatMessage, CompletionResult
from .services.interfaces import CompletionProviderInterface
from .exceptions import ConfigurationError, InvalidInputError, ProviderError


logger = logging.getLogger(__name__)


MessageLike = Union[ChatMessage, Dict[str, str]]


class OpenAICompletionsClient(BaseRestClient, CompletionProviderInterface):
    """
    Client for OpenAI-compatible completions APIs.

    Works against any vendor exposing the OpenAI request and response shapes
    by overriding base_url and the model names.
    """

    provider_name = "OpenAI"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        chat_model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key (defaults to OPENAI_API_KEY)
            base_url: API root URL
            model: Model used by complete()
            chat_model: Model used by chat()
            max_tokens: Default cap on generated tokens
            session: Optional requests session to reuse

        Raises:
            ConfigurationError: If no API key is available
        """
        from .config import config

        defaults = self._default_settings(config)
        self.api_key = api_key or defaults["api_key"]
        if not self.api_key:
            raise ConfigurationError(f"{self.provider_name} API key is not configured")

        self.base_url = (base_url or defaults["base_url"]).rstrip("/")
        self.model = model or defaults["model"]
        self.chat_model = chat_model or defaults["chat_model"]
        self.max_tokens = max_tokens or defaults["max_tokens"]

        super().__init__(session)
        logger.info(f"Initialized {self.provider_name} client with model: {self.model}")

    def _default_settings(self, config) -> Dict[str, Any]:
        return {
            "api_key": config.openai.api_key,
            "base_url": config.openai.base_url,
            "model": config.openai.model,
            "chat_model": config.openai.chat_model,
            "max_tokens": config.openai.max_tokens,
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, model: str, max_tokens: Optional[int], temperature: Optional[float], params: Dict[str, Any]) -> Dict[str, Any]:
        if max_tokens is not None and max_tokens <= 0:
            raise InvalidInputError("max_tokens must be positive")

        payload = {
            "model": model,
            "max_tokens": max_tokens or self.max_tokens,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        payload.update(params)
        return payload

    def complete(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **params
    ) -> CompletionResult:
        """
        Generate a text completion for a prompt.

        Raises:
            InvalidInputError: If the prompt is empty
            ProviderError: If the API call fails or returns no choices
        """
        if not prompt or not prompt.strip():
            raise InvalidInputError("Prompt cannot be empty")

        payload = self._build_payload(params.pop("model", self.model), max_tokens, temperature, params)
        payload["prompt"] = prompt

        body = post_json(self.session, f"{self.base_url}/completions", self.provider_name, payload, headers=self._headers())
        choice = self._first_choice(body)
        return self._to_result(body, choice.get("text") or "", choice, payload["model"])

    def chat(
        self,
        messages: Sequence[MessageLike],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **params
    ) -> CompletionResult:
        """
        Generate the next assistant message for a conversation.

        Args:
            messages: ChatMessage objects or {"role", "content"} dicts

        Raises:
            InvalidInputError: If no messages are given or one is malformed
            ProviderError: If the API call fails or returns no choices
        """
        if not messages:
            raise InvalidInputError("Messages cannot be empty")

        payload = self._build_payload(params.pop("model", self.chat_model), max_tokens, temperature, params)
        payload["messages"] = self._normalize_messages(messages)

        body = post_json(self.session, f"{self.base_url}/chat/completions", self.provider_name, payload, headers=self._headers())
        choice = self._first_choice(body)
        message = choice.get("message") or {}
        return self._to_result(body, message.get("content") or "", choice, payload["model"])

    def ask(self, question: str, system_prompt: Optional[str] = None, **params) -> str:
        """Convenience wrapper returning only the assistant's reply text."""
        messages = []
        if system_prompt:
            messages.append(ChatMessage("system", system_prompt))
        messages.append(ChatMessage("user", question))
        return self.chat(messages, **params).text

    @staticmethod
    def _normalize_messages(messages: Sequence[MessageLike]) -> List[Dict[str, str]]:
        normalized = []
        for message in messages:
            if isinstance(message, ChatMessage):
                normalized.append(message.to_dict())
                continue
            try:
                normalized.append(ChatMessage(message["role"], message["content"]).to_dict())
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidInputError(f"Invalid chat message {message!r}: {e}")
        return normalized

    def _first_choice(self, body: Dict[str, Any]) -> Dict[str, Any]:
        choices = body.get("choices") if isinstance(body, dict) else None
        if not choices:
            raise ProviderError(f"{self.provider_name} response contained no choices", provider=self.provider_name)
        return choices[0]

    def _to_result(self, body: Dict[str, Any], text: str, choice: Dict[str, Any], model: str) -> CompletionResult:
        usage = body.get("usage") or {}
        result = CompletionResult(
            text=text.strip(),
            model=body.get("model", model),
            finish_reason=choice.get("finish_reason"),
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
            raw=body,
        )
        logger.info(f"{self.provider_name} completion finished ({result.finish_reason}, {result.total_tokens} tokens)")
        return result
