"""
Factory for completions providers.
"""

from .services.interfaces import CompletionProviderInterface
from .exceptions import ConfigurationError


SUPPORTED_PROVIDERS = ("openai", "xai", "bedrock")


def create_completion_client(provider: str, **kwargs) -> CompletionProviderInterface:
    """
    Create a completions client by provider name.

    Args:
        provider: One of "openai", "xai" (alias "grok"), or "bedrock"
        **kwargs: Passed to the client constructor

    Returns:
        Configured completions client

    Raises:
        ConfigurationError: If the provider is unknown or misconfigured
    """
    name = (provider or "").strip().lower()

    if name == "openai":
        from .completions_client import OpenAICompletionsClient
        return OpenAICompletionsClient(**kwargs)
    if name in ("xai", "grok"):
        from .grok_client import GrokClient
        return GrokClient(**kwargs)
    if name == "bedrock":
        from .bedrock_client import BedrockCompletionsClient
        return BedrockCompletionsClient(**kwargs)

    raise ConfigurationError(f"Unknown provider '{provider}', expected one of {SUPPORTED_PROVIDERS}")
