"""
Core interfaces for the AI API toolkit services.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import numpy as np
from ..models import CompletionResult


class CompletionProviderInterface(ABC):
    """Interface for completions-style text generation providers."""

    provider_name: str = ""

    @abstractmethod
    def complete(self,
                 prompt: str,
                 max_tokens: Optional[int] = None,
                 temperature: Optional[float] = None,
                 **params) -> CompletionResult:
        """
        Generate a completion for a prompt.

        Args:
            prompt: Input prompt
            max_tokens: Optional cap on generated tokens
            temperature: Optional sampling temperature
            **params: Provider-specific request fields

        Returns:
            CompletionResult with the generated text and token usage
        """
        pass


class ImageEncoderInterface(ABC):
    """Interface for models that embed preprocessed images."""

    @abstractmethod
    def encode(self, pixel_values: np.ndarray) -> np.ndarray:
        """
        Embed a batch of images.

        Args:
            pixel_values: Float32 array of shape (batch, 3, height, width)

        Returns:
            Array of shape (batch, embedding_dim)
        """
        pass


class TextEncoderInterface(ABC):
    """Interface for models that embed label prompts."""

    @abstractmethod
    def encode(self, texts: List[str]) -> np.ndarray:
        """
        Embed a list of texts.

        Args:
            texts: Prompts to embed

        Returns:
            Array of shape (len(texts), embedding_dim)
        """
        pass
