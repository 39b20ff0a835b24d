"""
Service interfaces for the AI API toolkit.
"""

from .interfaces import (
    CompletionProviderInterface,
    ImageEncoderInterface,
    TextEncoderInterface
)

__all__ = [
    "CompletionProviderInterface",
    "ImageEncoderInterface",
    "TextEncoderInterface"
]
