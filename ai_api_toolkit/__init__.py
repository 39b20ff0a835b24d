"""
Clients and helpers for AI cloud APIs: completions, speech, vision,
zero-shot image classification and typed SQL column access.
"""

from .models import (
    LabelProbabilities,
    ZeroShotResult,
    ChatMessage,
    CompletionResult,
    FaceAttributes,
    ImageAnalysisResult,
    SpeechRecognitionResult
)
from .normalization import softmax
from .zero_shot_classifier import ZeroShotImageClassifier, OnnxImageEncoder, OnnxTextEncoder, preprocess_image
from .completions_client import OpenAICompletionsClient
from .grok_client import GrokClient
from .bedrock_client import BedrockCompletionsClient
from .providers import create_completion_client
from .azure_speech import AzureSpeechClient
from .azure_vision import AzureVisionClient
from .tabular import get_column_value, ColumnReader
from .exceptions import (
    ToolkitError,
    InvalidInputError,
    ConfigurationError,
    ProcessingError,
    ProviderError,
    AuthenticationError,
    RateLimitError
)

__version__ = "0.1.0"
__all__ = [
    "LabelProbabilities",
    "ZeroShotResult",
    "ChatMessage",
    "CompletionResult",
    "FaceAttributes",
    "ImageAnalysisResult",
    "SpeechRecognitionResult",
    "softmax",
    "ZeroShotImageClassifier",
    "OnnxImageEncoder",
    "OnnxTextEncoder",
    "preprocess_image",
    "OpenAICompletionsClient",
    "GrokClient",
    "BedrockCompletionsClient",
    "create_completion_client",
    "AzureSpeechClient",
    "AzureVisionClient",
    "get_column_value",
    "ColumnReader",
    "ToolkitError",
    "InvalidInputError",
    "ConfigurationError",
    "ProcessingError",
    "ProviderError",
    "AuthenticationError",
    "RateLimitError"
]
