"""
Data models for the AI API toolkit.
"""

from .data_models import (
    LabelProbabilities,
    ZeroShotResult,
    ChatMessage,
    CompletionResult,
    FaceAttributes,
    ImageAnalysisResult,
    SpeechRecognitionResult
)

__all__ = [
    "LabelProbabilities",
    "ZeroShotResult",
    "ChatMessage",
    "CompletionResult",
    "FaceAttributes",
    "ImageAnalysisResult",
    "SpeechRecognitionResult"
]
