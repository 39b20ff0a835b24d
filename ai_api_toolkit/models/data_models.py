"""
Core data models for the AI API toolkit.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Optional, Dict, Any, Iterator, Mapping, Sequence, Tuple


# Tolerance for probabilities summing to one
PROBABILITY_SUM_TOLERANCE = 1e-4


@dataclass(frozen=True)
class LabelProbabilities:
    """
    Label to probability mapping produced by a single classification call.

    Entries are non-negative, sum to one within tolerance, and there is
    exactly one entry per label. The mapping is read-only after creation.
    """
    probabilities: Mapping[str, float]

    def __post_init__(self):
        """Validate and freeze the probability mapping."""
        if not self.probabilities:
            raise ValueError("Probabilities cannot be empty")

        frozen = {}
        for label, probability in dict(self.probabilities).items():
            if not isinstance(label, str) or not label.strip():
                raise ValueError("Labels must be non-empty strings")
            if not isinstance(probability, (int, float)) or math.isnan(probability):
                raise ValueError(f"Probability for '{label}' must be a number")
            if not (0.0 <= probability <= 1.0):
                raise ValueError(f"Probability for '{label}' must be between 0.0 and 1.0, got {probability}")
            frozen[label] = float(probability)

        total = sum(frozen.values())
        if abs(total - 1.0) > PROBABILITY_SUM_TOLERANCE:
            raise ValueError(f"Probabilities must sum to 1.0, got {total:.6f}")

        object.__setattr__(self, "probabilities", MappingProxyType(frozen))

    @classmethod
    def from_logits(cls, labels: Sequence[str], logits: Sequence[float]) -> 'LabelProbabilities':
        """
        Build a distribution by applying softmax to one logit per label.

        Args:
            labels: Unique label names
            logits: Unnormalized scores aligned with labels

        Returns:
            LabelProbabilities for the given labels

        Raises:
            InvalidInputError: If labels and logits differ in length,
                labels repeat, or the logits cannot be normalized
        """
        from ..normalization import softmax
        from ..exceptions import InvalidInputError

        labels = list(labels)
        if len(labels) != len(logits):
            raise InvalidInputError(
                f"Label count {len(labels)} doesn't match logit count {len(logits)}"
            )
        if len(set(labels)) != len(labels):
            raise InvalidInputError("Labels must be unique")

        probabilities = softmax(logits)
        return cls(dict(zip(labels, (float(p) for p in probabilities))))

    def __getitem__(self, label: str) -> float:
        return self.probabilities[label]

    def __len__(self) -> int:
        return len(self.probabilities)

    def __iter__(self) -> Iterator[str]:
        return iter(self.probabilities)

    def __contains__(self, label: object) -> bool:
        return label in self.probabilities

    @property
    def labels(self) -> List[str]:
        return list(self.probabilities.keys())

    @property
    def top_label(self) -> str:
        """Label with the highest probability."""
        return self.top_k(1)[0][0]

    @property
    def top_probability(self) -> float:
        """Highest probability in the distribution."""
        return self.top_k(1)[0][1]

    def top_k(self, k: int) -> List[Tuple[str, float]]:
        """
        Get the k most probable labels.

        Args:
            k: Number of entries to return (capped at the label count)

        Returns:
            List of (label, probability) tuples, highest first
        """
        if k <= 0:
            raise ValueError("k must be positive")
        ranked = sorted(self.probabilities.items(), key=lambda item: item[1], reverse=True)
        return ranked[:k]

    def to_dict(self) -> Dict[str, float]:
        return dict(self.probabilities)


@dataclass
class ZeroShotResult:
    """Result of classifying one image against a set of labels."""
    probabilities: LabelProbabilities
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def predicted_label(self) -> str:
        return self.probabilities.top_label

    @property
    def confidence(self) -> float:
        return self.probabilities.top_probability

    def format_result(self, max_alternatives: int = 3) -> str:
        """
        Format the classification result as a human-readable string.

        Args:
            max_alternatives: Maximum number of labels to list

        Returns:
            Formatted result string
        """
        lines = []
        lines.append("Zero-Shot Classification Result")
        lines.append("=" * 50)
        lines.append(f"Predicted Label: {self.predicted_label}")
        lines.append(f"Confidence: {self.confidence:.1%}")

        ranked = self.probabilities.top_k(max_alternatives)
        if len(ranked) > 1:
            lines.append(f"\nTop {len(ranked)} Labels:")
            for i, (label, probability) in enumerate(ranked, 1):
                lines.append(f"   {i}. {label} ({probability:.1%})")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicted_label": self.predicted_label,
            "confidence": self.confidence,
            "probabilities": self.probabilities.to_dict(),
            "metadata": self.metadata,
        }


@dataclass
class ChatMessage:
    """A single message in a chat completion request."""
    role: str
    content: str

    def __post_init__(self):
        """Validate chat message after initialization."""
        valid_roles = {"system", "user", "assistant"}
        if self.role not in valid_roles:
            raise ValueError(f"Role must be one of {valid_roles}, got '{self.role}'")
        if not isinstance(self.content, str):
            raise ValueError("Message content must be a string")

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class CompletionResult:
    """Text returned by a completions-style provider."""
    text: str
    model: str
    finish_reason: Optional[str] = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    @property
    def truncated(self) -> bool:
        """True when generation stopped because of the token limit."""
        return self.finish_reason in ("length", "max_tokens")


@dataclass
class FaceAttributes:
    """A face detected in an image, with estimated age and gender."""
    age: Optional[int]
    gender: Optional[str]
    left: int = 0
    top: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def from_response(cls, face: Dict[str, Any]) -> 'FaceAttributes':
        rectangle = face.get("faceRectangle", {})
        return cls(
            age=face.get("age"),
            gender=face.get("gender"),
            left=rectangle.get("left", 0),
            top=rectangle.get("top", 0),
            width=rectangle.get("width", 0),
            height=rectangle.get("height", 0),
        )


@dataclass
class ImageAnalysisResult:
    """Parsed response of an image analysis call."""
    faces: List[FaceAttributes] = field(default_factory=list)
    tags: Dict[str, float] = field(default_factory=dict)
    caption: Optional[str] = None
    caption_confidence: float = 0.0
    raw: Dict[str, Any] = field(default_factory=dict)

    def format_result(self) -> str:
        """Format the analysis as a human-readable summary."""
        lines = []
        if self.caption:
            lines.append(f"Caption: {self.caption} ({self.caption_confidence:.1%})")
        if self.tags:
            top_tags = sorted(self.tags.items(), key=lambda item: item[1], reverse=True)[:5]
            lines.append(f"Tags: {', '.join(name for name, _ in top_tags)}")
        lines.append(f"Faces detected: {len(self.faces)}")
        for i, face in enumerate(self.faces, 1):
            lines.append(f"   {i}. {face.gender or 'unknown'}, age {face.age if face.age is not None else 'unknown'}")
        return "\n".join(lines)


@dataclass
class SpeechRecognitionResult:
    """Result of a short-audio speech recognition request."""
    status: str
    text: str = ""
    offset: int = 0
    duration: int = 0
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == "Success"
