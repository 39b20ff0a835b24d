"""
Tests for the toolkit data models.
"""

import pytest
from ai_api_toolkit.models.data_models import (
    LabelProbabilities,
    ZeroShotResult,
    ChatMessage,
    CompletionResult,
    FaceAttributes,
    ImageAnalysisResult,
    SpeechRecognitionResult
)
from ai_api_toolkit.exceptions import InvalidInputError


class TestLabelProbabilities:
    """Test cases for LabelProbabilities."""

    def test_creation_and_access(self):
        """Test a valid distribution can be created and read."""
        probabilities = LabelProbabilities({"cat": 0.7, "dog": 0.2, "bird": 0.1})

        assert len(probabilities) == 3
        assert probabilities["cat"] == 0.7
        assert "dog" in probabilities
        assert set(probabilities) == {"cat", "dog", "bird"}
        assert probabilities.labels == ["cat", "dog", "bird"]

    def test_top_label_and_top_k(self):
        """Test ranking helpers."""
        probabilities = LabelProbabilities({"cat": 0.2, "dog": 0.5, "bird": 0.3})

        assert probabilities.top_label == "dog"
        assert probabilities.top_probability == 0.5
        assert probabilities.top_k(2) == [("dog", 0.5), ("bird", 0.3)]
        assert len(probabilities.top_k(10)) == 3

    def test_top_k_requires_positive_k(self):
        """Test top_k rejects non-positive k."""
        probabilities = LabelProbabilities({"cat": 1.0})

        with pytest.raises(ValueError, match="k must be positive"):
            probabilities.top_k(0)

    def test_mapping_is_read_only(self):
        """Test the distribution cannot be mutated after creation."""
        source = {"cat": 0.6, "dog": 0.4}
        probabilities = LabelProbabilities(source)

        with pytest.raises(TypeError):
            probabilities.probabilities["cat"] = 1.0

        # Mutating the source dict doesn't leak in
        source["cat"] = 0.0
        assert probabilities["cat"] == 0.6

    def test_empty_raises(self):
        """Test empty distributions are rejected."""
        with pytest.raises(ValueError, match="Probabilities cannot be empty"):
            LabelProbabilities({})

    def test_negative_probability_raises(self):
        """Test negative entries are rejected."""
        with pytest.raises(ValueError, match="between 0.0 and 1.0"):
            LabelProbabilities({"cat": 1.2, "dog": -0.2})

    def test_sum_must_be_one(self):
        """Test distributions must sum to one within tolerance."""
        with pytest.raises(ValueError, match="must sum to 1.0"):
            LabelProbabilities({"cat": 0.5, "dog": 0.4})

        # Within tolerance is accepted
        LabelProbabilities({"cat": 0.50004, "dog": 0.5})

    def test_blank_label_raises(self):
        """Test labels must be non-empty strings."""
        with pytest.raises(ValueError, match="Labels must be non-empty strings"):
            LabelProbabilities({"  ": 1.0})

    def test_from_logits(self):
        """Test building a distribution from logits."""
        probabilities = LabelProbabilities.from_logits(["a", "b", "c"], [2.0, 1.0, 0.1])

        assert probabilities["a"] == pytest.approx(0.659, abs=1e-3)
        assert probabilities["b"] == pytest.approx(0.242, abs=1e-3)
        assert probabilities["c"] == pytest.approx(0.099, abs=1e-3)
        assert sum(probabilities.to_dict().values()) == pytest.approx(1.0)

    def test_from_logits_length_mismatch(self):
        """Test label and logit counts must match."""
        with pytest.raises(InvalidInputError, match="doesn't match logit count"):
            LabelProbabilities.from_logits(["a", "b"], [1.0])

    def test_from_logits_duplicate_labels(self):
        """Test labels must be unique."""
        with pytest.raises(InvalidInputError, match="Labels must be unique"):
            LabelProbabilities.from_logits(["a", "a"], [1.0, 2.0])

    def test_from_logits_empty(self):
        """Test empty logits fail through softmax."""
        with pytest.raises(InvalidInputError, match="Logits cannot be empty"):
            LabelProbabilities.from_logits([], [])


class TestZeroShotResult:
    """Test cases for ZeroShotResult."""

    def test_prediction_properties(self):
        """Test predicted label and confidence come from the distribution."""
        result = ZeroShotResult(LabelProbabilities({"cat": 0.8, "dog": 0.2}))

        assert result.predicted_label == "cat"
        assert result.confidence == 0.8

    def test_format_result(self):
        """Test human-readable formatting."""
        result = ZeroShotResult(LabelProbabilities({"cat": 0.8, "dog": 0.15, "bird": 0.05}))
        formatted = result.format_result(max_alternatives=2)

        assert "Predicted Label: cat" in formatted
        assert "80.0%" in formatted
        assert "1. cat" in formatted
        assert "2. dog" in formatted
        assert "bird" not in formatted

    def test_to_dict(self):
        """Test dictionary conversion."""
        result = ZeroShotResult(LabelProbabilities({"cat": 1.0}), metadata={"logit_scale": 100.0})

        assert result.to_dict() == {
            "predicted_label": "cat",
            "confidence": 1.0,
            "probabilities": {"cat": 1.0},
            "metadata": {"logit_scale": 100.0},
        }


class TestChatMessage:
    """Test cases for ChatMessage."""

    def test_valid_message(self):
        message = ChatMessage("user", "Hello")
        assert message.to_dict() == {"role": "user", "content": "Hello"}

    def test_invalid_role(self):
        with pytest.raises(ValueError, match="Role must be one of"):
            ChatMessage("robot", "Hello")


class TestCompletionResult:
    """Test cases for CompletionResult."""

    def test_token_totals(self):
        result = CompletionResult(text="hi", model="m", prompt_tokens=5, completion_tokens=7)
        assert result.total_tokens == 12

    def test_truncated(self):
        assert CompletionResult(text="", model="m", finish_reason="length").truncated
        assert CompletionResult(text="", model="m", finish_reason="max_tokens").truncated
        assert not CompletionResult(text="", model="m", finish_reason="stop").truncated


class TestVisionAndSpeechModels:
    """Test cases for vision and speech result models."""

    def test_face_from_response(self):
        face = FaceAttributes.from_response({
            "age": 31,
            "gender": "Female",
            "faceRectangle": {"left": 10, "top": 20, "width": 30, "height": 40}
        })

        assert face.age == 31
        assert face.gender == "Female"
        assert (face.left, face.top, face.width, face.height) == (10, 20, 30, 40)

    def test_face_from_response_missing_fields(self):
        face = FaceAttributes.from_response({})

        assert face.age is None
        assert face.gender is None
        assert face.width == 0

    def test_image_analysis_format(self):
        result = ImageAnalysisResult(
            faces=[FaceAttributes(age=40, gender="Male")],
            tags={"person": 0.99, "outdoor": 0.8},
            caption="a man standing outside",
            caption_confidence=0.5,
        )
        formatted = result.format_result()

        assert "Caption: a man standing outside (50.0%)" in formatted
        assert "Tags: person, outdoor" in formatted
        assert "Faces detected: 1" in formatted
        assert "Male, age 40" in formatted

    def test_speech_result_succeeded(self):
        assert SpeechRecognitionResult(status="Success", text="hello").succeeded
        assert not SpeechRecognitionResult(status="NoMatch").succeeded
