"""
CLIP-style zero-shot image classification on ONNX Runtime.

Images are embedded with an ONNX image encoder, compared by cosine similarity
against one embedding per label, and the scaled similarities are turned into
a label probability distribution with softmax.
"""

import io
import logging
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union
import numpy as np
from PIL import Image
from .models.data_models import LabelProbabilities, ZeroShotResult
from .services.interfaces import ImageEncoderInterface, TextEncoderInterface
from .normalization import softmax
from .exceptions import ConfigurationError, InvalidInputError, ProcessingError


logger = logging.getLogger(__name__)


ImageInput = Union[str, Path, bytes, Image.Image]
Tokenizer = Callable[[List[str]], np.ndarray]


def _create_session(model_path: Union[str, Path], providers: Optional[List[str]] = None):
    """Create an ONNX Runtime inference session."""
    from .config import config

    model_path = Path(model_path)
    if not model_path.exists():
        raise ConfigurationError(f"ONNX model not found: {model_path}")

    try:
        import onnxruntime as ort
        return ort.InferenceSession(str(model_path), providers=providers or config.zero_shot.onnx_providers)
    except Exception as e:
        raise ConfigurationError(f"Failed to load ONNX model {model_path}: {e}")


class OnnxImageEncoder(ImageEncoderInterface):
    """Image encoder backed by an ONNX Runtime session."""

    def __init__(self, session, output_name: Optional[str] = None):
        """
        Args:
            session: onnxruntime.InferenceSession (or compatible object)
            output_name: Output to read; the first output when omitted
        """
        self.session = session
        self.input_name = session.get_inputs()[0].name
        self.output_name = output_name

    @classmethod
    def from_path(cls, model_path: Union[str, Path], providers: Optional[List[str]] = None) -> 'OnnxImageEncoder':
        return cls(_create_session(model_path, providers))

    def encode(self, pixel_values: np.ndarray) -> np.ndarray:
        output_names = [self.output_name] if self.output_name else None
        try:
            outputs = self.session.run(output_names, {self.input_name: pixel_values.astype(np.float32)})
        except Exception as e:
            raise ProcessingError(f"Image encoder inference failed: {e}")
        return np.asarray(outputs[0], dtype=np.float32)


class OnnxTextEncoder(TextEncoderInterface):
    """
    Text encoder backed by an ONNX Runtime session.

    The tokenizer is supplied by the caller and must return int64 token ids of
    shape (len(texts), context_length) matching the exported model.
    """

    def __init__(self, session, tokenizer: Tokenizer, output_name: Optional[str] = None):
        self.session = session
        self.tokenizer = tokenizer
        self.input_name = session.get_inputs()[0].name
        self.output_name = output_name

    @classmethod
    def from_path(cls, model_path: Union[str, Path], tokenizer: Tokenizer, providers: Optional[List[str]] = None) -> 'OnnxTextEncoder':
        return cls(_create_session(model_path, providers), tokenizer)

    def encode(self, texts: List[str]) -> np.ndarray:
        token_ids = np.asarray(self.tokenizer(texts), dtype=np.int64)
        output_names = [self.output_name] if self.output_name else None
        try:
            outputs = self.session.run(output_names, {self.input_name: token_ids})
        except Exception as e:
            raise ProcessingError(f"Text encoder inference failed: {e}")
        return np.asarray(outputs[0], dtype=np.float32)


def preprocess_image(image: ImageInput, image_size: Optional[int] = None) -> np.ndarray:
    """
    Convert an image into a normalized CLIP input tensor.

    Resizes the shorter side to image_size with bicubic resampling, center
    crops to a square, scales to [0, 1] and normalizes with the CLIP mean and
    standard deviation.

    Args:
        image: File path, encoded image bytes, or PIL image
        image_size: Target side length (defaults to config)

    Returns:
        Float32 array of shape (1, 3, image_size, image_size)

    Raises:
        InvalidInputError: If the image cannot be opened
    """
    from .config import config

    size = image_size or config.zero_shot.image_size
    img = _load_image(image).convert("RGB")

    width, height = img.size
    scale = size / min(width, height)
    resized = img.resize(
        (max(size, round(width * scale)), max(size, round(height * scale))),
        Image.Resampling.BICUBIC,
    )

    left = (resized.width - size) // 2
    top = (resized.height - size) // 2
    cropped = resized.crop((left, top, left + size, top + size))

    pixels = np.asarray(cropped, dtype=np.float32) / 255.0
    mean = np.array(config.zero_shot.image_mean, dtype=np.float32)
    std = np.array(config.zero_shot.image_std, dtype=np.float32)
    pixels = (pixels - mean) / std

    # HWC -> NCHW
    return pixels.transpose(2, 0, 1)[np.newaxis, ...].astype(np.float32)


def _load_image(image: ImageInput) -> Image.Image:
    if isinstance(image, Image.Image):
        return image
    try:
        if isinstance(image, bytes):
            return Image.open(io.BytesIO(image))
        path = Path(image)
        if not path.exists():
            raise InvalidInputError(f"Image file not found: {path}")
        return Image.open(path)
    except InvalidInputError:
        raise
    except Exception as e:
        raise InvalidInputError(f"Cannot open image: {e}")


def _l2_normalize(vectors: np.ndarray) -> np.ndarray:
    from .config import config

    norms = np.linalg.norm(vectors, axis=-1, keepdims=True)
    norms = np.where(norms == 0, config.zero_shot.zero_norm_epsilon, norms)
    return vectors / norms


class ZeroShotImageClassifier:
    """
    Zero-shot image classifier over a fixed set of labels.

    Label embeddings are either given directly or computed once at
    construction by a text encoder from prompts such as "a photo of a cat".
    """

    def __init__(
        self,
        image_encoder: ImageEncoderInterface,
        labels: Sequence[str],
        label_embeddings: Optional[Union[Mapping[str, Sequence[float]], np.ndarray]] = None,
        text_encoder: Optional[TextEncoderInterface] = None,
        logit_scale: Optional[float] = None,
        prompt_template: Optional[str] = None,
        image_size: Optional[int] = None,
    ):
        """
        Initialize the classifier.

        Args:
            image_encoder: Encoder producing image embeddings
            labels: Unique candidate labels
            label_embeddings: Mapping of label to embedding, or an array aligned with labels
            text_encoder: Encoder used when label_embeddings is not given
            logit_scale: Multiplier applied to cosine similarities before softmax
            prompt_template: Format string turning a label into a text prompt
            image_size: Side length of the model input

        Raises:
            InvalidInputError: If labels are empty or repeated
            ConfigurationError: If no way to obtain label embeddings is given
        """
        from .config import config

        labels = [str(label) for label in labels]
        if not labels:
            raise InvalidInputError("Labels cannot be empty")
        if len(set(labels)) != len(labels):
            raise InvalidInputError("Labels must be unique")
        if any(not label.strip() for label in labels):
            raise InvalidInputError("Labels cannot be blank")

        self.image_encoder = image_encoder
        self.labels = labels
        self.logit_scale = logit_scale if logit_scale is not None else config.zero_shot.logit_scale
        self.prompt_template = prompt_template or config.zero_shot.prompt_template
        self.image_size = image_size or config.zero_shot.image_size

        if label_embeddings is not None:
            embeddings = self._align_embeddings(label_embeddings)
        elif text_encoder is not None:
            prompts = [self.prompt_template.format(label) for label in labels]
            embeddings = np.asarray(text_encoder.encode(prompts), dtype=np.float32)
        else:
            raise ConfigurationError("Either label_embeddings or text_encoder must be provided")

        if embeddings.ndim != 2 or embeddings.shape[0] != len(labels):
            raise ProcessingError(
                f"Expected {len(labels)} label embeddings, got array of shape {embeddings.shape}"
            )

        self._label_matrix = _l2_normalize(embeddings)
        logger.info(
            f"Initialized zero-shot classifier with {len(labels)} labels, "
            f"embedding dimension {self.embedding_dimension}"
        )

    @classmethod
    def from_onnx(
        cls,
        image_model_path: Union[str, Path],
        labels: Sequence[str],
        text_model_path: Optional[Union[str, Path]] = None,
        tokenizer: Optional[Tokenizer] = None,
        label_embeddings_path: Optional[Union[str, Path]] = None,
        **kwargs
    ) -> 'ZeroShotImageClassifier':
        """
        Build a classifier from exported ONNX models.

        Label embeddings come from a .npy file aligned with labels when
        label_embeddings_path is given, otherwise from the text model.
        """
        image_encoder = OnnxImageEncoder.from_path(image_model_path)

        if label_embeddings_path is not None:
            path = Path(label_embeddings_path)
            if not path.exists():
                raise ConfigurationError(f"Label embeddings file not found: {path}")
            return cls(image_encoder, labels, label_embeddings=np.load(path), **kwargs)

        if text_model_path is None or tokenizer is None:
            raise ConfigurationError("text_model_path and tokenizer are required without label_embeddings_path")
        text_encoder = OnnxTextEncoder.from_path(text_model_path, tokenizer)
        return cls(image_encoder, labels, text_encoder=text_encoder, **kwargs)

    def _align_embeddings(self, label_embeddings) -> np.ndarray:
        if isinstance(label_embeddings, Mapping):
            missing = [label for label in self.labels if label not in label_embeddings]
            if missing:
                raise InvalidInputError(f"Missing embeddings for labels: {missing[:3]}")
            rows = [label_embeddings[label] for label in self.labels]
            dimensions = {len(row) for row in rows}
            if len(dimensions) != 1:
                raise ProcessingError(f"Inconsistent label embedding dimensions: {sorted(dimensions)}")
            return np.asarray(rows, dtype=np.float32)
        return np.asarray(label_embeddings, dtype=np.float32)

    @property
    def embedding_dimension(self) -> int:
        return int(self._label_matrix.shape[1])

    def compute_logits(self, image_embeddings: np.ndarray) -> np.ndarray:
        """
        Scaled cosine similarities between image embeddings and label embeddings.

        Args:
            image_embeddings: Array of shape (batch, dim) or (dim,)

        Returns:
            Array of shape (batch, num_labels)
        """
        image_embeddings = np.atleast_2d(np.asarray(image_embeddings, dtype=np.float32))
        if image_embeddings.shape[1] != self.embedding_dimension:
            raise ProcessingError(
                f"Image embedding dimension {image_embeddings.shape[1]} doesn't match "
                f"label embedding dimension {self.embedding_dimension}"
            )
        return self.logit_scale * (_l2_normalize(image_embeddings) @ self._label_matrix.T)

    def classify(self, image: ImageInput) -> ZeroShotResult:
        """
        Classify one image.

        Args:
            image: File path, encoded image bytes, or PIL image

        Returns:
            ZeroShotResult with one probability per label
        """
        return self.classify_batch([image])[0]

    def classify_batch(self, images: Sequence[ImageInput]) -> List[ZeroShotResult]:
        """Classify several images with a single encoder call."""
        if not images:
            raise InvalidInputError("Images cannot be empty")

        pixel_values = np.concatenate([preprocess_image(image, self.image_size) for image in images], axis=0)
        image_embeddings = self.image_encoder.encode(pixel_values)
        if image_embeddings.shape[0] != len(images):
            raise ProcessingError(
                f"Image encoder returned {image_embeddings.shape[0]} embeddings for {len(images)} images"
            )

        probabilities = softmax(self.compute_logits(image_embeddings))

        results = []
        for row in probabilities:
            distribution = LabelProbabilities(dict(zip(self.labels, (float(p) for p in row))))
            results.append(ZeroShotResult(
                probabilities=distribution,
                metadata={"logit_scale": self.logit_scale, "embedding_dimension": self.embedding_dimension},
            ))

        logger.info(f"Classified {len(results)} images against {len(self.labels)} labels")
        return results

    def get_label_embeddings(self) -> Dict[str, List[float]]:
        """Normalized label embeddings keyed by label."""
        return {label: self._label_matrix[i].tolist() for i, label in enumerate(self.labels)}
