"""
Azure Computer Vision client.

Analyzes images for faces (with estimated age and gender), tags and captions
through the Image Analysis REST API.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union
import requests
from .http_client import BaseRestClient, post_json
from .models.data_models import FaceAttributes, ImageAnalysisResult
from .exceptions import ConfigurationError, InvalidInputError


logger = logging.getLogger(__name__)


VISUAL_FEATURES = {
    "Adult", "Brands", "Categories", "Color", "Description",
    "Faces", "ImageType", "Objects", "Tags",
}
DEFAULT_FEATURES = ("Faces", "Tags", "Description")

ImageSource = Union[str, Path, bytes]


class AzureVisionClient(BaseRestClient):
    """Client for the Azure Computer Vision analyze endpoint."""

    provider_name = "Azure Vision"

    def __init__(
        self,
        endpoint: Optional[str] = None,
        subscription_key: Optional[str] = None,
        api_version: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            endpoint: Resource endpoint, e.g. https://<name>.cognitiveservices.azure.com
            subscription_key: Resource key (defaults to AZURE_VISION_KEY)
            api_version: Image Analysis API version
            session: Optional requests session to reuse

        Raises:
            ConfigurationError: If the endpoint or key is missing
        """
        from .config import config

        self.endpoint = endpoint or config.azure_vision.endpoint
        self.subscription_key = subscription_key or config.azure_vision.subscription_key
        self.api_version = api_version or config.azure_vision.api_version

        if not self.endpoint:
            raise ConfigurationError("Azure Vision endpoint is not configured")
        if not self.subscription_key:
            raise ConfigurationError("Azure Vision subscription key is not configured")

        self.endpoint = self.endpoint.rstrip("/")
        super().__init__(session)
        logger.info(f"Initialized Azure Vision client for endpoint: {self.endpoint}")

    @property
    def analyze_url(self) -> str:
        return f"{self.endpoint}/vision/{self.api_version}/analyze"

    @staticmethod
    def _validate_features(features: Iterable[str]) -> List[str]:
        if isinstance(features, str):
            features = [features]
        features = list(features)
        if not features:
            raise InvalidInputError("At least one visual feature is required")
        unknown = [f for f in features if f not in VISUAL_FEATURES]
        if unknown:
            raise InvalidInputError(f"Unknown visual features: {unknown}")
        return features

    def analyze_image(self, image: ImageSource, features: Iterable[str] = DEFAULT_FEATURES, language: str = "en") -> ImageAnalysisResult:
        """
        Analyze an image.

        Args:
            image: Public image URL, local file path, or raw image bytes
            features: Visual features to request
            language: Language for tags and captions

        Returns:
            ImageAnalysisResult with faces, tags and caption

        Raises:
            InvalidInputError: If the image or features are invalid
            ProviderError: If the HTTP call fails
        """
        features = self._validate_features(features)
        params = {"visualFeatures": ",".join(features), "language": language}
        headers = {"Ocp-Apim-Subscription-Key": self.subscription_key}

        if isinstance(image, str) and image.startswith(("http://", "https://")):
            headers["Content-Type"] = "application/json"
            body = post_json(self.session, self.analyze_url, self.provider_name, {"url": image}, headers=headers, params=params)
        else:
            headers["Content-Type"] = "application/octet-stream"
            body = post_json(self.session, self.analyze_url, self.provider_name, headers=headers, params=params, data=self._read_image(image))

        result = self._parse_analysis(body)
        logger.info(f"Image analysis found {len(result.faces)} faces and {len(result.tags)} tags")
        return result

    def detect_faces(self, image: ImageSource) -> List[FaceAttributes]:
        """Detect faces with estimated age and gender."""
        return self.analyze_image(image, features=("Faces",)).faces

    @staticmethod
    def _read_image(image: ImageSource) -> bytes:
        if isinstance(image, bytes):
            if not image:
                raise InvalidInputError("Image bytes cannot be empty")
            return image

        path = Path(image)
        if not path.exists():
            raise InvalidInputError(f"Image file not found: {path}")
        return path.read_bytes()

    @staticmethod
    def _parse_analysis(body: dict) -> ImageAnalysisResult:
        faces = [FaceAttributes.from_response(face) for face in body.get("faces", [])]
        tags = {tag["name"]: float(tag.get("confidence", 0.0)) for tag in body.get("tags", []) if "name" in tag}

        caption = None
        caption_confidence = 0.0
        captions = body.get("description", {}).get("captions", [])
        if captions:
            caption = captions[0].get("text")
            caption_confidence = float(captions[0].get("confidence", 0.0))

        return ImageAnalysisResult(
            faces=faces,
            tags=tags,
            caption=caption,
            caption_confidence=caption_confidence,
            raw=body,
        )
