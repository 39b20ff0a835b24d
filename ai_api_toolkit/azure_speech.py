"""
Azure Speech service client.

Wraps the REST endpoints for short-audio speech recognition and SSML text to
speech synthesis.
"""

import logging
from pathlib import Path
from typing import Optional, Union
from xml.sax.saxutils import escape, quoteattr
import requests
from .http_client import BaseRestClient, post_json, post_bytes
from .models.data_models import SpeechRecognitionResult
from .exceptions import ConfigurationError, InvalidInputError


logger = logging.getLogger(__name__)


WAV_PCM_16K = "audio/wav; codecs=audio/pcm; samplerate=16000"
OGG_OPUS = "audio/ogg; codecs=opus"


class AzureSpeechClient(BaseRestClient):
    """Client for Azure Speech recognition and synthesis."""

    provider_name = "Azure Speech"

    def __init__(
        self,
        subscription_key: Optional[str] = None,
        region: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            subscription_key: Speech resource key (defaults to AZURE_SPEECH_KEY)
            region: Speech resource region (defaults to AZURE_SPEECH_REGION)
            session: Optional requests session to reuse

        Raises:
            ConfigurationError: If the key or region is missing
        """
        from .config import config

        self.settings = config.azure_speech
        self.subscription_key = subscription_key or self.settings.subscription_key
        self.region = region or self.settings.region

        if not self.subscription_key:
            raise ConfigurationError("Azure Speech subscription key is not configured")
        if not self.region:
            raise ConfigurationError("Azure Speech region is not configured")

        super().__init__(session)
        logger.info(f"Initialized Azure Speech client for region: {self.region}")

    @property
    def recognition_url(self) -> str:
        return (
            f"https://{self.region}.stt.speech.microsoft.com"
            "/speech/recognition/conversation/cognitiveservices/v1"
        )

    @property
    def synthesis_url(self) -> str:
        return f"https://{self.region}.tts.speech.microsoft.com/cognitiveservices/v1"

    def recognize(
        self,
        audio: bytes,
        language: Optional[str] = None,
        content_type: str = WAV_PCM_16K,
        detailed: bool = False,
    ) -> SpeechRecognitionResult:
        """
        Transcribe a short audio clip (up to 60 seconds).

        Args:
            audio: Encoded audio bytes
            language: BCP-47 language code
            content_type: Audio content type header
            detailed: Request the detailed output format

        Returns:
            SpeechRecognitionResult; statuses such as NoMatch are returned, not raised

        Raises:
            InvalidInputError: If audio is empty
            ProviderError: If the HTTP call fails
        """
        if not audio:
            raise InvalidInputError("Audio cannot be empty")

        params = {
            "language": language or self.settings.default_language,
            "format": "detailed" if detailed else "simple",
        }
        headers = {
            "Ocp-Apim-Subscription-Key": self.subscription_key,
            "Content-Type": content_type,
            "Accept": "application/json",
        }

        body = post_json(self.session, self.recognition_url, self.provider_name, headers=headers, params=params, data=audio)

        status = body.get("RecognitionStatus", "Unknown")
        text = body.get("DisplayText", "")
        if detailed and not text and body.get("NBest"):
            text = body["NBest"][0].get("Display", "")

        result = SpeechRecognitionResult(
            status=status,
            text=text,
            offset=body.get("Offset", 0),
            duration=body.get("Duration", 0),
            raw=body,
        )
        if result.succeeded:
            logger.info(f"Recognized {len(result.text)} characters of speech")
        else:
            logger.warning(f"Speech recognition finished with status: {status}")
        return result

    def recognize_file(self, path: Union[str, Path], language: Optional[str] = None) -> SpeechRecognitionResult:
        """
        Transcribe a 16 kHz PCM WAV file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")
        return self.recognize(path.read_bytes(), language=language)

    def build_ssml(self, text: str, voice: Optional[str] = None, language: Optional[str] = None) -> str:
        """Wrap plain text in an SSML document for the given voice."""
        voice = voice or self.settings.default_voice
        language = language or self.settings.default_language
        return (
            f"<speak version='1.0' xml:lang={quoteattr(language)}>"
            f"<voice name={quoteattr(voice)}>{escape(text)}</voice>"
            "</speak>"
        )

    def synthesize(
        self,
        text: str,
        voice: Optional[str] = None,
        output_format: Optional[str] = None,
        language: Optional[str] = None,
    ) -> bytes:
        """
        Convert text to speech audio.

        Args:
            text: Plain text to speak
            voice: Neural voice name
            output_format: X-Microsoft-OutputFormat value
            language: Language of the SSML document

        Returns:
            Encoded audio bytes

        Raises:
            InvalidInputError: If text is empty
            ProviderError: If the HTTP call fails
        """
        if not text or not text.strip():
            raise InvalidInputError("Text cannot be empty")

        headers = {
            "Ocp-Apim-Subscription-Key": self.subscription_key,
            "Content-Type": "application/ssml+xml",
            "X-Microsoft-OutputFormat": output_format or self.settings.output_format,
            "User-Agent": "ai-api-toolkit",
        }
        ssml = self.build_ssml(text, voice=voice, language=language)

        audio = post_bytes(self.session, self.synthesis_url, self.provider_name, ssml.encode("utf-8"), headers=headers)
        logger.info(f"Synthesized {len(audio)} bytes of audio")
        return audio

    def synthesize_to_file(self, text: str, path: Union[str, Path], **kwargs) -> Path:
        """Synthesize speech and write it to a file."""
        path = Path(path)
        path.write_bytes(self.synthesize(text, **kwargs))
        return path
