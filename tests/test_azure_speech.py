"""
Tests for the Azure Speech client.
"""

import pytest

from ai_api_toolkit.azure_speech import AzureSpeechClient, WAV_PCM_16K
from ai_api_toolkit.exceptions import ConfigurationError, InvalidInputError, AuthenticationError


class TestAzureSpeechClient:
    """Test cases for AzureSpeechClient."""

    @pytest.fixture
    def client(self, mock_session):
        return AzureSpeechClient(subscription_key="speech-key", region="westeurope", session=mock_session)

    def test_requires_key(self, mock_session, monkeypatch):
        from ai_api_toolkit.config import config
        monkeypatch.setattr(config.azure_speech, "subscription_key", None)

        with pytest.raises(ConfigurationError, match="subscription key is not configured"):
            AzureSpeechClient(region="westeurope", session=mock_session)

    def test_endpoints_use_region(self, client):
        assert client.recognition_url == (
            "https://westeurope.stt.speech.microsoft.com"
            "/speech/recognition/conversation/cognitiveservices/v1"
        )
        assert client.synthesis_url == "https://westeurope.tts.speech.microsoft.com/cognitiveservices/v1"

    def test_recognize_success(self, client, mock_session, make_response):
        mock_session.request.return_value = make_response(200, {
            "RecognitionStatus": "Success",
            "DisplayText": "Hello world.",
            "Offset": 1800000,
            "Duration": 9300000,
        })

        result = client.recognize(b"RIFF-audio", language="en-GB")

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", client.recognition_url)
        assert kwargs["params"] == {"language": "en-GB", "format": "simple"}
        assert kwargs["headers"]["Ocp-Apim-Subscription-Key"] == "speech-key"
        assert kwargs["headers"]["Content-Type"] == WAV_PCM_16K
        assert kwargs["data"] == b"RIFF-audio"

        assert result.succeeded
        assert result.text == "Hello world."
        assert result.offset == 1800000
        assert result.duration == 9300000

    def test_recognize_no_match_is_returned(self, client, mock_session, make_response):
        mock_session.request.return_value = make_response(200, {"RecognitionStatus": "NoMatch"})

        result = client.recognize(b"silence")

        assert not result.succeeded
        assert result.status == "NoMatch"
        assert result.text == ""

    def test_recognize_detailed_uses_nbest(self, client, mock_session, make_response):
        mock_session.request.return_value = make_response(200, {
            "RecognitionStatus": "Success",
            "NBest": [{"Display": "Best guess.", "Confidence": 0.93}],
        })

        result = client.recognize(b"audio", detailed=True)

        assert mock_session.request.call_args[1]["params"]["format"] == "detailed"
        assert result.text == "Best guess."

    def test_recognize_empty_audio(self, client):
        with pytest.raises(InvalidInputError, match="Audio cannot be empty"):
            client.recognize(b"")

    def test_recognize_unauthorized(self, client, mock_session, make_response):
        mock_session.request.return_value = make_response(401, text="Access denied")

        with pytest.raises(AuthenticationError):
            client.recognize(b"audio")

    def test_recognize_file(self, client, mock_session, make_response, tmp_path):
        audio_path = tmp_path / "clip.wav"
        audio_path.write_bytes(b"RIFF-file")
        mock_session.request.return_value = make_response(200, {"RecognitionStatus": "Success", "DisplayText": "Hi."})

        result = client.recognize_file(audio_path)

        assert result.text == "Hi."
        assert mock_session.request.call_args[1]["data"] == b"RIFF-file"

    def test_recognize_missing_file(self, client, tmp_path):
        with pytest.raises(FileNotFoundError):
            client.recognize_file(tmp_path / "missing.wav")

    def test_build_ssml_escapes_text(self, client):
        ssml = client.build_ssml("Fish & chips <now>", voice="en-GB-RyanNeural", language="en-GB")

        assert ssml == (
            "<speak version='1.0' xml:lang=\"en-GB\">"
            "<voice name=\"en-GB-RyanNeural\">Fish &amp; chips &lt;now&gt;</voice>"
            "</speak>"
        )

    def test_synthesize(self, client, mock_session, make_response):
        mock_session.request.return_value = make_response(200, content=b"RIFF-speech")

        audio = client.synthesize("Hello", voice="en-US-GuyNeural", output_format="audio-16khz-32kbitrate-mono-mp3")

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", client.synthesis_url)
        assert kwargs["headers"]["Content-Type"] == "application/ssml+xml"
        assert kwargs["headers"]["X-Microsoft-OutputFormat"] == "audio-16khz-32kbitrate-mono-mp3"
        assert b"en-US-GuyNeural" in kwargs["data"]
        assert audio == b"RIFF-speech"

    def test_synthesize_empty_text(self, client):
        with pytest.raises(InvalidInputError, match="Text cannot be empty"):
            client.synthesize("  ")

    def test_synthesize_to_file(self, client, mock_session, make_response, tmp_path):
        mock_session.request.return_value = make_response(200, content=b"RIFF-speech")

        path = client.synthesize_to_file("Hello", tmp_path / "out.wav")

        assert path.read_bytes() == b"RIFF-speech"
