"""
Configuration for the AI API toolkit.
Every section reads its defaults from environment variables.
"""

import os
from typing import List, Optional
from dataclasses import dataclass, field


@dataclass
class OpenAIConfig:
    """OpenAI-style completions settings."""
    api_key: Optional[str] = None
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-3.5-turbo-instruct"
    chat_model: str = "gpt-4o-mini"
    max_tokens: int = 256

    @classmethod
    def from_env(cls) -> 'OpenAIConfig':
        """Create OpenAI config from environment variables."""
        return cls(
            api_key=os.getenv('OPENAI_API_KEY', cls.api_key),
            base_url=os.getenv('OPENAI_BASE_URL', cls.base_url),
            model=os.getenv('OPENAI_MODEL', cls.model),
            chat_model=os.getenv('OPENAI_CHAT_MODEL', cls.chat_model),
            max_tokens=int(os.getenv('OPENAI_MAX_TOKENS', cls.max_tokens)),
        )


@dataclass
class XAIConfig:
    """xAI Grok API settings."""
    api_key: Optional[str] = None
    base_url: str = "https://api.x.ai/v1"
    model: str = "grok-beta"
    max_tokens: int = 256

    @classmethod
    def from_env(cls) -> 'XAIConfig':
        """Create xAI config from environment variables."""
        return cls(
            api_key=os.getenv('XAI_API_KEY', cls.api_key),
            base_url=os.getenv('XAI_BASE_URL', cls.base_url),
            model=os.getenv('XAI_MODEL', cls.model),
            max_tokens=int(os.getenv('XAI_MAX_TOKENS', cls.max_tokens)),
        )


@dataclass
class AWSConfig:
    """AWS-related configuration settings."""
    bedrock_region: str = "us-west-2"
    default_model_id: str = "us.amazon.nova-lite-v1:0"
    max_tokens: int = 512

    @classmethod
    def from_env(cls) -> 'AWSConfig':
        """Create AWS config from environment variables."""
        return cls(
            bedrock_region=os.getenv('AWS_BEDROCK_REGION', cls.bedrock_region),
            default_model_id=os.getenv('BEDROCK_MODEL_ID', cls.default_model_id),
            max_tokens=int(os.getenv('BEDROCK_MAX_TOKENS', cls.max_tokens)),
        )


@dataclass
class AzureSpeechConfig:
    """Azure Speech service settings."""
    subscription_key: Optional[str] = None
    region: str = "eastus"
    default_language: str = "en-US"
    default_voice: str = "en-US-JennyNeural"
    output_format: str = "riff-24khz-16bit-mono-pcm"

    @classmethod
    def from_env(cls) -> 'AzureSpeechConfig':
        """Create Azure Speech config from environment variables."""
        return cls(
            subscription_key=os.getenv('AZURE_SPEECH_KEY', cls.subscription_key),
            region=os.getenv('AZURE_SPEECH_REGION', cls.region),
            default_language=os.getenv('AZURE_SPEECH_LANGUAGE', cls.default_language),
            default_voice=os.getenv('AZURE_SPEECH_VOICE', cls.default_voice),
            output_format=os.getenv('AZURE_SPEECH_OUTPUT_FORMAT', cls.output_format),
        )


@dataclass
class AzureVisionConfig:
    """Azure Computer Vision settings."""
    subscription_key: Optional[str] = None
    endpoint: Optional[str] = None
    api_version: str = "v3.2"

    @classmethod
    def from_env(cls) -> 'AzureVisionConfig':
        """Create Azure Vision config from environment variables."""
        return cls(
            subscription_key=os.getenv('AZURE_VISION_KEY', cls.subscription_key),
            endpoint=os.getenv('AZURE_VISION_ENDPOINT', cls.endpoint),
            api_version=os.getenv('AZURE_VISION_API_VERSION', cls.api_version),
        )


@dataclass
class RetryConfig:
    """Retry and timeout configuration for vendor calls."""
    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    timeout: float = 30.0

    # botocore settings for Bedrock
    boto_max_attempts: int = 3
    boto_mode: str = "standard"
    read_timeout: int = 60
    connect_timeout: int = 10

    @classmethod
    def from_env(cls) -> 'RetryConfig':
        """Create retry config from environment variables."""
        return cls(
            max_retries=int(os.getenv('HTTP_MAX_RETRIES', cls.max_retries)),
            base_delay=float(os.getenv('HTTP_BASE_DELAY', cls.base_delay)),
            max_delay=float(os.getenv('HTTP_MAX_DELAY', cls.max_delay)),
            timeout=float(os.getenv('HTTP_TIMEOUT', cls.timeout)),
            boto_max_attempts=int(os.getenv('AWS_RETRY_MAX_ATTEMPTS', cls.boto_max_attempts)),
            boto_mode=os.getenv('AWS_RETRY_MODE', cls.boto_mode),
            read_timeout=int(os.getenv('AWS_READ_TIMEOUT', cls.read_timeout)),
            connect_timeout=int(os.getenv('AWS_CONNECT_TIMEOUT', cls.connect_timeout)),
        )


def _default_onnx_providers() -> List[str]:
    return ["CPUExecutionProvider"]


@dataclass
class ZeroShotConfig:
    """Configuration for zero-shot image classification."""
    image_size: int = 224
    logit_scale: float = 100.0
    prompt_template: str = "a photo of a {}"
    onnx_providers: List[str] = field(default_factory=_default_onnx_providers)

    # CLIP normalization constants
    image_mean: tuple = (0.48145466, 0.4578275, 0.40821073)
    image_std: tuple = (0.26862954, 0.26130258, 0.27577711)

    # Numerical stability
    zero_norm_epsilon: float = 1e-8

    @classmethod
    def from_env(cls) -> 'ZeroShotConfig':
        """Create zero-shot config from environment variables."""
        providers = os.getenv('ONNX_PROVIDERS')
        return cls(
            image_size=int(os.getenv('ZERO_SHOT_IMAGE_SIZE', cls.image_size)),
            logit_scale=float(os.getenv('ZERO_SHOT_LOGIT_SCALE', cls.logit_scale)),
            prompt_template=os.getenv('ZERO_SHOT_PROMPT_TEMPLATE', cls.prompt_template),
            onnx_providers=[p.strip() for p in providers.split(',') if p.strip()] if providers else _default_onnx_providers(),
        )


@dataclass
class ToolkitConfig:
    """Configuration for the AI API toolkit."""
    openai: OpenAIConfig
    xai: XAIConfig
    aws: AWSConfig
    azure_speech: AzureSpeechConfig
    azure_vision: AzureVisionConfig
    retry: RetryConfig
    zero_shot: ZeroShotConfig

    @classmethod
    def from_env(cls) -> 'ToolkitConfig':
        """Create toolkit config from environment variables."""
        return cls(
            openai=OpenAIConfig.from_env(),
            xai=XAIConfig.from_env(),
            aws=AWSConfig.from_env(),
            azure_speech=AzureSpeechConfig.from_env(),
            azure_vision=AzureVisionConfig.from_env(),
            retry=RetryConfig.from_env(),
            zero_shot=ZeroShotConfig.from_env(),
        )


# Global configuration instance
config = ToolkitConfig.from_env()
