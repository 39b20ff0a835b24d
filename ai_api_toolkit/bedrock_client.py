"""
Amazon Bedrock completions client.

Uses the bedrock-runtime Converse API through boto3 so Bedrock-hosted models
can stand in for the OpenAI-style providers.
"""

import logging
from typing import Any, Dict, Optional
from .models.data_models import CompletionResult
from .services.interfaces import CompletionProviderInterface
from .exceptions import (
    ConfigurationError,
    InvalidInputError,
    ProviderError,
    AuthenticationError,
    RateLimitError
)


logger = logging.getLogger(__name__)


THROTTLING_ERROR_CODES = {"ThrottlingException", "ServiceQuotaExceededException", "TooManyRequestsException"}
AUTH_ERROR_CODES = {"AccessDeniedException", "UnrecognizedClientException", "ExpiredTokenException"}


class BedrockCompletionsClient(CompletionProviderInterface):
    """
    Completions provider backed by Amazon Bedrock.

    Retries are delegated to botocore's retry modes; whatever error remains
    after those attempts is translated into a toolkit exception.
    """

    provider_name = "Bedrock"

    def __init__(self, model_id: Optional[str] = None, region: Optional[str] = None, client=None):
        """
        Initialize the Bedrock client.

        Args:
            model_id: Bedrock model or inference profile ID
            region: AWS region (defaults to AWS_BEDROCK_REGION)
            client: Optional pre-built bedrock-runtime client
        """
        from .config import config as toolkit_config

        self.model_id = model_id or toolkit_config.aws.default_model_id
        self.region = region or toolkit_config.aws.bedrock_region
        self.max_tokens = toolkit_config.aws.max_tokens
        self._client = client

        logger.info(f"Initialized Bedrock client with model: {self.model_id}")

    def _get_bedrock_client(self):
        """Get or create the boto3 bedrock-runtime client."""
        if self._client is None:
            try:
                import boto3
                from botocore.config import Config
                from .config import config as toolkit_config

                boto_config = Config(
                    region_name=self.region,
                    retries={
                        'max_attempts': toolkit_config.retry.boto_max_attempts,
                        'mode': toolkit_config.retry.boto_mode
                    },
                    read_timeout=toolkit_config.retry.read_timeout,
                    connect_timeout=toolkit_config.retry.connect_timeout
                )
                self._client = boto3.client('bedrock-runtime', config=boto_config)

            except Exception as e:
                raise ConfigurationError(f"Failed to initialize Bedrock client: {e}")
        return self._client

    def complete(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **params
    ) -> CompletionResult:
        """
        Generate a completion with the Converse API.

        Args:
            prompt: User prompt
            max_tokens: Optional cap on generated tokens
            temperature: Optional sampling temperature
            **params: system_prompt, top_p, stop_sequences, or model-specific
                fields sent as additionalModelRequestFields

        Raises:
            InvalidInputError: If the prompt is empty
            RateLimitError: If Bedrock throttles the request
            AuthenticationError: If credentials are rejected
            ProviderError: For any other Bedrock failure
        """
        from botocore.exceptions import ClientError, BotoCoreError

        if not prompt or not prompt.strip():
            raise InvalidInputError("Prompt cannot be empty")
        if max_tokens is not None and max_tokens <= 0:
            raise InvalidInputError("max_tokens must be positive")

        inference_config = {"maxTokens": max_tokens or self.max_tokens}
        if temperature is not None:
            inference_config["temperature"] = temperature
        if "top_p" in params:
            inference_config["topP"] = params.pop("top_p")
        if "stop_sequences" in params:
            inference_config["stopSequences"] = list(params.pop("stop_sequences"))

        request = {
            "modelId": self.model_id,
            "messages": [{"role": "user", "content": [{"text": prompt}]}],
            "inferenceConfig": inference_config,
        }
        system_prompt = params.pop("system_prompt", None)
        if system_prompt:
            request["system"] = [{"text": system_prompt}]
        if params:
            # Model-specific fields such as top_k go through unchanged
            request["additionalModelRequestFields"] = params

        logger.debug(f"Bedrock converse request: {request}")

        try:
            response = self._get_bedrock_client().converse(**request)
        except ClientError as e:
            error = e.response.get('Error', {})
            error_code = error.get('Code', '')
            status = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
            logger.error(f"Bedrock converse failed with {error_code}: {e}")

            if error_code in THROTTLING_ERROR_CODES:
                raise RateLimitError(f"Bedrock rate limit exceeded: {e}", status, self.provider_name)
            if error_code in AUTH_ERROR_CODES:
                raise AuthenticationError(f"Bedrock access denied: {e}", status, self.provider_name)
            raise ProviderError(f"Bedrock client error: {e}", status, self.provider_name)
        except BotoCoreError as e:
            logger.error(f"Bedrock connection error: {e}")
            raise ProviderError(f"Bedrock connection error: {e}", provider=self.provider_name)

        return self._to_result(response)

    def _to_result(self, response: Dict[str, Any]) -> CompletionResult:
        content = response.get('output', {}).get('message', {}).get('content', [])
        text_parts = [part['text'] for part in content if 'text' in part]
        if not text_parts:
            raise ProviderError("Bedrock response contained no text", provider=self.provider_name)

        usage = response.get('usage', {})
        result = CompletionResult(
            text="".join(text_parts).strip(),
            model=self.model_id,
            finish_reason=response.get('stopReason'),
            prompt_tokens=usage.get('inputTokens', 0),
            completion_tokens=usage.get('outputTokens', 0),
            raw=response,
        )
        logger.info(f"Bedrock completion finished ({result.finish_reason}, {result.total_tokens} tokens)")
        return result
