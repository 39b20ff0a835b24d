"""
Exception classes for the AI API toolkit.
"""

from typing import Optional


class ToolkitError(Exception):
    """Base exception for toolkit errors."""
    pass


class InvalidInputError(ToolkitError):
    """Raised when input values or parameters are invalid."""
    pass


class ConfigurationError(ToolkitError):
    """Raised when configuration is invalid or incomplete."""
    pass


class ProcessingError(ToolkitError):
    """Raised when local processing (inference, decoding) fails."""
    pass


class ProviderError(ToolkitError):
    """Raised when a vendor API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, provider: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.provider = provider


class AuthenticationError(ProviderError):
    """Raised when the vendor rejects the credentials (401/403)."""
    pass


class RateLimitError(ProviderError):
    """Raised when the vendor keeps rate limiting after all retries (429)."""
    pass
