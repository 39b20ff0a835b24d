"""
Shared HTTP transport for REST-based vendor clients.

Sends a request through a requests session, retries transient failures with
exponential backoff, and translates HTTP status codes into toolkit exceptions.
"""

import logging
import time
from typing import Any, Dict, Optional
import requests
from .exceptions import ProviderError, AuthenticationError, RateLimitError


logger = logging.getLogger(__name__)


RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def _error_message(response: requests.Response) -> str:
    """Extract a readable error message from a vendor error response."""
    try:
        body = response.json()
    except ValueError:
        return (response.text or "").strip()[:500]

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return error.get("message") or error.get("code") or str(error)
        if isinstance(error, str):
            return error
        if "message" in body:
            return str(body["message"])
    return str(body)[:500]


def _retry_delay(response: Optional[requests.Response], attempt: int, base_delay: float, max_delay: float) -> float:
    """Compute the backoff delay, honoring a numeric Retry-After header."""
    if response is not None:
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return min(float(retry_after), max_delay)
            except ValueError:
                pass
    return min(base_delay * (2 ** attempt), max_delay)


def raise_for_status(response: requests.Response, provider: str) -> None:
    """
    Translate an unsuccessful response into a toolkit exception.

    Raises:
        AuthenticationError: For 401 and 403
        RateLimitError: For 429
        ProviderError: For any other non-2xx status
    """
    status = response.status_code
    if 200 <= status < 300:
        return

    message = _error_message(response)
    if status in (401, 403):
        raise AuthenticationError(f"{provider} rejected the credentials ({status}): {message}", status, provider)
    if status == 429:
        raise RateLimitError(f"{provider} rate limit exceeded: {message}", status, provider)
    raise ProviderError(f"{provider} request failed ({status}): {message}", status, provider)


def send_request(
    session: requests.Session,
    method: str,
    url: str,
    provider: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
    data: Optional[bytes] = None,
    max_retries: Optional[int] = None,
    timeout: Optional[float] = None,
) -> requests.Response:
    """
    Send a request with retry on rate limiting, server errors and connection errors.

    Args:
        session: requests session used for the call
        method: HTTP method
        url: Target URL
        provider: Vendor name used in log and error messages
        headers: Request headers
        params: Query string parameters
        json: JSON body
        data: Raw body
        max_retries: Attempts before giving up (defaults to config)
        timeout: Per-request timeout in seconds (defaults to config)

    Returns:
        Successful response

    Raises:
        ProviderError: If the request ultimately fails
    """
    from .config import config

    if max_retries is None:
        max_retries = config.retry.max_retries
    if timeout is None:
        timeout = config.retry.timeout
    max_retries = max(1, max_retries)

    for attempt in range(max_retries):
        try:
            response = session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                data=data,
                timeout=timeout,
            )
        except requests.RequestException as e:
            if attempt < max_retries - 1:
                delay = _retry_delay(None, attempt, config.retry.base_delay, config.retry.max_delay)
                logger.warning(f"{provider} connection error, retrying in {delay:.2f}s (attempt {attempt + 1}/{max_retries}): {e}")
                time.sleep(delay)
                continue
            logger.error(f"{provider} connection error after {max_retries} attempts: {e}")
            raise ProviderError(f"{provider} connection error: {e}", provider=provider)

        if response.status_code in RETRYABLE_STATUS_CODES and attempt < max_retries - 1:
            delay = _retry_delay(response, attempt, config.retry.base_delay, config.retry.max_delay)
            logger.warning(
                f"{provider} returned {response.status_code}, retrying in {delay:.2f}s "
                f"(attempt {attempt + 1}/{max_retries})"
            )
            time.sleep(delay)
            continue

        try:
            raise_for_status(response, provider)
        except ProviderError as e:
            logger.error(str(e))
            raise
        return response

    # Unreachable: the final attempt either returns or raises
    raise ProviderError(f"{provider} request failed after {max_retries} attempts", provider=provider)


def post_json(
    session: requests.Session,
    url: str,
    provider: str,
    payload: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    data: Optional[bytes] = None,
) -> Dict[str, Any]:
    """
    POST a request and decode the JSON response body.

    Raises:
        ProviderError: If the request fails or the body is not JSON
    """
    logger.debug(f"{provider} request to {url}: {payload}")
    response = send_request(session, "POST", url, provider, headers=headers, params=params, json=payload, data=data)
    try:
        body = response.json()
    except ValueError as e:
        raise ProviderError(f"{provider} returned invalid JSON: {e}", response.status_code, provider)
    logger.debug(f"{provider} response: {body}")
    return body


def post_bytes(
    session: requests.Session,
    url: str,
    provider: str,
    data: bytes,
    headers: Optional[Dict[str, str]] = None,
) -> bytes:
    """POST a raw body and return the raw response content."""
    response = send_request(session, "POST", url, provider, headers=headers, data=data)
    return response.content


class BaseRestClient:
    """
    Base class for REST vendor clients.

    Owns one requests session per client instance. Sessions passed in by
    the caller are not closed by the client.
    """

    provider_name = "REST API"

    def __init__(self, session: Optional[requests.Session] = None):
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
