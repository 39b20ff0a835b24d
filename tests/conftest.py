"""
Shared fixtures for the AI API toolkit tests.
"""

import pytest
from unittest.mock import Mock, patch


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    def _make_response(status_code=200, json_body=None, content=b"", headers=None, text=""):
        response = Mock()
        response.status_code = status_code
        response.headers = headers or {}
        response.content = content
        response.text = text
        if json_body is None:
            response.json.side_effect = ValueError("No JSON body")
        else:
            response.json.return_value = json_body
        return response
    return _make_response


@pytest.fixture
def mock_session():
    """A requests session double; set session.request.return_value or side_effect."""
    return Mock()


@pytest.fixture
def no_sleep():
    """Disable retry backoff sleeps."""
    with patch('ai_api_toolkit.http_client.time.sleep') as mock_sleep:
        yield mock_sleep
