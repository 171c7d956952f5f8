"""Pytest configuration and shared fixtures for all tests."""

import json
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests


def make_response(status_code: int = 200, body: Any = None, encoding: Optional[str] = None) -> Mock:
    """
    Build a mock streamed response as returned by session.get(..., stream=True).

    The body is handed out by raw.read1 in one chunk, then b"" for end of stream.

    Dicts and lists are serialized as JSON, str is encoded as UTF-8, bytes are used as-is.
    """
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")

    chunks = [content] if content else []

    response = Mock()
    response.status_code = status_code
    response.encoding = encoding
    response.raw.read1.side_effect = lambda *args, **kwargs: chunks.pop(0) if chunks else b""
    return response


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    return Mock(spec=requests.Session)


@pytest.fixture(autouse=True)
def clear_config_env(monkeypatch):
    """Keep configuration environment variables of the host out of tests."""
    for name in ("MANIFEST_FILE", "OUTPUT_FORMAT", "OUTPUT_DIR", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(name="make_response")
def make_response_fixture():
    """Factory for mock streamed responses."""
    return make_response
