"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- HTTP clients
- Mock settings/configuration
- Sample raw messages
- Temporary files
"""

import os
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mailbody.api.app import app
from mailbody.config import Settings
from tests.fixtures.emails import SAMPLE_MESSAGES


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing FastAPI endpoints.

    Yields:
        AsyncClient instance
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create mock settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        max_email_size_mb=25,
        max_mime_depth=50,
        max_mime_parts=1000,
        log_level="INFO",
        log_json=False,  # Easier to read in tests
    )


@pytest.fixture
def simple_message() -> str:
    """Plain text message with a URL in the body."""
    return SAMPLE_MESSAGES["simple_plain_text"]


@pytest.fixture
def multipart_message() -> str:
    """Multipart/alternative message with plain text and HTML versions."""
    return SAMPLE_MESSAGES["multipart_alternative"]


@pytest.fixture
def nested_message() -> str:
    """mixed -> alternative -> {text/plain, base64 text/html} message."""
    return SAMPLE_MESSAGES["nested_mixed_alternative"]


@pytest.fixture
def html_qp_message() -> str:
    """Quoted-printable HTML message with a script and an anchor."""
    return SAMPLE_MESSAGES["html_quoted_printable"]


@pytest.fixture
def tmp_eml_file(tmp_path) -> Generator[str, None, None]:
    """
    Create temporary .eml file for file-based tests.

    Args:
        tmp_path: pytest's temporary directory fixture

    Yields:
        Path to temporary .eml file
    """
    eml_path = tmp_path / "message.eml"
    eml_path.write_bytes(SAMPLE_MESSAGES["simple_plain_text"].encode("utf-8"))
    yield str(eml_path)


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (API, end-to-end)"
    )
