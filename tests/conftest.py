"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock

import pytest

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.config import Credentials


@pytest.fixture
def credentials():
    """Provide test credentials."""
    return Credentials(
        api_url="https://cloud.example.com/client/api",
        api_key="test-api-key",
        secret_key="test-secret-key",
        timeout_ms=5000,
    )


@pytest.fixture
def mock_client():
    """Provide a CloudStack client whose API calls are all AsyncMocks."""
    return AsyncMock(spec=CloudStackClient)
