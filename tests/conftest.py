"""
Pytest configuration and fixtures for serverless-testkit tests.
"""

from unittest.mock import AsyncMock

import boto3
import httpx
import pytest

from serverless_testkit import config
from serverless_testkit.config import Settings
from serverless_testkit.dynamodb.store import StoreClient


@pytest.fixture(autouse=True)
def isolated_global_settings(monkeypatch):
    """Keep the cached global settings from leaking between tests."""
    monkeypatch.setattr(config, "_settings_instance", Settings(_env_file=None))
    yield
    config.reset_settings()


@pytest.fixture
def mock_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        aws_region="us-east-1",
        oauth_cognito_domain="my-app",
        oauth_client_id="client-id",
        oauth_client_secret="client-secret",
        user_pool_client_id="pool-client-id",
        http_timeout_seconds=5,
        log_level="DEBUG",
    )


@pytest.fixture
def empty_settings() -> Settings:
    """Settings with no AWS or OAuth values."""
    return Settings(
        _env_file=None,
        aws_region="",
        oauth_cognito_domain="",
        oauth_client_id="",
        oauth_client_secret="",
        user_pool_client_id="",
    )


@pytest.fixture
def mock_store() -> AsyncMock:
    """Mock store client for testing."""
    return AsyncMock(spec=StoreClient)


@pytest.fixture
def mock_sleep() -> AsyncMock:
    """Pause primitive that returns immediately and records its calls."""
    return AsyncMock(return_value=None)


@pytest.fixture
def dynamodb_resource():
    """boto3 DynamoDB resource with dummy credentials, for use with Stubber."""
    return boto3.resource(
        "dynamodb",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


class RecordingTransport:
    """httpx transport handler that records requests and replays responses."""

    def __init__(self, *responses: httpx.Response | Exception):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def recording_transport():
    """Factory for a ``RecordingTransport`` seeded with responses."""
    return RecordingTransport
