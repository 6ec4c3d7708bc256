"""
Tests for settings and retry policy configuration.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from serverless_testkit import config
from serverless_testkit.config import RetryPolicy, Settings, get_settings
from serverless_testkit.exceptions import ConfigurationError, ValidationError


class TestRetryPolicy:
    """Test the retry policy model."""

    def test_defaults(self):
        """Test default policy is 10 attempts, 2 seconds apart."""
        policy = RetryPolicy()
        assert policy.max_attempts == 10
        assert policy.pause_seconds == 2

    def test_zero_pause_allowed(self):
        """Test a zero pause is valid."""
        assert RetryPolicy.create(1, 0).pause_seconds == 0

    @pytest.mark.parametrize("max_attempts,pause_seconds", [(0, 2), (-1, 2), (3, -0.5)])
    def test_invalid_values(self, max_attempts, pause_seconds):
        """Test invalid values raise the library's ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            RetryPolicy.create(max_attempts, pause_seconds)

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert isinstance(exc_info.value.__cause__, PydanticValidationError)

    def test_policy_is_immutable(self):
        """Test a policy cannot be changed after creation."""
        policy = RetryPolicy()
        with pytest.raises(PydanticValidationError):
            policy.max_attempts = 3


class TestSettings:
    """Test settings loading from the environment."""

    def test_settings_from_env(self):
        """Test values are read case-insensitively from environment variables."""
        with patch.dict(
            os.environ,
            {
                "AWS_REGION": "eu-west-1",
                "OAUTH_COGNITO_DOMAIN": "my-app",
                "OAUTH_CLIENT_ID": "id",
                "OAUTH_CLIENT_SECRET": "secret",
                "USER_POOL_CLIENT_ID": "pool-id",
                "HTTP_TIMEOUT_SECONDS": "3",
                "POLL_MAX_ATTEMPTS": "4",
                "POLL_PAUSE_SECONDS": "0.5",
            },
            clear=True,
        ):
            settings = Settings(_env_file=None)

        assert settings.aws_region == "eu-west-1"
        assert settings.oauth_cognito_domain == "my-app"
        assert settings.user_pool_client_id == "pool-id"
        assert settings.http_timeout_seconds == 3
        assert settings.retry_policy == RetryPolicy(max_attempts=4, pause_seconds=0.5)

    def test_defaults(self):
        """Test defaults without any environment."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.http_timeout_seconds == 10
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.retry_policy == RetryPolicy()

    def test_log_level_normalised(self):
        """Test log level is upper-cased."""
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_invalid_log_format(self):
        """Test unknown log formats are rejected."""
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_get_settings_is_cached(self):
        """Test get_settings returns the same instance until reset."""
        config.reset_settings()
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}, clear=True):
            first = get_settings()
            assert get_settings() is first
            assert first.aws_region == "us-west-2"

        config.reset_settings()
        with patch.dict(os.environ, {"AWS_REGION": "eu-north-1"}, clear=True):
            assert get_settings().aws_region == "eu-north-1"


class TestCognitoResolution:
    """Test explicit values and settings fallbacks for Cognito configs."""

    def test_client_credentials_from_settings(self, mock_settings):
        """Test every value falls back to settings."""
        credentials = mock_settings.cognito_client_credentials()

        assert credentials.base_url == "https://my-app.auth.us-east-1.amazoncognito.com"
        assert credentials.client_id == "client-id"
        assert credentials.client_secret == "client-secret"
        assert credentials.scopes == []

    def test_explicit_values_override(self, mock_settings):
        """Test explicit values beat settings."""
        credentials = mock_settings.cognito_client_credentials(
            client_id="other", scopes=["a"]
        )

        assert credentials.client_id == "other"
        assert credentials.scopes == ["a"]

    def test_missing_value(self, empty_settings):
        """Test the error names the parameter and its environment variable."""
        with pytest.raises(ConfigurationError) as exc_info:
            empty_settings.cognito_client_credentials()

        assert "cognito_domain is required" in str(exc_info.value)
        assert exc_info.value.context["env_var"] == "OAUTH_COGNITO_DOMAIN"

    def test_user_pool(self, mock_settings):
        """Test user pool endpoint and client id."""
        pool = mock_settings.cognito_user_pool()

        assert pool.endpoint == "https://cognito-idp.us-east-1.amazonaws.com/"
        assert pool.client_id == "pool-client-id"

    def test_settings_accessed_through_function(self):
        """Test the cached settings are only reachable through get_settings."""
        assert not hasattr(config, "settings")
        assert isinstance(get_settings(), Settings)
