"""
Configuration management for serverless-testkit.

This module handles environment variables and settings validation using
Pydantic Settings. The pollers never read settings themselves; values are
resolved here, at the boundary, and handed over as explicit config objects.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError, ValidationError

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_PAUSE_SECONDS = 2.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0


class RetryPolicy(BaseModel):
    """Attempt budget and constant pause for a poll loop."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS, ge=1, description="Maximum number of attempts"
    )
    pause_seconds: float = Field(
        default=DEFAULT_PAUSE_SECONDS,
        ge=0,
        description="Pause after each unsuccessful attempt in seconds",
    )

    @classmethod
    def create(
        cls,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        pause_seconds: float = DEFAULT_PAUSE_SECONDS,
    ) -> "RetryPolicy":
        """Build a policy, reporting bad values as ``ValidationError``."""
        try:
            return cls(max_attempts=max_attempts, pause_seconds=pause_seconds)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid retry policy: {e.errors()[0]['msg']}",
                context={"max_attempts": max_attempts, "pause_seconds": pause_seconds},
            ) from e


class CognitoClientCredentials(BaseModel):
    """Client-credentials grant against a Cognito hosted domain."""

    cognito_domain: str = Field(..., description="Cognito hosted UI domain prefix")
    region: str = Field(..., description="AWS region of the user pool")
    client_id: str = Field(..., description="App client ID")
    client_secret: str = Field(..., description="App client secret")
    scopes: list[str] = Field(default_factory=list, description="Requested scopes")

    @property
    def base_url(self) -> str:
        """Base URL of the Cognito authorization server."""
        return f"https://{self.cognito_domain}.auth.{self.region}.amazoncognito.com"


class CognitoUserPoolConfig(BaseModel):
    """User pool client used for the USER_PASSWORD_AUTH flow."""

    region: str = Field(..., description="AWS region of the user pool")
    client_id: str = Field(..., description="User pool app client ID")

    @property
    def endpoint(self) -> str:
        """Cognito identity provider endpoint."""
        return f"https://cognito-idp.{self.region}.amazonaws.com/"


class Settings(BaseSettings):
    """Main library settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AWS / Cognito configuration
    aws_region: str = Field(default="", description="AWS region")
    oauth_cognito_domain: str = Field(
        default="", description="Cognito hosted domain prefix"
    )
    oauth_client_id: str = Field(default="", description="OAuth client ID")
    oauth_client_secret: str = Field(default="", description="OAuth client secret")
    user_pool_client_id: str = Field(
        default="", description="User pool client ID for user logins"
    )

    # HTTP configuration
    http_timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS, description="HTTP request timeout"
    )

    # Polling defaults
    poll_max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS, description="Default poll attempts"
    )
    poll_pause_seconds: float = Field(
        default=DEFAULT_PAUSE_SECONDS, description="Default pause between polls"
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="Log format")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in {"json", "console"}:
            raise ValueError(f"Invalid log format: {v}")
        return v

    @property
    def retry_policy(self) -> RetryPolicy:
        """Get the default retry policy."""
        return RetryPolicy.create(self.poll_max_attempts, self.poll_pause_seconds)

    def cognito_client_credentials(
        self,
        cognito_domain: str | None = None,
        region: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        scopes: list[str] | None = None,
    ) -> CognitoClientCredentials:
        """
        Resolve client-credentials config, explicit values winning over settings.

        Raises:
            ConfigurationError: If a required value is missing everywhere
        """
        values = {
            "cognito_domain": _require(
                cognito_domain,
                self.oauth_cognito_domain,
                "cognito_domain",
                "OAUTH_COGNITO_DOMAIN",
            ),
            "region": _require(region, self.aws_region, "region", "AWS_REGION"),
            "client_id": _require(
                client_id, self.oauth_client_id, "client_id", "OAUTH_CLIENT_ID"
            ),
            "client_secret": _require(
                client_secret,
                self.oauth_client_secret,
                "client_secret",
                "OAUTH_CLIENT_SECRET",
            ),
        }
        return CognitoClientCredentials(**values, scopes=scopes or [])

    def cognito_user_pool(
        self, client_id: str | None = None, region: str | None = None
    ) -> CognitoUserPoolConfig:
        """
        Resolve user pool config, explicit values winning over settings.

        Raises:
            ConfigurationError: If a required value is missing everywhere
        """
        return CognitoUserPoolConfig(
            region=_require(region, self.aws_region, "region", "AWS_REGION"),
            client_id=_require(
                client_id,
                self.user_pool_client_id,
                "client_id",
                "USER_POOL_CLIENT_ID",
            ),
        )


def _require(explicit: str | None, fallback: str, name: str, env_var: str) -> str:
    value = explicit if explicit is not None else fallback
    if not value:
        raise ConfigurationError(
            f"{name} is required: pass it explicitly or set {env_var}",
            context={"parameter": name, "env_var": env_var},
        )
    return value


# Global settings instance - initialized lazily to avoid import-time errors
_settings_instance = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
