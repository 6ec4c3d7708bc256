"""Cognito client-credentials tokens."""

import httpx

from ..config import CognitoClientCredentials, Settings, get_settings
from ..utils.oauth import generate_access_token


async def generate_cognito_access_token(
    credentials: CognitoClientCredentials | None = None,
    *,
    cognito_domain: str | None = None,
    region: str | None = None,
    client_id: str | None = None,
    client_secret: str | None = None,
    scopes: list[str] | None = None,
    settings: Settings | None = None,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Get an access token from a Cognito hosted domain (client-credentials flow).

    Either pass a resolved ``CognitoClientCredentials`` or individual values;
    missing values fall back to ``OAUTH_COGNITO_DOMAIN``, ``AWS_REGION``,
    ``OAUTH_CLIENT_ID`` and ``OAUTH_CLIENT_SECRET`` through ``Settings``.

    Raises:
        ConfigurationError: If a required value is missing
        HTTPCallError: If the token request fails
    """
    settings = settings or get_settings()
    if credentials is None:
        credentials = settings.cognito_client_credentials(
            cognito_domain=cognito_domain,
            region=region,
            client_id=client_id,
            client_secret=client_secret,
            scopes=scopes,
        )

    return await generate_access_token(
        credentials.base_url,
        credentials.client_id,
        credentials.client_secret,
        credentials.scopes,
        timeout=timeout if timeout is not None else settings.http_timeout_seconds,
        client=client,
    )
