"""Cognito user tokens via InitiateAuth with USER_PASSWORD_AUTH."""

import httpx
import structlog

from ..config import CognitoUserPoolConfig, Settings, get_settings
from ..exceptions import HTTPCallError
from ..utils.http_call import send_request

logger = structlog.get_logger(__name__)

INITIATE_AUTH_TARGET = "AWSCognitoIdentityProviderService.InitiateAuth"


async def generate_user_access_token(
    email: str,
    password: str,
    *,
    client_id: str | None = None,
    region: str | None = None,
    user_pool: CognitoUserPoolConfig | None = None,
    settings: Settings | None = None,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Sign a user in and return their access token.

    Args:
        email: Username of the test user
        password: Password of the test user
        client_id: User pool app client ID (falls back to ``USER_POOL_CLIENT_ID``)
        region: AWS region (falls back to ``AWS_REGION``)
        user_pool: Already resolved user pool config; overrides the above
        settings: Settings to resolve fallbacks from
        timeout: Request timeout in seconds (defaults to 10)
        client: Client to reuse

    Returns:
        The user's access token

    Raises:
        ConfigurationError: If the region or client ID is missing
        HTTPCallError: If authentication fails
    """
    settings = settings or get_settings()
    if user_pool is None:
        user_pool = settings.cognito_user_pool(client_id=client_id, region=region)
    if timeout is None:
        timeout = settings.http_timeout_seconds

    response = await send_request(
        "POST",
        user_pool.endpoint,
        timeout=timeout,
        client=client,
        headers={
            "Content-Type": "application/x-amz-json-1.1",
            "X-Amz-Target": INITIATE_AUTH_TARGET,
        },
        json={
            "AuthFlow": "USER_PASSWORD_AUTH",
            "ClientId": user_pool.client_id,
            "AuthParameters": {"USERNAME": email, "PASSWORD": password},
        },
    )

    data = response.json()
    result = data.get("AuthenticationResult") or {}
    token = result.get("AccessToken")
    if not isinstance(token, str):
        # e.g. a NEW_PASSWORD_REQUIRED challenge instead of tokens
        raise HTTPCallError(
            "InitiateAuth response did not contain an access token",
            status_code=response.status_code,
            context={"challenge": data.get("ChallengeName")},
        )
    logger.debug("Obtained user access token", region=user_pool.region)
    return token
