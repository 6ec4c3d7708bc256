"""OAuth 2.0 client-credentials token helper."""

import base64

import httpx
import structlog

from ..exceptions import HTTPCallError
from .http_call import send_request

logger = structlog.get_logger(__name__)


def basic_auth_header(client_id: str, client_secret: str) -> str:
    """HTTP Basic credentials for the token endpoint."""
    credentials = base64.b64encode(f"{client_id}:{client_secret}".encode()).decode()
    return f"Basic {credentials}"


async def generate_access_token(
    url: str,
    client_id: str,
    client_secret: str,
    scopes: list[str] | None = None,
    *,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Get an access token with the OAuth 2.0 client-credentials flow.

    Args:
        url: Base URL of the authorization server, without ``/oauth2/token``
        client_id: OAuth client ID
        client_secret: OAuth client secret
        scopes: Scopes to request; ``scope`` is left out when empty
        timeout: Request timeout in seconds (defaults to 10)
        client: Client to reuse

    Returns:
        The access token

    Raises:
        HTTPCallError: If the token request fails

    Example:
        token = await generate_access_token(
            "https://auth.example.com", client_id, client_secret, ["read:users"]
        )
        await http_call(api, "/users", "GET", None, {"Authorization": f"Bearer {token}"})
    """
    form = {"grant_type": "client_credentials"}
    if scopes:
        form["scope"] = " ".join(scopes)

    response = await send_request(
        "POST",
        f"{url}/oauth2/token",
        timeout=timeout,
        client=client,
        headers={
            "Content-Type": "application/x-www-form-urlencoded",
            "Authorization": basic_auth_header(client_id, client_secret),
        },
        data=form,
    )

    token = response.json().get("access_token")
    if not isinstance(token, str):
        raise HTTPCallError(
            "Token response did not contain an access_token",
            status_code=response.status_code,
        )
    logger.debug("Obtained client credentials token", url=url)
    return token
